"""
Pre-flight validation of print job drafts.

Mirrors the constraints enforced by /api/createPrintjob so that obviously bad
jobs never reach the network. Rules run in a fixed order and the first failing
rule wins.

Usage:
    error = validate(draft, has_token=session.is_authenticated)
    if error:
        show_toast(error.message)
"""

from __future__ import annotations

import re
from typing import Optional

from core.exceptions import ValidationError
from models.print_job import (
    MAX_COPIES,
    MAX_DEVICE_NAME_LENGTH,
    MIN_COPIES,
    PageOrientation,
    PageSize,
    PrintJobDraft,
)


# Rule codes
NOT_AUTHENTICATED = "not authenticated"
DEVICE_NAME_REQUIRED = "device name required"
DEVICE_NAME_TOO_LONG = "device name too long"
FILE_URL_REQUIRED = "file url required"
RANGE_INCOMPLETE = "range incomplete"
PAGE_START_INVALID = "page start invalid"
PAGE_END_INVALID = "page end invalid"
PAGE_RANGE_REVERSED = "page range reversed"
COPIES_OUT_OF_BOUNDS = "copies out of bounds"
PAGE_SIZE_INVALID = "page size invalid"
ORIENTATION_INVALID = "orientation invalid"

MESSAGES = {
    NOT_AUTHENTICATED: "Please login first.",
    DEVICE_NAME_REQUIRED: "Device name is required.",
    DEVICE_NAME_TOO_LONG: f"Device name must be ≤ {MAX_DEVICE_NAME_LENGTH} characters.",
    FILE_URL_REQUIRED: "File URL is required.",
    RANGE_INCOMPLETE: "If using page range, set both start and end.",
    PAGE_START_INVALID: "Page start must be an integer ≥ 1.",
    PAGE_END_INVALID: "Page end must be an integer ≥ 1.",
    PAGE_RANGE_REVERSED: "Page end must be ≥ page start.",
    COPIES_OUT_OF_BOUNDS: f"Copies must be between {MIN_COPIES} and {MAX_COPIES}.",
    PAGE_SIZE_INVALID: "Page size must be one of A4, A3, Letter.",
    ORIENTATION_INVALID: "Orientation must be one of auto, portrait, landscape.",
}

_PAGE_SIZES = {size.value for size in PageSize}
_ORIENTATIONS = {orientation.value for orientation in PageOrientation}


def _error(code: str) -> ValidationError:
    return ValidationError(code, MESSAGES[code])


# Whole number, optionally written with a zero fraction ("3", "3.0")
_PAGE_NUMBER_RE = re.compile(r"([0-9]+)(?:\.0*)?")


def parse_page_number(value: str) -> Optional[int]:
    """
    Parse a page number typed by the user.

    Returns the integer if the text is a whole number >= 1 ("3", " 3 ", "3.0"),
    otherwise None. Underscore separators, signs and exponents are rejected.
    """
    match = _PAGE_NUMBER_RE.fullmatch(value.strip())
    if match is None:
        return None
    number = int(match.group(1))
    return number if number >= 1 else None


def validate(draft: PrintJobDraft, has_token: bool) -> Optional[ValidationError]:
    """
    Check a draft against the print service's constraints.

    Args:
        draft: Print options from the UI
        has_token: Whether the session holds a bearer token

    Returns:
        The first failing rule as a ValidationError, or None if the draft is valid
    """
    if not has_token:
        return _error(NOT_AUTHENTICATED)

    if not draft.device_name:
        return _error(DEVICE_NAME_REQUIRED)

    if len(draft.device_name) > MAX_DEVICE_NAME_LENGTH:
        return _error(DEVICE_NAME_TOO_LONG)

    if not draft.file_url:
        return _error(FILE_URL_REQUIRED)

    has_start = bool(draft.range_start.strip())
    has_end = bool(draft.range_end.strip())
    if has_start != has_end:
        return _error(RANGE_INCOMPLETE)

    if has_start and has_end:
        start = parse_page_number(draft.range_start)
        if start is None:
            return _error(PAGE_START_INVALID)
        end = parse_page_number(draft.range_end)
        if end is None:
            return _error(PAGE_END_INVALID)
        if end < start:
            return _error(PAGE_RANGE_REVERSED)

    if not MIN_COPIES <= draft.copies <= MAX_COPIES:
        return _error(COPIES_OUT_OF_BOUNDS)

    if draft.page_size not in _PAGE_SIZES:
        return _error(PAGE_SIZE_INVALID)

    if draft.orientation not in _ORIENTATIONS:
        return _error(ORIENTATION_INVALID)

    return None


def ensure_valid(draft: PrintJobDraft, has_token: bool) -> None:
    """
    Raise the first failing rule.

    Raises:
        ValidationError: If the draft is not valid
    """
    error = validate(draft, has_token)
    if error is not None:
        raise error
