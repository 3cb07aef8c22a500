"""
Build the /api/createPrintjob request from a validated draft.

The builder assumes the draft already passed validate(); it does not repeat
the rules, but it refuses to build for a session without a token.

Field mapping (UI -> wire):
    file_url     -> filename
    color        -> color
    duplex       -> double_sided
    page_size    -> page_size
    copies       -> copies
    orientation  -> page_orientation
    range_start  -> pages_start   (only when both range fields are set)
    range_end    -> page_end
"""

from __future__ import annotations

from core.exceptions import AuthError
from core.session import AuthSession
from models.print_job import (
    PageOrientation,
    PageRange,
    PageSize,
    PrintFile,
    PrintJobDraft,
    PrintJobRequest,
)
from modules.validator import parse_page_number


def build_print_file(draft: PrintJobDraft) -> PrintFile:
    """Convert the draft's print options into a single PrintFile."""
    page_range = None
    if draft.has_range:
        page_range = PageRange(
            start=parse_page_number(draft.range_start),
            end=parse_page_number(draft.range_end),
        )

    return PrintFile(
        filename=draft.file_url,
        color=draft.color,
        double_sided=draft.duplex,
        page_size=PageSize(draft.page_size),
        copies=draft.copies,
        page_orientation=PageOrientation(draft.orientation),
        page_range=page_range,
    )


def build(draft: PrintJobDraft, session: AuthSession) -> PrintJobRequest:
    """
    Build a print job request for one file.

    Args:
        draft: Validated print options
        session: Session that will send the request

    Returns:
        PrintJobRequest wrapping exactly one PrintFile

    Raises:
        AuthError: If the session holds no token
    """
    if not session.is_authenticated:
        raise AuthError("Please login first.")

    return PrintJobRequest(
        device_name=draft.device_name,
        print_files=(build_print_file(draft),),
    )
