"""
Print job data models.

These models represent a print job as it flows through the bridge:
form fields -> PrintJobDraft -> (validate) -> PrintJobRequest -> wire payload.

Thread Safety:
    - PrintJobDraft is mutable UI state, owned by a single request
    - PrintJobRequest and PrintFile are frozen and safe to share
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


MAX_DEVICE_NAME_LENGTH = 23
MIN_COPIES = 1
MAX_COPIES = 100


class PageSize(Enum):
    """Paper sizes accepted by the print service."""

    A4 = "A4"
    A3 = "A3"
    LETTER = "Letter"


class PageOrientation(Enum):
    """Page orientations accepted by the print service."""

    AUTO = "auto"
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class SubmissionStage(Enum):
    """
    Stage of the submission flow for one session.

    Lifecycle:
        IDLE -> VALIDATING -> (IDLE | BUILDING) -> SENDING -> IDLE
    """

    IDLE = "idle"
    VALIDATING = "validating"
    BUILDING = "building"
    SENDING = "sending"


@dataclass(frozen=True)
class Credentials:
    """Email/password pair. Lives only for the duration of a login call."""

    email: str
    password: str = field(repr=False)

    def to_dict(self) -> Dict[str, str]:
        return {"email": self.email, "password": self.password}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _parse_bool(value: Any, default: bool) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")


def _parse_copies(value: Any) -> int:
    """Parse copies; anything non-numeric becomes 0 so the bounds rule rejects it."""
    if value is None or value == "":
        return MIN_COPIES
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


@dataclass
class PrintJobDraft:
    """
    Raw print options as collected by the UI.

    Range fields are kept as text: '' means unset. Defaults match the
    card's initial form state.
    """

    device_name: str = ""
    """Target device name (max 23 characters)."""

    file_url: str = ""
    """URL of the remotely hosted file to print."""

    copies: int = 1
    """Number of copies (1..100)."""

    color: bool = False
    """True for color, False for mono."""

    duplex: bool = True
    """True for double-sided printing."""

    page_size: str = PageSize.A4.value
    """One of A4, A3, Letter."""

    orientation: str = PageOrientation.AUTO.value
    """One of auto, portrait, landscape."""

    range_start: str = ""
    """First page to print ('' means unset)."""

    range_end: str = ""
    """Last page to print ('' means unset)."""

    @property
    def has_range(self) -> bool:
        """True when both range fields are set."""
        return bool(self.range_start.strip()) and bool(self.range_end.strip())

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "PrintJobDraft":
        """
        Create a draft from form or JSON fields.

        Accepts the camelCase names used by the card (deviceName, fileUrl, ...)
        as well as snake_case.
        """

        def pick(camel: str, snake: str) -> Any:
            if camel in data:
                return data[camel]
            return data.get(snake)

        return cls(
            device_name=_text(pick("deviceName", "device_name")),
            file_url=_text(pick("fileUrl", "file_url")).strip(),
            copies=_parse_copies(pick("copies", "copies")),
            color=_parse_bool(pick("color", "color"), False),
            duplex=_parse_bool(pick("duplex", "duplex"), True),
            page_size=_text(pick("pageSize", "page_size")) or PageSize.A4.value,
            orientation=_text(pick("orientation", "orientation")) or PageOrientation.AUTO.value,
            range_start=_text(pick("rangeStart", "range_start")),
            range_end=_text(pick("rangeEnd", "range_end")),
        )


@dataclass(frozen=True)
class PageRange:
    """Inclusive page range; 1 <= start <= end."""

    start: int
    end: int


@dataclass(frozen=True)
class PrintFile:
    """One submitted document plus its print options."""

    filename: str
    color: bool
    double_sided: bool
    page_size: PageSize
    copies: int
    page_orientation: PageOrientation
    page_range: Optional[PageRange] = None

    def to_payload(self) -> Dict[str, Any]:
        """
        Convert to the wire format.

        The range keys are pages_start and page_end. The asymmetry is part
        of the remote API contract.
        """
        payload: Dict[str, Any] = {
            "filename": self.filename,
            "color": self.color,
            "double_sided": self.double_sided,
            "page_size": self.page_size.value,
            "copies": self.copies,
            "page_orientation": self.page_orientation.value,
        }
        if self.page_range is not None:
            payload["pages_start"] = self.page_range.start
            payload["page_end"] = self.page_range.end
        return payload


@dataclass(frozen=True)
class PrintJobRequest:
    """
    A validated job ready to send to /api/createPrintjob.

    No printer name is sent; the service defaults it.
    """

    device_name: str
    print_files: Tuple[PrintFile, ...]

    def __post_init__(self):
        if not self.print_files:
            raise ValueError("PrintJobRequest needs at least one print file")
        if not self.device_name or len(self.device_name) > MAX_DEVICE_NAME_LENGTH:
            raise ValueError(
                f"device_name must be 1..{MAX_DEVICE_NAME_LENGTH} characters"
            )

    def to_payload(self) -> Dict[str, Any]:
        """Convert to the JSON body for /api/createPrintjob."""
        return {
            "device_name": self.device_name,
            "print_files": [f.to_payload() for f in self.print_files],
        }


@dataclass(frozen=True)
class SubmissionResult:
    """Successful /api/createPrintjob response."""

    transaction_id: str
    code: str
    message: str = ""

    @property
    def summary(self) -> str:
        """Toast text for the user."""
        return f"Created. Txn {self.transaction_id or '-'}, code {self.code or '-'}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transaction_id": self.transaction_id,
            "code": self.code,
            "message": self.message,
        }

    @classmethod
    def from_response(cls, data: Any) -> "SubmissionResult":
        """Create from a decoded response body (tolerates non-dict bodies)."""
        if not isinstance(data, dict):
            return cls(transaction_id="", code="", message=_text(data))
        return cls(
            transaction_id=_text(data.get("transaction_id")),
            code=_text(data.get("code")),
            message=_text(data.get("message")),
        )


@dataclass(frozen=True)
class LoginResult:
    """/api/login response envelope: {message, token, status}."""

    token: str
    status: str = ""
    message: str = ""


class ConnectStatus(Enum):
    """Status values of the settings/connect envelope."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


@dataclass(frozen=True)
class ConnectResult:
    """Settings/connect response envelope: {status: SUCCESS|FAILURE, message}."""

    status: ConnectStatus
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ConnectStatus.SUCCESS

    @classmethod
    def from_response(cls, data: Any) -> "ConnectResult":
        """
        Create from a decoded response body.

        A body that is not a JSON object is treated as a failure whose
        message is the raw text.
        """
        if not isinstance(data, dict):
            return cls(ConnectStatus.FAILURE, _text(data))
        status = ConnectStatus.SUCCESS if data.get("status") == "SUCCESS" else ConnectStatus.FAILURE
        return cls(status, _text(data.get("message")))
