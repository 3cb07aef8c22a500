"""
Custom exceptions for HlaPrint Bridge.

Exception Hierarchy:
    HlaPrintError (base)
    ├── ValidationError           - Draft rejected locally (never reaches network)
    ├── AuthError                 - Login failed or no session token
    ├── HttpError                 - Remote service answered with non-2xx
    ├── ServiceUnavailableError   - Remote service unreachable (transport failure)
    │   └── RequestTimeoutError   - Request exceeded the configured timeout
    └── SubmissionInProgressError - A submission is already being sent

Usage:
    Every error resolves to a displayable message. Routes catch HlaPrintError,
    log it, and return a toast payload; no error is fatal to the process.
"""

from typing import Optional, Dict, Any


class HlaPrintError(Exception):
    """
    Base exception for all HlaPrint Bridge errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# LOCAL ERRORS - Raised before any network call
# =============================================================================

class ValidationError(HlaPrintError):
    """
    A print job draft failed a pre-flight rule.

    The code identifies the rule (e.g. "device name too long") and is stable
    for programmatic checks. The message is the text shown to the user.
    """

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(message or code, {"code": code})
        self.code = code

    def __str__(self) -> str:
        return self.message


class SubmissionInProgressError(HlaPrintError):
    """A job is already being sent for this session."""

    def __init__(self, message: str = "A print job is already being sent."):
        super().__init__(message)


# =============================================================================
# REMOTE ERRORS - Raised while talking to the print service
# =============================================================================

class AuthError(HlaPrintError):
    """
    Authentication with the print service failed.

    Raised when:
    - /api/login answers with a non-2xx status
    - /api/login answers 2xx but the body has no token
    - the login request could not be delivered
    - a job is built or submitted without a session token
    """

    def __init__(self, message: str = "Login failed", cause: Optional[Exception] = None):
        details = {}
        if cause is not None:
            details["cause"] = type(cause).__name__
        super().__init__(message, details)
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class HttpError(HlaPrintError):
    """
    The print service (or a proxy in front of it) returned a non-2xx status.

    The remote error bodies are often not self-describing, so the composite
    detail string keeps the status, the proxy diagnostic header and the start
    of the raw body together. str(error) is what the user sees.
    """

    def __init__(
        self,
        status: int,
        proxy_error: Optional[str] = None,
        body_excerpt: str = "",
    ):
        self.status = status
        self.proxy_error = proxy_error
        self.body_excerpt = body_excerpt
        super().__init__(
            self._compose(status, proxy_error, body_excerpt),
            {"status": status, "proxy_error": proxy_error},
        )

    @staticmethod
    def _compose(status: int, proxy_error: Optional[str], body_excerpt: str) -> str:
        detail = f"HTTP {status}"
        if proxy_error:
            detail += f" (proxy: {proxy_error})"
        if body_excerpt:
            detail += f": {body_excerpt}"
        return detail

    def __str__(self) -> str:
        return self.message


class ServiceUnavailableError(HlaPrintError):
    """
    The print service could not be reached.

    Typical causes:
    - Wrong HLAPRINT_BASE_URL in .env
    - DNS or network connectivity issues
    - Service down
    """

    def __init__(self, message: str = "HlaPrint service is not available", url: Optional[str] = None):
        details = {"resolution": "Check HLAPRINT_BASE_URL and network connectivity"}
        if url:
            details["url"] = url
        super().__init__(message, details)
        self.url = url


class RequestTimeoutError(ServiceUnavailableError):
    """A request to the print service exceeded the configured timeout."""

    def __init__(self, timeout_seconds: float, url: Optional[str] = None):
        super().__init__(
            f"HlaPrint request timed out after {timeout_seconds:.1f}s", url
        )
        self.timeout_seconds = timeout_seconds
