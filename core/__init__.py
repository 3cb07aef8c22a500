"""
Core module for HlaPrint Bridge.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
- http_client: httpx wrapper for the HlaPrint REST API
- session: Bearer token holder for one user session
"""

from .exceptions import (
    HlaPrintError,
    ValidationError,
    AuthError,
    HttpError,
    ServiceUnavailableError,
    RequestTimeoutError,
    SubmissionInProgressError,
)
from .http_client import HlaPrintClient
from .session import AuthSession

__all__ = [
    "HlaPrintError",
    "ValidationError",
    "AuthError",
    "HttpError",
    "ServiceUnavailableError",
    "RequestTimeoutError",
    "SubmissionInProgressError",
    "HlaPrintClient",
    "AuthSession",
]
