"""
Data models for HlaPrint Bridge.

This module contains dataclasses for:
- PrintJobDraft: Raw print options collected by the UI
- PrintJobRequest / PrintFile: Validated job in wire shape (frozen)
- SubmissionResult: Result of /api/createPrintjob
- LoginResult / ConnectResult: The two response envelopes of the service

Frozen dataclasses are safe to pass between threads.
"""

from .print_job import (
    MAX_COPIES,
    MAX_DEVICE_NAME_LENGTH,
    MIN_COPIES,
    ConnectResult,
    ConnectStatus,
    Credentials,
    LoginResult,
    PageOrientation,
    PageRange,
    PageSize,
    PrintFile,
    PrintJobDraft,
    PrintJobRequest,
    SubmissionResult,
    SubmissionStage,
)

__all__ = [
    # Limits
    "MAX_COPIES",
    "MAX_DEVICE_NAME_LENGTH",
    "MIN_COPIES",
    # Job models
    "PrintJobDraft",
    "PrintJobRequest",
    "PrintFile",
    "PageRange",
    "PageSize",
    "PageOrientation",
    "SubmissionResult",
    "SubmissionStage",
    # Session models
    "Credentials",
    "LoginResult",
    "ConnectResult",
    "ConnectStatus",
]
