"""
Services layer for HlaPrint Bridge.

This module contains the business logic services:
- PrintService: Login, account connect, validation and job submission
- SessionRegistry: In-memory map of browser sessions to AuthSession

Thread Model:
    Main Thread (Flask)
    └── One request thread per call; each works on its own AuthSession

The HTTP client is shared; per-user state lives only in AuthSession.
"""

from .print_service import PrintService, describe_error
from .session_registry import SessionRegistry

__all__ = [
    "PrintService",
    "SessionRegistry",
    "describe_error",
]
