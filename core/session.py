"""
Authenticated session with the HlaPrint service.

An AuthSession owns the bearer token for one user. It is passed explicitly
to every operation that needs it; there is no module-level token.

State machine:
    LOGGED_OUT --login ok--> LOGGED_IN --login ok--> LOGGED_IN (new token)
    LOGGED_IN  --logout-->   LOGGED_OUT

A failed login leaves the current state untouched.

THREAD SAFETY:
    Token and submission stage are read and written under a single lock, so
    concurrent logins (two browser tabs) cannot interleave their writes.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

from .exceptions import (
    AuthError,
    HlaPrintError,
    HttpError,
    SubmissionInProgressError,
)
from .http_client import HlaPrintClient
from models.print_job import Credentials, LoginResult, SubmissionStage


LOGIN_PATH = "/api/login"


class AuthSession:
    """
    Bearer token holder for one user session.

    Attributes:
        session_id: Identifier used in log messages
        token: Current bearer token, or None when logged out
        issued_at: When the current token was obtained
        stage: Current SubmissionStage
    """

    def __init__(self, session_id: str = "", logger: Optional[logging.Logger] = None):
        self.session_id = session_id
        self._token: Optional[str] = None
        self._issued_at: Optional[datetime] = None
        self._stage = SubmissionStage.IDLE
        self._lock = threading.Lock()
        self._logger = logger or logging.getLogger("hlaprint_bridge.core.session")

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    @property
    def issued_at(self) -> Optional[datetime]:
        with self._lock:
            return self._issued_at

    @property
    def is_authenticated(self) -> bool:
        """True when a token is held."""
        with self._lock:
            return bool(self._token)

    @property
    def stage(self) -> SubmissionStage:
        with self._lock:
            return self._stage

    def login(self, client: HlaPrintClient, credentials: Credentials) -> LoginResult:
        """
        Exchange credentials for a bearer token.

        Args:
            client: HTTP client for the print service
            credentials: Email and password (not stored)

        Returns:
            LoginResult with the new token

        Raises:
            AuthError: On non-2xx, transport failure, or missing token
        """
        self._logger.info(f"[{self.session_id[:8]}] Logging in as {credentials.email}")

        try:
            payload = client.post_json(LOGIN_PATH, credentials.to_dict())
        except HttpError as e:
            self._logger.warning(f"[{self.session_id[:8]}] Login rejected: HTTP {e.status}")
            raise AuthError(str(e), cause=e)
        except HlaPrintError as e:
            self._logger.error(f"[{self.session_id[:8]}] Login request failed: {e.message}")
            raise AuthError(e.message, cause=e)

        token = payload.get("token") if isinstance(payload, dict) else None
        if not token or not isinstance(token, str):
            self._logger.warning(f"[{self.session_id[:8]}] Login response has no token")
            raise AuthError("Token missing in response")

        with self._lock:
            self._token = token
            self._issued_at = datetime.now(timezone.utc)

        self._logger.info(f"[{self.session_id[:8]}] Logged in")
        return LoginResult(
            token=token,
            status=str(payload.get("status") or ""),
            message=str(payload.get("message") or ""),
        )

    def logout(self) -> None:
        """Drop the token. Safe to call when already logged out."""
        with self._lock:
            was_logged_in = bool(self._token)
            self._token = None
            self._issued_at = None
        if was_logged_in:
            self._logger.info(f"[{self.session_id[:8]}] Logged out")

    def authorization_header(self) -> dict:
        """
        Build the Authorization header for an authenticated call.

        Raises:
            AuthError: If no token is held
        """
        token = self.token
        if not token:
            raise AuthError("Please login first.")
        return {"Authorization": f"Bearer {token}"}

    # -------------------------------------------------------------------------
    # Submission stage
    # -------------------------------------------------------------------------

    def begin_submission(self) -> None:
        """
        Move from IDLE to VALIDATING.

        Raises:
            SubmissionInProgressError: If a submission is already running
        """
        with self._lock:
            if self._stage is not SubmissionStage.IDLE:
                raise SubmissionInProgressError()
            self._stage = SubmissionStage.VALIDATING

    def advance(self, stage: SubmissionStage) -> None:
        """Record the next stage of a running submission."""
        with self._lock:
            self._stage = stage

    def end_submission(self) -> None:
        """Return to IDLE, whatever the outcome."""
        with self._lock:
            self._stage = SubmissionStage.IDLE
