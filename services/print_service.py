"""
Print job submission service.

This is the surface the presentation layer talks to. It takes plain field
values, drives the submission pipeline, and returns result values or raises
HlaPrintError subclasses. No Flask types cross this boundary.

Flow (submit):
    1. Move the session from IDLE to VALIDATING (rejects a second submit)
    2. Validate the draft - ValidationError stops the flow, no network call
    3. Build the PrintJobRequest (BUILDING)
    4. POST /api/createPrintjob with the bearer token (SENDING)
    5. Return SubmissionResult
    6. Always return the session to IDLE

Usage:
    service = PrintService(client)

    service.login(auth_session, email, password)
    result = service.submit(auth_session, PrintJobDraft.from_form(form))
"""

from __future__ import annotations

from typing import Optional

from core.exceptions import (
    AuthError,
    HlaPrintError,
    HttpError,
    ValidationError,
)
from core.http_client import HlaPrintClient
from core.session import AuthSession
from models.print_job import (
    ConnectResult,
    ConnectStatus,
    Credentials,
    LoginResult,
    PrintJobDraft,
    SubmissionResult,
    SubmissionStage,
)
from modules import request_builder, validator
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

CREATE_PRINT_JOB_PATH = "/api/createPrintjob"
CONNECT_PATH = "/api/hubspot/settings/hlaprint/connect"


class PrintService:
    """
    Service for authenticating and submitting print jobs.

    Stateless apart from the shared HTTP client; all per-user state lives in
    the AuthSession passed to each call.
    """

    def __init__(self, client: HlaPrintClient):
        """
        Initialize print service.

        Args:
            client: HTTP client for the print service
        """
        self._client = client
        logger.info(f"PrintService initialized for {client.base_url}")

    @property
    def client(self) -> HlaPrintClient:
        return self._client

    def login(self, session: AuthSession, email: str, password: str) -> LoginResult:
        """
        Log a session in. A repeated login replaces the token.

        Raises:
            AuthError: If login fails or the response carries no token
        """
        if not email or not password:
            raise AuthError("Email and password are required.")
        return session.login(self._client, Credentials(email=email, password=password))

    def logout(self, session: AuthSession) -> None:
        """Drop the session's token."""
        session.logout()

    def connect(self, email: str, password: str) -> ConnectResult:
        """
        Connect an HlaPrint account from the settings page.

        This endpoint answers with {status: SUCCESS|FAILURE, message} instead
        of the login envelope. Transport or HTTP failures become a FAILURE
        result carrying the error text.

        Returns:
            ConnectResult
        """
        if not email or not password:
            return ConnectResult(ConnectStatus.FAILURE, "Email and password are required.")

        logger.info(f"Connecting HlaPrint account {email}")
        try:
            payload = self._client.post_json(
                CONNECT_PATH, Credentials(email=email, password=password).to_dict()
            )
        except HlaPrintError as e:
            logger.warning(f"Connect failed: {e.message}")
            return ConnectResult(ConnectStatus.FAILURE, e.message)

        result = ConnectResult.from_response(payload)
        if result.ok:
            logger.info("HlaPrint account connected")
        else:
            logger.warning(f"Connect rejected: {result.message or 'no message'}")
        return result

    def validate_draft(self, session: AuthSession, draft: PrintJobDraft) -> Optional[ValidationError]:
        """Run the pre-flight rules without submitting."""
        return validator.validate(draft, session.is_authenticated)

    def submit(self, session: AuthSession, draft: PrintJobDraft) -> SubmissionResult:
        """
        Validate, build and send a print job.

        Args:
            session: Authenticated session
            draft: Print options from the UI

        Returns:
            SubmissionResult with transaction id and code

        Raises:
            SubmissionInProgressError: If this session is already sending
            ValidationError: If the draft fails a pre-flight rule
            AuthError: If the session has no token
            HttpError: If the service answers non-2xx
            ServiceUnavailableError: If the service cannot be reached
        """
        session.begin_submission()
        try:
            validator.ensure_valid(draft, session.is_authenticated)

            session.advance(SubmissionStage.BUILDING)
            job_request = request_builder.build(draft, session)

            session.advance(SubmissionStage.SENDING)
            logger.info(
                f"Submitting print job to device '{job_request.device_name}' "
                f"({len(job_request.print_files)} file)"
            )
            payload = self._client.post_json(
                CREATE_PRINT_JOB_PATH,
                job_request.to_payload(),
                headers=session.authorization_header(),
            )

            result = SubmissionResult.from_response(payload)
            logger.info(f"Print job created: txn={result.transaction_id or '-'}, code={result.code or '-'}")
            return result

        except ValidationError as e:
            logger.info(f"Print job rejected before sending: {e.code}")
            raise
        except HttpError as e:
            logger.error(f"Print job failed: {e}")
            raise

        finally:
            session.end_submission()


def describe_error(error: Exception) -> str:
    """
    Turn an error into the text shown to the user.

    Project errors carry their own message; anything else gets a generic one.
    """
    if isinstance(error, HlaPrintError):
        return error.message or "Failed to create job"
    return "Failed to create job"
