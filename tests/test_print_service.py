"""
Unit tests for the PrintService pipeline.

Covers the login -> validate -> build -> send flow, the settings connect
envelope, and that the session always returns to IDLE.
"""

import json

import httpx
import pytest

from core.exceptions import (
    AuthError,
    HttpError,
    RequestTimeoutError,
    SubmissionInProgressError,
    ValidationError,
)
from core.http_client import HlaPrintClient
from core.session import AuthSession
from models.print_job import ConnectStatus, PrintJobDraft, SubmissionStage
from services.print_service import PrintService, describe_error


BASE_URL = "https://hlaprint.test"


# Fixtures

@pytest.fixture
def client():
    client = HlaPrintClient(BASE_URL, timeout_seconds=5.0)
    yield client
    client.close()


@pytest.fixture
def service(client):
    return PrintService(client)


@pytest.fixture
def session():
    return AuthSession("service-test")


@pytest.fixture
def logged_in(session):
    session._token = "T1"
    return session


@pytest.fixture
def draft():
    return PrintJobDraft(
        device_name="Desk1",
        file_url="https://x/y.pdf",
        copies=2,
        color=True,
        duplex=False,
        page_size="A3",
        orientation="portrait",
        range_start="1",
        range_end="3",
    )


class TestEndToEnd:
    """Login, then submit the job built from the draft."""

    def test_login_then_submit(self, service, session, draft, respx_mock):
        respx_mock.post(f"{BASE_URL}/api/login").mock(
            return_value=httpx.Response(200, json={"token": "T1", "status": "ok"})
        )
        create_route = respx_mock.post(f"{BASE_URL}/api/createPrintjob").mock(
            return_value=httpx.Response(
                200, json={"message": "created", "transaction_id": "TX9", "code": "C42"}
            )
        )

        service.login(session, "a@b.com", "x")
        assert session.token == "T1"

        result = service.submit(session, draft)

        request = create_route.calls.last.request
        assert request.headers["Authorization"] == "Bearer T1"
        assert json.loads(request.content) == {
            "device_name": "Desk1",
            "print_files": [
                {
                    "filename": "https://x/y.pdf",
                    "color": True,
                    "double_sided": False,
                    "page_size": "A3",
                    "copies": 2,
                    "page_orientation": "portrait",
                    "pages_start": 1,
                    "page_end": 3,
                }
            ],
        }
        assert result.transaction_id == "TX9"
        assert result.code == "C42"
        assert result.summary == "Created. Txn TX9, code C42"
        assert session.stage is SubmissionStage.IDLE


class TestSubmit:
    """Failure paths of submit."""

    def test_validation_error_makes_no_network_call(self, service, logged_in, draft, respx_mock):
        draft.device_name = "x" * 24

        with pytest.raises(ValidationError) as exc_info:
            service.submit(logged_in, draft)

        assert exc_info.value.code == "device name too long"
        assert respx_mock.calls.call_count == 0
        assert logged_in.stage is SubmissionStage.IDLE

    def test_not_logged_in(self, service, session, draft, respx_mock):
        with pytest.raises(ValidationError) as exc_info:
            service.submit(session, draft)

        assert exc_info.value.code == "not authenticated"
        assert respx_mock.calls.call_count == 0

    def test_http_error_surfaces_detail(self, service, logged_in, draft, respx_mock):
        respx_mock.post(f"{BASE_URL}/api/createPrintjob").mock(
            return_value=httpx.Response(
                500, text="Internal error", headers={"X-Upstream-Error": "upstream timeout"}
            )
        )

        with pytest.raises(HttpError) as exc_info:
            service.submit(logged_in, draft)

        error = exc_info.value
        assert (error.status, error.proxy_error, error.body_excerpt) == (
            500, "upstream timeout", "Internal error"
        )
        assert describe_error(error) == "HTTP 500 (proxy: upstream timeout): Internal error"
        assert logged_in.stage is SubmissionStage.IDLE

    def test_timeout_returns_to_idle(self, service, logged_in, draft, respx_mock):
        respx_mock.post(f"{BASE_URL}/api/createPrintjob").mock(side_effect=httpx.ReadTimeout)

        with pytest.raises(RequestTimeoutError):
            service.submit(logged_in, draft)

        assert logged_in.stage is SubmissionStage.IDLE

    def test_rejects_while_sending(self, service, logged_in, draft, respx_mock):
        logged_in.begin_submission()
        logged_in.advance(SubmissionStage.SENDING)

        with pytest.raises(SubmissionInProgressError):
            service.submit(logged_in, draft)

        assert respx_mock.calls.call_count == 0
        assert logged_in.stage is SubmissionStage.SENDING

    def test_text_success_body(self, service, logged_in, draft, respx_mock):
        respx_mock.post(f"{BASE_URL}/api/createPrintjob").mock(
            return_value=httpx.Response(200, text="queued")
        )

        result = service.submit(logged_in, draft)

        assert result.message == "queued"
        assert result.summary == "Created. Txn -, code -"


class TestValidateDraft:
    """validate_draft uses the session's token state."""

    def test_valid(self, service, logged_in, draft):
        assert service.validate_draft(logged_in, draft) is None

    def test_logged_out(self, service, session, draft):
        assert service.validate_draft(session, draft).code == "not authenticated"


class TestLogin:
    """Login through the service."""

    def test_blank_credentials_rejected_locally(self, service, session, respx_mock):
        with pytest.raises(AuthError):
            service.login(session, "", "x")

        assert respx_mock.calls.call_count == 0

    def test_logout(self, service, logged_in):
        service.logout(logged_in)

        assert logged_in.is_authenticated is False


class TestConnect:
    """Settings connect uses the {status, message} envelope."""

    CONNECT_URL = f"{BASE_URL}/api/hubspot/settings/hlaprint/connect"

    def test_success(self, service, respx_mock):
        route = respx_mock.post(self.CONNECT_URL).mock(
            return_value=httpx.Response(200, json={"status": "SUCCESS", "message": "ok"})
        )

        result = service.connect("a@b.com", "x")

        assert result.ok is True
        assert result.status is ConnectStatus.SUCCESS
        assert json.loads(route.calls.last.request.content) == {"email": "a@b.com", "password": "x"}

    def test_failure_status(self, service, respx_mock):
        respx_mock.post(self.CONNECT_URL).mock(
            return_value=httpx.Response(200, json={"status": "FAILURE", "message": "Wrong password"})
        )

        result = service.connect("a@b.com", "x")

        assert result.ok is False
        assert result.message == "Wrong password"

    def test_non_json_body_is_failure_with_text(self, service, respx_mock):
        respx_mock.post(self.CONNECT_URL).mock(
            return_value=httpx.Response(200, text="Service restarting")
        )

        result = service.connect("a@b.com", "x")

        assert result.status is ConnectStatus.FAILURE
        assert result.message == "Service restarting"

    def test_http_error_is_failure(self, service, respx_mock):
        respx_mock.post(self.CONNECT_URL).mock(return_value=httpx.Response(403, text="Forbidden"))

        result = service.connect("a@b.com", "x")

        assert result.status is ConnectStatus.FAILURE
        assert result.message == "HTTP 403: Forbidden"

    def test_blank_credentials(self, service, respx_mock):
        result = service.connect("", "")

        assert result.ok is False
        assert respx_mock.calls.call_count == 0


class TestDescribeError:
    """User-facing error text."""

    def test_validation_message(self):
        assert describe_error(ValidationError("copies out of bounds", "Copies!")) == "Copies!"

    def test_unknown_error(self):
        assert describe_error(RuntimeError("boom")) == "Failed to create job"
