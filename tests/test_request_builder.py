"""
Unit tests for building the /api/createPrintjob payload.
"""

import json

import pytest

from core.exceptions import AuthError
from core.session import AuthSession
from models.print_job import (
    PageOrientation,
    PageSize,
    PrintFile,
    PrintJobDraft,
    PrintJobRequest,
)
from modules.request_builder import build, build_print_file


# Fixtures

@pytest.fixture
def session():
    """A session that already holds a token."""
    auth_session = AuthSession("test-session")
    auth_session._token = "T1"
    return auth_session


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


class TestBuild:
    """Field mapping from UI state to wire format."""

    def test_full_payload(self, draft, session):
        payload = build(draft, session).to_payload()

        assert payload == {
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

    def test_range_keys_keep_wire_names(self, draft, session):
        print_file = build(draft, session).to_payload()["print_files"][0]

        assert "pages_start" in print_file
        assert "page_end" in print_file
        assert "page_start" not in print_file
        assert "pages_end" not in print_file

    def test_no_range_fields_without_range(self, draft, session):
        draft.range_start = ""
        draft.range_end = ""

        print_file = build(draft, session).to_payload()["print_files"][0]

        assert "pages_start" not in print_file
        assert "page_end" not in print_file

    def test_no_printer_name(self, draft, session):
        payload = build(draft, session).to_payload()

        assert "printer_name" not in payload

    def test_exactly_one_file(self, draft, session):
        job_request = build(draft, session)

        assert len(job_request.print_files) == 1
        assert isinstance(job_request.print_files[0], PrintFile)

    def test_deterministic(self, draft, session):
        first = json.dumps(build(draft, session).to_payload())
        second = json.dumps(build(draft, session).to_payload())

        assert first == second

    def test_page_numbers_are_integers(self, draft, session):
        draft.range_start = " 2 "
        draft.range_end = "4.0"

        print_file = build(draft, session).to_payload()["print_files"][0]

        assert print_file["pages_start"] == 2
        assert print_file["page_end"] == 4

    def test_requires_token(self, draft):
        with pytest.raises(AuthError):
            build(draft, AuthSession("logged-out"))


class TestBuildPrintFile:
    """Defaults and enum conversion."""

    def test_defaults(self):
        print_file = build_print_file(PrintJobDraft(device_name="d", file_url="https://f"))

        assert print_file.copies == 1
        assert print_file.color is False
        assert print_file.double_sided is True
        assert print_file.page_size is PageSize.A4
        assert print_file.page_orientation is PageOrientation.AUTO
        assert print_file.page_range is None


class TestPrintJobRequest:
    """Invariants of the frozen request."""

    def test_rejects_empty_file_list(self):
        with pytest.raises(ValueError):
            PrintJobRequest(device_name="Desk1", print_files=())

    def test_rejects_long_device_name(self, draft):
        print_file = build_print_file(draft)

        with pytest.raises(ValueError):
            PrintJobRequest(device_name="x" * 24, print_files=(print_file,))


class TestDraftFromForm:
    """Parsing raw form values."""

    def test_camel_case_fields(self):
        draft = PrintJobDraft.from_form({
            "deviceName": "Desk1",
            "fileUrl": " https://x/y.pdf ",
            "copies": "2",
            "color": "true",
            "duplex": "false",
            "pageSize": "A3",
            "orientation": "landscape",
            "rangeStart": "1",
            "rangeEnd": "3",
        })

        assert draft.device_name == "Desk1"
        assert draft.file_url == "https://x/y.pdf"
        assert draft.copies == 2
        assert draft.color is True
        assert draft.duplex is False
        assert draft.page_size == "A3"
        assert draft.orientation == "landscape"
        assert draft.has_range is True

    def test_snake_case_fields(self):
        draft = PrintJobDraft.from_form({"device_name": "Desk2", "file_url": "https://f", "copies": 3})

        assert draft.device_name == "Desk2"
        assert draft.copies == 3

    def test_defaults_for_missing_fields(self):
        draft = PrintJobDraft.from_form({})

        assert draft == PrintJobDraft()

    def test_unparseable_copies_become_zero(self):
        assert PrintJobDraft.from_form({"copies": "lots"}).copies == 0

    def test_json_booleans(self):
        draft = PrintJobDraft.from_form({"color": True, "duplex": False})

        assert draft.color is True
        assert draft.duplex is False
