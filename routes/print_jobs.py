"""
Print job routes.

Handles:
- /api/print-jobs/validate - Pre-flight check only, no network call
- /api/print-jobs          - Validate, build and send a job

Every failure ends in a toast payload and the session back in the ready
stage; nothing here leaves a session stuck in "sending".
"""

from flask import Blueprint, current_app

from core.exceptions import (
    AuthError,
    HlaPrintError,
    SubmissionInProgressError,
    ValidationError,
)
from models.print_job import PrintJobDraft
from services.print_service import describe_error
from logging_config import get_logger
from .session import existing_auth_session, request_fields, toast, ui_stage


# Module logger
logger = get_logger(__name__)

print_jobs_bp = Blueprint("print_jobs", __name__)


@print_jobs_bp.route("/api/print-jobs/validate", methods=["POST"])
def validate_job():
    """Run the pre-flight rules against the submitted fields."""
    auth_session = existing_auth_session()
    draft = PrintJobDraft.from_form(request_fields())

    error = current_app.config["PRINT_SERVICE"].validate_draft(auth_session, draft)
    if error is not None:
        return {"valid": False, "code": error.code, "msg": error.message}
    return {"valid": True}


@print_jobs_bp.route("/api/print-jobs", methods=["POST"])
def create_job():
    """
    Submit a print job.

    Returns the transaction id and code on success, or an error toast:
    400 validation, 401 not logged in, 409 already sending, 502 remote failure.
    """
    auth_session = existing_auth_session()
    draft = PrintJobDraft.from_form(request_fields())
    print_service = current_app.config["PRINT_SERVICE"]

    try:
        result = print_service.submit(auth_session, draft)

    except ValidationError as e:
        return toast("error", e.message, 400, code=e.code, stage=ui_stage(auth_session))

    except AuthError as e:
        return toast("error", e.message, 401, stage=ui_stage(auth_session))

    except SubmissionInProgressError as e:
        return toast("error", e.message, 409, stage=ui_stage(auth_session))

    except HlaPrintError as e:
        logger.error(f"Print job submission failed: {e}")
        return toast("error", describe_error(e), 502, stage=ui_stage(auth_session))

    return toast(
        "success",
        result.summary,
        stage=ui_stage(auth_session),
        **result.to_dict(),
    )
