"""
Session routes (login / logout).

The browser only holds an opaque session id in the Flask cookie; the bearer
token lives in the AuthSession kept by SessionRegistry.
"""

from flask import (
    Blueprint,
    current_app,
    request,
    session,
)

from core.exceptions import AuthError
from core.session import AuthSession
from models.print_job import SubmissionStage
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

session_bp = Blueprint("session", __name__)

SESSION_ID_KEY = "hlaprint_sid"


def current_auth_session() -> AuthSession:
    """
    Resolve or create the AuthSession for the current browser session.

    Only login calls this; it stores the (possibly new) id in the cookie.
    """
    registry = current_app.config["SESSION_REGISTRY"]
    session_id, auth_session = registry.get_or_create(session.get(SESSION_ID_KEY))
    if session.get(SESSION_ID_KEY) != session_id:
        session[SESSION_ID_KEY] = session_id
        session.modified = True
    return auth_session


def existing_auth_session() -> AuthSession:
    """
    Look up the AuthSession for the current browser session without creating one.

    Unknown or expired ids resolve to a logged-out session that is not
    registered, so read-only requests never grow the registry.
    """
    registry = current_app.config["SESSION_REGISTRY"]
    auth_session = registry.get(session.get(SESSION_ID_KEY))
    if auth_session is None:
        return AuthSession()
    return auth_session


def request_fields() -> dict:
    """Read fields from a JSON body or a submitted form."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def ui_stage(auth_session: AuthSession) -> str:
    """Stage name the card uses: login, ready or sending."""
    if not auth_session.is_authenticated:
        return "login"
    if auth_session.stage is SubmissionStage.SENDING:
        return "sending"
    return "ready"


def toast(kind: str, msg: str, status_code: int = 200, **extra):
    """Build a toast response for the UI."""
    body = {"type": kind, "msg": msg}
    body.update(extra)
    return body, status_code


@session_bp.route("/api/session", methods=["GET"])
def session_state():
    """Report whether the current browser session is logged in."""
    auth_session = existing_auth_session()
    return {
        "authenticated": auth_session.is_authenticated,
        "stage": ui_stage(auth_session),
    }


@session_bp.route("/api/session/login", methods=["POST"])
def login():
    """
    Log in to HlaPrint.

    Body: {email, password}. A repeated login replaces the token; a failed
    one keeps the previous token, and a failed first login registers nothing.
    """
    fields = request_fields()
    auth_session = current_auth_session()
    print_service = current_app.config["PRINT_SERVICE"]

    try:
        print_service.login(
            auth_session,
            str(fields.get("email") or ""),
            str(fields.get("password") or ""),
        )
    except AuthError as e:
        logger.warning(f"Login failed: {e.message}")
        if not auth_session.is_authenticated:
            _forget_session()
        return toast("error", e.message or "Login failed", 401, stage=ui_stage(auth_session))

    return toast("success", "Logged in to HlaPrint.", stage=ui_stage(auth_session))


@session_bp.route("/api/session/logout", methods=["POST"])
def logout():
    """Drop the bearer token and forget this browser session."""
    auth_session = _forget_session()
    if auth_session is not None:
        current_app.config["PRINT_SERVICE"].logout(auth_session)
    return toast("success", "Logged out.", stage="login")


def _forget_session():
    """Remove this browser's session from the registry and the cookie."""
    registry = current_app.config["SESSION_REGISTRY"]
    session_id = session.pop(SESSION_ID_KEY, None)
    auth_session = registry.get(session_id)
    registry.discard(session_id)
    return auth_session
