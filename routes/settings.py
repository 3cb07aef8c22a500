"""
Settings route.

Connects an HlaPrint account from the settings page. Unlike login, the
remote endpoint answers {status: SUCCESS|FAILURE, message} and no token is
kept by the bridge.
"""

from flask import Blueprint, current_app

from logging_config import get_logger
from .session import request_fields, toast


# Module logger
logger = get_logger(__name__)

settings_bp = Blueprint("settings", __name__)


@settings_bp.route("/api/settings/connect", methods=["POST"])
def connect():
    """Connect the HlaPrint account. Body: {email, password}."""
    fields = request_fields()
    result = current_app.config["PRINT_SERVICE"].connect(
        str(fields.get("email") or ""),
        str(fields.get("password") or ""),
    )

    if result.ok:
        return toast("success", "Connected to HlaPrint.")
    return toast("error", result.message or "Failed to connect. Check credentials.", 400)
