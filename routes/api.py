"""
Operational API routes.

Handles:
- /health - Health check endpoint
"""

from flask import Blueprint, current_app

from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status. Does not call HlaPrint."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {}
    }

    print_service = current_app.config.get("PRINT_SERVICE")
    if print_service:
        health_status["checks"]["print_service"] = "ok"
        health_status["checks"]["base_url"] = print_service.client.base_url
    else:
        health_status["checks"]["print_service"] = "not_available"
        health_status["status"] = "degraded"

    registry = current_app.config.get("SESSION_REGISTRY")
    if registry is not None:
        health_status["checks"]["sessions"] = len(registry)
    else:
        health_status["checks"]["sessions"] = "not_available"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code
