"""
Flask route blueprints for HlaPrint Bridge.

This module contains all route handlers organized by functionality:
- session: Login, logout and session state
- print_jobs: Draft validation and job submission
- settings: HlaPrint account connect
- api: Health check

All routes speak JSON and answer with toast payloads
({"type": "success"|"error", "msg": ...}) for the UI to render.
"""

from .session import session_bp
from .print_jobs import print_jobs_bp
from .settings import settings_bp
from .api import api_bp

__all__ = [
    "session_bp",
    "print_jobs_bp",
    "settings_bp",
    "api_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(session_bp)
    app.register_blueprint(print_jobs_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(api_bp)
