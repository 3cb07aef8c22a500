"""
HlaPrint Bridge - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env, fail-fast without HLAPRINT_BASE_URL)
2. Creates the shared HlaPrint HTTP client
3. Creates the print service and session registry
4. Registers route blueprints
5. Sets up JSON error handlers

ARCHITECTURE:
    Main Thread
    ├── Configuration and client setup
    └── Cleanup on shutdown (client.close)

    Request Threads (one per HTTP request)
    └── Each resolves its own AuthSession from the registry

The only state shared between requests is the HTTP client (stateless) and
the registry (locked).
"""

from __future__ import annotations

import atexit
import logging
import os
import sys
import weakref
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from logging_config import setup_logging, get_logger
from core.http_client import HlaPrintClient
from services.print_service import PrintService
from services.session_registry import SessionRegistry
from routes import register_blueprints


# Module logger (configured after setup_logging)
logger = get_logger(__name__)

# HTTP clients created by create_app(); closed once at interpreter exit.
# The hook does not log: handler streams may already be closed by then.
_open_clients: "weakref.WeakSet[HlaPrintClient]" = weakref.WeakSet()


def _close_clients() -> None:
    """Close every HTTP client still alive at shutdown."""
    for client in list(_open_clients):
        client.close()


atexit.register(_close_clients)


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In PyInstaller bundle: Returns the directory containing the executable
    In development: Returns the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def create_app(config_object: Union[str, type, None] = None) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path or class to load config from
            (default: "config.Config")

    Returns:
        Configured Flask application

    Raises:
        ValueError: If HLAPRINT_BASE_URL is not configured
    """
    # Use override=True so .env file always takes precedence over shell environment
    base_path = _get_base_path()
    env_file = base_path / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object or "config.Config")

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting HlaPrint Bridge in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # CORE INITIALIZATION (FAIL-FAST)
    # =========================================================================

    base_url = app.config.get("HLAPRINT_BASE_URL")
    if not base_url:
        logger.error("FATAL: HLAPRINT_BASE_URL is not set")
        raise ValueError("HLAPRINT_BASE_URL is required - set it in .env")

    client = HlaPrintClient(
        base_url,
        timeout_seconds=app.config.get("HLAPRINT_TIMEOUT_SECONDS", 30.0),
        proxy_error_header=app.config.get("HLAPRINT_PROXY_ERROR_HEADER", "X-Upstream-Error"),
        logger=get_logger("core.http_client"),
    )

    # =========================================================================
    # SERVICES INITIALIZATION
    # =========================================================================

    app.config["PRINT_SERVICE"] = PrintService(client)
    app.config["SESSION_REGISTRY"] = SessionRegistry(
        max_idle_seconds=app.config.get("SESSION_IDLE_TIMEOUT_SECONDS", 3600.0),
        max_sessions=app.config.get("SESSION_REGISTRY_MAX_SIZE", 1000),
    )
    logger.info("Print service initialized")

    # =========================================================================
    # CLEANUP REGISTRATION
    # =========================================================================

    _open_clients.add(client)

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return {"type": "error", "msg": e.description or e.name}, e.code

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return {"type": "error", "msg": "An unexpected error occurred. Please try again."}, 500

    logger.info("Application initialized successfully")
    return app


def _config_for_environment(environment: Optional[str]) -> str:
    if environment == "production":
        return "config.ProductionConfig"
    return "config.DevelopmentConfig"


if __name__ == "__main__":
    app = create_app(_config_for_environment(os.environ.get("FLASK_ENV")))
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
