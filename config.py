"""
Configuration for HlaPrint Bridge.

All values come from the environment (or a .env file next to this module).
HLAPRINT_BASE_URL is required; the app will fail-fast without it.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "hlaprint_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # HlaPrint service
    # ==========================================================================
    # HLAPRINT_BASE_URL: Root URL of the print service, no trailing slash
    #   Example: https://print.example.com
    #
    # HLAPRINT_TIMEOUT_SECONDS: Upper bound for every call to the service.
    #   There are no retries; a timed-out call is reported once.
    #
    # HLAPRINT_PROXY_ERROR_HEADER: Response header in which the proxy in front
    #   of the service reports upstream failures. Its value is shown to the
    #   user alongside the HTTP status.
    # ==========================================================================
    HLAPRINT_BASE_URL = os.environ.get("HLAPRINT_BASE_URL", "")
    HLAPRINT_TIMEOUT_SECONDS = float(
        os.environ.get("HLAPRINT_TIMEOUT_SECONDS", "30")
    )
    HLAPRINT_PROXY_ERROR_HEADER = os.environ.get(
        "HLAPRINT_PROXY_ERROR_HEADER", "X-Upstream-Error"
    )

    # ==========================================================================
    # Session registry
    # ==========================================================================
    # SESSION_IDLE_TIMEOUT_SECONDS: Logged-in sessions unused for longer than
    #   this are dropped from memory (the user has to log in again).
    #
    # SESSION_REGISTRY_MAX_SIZE: Upper bound on sessions kept in memory; the
    #   least recently used one is dropped when it is reached.
    # ==========================================================================
    SESSION_IDLE_TIMEOUT_SECONDS = float(
        os.environ.get("SESSION_IDLE_TIMEOUT_SECONDS", "3600")
    )
    SESSION_REGISTRY_MAX_SIZE = int(
        os.environ.get("SESSION_REGISTRY_MAX_SIZE", "1000")
    )


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "test-secret-key"
    HLAPRINT_BASE_URL = "https://hlaprint.test"
    HLAPRINT_TIMEOUT_SECONDS = 5.0
