"""
Configuration module.

Loads the .env file and exposes environment-driven settings as module
constants. Required values are checked by validate_configuration() at
application startup rather than at import time so tests can import freely.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

APP_ENV = os.getenv("APP_ENV", "development")
IS_PRODUCTION = APP_ENV == "production"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO" if IS_PRODUCTION else "DEBUG").upper()
APP_LOG_FILE = os.getenv("APP_LOG_FILE", "app-log.log")

# Session / auth
SESSION_SECRET = os.getenv("SESSION_SECRET")
# Development bypass skips the login check entirely; ignored in production
DEV_BYPASS_AUTH = (
    not IS_PRODUCTION and os.getenv("DEV_BYPASS_AUTH", "false").lower() == "true"
)
USERS_FILE = os.getenv(
    "USERS_FILE", os.path.join(os.path.dirname(__file__), "..", "..", "users.json")
)

# GitHub access
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
GITHUB_TIMEOUT_SECONDS = float(os.getenv("GITHUB_TIMEOUT_SECONDS", "30"))

# Target content repository
CONTENT_REPO_OWNER = os.getenv("CONTENT_REPO_OWNER", "ReignOfTea")
CONTENT_REPO_NAME = os.getenv("CONTENT_REPO_NAME", "migrant_hotel_protests")
CONTENT_BRANCH = os.getenv("CONTENT_BRANCH", "master")
CONTENT_DATA_DIR = os.getenv("CONTENT_DATA_DIR", "data")

DEFAULT_COMMIT_MESSAGE = "Update files via dashboard"

REQUIRED_ENV_VARS = ["GITHUB_TOKEN", "SESSION_SECRET"]


def validate_configuration() -> dict:
    """Check required settings.

    Returns:
        {"valid": bool, "missing": [names]}
    """
    missing = [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]
    return {"valid": not missing, "missing": missing}
