"""
Centralized configuration module for application-wide settings.

All settings are read from environment variables. The management CLI loads a
``.env`` file first so local overrides work without exporting variables.
"""

import logging
import os
from typing import List

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")

# ===========================
# Database Configuration
# ===========================

DEFAULT_DATABASE_URL = "sqlite:///user_accounts.db"


def get_database_url() -> str:
    """
    Get the database URL from environment variable.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL
            Default: 'sqlite:///user_accounts.db'
    """
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


# ===========================
# Logging Configuration
# ===========================


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_json() -> bool:
    """Whether console logs should be emitted as JSON (LOG_JSON)."""
    return os.getenv("LOG_JSON", "false").lower() in _TRUTHY


def get_log_to_file() -> bool:
    """Whether rotating log files are written (LOG_TO_FILE)."""
    return os.getenv("LOG_TO_FILE", "false").lower() in _TRUTHY


# ===========================
# Password Hashing Configuration
# ===========================


def get_password_schemes() -> List[str]:
    """
    Get the passlib schemes used for password hashing.

    Environment Variables:
        PASSWORD_SCHEMES: Comma separated passlib scheme names
            Default: 'bcrypt'
            The first scheme is used for new hashes; the others are only
            accepted when verifying.
    """
    raw = os.getenv("PASSWORD_SCHEMES", "bcrypt")
    schemes = [scheme.strip() for scheme in raw.split(",") if scheme.strip()]
    if not schemes:
        logger.warning(
            "PASSWORD_SCHEMES is empty, falling back to bcrypt",
            extra={"context": {"PASSWORD_SCHEMES": raw}},
        )
        return ["bcrypt"]
    return schemes


# ===========================
# Pagination Configuration
# ===========================

DEFAULT_PAGE_SIZE = 200


def get_default_page_size() -> int:
    """
    Get the page size used when listing users without an explicit request.

    Environment Variables:
        DEFAULT_PAGE_SIZE: Positive integer
            Default: 200
    """
    raw = os.getenv("DEFAULT_PAGE_SIZE")
    if raw is None:
        return DEFAULT_PAGE_SIZE

    try:
        size = int(raw)
    except (TypeError, ValueError):
        size = 0

    if size < 1:
        logger.warning(
            f"Invalid DEFAULT_PAGE_SIZE '{raw}', falling back to {DEFAULT_PAGE_SIZE}",
            extra={"context": {"DEFAULT_PAGE_SIZE": raw}},
        )
        return DEFAULT_PAGE_SIZE
    return size


def log_config() -> None:
    """
    Log the active configuration.

    Should be called during startup to provide visibility into the settings
    in use. The database URL is logged without credentials.
    """
    from sqlalchemy.engine.url import make_url

    try:
        safe_url = make_url(get_database_url()).render_as_string(hide_password=True)
    except Exception:
        safe_url = "<unparseable>"

    logger.info(
        "Configuration initialized",
        extra={
            "context": {
                "database_url": safe_url,
                "password_schemes": get_password_schemes(),
                "default_page_size": get_default_page_size(),
            }
        },
    )
