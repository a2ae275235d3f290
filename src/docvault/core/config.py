"""Configuration management for DocVault core."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"{key}={value!r} is not a valid integer, using {default}")
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    if value:
        logger.warning(f"{key}={value!r} is not a valid boolean, using {default}")
    return default


# Application data directory (defaults to ~/.docvault)
DOCVAULT_DATA_DIR = Path(
    get_env("DOCVAULT_DATA_DIR", os.path.expanduser("~/.docvault"))
    or os.path.expanduser("~/.docvault")
).expanduser()

# Base directory holding one folder per vault: <app-data>/data/docvaults/<id>
DOCVAULTS_DIR = DOCVAULT_DATA_DIR / "data" / "docvaults"

# Word inserted by collision-avoiding copy ("note copy.md", "note copy 2.md")
COPY_SUFFIX = get_env("DOCVAULT_COPY_SUFFIX", "copy") or "copy"

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")

# API Server settings
DOCVAULT_API_KEY = get_env("DOCVAULT_API_KEY")
DOCVAULT_HOST = get_env("DOCVAULT_HOST", "127.0.0.1")
DOCVAULT_PORT = get_env_int("DOCVAULT_PORT", 8421)
DOCVAULT_ALLOW_NO_AUTH = get_env_bool("DOCVAULT_ALLOW_NO_AUTH", False)
DOCVAULT_CORS_ORIGINS = [
    origin.strip()
    for origin in (
        get_env("DOCVAULT_CORS_ORIGINS", "http://localhost:3000")
        or "http://localhost:3000"
    ).split(",")
    if origin.strip()
]


def setup_logging() -> logging.Logger:
    """Configure and return logger."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, (LOG_LEVEL or "INFO").upper(), logging.INFO),
    )
    return logging.getLogger(__name__)


def validate_api_environment() -> tuple[bool, str]:
    """
    Validate environment variables for the REST API.

    Returns:
        (is_valid, message) - If not valid, message explains what's missing.
    """
    if not DOCVAULT_API_KEY and not DOCVAULT_ALLOW_NO_AUTH:
        return (
            False,
            "Missing DOCVAULT_API_KEY - set it or DOCVAULT_ALLOW_NO_AUTH=true",
        )

    return True, ""
