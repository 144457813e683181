"""
Shared utilities for the Dataverse client.

Configuration, authentication, logging setup and response parsing helpers
used by the entity modules.
"""

from .config import (
    BaseConfig,
    API_URL_ENV,
    API_TOKEN_ENV,
    API_KEY_HEADER,
    REQUEST_TIMEOUT,
    DOWNLOAD_CHUNK_SIZE,
    LOG_DIR,
)
from .auth import DataverseAuth, configure, get_auth, reset_auth
from .helpers import (
    parse_size_message,
    size_from_result,
    license_info,
    license_name,
    license_url,
    license_icon,
)
from .logger import setup_logger

__all__ = [
    # Config
    "BaseConfig",
    "API_URL_ENV",
    "API_TOKEN_ENV",
    "API_KEY_HEADER",
    "REQUEST_TIMEOUT",
    "DOWNLOAD_CHUNK_SIZE",
    "LOG_DIR",
    # Auth
    "DataverseAuth",
    "configure",
    "get_auth",
    "reset_auth",
    # Helpers
    "parse_size_message",
    "size_from_result",
    "license_info",
    "license_name",
    "license_url",
    "license_icon",
    # Logging
    "setup_logger",
]
