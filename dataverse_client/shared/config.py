"""
Base configuration for the Dataverse client.

Settings are read from the environment when this module is imported.
The API endpoint and token are looked up lazily by ``DataverseAuth`` so
they can be set after import.
"""

import os


def _optional_float(name: str):
    value = os.getenv(name)
    return float(value) if value else None


class BaseConfig:
    """Base configuration class with common settings."""

    # Environment variables holding the API base URL and token
    API_URL_ENV = "API_URL"
    API_TOKEN_ENV = "API_TOKEN"

    # Header carrying the API token on every request
    API_KEY_HEADER = "X-Dataverse-key"

    # Request timeout in seconds (override with DATAVERSE_TIMEOUT env var)
    REQUEST_TIMEOUT = _optional_float("DATAVERSE_TIMEOUT")

    # Chunk size for streamed downloads (override with DATAVERSE_CHUNK_SIZE env var)
    DOWNLOAD_CHUNK_SIZE = int(os.getenv("DATAVERSE_CHUNK_SIZE", 1024 * 1024))

    # Directory for log files (override with DATAVERSE_LOG_DIR env var)
    LOG_DIR = os.getenv("DATAVERSE_LOG_DIR", "output/logs")


# Convenience exports for direct import
API_URL_ENV = BaseConfig.API_URL_ENV
API_TOKEN_ENV = BaseConfig.API_TOKEN_ENV
API_KEY_HEADER = BaseConfig.API_KEY_HEADER
REQUEST_TIMEOUT = BaseConfig.REQUEST_TIMEOUT
DOWNLOAD_CHUNK_SIZE = BaseConfig.DOWNLOAD_CHUNK_SIZE
LOG_DIR = BaseConfig.LOG_DIR
