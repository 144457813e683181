"""
Dataverse Authentication Module

Holds the API base URL and API token. Every request carries the token in
the ``X-Dataverse-key`` header.
"""

import logging
import os
from typing import Dict, Optional, Tuple

from .config import API_KEY_HEADER, API_TOKEN_ENV, API_URL_ENV
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class DataverseAuth:
    """
    Endpoint and token for Dataverse API calls.

    Usage:
        auth = DataverseAuth("https://demo.dataverse.org/api", "xxxx-xxxx")
        response = requests.get(auth.url_for("dataverses/:root"), headers=auth.get_headers())

    Values not passed explicitly are read from the ``API_URL`` and
    ``API_TOKEN`` environment variables when they are first needed.
    """

    def __init__(self, api_url: Optional[str] = None, api_token: Optional[str] = None):
        self._api_url = api_url
        self._api_token = api_token

    def _settings(self) -> Tuple[str, str]:
        api_url = self._api_url or os.getenv(API_URL_ENV)
        api_token = self._api_token or os.getenv(API_TOKEN_ENV)
        if not api_url or not api_token:
            raise ConfigurationError(
                f"Set environment variables '{API_URL_ENV}' and '{API_TOKEN_ENV}'"
            )
        return api_url, api_token

    @property
    def api_url(self) -> str:
        """Get the API base URL without a trailing slash."""
        return self._settings()[0].rstrip("/")

    @property
    def token(self) -> str:
        """Get the API token."""
        return self._settings()[1]

    def url_for(self, path: str) -> str:
        """Join the base URL and a resource path relative to it."""
        return f"{self.api_url}/{path.lstrip('/')}"

    def get_headers(self) -> Dict[str, str]:
        """
        Get headers for authenticated API requests.

        Returns:
            Dict with the API key header
        """
        return {API_KEY_HEADER: self.token}


# Global auth instance for convenience
_global_auth: Optional[DataverseAuth] = None


def get_auth() -> DataverseAuth:
    """Get the global auth instance."""
    global _global_auth
    if _global_auth is None:
        _global_auth = DataverseAuth()
    return _global_auth


def configure(api_url: str, api_token: str) -> DataverseAuth:
    """
    Set endpoint and token on the global auth instance.

    Convenience function for scripts that don't want to use environment variables.

    Args:
        api_url: Dataverse API base URL (e.g. "https://demo.dataverse.org/api")
        api_token: Dataverse API token

    Returns:
        The global auth instance
    """
    global _global_auth
    _global_auth = DataverseAuth(api_url, api_token)
    logger.debug(f"Configured Dataverse endpoint: {api_url}")
    return _global_auth


def reset_auth() -> None:
    """Forget explicit settings; fall back to the environment again."""
    global _global_auth
    _global_auth = None

