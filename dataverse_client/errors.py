"""
Error types for the Dataverse client.

- DataverseError: Base exception
- ConfigurationError: API endpoint or token missing
- ApiError / NotFoundError: Server answered with an error envelope
- VersionError: Requested dataset version does not exist
- UnsupportedFormatError: Unknown metadata export kind
- UnsupportedTypeError: Unknown discriminator in a server response
- InputError: Create/import payload could not be parsed
"""

import traceback
from typing import List, Optional


class DataverseError(Exception):
    """Base exception for all Dataverse client errors.

    Attributes:
        message: Error message
        backtrace: Stack frames attached when the error was raised. Falls back
            to the exception's own traceback when none was given.
    """

    def __init__(
        self,
        message: str,
        backtrace: Optional[List[traceback.FrameSummary]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self._backtrace = backtrace

    @property
    def backtrace(self) -> List[traceback.FrameSummary]:
        if self._backtrace is not None:
            return self._backtrace
        return list(traceback.extract_tb(self.__traceback__))


class ConfigurationError(DataverseError):
    """API base URL or token is not configured."""


class ApiError(DataverseError):
    """The server answered with a ``{"status": "ERROR", "message": ...}`` envelope."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        backtrace: Optional[List[traceback.FrameSummary]] = None,
    ) -> None:
        super().__init__(message, backtrace=backtrace)
        self.status_code = status_code


class NotFoundError(ApiError):
    """The server reported that the resource does not exist (HTTP 404)."""


class VersionError(DataverseError):
    """Requested dataset version does not exist."""

    def __init__(self, version) -> None:
        super().__init__(f"Version {version} does not exist")
        self.version = version


class UnsupportedFormatError(DataverseError):
    """Unknown metadata export format."""

    def __init__(self, md_type) -> None:
        super().__init__(f"Unknown metadata format: '{md_type}'")
        self.md_type = md_type


class UnsupportedTypeError(DataverseError):
    """A server response carried a discriminator this client does not know."""


class InputError(DataverseError):
    """Create/import input is not a mapping, JSON text, JSON file or XML document."""
