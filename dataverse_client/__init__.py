"""
Client library for the Dataverse research data repository API.

Provides Dataverse (collection) and Dataset (versioned data package) entities
over the Dataverse native REST API, with dataset metadata normalized into a
flat field name -> value mapping.

Usage:
    from dataverse_client import Dataverse, Dataset, configure

    configure("https://demo.dataverse.org/api", "xxxx-xxxx")  # or API_URL / API_TOKEN
    dataset = Dataset.from_pid("doi:10.5072/FK2/ABCDEF")
    dataset.title("published")
"""

from .core import ResponseFormat, api_call
from .dataset import (
    DRAFT,
    Dataset,
    PublishedVersion,
    VersionAlias,
)
from .dataverse import ChildResult, ContentType, Dataverse
from .entity import Entity
from .errors import (
    ApiError,
    ConfigurationError,
    DataverseError,
    InputError,
    NotFoundError,
    UnsupportedFormatError,
    UnsupportedTypeError,
    VersionError,
)
from .shared import DataverseAuth, configure, get_auth, reset_auth, setup_logger

__version__ = "0.1.0"

__all__ = [
    "ResponseFormat",
    "api_call",
    "DRAFT",
    "Dataset",
    "PublishedVersion",
    "VersionAlias",
    "ChildResult",
    "ContentType",
    "Dataverse",
    "Entity",
    "ApiError",
    "ConfigurationError",
    "DataverseError",
    "InputError",
    "NotFoundError",
    "UnsupportedFormatError",
    "UnsupportedTypeError",
    "VersionError",
    "DataverseAuth",
    "configure",
    "get_auth",
    "reset_auth",
    "setup_logger",
]
