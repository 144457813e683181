"""
Dataset - unified class combining all operations.

This module provides the main Dataset class that combines the version core
with all operation mixins into a single interface.
"""

from .core import DatasetCore
from .download import DownloadOperationsMixin
from .lifecycle import LifecycleOperationsMixin
from .metadata import MetadataOperationsMixin


class Dataset(
    DatasetCore,
    MetadataOperationsMixin,
    LifecycleOperationsMixin,
    DownloadOperationsMixin
):
    """
    A versioned Dataverse dataset.

    Supports:
    - Resolving version aliases and numbers, listing versions
    - Normalized metadata, files and version envelope fields per version
    - Metadata export (server exporters, rdm, raw)
    - Create, import, submit for review, return to author, publish
    - Deleting the draft
    - Storage size, download size and bundle download
    """
