"""
Dataset package for Dataverse datasets.

Usage:
    from dataverse_client.dataset import Dataset

    dataset = Dataset.from_pid("doi:10.5072/FK2/ABCDEF")
    dataset.versions()          # [latest, published, draft, 1.0]
    dataset.metadata("1.0")["title"]
"""

from .dataset import Dataset
from .core import DatasetCore
from .metadata import MD_TYPES, MD_TYPES_JSON, MD_TYPES_XML
from .normalize import TypeClass, pack_files, pack_metadata
from .versions import (
    DRAFT,
    DraftVersion,
    PublishedVersion,
    VersionAlias,
    VersionRecord,
    VersionState,
    parse_version,
)

__all__ = [
    "Dataset",
    "DatasetCore",
    "MD_TYPES",
    "MD_TYPES_JSON",
    "MD_TYPES_XML",
    "TypeClass",
    "pack_files",
    "pack_metadata",
    "DRAFT",
    "DraftVersion",
    "PublishedVersion",
    "VersionAlias",
    "VersionRecord",
    "VersionState",
    "parse_version",
]
