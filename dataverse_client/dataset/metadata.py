"""
Metadata operations for Dataset.

Accessors over the normalized per-version metadata and files, and metadata
export in the server's formats.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from .core import DatasetCore
from .versions import VersionAlias
from ..core import ResponseFormat
from ..errors import UnsupportedFormatError
from ..shared.helpers import license_info

logger = logging.getLogger(__name__)


MD_TYPES_XML = ["ddi", "oai_ddi", "dcterms", "oai_dc", "Datacite", "oai_datacite"]
MD_TYPES_JSON = ["schema.org", "OAI_ORE", "dataverse_json"]
MD_TYPES = ["rdm", "raw"] + MD_TYPES_JSON + MD_TYPES_XML


def _parse_time(value: str) -> datetime:
    """Parse a server timestamp into local time."""
    return datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone()


class MetadataOperationsMixin:
    """Mixin providing metadata access and export operations."""

    def metadata(self: DatasetCore, version=VersionAlias.LATEST) -> Mapping[str, Any]:
        """Normalized metadata of a version."""
        return self._record(version).metadata

    def files(self: DatasetCore, version=VersionAlias.LATEST) -> List[Mapping[str, Any]]:
        """Normalized file list of a version."""
        return list(self._record(version).files)

    def metadata_fields(self: DatasetCore, version=VersionAlias.LATEST) -> List[str]:
        return list(self.metadata(version).keys())

    def title(self: DatasetCore, version=VersionAlias.LATEST) -> str:
        return self.metadata(version)["title"]

    def author(self: DatasetCore, version=VersionAlias.LATEST) -> str:
        """Name of the first author."""
        return self.metadata(version)["author"][0]["authorName"]

    def updated(self: DatasetCore, version=VersionAlias.LATEST) -> datetime:
        return _parse_time(self.version_data(version)["lastUpdateTime"])

    def created(self: DatasetCore, version=VersionAlias.LATEST) -> datetime:
        return _parse_time(self.version_data(version)["createTime"])

    def published(self: DatasetCore, version=VersionAlias.PUBLISHED) -> Optional[datetime]:
        """Release time of a version, or None if it was never released."""
        if self.resolve_version(version, strict=False) is None:
            return None
        release_time = self.version_data(version).get("releaseTime")
        return _parse_time(release_time) if release_time else None

    def version_field(self: DatasetCore, name: str, version=VersionAlias.LATEST) -> Any:
        """
        Value of an arbitrary version field.

        Looks in the version envelope first, then in the normalized metadata.
        """
        envelope = self.version_data(version)
        if name in envelope:
            return envelope[name]
        return self.metadata(version).get(name)

    # =========================================================================
    # Export
    # =========================================================================

    def export_metadata(self: DatasetCore, md_type: str) -> Any:
        """
        Export metadata in one of the formats in MD_TYPES.

        Server side exporters only work for released versions, so every format
        except ``raw`` returns None while the dataset has never been published.

        Raises:
            UnsupportedFormatError: If md_type is not in MD_TYPES
        """
        md_type = str(md_type)
        if md_type not in MD_TYPES:
            raise UnsupportedFormatError(md_type)

        if md_type == "raw":
            return self.raw_data()

        if self.version(VersionAlias.PUBLISHED) is None:
            logger.info(f"Dataset {self.id} has no published version to export")
            return None

        if md_type == "rdm":
            return self.rdm_data()

        fmt = ResponseFormat.XML if md_type in MD_TYPES_XML else ResponseFormat.JSON
        return self.api_call(
            "datasets/export",
            params={"exporter": md_type, "persistentId": self.persistent_id()},
            format=fmt,
        )

    def rdm_data(self: DatasetCore, version=VersionAlias.PUBLISHED) -> Optional[Dict[str, Any]]:
        """
        Snapshot merged with a version's envelope, metadata and files.

        The ``license`` entry is scraped from the ``termsOfUse`` HTML anchor;
        parts that cannot be found are None.
        """
        if self.version(version) is None:
            return None

        data = dict(self.api_data)
        data.update(self.version_data(version))
        data["metadata"] = dict(self.metadata(version))
        data["files"] = [dict(f) for f in self.files(version)]
        data["license"] = license_info(data.get("termsOfUse"))
        return data

    def raw_data(
        self: DatasetCore,
        version=VersionAlias.LATEST,
        with_files: bool = False
    ) -> Dict[str, Any]:
        """
        Version envelope plus metadata blocks (and files) as the server has them now.
        """
        key = self.resolve_version(version)

        result = dict(self.api_data)
        result.update(self.version_data(key))
        result["metadataBlocks"] = self._call(f"versions/{key.path}/metadata")
        if with_files:
            result["files"] = self._call(f"versions/{key.path}/files")
        return {"datasetVersion": result}
