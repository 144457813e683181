"""
Core functionality for Dataset.

Contains the base class with fetching, the per-version record cache and
version resolution.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Optional

from .normalize import pack_files, pack_metadata
from .versions import (
    DRAFT,
    PublishedVersion,
    VersionAlias,
    VersionKey,
    VersionRecord,
    VersionRef,
    VersionState,
    parse_version,
    version_key,
)
from ..entity import Entity
from ..errors import VersionError

logger = logging.getLogger(__name__)


class DatasetCore(Entity):
    """
    Core functionality for Dataverse datasets.

    The snapshot holds the dataset itself. Each version the caller touches is
    fetched once and kept as a VersionRecord keyed by its canonical version
    key (the draft or a ``major.minor`` release).
    """

    def __init__(self, id: Any, data: Optional[Dict[str, Any]] = None):
        self.id = id
        self._init(self._get_data() if data is None else data)

    @classmethod
    def from_id(cls, id: Any) -> "DatasetCore":
        """Fetch a dataset by its numeric id."""
        return cls(id)

    @classmethod
    def from_pid(cls, pid: str) -> "DatasetCore":
        """Fetch a dataset by persistent identifier (e.g. "doi:10.5072/FK2/ABCDEF")."""
        data = cls.api_call("datasets/:persistentId", params={"persistentId": pid})
        return cls(data["id"])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r})"

    # =========================================================================
    # Fetching
    # =========================================================================

    def _call(self, path: str = "", **kwargs) -> Any:
        url = f"datasets/{self.id}"
        if path:
            url += f"/{path.lstrip('/')}"
        return self.api_call(url, **kwargs)

    def _get_data(self) -> Optional[Dict[str, Any]]:
        return self.api_call(f"datasets/{self.id}")

    def _init(self, data: Optional[Dict[str, Any]]) -> None:
        self._records: Dict[VersionKey, VersionRecord] = {}
        self._published_versions: Optional[List[PublishedVersion]] = None
        self._versions: Optional[List[VersionRef]] = None

        data = dict(data or {})
        latest = data.pop("latestVersion", None)
        if latest:
            self._store_version(latest)
        super()._init(data)

    def _store_version(self, data: Dict[str, Any]) -> VersionKey:
        """Normalize a version envelope and cache it as one record."""
        envelope = dict(data)
        metadata = pack_metadata(envelope.pop("metadataBlocks", None))
        files = pack_files(envelope.pop("files", None))
        key = version_key(envelope)

        self._records[key] = VersionRecord(
            key=key,
            envelope=MappingProxyType(envelope),
            metadata=MappingProxyType(metadata),
            files=tuple(MappingProxyType(f) for f in files),
        )
        logger.debug(f"Cached version {key} of dataset {self.id}")
        return key

    def _forget_version(self, key: VersionKey) -> None:
        self._records.pop(key, None)
        if self._versions is not None and key in self._versions:
            self._versions.remove(key)

    # =========================================================================
    # Versions
    # =========================================================================

    def draft_version(self) -> Optional[VersionKey]:
        """The draft key if this dataset has a draft."""
        return DRAFT if DRAFT in self._records else None

    def published_versions(self) -> List[PublishedVersion]:
        """Released version numbers, oldest first. Fetched once."""
        if self._published_versions is None:
            listing = self._call("versions")
            self._published_versions = sorted(
                version_key(entry)
                for entry in listing
                if entry.get("versionState") == VersionState.RELEASED.value
            )
        return self._published_versions

    def versions(self) -> List[VersionRef]:
        """
        All resolvable version references.

        ``latest``, then ``published`` if anything was released, then the
        draft if there is one, then every release number.
        """
        if self._versions is None:
            published = self.published_versions()
            versions: List[VersionRef] = [VersionAlias.LATEST]
            if published:
                versions.append(VersionAlias.PUBLISHED)
            if self.draft_version():
                versions.append(DRAFT)
            versions.extend(published)
            self._versions = versions
        return self._versions

    def _latest_published(self) -> Optional[PublishedVersion]:
        published = self.published_versions()
        return published[-1] if published else None

    def resolve_version(self, version=VersionAlias.LATEST, strict: bool = True) -> Optional[VersionKey]:
        """
        Resolve a version reference to its canonical key and cache its data.

        Args:
            version: Alias, "draft", "major.minor" string or number, or a key
            strict: Raise VersionError when nothing matches (else return None)

        Returns:
            DRAFT or a PublishedVersion

        Raises:
            VersionError: If the version does not exist and strict is set
        """
        try:
            key = parse_version(version)
        except ValueError:
            key = None

        if key is VersionAlias.LATEST:
            key = self.draft_version() or self._latest_published()
        elif key is VersionAlias.PUBLISHED:
            key = self._latest_published()

        if key is not None and key in self._records:
            return key

        if key is None or key not in self.versions():
            if strict:
                raise VersionError(version)
            return None

        data = self._call(f"versions/{key.path}")
        return self._store_version(data)

    def version(self, version=VersionAlias.LATEST) -> Optional[VersionKey]:
        """Canonical key of a version, or None if it does not exist."""
        return self.resolve_version(version, strict=False)

    def _record(self, version) -> VersionRecord:
        return self._records[self.resolve_version(version)]

    def version_data(self, version=VersionAlias.LATEST) -> Dict[str, Any]:
        """Version envelope, with the version's ``id`` renamed to ``versionId``."""
        envelope = self._record(version).envelope
        return {("versionId" if k == "id" else k): v for k, v in envelope.items()}

    def persistent_id(self, version=VersionAlias.LATEST) -> str:
        return self.version_data(version)["datasetPersistentId"]
