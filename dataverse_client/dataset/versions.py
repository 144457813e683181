"""
Dataset version keys.

Datasets have at most one mutable draft and any number of immutable
released versions tagged ``major.minor``. Callers may also name versions by
alias: ``latest`` (the draft if present, else the newest release) and
``published`` / ``latest-published`` (the newest release).
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from numbers import Number
from types import MappingProxyType
from typing import Any, Mapping, Tuple, Union

from ..errors import UnsupportedTypeError


class VersionAlias(str, Enum):
    LATEST = "latest"
    PUBLISHED = "published"

    def __str__(self) -> str:
        return self.value


class VersionState(str, Enum):
    """``versionState`` of a version envelope."""

    DRAFT = "DRAFT"
    RELEASED = "RELEASED"


@dataclass(frozen=True)
class DraftVersion:
    @property
    def path(self) -> str:
        return ":draft"

    def __str__(self) -> str:
        return "draft"


@dataclass(frozen=True, order=True)
class PublishedVersion:
    major: int
    minor: int = 0

    @property
    def path(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


DRAFT = DraftVersion()

VersionKey = Union[DraftVersion, PublishedVersion]
VersionRef = Union[VersionAlias, DraftVersion, PublishedVersion]

_ALIASES = {
    "draft": DRAFT,
    "latest": VersionAlias.LATEST,
    "published": VersionAlias.PUBLISHED,
    "latest-published": VersionAlias.PUBLISHED,
}

_NUMBER = re.compile(r"^(\d+)(?:\.(\d+))?$")


def parse_version(version: Any) -> VersionRef:
    """
    Normalize a caller supplied version reference.

    Examples:
        "latest", ":latest"                 -> VersionAlias.LATEST
        "published", ":latest-published"    -> VersionAlias.PUBLISHED
        "draft", ":draft"                   -> DRAFT
        "1.2", 1.2                          -> PublishedVersion(1, 2)
        2                                   -> PublishedVersion(2, 0)

    Raises:
        ValueError: If the reference is not recognised
    """
    if isinstance(version, (VersionAlias, DraftVersion, PublishedVersion)):
        return version

    if isinstance(version, Number) and not isinstance(version, bool):
        version = str(version)

    if isinstance(version, str):
        text = version.strip()
        alias = _ALIASES.get(text.lstrip(":").lower())
        if alias is not None:
            return alias
        match = _NUMBER.match(text)
        if match:
            return PublishedVersion(int(match.group(1)), int(match.group(2) or 0))

    raise ValueError(f"Not a version: {version!r}")


def version_key(envelope: Mapping[str, Any]) -> VersionKey:
    """Canonical key of a version envelope, decoded from its versionState."""
    state = envelope.get("versionState")
    try:
        state = VersionState(state)
    except ValueError:
        raise UnsupportedTypeError(f"Unsupported version state: '{state}'") from None

    if state is VersionState.DRAFT:
        return DRAFT
    return PublishedVersion(
        int(envelope.get("versionNumber")), int(envelope.get("versionMinorNumber") or 0)
    )


@dataclass(frozen=True)
class VersionRecord:
    """Everything cached for one dataset version, stored and dropped together."""

    key: VersionKey
    envelope: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    files: Tuple[Mapping[str, Any], ...] = ()
