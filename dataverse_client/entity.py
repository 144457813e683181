"""
Base class for Dataverse entities.

An entity wraps a read-only snapshot of the JSON the server returned for it.
Equality and hashing are structural over that snapshot.
"""

import copy
from types import MappingProxyType
from typing import Any, Dict, Iterator, KeysView, Mapping, Optional

from .core import api_call


def _freeze(value: Any) -> Any:
    """Hashable form of a JSON value."""
    if isinstance(value, Mapping):
        return tuple(sorted((k, _freeze(v)) for k, v in value.items()))
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


class Entity:
    """
    Immutable snapshot of an API object with a ``refresh`` operation.

    Subclasses implement ``_get_data`` to fetch the object and may extend
    ``_init`` to reset their own caches whenever the snapshot is replaced.
    """

    _api_data: Mapping[str, Any] = MappingProxyType({})

    @property
    def api_data(self) -> Mapping[str, Any]:
        return self._api_data

    def __getitem__(self, key: str) -> Any:
        return self._api_data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._api_data

    def __iter__(self) -> Iterator[str]:
        return iter(self._api_data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._api_data.get(key, default)

    def keys(self) -> KeysView:
        return self._api_data.keys()

    def dig(self, *path: Any) -> Any:
        """
        Nested lookup; returns None as soon as a step is missing.

        Examples:
            dataverse.dig("dataverseContacts", 0, "contactEmail")
        """
        value: Any = self._api_data
        for step in path:
            try:
                value = value[step]
            except (KeyError, IndexError, TypeError):
                return None
        return value

    def refresh(self) -> "Entity":
        """Fetch the object again and replace the snapshot and caches."""
        self._init(self._get_data())
        return self

    def _init(self, data: Optional[Dict[str, Any]]) -> None:
        self._api_data = MappingProxyType(copy.deepcopy(dict(data or {})))

    def _get_data(self) -> Optional[Dict[str, Any]]:
        return dict(self._api_data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return dict(self._api_data) == dict(other._api_data)

    def __hash__(self) -> int:
        return hash(_freeze(self._api_data))

    @staticmethod
    def api_call(url: str, **kwargs) -> Any:
        return api_call(url, **kwargs)
