"""
Dataverse collections.

A dataverse is a collection node holding child dataverses and datasets.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import requests

from .core import JSON_CONTENT
from .dataset import Dataset
from .entity import Entity
from .errors import DataverseError, NotFoundError, UnsupportedFormatError, UnsupportedTypeError
from .inputs import load_payload
from .shared.helpers import size_from_result

logger = logging.getLogger(__name__)


ROOT = ":root"

DATAVERSE_TYPES = [
    "DEPARTMENT",
    "JOURNALS",
    "LABORATORY",
    "ORGANIZATIONS_INSTITUTIONS",
    "RESEARCHERS",
    "RESEARCH_GROUP",
    "RESEARCH_PROJECTS",
    "TEACHING_COURSES",
    "UNCATEGORIZED",
]

SAMPLE_DATA = {
    "name": "new dataverse",
    "alias": "new_dv",
    "dataverseContacts": [
        {"contactEmail": "abc@def.org"}
    ],
    "affiliation": "My organization",
    "description": "My new dataverse",
    "dataverseType": "ORGANIZATIONS_INSTITUTIONS",
}

DATAVERSE_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Dataverse collection",
    "type": "object",
    "required": ["name", "alias", "dataverseContacts"],
    "properties": {
        "name": {"type": "string"},
        "alias": {"type": "string"},
        "dataverseContacts": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["contactEmail"],
                "properties": {"contactEmail": {"type": "string"}},
            },
        },
        "affiliation": {"type": "string"},
        "description": {"type": "string"},
        "dataverseType": {"enum": DATAVERSE_TYPES},
    },
    "additionalProperties": True,
}


class ContentType(str, Enum):
    """``type`` of an entry in a dataverse content listing."""

    DATAVERSE = "dataverse"
    DATASET = "dataset"


@dataclass
class ChildResult:
    """
    Outcome of realizing one entry of a content listing.

    ``entity`` is set when the child could be fetched, ``error`` when it was
    skipped.
    """

    entry: Dict[str, Any]
    kind: ContentType
    entity: Optional[Entity] = None
    error: Optional[Exception] = None

    @property
    def skipped(self) -> bool:
        return self.entity is None


def _content_type(entry: Dict[str, Any]) -> ContentType:
    try:
        return ContentType(entry.get("type"))
    except ValueError:
        name = entry.get("title") or entry.get("name")
        raise UnsupportedTypeError(f"Unsupported type: {entry.get('type')} ({name})") from None


class Dataverse(Entity):
    """
    A Dataverse collection.

    Usage:
        root = Dataverse.root()
        for dataset in root.each_dataset():
            print(dataset.title())
    """

    SCHEMA = DATAVERSE_SCHEMA
    SAMPLE_DATA = SAMPLE_DATA
    TYPES = DATAVERSE_TYPES

    def __init__(self, id: Any, data: Optional[Dict[str, Any]] = None):
        self.id = id
        self._init(self._get_data() if data is None else data)

    @classmethod
    def from_id(cls, id: Any) -> Optional["Dataverse"]:
        """
        Fetch a dataverse by numeric id or alias.

        Returns:
            The dataverse, or None if the server does not know it
        """
        try:
            return cls(id)
        except NotFoundError:
            logger.debug(f"Dataverse not found: {id}")
            return None
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                logger.debug(f"Dataverse not found: {id}")
                return None
            raise

    @classmethod
    def root(cls) -> Optional["Dataverse"]:
        return cls.from_id(ROOT)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r})"

    def _call(self, path: str = "", **kwargs) -> Any:
        url = f"dataverses/{self.id}"
        if path:
            url += f"/{path.lstrip('/')}"
        return self.api_call(url, **kwargs)

    def _init(self, data: Optional[Dict[str, Any]]) -> None:
        self._size: Optional[int] = None
        self._children: Optional[List[ChildResult]] = None
        super()._init(data)

    def _get_data(self) -> Optional[Dict[str, Any]]:
        if self.id is None:
            return None
        return self._call()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def create(self, data: Any) -> "Dataverse":
        """
        Create a child dataverse.

        Args:
            data: Mapping, JSON string or path to a JSON file (see SAMPLE_DATA)

        Returns:
            The new dataverse, built from the server's answer
        """
        payload = load_payload(data, schema=self.SCHEMA)
        result = self._call(
            method="POST",
            headers={"Content-Type": JSON_CONTENT},
            body=payload.body,
        )
        logger.info(f"Created dataverse {result.get('alias')} in {self.id}")
        return Dataverse(result["id"], data=result)

    def publish(self) -> str:
        self._call("actions/:publish", method="POST")
        logger.info(f"Dataverse {self.id} published")
        return f"Dataverse {self.id} published"

    def delete(self) -> str:
        result = self._call(method="DELETE")
        logger.info(f"Dataverse {self.id} deleted")
        return result["message"]

    # =========================================================================
    # Children
    # =========================================================================

    def list_children(self) -> List[ChildResult]:
        """
        Realize every entry of the content listing. Fetched once.

        The listing is decoded first, so an unsupported entry type fails
        before any child is fetched. Children that cannot be fetched are
        returned with their error instead of an entity.

        Raises:
            UnsupportedTypeError: If the listing holds an unknown type
        """
        if self._children is None:
            listing = self._call("contents")
            kinds = [_content_type(entry) for entry in listing]
            self._children = [
                self._realize_child(entry, kind) for entry, kind in zip(listing, kinds)
            ]
        return self._children

    def _realize_child(self, entry: Dict[str, Any], kind: ContentType) -> ChildResult:
        try:
            if kind is ContentType.DATAVERSE:
                entity = Dataverse.from_id(entry["id"])
                if entity is None:
                    raise DataverseError(f"Dataverse {entry['id']} not found")
            else:
                entity = Dataset.from_id(entry["id"])
        except (DataverseError, requests.RequestException) as e:
            logger.warning(f"Skipping {kind.value} {entry.get('id')} of dataverse {self.id}: {e}")
            return ChildResult(entry=entry, kind=kind, error=e)
        return ChildResult(entry=entry, kind=kind, entity=entity)

    def children(self, visitor: Optional[Callable[[Entity], Any]] = None) -> List[Entity]:
        """
        Direct child dataverses and datasets, in listing order.

        Args:
            visitor: Called once per child that could be fetched
        """
        result = [child.entity for child in self.list_children() if not child.skipped]
        if visitor is not None:
            for child in result:
                visitor(child)
        return result

    def each_dataverse(self, visitor: Optional[Callable[["Dataverse"], Any]] = None) -> List[Any]:
        """
        All dataverses below this one, depth first in listing order.

        Returns:
            The dataverses, or the visitor's results when a visitor is given
        """
        data = []
        for child in self.children():
            if isinstance(child, Dataverse):
                data.append(visitor(child) if visitor else child)
                data.extend(child.each_dataverse(visitor))
        return data

    def each_dataset(self, visitor: Optional[Callable[[Dataset], Any]] = None) -> List[Any]:
        """
        All datasets below this dataverse, depth first in listing order.

        Returns:
            The datasets, or the visitor's results when a visitor is given
        """
        data = []
        for child in self.children():
            if isinstance(child, Dataverse):
                data.extend(child.each_dataset(visitor))
            elif isinstance(child, Dataset):
                data.append(visitor(child) if visitor else child)
        return data

    # =========================================================================
    # Size & Export
    # =========================================================================

    def size(self) -> int:
        """Storage size in bytes. Fetched once."""
        if self._size is None:
            self._size = size_from_result(self._call("storagesize"))
        return self._size

    def rdm_data(self) -> Dict[str, Any]:
        return dict(self.api_data)

    def export_metadata(self, md_type: str) -> Dict[str, Any]:
        """
        Export metadata. Only ``rdm`` (the snapshot) is supported.

        Raises:
            UnsupportedFormatError: For any other format
        """
        if str(md_type) == "rdm":
            return self.rdm_data()
        raise UnsupportedFormatError(md_type)
