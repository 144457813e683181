"""
Lifecycle operations for Dataset.

Handles creating and importing datasets, review workflow, publishing and
deleting drafts.
"""

import logging
from typing import Any, Dict, Optional

from .core import DatasetCore
from .versions import DRAFT
from ..core import JSON_CONTENT, XML_CONTENT, ResponseFormat
from ..entity import Entity
from ..errors import DataverseError
from ..inputs import load_payload

logger = logging.getLogger(__name__)


# Create/import payloads are native Dataverse dataset JSON
DATASET_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Dataverse dataset",
    "type": "object",
    "required": ["datasetVersion"],
    "properties": {
        "datasetVersion": {"type": "object"},
    },
    "additionalProperties": True,
}


class LifecycleOperationsMixin:
    """Mixin providing create, import, review, publish and delete operations."""

    SCHEMA = DATASET_SCHEMA

    @classmethod
    def create(cls, data: Any, dataverse: Any) -> DatasetCore:
        """
        Create a dataset in a dataverse.

        Args:
            data: Mapping, JSON string or path to a JSON file
            dataverse: Parent Dataverse or its id/alias

        Returns:
            The new dataset
        """
        return cls._new_dataset(dataverse, data)

    @classmethod
    def import_dataset(
        cls,
        data: Any,
        dataverse: Any,
        pid: str,
        publish: bool = False,
        ddi: bool = False
    ) -> DatasetCore:
        """
        Import a dataset that already has a persistent identifier.

        Args:
            data: Mapping, JSON string, path to a JSON file, or a DDI XML
                document/text/file when ddi is set
            dataverse: Parent Dataverse or its id/alias
            pid: Persistent identifier of the dataset
            publish: Release the dataset right away
            ddi: Payload is DDI XML instead of Dataverse JSON

        Returns:
            The imported dataset
        """
        return cls._new_dataset(dataverse, data, pid=pid, publish=publish, ddi=ddi)

    @classmethod
    def _new_dataset(
        cls,
        dataverse: Any,
        data: Any,
        pid: Optional[str] = None,
        publish: bool = False,
        ddi: bool = False
    ) -> DatasetCore:
        payload = load_payload(data, schema=None if ddi else cls.SCHEMA, xml=ddi)

        if isinstance(dataverse, Entity):
            dataverse = dataverse.id

        url = f"dataverses/{dataverse}/datasets"
        params: Dict[str, Any] = {"release": "yes" if publish else "no"}
        if pid:
            url += "/:import"
            params["pid"] = pid

        headers = {"Content-Type": XML_CONTENT if payload.xml else JSON_CONTENT}

        result = cls.api_call(url, method="POST", headers=headers, body=payload.body, params=params)
        logger.info(f"Created dataset {result.get('id')} in dataverse {dataverse}")
        return cls.from_id(result["id"])

    def submit(self: DatasetCore) -> Any:
        """Submit the draft for review."""
        logger.info(f"Submitting dataset {self.id} for review")
        return self._call("submitForReview", method="POST")

    def reject(self: DatasetCore, reason: str) -> Any:
        """Return the draft to its author with a reason."""
        logger.info(f"Returning dataset {self.id} to author")
        return self._call("returnToAuthor", method="POST", body={"reasonForReturn": reason})

    def publish(self: DatasetCore, major: bool = True) -> Optional[str]:
        """
        Publish the draft as a new major or minor version.

        Returns:
            "Dataset <pid> published" (HTTP 200) or
            "Dataset <pid> waiting for review" (HTTP 202)
        """
        pid = self.persistent_id()
        status = self._call(
            "actions/:publish",
            method="POST",
            params={"type": "major" if major else "minor"},
            format=ResponseFormat.STATUS,
        )

        if status == 200:
            # The draft is now a release; read versions again on next access
            self._forget_version(DRAFT)
            self._published_versions = None
            self._versions = None
            logger.info(f"Dataset {pid} published")
            return f"Dataset {pid} published"
        if status == 202:
            logger.info(f"Dataset {pid} waiting for review")
            return f"Dataset {pid} waiting for review"

        logger.warning(f"Unexpected status publishing dataset {pid}: {status}")
        return None

    def delete(self: DatasetCore) -> str:
        """
        Delete the draft version.

        Raises:
            DataverseError: If the dataset has no draft
        """
        if not self.draft_version():
            raise DataverseError("Can only delete draft version")

        self.versions()
        result = self._call("versions/:draft", method="DELETE")
        self._forget_version(DRAFT)
        logger.info(f"Deleted draft of dataset {self.id}")

        if not self.published_versions():
            self._init({})
        return result["message"]
