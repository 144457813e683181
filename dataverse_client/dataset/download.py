"""
Storage size and download operations for Dataset.
"""

import logging
from pathlib import Path
from typing import Union

import requests

from .core import DatasetCore
from .versions import VersionAlias
from ..core import ResponseFormat
from ..shared.config import DOWNLOAD_CHUNK_SIZE
from ..shared.helpers import size_from_result

logger = logging.getLogger(__name__)


class DownloadOperationsMixin:
    """Mixin providing storage size and bundle download operations."""

    def size(self: DatasetCore) -> int:
        """Storage size of all versions in bytes."""
        return size_from_result(self._call("storagesize", params={"includeCached": "true"}))

    def download_size(self: DatasetCore, version=VersionAlias.LATEST) -> int:
        """Size of the files of a version in bytes."""
        key = self.resolve_version(version)
        return size_from_result(self._call(f"versions/{key.path}/downloadsize"))

    def download(
        self: DatasetCore,
        filename: str = "dataverse_files.zip",
        version=None,
    ) -> Union[int, bool]:
        """
        Download the files of the dataset as one zip bundle.

        Args:
            filename: Local path to write to
            version: Version to download; the server's default if omitted

        Returns:
            Number of bytes written, or False if the server refused the download
            or the stream broke off (the partial file is removed)
        """
        url = "access/dataset/:persistentId"
        if version is not None:
            url += f"/versions/{self.resolve_version(version).path}"

        written = 0
        succeeded = True

        def sink(response: requests.Response) -> None:
            nonlocal written, succeeded
            if not response.ok:
                logger.error(f"Download of dataset {self.id} failed: {response.status_code}")
                succeeded = False
                return
            try:
                with open(filename, "wb") as f:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        written += len(chunk)
                        f.write(chunk)
            except requests.RequestException as e:
                # No partial bundle is left behind
                logger.error(f"Download of dataset {self.id} interrupted after {written} bytes: {e}")
                Path(filename).unlink(missing_ok=True)
                succeeded = False

        logger.info(f"Downloading dataset {self.id} to {filename}")
        self.api_call(
            url,
            params={"persistentId": self.persistent_id()},
            format=ResponseFormat.BLOCK,
            sink=sink,
        )

        if not succeeded:
            return False
        logger.info(f"Downloaded {written} bytes")
        return written
