"""
Deployment artifact lookup.

A branch may only point at an artifact whose folder exists in the
deployment bucket. The oracle answers that question; which backend answers
it is chosen at startup.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog
from pydantic import BaseModel, Field

from ..errors import ArtifactLookupError
from ..log import LogLabel
from .fixtures import FIXTURE_FOLDERS

logger = structlog.get_logger()


class ArtifactFolder(BaseModel):
    """Top-level folder of the deployment bucket holding one artifact."""

    files: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None


def get_bucket_uri(bucket_name: str, artifact_id: str) -> str:
    """Return the ``gs://`` URI of an artifact folder."""
    return f"gs://{bucket_name}/{artifact_id}"


class ArtifactOracle(ABC):
    """Answers whether a deployment artifact exists."""

    def __init__(self, bucket_name: str):
        self.bucket_name = bucket_name

    @abstractmethod
    def exists(self, artifact_id: str) -> bool:
        """Whether a folder named ``artifact_id`` exists."""

    @abstractmethod
    def list_folders(self) -> Dict[str, ArtifactFolder]:
        """All artifact folders keyed by artifact id."""

    def uri_for(self, artifact_id: str) -> str:
        return get_bucket_uri(self.bucket_name, artifact_id)


class FixtureArtifactOracle(ArtifactOracle):
    """
    Oracle over a fixed table of known artifacts.

    Membership here says nothing about whether the artifact's contents are
    valid; it is a placeholder for the live bucket check.
    """

    def __init__(
        self,
        bucket_name: str,
        folders: Optional[Dict[str, Dict[str, Any]]] = None,
    ):
        super().__init__(bucket_name)
        source = FIXTURE_FOLDERS if folders is None else folders
        self._folders = {
            artifact_id: ArtifactFolder(**folder) for artifact_id, folder in source.items()
        }

    def exists(self, artifact_id: str) -> bool:
        return artifact_id in self._folders

    def list_folders(self) -> Dict[str, ArtifactFolder]:
        return dict(self._folders)


class BucketArtifactOracle(ArtifactOracle):
    """Oracle that lists the deployment bucket through Cloud Storage."""

    def __init__(self, bucket_name: str, client: Any = None):
        super().__init__(bucket_name)
        if client is None:
            from google.cloud import storage

            client = storage.Client()
        self.client = client

    def exists(self, artifact_id: str) -> bool:
        if not artifact_id or "/" in artifact_id:
            return False
        try:
            blobs = self.client.list_blobs(
                self.bucket_name, prefix=f"{artifact_id}/", max_results=1
            )
            return any(True for _ in blobs)
        except Exception as e:
            logger.error(
                "artifact_lookup_failed",
                label=LogLabel.GCP_BUCKET.value,
                artifact_id=artifact_id,
                error=str(e),
            )
            raise ArtifactLookupError(str(e)) from e

    def list_folders(self) -> Dict[str, ArtifactFolder]:
        folders: Dict[str, ArtifactFolder] = {}
        try:
            for blob in self.client.list_blobs(self.bucket_name):
                folder_name, sep, file_name = blob.name.partition("/")
                if not sep:
                    # Objects at the bucket root are not artifacts
                    continue
                folder = folders.setdefault(folder_name, ArtifactFolder())
                if file_name:
                    folder.files.append(file_name)
                created = blob.time_created
                if created is not None and (
                    folder.created_at is None or created < folder.created_at
                ):
                    folder.created_at = created
        except Exception as e:
            logger.error(
                "artifact_listing_failed",
                label=LogLabel.GCP_BUCKET.value,
                bucket=self.bucket_name,
                error=str(e),
            )
            raise ArtifactLookupError(str(e)) from e
        return folders
