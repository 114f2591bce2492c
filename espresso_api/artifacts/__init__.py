"""
Deployment artifact existence checks.
"""

from ..config import Settings
from .fixtures import FIXTURE_ARTIFACT_IDS, FIXTURE_FOLDERS
from .oracle import (
    ArtifactFolder,
    ArtifactOracle,
    BucketArtifactOracle,
    FixtureArtifactOracle,
    get_bucket_uri,
)


def build_artifact_oracle(settings: Settings) -> ArtifactOracle:
    """Create the oracle selected by ``settings.artifact_oracle``."""
    if settings.artifact_oracle == "bucket":
        return BucketArtifactOracle(settings.firebase_storage_bucket)
    return FixtureArtifactOracle(settings.firebase_storage_bucket)


__all__ = [
    "FIXTURE_ARTIFACT_IDS",
    "FIXTURE_FOLDERS",
    "ArtifactFolder",
    "ArtifactOracle",
    "BucketArtifactOracle",
    "FixtureArtifactOracle",
    "build_artifact_oracle",
    "get_bucket_uri",
]
