"""
Result store: finished analysis artifacts keyed by repository identity.

An artifact lives in the blob store at ``{owner}/{name}/analysis.json``; a
small metadata record under ``arch-flow:{owner}/{name}`` remembers where it
was written and when. Presence of the blob decides whether a repository is
cached.
"""

import logging
import time

from pydantic import ValidationError

from archflow.schemas import AnalysisArtifact, CacheMetadata, RepoRef
from archflow.services.github import get_repo_key
from archflow.services.storage import BlobStore, KeyValueStore, StorageError

logger = logging.getLogger(__name__)

CACHE_PREFIX = "arch-flow:"

# Cache metadata TTL (7 days)
CACHE_TTL_SECONDS = 60 * 60 * 24 * 7


def artifact_key(repo: RepoRef) -> str:
    return f"{get_repo_key(repo)}/analysis.json"


def metadata_key(repo: RepoRef) -> str:
    return f"{CACHE_PREFIX}{get_repo_key(repo)}"


class ResultStore:
    """Persist and look up finished artifacts."""

    def __init__(
        self,
        kv: KeyValueStore,
        blobs: BlobStore,
        metadata_ttl_seconds: int = CACHE_TTL_SECONDS,
    ) -> None:
        self.kv = kv
        self.blobs = blobs
        self.metadata_ttl_seconds = metadata_ttl_seconds

    async def save_analysis(self, repo: RepoRef, analysis: AnalysisArtifact) -> str:
        """Write the artifact blob and return its URL."""
        url = await self.blobs.put(artifact_key(repo), analysis.model_dump_json(by_alias=True))
        logger.info(f"Saved analysis for {repo.key} to {url}")
        return url

    async def get_analysis(self, repo: RepoRef) -> AnalysisArtifact | None:
        """Load the cached artifact, or None if missing or unreadable."""
        try:
            data = await self.blobs.get(artifact_key(repo))
        except StorageError as e:
            logger.error(f"Error fetching analysis for {repo.key}: {e}")
            return None

        if data is None:
            return None

        try:
            return AnalysisArtifact.model_validate_json(data)
        except ValidationError as e:
            logger.error(f"Cached analysis for {repo.key} is malformed: {e.error_count()} errors")
            return None

    async def has_analysis(self, repo: RepoRef) -> bool:
        try:
            return await self.blobs.exists(artifact_key(repo))
        except StorageError as e:
            logger.warning(f"Could not check cache for {repo.key}: {e}")
            return False

    async def set_cache_metadata(self, repo: RepoRef, blob_url: str) -> CacheMetadata:
        metadata = CacheMetadata(
            repo_key=get_repo_key(repo),
            timestamp=int(time.time() * 1000),
            blob_url=blob_url,
        )
        await self.kv.set(
            metadata_key(repo),
            metadata.model_dump_json(by_alias=True),
            self.metadata_ttl_seconds,
        )
        return metadata

    async def get_cache_metadata(self, repo: RepoRef) -> CacheMetadata | None:
        data = await self.kv.get(metadata_key(repo))
        if data is None:
            return None
        try:
            return CacheMetadata.model_validate_json(data)
        except ValidationError:
            return None

    async def invalidate(self, repo: RepoRef) -> None:
        """Drop both the metadata record and the artifact blob."""
        await self.kv.delete(metadata_key(repo))
        await self.blobs.delete(artifact_key(repo))
        logger.info(f"Invalidated cached analysis for {repo.key}")
