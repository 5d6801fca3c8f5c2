"""
Key/value-backed status store for repository analysis jobs.

Each job is a JSON record under ``analysis:{id}`` that expires after the
configured TTL (1 hour by default) whether or not it finished. The
orchestrator is the only writer; the status stream only reads.
"""

import logging
import time
import uuid

from pydantic import ValidationError

from archflow.schemas import AnalysisArtifact, AnalysisJob, AnalysisStatus, RepoRef
from archflow.services.storage import KeyValueStore

logger = logging.getLogger(__name__)

ANALYSIS_PREFIX = "analysis:"

# Job TTL (1 hour)
JOB_TTL_SECONDS = 3600


def _job_key(job_id: str) -> str:
    return f"{ANALYSIS_PREFIX}{job_id}"


def _now_ms() -> int:
    return int(time.time() * 1000)


class JobStore:
    """Read/write access to analysis job records."""

    def __init__(self, kv: KeyValueStore, ttl_seconds: int = JOB_TTL_SECONDS) -> None:
        self.kv = kv
        self.ttl_seconds = ttl_seconds

    async def _save(self, job: AnalysisJob) -> None:
        await self.kv.set(_job_key(job.id), job.model_dump_json(by_alias=True), self.ttl_seconds)

    async def create_job(self, repo: RepoRef) -> str:
        """Create a new job in the ``downloading`` phase and return its ID."""
        job = AnalysisJob(
            id=str(uuid.uuid4()),
            repo=repo,
            status=AnalysisStatus(phase="downloading", progress=0, message="Starting analysis..."),
            created_at=_now_ms(),
        )
        await self._save(job)

        logger.info(f"Created analysis job {job.id} for {repo.key}")
        return job.id

    async def get_job(self, job_id: str) -> AnalysisJob | None:
        """Get job by ID, or None if unknown, expired or unreadable."""
        data = await self.kv.get(_job_key(job_id))
        if data is None:
            logger.debug(f"Job {job_id} not found")
            return None

        try:
            return AnalysisJob.model_validate_json(data)
        except ValidationError:
            logger.error(f"Failed to parse job {job_id}")
            return None

    async def update_progress(self, job_id: str, status: AnalysisStatus) -> None:
        """Replace the status of an existing job."""
        job = await self.get_job(job_id)
        if job is None:
            logger.warning(f"Cannot update progress - job {job_id} not found")
            return

        job.status = status
        await self._save(job)
        logger.debug(f"Job {job_id} progress: {status.phase} {status.progress}%")

    async def set_completed(self, job_id: str, result: AnalysisArtifact) -> None:
        """Mark a job as complete with its artifact attached."""
        job = await self.get_job(job_id)
        if job is None:
            logger.error(f"Cannot complete - job {job_id} not found")
            return

        job.status = AnalysisStatus(phase="complete", progress=100, message="Analysis complete!")
        job.result = result
        await self._save(job)
        logger.info(f"Job {job_id} completed")

    async def set_failed(self, job_id: str, error: str) -> None:
        """Mark a job as failed with an error message.

        Progress keeps its last value so updates stay non-decreasing.
        """
        job = await self.get_job(job_id)
        if job is None:
            logger.error(f"Cannot fail - job {job_id} not found")
            return

        job.status = AnalysisStatus(
            phase="error",
            progress=job.status.progress,
            message="Analysis failed",
            error=sanitize_error(error),
        )
        await self._save(job)
        logger.error(f"Job {job_id} failed: {error}")


def sanitize_error(error: str) -> str:
    """
    Sanitize error message for user display.

    Converts technical API errors into user-friendly messages.
    """
    error_lower = error.lower()

    if "ratelimit" in error_lower or "rate limit" in error_lower:
        return "Service is busy. Please try again in a few minutes."
    if "timeout" in error_lower or "timed out" in error_lower:
        return "Request timed out. Please try again."
    if "apierror" in error_lower or "api error" in error_lower or "anthropic" in error_lower:
        return "Failed to analyze repository. Please try again."

    # If error is already short and clean, return it
    if error and len(error) < 200 and not any(char in error for char in ["<", ">", "{", "}"]):
        return error

    return "An unexpected error occurred. Please try again."
