"""
Analysis Orchestrator service for coordinating the repository analysis workflow.

Phases, each announced in the status store before it runs:
1. Download the repository tarball       (downloading, 10%)
2. Extract files into a RepoSnapshot      (extracting, 30%)
3. Analyze with Claude -> diagram + flows (analyzing, 50%)
4. Package the artifact                   (generating, 80%)
5. Persist artifact + cache metadata, mark the job complete (100%)

Any failure is terminal for the job: it is recorded as an ``error`` status
and nothing is retried or rolled back.
"""

import logging
import time
from collections.abc import Awaitable, Callable

from archflow.config import settings
from archflow.schemas import AnalysisArtifact, AnalysisStatus, RepoRef
from archflow.services.analyzer import ArchitectureAnalyzer
from archflow.services.github import download_repo_tarball
from archflow.services.job_store import JobStore
from archflow.services.result_store import ResultStore
from archflow.services.snapshot import extract_snapshot

logger = logging.getLogger(__name__)

Downloader = Callable[[RepoRef, str | None], Awaitable[bytes]]


class AnalysisOrchestrator:
    """
    Orchestrates one analysis job from download to cached artifact.

    This is the only writer of job status. One orchestrator runs per job id.
    """

    def __init__(
        self,
        job_store: JobStore,
        result_store: ResultStore,
        analyzer: ArchitectureAnalyzer | None = None,
        github_token: str | None = None,
        mock_mode: bool | None = None,
        downloader: Downloader = download_repo_tarball,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            job_store: Status store for progress updates
            result_store: Artifact cache written on success
            analyzer: Diagram/flow generator (defaults to one built from settings)
            github_token: Token for tarball downloads (defaults to settings)
            mock_mode: Skip the download entirely (defaults to settings.mock_mode)
            downloader: Tarball download function
        """
        self.job_store = job_store
        self.result_store = result_store
        self.analyzer = analyzer or ArchitectureAnalyzer()
        self.github_token = settings.github_token if github_token is None else github_token
        self.mock_mode = settings.mock_mode if mock_mode is None else mock_mode
        self.downloader = downloader

    async def run(self, job_id: str, repo: RepoRef) -> AnalysisArtifact | None:
        """
        Run all phases for a job.

        Returns:
            The persisted artifact, or None if the job failed
        """
        try:
            return await self._run_phases(job_id, repo)
        except Exception as e:
            logger.exception(f"Analysis {job_id} for {repo.key} failed")
            await self.job_store.set_failed(job_id, str(e) or type(e).__name__)
            return None

    async def _run_phases(self, job_id: str, repo: RepoRef) -> AnalysisArtifact:
        logger.info(f"Starting analysis for {repo.key} (ID: {job_id})")

        # Phase 1: Download
        await self._update_progress(job_id, "downloading", 10, f"Downloading {repo.owner}/{repo.name}...")
        if self.mock_mode:
            logger.info("No GitHub/Anthropic credentials - skipping download (mock mode)")
            archive = b""
        else:
            archive = await self.downloader(repo, self.github_token or None)

        # Phase 2: Extract
        await self._update_progress(job_id, "extracting", 30, "Extracting repository files...")
        snapshot = extract_snapshot(archive)

        # Phase 3: Analyze
        await self._update_progress(job_id, "analyzing", 50, "Analyzing code architecture with Claude...")
        draft = await self.analyzer.analyze(repo, snapshot)

        # Phase 4: Package
        await self._update_progress(job_id, "generating", 80, "Generating architecture diagram...")
        artifact = AnalysisArtifact(
            diagram=draft.diagram,
            flows=draft.flows,
            timestamp=int(time.time() * 1000),
            repo=repo,
        )

        # Phase 5: Persist
        blob_url = await self.result_store.save_analysis(repo, artifact)
        await self.result_store.set_cache_metadata(repo, blob_url)
        await self.job_store.set_completed(job_id, artifact)

        logger.info(f"Analysis completed successfully for {repo.key}")
        return artifact

    async def _update_progress(self, job_id: str, phase: str, progress: int, message: str) -> None:
        await self.job_store.update_progress(
            job_id,
            AnalysisStatus(phase=phase, progress=progress, message=message),  # type: ignore[arg-type]
        )


async def run_analysis_task(orchestrator: AnalysisOrchestrator, job_id: str, repo: RepoRef) -> None:
    """Background task entry point; the request has already returned."""
    logger.info(f"Background analysis task started for job {job_id}")
    await orchestrator.run(job_id, repo)
