"""
Tests for AnalysisOrchestrator.

Tests cover:
- Phase sequence and progress values
- Mock mode (no download) vs download path
- Failures in any phase become a terminal error status
- Artifact persistence and cache metadata
"""

from __future__ import annotations

import io
import tarfile
from unittest.mock import AsyncMock

from archflow.schemas import AnalysisStatus
from archflow.services import AnalysisOrchestrator, ArchitectureAnalyzer, run_analysis_task
from archflow.services.github import GitHubAPIError


class RecordingJobStore:
    """Wraps a JobStore and records every status written."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.history: list[AnalysisStatus] = []

    async def create_job(self, repo):
        return await self.inner.create_job(repo)

    async def get_job(self, job_id):
        return await self.inner.get_job(job_id)

    async def update_progress(self, job_id, status):
        self.history.append(status)
        await self.inner.update_progress(job_id, status)

    async def set_completed(self, job_id, result):
        await self.inner.set_completed(job_id, result)
        self.history.append((await self.inner.get_job(job_id)).status)

    async def set_failed(self, job_id, error):
        await self.inner.set_failed(job_id, error)
        self.history.append((await self.inner.get_job(job_id)).status)


def _tarball() -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        data = b"print('hello')"
        info = tarfile.TarInfo(name="acme-widgets-abc/main.py")
        info.size = len(data)
        tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


def _orchestrator(job_store, result_store, **kwargs) -> AnalysisOrchestrator:
    kwargs.setdefault("analyzer", ArchitectureAnalyzer(api_key=""))
    kwargs.setdefault("github_token", "")
    return AnalysisOrchestrator(job_store, result_store, **kwargs)


class TestPhases:
    async def test_mock_mode_runs_all_phases(self, job_store, result_store, repo):
        recording = RecordingJobStore(job_store)
        downloader = AsyncMock()
        orchestrator = _orchestrator(recording, result_store, mock_mode=True, downloader=downloader)
        job_id = await job_store.create_job(repo)

        artifact = await orchestrator.run(job_id, repo)

        assert artifact is not None
        downloader.assert_not_called()
        assert [(s.phase, s.progress) for s in recording.history] == [
            ("downloading", 10),
            ("extracting", 30),
            ("analyzing", 50),
            ("generating", 80),
            ("complete", 100),
        ]
        assert recording.history[0].message == "Downloading acme/widgets..."

    async def test_progress_is_non_decreasing(self, job_store, result_store, repo):
        recording = RecordingJobStore(job_store)
        orchestrator = _orchestrator(recording, result_store, mock_mode=True)
        job_id = await job_store.create_job(repo)

        await orchestrator.run(job_id, repo)

        values = [s.progress for s in recording.history]
        assert values == sorted(values)

    async def test_downloads_when_credentials_present(self, job_store, result_store, repo):
        downloader = AsyncMock(return_value=_tarball())
        analyzer = AsyncMock(wraps=ArchitectureAnalyzer(api_key=""))
        orchestrator = _orchestrator(
            job_store,
            result_store,
            analyzer=analyzer,
            github_token="ghp_x",
            mock_mode=False,
            downloader=downloader,
        )
        job_id = await job_store.create_job(repo)

        await orchestrator.run(job_id, repo)

        downloader.assert_awaited_once_with(repo, "ghp_x")
        snapshot = analyzer.analyze.call_args.args[1]
        assert snapshot.files == ["main.py"]


class TestCompletion:
    async def test_persists_artifact_and_metadata(self, job_store, result_store, repo):
        orchestrator = _orchestrator(job_store, result_store, mock_mode=True)
        job_id = await job_store.create_job(repo)

        artifact = await orchestrator.run(job_id, repo)

        assert await result_store.get_analysis(repo) == artifact
        metadata = await result_store.get_cache_metadata(repo)
        assert metadata.repo_key == "acme/widgets"
        assert metadata.blob_url.endswith("acme/widgets/analysis.json")

        job = await job_store.get_job(job_id)
        assert job.status.phase == "complete"
        assert job.result == artifact
        assert artifact.repo == repo


class TestFailures:
    async def test_download_failure(self, job_store, result_store, repo):
        downloader = AsyncMock(side_effect=GitHubAPIError("Repository or branch not found: acme/widgets", 404))
        orchestrator = _orchestrator(job_store, result_store, mock_mode=False, downloader=downloader)
        job_id = await job_store.create_job(repo)

        assert await orchestrator.run(job_id, repo) is None

        job = await job_store.get_job(job_id)
        assert job.status.phase == "error"
        assert job.status.progress == 10
        assert job.status.error == "Repository or branch not found: acme/widgets"
        assert not await result_store.has_analysis(repo)

    async def test_analyzer_failure_is_sanitized(self, job_store, result_store, repo):
        analyzer = AsyncMock()
        analyzer.analyze.side_effect = RuntimeError("anthropic overloaded: {'type': 'error'}")
        orchestrator = _orchestrator(job_store, result_store, analyzer=analyzer, mock_mode=True)
        job_id = await job_store.create_job(repo)

        await orchestrator.run(job_id, repo)

        job = await job_store.get_job(job_id)
        assert job.status.phase == "error"
        assert job.status.progress == 50
        assert job.status.error == "Failed to analyze repository. Please try again."

    async def test_background_entry_point(self, job_store, result_store, repo):
        orchestrator = _orchestrator(job_store, result_store, mock_mode=True)
        job_id = await job_store.create_job(repo)

        await run_analysis_task(orchestrator, job_id, repo)

        assert (await job_store.get_job(job_id)).status.phase == "complete"
