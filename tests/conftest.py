"""Root conftest: shared fixtures for all tests.

Provides:
- In-memory key/value and blob stores
- JobStore / ResultStore / StatusStream wired to them
- A sample artifact with one three-step flow
- API client with dependency overrides (no lifespan, no network)
"""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from archflow.schemas import AnalysisArtifact, AnimationStep, Flow, RepoRef
from archflow.services import (
    AnalysisOrchestrator,
    ArchitectureAnalyzer,
    JobStore,
    ResultStore,
    StatusStream,
)
from archflow.services.storage import MemoryBlobStore, MemoryKeyValueStore

# ─────────────────────────────────────────────────────────────────────────────
# Stores
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def blobs() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def job_store(kv) -> JobStore:
    return JobStore(kv)


@pytest.fixture
def result_store(kv, blobs) -> ResultStore:
    return ResultStore(kv, blobs)


@pytest.fixture
def status_stream(job_store) -> StatusStream:
    return StatusStream(job_store, poll_interval=0.01)


# ─────────────────────────────────────────────────────────────────────────────
# Domain Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def repo() -> RepoRef:
    return RepoRef(owner="acme", name="widgets")


@pytest.fixture
def sample_artifact(repo) -> AnalysisArtifact:
    """Artifact whose single flow walks Client -> API Server -> Database."""
    return AnalysisArtifact(
        diagram='flowchart TD\n    Client["Client"] --> API["API Server"]\n    API --> DB[("Database")]',
        flows=[
            Flow(
                name="Fetch widgets",
                description="List widgets from the catalog",
                steps=[
                    AnimationStep(step=1, node="Client", message="Requests the widget list", duration=800),
                    AnimationStep(
                        step=2,
                        node="API Server",
                        message="Routes the request",
                        request="GET /api/widgets",
                        duration=800,
                    ),
                    AnimationStep(
                        step=3,
                        node="Database",
                        message="Returns rows",
                        response="200 OK",
                        duration=1000,
                    ),
                ],
                nodes=["Client", "API Server", "Database"],
            )
        ],
        timestamp=1_700_000_000_000,
        repo=repo,
    )


# ─────────────────────────────────────────────────────────────────────────────
# API Client
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def orchestrator(job_store, result_store) -> AnalysisOrchestrator:
    """Orchestrator in mock mode: no download, placeholder analysis."""
    return AnalysisOrchestrator(
        job_store,
        result_store,
        analyzer=ArchitectureAnalyzer(api_key=""),
        github_token="",
        mock_mode=True,
    )


@pytest.fixture
async def api_client(job_store, result_store, status_stream, orchestrator):
    """HTTP client against the app with services replaced by in-memory ones.

    Overrides: get_job_store, get_result_store, get_status_stream, get_orchestrator
    """
    from archflow.api.deps import (
        get_job_store,
        get_orchestrator,
        get_result_store,
        get_status_stream,
    )
    from archflow.main import app

    app.dependency_overrides[get_job_store] = lambda: job_store
    app.dependency_overrides[get_result_store] = lambda: result_store
    app.dependency_overrides[get_status_stream] = lambda: status_stream
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
