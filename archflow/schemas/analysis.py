"""Pydantic schemas for repository analysis jobs and artifacts.

These models define both the persisted format (status store entries, cached
artifacts) and the payloads sent over the status stream. Wire names follow
the camelCase keys used by the web client (``repoInfo``, ``createdAt``,
``status``); Python code uses the snake_case attribute names.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AnalysisPhase = Literal[
    "downloading",
    "extracting",
    "analyzing",
    "generating",
    "complete",
    "error",
]

TERMINAL_PHASES: frozenset[str] = frozenset({"complete", "error"})


class MalformedFlowError(ValueError):
    """A flow's steps are not numbered 1..n in order."""


class WireModel(BaseModel):
    """Base model that accepts both attribute names and wire aliases."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        """Serialize using wire aliases, dropping unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


class RepoRef(WireModel):
    """A GitHub repository identity."""

    owner: str
    name: str
    branch: str | None = Field(
        default=None,
        description="Branch to download; the default branch is 'main' when unset",
    )

    @property
    def key(self) -> str:
        """Cache identity, e.g. 'acme/widgets'."""
        return f"{self.owner}/{self.name}"


class AnimationStep(WireModel):
    """One highlighted moment in a flow."""

    step: int = Field(ge=1, description="1-based position within the flow")
    node: str = Field(description="Leading words of the rendered node label to highlight")
    message: str
    duration: int = Field(ge=0, description="Autoplay dwell in milliseconds")
    request: str | None = None
    response: str | None = None


class Flow(WireModel):
    """A named walkthrough scenario over the diagram."""

    name: str
    description: str = ""
    steps: list[AnimationStep] = Field(default_factory=list)
    nodes: list[str] = Field(default_factory=list)

    def validate_sequence(self) -> None:
        """Check that steps are numbered 1..n with no gaps or duplicates.

        Raises:
            MalformedFlowError: naming the first offending position
        """
        for index, step in enumerate(self.steps):
            expected = index + 1
            if step.step != expected:
                raise MalformedFlowError(
                    f"Flow '{self.name}': position {expected} has step number {step.step}"
                )


class AnalysisDraft(WireModel):
    """Diagram and flows as produced by the analyzer, before packaging."""

    diagram: str = Field(min_length=1)
    flows: list[Flow] = Field(default_factory=list)


class AnalysisArtifact(AnalysisDraft):
    """The finished, cacheable analysis for one repository."""

    timestamp: int = Field(description="Creation time, epoch milliseconds")
    repo: RepoRef = Field(alias="repoInfo")


class AnalysisStatus(WireModel):
    """Progress snapshot of an analysis job."""

    phase: AnalysisPhase = Field(alias="status")
    progress: int = Field(ge=0, le=100)
    message: str
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES


class AnalysisJob(WireModel):
    """A transient, TTL-bound analysis job record."""

    id: str
    repo: RepoRef
    status: AnalysisStatus
    created_at: int = Field(alias="createdAt")
    result: AnalysisArtifact | None = None


class CacheMetadata(WireModel):
    """Where a repository's finished artifact lives."""

    repo_key: str = Field(alias="repoKey")
    timestamp: int
    blob_url: str = Field(alias="blobUrl")


class AnalyzeRequest(BaseModel):
    """Body of POST /api/analyze."""

    owner: str = ""
    name: str = ""
    branch: str | None = None


class AnalyzeResponse(WireModel):
    """Response of POST /api/analyze: either a job id or a cached artifact."""

    analysis_id: str | None = Field(default=None, alias="analysisId")
    cached: bool | None = None
    analysis: AnalysisArtifact | None = None
    message: str
