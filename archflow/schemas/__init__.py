"""Pydantic schemas for API request/response validation."""

from archflow.schemas.analysis import (
    TERMINAL_PHASES,
    AnalysisArtifact,
    AnalysisDraft,
    AnalysisJob,
    AnalysisPhase,
    AnalysisStatus,
    AnalyzeRequest,
    AnalyzeResponse,
    AnimationStep,
    CacheMetadata,
    Flow,
    MalformedFlowError,
    RepoRef,
)

__all__ = [
    "AnalysisArtifact",
    "AnalysisDraft",
    "AnalysisJob",
    "AnalysisPhase",
    "AnalysisStatus",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "AnimationStep",
    "CacheMetadata",
    "Flow",
    "MalformedFlowError",
    "RepoRef",
    "TERMINAL_PHASES",
]
