"""Tests for analysis schemas: wire names and step numbering."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from archflow.schemas import AnalysisJob, AnalysisStatus, AnimationStep, Flow, MalformedFlowError


def _steps(*numbers: int) -> list[AnimationStep]:
    return [AnimationStep(step=n, node="Client", message="m", duration=100) for n in numbers]


class TestFlowSequence:
    def test_contiguous(self):
        Flow(name="ok", steps=_steps(1, 2, 3)).validate_sequence()

    def test_empty_flow_is_valid(self):
        Flow(name="empty").validate_sequence()

    @pytest.mark.parametrize(
        ("numbers", "position"),
        [((2, 3), 1), ((1, 1), 2), ((1, 3), 2), ((1, 2, 2), 3)],
    )
    def test_malformed(self, numbers, position):
        with pytest.raises(MalformedFlowError, match=f"position {position} "):
            Flow(name="bad", steps=_steps(*numbers)).validate_sequence()

    def test_step_and_duration_bounds(self):
        with pytest.raises(ValidationError):
            AnimationStep(step=0, node="Client", message="m", duration=100)
        with pytest.raises(ValidationError):
            AnimationStep(step=1, node="Client", message="m", duration=-1)


class TestWireNames:
    def test_status_alias(self):
        status = AnalysisStatus(phase="analyzing", progress=50, message="Analyzing...")
        assert status.to_wire() == {"status": "analyzing", "progress": 50, "message": "Analyzing..."}
        assert not status.is_terminal

    def test_job_round_trip_from_wire(self, repo, sample_artifact):
        wire = {
            "id": "job-1",
            "repo": {"owner": "acme", "name": "widgets"},
            "status": {"status": "complete", "progress": 100, "message": "Analysis complete!"},
            "createdAt": 1,
            "result": sample_artifact.to_wire(),
        }
        job = AnalysisJob.model_validate(wire)

        assert job.repo == repo
        assert job.status.is_terminal
        assert job.result == sample_artifact

    def test_progress_bounds(self):
        with pytest.raises(ValidationError):
            AnalysisStatus(phase="error", progress=101, message="x")
