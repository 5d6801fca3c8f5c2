"""Tests for the step panel."""

from __future__ import annotations

from archflow.animation import StepPanel, StepState


class TestStepPanel:
    def test_empty(self):
        panel = StepPanel()
        assert panel.entries() == []
        assert panel.render() == ""
        assert panel.progress_label() is None

    def test_states_while_animating(self, sample_artifact):
        panel = StepPanel()
        panel.load(sample_artifact.flows[0])
        panel.update(current_step=2, animating=True)

        states = [entry.state for entry in panel.entries()]
        assert states == [StepState.COMPLETED, StepState.ACTIVE, StepState.PENDING]
        assert panel.progress_label() == "Step 2 of 3"

    def test_no_active_entry_when_idle(self, sample_artifact):
        panel = StepPanel()
        panel.load(sample_artifact.flows[0])
        panel.update(current_step=0, animating=False)

        assert all(entry.state is StepState.PENDING for entry in panel.entries())
        assert panel.progress_label() is None

    def test_load_resets(self, sample_artifact):
        panel = StepPanel()
        panel.load(sample_artifact.flows[0])
        panel.update(3, True)
        panel.scroll_to(3)

        panel.load(sample_artifact.flows[0])
        assert panel.current_step == 0
        assert panel.scrolled_to is None

    def test_render(self, sample_artifact):
        panel = StepPanel()
        panel.load(sample_artifact.flows[0])
        panel.update(2, True)

        text = panel.render()
        assert "Fetch widgets" in text
        assert "Step 2 of 3" in text
        assert "[x] 1. Client: Requests the widget list" in text
        assert "[>] 2. API Server: Routes the request" in text
        assert "      -> GET /api/widgets" in text
        assert "      <- 200 OK" in text
        assert text.endswith("Components: Client, API Server, Database")
