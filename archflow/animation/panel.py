"""
Step panel: the list of a flow's steps shown beside the diagram.

Each entry is active (being shown), completed (before the current step) or
pending. While an animation is running the panel shows "Step k of n" and
keeps the current entry scrolled into view.
"""

from dataclasses import dataclass
from enum import Enum

from archflow.schemas import AnimationStep, Flow


class StepState(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PENDING = "pending"


@dataclass
class StepEntry:
    step: AnimationStep
    state: StepState

    @property
    def number(self) -> int:
        return self.step.step


class StepPanel:
    def __init__(self) -> None:
        self.flow: Flow | None = None
        self.current_step = 0
        self.animating = False
        self.scrolled_to: int | None = None

    def load(self, flow: Flow) -> None:
        self.flow = flow
        self.current_step = 0
        self.animating = False
        self.scrolled_to = None

    def update(self, current_step: int, animating: bool) -> None:
        self.current_step = current_step
        self.animating = animating

    def scroll_to(self, step: int) -> None:
        self.scrolled_to = step

    @property
    def step_count(self) -> int:
        return len(self.flow.steps) if self.flow else 0

    def entries(self) -> list[StepEntry]:
        if self.flow is None:
            return []
        entries = []
        for step in self.flow.steps:
            if self.animating and step.step == self.current_step:
                state = StepState.ACTIVE
            elif self.current_step > step.step:
                state = StepState.COMPLETED
            else:
                state = StepState.PENDING
            entries.append(StepEntry(step=step, state=state))
        return entries

    def progress_label(self) -> str | None:
        """``Step k of n`` while animating, otherwise None."""
        if not self.animating or self.current_step == 0:
            return None
        return f"Step {self.current_step} of {self.step_count}"

    def legend(self) -> list[str]:
        return list(self.flow.nodes) if self.flow else []

    def render(self) -> str:
        """Plain-text rendering of the panel."""
        if self.flow is None:
            return ""

        markers = {StepState.ACTIVE: ">", StepState.COMPLETED: "x", StepState.PENDING: " "}
        lines = [self.flow.name]
        if self.flow.description:
            lines.append(self.flow.description)
        progress = self.progress_label()
        if progress:
            lines.append(progress)
        lines.append("")

        for entry in self.entries():
            step = entry.step
            lines.append(f"[{markers[entry.state]}] {step.step}. {step.node}: {step.message}")
            if step.request:
                lines.extend(f"      -> {line}" for line in step.request.splitlines())
            if step.response:
                lines.extend(f"      <- {line}" for line in step.response.splitlines())

        legend = self.legend()
        if legend:
            lines.append("")
            lines.append("Components: " + ", ".join(legend))
        return "\n".join(lines)
