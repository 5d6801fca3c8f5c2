"""
Animation engine: walks a flow's steps over a rendered diagram.

States and commands:

    idle -> playing                      start()
    playing <-> paused                   toggle_pause()
    playing / paused -> idle             stop(), or autoplay passing the last step
    idle / paused -> stepping -> same    step_forward() / step_back()

A manual step while playing pauses autoplay first. Showing a step clears all
highlights, emphasizes the first node whose label starts with the step's
``node`` words, and marches a dashed stroke along the edge at position
``step - 1`` (edges are matched by position, not by endpoints).

Every highlight is tagged with a token. Clearing bumps the token, and any
timer that wakes up holding an old token does nothing, so at most one node
is emphasized at any time.
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from archflow.animation.panel import StepPanel
from archflow.animation.svg import RenderedEdge, SvgDiagram
from archflow.schemas import AnalysisArtifact, Flow

logger = logging.getLogger(__name__)

MANUAL_STEP_DURATION_MS = 5000
PAUSE_POLL_INTERVAL = 0.1
DASH_INTERVAL = 0.03


class AnimationError(Exception):
    """A command cannot run against the selected flow."""


class AnimationState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    STEPPING = "stepping"


Listener = Callable[["AnimationEngine"], None]


class AnimationEngine:
    """
    Drive step-by-step highlighting of one analysis artifact.

    Commands are plain methods meant to be called from inside a running event
    loop; timed work (dwell, dash marching) runs in tasks owned by the engine.

    Args:
        artifact: Analysis whose flows are animated
        diagram: The artifact's diagram, already rendered to SVG
        panel: Step panel kept in sync with the engine
        manual_step_duration_ms: Highlight time for manual steps
        pause_poll_interval: Seconds between checks while paused
        dash_interval: Seconds between dash offset ticks on the active edge

    Raises:
        MalformedFlowError: If any flow's steps are not numbered 1..n
    """

    def __init__(
        self,
        artifact: AnalysisArtifact,
        diagram: SvgDiagram,
        panel: StepPanel | None = None,
        *,
        manual_step_duration_ms: int = MANUAL_STEP_DURATION_MS,
        pause_poll_interval: float = PAUSE_POLL_INTERVAL,
        dash_interval: float = DASH_INTERVAL,
    ) -> None:
        for flow in artifact.flows:
            flow.validate_sequence()

        self.artifact = artifact
        self.diagram = diagram
        self.panel = panel or StepPanel()
        self.manual_step_duration_ms = manual_step_duration_ms
        self.pause_poll_interval = pause_poll_interval
        self.dash_interval = dash_interval

        self.selected_flow = 0
        self.current_step = 0

        self._playing = False
        self._paused = False
        self._stepping = False
        self._highlight_token = 0
        self._autoplay_task: asyncio.Task | None = None
        self._manual_task: asyncio.Task | None = None
        self._edge_task: asyncio.Task | None = None
        self._listeners: list[Listener] = []

        if artifact.flows:
            self.panel.load(artifact.flows[0])

    # -- state -------------------------------------------------------------

    @property
    def state(self) -> AnimationState:
        if self._stepping:
            return AnimationState.STEPPING
        if self._playing:
            return AnimationState.PAUSED if self._paused else AnimationState.PLAYING
        return AnimationState.IDLE

    @property
    def flow(self) -> Flow | None:
        if not self.artifact.flows:
            return None
        return self.artifact.flows[self.selected_flow]

    @property
    def step_count(self) -> int:
        return len(self.flow.steps) if self.flow else 0

    def add_listener(self, listener: Listener) -> None:
        """Call ``listener(engine)`` after every visible change."""
        self._listeners.append(listener)

    # -- commands ----------------------------------------------------------

    def start(self) -> None:
        """Play the selected flow from step 1."""
        flow = self._require_steps()
        self._halt()
        self._playing = True
        logger.info(f"Playing flow '{flow.name}' ({len(flow.steps)} steps)")
        self._notify()
        self._autoplay_task = asyncio.create_task(self._autoplay(flow))

    def toggle_pause(self) -> AnimationState:
        """Pause or resume autoplay. Does nothing unless autoplay is running."""
        if not self._playing:
            return self.state
        if self._paused:
            # Resuming ends a manual step taken while paused.
            self._cancel_manual()
        self._paused = not self._paused
        self._notify()
        return self.state

    def stop(self) -> None:
        """Return to idle with no highlights. Safe to call repeatedly."""
        self._halt()
        self._notify()

    def step_forward(self) -> None:
        self._step_to(self.current_step + 1)

    def step_back(self) -> None:
        self._step_to(self.current_step - 1)

    def select_flow(self, index: int) -> None:
        """Switch flows; anything in progress is stopped."""
        if not 0 <= index < len(self.artifact.flows):
            raise AnimationError(f"No flow at index {index}")
        self._halt()
        self.selected_flow = index
        self.panel.load(self.artifact.flows[index])
        self._notify()

    async def wait(self) -> None:
        """Wait until autoplay and any manual step have finished."""
        while True:
            pending = [
                task
                for task in (self._autoplay_task, self._manual_task)
                if task is not None and not task.done()
            ]
            if not pending:
                return
            await asyncio.wait(pending)

    # -- internals ---------------------------------------------------------

    def _require_steps(self) -> Flow:
        flow = self.flow
        if flow is None or not flow.steps:
            raise AnimationError("Selected flow has no steps")
        return flow

    def _notify(self) -> None:
        self.panel.update(self.current_step, self.state != AnimationState.IDLE)
        for listener in self._listeners:
            listener(self)

    def _clear(self) -> None:
        self._highlight_token += 1
        if self._edge_task is not None:
            self._edge_task.cancel()
            self._edge_task = None
        self.diagram.clear_highlights()

    def _release(self, token: int) -> None:
        """Clear highlights only if they still belong to ``token``."""
        if token == self._highlight_token:
            self._clear()

    def _cancel_manual(self) -> None:
        if self._manual_task is not None:
            self._manual_task.cancel()
            self._manual_task = None
        self._stepping = False

    def _halt(self) -> None:
        if self._autoplay_task is not None:
            self._autoplay_task.cancel()
            self._autoplay_task = None
        self._cancel_manual()
        self._playing = False
        self._paused = False
        self.current_step = 0
        self._clear()

    def _show_step(self, flow: Flow, number: int) -> int:
        """Highlight step ``number`` and return its token."""
        step = flow.steps[number - 1]
        self.current_step = number
        self.panel.scroll_to(number)
        self._clear()
        token = self._highlight_token

        node = self.diagram.find_node(step.node)
        if node is None:
            logger.warning(f"Node not found for step {number}: {step.node!r}")
        else:
            node.emphasize()

        edge = self.diagram.edge_at(number - 1)
        if edge is not None:
            edge.emphasize()
            self._edge_task = asyncio.create_task(self._march(edge, token))

        self._notify()
        return token

    def _step_to(self, target: int) -> None:
        flow = self._require_steps()
        if self._playing and not self._paused:
            self._paused = True
        self._cancel_manual()

        number = max(1, min(target, len(flow.steps)))
        token = self._show_step(flow, number)
        self._stepping = True
        self._notify()
        self._manual_task = asyncio.create_task(self._manual_dwell(token))

    async def _march(self, edge: RenderedEdge, token: int) -> None:
        while token == self._highlight_token:
            await asyncio.sleep(self.dash_interval)
            if token == self._highlight_token and self.state is not AnimationState.PAUSED:
                edge.advance_dash()

    async def _dwell(self, seconds: float, token: int) -> None:
        """Sleep for ``seconds`` of unpaused time, or until superseded."""
        if seconds <= 0:
            await asyncio.sleep(0)
            return

        loop = asyncio.get_running_loop()
        remaining = seconds
        while remaining > 0 and token == self._highlight_token:
            if self._paused:
                await asyncio.sleep(self.pause_poll_interval)
                continue
            started = loop.time()
            await asyncio.sleep(min(remaining, self.pause_poll_interval))
            remaining -= loop.time() - started

    async def _autoplay(self, flow: Flow) -> None:
        while True:
            while self._paused:
                await asyncio.sleep(self.pause_poll_interval)

            number = self.current_step + 1
            if number > len(flow.steps):
                break

            token = self._show_step(flow, number)
            await self._dwell(flow.steps[number - 1].duration / 1000, token)
            self._release(token)

        self._autoplay_task = None
        self._playing = False
        self._paused = False
        self.current_step = 0
        self._clear()
        logger.info(f"Finished flow '{flow.name}'")
        self._notify()

    async def _manual_dwell(self, token: int) -> None:
        try:
            await asyncio.sleep(self.manual_step_duration_ms / 1000)
        finally:
            self._release(token)
            if self._manual_task is asyncio.current_task():
                self._manual_task = None
                self._stepping = False
                self._notify()
