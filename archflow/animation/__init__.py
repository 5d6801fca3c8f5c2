"""
Step-by-step animation of analysis flows over a rendered diagram.
"""

from archflow.animation.engine import (
    DASH_INTERVAL,
    MANUAL_STEP_DURATION_MS,
    PAUSE_POLL_INTERVAL,
    AnimationEngine,
    AnimationError,
    AnimationState,
)
from archflow.animation.matching import label_matches, normalize_label, strip_emoji
from archflow.animation.panel import StepEntry, StepPanel, StepState
from archflow.animation.svg import RenderedEdge, RenderedNode, SvgDiagram

__all__ = [
    "AnimationEngine",
    "AnimationError",
    "AnimationState",
    "DASH_INTERVAL",
    "MANUAL_STEP_DURATION_MS",
    "PAUSE_POLL_INTERVAL",
    "RenderedEdge",
    "RenderedNode",
    "StepEntry",
    "StepPanel",
    "StepState",
    "SvgDiagram",
    "label_matches",
    "normalize_label",
    "strip_emoji",
]
