# Services package

from archflow.services.analysis_orchestrator import AnalysisOrchestrator, run_analysis_task
from archflow.services.analyzer import ArchitectureAnalyzer
from archflow.services.diagram_renderer import DiagramRenderer, DiagramRenderError
from archflow.services.job_store import JobStore
from archflow.services.result_store import ResultStore
from archflow.services.status_stream import StatusStream, StreamEvent, format_sse

__all__ = [
    # Analysis workflow
    "AnalysisOrchestrator",
    "ArchitectureAnalyzer",
    "run_analysis_task",
    # Stores
    "JobStore",
    "ResultStore",
    # Streaming
    "StatusStream",
    "StreamEvent",
    "format_sse",
    # Rendering
    "DiagramRenderer",
    "DiagramRenderError",
]
