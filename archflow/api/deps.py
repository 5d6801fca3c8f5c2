"""
Request dependencies.

Services are built once in the application lifespan and kept on
``app.state``; routes receive them through these providers so tests can swap
them with ``app.dependency_overrides``.
"""

from fastapi import Request

from archflow.services import (
    AnalysisOrchestrator,
    DiagramRenderer,
    JobStore,
    ResultStore,
    StatusStream,
)


def get_job_store(request: Request) -> JobStore:
    return request.app.state.job_store


def get_result_store(request: Request) -> ResultStore:
    return request.app.state.result_store


def get_status_stream(request: Request) -> StatusStream:
    return request.app.state.status_stream


def get_orchestrator(request: Request) -> AnalysisOrchestrator:
    return request.app.state.orchestrator


def get_renderer(request: Request) -> DiagramRenderer:
    return request.app.state.renderer
