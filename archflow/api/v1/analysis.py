"""Cached analysis artifacts: read, render, invalidate."""

import logging

from fastapi import APIRouter, Depends, Response, status

from archflow.api.deps import get_renderer, get_result_store
from archflow.core.exceptions import NotFoundError, UpstreamError, ValidationError
from archflow.schemas import AnalysisArtifact, RepoRef
from archflow.services import DiagramRenderer, DiagramRenderError, ResultStore
from archflow.services.github import RepoRefError, validate_repo_url
from archflow.services.storage import StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


def _repo(owner: str, name: str) -> RepoRef:
    try:
        return validate_repo_url(f"{owner}/{name}")
    except RepoRefError as e:
        raise ValidationError(str(e)) from e


@router.get(
    "/{owner}/{name}",
    response_model=AnalysisArtifact,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def get_analysis(
    owner: str,
    name: str,
    result_store: ResultStore = Depends(get_result_store),
) -> AnalysisArtifact:
    """Get the cached analysis for a repository."""
    analysis = await result_store.get_analysis(_repo(owner, name))
    if analysis is None:
        raise NotFoundError("Analysis")
    return analysis


@router.get("/{owner}/{name}/diagram.svg")
async def get_diagram_svg(
    owner: str,
    name: str,
    result_store: ResultStore = Depends(get_result_store),
    renderer: DiagramRenderer = Depends(get_renderer),
) -> Response:
    """Render the cached analysis diagram to SVG."""
    analysis = await result_store.get_analysis(_repo(owner, name))
    if analysis is None:
        raise NotFoundError("Analysis")

    try:
        svg = await renderer.render_svg(analysis.diagram)
    except DiagramRenderError as e:
        logger.error(f"Failed to render diagram for {owner}/{name}: {e}")
        raise UpstreamError("Failed to render diagram") from e

    return Response(content=svg, media_type="image/svg+xml")


@router.delete("/{owner}/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def invalidate_analysis(
    owner: str,
    name: str,
    result_store: ResultStore = Depends(get_result_store),
) -> None:
    """Drop the cached analysis so the next request re-analyzes."""
    try:
        await result_store.invalidate(_repo(owner, name))
    except StorageError as e:
        logger.error(f"Failed to invalidate analysis for {owner}/{name}: {e}")
        raise UpstreamError("Failed to invalidate cached analysis") from e
