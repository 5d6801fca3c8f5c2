"""Analysis job creation: return a cached artifact or start a background job."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from archflow.api.deps import get_job_store, get_orchestrator, get_result_store
from archflow.core.exceptions import ValidationError
from archflow.schemas import AnalyzeRequest, AnalyzeResponse
from archflow.services import AnalysisOrchestrator, JobStore, ResultStore, run_analysis_task
from archflow.services.github import RepoRefError, validate_repo_url
from archflow.services.storage import StorageError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def analyze_repository(
    data: AnalyzeRequest,
    background_tasks: BackgroundTasks,
    job_store: JobStore = Depends(get_job_store),
    result_store: ResultStore = Depends(get_result_store),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> AnalyzeResponse:
    """
    Start an architecture analysis of a GitHub repository.

    If the repository was analyzed before, the cached artifact is returned
    directly. Otherwise a job is created and runs in the background; follow
    it with GET /api/stream/{analysisId}.
    """
    if not data.owner or not data.name:
        raise ValidationError("Missing owner or name")

    try:
        repo = validate_repo_url(f"{data.owner}/{data.name}")
    except RepoRefError as e:
        raise ValidationError(str(e)) from e
    repo.branch = data.branch

    if await result_store.has_analysis(repo):
        cached = await result_store.get_analysis(repo)
        if cached is not None:
            logger.info(f"Returning cached analysis for {repo.key}")
            return AnalyzeResponse(cached=True, analysis=cached, message="Returning cached analysis")

    try:
        job_id = await job_store.create_job(repo)
    except StorageError as e:
        logger.error(f"Failed to create analysis job for {repo.key}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to start analysis",
        ) from e

    background_tasks.add_task(run_analysis_task, orchestrator, job_id, repo)

    logger.info(f"Analysis triggered for {repo.key} (ID: {job_id})")
    return AnalyzeResponse(analysis_id=job_id, message="Analysis started")
