"""Server-sent event stream of an analysis job's status."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from archflow.api.deps import get_status_stream
from archflow.services import StatusStream
from archflow.services.status_stream import SSE_HEADERS

router = APIRouter(tags=["analysis"])


@router.get("/stream/{analysis_id}")
async def stream_analysis(
    analysis_id: str,
    request: Request,
    status_stream: StatusStream = Depends(get_status_stream),
) -> StreamingResponse:
    """
    Follow an analysis job.

    Emits ``status`` events until a ``complete`` event (carrying the
    artifact) or an ``error`` event ends the stream.
    """
    return StreamingResponse(
        status_stream.sse(analysis_id, request.is_disconnected),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
