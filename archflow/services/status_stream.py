"""
Status stream: relays analysis job status to one subscriber as SSE events.

The status store has no change notifications, so the stream polls it:
immediately, then once per interval, until the job completes, fails, is
unknown, or the subscriber goes away. Every poll emits a ``status`` event
(duplicates are fine, clients treat status as idempotent).
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Literal

from archflow.services.job_store import JobStore

logger = logging.getLogger(__name__)

EventType = Literal["status", "complete", "error"]

JOB_NOT_FOUND = "Analysis job not found"
JOB_FAILED = "Analysis failed"
POLL_FAILED = "Error checking analysis status"

SSE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable buffering on nginx
}


@dataclass(frozen=True)
class StreamEvent:
    event: EventType
    data: dict[str, Any]

    @property
    def is_terminal(self) -> bool:
        return self.event != "status"


def format_sse(event: StreamEvent) -> str:
    """Encode an event in text/event-stream framing."""
    return f"event: {event.event}\ndata: {json.dumps(event.data, ensure_ascii=False)}\n\n"


async def _never_disconnected() -> bool:
    return False


class StatusStream:
    """Poll a job's status and yield stream events until a terminal one."""

    def __init__(self, job_store: JobStore, poll_interval: float = 1.0) -> None:
        self.job_store = job_store
        self.poll_interval = poll_interval

    async def _poll(self, job_id: str) -> list[StreamEvent]:
        """Read the job once and translate it into events."""
        try:
            job = await self.job_store.get_job(job_id)
        except Exception:
            logger.exception(f"Error polling analysis job {job_id}")
            return [StreamEvent("error", {"message": POLL_FAILED})]

        if job is None:
            return [StreamEvent("error", {"message": JOB_NOT_FOUND})]

        events = [StreamEvent("status", job.status.to_wire())]

        if job.status.phase == "complete" and job.result is not None:
            events.append(StreamEvent("complete", job.result.to_wire()))
        elif job.status.phase == "error":
            events.append(StreamEvent("error", {"message": job.status.error or JOB_FAILED}))

        return events

    async def events(
        self,
        job_id: str,
        is_disconnected: Callable[[], Awaitable[bool]] = _never_disconnected,
    ) -> AsyncIterator[StreamEvent]:
        """
        Yield events for ``job_id`` until a terminal event or disconnect.

        Args:
            job_id: Analysis job to follow
            is_disconnected: Checked before every poll; True stops the stream
        """
        logger.info(f"Status stream opened for job {job_id}")
        try:
            while True:
                if await is_disconnected():
                    logger.info(f"Subscriber disconnected from job {job_id}")
                    return

                for event in await self._poll(job_id):
                    yield event
                    if event.is_terminal:
                        return

                await asyncio.sleep(self.poll_interval)
        finally:
            logger.info(f"Status stream closed for job {job_id}")

    async def sse(
        self,
        job_id: str,
        is_disconnected: Callable[[], Awaitable[bool]] = _never_disconnected,
    ) -> AsyncIterator[str]:
        """Same as ``events`` but already encoded for the wire."""
        async for event in self.events(job_id, is_disconnected):
            yield format_sse(event)
