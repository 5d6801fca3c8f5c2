import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from archflow.api.router import api_router
from archflow.config import settings
from archflow.services import (
    AnalysisOrchestrator,
    ArchitectureAnalyzer,
    DiagramRenderer,
    JobStore,
    ResultStore,
    StatusStream,
)
from archflow.services.github import close_github_client
from archflow.services.storage import build_stores


def setup_logging() -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)

    # Quieten uvicorn access logs (we'll log requests ourselves)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: build services on startup, release clients on shutdown."""
    setup_logging()
    logger.info("Arch Flow API starting up")
    if settings.mock_mode:
        logger.info("No GitHub or Anthropic credentials configured - running in mock mode")

    kv, blobs = build_stores(settings)
    job_store = JobStore(kv, ttl_seconds=settings.job_ttl_seconds)
    result_store = ResultStore(kv, blobs, metadata_ttl_seconds=settings.cache_ttl_seconds)

    app.state.job_store = job_store
    app.state.result_store = result_store
    app.state.status_stream = StatusStream(job_store, poll_interval=settings.stream_poll_interval)
    app.state.orchestrator = AnalysisOrchestrator(job_store, result_store, ArchitectureAnalyzer())
    app.state.renderer = DiagramRenderer()
    yield
    # Shutdown
    await app.state.renderer.aclose()
    await close_github_client()
    if hasattr(kv, "aclose"):
        await kv.aclose()
    logger.info("Arch Flow API shutting down")


app = FastAPI(
    title="Arch Flow API",
    description="Animated architecture diagrams for GitHub repositories",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests, skipping OPTIONS preflight."""
    # Skip OPTIONS (CORS preflight) and health checks
    if request.method == "OPTIONS" or request.url.path == "/health":
        return await call_next(request)

    response = await call_next(request)

    # Only log non-2xx or important endpoints
    path = request.url.path
    if response.status_code >= 400 or any(keyword in path for keyword in ["analyze", "stream"]):
        logger.info(f"{request.method} {path} -> {response.status_code}")

    return response


# Include API routes
app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
