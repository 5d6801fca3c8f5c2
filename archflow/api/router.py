from fastapi import APIRouter

from archflow.api.v1 import analysis, analyze, stream

api_router = APIRouter(prefix="/api")

api_router.include_router(analyze.router)
api_router.include_router(stream.router)
api_router.include_router(analysis.router)
