"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from phaseboard.api.v1.dependencies (no manual adapter construction).
"""

from fastapi import APIRouter

from phaseboard.api.v1.endpoints import health, phases, tasks

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(phases.router, prefix="/phases", tags=["phases"])
