"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from vanish.api import health, history, sessions

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(history.router)
api_router.include_router(sessions.router)
