"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from vanish import __version__
from vanish.config import settings
from vanish.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        model=settings.inpaint_model,
    )

