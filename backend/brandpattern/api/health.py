"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from brandpattern import __version__
from brandpattern.dependencies import get_session
from brandpattern.models.responses import HealthResponse
from brandpattern.session import PatternSession

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(session: PatternSession = Depends(get_session)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        assets=len(session.assets),
        generation=session.generation,
    )
