"""/api/options: read and adjust generation parameters."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from brandpattern.dependencies import get_session
from brandpattern.models.pattern import PatternOptions
from brandpattern.models.requests import OptionsUpdateRequest
from brandpattern.session import PatternSession

router = APIRouter(prefix="/options")


@router.get("", response_model=PatternOptions)
async def get_options(session: PatternSession = Depends(get_session)) -> PatternOptions:
    return session.options


@router.put("", response_model=PatternOptions)
async def update_options(req: OptionsUpdateRequest, session: PatternSession = Depends(get_session)) -> PatternOptions:
    return session.update_options(**req.model_dump(exclude_none=True))
