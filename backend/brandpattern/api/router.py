"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from brandpattern.api import assets, health, options, pattern

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(assets.router)
api_router.include_router(options.router)
api_router.include_router(pattern.router)
