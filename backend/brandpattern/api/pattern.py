"""/api/pattern: generate the layout and export it as PNG or SVG."""

from __future__ import annotations

import random

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from brandpattern.api.errors import to_http
from brandpattern.config import Settings
from brandpattern.dependencies import get_session, get_settings
from brandpattern.errors import PatternError
from brandpattern.layout.engine import grid_for
from brandpattern.models.requests import GenerateRequest
from brandpattern.models.responses import PatternResponse, PlacementOut
from brandpattern.session import PatternSession, export_filename

router = APIRouter(prefix="/pattern")


def _pattern_response(session: PatternSession) -> PatternResponse:
    options = session.pattern_options
    grid = grid_for(options.shape_count, options.canvas_size)
    return PatternResponse(
        generation=session.generation,
        options=options,
        grid_size=grid.grid_size,
        cell_size=grid.cell_size,
        placements=[PlacementOut.from_placement(p) for p in session.placements],
    )


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.post("", response_model=PatternResponse)
async def generate(
    req: GenerateRequest | None = None,
    session: PatternSession = Depends(get_session),
) -> PatternResponse:
    req = req or GenerateRequest()
    rng = random.Random(req.seed) if req.seed is not None else None
    try:
        session.generate(options=req.options, rng=rng)
    except PatternError as e:
        raise to_http(e) from e
    return _pattern_response(session)


@router.get("", response_model=PatternResponse)
async def current_pattern(session: PatternSession = Depends(get_session)) -> PatternResponse:
    try:
        return _pattern_response(session)
    except PatternError as e:
        raise to_http(e) from e


@router.get("/preview.png")
async def preview_png(session: PatternSession = Depends(get_session)) -> Response:
    try:
        result = await session.render_preview()
    except PatternError as e:
        raise to_http(e) from e
    return Response(content=result.png(), media_type="image/png")


@router.get("/export.png")
async def export_png(
    size: int | None = Query(default=None, ge=1, description="Output side length; defaults to the canvas size"),
    session: PatternSession = Depends(get_session),
    cfg: Settings = Depends(get_settings),
) -> Response:
    try:
        cached = session.latest_raster
        if size is None and cached is not None and cached.generation == session.generation:
            result = cached
        else:
            result = await session.render_png(size)
    except PatternError as e:
        raise to_http(e) from e
    return Response(
        content=result.png(),
        media_type="image/png",
        headers=_attachment(export_filename("png", cfg.export_prefix)),
    )


@router.get("/export.svg")
async def export_svg(
    size: int | None = Query(default=None, ge=1, description="Output side length; defaults to the canvas size"),
    session: PatternSession = Depends(get_session),
    cfg: Settings = Depends(get_settings),
) -> Response:
    try:
        result = session.render_svg(size)
    except PatternError as e:
        raise to_http(e) from e
    headers = _attachment(export_filename("svg", cfg.export_prefix))
    if result.warnings:
        headers["X-Pattern-Warnings"] = str(len(result.warnings))
    return Response(content=result.markup, media_type="image/svg+xml", headers=headers)
