"""Map pattern errors to HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException

from brandpattern.errors import (
    EmptyAssetPool,
    NoPatternGenerated,
    PatternError,
    RenderDecodeFailure,
    StaleRender,
    UnknownAsset,
)

_STATUS: dict[type[PatternError], int] = {
    EmptyAssetPool: 409,
    NoPatternGenerated: 409,
    StaleRender: 409,
    UnknownAsset: 404,
    RenderDecodeFailure: 422,
}


def to_http(exc: PatternError) -> HTTPException:
    for cls in type(exc).__mro__:
        if cls in _STATUS:
            return HTTPException(status_code=_STATUS[cls], detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))
