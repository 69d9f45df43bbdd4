"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from brandpattern.config import Settings, settings
from brandpattern.models.pattern import PatternOptions
from brandpattern.session import PatternSession


def get_settings() -> Settings:
    return settings


def build_session(cfg: Settings) -> PatternSession:
    options = PatternOptions(
        shape_count=cfg.default_shape_count,
        offset_intensity=cfg.default_offset_intensity,
        enable_rotation=cfg.default_enable_rotation,
        canvas_size=cfg.default_canvas_size,
    )
    return PatternSession(options=options, preview_size=cfg.preview_size)


@lru_cache(maxsize=1)
def get_session() -> PatternSession:
    """Process-wide session shared by every request."""
    return build_session(settings)
