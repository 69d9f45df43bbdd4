"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from brandpattern.assets.payload import to_data_uri
from brandpattern.models.pattern import AssetKind, PatternOptions, ShapeAsset


SQUARE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 50 50">
  <rect x="0" y="0" width="50" height="50" fill="#ff0000"/>
</svg>'''

ICON_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
  <path d="M8 14s1.5 2 4 2 4-2 4-2"/>
</svg>'''

WIDE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="240px" height="120px">
  <ellipse cx="120" cy="60" rx="110" ry="50" fill="#4ECDC4"/>
</svg>'''

BARE_SVG = '<svg xmlns="http://www.w3.org/2000/svg"><circle cx="50" cy="50" r="40"/></svg>'

MALFORMED_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"><rect width="10" height="10"</svg>'


def png_bytes(width: int, height: int, color: tuple[int, int, int, int] = (255, 0, 0, 255)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def split_png_bytes(width: int, height: int) -> bytes:
    """Left half red, right half blue."""
    img = Image.new("RGBA", (width, height), (0, 0, 255, 255))
    img.paste((255, 0, 0, 255), (0, 0, width // 2, height))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def raster_asset(asset_id: str = "png-1", width: int = 20, height: int = 10, content: bytes | None = None) -> ShapeAsset:
    if content is None:
        content = png_bytes(width, height)
    return ShapeAsset(
        id=asset_id,
        kind=AssetKind.RASTER,
        payload=to_data_uri(content),
        width=float(width),
        height=float(height),
        name=f"{asset_id}.png",
        media_type="image/png",
    )


def vector_asset(asset_id: str = "svg-1", markup: str = SQUARE_SVG, width: float = 50.0, height: float = 50.0) -> ShapeAsset:
    return ShapeAsset(
        id=asset_id,
        kind=AssetKind.VECTOR,
        payload=markup,
        width=width,
        height=height,
        name=f"{asset_id}.svg",
        media_type="image/svg+xml",
    )


@pytest.fixture
def png_asset() -> ShapeAsset:
    return raster_asset()


@pytest.fixture
def svg_asset() -> ShapeAsset:
    return vector_asset()


@pytest.fixture
def scenario_a_options() -> PatternOptions:
    return PatternOptions(shape_count=4, offset_intensity=0.0, enable_rotation=False, canvas_size=400)
