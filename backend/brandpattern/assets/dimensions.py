"""Intrinsic dimension resolution for SVG markup and PNG images."""

from __future__ import annotations

import io
import math
import re

from PIL import Image

from brandpattern.models.pattern import DEFAULT_ASSET_SIZE


# First <svg ...> start tag; dimensions come from the root element only.
_SVG_TAG_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE | re.DOTALL)
_VIEWBOX_RE = re.compile(r"""\bviewBox\s*=\s*["']([^"']*)["']""")
_WIDTH_RE = re.compile(r"""(?<![\w-])width\s*=\s*["']([^"']*)["']""")
_HEIGHT_RE = re.compile(r"""(?<![\w-])height\s*=\s*["']([^"']*)["']""")
_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_length(value: str | None) -> float | None:
    """Leading numeric part of an SVG length ("24px" -> 24.0), None if absent."""
    if not value:
        return None
    match = _LEADING_NUMBER_RE.match(value)
    if not match:
        return None
    return float(match.group(1))


def parse_viewbox(value: str | None) -> tuple[float, float, float, float] | None:
    """Split a viewBox attribute into four floats, None unless it has four parts."""
    if not value:
        return None
    parts = [p for p in re.split(r"[\s,]+", value.strip()) if p]
    if len(parts) != 4:
        return None
    numbers = [_to_float(p) for p in parts]
    if any(n is None for n in numbers):
        return None
    return (numbers[0], numbers[1], numbers[2], numbers[3])


def _to_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def _positive_or_default(value: float | None) -> float:
    if value is None or not math.isfinite(value) or value <= 0:
        return DEFAULT_ASSET_SIZE
    return value


def svg_dimensions(markup: str) -> tuple[float, float]:
    """Resolve (width, height) of an SVG document.

    Priority: viewBox third/fourth components, then width/height attributes,
    then 100x100. Missing or zero components fall back to 100 individually.
    """
    tag = _SVG_TAG_RE.search(markup)
    if not tag:
        return DEFAULT_ASSET_SIZE, DEFAULT_ASSET_SIZE
    root = tag.group(0)

    vb_match = _VIEWBOX_RE.search(root)
    if vb_match and vb_match.group(1).strip():
        parts = [p for p in re.split(r"[\s,]+", vb_match.group(1).strip()) if p]
        width = _to_float(parts[2]) if len(parts) > 2 else None
        height = _to_float(parts[3]) if len(parts) > 3 else None
        return _positive_or_default(width), _positive_or_default(height)

    w_match = _WIDTH_RE.search(root)
    h_match = _HEIGHT_RE.search(root)
    width = parse_length(w_match.group(1)) if w_match else None
    height = parse_length(h_match.group(1)) if h_match else None
    return _positive_or_default(width), _positive_or_default(height)


def image_dimensions(content: bytes) -> tuple[int, int]:
    """Decode an encoded image and return its natural pixel size.

    Raises OSError / ValueError (from Pillow) when the bytes are not a
    decodable image, and Image.DecompressionBombError past Pillow's pixel
    limit.
    """
    with Image.open(io.BytesIO(content)) as img:
        img.load()
        return img.size
