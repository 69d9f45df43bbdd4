"""Raster renderer: draws a placement sequence into a Pillow RGBA image.

Every distinct asset is decoded once (PNG via Pillow, SVG via cairosvg),
then placements are composited back-to-front in sequence order. A decode
failure aborts the whole render; no partially drawn pattern is returned.
"""

from __future__ import annotations

import asyncio
import io
import logging
import math
import time
from collections.abc import Sequence

import cairosvg
import numpy as np
from numpy.typing import NDArray
from PIL import Image

from brandpattern.assets.payload import from_data_uri
from brandpattern.errors import RenderDecodeFailure
from brandpattern.models.pattern import PlacedShape, ShapeAsset
from brandpattern.render.transform import placement_transform, scale_matrix, translate_matrix

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255, 255)

# Vector assets are rasterized at this multiple of their largest on-canvas
# size before being resampled into place.
VECTOR_SUPERSAMPLE = 2.0


def new_canvas(size: int) -> Image.Image:
    return Image.new("RGBA", (size, size), WHITE)


def _decode_raster(asset: ShapeAsset) -> Image.Image:
    data = from_data_uri(asset.payload)
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        return img.convert("RGBA")


def _decode_vector(asset: ShapeAsset, pixel_scale: float) -> Image.Image:
    out_w = max(1, math.ceil(asset.width * pixel_scale))
    out_h = max(1, math.ceil(asset.height * pixel_scale))
    png = cairosvg.svg2png(
        bytestring=asset.payload.encode("utf-8"),
        output_width=out_w,
        output_height=out_h,
    )
    with Image.open(io.BytesIO(png)) as img:
        img.load()
        return img.convert("RGBA")


def decode_asset(asset: ShapeAsset, pixel_scale: float = 1.0) -> Image.Image:
    """Decode an asset payload to RGBA pixels.

    ``pixel_scale`` is the number of output pixels per intrinsic unit used
    for vector assets; raster assets keep their native pixels.

    Raises RenderDecodeFailure.
    """
    try:
        if asset.is_vector:
            return _decode_vector(asset, pixel_scale)
        return _decode_raster(asset)
    except Exception as e:
        raise RenderDecodeFailure(asset.name or asset.id, str(e)) from e


def _pixel_scales(placements: Sequence[PlacedShape], scene_scale: float) -> dict[str, tuple[ShapeAsset, float]]:
    """Distinct assets (first-use order) with the largest on-canvas scale each one needs."""
    scales: dict[str, tuple[ShapeAsset, float]] = {}
    for p in placements:
        needed = p.scale * scene_scale * VECTOR_SUPERSAMPLE
        known = scales.get(p.asset.id)
        if known is None or needed > known[1]:
            scales[p.asset.id] = (p.asset, needed)
    return scales


async def decode_assets(
    placements: Sequence[PlacedShape],
    scene_scale: float = 1.0,
) -> dict[str, Image.Image]:
    """Decode each distinct asset of the sequence exactly once, one at a time."""
    loop = asyncio.get_running_loop()
    cache: dict[str, Image.Image] = {}
    for asset_id, (asset, pixel_scale) in _pixel_scales(placements, scene_scale).items():
        t0 = time.perf_counter()
        cache[asset_id] = await loop.run_in_executor(None, decode_asset, asset, pixel_scale)
        logger.debug("Decoded %s in %.1fms", asset_id, (time.perf_counter() - t0) * 1000)
    return cache


def _composite(canvas: Image.Image, source: Image.Image, matrix: NDArray[np.float64]) -> None:
    """Alpha-composite ``source`` onto ``canvas`` through a source-px -> canvas-px affine matrix."""
    sw, sh = source.size
    corners = matrix @ np.array([[0, sw, sw, 0], [0, 0, sh, sh], [1, 1, 1, 1]], dtype=np.float64)
    cw, ch = canvas.size
    left = max(0, math.floor(corners[0].min()))
    top = max(0, math.floor(corners[1].min()))
    right = min(cw, math.ceil(corners[0].max()))
    bottom = min(ch, math.ceil(corners[1].max()))
    if right <= left or bottom <= top:
        return

    # Image.transform wants the inverse mapping: patch pixel -> source pixel.
    inverse = np.linalg.inv(translate_matrix(-left, -top) @ matrix)
    data = tuple(float(v) for v in inverse[:2].ravel())

    patch = source.transform(
        (right - left, bottom - top),
        Image.Transform.AFFINE,
        data,
        resample=Image.Resampling.BICUBIC,
    )
    canvas.alpha_composite(patch, dest=(left, top))


def draw_placements(
    canvas: Image.Image,
    placements: Sequence[PlacedShape],
    decoded: dict[str, Image.Image],
    scene_scale: float = 1.0,
) -> None:
    """Draw already-decoded placements, in order, onto ``canvas``."""
    scene = scale_matrix(scene_scale)
    for p in placements:
        source = decoded[p.asset.id]
        sw, sh = source.size
        # source pixels -> asset units -> canvas units -> output pixels
        to_local = scale_matrix(p.asset.width / sw, p.asset.height / sh)
        _composite(canvas, source, scene @ placement_transform(p).matrix() @ to_local)


async def render_raster(
    placements: Sequence[PlacedShape],
    target_size: int,
    canvas_size: float | None = None,
    image: Image.Image | None = None,
) -> Image.Image:
    """Render the placement sequence into a ``target_size`` square RGBA image.

    Placements are in units of a ``canvas_size`` square (defaults to
    ``target_size``); the scene is scaled uniformly to fit. When ``image``
    is given it is cleared to white and drawn into in place.

    Raises RenderDecodeFailure if any asset fails to decode; ``image`` is
    left untouched in that case.
    """
    if image is None:
        image = new_canvas(target_size)
    elif image.size != (target_size, target_size) or image.mode != "RGBA":
        raise ValueError(f"target image must be RGBA {target_size}x{target_size}, got {image.mode} {image.size}")

    scene_scale = target_size / (canvas_size or target_size)
    start = time.perf_counter()

    decoded = await decode_assets(placements, scene_scale)

    image.paste(WHITE, (0, 0, target_size, target_size))
    draw_placements(image, placements, decoded, scene_scale)

    logger.info(
        "Raster render: %d placements, %d distinct assets, %dpx in %.0fms",
        len(placements),
        len(decoded),
        target_size,
        (time.perf_counter() - start) * 1000,
    )
    return image


def encode_png(image: Image.Image) -> bytes:
    """Encode a rendered pattern as an opaque PNG."""
    buf = io.BytesIO()
    image.convert("RGB").save(buf, format="PNG", optimize=True)
    return buf.getvalue()
