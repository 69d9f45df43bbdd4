"""Asset normalizer: uploaded SVG / PNG content to ShapeAsset.

Each upload in a batch is processed to completion before the next one
starts. Failures are isolated per file: the file is reported and skipped,
the rest of the batch still lands in the pool.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from PIL import Image

from brandpattern.assets.dimensions import image_dimensions, svg_dimensions
from brandpattern.assets.payload import to_data_uri
from brandpattern.errors import AssetDecodeFailure, PatternError, UnsupportedAssetKind
from brandpattern.models.pattern import AssetKind, ShapeAsset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    """Raw upload as handed over by the UI layer."""

    name: str
    media_type: str
    content: bytes


@dataclass(frozen=True)
class NormalizationFailure:
    file_name: str
    error: str  # exception class name, e.g. "UnsupportedAssetKind"
    message: str


@dataclass
class NormalizationReport:
    assets: list[ShapeAsset] = field(default_factory=list)
    failures: list[NormalizationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def asset_kind_for(media_type: str) -> AssetKind | None:
    """Map a declared media type to an asset kind, None if unsupported."""
    mt = (media_type or "").lower()
    if "svg" in mt:
        return AssetKind.VECTOR
    if "png" in mt:
        return AssetKind.RASTER
    return None


def _asset_id(stamp: int, index: int) -> str:
    return f"shape-{stamp}-{index}"


async def normalize_upload(upload: UploadedFile, index: int, stamp: int | None = None) -> ShapeAsset:
    """Normalize one upload.

    Raises UnsupportedAssetKind or AssetDecodeFailure.
    """
    kind = asset_kind_for(upload.media_type)
    if kind is None:
        raise UnsupportedAssetKind(upload.name, upload.media_type)
    if stamp is None:
        stamp = time.time_ns()

    if kind is AssetKind.VECTOR:
        try:
            markup = upload.content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise AssetDecodeFailure(upload.name, str(e)) from e
        width, height = svg_dimensions(markup)
        payload = markup
    else:
        loop = asyncio.get_running_loop()
        try:
            px_w, px_h = await loop.run_in_executor(None, image_dimensions, upload.content)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise AssetDecodeFailure(upload.name, str(e)) from e
        width, height = float(px_w), float(px_h)
        payload = to_data_uri(upload.content, "image/png")

    logger.debug("Normalized %s as %s %.1fx%.1f", upload.name, kind.value, width, height)
    return ShapeAsset(
        id=_asset_id(stamp, index),
        kind=kind,
        payload=payload,
        width=width,
        height=height,
        name=upload.name,
        media_type=upload.media_type,
    )


async def normalize_batch(uploads: Sequence[UploadedFile]) -> NormalizationReport:
    """Normalize a batch of uploads sequentially, preserving batch order."""
    stamp = time.time_ns()
    report = NormalizationReport()

    for index, upload in enumerate(uploads):
        try:
            asset = await normalize_upload(upload, index, stamp)
        except PatternError as e:
            logger.warning("Skipping %s: %s", upload.name, e)
            report.failures.append(
                NormalizationFailure(file_name=upload.name, error=type(e).__name__, message=str(e))
            )
            continue
        report.assets.append(asset)

    logger.info(
        "Normalized batch: %d assets, %d failures",
        len(report.assets),
        len(report.failures),
    )
    return report
