"""PatternSession: the asset pool, current options and current pattern.

The only mutable state of the service. Layout and vector rendering run
synchronously; normalization and raster rendering await decoding. Every
``generate()`` bumps a generation counter so a raster render that was
started for an older pattern cannot overwrite the result of a newer one.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from PIL import Image

from brandpattern.assets.normalizer import NormalizationReport, UploadedFile, normalize_batch
from brandpattern.errors import EmptyAssetPool, NoPatternGenerated, StaleRender, UnknownAsset
from brandpattern.layout.engine import generate_layout
from brandpattern.models.pattern import PatternOptions, PlacedShape, ShapeAsset
from brandpattern.render.raster import encode_png, render_raster
from brandpattern.render.vector import VectorRender, build_vector_document

logger = logging.getLogger(__name__)


def export_filename(extension: str, prefix: str = "brand-pattern", now: float | None = None) -> str:
    """Timestamped download name, e.g. ``brand-pattern-1718000000000.png``."""
    if now is None:
        now = time.time()
    return f"{prefix}-{int(now * 1000)}.{extension.lstrip('.')}"


@dataclass(frozen=True)
class RasterResult:
    generation: int
    image: Image.Image

    def png(self) -> bytes:
        return encode_png(self.image)


class PatternSession:
    """Holds the asset pool, current options and the latest placement sequence."""

    def __init__(self, options: PatternOptions | None = None, preview_size: int = 400) -> None:
        self._assets: dict[str, ShapeAsset] = {}
        self.options = options or PatternOptions()
        self.preview_size = preview_size
        self._placements: list[PlacedShape] | None = None
        # Options the current placements were laid out with.
        self._pattern_options: PatternOptions | None = None
        self._generation = 0
        self._latest_raster: RasterResult | None = None
        self.last_vector_warnings: list[str] = []

    # -- asset pool -------------------------------------------------------

    @property
    def assets(self) -> list[ShapeAsset]:
        return list(self._assets.values())

    def get_asset(self, asset_id: str) -> ShapeAsset:
        try:
            return self._assets[asset_id]
        except KeyError:
            raise UnknownAsset(asset_id) from None

    def add_assets(self, assets: Sequence[ShapeAsset]) -> None:
        for asset in assets:
            if asset.id in self._assets:
                raise ValueError(f"duplicate asset id {asset.id}")
            self._assets[asset.id] = asset

    async def upload(self, uploads: Sequence[UploadedFile]) -> NormalizationReport:
        """Normalize a batch and append the successful assets to the pool."""
        report = await normalize_batch(uploads)
        self.add_assets(report.assets)
        return report

    def remove_asset(self, asset_id: str) -> ShapeAsset:
        """Drop an asset from the pool; existing placements keep their reference."""
        try:
            asset = self._assets.pop(asset_id)
        except KeyError:
            raise UnknownAsset(asset_id) from None
        logger.info("Removed asset %s (%d left)", asset_id, len(self._assets))
        return asset

    # -- options ----------------------------------------------------------

    def update_options(self, **changes: Any) -> PatternOptions:
        """Apply option changes, validated as a whole; raises pydantic.ValidationError."""
        self.options = PatternOptions.model_validate({**self.options.model_dump(), **changes})
        return self.options

    # -- generation -------------------------------------------------------

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def placements(self) -> list[PlacedShape]:
        if self._placements is None:
            raise NoPatternGenerated()
        return self._placements

    @property
    def pattern_options(self) -> PatternOptions:
        if self._pattern_options is None:
            raise NoPatternGenerated()
        return self._pattern_options

    @property
    def has_pattern(self) -> bool:
        return self._placements is not None

    def generate(
        self,
        options: PatternOptions | None = None,
        rng: random.Random | None = None,
    ) -> list[PlacedShape]:
        """Lay out a new pattern, fully replacing the previous one.

        Raises EmptyAssetPool when no assets are loaded.
        """
        if not self._assets:
            raise EmptyAssetPool()
        if options is not None:
            self.options = options

        placements = generate_layout(self.assets, self.options, rng)
        self._generation += 1
        self._placements = placements
        self._pattern_options = self.options
        self._latest_raster = None
        logger.info("Generation %d: %d placements", self._generation, len(placements))
        return placements

    # -- rendering --------------------------------------------------------

    async def render_png(self, size: int | None = None) -> RasterResult:
        """Rasterize the current pattern at ``size`` (default: canvas size).

        Raises StaleRender if a newer pattern was generated while decoding.
        """
        generation = self._generation
        placements = self.placements
        canvas_size = self.pattern_options.canvas_size
        target = size or canvas_size

        image = await render_raster(placements, target, canvas_size=canvas_size)

        if generation != self._generation:
            logger.warning("Discarding stale render of generation %d (now %d)", generation, self._generation)
            raise StaleRender(generation, self._generation)

        result = RasterResult(generation=generation, image=image)
        if target == canvas_size:
            self._latest_raster = result
        return result

    async def render_preview(self) -> RasterResult:
        return await self.render_png(self.preview_size)

    @property
    def latest_raster(self) -> RasterResult | None:
        """Full-size raster of the current generation, if one was rendered."""
        return self._latest_raster

    def render_svg(self, size: int | None = None) -> VectorRender:
        canvas_size = self.pattern_options.canvas_size
        result = build_vector_document(self.placements, size or canvas_size, canvas_size=canvas_size)
        self.last_vector_warnings = [str(w) for w in result.warnings]
        return result
