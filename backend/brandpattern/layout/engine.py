"""Layout engine: asset pool + options to an ordered placement sequence.

The canvas is divided into a square grid of ``ceil(sqrt(shape_count))``
cells per side. Placement ``i`` sits in row ``i // grid``, column
``i % grid``; cells past the last index stay empty. Each placement gets a
uniformly sampled asset (with replacement), a jittered cell center, an
optional random rotation and a scale that maps the asset's longer side to
60% of a cell.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass

from brandpattern.models.pattern import PatternOptions, PlacedShape, ShapeAsset

logger = logging.getLogger(__name__)

# Fraction of a grid cell covered by a placement's longer intrinsic side.
TARGET_CELL_FRACTION = 0.6


@dataclass(frozen=True)
class GridSpec:
    grid_size: int
    cell_size: float

    def cell_center(self, index: int) -> tuple[float, float]:
        """Geometric center of the cell holding placement ``index``."""
        row, col = divmod(index, self.grid_size)
        half = self.cell_size / 2
        return (col * self.cell_size + half, row * self.cell_size + half)


def grid_for(shape_count: int, canvas_size: float) -> GridSpec:
    grid_size = math.ceil(math.sqrt(shape_count))
    return GridSpec(grid_size=grid_size, cell_size=canvas_size / grid_size)


def generate_layout(
    pool: Sequence[ShapeAsset],
    options: PatternOptions,
    rng: random.Random | None = None,
) -> list[PlacedShape]:
    """Produce ``options.shape_count`` placements covering the canvas.

    Returns an empty list for an empty pool. Options are validated by
    ``PatternOptions``; out-of-range values never reach this function.
    Without ``rng`` a system-seeded generator is used, so repeated calls
    give different patterns.
    """
    if not pool:
        return []
    if rng is None:
        rng = random.Random()

    grid = grid_for(options.shape_count, options.canvas_size)
    max_offset = grid.cell_size * options.offset_intensity
    target_size = grid.cell_size * TARGET_CELL_FRACTION

    layout: list[PlacedShape] = []
    for i in range(options.shape_count):
        asset = pool[rng.randrange(len(pool))]

        base_x, base_y = grid.cell_center(i)
        x = base_x + (rng.random() - 0.5) * max_offset
        y = base_y + (rng.random() - 0.5) * max_offset

        rotation = rng.random() * 360 if options.enable_rotation else 0.0
        scale = target_size / asset.max_dimension

        layout.append(PlacedShape(asset=asset, x=x, y=y, rotation=rotation, scale=scale))

    logger.info(
        "Layout: %d placements on %dx%d grid (cell %.2f) from %d assets",
        len(layout),
        grid.grid_size,
        grid.grid_size,
        grid.cell_size,
        len(pool),
    )
    return layout
