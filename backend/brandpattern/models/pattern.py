"""Core pattern model: normalized assets, generation options, placements."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

# Upper bound on placements per pattern; larger requests are rejected.
MAX_SHAPE_COUNT = 10_000

# Fallback intrinsic size when an asset's dimensions cannot be resolved.
DEFAULT_ASSET_SIZE = 100.0


class AssetKind(str, Enum):
    VECTOR = "vector"
    RASTER = "raster"


@dataclass(frozen=True, eq=False)
class ShapeAsset:
    """An uploaded shape, normalized.

    ``payload`` is the verbatim SVG markup for vector assets and a
    ``data:`` URI holding the encoded image for raster assets. Width and
    height are the natural bounding box in the asset's own units.

    Equality is identity: placements share the instance held by the pool.
    """

    id: str
    kind: AssetKind
    payload: str
    width: float
    height: float
    name: str = ""
    media_type: str = ""

    def __post_init__(self) -> None:
        if not all(math.isfinite(v) and v > 0 for v in (self.width, self.height)):
            raise ValueError(f"asset {self.id} needs finite positive dimensions, got {self.width}x{self.height}")

    @property
    def is_vector(self) -> bool:
        return self.kind is AssetKind.VECTOR

    @property
    def max_dimension(self) -> float:
        return max(self.width, self.height)


class PatternOptions(BaseModel):
    """Generation parameters."""

    shape_count: int = Field(default=100, ge=1, le=MAX_SHAPE_COUNT, description="Number of placed instances")
    offset_intensity: float = Field(
        default=0.3, ge=0.0, le=1.0, description="Fraction of a grid cell used for positional jitter"
    )
    enable_rotation: bool = Field(default=True, description="Randomly rotate each placement")
    canvas_size: int = Field(default=1080, ge=1, description="Output square side length")


@dataclass(frozen=True)
class PlacedShape:
    """One positioned instance of an asset.

    ``x``/``y`` is the center in canvas units, ``rotation`` is in degrees
    within [0, 360) and ``scale`` is a uniform factor applied to the
    asset's intrinsic size.
    """

    asset: ShapeAsset
    x: float
    y: float
    rotation: float
    scale: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def rendered_size(self) -> tuple[float, float]:
        return (self.asset.width * self.scale, self.asset.height * self.scale)
