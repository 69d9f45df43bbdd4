"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from brandpattern.assets.normalizer import NormalizationFailure
from brandpattern.models.pattern import PatternOptions, PlacedShape, ShapeAsset


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    assets: int = 0
    generation: int = 0


class AssetOut(BaseModel):
    id: str
    kind: str
    name: str = ""
    media_type: str = ""
    width: float
    height: float

    @classmethod
    def from_asset(cls, asset: ShapeAsset) -> AssetOut:
        return cls(
            id=asset.id,
            kind=asset.kind.value,
            name=asset.name,
            media_type=asset.media_type,
            width=asset.width,
            height=asset.height,
        )


class FailureOut(BaseModel):
    file_name: str
    error: str
    message: str

    @classmethod
    def from_failure(cls, failure: NormalizationFailure) -> FailureOut:
        return cls(file_name=failure.file_name, error=failure.error, message=failure.message)


class AssetListResponse(BaseModel):
    assets: list[AssetOut] = Field(default_factory=list)


class UploadResponse(BaseModel):
    assets: list[AssetOut] = Field(default_factory=list)
    failures: list[FailureOut] = Field(default_factory=list)


class PlacementOut(BaseModel):
    asset_id: str
    x: float
    y: float
    rotation: float
    scale: float

    @classmethod
    def from_placement(cls, placement: PlacedShape) -> PlacementOut:
        return cls(
            asset_id=placement.asset.id,
            x=placement.x,
            y=placement.y,
            rotation=placement.rotation,
            scale=placement.scale,
        )


class PatternResponse(BaseModel):
    generation: int
    options: PatternOptions
    grid_size: int
    cell_size: float
    placements: list[PlacementOut] = Field(default_factory=list)
