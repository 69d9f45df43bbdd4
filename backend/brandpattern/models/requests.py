"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from brandpattern.models.pattern import MAX_SHAPE_COUNT, PatternOptions


class UploadFileIn(BaseModel):
    name: str = Field(..., description="Original file name")
    media_type: str = Field(..., description="Declared media type, e.g. image/svg+xml or image/png")
    content: str = Field(..., description="File content, as text or base64")
    encoding: Literal["text", "base64"] = Field(default="text", description="How `content` is encoded")


class UploadRequest(BaseModel):
    files: list[UploadFileIn] = Field(..., description="Batch of uploaded shape files")


class OptionsUpdateRequest(BaseModel):
    shape_count: int | None = Field(default=None, ge=1, le=MAX_SHAPE_COUNT)
    offset_intensity: float | None = Field(default=None, ge=0.0, le=1.0)
    enable_rotation: bool | None = None
    canvas_size: int | None = Field(default=None, ge=1)


class GenerateRequest(BaseModel):
    options: PatternOptions | None = Field(default=None, description="Replaces the session options when given")
    seed: int | None = Field(default=None, description="Seed for a reproducible layout")
