"""Dual-backend pattern rendering (Pillow raster, SVG vector)."""

from brandpattern.render.raster import encode_png, render_raster
from brandpattern.render.transform import PlacementTransform, placement_transform
from brandpattern.render.vector import VectorRender, build_vector_document, render_vector

__all__ = [
    "PlacementTransform",
    "VectorRender",
    "build_vector_document",
    "encode_png",
    "placement_transform",
    "render_raster",
    "render_vector",
]
