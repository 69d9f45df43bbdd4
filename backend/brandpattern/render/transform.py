"""Placement transform shared by the raster and vector renderers.

A placement maps the asset's local box ``[0, w] x [0, h]`` onto the
canvas by composing, in order::

    translate(x, y) · rotate(rotation) · scale(s) · translate(-w/2, -h/2)

so the asset's center lands on the placement center. The raster renderer
consumes :meth:`PlacementTransform.matrix`, the vector renderer
:meth:`PlacementTransform.svg`; both come from the same values.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from brandpattern.models.pattern import PlacedShape

# Emitted precision: positions and angles to 0.01, scale to 0.0001.
POSITION_PLACES = 2
ROTATION_PLACES = 2
SCALE_PLACES = 4

_TRANSFORM_OP_RE = re.compile(r"(translate|rotate|scale)\s*\(([^)]*)\)")


def fmt_number(value: float, places: int = 4) -> str:
    """Fixed-point formatting with trailing zeros trimmed ("50.0000" -> "50")."""
    text = f"{value:.{places}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def translate_matrix(tx: float, ty: float) -> NDArray[np.float64]:
    return np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])


def rotate_matrix(degrees: float) -> NDArray[np.float64]:
    """Rotation in a y-down frame: positive angles turn clockwise on screen."""
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def scale_matrix(sx: float, sy: float | None = None) -> NDArray[np.float64]:
    if sy is None:
        sy = sx
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])


@dataclass(frozen=True)
class PlacementTransform:
    x: float
    y: float
    rotation: float
    scale: float
    width: float
    height: float

    @property
    def origin_offset(self) -> tuple[float, float]:
        return (-self.width / 2, -self.height / 2)

    def matrix(self) -> NDArray[np.float64]:
        """3x3 affine matrix from asset-local units to canvas units."""
        ox, oy = self.origin_offset
        return (
            translate_matrix(self.x, self.y)
            @ rotate_matrix(self.rotation)
            @ scale_matrix(self.scale)
            @ translate_matrix(ox, oy)
        )

    def svg(self) -> str:
        """The same composition as an SVG ``transform`` attribute."""
        ox, oy = self.origin_offset
        return (
            f"translate({self.x:.{POSITION_PLACES}f}, {self.y:.{POSITION_PLACES}f}) "
            f"rotate({self.rotation:.{ROTATION_PLACES}f}) "
            f"scale({self.scale:.{SCALE_PLACES}f}) "
            f"translate({fmt_number(ox)}, {fmt_number(oy)})"
        )

    def map_point(self, px: float, py: float) -> tuple[float, float]:
        out = self.matrix() @ np.array([px, py, 1.0])
        return (float(out[0]), float(out[1]))


def placement_transform(placement: PlacedShape) -> PlacementTransform:
    return PlacementTransform(
        x=placement.x,
        y=placement.y,
        rotation=placement.rotation,
        scale=placement.scale,
        width=placement.asset.width,
        height=placement.asset.height,
    )


def svg_transform_matrix(transform: str) -> NDArray[np.float64]:
    """Compose an SVG transform list of translate/rotate/scale operations.

    Raises ValueError for any other operation or malformed arguments.
    """
    matrix = np.eye(3)
    consumed = 0
    for match in _TRANSFORM_OP_RE.finditer(transform):
        gap = transform[consumed:match.start()]
        if gap.strip(" ,\t\n"):
            raise ValueError(f"unsupported transform fragment: {gap.strip()!r}")
        consumed = match.end()

        op = match.group(1)
        args = [float(a) for a in re.split(r"[\s,]+", match.group(2).strip()) if a]
        if op == "translate":
            if len(args) not in (1, 2):
                raise ValueError(f"translate takes 1 or 2 arguments, got {len(args)}")
            matrix = matrix @ translate_matrix(args[0], args[1] if len(args) == 2 else 0.0)
        elif op == "rotate":
            if len(args) == 1:
                matrix = matrix @ rotate_matrix(args[0])
            elif len(args) == 3:
                angle, cx, cy = args
                matrix = matrix @ translate_matrix(cx, cy) @ rotate_matrix(angle) @ translate_matrix(-cx, -cy)
            else:
                raise ValueError(f"rotate takes 1 or 3 arguments, got {len(args)}")
        else:
            if len(args) not in (1, 2):
                raise ValueError(f"scale takes 1 or 2 arguments, got {len(args)}")
            matrix = matrix @ scale_matrix(args[0], args[1] if len(args) == 2 else None)

    if transform[consumed:].strip(" ,\t\n"):
        raise ValueError(f"unsupported transform fragment: {transform[consumed:].strip()!r}")
    return matrix
