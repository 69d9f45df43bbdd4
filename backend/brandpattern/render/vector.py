"""Vector renderer: emits a placement sequence as a standalone SVG document.

Vector assets are embedded as nested ``<svg>`` elements that keep their own
viewBox, raster assets as inline ``data:`` ``<image>`` elements. Both get
the shared placement transform, so the document matches the raster output.

An asset whose markup cannot be parsed is reported once and its
placements are omitted; the rest of the document is still produced.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from dataclasses import dataclass, field

from brandpattern.assets.dimensions import parse_viewbox
from brandpattern.errors import MalformedAssetMarkup
from brandpattern.models.pattern import PlacedShape, ShapeAsset
from brandpattern.render.transform import fmt_number, placement_transform

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"

ET.register_namespace("", SVG_NS)

# Root attributes of an asset that the nested <svg> replaces.
_GEOMETRY_ATTRS = {"x", "y", "width", "height", "viewBox", "version", "baseProfile"}


@dataclass
class VectorRender:
    markup: str
    warnings: list[MalformedAssetMarkup] = field(default_factory=list)
    omitted_placements: int = 0


@dataclass
class _Embeddable:
    viewbox: str
    attributes: dict[str, str]
    children: list[ET.Element]


def _strip_ns(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def _svg_tag(name: str) -> str:
    return f"{{{SVG_NS}}}{name}"


def parse_asset_markup(asset: ShapeAsset) -> _Embeddable:
    """Re-parse a vector asset's markup into its viewBox and drawable children.

    Raises MalformedAssetMarkup.
    """
    try:
        root = ET.fromstring(asset.payload)
    except ET.ParseError as e:
        raise MalformedAssetMarkup(asset.id, str(e)) from e
    if _strip_ns(root.tag) != "svg":
        raise MalformedAssetMarkup(asset.id, f"root element is <{_strip_ns(root.tag)}>, not <svg>")

    vb = parse_viewbox(root.get("viewBox"))
    if vb is None:
        viewbox = f"0 0 {fmt_number(asset.width)} {fmt_number(asset.height)}"
    else:
        viewbox = " ".join(fmt_number(v) for v in vb)

    attributes = {k: v for k, v in root.attrib.items() if k not in _GEOMETRY_ATTRS}
    return _Embeddable(viewbox=viewbox, attributes=attributes, children=list(root))


def _vector_group(parent: ET.Element, placement: PlacedShape, embeddable: _Embeddable) -> None:
    asset = placement.asset
    group = ET.SubElement(parent, _svg_tag("g"), {"transform": placement_transform(placement).svg()})
    nested = ET.SubElement(
        group,
        _svg_tag("svg"),
        {
            **embeddable.attributes,
            "viewBox": embeddable.viewbox,
            "width": fmt_number(asset.width),
            "height": fmt_number(asset.height),
        },
    )
    nested.extend(embeddable.children)
    group.tail = "\n"


def _raster_image(parent: ET.Element, placement: PlacedShape) -> None:
    asset = placement.asset
    image = ET.SubElement(
        parent,
        _svg_tag("image"),
        {
            "href": asset.payload,
            "width": fmt_number(asset.width),
            "height": fmt_number(asset.height),
            "transform": placement_transform(placement).svg(),
        },
    )
    image.tail = "\n"


def build_vector_document(
    placements: Sequence[PlacedShape],
    target_size: int,
    canvas_size: float | None = None,
) -> VectorRender:
    """Build the SVG document for a placement sequence.

    The viewBox spans the ``canvas_size`` square the placements live in
    (defaults to ``target_size``); width and height are ``target_size``.
    """
    canvas = canvas_size or target_size
    root = ET.Element(
        _svg_tag("svg"),
        {
            "width": str(target_size),
            "height": str(target_size),
            "viewBox": f"0 0 {fmt_number(canvas)} {fmt_number(canvas)}",
        },
    )
    root.text = "\n"
    background = ET.SubElement(
        root,
        _svg_tag("rect"),
        {"width": fmt_number(canvas), "height": fmt_number(canvas), "fill": "white"},
    )
    background.tail = "\n"

    result = VectorRender(markup="")
    parsed: dict[str, _Embeddable | None] = {}

    for placement in placements:
        asset = placement.asset
        if not asset.is_vector:
            _raster_image(root, placement)
            continue

        if asset.id not in parsed:
            try:
                parsed[asset.id] = parse_asset_markup(asset)
            except MalformedAssetMarkup as e:
                logger.warning("Omitting placements of %s: %s", asset.name or asset.id, e)
                result.warnings.append(e)
                parsed[asset.id] = None

        embeddable = parsed[asset.id]
        if embeddable is None:
            result.omitted_placements += 1
            continue
        _vector_group(root, placement, embeddable)

    body = ET.tostring(root, encoding="unicode")
    result.markup = f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'

    logger.info(
        "Vector render: %d placements (%d omitted), %dpx",
        len(placements),
        result.omitted_placements,
        target_size,
    )
    return result


def render_vector(
    placements: Sequence[PlacedShape],
    target_size: int,
    canvas_size: float | None = None,
) -> str:
    """Render the placement sequence as a self-contained SVG string."""
    return build_vector_document(placements, target_size, canvas_size).markup
