"""Tests for SVG / PNG intrinsic dimension resolution."""

from __future__ import annotations

import pytest

from brandpattern.assets.dimensions import image_dimensions, parse_length, parse_viewbox, svg_dimensions
from tests.conftest import BARE_SVG, ICON_SVG, SQUARE_SVG, WIDE_SVG, png_bytes


class TestSvgDimensions:
    def test_viewbox_wins(self):
        assert svg_dimensions(SQUARE_SVG) == (50.0, 50.0)

    def test_viewbox_over_width_height(self):
        svg = '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" viewBox="0 0 64 32"></svg>'
        assert svg_dimensions(svg) == (64.0, 32.0)

    def test_width_height_with_units(self):
        assert svg_dimensions(WIDE_SVG) == (240.0, 120.0)

    def test_default_fallback(self):
        assert svg_dimensions(BARE_SVG) == (100.0, 100.0)

    def test_not_svg(self):
        assert svg_dimensions("hello") == (100.0, 100.0)

    def test_zero_viewbox_component_falls_back(self):
        svg = '<svg viewBox="0 0 0 40"></svg>'
        assert svg_dimensions(svg) == (100.0, 40.0)

    def test_short_viewbox_falls_back(self):
        svg = '<svg viewBox="0 0 40" width="10" height="10"></svg>'
        assert svg_dimensions(svg) == (40.0, 100.0)

    @pytest.mark.parametrize(
        "svg,expected",
        [
            ('<svg viewBox="0 0 1e999 50"></svg>', (100.0, 50.0)),
            ('<svg viewBox="0 0 40 nan"></svg>', (40.0, 100.0)),
            ('<svg width="1e999" height="20"></svg>', (100.0, 20.0)),
            ('<svg width="30" height="-inf"></svg>', (30.0, 100.0)),
        ],
    )
    def test_non_finite_size_falls_back(self, svg, expected):
        assert svg_dimensions(svg) == expected

    def test_comma_separated_viewbox(self):
        svg = '<svg viewBox="0,0,30,20"></svg>'
        assert svg_dimensions(svg) == (30.0, 20.0)

    def test_only_root_attributes_count(self):
        svg = '<svg xmlns="http://www.w3.org/2000/svg"><rect width="7" height="9"/></svg>'
        assert svg_dimensions(svg) == (100.0, 100.0)

    def test_stroke_width_is_not_width(self):
        svg = '<svg stroke-width="3" height="20"></svg>'
        assert svg_dimensions(svg) == (100.0, 20.0)

    def test_icon(self):
        assert svg_dimensions(ICON_SVG) == (24.0, 24.0)


class TestParsers:
    @pytest.mark.parametrize(
        "value,expected",
        [("24", 24.0), ("24px", 24.0), ("1.5em", 1.5), (".5", 0.5), ("auto", None), ("", None), (None, None)],
    )
    def test_parse_length(self, value, expected):
        assert parse_length(value) == expected

    def test_parse_viewbox(self):
        assert parse_viewbox("-5 -5 10 20") == (-5.0, -5.0, 10.0, 20.0)
        assert parse_viewbox("0 0 10") is None
        assert parse_viewbox("0 0 ten 10") is None
        assert parse_viewbox(None) is None


def test_image_dimensions():
    assert image_dimensions(png_bytes(37, 11)) == (37, 11)


def test_image_dimensions_rejects_garbage():
    with pytest.raises(OSError):
        image_dimensions(b"definitely not a png")
