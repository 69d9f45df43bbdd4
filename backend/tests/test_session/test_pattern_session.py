"""Tests for PatternSession."""

from __future__ import annotations

import asyncio
import random

import pytest
from pydantic import ValidationError

from brandpattern.assets.normalizer import UploadedFile
from brandpattern.errors import EmptyAssetPool, NoPatternGenerated, StaleRender, UnknownAsset
from brandpattern.models.pattern import PatternOptions
from brandpattern.render import raster
from brandpattern.session import PatternSession, export_filename
from tests.conftest import SQUARE_SVG, png_bytes, raster_asset


def _session(**option_overrides) -> PatternSession:
    return PatternSession(options=PatternOptions(**{"shape_count": 9, "canvas_size": 90, **option_overrides}), preview_size=30)


def test_generate_with_empty_pool():
    session = _session()
    with pytest.raises(EmptyAssetPool):
        session.generate()
    assert not session.has_pattern
    with pytest.raises(NoPatternGenerated):
        session.placements


def test_upload_adds_successes_and_reports_failures():
    session = _session()
    report = asyncio.run(
        session.upload(
            [
                UploadedFile("square.svg", "image/svg+xml", SQUARE_SVG.encode()),
                UploadedFile("doc.pdf", "application/pdf", b"%PDF"),
                UploadedFile("mark.png", "image/png", png_bytes(8, 4)),
            ]
        )
    )
    assert [a.name for a in session.assets] == ["square.svg", "mark.png"]
    assert [f.file_name for f in report.failures] == ["doc.pdf"]


def test_generate_replaces_previous_pattern():
    session = _session()
    session.add_assets([raster_asset("a", 10, 10)])
    first = session.generate(rng=random.Random(1))
    second = session.generate(rng=random.Random(2))
    assert session.generation == 2
    assert session.placements is second
    assert first is not second
    assert len(second) == 9


def test_placements_share_pool_instances():
    session = _session()
    asset = raster_asset("a", 10, 10)
    session.add_assets([asset])
    assert all(p.asset is asset for p in session.generate())


def test_remove_asset_keeps_existing_pattern():
    session = _session()
    asset = raster_asset("a", 10, 10)
    session.add_assets([asset, raster_asset("b", 5, 5)])
    placements = session.generate(rng=random.Random(0))

    removed = session.remove_asset("a")
    assert removed is asset
    assert [a.id for a in session.assets] == ["b"]
    assert session.placements is placements

    png = asyncio.run(session.render_png())
    assert png.image.size == (90, 90)


def test_remove_unknown_asset():
    with pytest.raises(UnknownAsset):
        _session().remove_asset("nope")


def test_duplicate_asset_id_rejected():
    session = _session()
    session.add_assets([raster_asset("a")])
    with pytest.raises(ValueError):
        session.add_assets([raster_asset("a")])


def test_update_options_validates():
    session = _session()
    assert session.update_options(shape_count=25).shape_count == 25
    with pytest.raises(ValidationError):
        session.update_options(offset_intensity=2.0)
    assert session.options.offset_intensity == pytest.approx(0.3)


def test_render_uses_generation_canvas_size():
    session = _session()
    session.add_assets([raster_asset("a", 10, 10)])
    session.generate()
    session.update_options(canvas_size=500)

    result = asyncio.run(session.render_png())
    assert result.image.size == (90, 90)
    assert session.latest_raster is result
    assert 'viewBox="0 0 90 90"' in session.render_svg().markup


def test_preview_render_size():
    session = _session()
    session.add_assets([raster_asset("a", 10, 10)])
    session.generate()
    preview = asyncio.run(session.render_preview())
    assert preview.image.size == (30, 30)
    assert session.latest_raster is None


def test_stale_render_is_discarded(monkeypatch):
    session = _session()
    session.add_assets([raster_asset("a", 10, 10)])
    session.generate()

    original = raster.decode_asset

    def regenerate_while_decoding(asset, pixel_scale=1.0):
        session.generate()
        return original(asset, pixel_scale)

    monkeypatch.setattr(raster, "decode_asset", regenerate_while_decoding)
    with pytest.raises(StaleRender) as exc:
        asyncio.run(session.render_png())
    assert (exc.value.generation, exc.value.current) == (1, 2)
    assert session.latest_raster is None


def test_render_svg_records_warnings():
    from tests.conftest import MALFORMED_SVG, vector_asset

    session = _session()
    session.add_assets([vector_asset("bad", markup=MALFORMED_SVG, width=10, height=10)])
    session.generate()
    result = session.render_svg()
    assert result.omitted_placements == 9
    assert len(session.last_vector_warnings) == 1


def test_export_filename():
    assert export_filename("png", now=1718000000.123) == "brand-pattern-1718000000123.png"
    assert export_filename(".svg", prefix="x", now=1.0) == "x-1000.svg"
