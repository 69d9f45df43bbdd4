"""Command line pattern generation.

$ brandpattern logo.svg mark.png --count 120 --offset 0.4 --seed 7 \
    --png /tmp/pattern.png --svg /tmp/pattern.svg

Without --png / --svg both exports are written to --out-dir under
timestamped names.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import mimetypes
import random
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from brandpattern.assets.normalizer import UploadedFile
from brandpattern.config import settings
from brandpattern.errors import PatternError
from brandpattern.models.pattern import PatternOptions
from brandpattern.session import PatternSession, export_filename

logger = logging.getLogger(__name__)


def read_upload(path: Path) -> UploadedFile:
    media_type, _ = mimetypes.guess_type(path.name)
    return UploadedFile(name=path.name, media_type=media_type or "application/octet-stream", content=path.read_bytes())


async def run(
    paths: Sequence[Path],
    options: PatternOptions,
    png_path: Path | None,
    svg_path: Path | None,
    seed: int | None = None,
) -> PatternSession:
    session = PatternSession(options=options, preview_size=settings.preview_size)
    report = await session.upload([read_upload(p) for p in paths])
    for failure in report.failures:
        print(f"warning: {failure.message}")

    session.generate(rng=random.Random(seed) if seed is not None else None)

    if png_path is not None:
        result = await session.render_png()
        png_path.write_bytes(result.png())
        print(png_path)
    if svg_path is not None:
        vector = session.render_svg()
        for warning in vector.warnings:
            print(f"warning: {warning}")
        svg_path.write_text(vector.markup, encoding="utf-8")
        print(svg_path)
    return session


def main(argv: Sequence[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Generate a randomized brand pattern from SVG / PNG shapes")
    ap.add_argument("shapes", nargs="+", type=Path, help="SVG or PNG shape files")
    ap.add_argument("--count", type=int, default=settings.default_shape_count, help="Number of placed shapes")
    ap.add_argument("--offset", type=float, default=settings.default_offset_intensity, help="Jitter as a fraction of a grid cell (0..1)")
    ap.add_argument("--no-rotation", dest="rotation", action="store_false", help="Keep every shape upright")
    ap.add_argument("--size", type=int, default=settings.default_canvas_size, help="Canvas side length in pixels")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--png", type=Path, default=None, help="PNG output path")
    ap.add_argument("--svg", type=Path, default=None, help="SVG output path")
    ap.add_argument("--out-dir", type=Path, default=Path("."), help="Directory for timestamped exports")
    ap.add_argument("--log-level", default=settings.brandpattern_log_level)
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        options = PatternOptions(
            shape_count=args.count,
            offset_intensity=args.offset,
            enable_rotation=args.rotation,
            canvas_size=args.size,
        )
    except ValidationError as e:
        ap.error(str(e))

    png_path, svg_path = args.png, args.svg
    if png_path is None and svg_path is None:
        png_path = args.out_dir / export_filename("png", settings.export_prefix)
        svg_path = args.out_dir / export_filename("svg", settings.export_prefix)

    try:
        asyncio.run(run(args.shapes, options, png_path, svg_path, seed=args.seed))
    except PatternError as e:
        print(f"error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
