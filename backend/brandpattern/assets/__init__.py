"""Asset normalization: uploaded SVG / PNG files to ShapeAsset."""

from brandpattern.assets.normalizer import (
    NormalizationFailure,
    NormalizationReport,
    UploadedFile,
    asset_kind_for,
    normalize_batch,
    normalize_upload,
)

__all__ = [
    "NormalizationFailure",
    "NormalizationReport",
    "UploadedFile",
    "asset_kind_for",
    "normalize_batch",
    "normalize_upload",
]
