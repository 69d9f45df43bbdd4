"""Error taxonomy for normalization, layout and rendering."""

from __future__ import annotations


class PatternError(Exception):
    """Base class for every failure the pattern pipeline reports."""


class UnsupportedAssetKind(PatternError):
    """Uploaded file is neither an SVG document nor a PNG image."""

    def __init__(self, file_name: str, media_type: str) -> None:
        super().__init__(f"Unsupported file type: {file_name} ({media_type or 'unknown'})")
        self.file_name = file_name
        self.media_type = media_type


class AssetDecodeFailure(PatternError):
    """Asset content could not be decoded."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Could not decode {name}: {reason}")
        self.name = name
        self.reason = reason


class RenderDecodeFailure(AssetDecodeFailure):
    """Decode failure while rasterizing; aborts the whole render."""


class MalformedAssetMarkup(PatternError):
    """Stored SVG markup of a vector asset cannot be embedded."""

    def __init__(self, asset_id: str, reason: str) -> None:
        super().__init__(f"Malformed SVG markup in asset {asset_id}: {reason}")
        self.asset_id = asset_id
        self.reason = reason


class EmptyAssetPool(PatternError):
    """Generation requested with no assets uploaded."""

    def __init__(self) -> None:
        super().__init__("Please upload at least one shape")


class NoPatternGenerated(PatternError):
    """Export requested before any pattern was generated."""

    def __init__(self) -> None:
        super().__init__("No pattern has been generated yet")


class UnknownAsset(PatternError):
    """No asset with the given id is in the pool."""

    def __init__(self, asset_id: str) -> None:
        super().__init__(f"Unknown asset: {asset_id}")
        self.asset_id = asset_id


class StaleRender(PatternError):
    """A render finished after a newer pattern replaced the one it was drawing."""

    def __init__(self, generation: int, current: int) -> None:
        super().__init__(f"Render of generation {generation} superseded by generation {current}")
        self.generation = generation
        self.current = current
