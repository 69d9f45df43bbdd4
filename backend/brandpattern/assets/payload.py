"""Raster payload encoding: PNG bytes <-> self-contained data: URIs."""

from __future__ import annotations

import base64
import binascii
import re

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(?:;[^;,]*)*),(?P<data>.*)$", re.DOTALL)


def to_data_uri(content: bytes, media_type: str = "image/png") -> str:
    """Inline binary content as a base64 data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def from_data_uri(uri: str) -> bytes:
    """Decode a base64 data URI back to its bytes.

    Raises ValueError if the URI is not a base64 data URI.
    """
    match = _DATA_URI_RE.match(uri.strip())
    if not match or ";base64" not in match.group("params"):
        raise ValueError("not a base64 data URI")
    try:
        return base64.b64decode(match.group("data"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64 payload: {e}") from e
