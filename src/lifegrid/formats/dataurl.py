"""Base64 ``data:`` URL envelope for exchanging patterns as a single string.

``data:text/life_rle;base64,...`` carries RLE text and
``data:text/life_106;base64,...`` carries Life 1.06 text. Text without a
``data:`` prefix is read as plain RLE.
"""

import base64
import binascii

from ..core.errors import InvalidFormatError, InvalidTypeError
from ..core.grid import Grid
from . import life106, rle

MEDIA_TYPES = {
    "rle": "text/life_rle",
    "life_106": "text/life_106",
}

_DECODERS = {
    "text/life_rle": rle.decode,
    "text/life_106": life106.decode,
}

_ENCODERS = {
    "rle": rle.encode,
    "life_106": life106.encode,
}


def to_data_url(grid: Grid, fmt: str = "rle") -> str:
    """Encode a grid and wrap it in a base64 data URL.

    Args:
        grid: Grid to export
        fmt: ``"rle"`` or ``"life_106"``

    Raises:
        ValueError: If fmt is not a known format
    """
    if fmt not in _ENCODERS:
        raise ValueError(f"Unknown format {fmt!r}. Available: {', '.join(_ENCODERS)}")

    payload = base64.b64encode(_ENCODERS[fmt](grid).encode("utf-8")).decode("ascii")
    return f"data:{MEDIA_TYPES[fmt]};base64,{payload}"


def from_data_url(text: str) -> Grid:
    """Decode a data URL produced by :func:`to_data_url`, or plain RLE text."""
    if not isinstance(text, str):
        raise InvalidTypeError(f"expected text, got {type(text).__name__}")

    if not text.startswith("data:"):
        return rle.decode(text)

    meta, sep, payload = text[len("data:"):].partition(",")
    media_type, _, encoding = meta.partition(";")
    if not sep or encoding != "base64":
        raise InvalidFormatError("expected a base64 data URL")
    if media_type not in _DECODERS:
        raise InvalidFormatError(f"unsupported media type {media_type!r}")

    try:
        decoded = base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise InvalidFormatError(f"invalid data URL payload: {e}") from None

    return _DECODERS[media_type](decoded)
