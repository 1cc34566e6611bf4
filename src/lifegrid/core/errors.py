"""Exception hierarchy for the grid engine and pattern codecs."""

from typing import Optional


class LifeGridError(Exception):
    """Base class for all lifegrid errors."""


class DecodeError(LifeGridError, ValueError):
    """Serialized pattern text could not be decoded.

    Attributes:
        line: 1-based line number in the input, when known
        position: Offset of the offending character in the pattern body
    """

    def __init__(self, message: str, line: Optional[int] = None, position: Optional[int] = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
        self.position = position


class InvalidTypeError(DecodeError, TypeError):
    """Input is not text."""


class InvalidHeaderError(DecodeError):
    """RLE header line is missing or malformed."""


class InvalidFormatError(DecodeError):
    """A line or envelope does not have the expected shape."""


class InvalidNumberError(DecodeError):
    """A run count could not be read as a number."""


class InvalidTagError(DecodeError):
    """Unexpected character in an RLE body."""


class InternalCodecError(DecodeError):
    """Tokenizer invariant violated. Indicates a bug in the codec."""


class InvalidCoordinateError(LifeGridError, ValueError):
    """A batch mutation received something other than an (x, y) pair."""
