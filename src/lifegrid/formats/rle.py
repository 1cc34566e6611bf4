"""Run-length encoded (RLE) pattern format.

An RLE document is an optional block of ``#`` comment lines, a header line
``x = <width>, y = <height>, rule = B3/S23`` and a body where ``b`` is a dead
cell, ``o`` a live cell, ``$`` ends a row and ``!`` ends the pattern. Any
symbol may be prefixed by a run count. Line breaks inside the body carry no
meaning.
"""

import itertools
import logging
import re
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

import numpy as np

from ..core.errors import (
    InternalCodecError,
    InvalidHeaderError,
    InvalidNumberError,
    InvalidTagError,
    InvalidTypeError,
)
from ..core.grid import Cell, Grid

logger = logging.getLogger(__name__)

RLE_LINE_WIDTH = 70
RULE = "B3/S23"

_STANDARD_RULES = {"B3/S23", "23/3"}
_MAX_COUNT = 2**31 - 1

_ALIVE, _DEAD, _END_OF_ROW, _END_OF_PATTERN = "o", "b", "$", "!"
_DIGITS = "0123456789"
_DIMENSION = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class CountToken:
    """Run count applying to the next symbol."""

    value: int


@dataclass(frozen=True)
class CellToken:
    """A cell symbol."""

    state: Cell


@dataclass(frozen=True)
class EndOfRowToken:
    """End of the current row."""


Token = Union[CountToken, CellToken, EndOfRowToken]

_TAGS = {
    _ALIVE: CellToken(Cell.ALIVE),
    _DEAD: CellToken(Cell.DEAD),
    _END_OF_ROW: EndOfRowToken(),
}


# Encoder


def _row_symbols(row: np.ndarray) -> str:
    """Symbols for one row with the trailing dead run removed."""
    return "".join(_ALIVE if unit else _DEAD for unit in row).rstrip(_DEAD)


def _runs(symbols: str) -> Iterator[Tuple[int, str]]:
    for symbol, group in itertools.groupby(symbols):
        yield sum(1 for _ in group), symbol


def encode(grid: Grid, line_width: int = RLE_LINE_WIDTH) -> str:
    """Encode a grid as RLE text.

    Args:
        grid: Grid to encode
        line_width: Maximum length of each body line

    Returns:
        Header line followed by the body wrapped at ``line_width`` characters
    """
    if line_width < 1:
        raise ValueError(f"line_width must be positive, got {line_width}")

    last_row = grid.height - 1
    stream = "".join(
        _row_symbols(row) + (_END_OF_PATTERN if y == last_row else _END_OF_ROW)
        for y, row in enumerate(grid.rows())
    )
    body = "".join(
        symbol if count == 1 else f"{count}{symbol}" for count, symbol in _runs(stream)
    )

    lines = [f"x = {grid.width}, y = {grid.height}, rule = {RULE}"]
    lines.extend(body[start:start + line_width] for start in range(0, len(body), line_width))

    logger.debug(f"Encoded {grid.width}x{grid.height} grid as {len(body)} RLE body characters")
    return "\n".join(lines)


# Tokenizer


def _read_count(body: str, start: int) -> Tuple[CountToken, int]:
    if start >= len(body) or body[start] not in _DIGITS:
        raise InternalCodecError("count token must start at a digit", position=start)

    end = start
    while end < len(body) and body[end] in _DIGITS:
        end += 1

    digits = body[start:end]
    value = int(digits)
    if value > _MAX_COUNT:
        raise InvalidNumberError(f"run count {digits} is too large", position=start)

    return CountToken(value), end


def tokenize(body: str) -> Iterator[Token]:
    """Split an RLE body into tokens.

    Tokenizing stops at ``!``; anything after it is ignored.

    Raises:
        InvalidNumberError: If a run count does not fit in 32 bits
        InvalidTagError: On any character that is not an ASCII digit, ``o``, ``b``,
            ``$`` or ``!``
    """
    position = 0
    while position < len(body):
        char = body[position]
        if char in _DIGITS:
            token, position = _read_count(body, position)
        elif char in _TAGS:
            token, position = _TAGS[char], position + 1
        elif char == _END_OF_PATTERN:
            return
        else:
            raise InvalidTagError(f"unexpected character {char!r}", position=position)
        yield token


# Decoder


def _content_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (line number, stripped line), skipping comments and blank lines."""
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            yield number, stripped


def _split_assignment(field: str, line: int) -> Tuple[str, str]:
    parts = [part.strip() for part in field.split("=")]
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidHeaderError(f"malformed header field {field!r}", line=line)
    return parts[0], parts[1]


def _parse_dimension(field: str, name: str, line: int) -> int:
    key, value = _split_assignment(field, line)
    if key != name:
        raise InvalidHeaderError(f"expected {name!r} but found {key!r}", line=line)
    if not _DIMENSION.fullmatch(value):
        raise InvalidHeaderError(f"{name} must be a non-negative integer, got {value!r}", line=line)
    return int(value)


def _parse_header(header: str, line: int) -> Tuple[int, int, str]:
    """Parse ``x = W, y = H[, key = value ...]`` into (width, height, rule)."""
    fields = [field.strip() for field in header.split(",")]
    if len(fields) < 2:
        raise InvalidHeaderError("expected 'x = <width>, y = <height>'", line=line)

    width = _parse_dimension(fields[0], "x", line)
    height = _parse_dimension(fields[1], "y", line)

    rule = RULE
    for field in fields[2:]:
        key, value = _split_assignment(field, line)
        if key == "rule":
            rule = value

    return width, height, rule


def decode(text: str) -> Grid:
    """Decode RLE text into a new grid sized by its header.

    Cells painted past the declared size wrap around the grid edges.

    Raises:
        InvalidTypeError: If ``text`` is not a string
        InvalidHeaderError: If the header is missing or malformed
        InvalidNumberError: If a run count is unusable
        InvalidTagError: On an unexpected body character
    """
    if not isinstance(text, str):
        raise InvalidTypeError(f"expected RLE text, got {type(text).__name__}")

    lines = _content_lines(text)
    try:
        header_line, header = next(lines)
    except StopIteration:
        raise InvalidHeaderError("missing header line") from None

    width, height, rule = _parse_header(header, header_line)
    if rule.upper() not in _STANDARD_RULES:
        logger.warning(f"Pattern declares rule {rule!r}; it will be simulated as {RULE}")

    body = "".join(line for _, line in lines)
    grid = Grid(width, height)

    count, row, col = 1, 0, 0
    overflow = False
    for token in tokenize(body):
        if isinstance(token, CountToken):
            count = token.value
        elif isinstance(token, CellToken):
            if col + count > grid.width or row >= grid.height:
                overflow = True
            # painting a full row width already touches every cell of the row
            for offset in range(min(count, grid.width)):
                grid.set_cell(col + offset, row, token.state)
            col += count
            count = 1
        else:
            row += count
            col = 0
            count = 1

    if overflow:
        logger.warning(
            f"RLE body exceeds declared size {grid.width}x{grid.height}; cells wrapped around"
        )
    logger.debug(f"Decoded RLE pattern {grid.width}x{grid.height} with population {grid.population}")
    return grid
