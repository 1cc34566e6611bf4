"""Life 1.06 pattern format: a ``#Life 1.06`` header and one ``x y`` line per live cell."""

import logging
import re
from typing import List, Tuple

from ..core.errors import InvalidFormatError, InvalidTypeError
from ..core.grid import Cell, Grid

logger = logging.getLogger(__name__)

HEADER = "#Life 1.06"

_INTEGER = re.compile(r"[+-]?[0-9]+")


def encode(grid: Grid) -> str:
    """Encode the live cells of a grid, in row-major order, as Life 1.06 text."""
    lines = [f"{x} {y}" for x, y in grid.alive_cells()]
    return f"{HEADER}\n" + "\n".join(lines)


def _parse_line(line: str, number: int) -> Tuple[int, int]:
    parts = line.split()
    if len(parts) != 2:
        raise InvalidFormatError(f"expected two numbers, got {line!r}", line=number)
    if not all(_INTEGER.fullmatch(part) for part in parts):
        raise InvalidFormatError(f"coordinates must be integers, got {line!r}", line=number)
    return int(parts[0]), int(parts[1])


def decode(text: str) -> Grid:
    """Decode Life 1.06 text into a grid fitted to the pattern's bounding box.

    The top-left live cell of the bounding box lands at (0, 0).

    Raises:
        InvalidTypeError: If ``text`` is not a string
        InvalidFormatError: If a line is not two integers, or there are no cells
    """
    if not isinstance(text, str):
        raise InvalidTypeError(f"expected Life 1.06 text, got {type(text).__name__}")

    coordinates: List[Tuple[int, int]] = []
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        coordinates.append(_parse_line(stripped, number))

    if not coordinates:
        raise InvalidFormatError("pattern contains no cells")

    xs, ys = zip(*coordinates)
    min_x, min_y = min(xs), min(ys)

    grid = Grid(max(xs) - min_x + 1, max(ys) - min_y + 1)
    grid.set_cells(((x - min_x, y - min_y) for x, y in coordinates), Cell.ALIVE)

    logger.debug(f"Decoded Life 1.06 pattern {grid.width}x{grid.height} with {len(coordinates)} cells")
    return grid
