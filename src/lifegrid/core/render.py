"""Renderer-side helpers: cell geometry for a drawing surface and text rendering."""

from dataclasses import dataclass
from typing import Iterator, Tuple

from .grid import Grid


@dataclass
class Theme:
    """Cell size and colours used when painting a grid."""

    cell_size: float = 5.0
    alive_color: str = "#000000"
    dead_color: str = "#ffffff"


def canvas_size(grid: Grid, theme: Theme) -> Tuple[float, float]:
    """Pixel size of a surface holding the grid with 1px gaps between cells."""
    pitch = theme.cell_size + 1
    return (pitch * grid.width + 1, pitch * grid.height + 1)


def cell_rects(grid: Grid, theme: Theme) -> Iterator[Tuple[float, float, float, str]]:
    """Yield one filled square per cell.

    Yields:
        Tuples of (left, top, size, color), row by row
    """
    pitch = theme.cell_size + 1
    for row, units in enumerate(grid.rows()):
        for col, unit in enumerate(units):
            color = theme.alive_color if unit else theme.dead_color
            yield (col * pitch + 1, row * pitch + 1, theme.cell_size, color)


def render_to_string(grid: Grid, alive: str = "◼", dead: str = "◻") -> str:
    """Render the grid as text, one line per row, each line newline-terminated."""
    return "".join(
        "".join(alive if unit else dead for unit in units) + "\n" for units in grid.rows()
    )
