"""Toroidal grid engine for Conway's Game of Life."""

import logging
import numbers
from enum import Enum
from typing import Any, Iterable, Iterator, Optional, Tuple

import numpy as np
import torch
import torch.nn.functional as F

from .coordinates import to_coordinates, to_index
from .errors import InvalidCoordinateError

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 64

# Moore neighbourhood, centre excluded
_MOORE_KERNEL = torch.tensor(
    [[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32
).unsqueeze(0).unsqueeze(0)


class Cell(Enum):
    """State of a single cell."""

    DEAD = 0
    ALIVE = 1

    @property
    def unit(self) -> int:
        """Contribution of this cell to a neighbour count (0 or 1)."""
        return self.value

    @classmethod
    def from_unit(cls, unit: int) -> "Cell":
        """Inverse of :attr:`unit`."""
        return cls.ALIVE if unit else cls.DEAD

    def toggled(self) -> "Cell":
        """Return the opposite state."""
        return Cell.DEAD if self is Cell.ALIVE else Cell.ALIVE


def _clamp_dimension(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"Grid dimensions must be integers, got {value!r}")
    return max(1, int(value))


def _as_cell(state: Any) -> Cell:
    if not isinstance(state, Cell):
        raise TypeError(f"Expected a Cell, got {state!r}")
    return state


def _unpack_pair(pair: Any) -> Tuple[int, int]:
    try:
        x, y = pair
    except (TypeError, ValueError):
        raise InvalidCoordinateError(f"Expected an (x, y) pair, got {pair!r}") from None

    for value in (x, y):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidCoordinateError(f"Coordinates must be integers, got {pair!r}")

    return int(x), int(y)


class Grid:
    """A fixed-size toroidal universe of cells.

    Cells live in one flat ``uint8`` buffer of length ``width * height``
    holding each cell's :attr:`Cell.unit`, laid out row-major. Coordinates
    are ``(x, y)`` = (column, row) everywhere and wrap around both edges,
    so every integer coordinate is valid.

    ``tick``, ``translate`` and the resize operations build a complete
    replacement buffer before swapping it in, so a reader never sees a
    half-updated generation.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        """Initialize an all-dead grid.

        Args:
            width: Number of columns (values below 1 become 1)
            height: Number of rows (values below 1 become 1)

        Raises:
            TypeError: If a dimension is not an integer
        """
        self._width = _clamp_dimension(width)
        self._height = _clamp_dimension(height)
        self._cells = np.zeros(self._width * self._height, dtype=np.uint8)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def cells(self) -> np.ndarray:
        """Read-only row-major view of the cell buffer (0 dead, 1 alive)."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def rows(self) -> np.ndarray:
        """Read-only ``(height, width)`` view of the cell buffer."""
        return self.cells.reshape(self._height, self._width)

    @property
    def population(self) -> int:
        """Number of living cells."""
        return int(np.count_nonzero(self._cells))

    def _index(self, x: int, y: int) -> int:
        return to_index(x, y, self._width, self._height)

    def get_cell(self, x: int, y: int) -> Cell:
        """Get the state of the cell at (x, y), wrapping out-of-range coordinates."""
        return Cell.from_unit(self._cells[self._index(x, y)])

    def set_cell(self, x: int, y: int, state: Cell) -> None:
        """Set the state of the cell at (x, y), wrapping out-of-range coordinates."""
        self._cells[self._index(x, y)] = _as_cell(state).unit

    def set_cells(self, pairs: Iterable[Any], state: Cell = Cell.ALIVE) -> None:
        """Set every listed cell to ``state``.

        Pairs are applied in order. A malformed pair stops the batch; the
        pairs before it stay applied.

        Args:
            pairs: Iterable of (x, y) integer pairs
            state: State to write

        Raises:
            InvalidCoordinateError: If an entry is not an (x, y) integer pair
        """
        state = _as_cell(state)
        for pair in pairs:
            x, y = _unpack_pair(pair)
            self.set_cell(x, y, state)

    def toggle_cell(self, x: int, y: int) -> Cell:
        """Flip the state of a cell.

        Returns:
            New state of the cell
        """
        index = self._index(x, y)
        new_state = Cell.from_unit(self._cells[index]).toggled()
        self._cells[index] = new_state.unit
        return new_state

    def toggle_cells(self, pairs: Iterable[Any]) -> None:
        """Flip every listed cell. Same batch semantics as :meth:`set_cells`."""
        for pair in pairs:
            x, y = _unpack_pair(pair)
            self.toggle_cell(x, y)

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._cells.fill(Cell.DEAD.unit)

    def randomize(self, rng: Optional[np.random.Generator] = None, probability: float = 0.5) -> None:
        """Randomly populate the grid.

        Args:
            rng: Random generator to draw from. Pass a seeded
                ``numpy.random.default_rng(seed)`` for reproducible grids; a
                fresh unseeded generator is used when omitted.
            probability: Chance each cell will be alive (0.0 to 1.0)
        """
        if rng is None:
            rng = np.random.default_rng()
        self._cells = (rng.random(self._cells.size) < probability).astype(np.uint8)

    def live_neighbour_count(self, x: int, y: int) -> int:
        """Count living cells in the wrapped Moore neighbourhood of (x, y).

        Returns:
            Number of living neighbours (0-8)
        """
        count = 0
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                count += int(self._cells[self._index(x + dx, y + dy)])
        return count

    def count_all_neighbours(self) -> np.ndarray:
        """Count neighbours for all cells using a PyTorch convolution.

        Returns:
            ``(height, width)`` array of neighbour counts
        """
        # Wrap-pad with numpy so 1-wide and 1-tall grids wrap onto themselves
        padded = np.pad(self.rows(), 1, mode="wrap").astype(np.float32)
        source = torch.from_numpy(padded).unsqueeze(0).unsqueeze(0)
        counts = F.conv2d(source, _MOORE_KERNEL)
        return counts[0, 0].numpy().astype(np.uint8)

    def tick(self) -> None:
        """Advance the grid by one B3/S23 generation."""
        counts = self.count_all_neighbours()
        alive = self.rows() == Cell.ALIVE.unit

        survive = alive & ((counts == 2) | (counts == 3))
        birth = ~alive & (counts == 3)

        self._cells = (survive | birth).astype(np.uint8).reshape(-1)

    def resize(self, width: int, height: int) -> None:
        """Change the grid dimensions, keeping the overlapping top-left region.

        Cells outside the overlap are dead. Dimensions below 1 become 1.
        """
        new_width = _clamp_dimension(width)
        new_height = _clamp_dimension(height)

        keep_width = min(self._width, new_width)
        keep_height = min(self._height, new_height)

        resized = np.zeros((new_height, new_width), dtype=np.uint8)
        resized[:keep_height, :keep_width] = self.rows()[:keep_height, :keep_width]

        logger.debug(
            f"Resized grid from {self._width}x{self._height} to {new_width}x{new_height}"
        )
        self._width, self._height, self._cells = new_width, new_height, resized.reshape(-1)

    def set_width(self, width: int) -> None:
        """Change the number of columns, keeping existing cells where they fit."""
        self.resize(width, self._height)

    def set_height(self, height: int) -> None:
        """Change the number of rows, keeping existing cells where they fit."""
        self.resize(self._width, height)

    resize_width = set_width
    resize_height = set_height

    def translate(self, dx: int, dy: int) -> None:
        """Shift every cell by (dx, dy), wrapping around the edges.

        Raises:
            TypeError: If an offset is not an integer
        """
        for offset in (dx, dy):
            if isinstance(offset, bool) or not isinstance(offset, numbers.Integral):
                raise TypeError(f"Offsets must be integers, got {offset!r}")

        shifted = np.roll(self.rows(), shift=(int(dy), int(dx)), axis=(0, 1))
        self._cells = shifted.reshape(-1)

    def alive_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield (x, y) of every living cell in row-major order."""
        for index in np.flatnonzero(self._cells):
            yield to_coordinates(int(index), self._width, self._height)

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        ys, xs = np.nonzero(self.rows())
        if len(xs) == 0:
            return None
        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def copy(self) -> "Grid":
        """Return an independent grid with the same dimensions and cells."""
        duplicate = Grid(self._width, self._height)
        duplicate._cells = self._cells.copy()
        return duplicate

    def to_rle(self) -> str:
        """Encode the grid as RLE text."""
        from ..formats import rle

        return rle.encode(self)

    @classmethod
    def from_rle(cls, text: str) -> "Grid":
        """Decode RLE text into a new grid."""
        from ..formats import rle

        return rle.decode(text)

    def to_life_106(self) -> str:
        """Encode the grid as Life 1.06 text."""
        from ..formats import life106

        return life106.encode(self)

    @classmethod
    def from_life_106(cls, text: str) -> "Grid":
        """Decode Life 1.06 text into a new grid."""
        from ..formats import life106

        return life106.decode(text)

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, population={self.population})"

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        return "\n".join(
            "".join("*" if unit else "." for unit in row) for row in self.rows()
        )
