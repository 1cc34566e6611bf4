"""Toroidal coordinate arithmetic shared by the engine and the codecs.

Cells are stored row-major: ``index = y * width + x`` with ``x`` the column
and ``y`` the row. Every conversion between ``(x, y)`` and a flat index goes
through this module.
"""

from typing import Tuple


def wrap(value: int, modulus: int) -> int:
    """Map ``value`` into ``[0, modulus)`` periodically.

    Args:
        value: Any integer, negative or past the end
        modulus: Period, at least 1

    Returns:
        The wrapped value
    """
    return ((value % modulus) + modulus) % modulus


def to_index(x: int, y: int, width: int, height: int) -> int:
    """Convert a coordinate to a flat buffer index, wrapping both axes.

    Args:
        x: Column coordinate (any integer)
        y: Row coordinate (any integer)
        width: Number of columns
        height: Number of rows

    Returns:
        Row-major index in ``[0, width * height)``
    """
    return wrap(y, height) * width + wrap(x, width)


def to_coordinates(index: int, width: int, height: int) -> Tuple[int, int]:
    """Convert a flat buffer index back to ``(x, y)``.

    Raises:
        IndexError: If index is outside the buffer
    """
    if not 0 <= index < width * height:
        raise IndexError(f"Index {index} out of range for {width}x{height} grid")
    return (index % width, index // width)
