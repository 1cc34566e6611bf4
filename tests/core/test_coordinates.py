"""Tests for toroidal coordinate mapping."""

import pytest
from lifegrid.core.coordinates import to_coordinates, to_index, wrap


class TestCoordinates:
    """Test cases for (x, y) <-> index conversion."""

    def test_wrap(self):
        """Test double-modulo wrapping of negative and large values."""
        assert wrap(0, 3) == 0
        assert wrap(3, 3) == 0
        assert wrap(-1, 3) == 2
        assert wrap(-7, 3) == 2
        assert wrap(10, 1) == 0

    def test_to_index_in_range(self):
        """Test row-major layout."""
        assert to_index(0, 0, 5, 4) == 0
        assert to_index(4, 0, 5, 4) == 4
        assert to_index(0, 1, 5, 4) == 5
        assert to_index(2, 3, 5, 4) == 17

    def test_to_index_wraps(self):
        """Test that out-of-range coordinates wrap on both axes."""
        assert to_index(-1, -1, 5, 4) == 19
        assert to_index(5, 4, 5, 4) == 0
        assert to_index(7, -5, 5, 4) == to_index(2, 3, 5, 4)

    def test_to_coordinates(self):
        """Test the inverse mapping."""
        assert to_coordinates(0, 5, 4) == (0, 0)
        assert to_coordinates(7, 5, 4) == (2, 1)
        assert to_coordinates(19, 5, 4) == (4, 3)

    def test_round_trip(self):
        """Every index maps back to itself."""
        width, height = 7, 3
        for index in range(width * height):
            x, y = to_coordinates(index, width, height)
            assert to_index(x, y, width, height) == index

    def test_to_coordinates_out_of_range(self):
        """Test that indexes outside the buffer are rejected."""
        with pytest.raises(IndexError):
            to_coordinates(20, 5, 4)

        with pytest.raises(IndexError):
            to_coordinates(-1, 5, 4)
