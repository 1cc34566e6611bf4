"""Tests for the data URL envelope."""

import base64

import pytest
from lifegrid.core.errors import InvalidFormatError, InvalidHeaderError, InvalidTypeError
from lifegrid.core.grid import Grid
from lifegrid.formats import from_data_url, to_data_url

GLIDER = [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)]


@pytest.fixture
def glider_grid():
    grid = Grid(3, 3)
    grid.set_cells(GLIDER)
    return grid


class TestDataUrl:
    """Test cases for data URL export and import."""

    def test_rle_url(self, glider_grid):
        """Test the RLE envelope."""
        url = to_data_url(glider_grid)

        assert url.startswith("data:text/life_rle;base64,")
        payload = url.split(",", 1)[1]
        assert base64.b64decode(payload).decode("utf-8") == glider_grid.to_rle()
        assert from_data_url(url) == glider_grid

    def test_life_106_url(self, glider_grid):
        """Test the Life 1.06 envelope."""
        url = to_data_url(glider_grid, fmt="life_106")

        assert url.startswith("data:text/life_106;base64,")
        assert from_data_url(url) == glider_grid

    def test_plain_text_is_rle(self, glider_grid):
        """Test that text without a data: prefix is read as RLE."""
        assert from_data_url("x = 3, y = 3\nbo$2bo$3o!") == glider_grid

    def test_plain_text_errors_propagate(self):
        """Test that RLE errors in plain text are raised as-is."""
        with pytest.raises(InvalidHeaderError):
            from_data_url("not a pattern")

    def test_unknown_format(self, glider_grid):
        """Test that only known formats can be exported."""
        with pytest.raises(ValueError):
            to_data_url(glider_grid, fmt="png")

    @pytest.mark.parametrize(
        "url",
        [
            "data:text/plain;base64,eCA9IDEsIHkgPSAxCm8h",
            "data:text/life_rle,x = 1, y = 1",
            "data:text/life_rle;base64",
            "data:text/life_rle;base64,***",
            "data:text/life_rle;base64,//79",
        ],
    )
    def test_invalid_envelope(self, url):
        """Test malformed envelopes and payloads."""
        with pytest.raises(InvalidFormatError):
            from_data_url(url)

    def test_not_text(self):
        """Test that non-string input is rejected."""
        with pytest.raises(InvalidTypeError):
            from_data_url(42)
