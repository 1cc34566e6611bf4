"""Toroidal Conway's Game of Life engine with RLE and Life 1.06 codecs."""

__version__ = "0.1.0"

from .core.grid import Cell, Grid
from .core.simulation import Simulation
from .core.patterns import Pattern, PatternLibrary
from .core.errors import (
    DecodeError,
    InternalCodecError,
    InvalidCoordinateError,
    InvalidFormatError,
    InvalidHeaderError,
    InvalidNumberError,
    InvalidTagError,
    InvalidTypeError,
    LifeGridError,
)

__all__ = [
    "Cell",
    "Grid",
    "Simulation",
    "Pattern",
    "PatternLibrary",
    "LifeGridError",
    "DecodeError",
    "InvalidTypeError",
    "InvalidHeaderError",
    "InvalidFormatError",
    "InvalidNumberError",
    "InvalidTagError",
    "InternalCodecError",
    "InvalidCoordinateError",
]
