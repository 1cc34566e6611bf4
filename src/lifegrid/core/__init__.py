"""Core cellular automata logic."""

from .grid import Cell, Grid
from .simulation import Simulation
from .patterns import Pattern, PatternLibrary
from .render import Theme

__all__ = ["Cell", "Grid", "Simulation", "Pattern", "PatternLibrary", "Theme"]
