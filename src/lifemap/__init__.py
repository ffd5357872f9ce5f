"""Conway's Game of Life on a fixed-size grid loaded from text maps."""

__version__ = "0.1.0"

from .core.grid import Cell, CellRef, Grid
from .core.game import GameOfLife
from .core.parser import MapParseError, load_from_path, parse_map_with_header, parse_sized_map

__all__ = [
    "Cell",
    "CellRef",
    "Grid",
    "GameOfLife",
    "MapParseError",
    "load_from_path",
    "parse_map_with_header",
    "parse_sized_map",
]
