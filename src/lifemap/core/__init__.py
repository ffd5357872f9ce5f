"""Core cellular automata logic."""

from .grid import Cell, CellRef, Grid
from .game import GameOfLife
from .parser import MapParseError, load_from_path, parse_header, parse_map_with_header, parse_sized_map

__all__ = [
    "Cell",
    "CellRef",
    "Grid",
    "GameOfLife",
    "MapParseError",
    "load_from_path",
    "parse_header",
    "parse_map_with_header",
    "parse_sized_map",
]
