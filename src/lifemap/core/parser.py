"""Loading games from the text map format.

A map starts with a ``<width>x<height>`` header line followed by exactly
``height`` rows of exactly ``width`` characters, ``x`` for a live cell and
``.`` for a dead one::

    3x3
    x..
    .x.
    ..x
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np

from .game import GameOfLife
from .grid import Cell, Grid

logger = logging.getLogger(__name__)

_HEADER_PATTERN = re.compile(r"([0-9]+)x([0-9]+)")
_CELLS_BY_SYMBOL = {cell.symbol: cell for cell in Cell}


class MapParseError(ValueError):
    """Raised when map text is malformed."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        character: Optional[str] = None,
        position: Optional[Tuple[int, int]] = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human readable description
            line: 1-based line number in the parsed text, if known
            character: Offending character for unknown-symbol errors
            position: (x, y) grid coordinate of the offending character
        """
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
        self.character = character
        self.position = position


def _split_lines(text: str) -> List[str]:
    """Split on newlines; a final newline does not start another row."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _build_game(lines: List[str], width: int, height: int, first_line: int) -> GameOfLife:
    if len(lines) != height:
        raise MapParseError(f"expected {height} rows, found {len(lines)}")

    states = np.empty(width * height, dtype=np.int8)
    for y, row in enumerate(lines):
        line_number = first_line + y
        if len(row) != width:
            raise MapParseError(f"expected {width} cells, found {len(row)}", line=line_number)

        for x, symbol in enumerate(row):
            cell = _CELLS_BY_SYMBOL.get(symbol)
            if cell is None:
                raise MapParseError(
                    f"unknown character {symbol!r} at position ({x}, {y})",
                    line=line_number,
                    character=symbol,
                    position=(x, y),
                )
            states[y * width + x] = cell

    return GameOfLife(Grid.from_states(width, height, states))


def parse_sized_map(text: str, width: int, height: int) -> GameOfLife:
    """Parse map rows without a header.

    Args:
        text: Exactly ``height`` rows of ``width`` map characters
        width: Expected row length
        height: Expected number of rows

    Returns:
        A game whose grid holds the parsed cells

    Raises:
        MapParseError: If the rows don't match the given size or contain
            characters other than 'x' and '.'
        ValueError: If width or height is not positive
    """
    if width < 1 or height < 1:
        raise ValueError(f"Map dimensions must be positive, got {width}x{height}")

    return _build_game(_split_lines(text), width, height, first_line=1)


def parse_header(line: str) -> Tuple[int, int]:
    """Parse a ``<width>x<height>`` header line.

    Raises:
        MapParseError: If the line is not two positive integers joined by 'x'
    """
    match = _HEADER_PATTERN.fullmatch(line)
    if match is None:
        raise MapParseError(f"invalid size header {line!r}, expected <width>x<height>", line=1)

    width, height = int(match.group(1)), int(match.group(2))
    if width == 0 or height == 0:
        raise MapParseError(f"map size must be positive, got {width}x{height}", line=1)
    return width, height


def parse_map_with_header(text: str) -> GameOfLife:
    """Parse a complete map: size header followed by the rows.

    Raises:
        MapParseError: If the header or any row is malformed
    """
    lines = _split_lines(text)
    if not lines:
        raise MapParseError("empty map")

    width, height = parse_header(lines[0])
    logger.debug("Parsing %dx%d map", width, height)
    return _build_game(lines[1:], width, height, first_line=2)


def load_from_path(path: Union[str, Path]) -> GameOfLife:
    """Read a map file and parse it.

    Raises:
        OSError: If the file can't be read or is not UTF-8 text
        MapParseError: If its content is malformed
    """
    path = Path(path)
    logger.debug("Loading map from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise OSError(f"{path}: not a UTF-8 text file") from e
    return parse_map_with_header(text)
