"""Fixed-size grid data structure for the Game of Life."""

from enum import IntEnum
from typing import Iterable, Tuple

import numpy as np
import torch
import torch.nn.functional as F


class Cell(IntEnum):
    """State of a single grid position."""

    DEAD = 0
    ALIVE = 1

    @property
    def symbol(self) -> str:
        """Map character for this state ('x' alive, '.' dead)."""
        return "x" if self is Cell.ALIVE else "."


class CellRef:
    """Write handle to exactly one cell of a grid."""

    def __init__(self, grid: "Grid", index: int) -> None:
        self._grid = grid
        self._index = index

    def get(self) -> Cell:
        """Read the referenced cell."""
        return Cell(int(self._grid._states[self._index]))

    def set(self, cell: Cell) -> None:
        """Overwrite the referenced cell."""
        self._grid._states[self._index] = Cell(cell)

    def toggle(self) -> Cell:
        """Flip the referenced cell and return its new state."""
        new_state = Cell.DEAD if self.get() is Cell.ALIVE else Cell.ALIVE
        self.set(new_state)
        return new_state


class Grid:
    """A width x height grid of cells stored in one flat row-major buffer.

    Coordinate (x, y) lives at index ``y * width + x``. The dimensions are
    fixed for the lifetime of the grid and coordinates outside
    ``[0, width) x [0, height)`` are rejected rather than wrapped.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize a new grid with every cell dead.

        Args:
            width: Number of columns
            height: Number of rows

        Raises:
            ValueError: If either dimension is smaller than 1
        """
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self._width = width
        self._height = height
        self._states = np.zeros(width * height, dtype=np.int8)

        # Neighbor counting runs in the caller's thread only
        torch.set_num_threads(1)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @classmethod
    def from_states(cls, width: int, height: int, states: Iterable[int]) -> "Grid":
        """Build a grid from a flat row-major sequence of cell states."""
        grid = cls(width, height)
        grid.replace_states(states)
        return grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def states(self) -> np.ndarray:
        """Read-only view of the flat cell buffer."""
        view = self._states.view()
        view.flags.writeable = False
        return view

    def index(self, x: int, y: int) -> int:
        """Map a coordinate to its position in the flat buffer.

        Raises:
            IndexError: If the coordinate is outside the grid
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self._width}x{self._height} grid")
        return y * self._width + x

    def get(self, x: int, y: int) -> Cell:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            The cell's state

        Raises:
            IndexError: If coordinates are out of bounds
        """
        return Cell(int(self._states[self.index(x, y)]))

    def get_mut(self, x: int, y: int) -> CellRef:
        """Get a write handle to a single cell.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        return CellRef(self, self.index(x, y))

    def set(self, x: int, y: int, cell: Cell) -> None:
        self._states[self.index(x, y)] = Cell(cell)

    def replace_states(self, states: Iterable[int]) -> None:
        """Install a complete new cell buffer.

        Args:
            states: Flat row-major cell states, width * height of them

        Raises:
            ValueError: If the buffer has the wrong length or holds values
                other than 0 and 1
        """
        raw = np.array(states).ravel()
        if raw.size != self._width * self._height:
            raise ValueError(
                f"Buffer of {raw.size} cells doesn't match {self._width}x{self._height} grid"
            )
        if not np.isin(raw, (Cell.DEAD, Cell.ALIVE)).all():
            raise ValueError("Buffer contains values other than dead (0) and alive (1)")

        self._states = raw.astype(np.int8)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._states))

    def rows(self) -> np.ndarray:
        """Read-only (height, width) view of the buffer."""
        return self.states.reshape(self._height, self._width)

    def count_interior_neighbors(self) -> np.ndarray:
        """Count living neighbors of every interior cell.

        Uses an unpadded 3x3 convolution, so the outermost ring of cells
        contributes to its neighbors' counts but gets no count of its own.

        Returns:
            Array of shape (height - 2, width - 2); entry [y - 1, x - 1]
            holds the count for cell (x, y)

        Raises:
            ValueError: If the grid has no interior (width or height below 3)
        """
        if self._width < 3 or self._height < 3:
            raise ValueError(f"A {self._width}x{self._height} grid has no interior cells")

        board = torch.from_numpy(self.rows().astype(np.float32))
        neighbors = F.conv2d(board.unsqueeze(0).unsqueeze(0), self._torch_kernel)
        return neighbors[0, 0].numpy().astype(np.int8)

    def to_text(self, border: bool = True) -> str:
        """Render the grid as map rows of 'x' and '.' joined by newlines.

        Args:
            border: Include the outermost ring of cells
        """
        rows = self.rows()
        if not border:
            if self._width < 3 or self._height < 3:
                return ""
            rows = rows[1:-1, 1:-1]
        symbols = np.array([Cell.DEAD.symbol, Cell.ALIVE.symbol])[rows]
        return "\n".join("".join(row) for row in symbols)

    def copy(self) -> "Grid":
        """Create an independent grid with the same cells."""
        return Grid.from_states(self._width, self._height, self._states)

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self._states, other._states)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Grid({self._width}, {self._height}, population={self.population})"
