"""Conway's Game of Life on a bounded grid with a frozen border."""

import logging

import numpy as np

from .grid import Cell, Grid

logger = logging.getLogger(__name__)


class GameOfLife:
    """Conway's Game of Life simulation engine.

    Implements the classic rules for every interior cell:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    The outermost row and column on each side are never evaluated and keep
    whatever state they were loaded with.
    """

    def __init__(self, grid: Grid) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The cellular grid to simulate
        """
        self.grid = grid
        self._generation = 0

    @classmethod
    def new(cls, width: int, height: int) -> "GameOfLife":
        """Create a game on a blank width x height grid."""
        return cls(Grid(width, height))

    @property
    def generation(self) -> int:
        """Number of steps applied since creation."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    def step(self) -> None:
        """Advance the simulation by one generation."""
        grid = self.grid
        if grid.width >= 3 and grid.height >= 3:
            grid.replace_states(self._next_states())
        self._generation += 1

    def _next_states(self) -> np.ndarray:
        """Compute the next generation into a fresh buffer."""
        neighbor_counts = self.grid.count_interior_neighbors()

        next_cells = self.grid.rows().copy()
        interior = next_cells[1:-1, 1:-1]

        survive = (interior == Cell.ALIVE) & ((neighbor_counts == 2) | (neighbor_counts == 3))
        birth = (interior == Cell.DEAD) & (neighbor_counts == 3)

        next_cells[1:-1, 1:-1] = np.where(survive | birth, Cell.ALIVE, Cell.DEAD)
        return next_cells.ravel()

    def run(self, count: int) -> None:
        """Advance the simulation by exactly ``count`` generations.

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"Step count must be non-negative, got {count}")

        for _ in range(count):
            self.step()
        logger.debug("Ran %d steps, now at generation %d", count, self._generation)

    def to_text(self) -> str:
        """Serialize the whole grid, border included, in map format."""
        return self.grid.to_text()

    def to_interior_text(self) -> str:
        """Serialize only the interior cells, the part that evolves."""
        return self.grid.to_text(border=False)

    def __str__(self) -> str:
        return self.to_text()
