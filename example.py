#!/usr/bin/env python3
"""
Example usage of the lifemap package.
"""

from pathlib import Path

from lifemap import Cell, GameOfLife, load_from_path


def main():
    """Demonstrate programmatic usage of the lifemap package."""
    # Load a glider from the bundled maps
    game = load_from_path(Path(__file__).parent / "maps" / "glider.map")

    print("Initial state:")
    print(game.to_text())
    print(f"Population: {game.population}")
    print()

    # Run simulation for 8 generations
    for _ in range(8):
        game.step()
        print(f"Generation {game.generation}:")
        print(game.to_text())
        print(f"Population: {game.population}")
        print()

    # Cells can also be edited directly before stepping
    blank = GameOfLife.new(5, 5)
    for y in (1, 2, 3):
        blank.grid.get_mut(2, y).set(Cell.ALIVE)
    blank.run(1)
    print("Blinker after one step:")
    print(blank.to_text())


if __name__ == "__main__":
    main()
