"""Command-line interface that animates a map in the terminal."""

import argparse
import logging
import sys
import time

from ..core.game import GameOfLife
from ..core.parser import load_from_path

CLEAR_SCREEN = "\x1b[2J"


class CLIGameOfLife:
    """Console driver that prints successive generations of a game."""

    def __init__(self, game: GameOfLife, show_border: bool = False, clear_screen: bool = True) -> None:
        """Initialize the driver.

        Args:
            game: Game to animate
            show_border: Print the frozen outer ring as well as the interior
            clear_screen: Clear the terminal before each frame
        """
        self.game = game
        self.show_border = show_border
        self.clear_screen = clear_screen

    @classmethod
    def from_path(cls, path: str, **kwargs) -> "CLIGameOfLife":
        return cls(load_from_path(path), **kwargs)

    def format_game(self) -> str:
        if self.show_border:
            return self.game.to_text()
        return self.game.to_interior_text()

    def print_frame(self, title: str, clear: bool = True) -> None:
        if clear and self.clear_screen:
            print(CLEAR_SCREEN, end="")
        print(title)
        print(self.format_game())

    def animate(self, steps: int, delay: float) -> None:
        """Print the initial state, then step and print ``steps`` times.

        Args:
            steps: Number of generations to show after the initial one
            delay: Seconds to wait before each step
        """
        self.print_frame("Initial State", clear=False)
        for i in range(steps):
            time.sleep(delay)
            self.game.step()
            self.print_frame(f"Step {i}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Animate Conway's Game of Life from a map file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Map format:
  5x5
  .....
  ..x..
  ..x..
  ..x..
  .....

Examples:
  # Animate ./map for 1000 steps
  lifemap-cli

  # Run a blinker for 10 steps without delay, keeping all frames on screen
  lifemap-cli maps/blinker.map --steps 10 --delay 0 --no-clear
        """,
    )

    parser.add_argument("map", nargs="?", default="map", help="Path to the map file (default: map)")

    parser.add_argument("-n", "--steps", type=int, default=1000, help="Number of steps to run (default: 1000)")

    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=0.1,
        help="Seconds between frames (default: 0.1)",
    )

    parser.add_argument(
        "--show-border",
        action="store_true",
        help="Also print the outermost ring of cells, which never changes",
    )

    parser.add_argument("--no-clear", action="store_true", help="Don't clear the terminal between frames")

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.steps < 0:
        errors.append("Steps must be non-negative")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not validate_args(args):
        return 1

    try:
        cli = CLIGameOfLife.from_path(
            args.map,
            show_border=args.show_border,
            clear_screen=not args.no_clear,
        )
        cli.animate(args.steps, args.delay)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
