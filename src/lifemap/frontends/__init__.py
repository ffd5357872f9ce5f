"""Frontend interfaces for the Game of Life."""

from .cli import CLIGameOfLife

__all__ = ["CLIGameOfLife"]
