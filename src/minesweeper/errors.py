"""
Exceptions raised by the Minesweeper engine.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(MinesweeperError, ValueError):
    """Raised when a difficulty or mine layout cannot produce a valid board."""


class OutOfBoundsError(MinesweeperError, IndexError):
    """Raised when a position lies outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside the {rows}x{cols} board"
        )
        self.row = row
        self.col = col
