"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their visibility
(hidden/revealed/flagged) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9


# ============================================================================
# Read-only View
# ============================================================================

@dataclass(frozen=True)
class CellSnapshot:
    """
    Immutable copy of a cell handed to the presentation layer.

    A mine that was flagged before the game was lost is both revealed
    and flagged; the observation code reports it as a mine.
    """

    row: int
    col: int
    is_mine: bool
    adjacent_mines: int
    is_revealed: bool
    is_flagged: bool

    @property
    def state(self) -> CellState:
        """Visual state, with revealed taking precedence over flagged."""
        if self.is_revealed:
            return CellState.REVEALED
        if self.is_flagged:
            return CellState.FLAGGED
        return CellState.HIDDEN

    def to_observation(self) -> int:
        """
        Convert cell to a numeric code.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.is_revealed:
            return MINE_CODE if self.is_mine else self.adjacent_mines
        if self.is_flagged:
            return FLAGGED_CODE
        return HIDDEN_CODE


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        row: Row index on the board.
        col: Column index on the board.
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
            Left at 0 for mine cells.
        is_revealed: Whether the cell has been uncovered.
        is_flagged: Whether the player has flagged the cell.
    """

    row: int = 0
    col: int = 0
    is_mine: bool = False
    adjacent_mines: int = 0
    is_revealed: bool = False
    is_flagged: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.is_revealed or self.is_flagged:
            return False
        self.is_revealed = True
        return True

    def expose(self) -> None:
        """Uncover the cell unconditionally, keeping any flag (end of game)."""
        self.is_revealed = True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.is_revealed:
            return False
        self.is_flagged = not self.is_flagged
        return True

    @property
    def state(self) -> CellState:
        """Current visual state."""
        return self.snapshot().state

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return not self.is_revealed and not self.is_flagged

    def snapshot(self) -> CellSnapshot:
        """Return an immutable copy of this cell."""
        return CellSnapshot(
            row=self.row,
            col=self.col,
            is_mine=self.is_mine,
            adjacent_mines=self.adjacent_mines,
            is_revealed=self.is_revealed,
            is_flagged=self.is_flagged,
        )

    def to_observation(self) -> int:
        """Numeric code for this cell, see CellSnapshot.to_observation."""
        return self.snapshot().to_observation()
