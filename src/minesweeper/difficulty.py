"""
Difficulty presets for Minesweeper.

A difficulty fixes the board dimensions and mine count for one game.
"""
from dataclasses import dataclass
from typing import Dict

from .errors import ConfigurationError


# ============================================================================
# Difficulty Descriptor
# ============================================================================

@dataclass(frozen=True)
class Difficulty:
    """
    Configuration for a Minesweeper board.

    Attributes:
        name: Key used for score bookkeeping ("easy", "medium", ...).
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Total mines to place.
        label: Human readable title.
    """

    name: str
    rows: int
    cols: int
    mine_count: int
    label: str = ""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ConfigurationError("Board dimensions must be positive")
        if self.mine_count <= 0:
            raise ConfigurationError("Mine count must be positive")
        if self.mine_count >= self.cells:
            raise ConfigurationError(
                f"Too many mines (max {self.cells - 1})"
            )

    @property
    def cells(self) -> int:
        """Total number of cells on the board."""
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells that do not hold a mine."""
        return self.cells - self.mine_count

    @property
    def title(self) -> str:
        return self.label or f"{self.name.capitalize()} ({self.rows}x{self.cols})"


# Preset difficulty levels
EASY = Difficulty("easy", 5, 5, 4, "Easy (5x5)")
MEDIUM = Difficulty("medium", 10, 10, 10, "Medium (10x10)")
HARD = Difficulty("hard", 15, 15, 30, "Hard (15x15)")

DIFFICULTIES: Dict[str, Difficulty] = {
    preset.name: preset for preset in (EASY, MEDIUM, HARD)
}

DEFAULT_DIFFICULTY = MEDIUM


def get_difficulty(name: str) -> Difficulty:
    """
    Look up a preset by name.

    Raises:
        ConfigurationError: If no preset has that name.
    """
    try:
        return DIFFICULTIES[name.strip().lower()]
    except KeyError:
        choices = ", ".join(DIFFICULTIES)
        raise ConfigurationError(
            f"Unknown difficulty {name!r} (choose from {choices})"
        ) from None
