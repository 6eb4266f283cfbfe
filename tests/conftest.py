"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, Cell, Difficulty, EASY, MEDIUM, Game, create_board
from leaderboard import MemoryStore, ScoreStore, SessionStore


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default medium 10x10 board with 10 mines."""
    return Board()


@pytest.fixture
def easy_board() -> Board:
    """Create an easy difficulty board."""
    return create_board(EASY, seed=7)


@pytest.fixture
def laid_board() -> Board:
    """5x5 board with mines at (1,1), (2,3) and (3,0)."""
    board = create_board(Difficulty("custom", 5, 5, 3))
    board.lay_mines([(1, 1), (2, 3), (3, 0)])
    return board


@pytest.fixture
def corner_board() -> Board:
    """
    5x5 board with a single mine in the bottom-right corner.

    Revealing (0, 0) opens everything except the mine, winning at once.
    """
    board = create_board(Difficulty("corner", 5, 5, 1))
    board.lay_mines([(4, 4)])
    return board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def custom_difficulty() -> Difficulty:
    """Create a valid non-preset difficulty."""
    return Difficulty("custom", 8, 12, 20)


# ============================================================================
# Game Fixtures
# ============================================================================

class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def game() -> Game:
    """Medium game with a reproducible board sequence."""
    return Game(MEDIUM, seed=42)


# ============================================================================
# Leaderboard Fixtures
# ============================================================================

FIXED_DATE = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def score_store() -> ScoreStore:
    return ScoreStore(MemoryStore(default=[]), clock=lambda: FIXED_DATE)


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore(MemoryStore())
