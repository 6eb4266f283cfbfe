"""
Minesweeper game module.

Provides core game logic including board management, cell state,
difficulty presets and the game session.
"""
from .cell import Cell, CellSnapshot, CellState
from .difficulty import (
    Difficulty,
    DIFFICULTIES,
    DEFAULT_DIFFICULTY,
    EASY,
    MEDIUM,
    HARD,
    get_difficulty,
)
from .board import Board, BoardDelta, BoardSnapshot, GameState, create_board
from .errors import MinesweeperError, ConfigurationError, OutOfBoundsError
from .game import Game, GameEvent, EventKind
from .timer import GameTimer

__all__ = [
    "Cell",
    "CellSnapshot",
    "CellState",
    "Difficulty",
    "DIFFICULTIES",
    "DEFAULT_DIFFICULTY",
    "EASY",
    "MEDIUM",
    "HARD",
    "get_difficulty",
    "Board",
    "BoardDelta",
    "BoardSnapshot",
    "GameState",
    "create_board",
    "MinesweeperError",
    "ConfigurationError",
    "OutOfBoundsError",
    "Game",
    "GameEvent",
    "EventKind",
    "GameTimer",
]
