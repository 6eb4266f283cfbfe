"""
Game session for Minesweeper.

A Game owns one board and its timer at a time, replaces the board on
new game or difficulty change, and reports the end of each game to a
win callback and to subscribed listeners.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterable, List, Optional, Union

import numpy as np

from .board import Board, BoardDelta, BoardSnapshot, GameState, Position, create_board
from .difficulty import Difficulty, DEFAULT_DIFFICULTY, get_difficulty
from .timer import GameTimer

logger = logging.getLogger(__name__)

WinCallback = Callable[[int, str], None]


# ============================================================================
# Events
# ============================================================================

class EventKind(Enum):
    """End-of-game notifications."""

    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Emitted once when a game ends.

    Attributes:
        kind: Whether the game was won or lost.
        snapshot: Final board, with every mine uncovered on a loss.
        elapsed_seconds: Timer value when the game ended.
        difficulty_name: Name of the difficulty that was played.
    """

    kind: EventKind
    snapshot: BoardSnapshot
    elapsed_seconds: int
    difficulty_name: str


EventListener = Callable[[GameEvent], None]


# ============================================================================
# Game Session
# ============================================================================

class Game:
    """
    Single-player game session.

    All operations run to completion before returning; the presentation
    layer reads snapshots and never touches cells directly.
    """

    def __init__(
        self,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
        on_win: Optional[WinCallback] = None,
        seed: Optional[int] = None,
        timer: Optional[GameTimer] = None,
    ) -> None:
        """
        Initialize the session with a fresh board.

        Args:
            difficulty: Difficulty of the first game.
            on_win: Called with (elapsed_seconds, difficulty_name) once
                per won game.
            seed: Seed for a reproducible sequence of boards.
            timer: Timer to use (default: wall-clock GameTimer).
        """
        self.on_win = on_win
        self._rng = np.random.default_rng(seed)
        self._timer = timer or GameTimer()
        self._listeners: List[EventListener] = []
        self._difficulty = difficulty
        self._board = self._create_board()

    def _create_board(self) -> Board:
        board_seed = int(self._rng.integers(2 ** 32))
        return create_board(self._difficulty, seed=board_seed)

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def new_game(self, difficulty: Optional[Difficulty] = None) -> BoardSnapshot:
        """
        Discard the current board and start over.

        Args:
            difficulty: Difficulty for the new board (default: current).

        Returns:
            Snapshot of the fresh board.
        """
        if difficulty is not None:
            self._difficulty = difficulty
        if not self._board.is_over and not self._board.first_click_pending:
            logger.info("Abandoning game in progress")

        self._timer.reset()
        self._board = self._create_board()
        logger.debug("New %s game", self._difficulty.name)
        return self._board.snapshot()

    def set_difficulty(self, difficulty: Union[str, Difficulty]) -> BoardSnapshot:
        """Switch difficulty by preset name or descriptor and start over."""
        if isinstance(difficulty, str):
            difficulty = get_difficulty(difficulty)
        return self.new_game(difficulty)

    def lay_mines(self, positions: Iterable[Position]) -> None:
        """Use a fixed mine layout for the current board."""
        self._board.lay_mines(positions)

    def subscribe(self, listener: EventListener) -> None:
        """Register a listener for end-of-game events."""
        self._listeners.append(listener)

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> BoardDelta:
        """Reveal a cell, starting the timer on the first reveal."""
        self._timer.catch_up()
        delta = self._board.reveal(row, col)

        if delta.previous_state == GameState.NOT_STARTED and delta.applied:
            self._timer.start()
        if delta.ended:
            self._finish(delta)
        return delta

    def toggle_flag(self, row: int, col: int) -> BoardDelta:
        """Flag or unflag a hidden cell."""
        self._timer.catch_up()
        return self._board.toggle_flag(row, col)

    def tick(self) -> int:
        """Advance the timer by one second while the game is in progress."""
        return self._timer.tick()

    def catch_up(self) -> int:
        """Bring the timer in line with the wall clock."""
        return self._timer.catch_up()

    def _finish(self, delta: BoardDelta) -> None:
        """Stop the timer and report the result."""
        self._timer.stop()
        kind = EventKind.WON if delta.state == GameState.WON else EventKind.LOST
        event = GameEvent(
            kind=kind,
            snapshot=delta.snapshot,
            elapsed_seconds=self._timer.elapsed_seconds,
            difficulty_name=self._difficulty.name,
        )
        logger.info(
            "%s game %s after %ds",
            event.difficulty_name, kind.name.lower(), event.elapsed_seconds,
        )

        if kind == EventKind.WON and self.on_win is not None:
            self.on_win(event.elapsed_seconds, event.difficulty_name)
        for listener in self._listeners:
            listener(event)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def state(self) -> GameState:
        return self._board.game_state

    @property
    def elapsed_seconds(self) -> int:
        return self._timer.elapsed_seconds

    @property
    def remaining_mines(self) -> int:
        return self._board.remaining_mines

    def snapshot(self) -> BoardSnapshot:
        """Copy of the current board."""
        return self._board.snapshot()
