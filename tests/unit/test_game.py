"""
Unit tests for the Game session.

Tests timer lifecycle, win callback, end-of-game events and board
replacement on new game or difficulty change.
"""
import logging
from typing import List, Tuple

import pytest
from minesweeper import (
    ConfigurationError,
    Difficulty,
    EASY,
    EventKind,
    Game,
    GameEvent,
    GameState,
    GameTimer,
    HARD,
)

LAID = Difficulty("custom", 5, 5, 3)
LAID_MINES = [(1, 1), (2, 3), (3, 0)]
LAID_SAFE = [
    (row, col)
    for row in range(5)
    for col in range(5)
    if (row, col) not in set(LAID_MINES)
]


class Recorder:
    """Collects win callbacks and events."""

    def __init__(self) -> None:
        self.wins: List[Tuple[int, str]] = []
        self.events: List[GameEvent] = []

    def on_win(self, elapsed_seconds: int, difficulty_name: str) -> None:
        self.wins.append((elapsed_seconds, difficulty_name))

    def on_event(self, event: GameEvent) -> None:
        self.events.append(event)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def laid_game(recorder: Recorder, clock) -> Game:
    game = Game(LAID, on_win=recorder.on_win, timer=GameTimer(clock=clock))
    game.subscribe(recorder.on_event)
    game.lay_mines(LAID_MINES)
    return game


def win(game: Game) -> None:
    for position in LAID_SAFE:
        game.reveal(*position)


# ============================================================================
# Lifecycle Tests
# ============================================================================

class TestGameLifecycle:
    """Test session creation and board replacement."""

    def test_new_session_is_not_started(self, game: Game) -> None:
        assert game.state == GameState.NOT_STARTED
        assert game.elapsed_seconds == 0
        assert game.remaining_mines == 10

    def test_new_game_discards_board(self, laid_game: Game) -> None:
        laid_game.reveal(0, 4)
        snapshot = laid_game.new_game()
        assert snapshot.state == GameState.NOT_STARTED
        assert snapshot.mine_positions == []
        assert laid_game.snapshot().flags_placed == 0

    def test_new_game_resets_timer(self, laid_game: Game) -> None:
        laid_game.reveal(0, 4)
        laid_game.tick()
        laid_game.new_game()
        assert laid_game.elapsed_seconds == 0
        assert laid_game.tick() == 0

    def test_set_difficulty_by_name(self, game: Game) -> None:
        snapshot = game.set_difficulty("easy")
        assert game.difficulty == EASY
        assert (snapshot.rows, snapshot.cols) == (5, 5)
        assert game.remaining_mines == 4

    def test_set_difficulty_by_descriptor(self, game: Game) -> None:
        game.set_difficulty(HARD)
        assert game.snapshot().rows == 15

    def test_set_difficulty_mid_game_abandons_it(self, game: Game) -> None:
        game.reveal(5, 5)
        game.set_difficulty("easy")
        assert game.state == GameState.NOT_STARTED

    def test_abandoning_started_game_is_logged(
        self, laid_game: Game, caplog
    ) -> None:
        with caplog.at_level(logging.INFO, logger="minesweeper.game"):
            laid_game.new_game()
            assert "Abandoning" not in caplog.text

            laid_game.lay_mines(LAID_MINES)
            laid_game.reveal(0, 4)
            laid_game.new_game()
            assert "Abandoning game in progress" in caplog.text

    def test_finished_game_is_not_abandoned(
        self, laid_game: Game, caplog
    ) -> None:
        laid_game.reveal(1, 1)
        with caplog.at_level(logging.INFO, logger="minesweeper.game"):
            laid_game.new_game()
        assert "Abandoning" not in caplog.text

    def test_unknown_difficulty_raises_error(self, game: Game) -> None:
        with pytest.raises(ConfigurationError):
            game.set_difficulty("impossible")
        assert game.difficulty.name == "medium"

    def test_same_seed_gives_same_boards(self) -> None:
        first, second = Game(seed=9), Game(seed=9)
        for _ in range(3):
            first.reveal(4, 4)
            second.reveal(4, 4)
            assert (
                first.snapshot().mine_positions
                == second.snapshot().mine_positions
            )
            first.new_game()
            second.new_game()

    def test_new_games_get_fresh_layouts(self) -> None:
        game = Game(seed=9)
        layouts = set()
        for _ in range(5):
            game.reveal(4, 4)
            layouts.add(tuple(game.snapshot().mine_positions))
            game.new_game()
        assert len(layouts) > 1


# ============================================================================
# Timer Tests
# ============================================================================

class TestGameTimer:
    """Test timer start and stop on state transitions."""

    def test_tick_before_first_reveal_is_ignored(self, laid_game: Game) -> None:
        assert laid_game.tick() == 0

    def test_flag_does_not_start_timer(self, laid_game: Game) -> None:
        laid_game.toggle_flag(0, 0)
        assert laid_game.tick() == 0

    def test_first_reveal_starts_timer(self, laid_game: Game) -> None:
        laid_game.reveal(0, 4)
        laid_game.tick()
        laid_game.tick()
        assert laid_game.elapsed_seconds == 2

    def test_loss_stops_timer(self, laid_game: Game) -> None:
        laid_game.reveal(0, 4)
        laid_game.tick()
        laid_game.reveal(1, 1)
        laid_game.tick()
        assert laid_game.elapsed_seconds == 1

    def test_catch_up_follows_clock(self, laid_game: Game, clock) -> None:
        laid_game.reveal(0, 4)
        clock.advance(4.5)
        assert laid_game.catch_up() == 4

    def test_winning_reveal_counts_time_since_last_move(
        self, recorder: Recorder, clock
    ) -> None:
        """Wall-clock time up to the final click is part of the result."""
        game = Game(
            Difficulty("corner", 5, 5, 1),
            on_win=recorder.on_win,
            timer=GameTimer(clock=clock),
        )
        game.lay_mines([(4, 4)])
        game.toggle_flag(3, 3)
        game.reveal(0, 0)
        game.toggle_flag(3, 3)
        clock.advance(45)
        game.reveal(3, 3)
        assert game.state == GameState.WON
        assert recorder.wins == [(45, "corner")]
        assert game.elapsed_seconds == 45

    def test_flag_catches_up_timer(self, laid_game: Game, clock) -> None:
        laid_game.reveal(0, 4)
        clock.advance(3)
        laid_game.toggle_flag(1, 1)
        assert laid_game.elapsed_seconds == 3


# ============================================================================
# End-of-game Tests
# ============================================================================

class TestGameEnd:
    """Test win callback and events."""

    def test_win_calls_callback_with_time_and_difficulty(
        self, laid_game: Game, recorder: Recorder
    ) -> None:
        laid_game.reveal(0, 4)
        for _ in range(3):
            laid_game.tick()
        win(laid_game)
        assert laid_game.state == GameState.WON
        assert recorder.wins == [(3, "custom")]

    def test_win_callback_fires_once(
        self, laid_game: Game, recorder: Recorder
    ) -> None:
        win(laid_game)
        win(laid_game)
        laid_game.toggle_flag(1, 1)
        assert len(recorder.wins) == 1

    def test_win_emits_event(self, laid_game: Game, recorder: Recorder) -> None:
        win(laid_game)
        assert len(recorder.events) == 1
        event = recorder.events[0]
        assert event.kind == EventKind.WON
        assert event.difficulty_name == "custom"
        assert event.snapshot.state == GameState.WON

    def test_loss_emits_event_without_callback(
        self, laid_game: Game, recorder: Recorder
    ) -> None:
        laid_game.reveal(2, 3)
        assert recorder.wins == []
        assert [event.kind for event in recorder.events] == [EventKind.LOST]
        final = recorder.events[0].snapshot
        assert all(final.cell(*position).is_revealed for position in LAID_MINES)

    def test_moves_after_loss_are_ignored(
        self, laid_game: Game, recorder: Recorder
    ) -> None:
        laid_game.reveal(1, 1)
        before = laid_game.snapshot()
        assert laid_game.reveal(0, 4).applied is False
        assert laid_game.toggle_flag(0, 0).applied is False
        assert laid_game.snapshot() == before
        assert len(recorder.events) == 1

    def test_game_without_callback_can_win(self) -> None:
        game = Game(Difficulty("corner", 5, 5, 1))
        game.lay_mines([(4, 4)])
        delta = game.reveal(0, 0)
        assert delta.state == GameState.WON

    def test_new_game_after_win_can_win_again(
        self, laid_game: Game, recorder: Recorder
    ) -> None:
        win(laid_game)
        laid_game.new_game()
        laid_game.lay_mines(LAID_MINES)
        win(laid_game)
        assert len(recorder.wins) == 2
