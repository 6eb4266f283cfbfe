"""
Interactive console front end.

Reads one command per line, forwards it to the game session and prints
the resulting board.
"""
from typing import Callable, List

from leaderboard import ScoreStore, SessionStore, format_time
from minesweeper import EventKind, Game, GameEvent, MinesweeperError

from .render import render_board, render_status

HELP_TEXT = """Commands:
  r ROW COL   reveal a cell
  f ROW COL   flag or unflag a cell
  n           new game
  d NAME      switch difficulty (easy, medium, hard)
  h           show this help
  q           quit"""


class ConsoleGame:
    """Text-mode presentation of a game session."""

    def __init__(
        self,
        game: Game,
        scores: ScoreStore,
        session: SessionStore,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ) -> None:
        """
        Initialize the console and wire it to the game.

        Args:
            game: Session to drive.
            scores: Where won games are recorded.
            session: Source of the current player name.
            input_fn: Line reader (default: builtin input).
            output: Line writer (default: builtin print).
        """
        self.game = game
        self.scores = scores
        self.session = session
        self.input_fn = input_fn
        self.output = output

        game.on_win = self._record_win
        game.subscribe(self._announce)

    # ========================================================================
    # Game Callbacks
    # ========================================================================

    def _record_win(self, elapsed_seconds: int, difficulty_name: str) -> None:
        """Save the win for the logged-in player."""
        username = self.session.current_user
        if username is None:
            self.output("Log in to get on the leaderboard.")
            return
        self.scores.record(username, elapsed_seconds, difficulty_name)

    def _announce(self, event: GameEvent) -> None:
        if event.kind == EventKind.WON:
            self.output(
                f"*** WIN! *** Cleared {event.difficulty_name} "
                f"in {format_time(event.elapsed_seconds)}"
            )
        else:
            self.output("*** BOOM! *** You hit a mine.")

    # ========================================================================
    # Command Loop
    # ========================================================================

    def show(self) -> None:
        """Print the board and status line."""
        self.game.catch_up()
        snapshot = self.game.snapshot()
        self.output(render_board(snapshot))
        self.output(render_status(snapshot, self.game.elapsed_seconds))

    def handle(self, line: str) -> bool:
        """
        Execute one command.

        Returns:
            False when the player asked to quit, True otherwise.
        """
        self.game.catch_up()
        parts: List[str] = line.split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        try:
            if command in ("q", "quit"):
                return False
            if command in ("r", "reveal"):
                row, col = self._position(args)
                self.game.reveal(row, col)
            elif command in ("f", "flag"):
                row, col = self._position(args)
                self.game.toggle_flag(row, col)
            elif command in ("n", "new"):
                self.game.new_game()
            elif command in ("d", "difficulty"):
                if len(args) != 1:
                    raise ValueError("Usage: d NAME")
                self.game.set_difficulty(args[0])
            elif command in ("h", "help"):
                self.output(HELP_TEXT)
                return True
            else:
                self.output(f"Unknown command {command!r}, type h for help")
                return True
        except (MinesweeperError, ValueError) as error:
            self.output(f"Error: {error}")
            return True

        self.show()
        return True

    @staticmethod
    def _position(args: List[str]) -> tuple:
        if len(args) != 2:
            raise ValueError("Expected ROW COL")
        return int(args[0]), int(args[1])

    def run(self) -> None:
        """Play until the player quits or input runs out."""
        self.output(HELP_TEXT)
        self.show()
        while True:
            try:
                line = self.input_fn("> ")
            except EOFError:
                break
            if not self.handle(line):
                break
