#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--seed N]
    python main.py login NAME
    python main.py logout
    python main.py whoami
    python main.py leaderboard [--difficulty {easy,medium,hard}]
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from leaderboard import (
    InvalidUsernameError,
    JsonFileStore,
    ScoreStore,
    SessionStore,
    StorageError,
    format_time,
)
from minesweeper import DIFFICULTIES, Game, get_difficulty
from minesweeper_app import AppConfig, ConsoleGame


def build_stores(config: AppConfig):
    """Create the score and session stores for a configuration."""
    scores = ScoreStore(
        JsonFileStore(config.scores_file, default=[]),
        limit=config.leaderboard_size,
    )
    session = SessionStore(JsonFileStore(config.session_file))
    return scores, session


def play(args: argparse.Namespace, config: AppConfig) -> None:
    """Start an interactive game."""
    scores, session = build_stores(config)
    difficulty = get_difficulty(args.difficulty or config.default_difficulty)

    user = session.current_user
    if user:
        print(f"Playing as {user}")
    else:
        print("Not logged in: wins will not be recorded (python main.py login NAME)")

    game = Game(difficulty=difficulty, seed=args.seed)
    ConsoleGame(game, scores, session).run()


def login(args: argparse.Namespace, config: AppConfig) -> None:
    """Log a player in."""
    _, session = build_stores(config)
    try:
        username = session.login(args.username)
    except InvalidUsernameError as error:
        print(error)
        sys.exit(1)
    print(f"Logged in as {username}")


def logout(args: argparse.Namespace, config: AppConfig) -> None:
    """Log the current player out."""
    _, session = build_stores(config)
    session.logout()
    print("Logged out")


def whoami(args: argparse.Namespace, config: AppConfig) -> None:
    """Print the current player."""
    _, session = build_stores(config)
    print(session.current_user or "Not logged in")


def leaderboard(args: argparse.Namespace, config: AppConfig) -> None:
    """Print the ranked scores for each difficulty."""
    scores, _ = build_stores(config)
    names = [args.difficulty] if args.difficulty else list(DIFFICULTIES)

    for name in names:
        print(f"\n{DIFFICULTIES[name].title}")
        print("-" * 40)
        print(f"{'Rank':<6} {'Player':<16} {'Time':<8} {'Date':<10}")

        ranked = scores.top(name)
        if not ranked:
            print("No scores yet")
            continue
        for rank, score in enumerate(ranked, start=1):
            print(
                f"{rank:<6} {score.username:<16} "
                f"{format_time(score.elapsed_seconds):<8} "
                f"{score.completion_date.date().isoformat():<10}"
            )


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal and track best times"
    )
    parser.add_argument(
        "--data-dir", type=Path, default=None, help="Where scores are stored"
    )
    parser.add_argument("--log-level", default=None, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--difficulty", choices=list(DIFFICULTIES), default=None,
        help="Board size and mine count",
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for reproducible boards"
    )

    # Session commands
    login_parser = subparsers.add_parser("login", help="Set the player name")
    login_parser.add_argument("username", help="At least 3 characters")
    subparsers.add_parser("logout", help="Forget the player name")
    subparsers.add_parser("whoami", help="Show the player name")

    # Leaderboard command
    board_parser = subparsers.add_parser("leaderboard", help="Show best times")
    board_parser.add_argument(
        "--difficulty", choices=list(DIFFICULTIES), default=None,
        help="Only show one difficulty",
    )

    args = parser.parse_args(argv)

    try:
        config = AppConfig.from_env()
        if args.data_dir is not None:
            config.data_dir = args.data_dir
        if args.log_level is not None:
            config.log_level = args.log_level.upper()
        logging.basicConfig(level=config.log_level)
    except ValueError as error:
        # ConfigurationError, or an unknown level name from logging
        print(f"Configuration error: {error}")
        sys.exit(1)

    commands = {
        "play": play,
        "login": login,
        "logout": logout,
        "whoami": whoami,
        "leaderboard": leaderboard,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return
    try:
        command(args, config)
    except StorageError as error:
        print(error)
        sys.exit(1)


if __name__ == "__main__":
    main()
