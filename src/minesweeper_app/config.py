"""
Application configuration.

Defaults can be overridden through environment variables, and those in
turn by command-line flags.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from minesweeper import ConfigurationError, get_difficulty


def _default_data_dir() -> Path:
    xdg_data_home = os.getenv("XDG_DATA_HOME")
    if xdg_data_home:
        return Path(xdg_data_home) / "minesweeper"
    return Path.home() / ".local/share/minesweeper"


@dataclass
class AppConfig:
    """Configuration for the console application."""

    # Storage
    data_dir: Path = field(default_factory=_default_data_dir)
    scores_filename: str = "scores.json"
    session_filename: str = "session.json"

    # Gameplay
    leaderboard_size: int = 10
    default_difficulty: str = "medium"

    # Logging
    log_level: str = "WARNING"

    @property
    def scores_file(self) -> Path:
        return self.data_dir / self.scores_filename

    @property
    def session_file(self) -> Path:
        return self.data_dir / self.session_filename

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Build a config from MINESWEEPER_* environment variables.

        Raises:
            ConfigurationError: If a variable holds an unusable value.
        """
        environ = os.environ if environ is None else environ
        config = cls()

        if environ.get("MINESWEEPER_DATA_DIR"):
            config.data_dir = Path(environ["MINESWEEPER_DATA_DIR"])
        if environ.get("MINESWEEPER_LEADERBOARD_SIZE"):
            config.leaderboard_size = _parse_leaderboard_size(
                environ["MINESWEEPER_LEADERBOARD_SIZE"]
            )
        if environ.get("MINESWEEPER_DIFFICULTY"):
            name = environ["MINESWEEPER_DIFFICULTY"].lower()
            get_difficulty(name)
            config.default_difficulty = name
        if environ.get("MINESWEEPER_LOG_LEVEL"):
            config.log_level = environ["MINESWEEPER_LOG_LEVEL"].upper()

        return config


def _parse_leaderboard_size(raw: str) -> int:
    try:
        size = int(raw)
    except ValueError:
        raise ConfigurationError(
            f"MINESWEEPER_LEADERBOARD_SIZE must be an integer, got {raw!r}"
        ) from None
    if size < 1:
        raise ConfigurationError(
            f"MINESWEEPER_LEADERBOARD_SIZE must be positive, got {size}"
        )
    return size
