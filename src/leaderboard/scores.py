"""
Leaderboard of completed games.

Scores are kept sorted by completion time, fastest first, and trimmed
to a fixed number of entries per difficulty.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from .storage import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


# ============================================================================
# Score Record
# ============================================================================

@dataclass(frozen=True)
class Score:
    """
    One won game.

    Attributes:
        username: Player who won.
        elapsed_seconds: Time taken, in whole seconds.
        completion_date: When the game was won (timezone aware).
        difficulty_name: Difficulty the game was played on.
    """

    username: str
    elapsed_seconds: int
    completion_date: datetime
    difficulty_name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "username": self.username,
            "elapsed_seconds": self.elapsed_seconds,
            "completion_date": self.completion_date.isoformat(),
            "difficulty_name": self.difficulty_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Score":
        return cls(
            username=data["username"],
            elapsed_seconds=int(data["elapsed_seconds"]),
            completion_date=datetime.fromisoformat(data["completion_date"]),
            difficulty_name=data["difficulty_name"],
        )


def format_time(seconds: int) -> str:
    """Format seconds as m:ss."""
    minutes, remaining = divmod(seconds, 60)
    return f"{minutes}:{remaining:02d}"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Score Store
# ============================================================================

class ScoreStore:
    """Ranked score list persisted through a key-value store."""

    def __init__(
        self,
        store: KeyValueStore,
        limit: int = DEFAULT_LIMIT,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize the score store.

        Args:
            store: Persistence backend holding a list of score dicts.
            limit: Entries kept per difficulty.
            clock: Source of completion dates (default: current UTC time).
        """
        if limit < 1:
            raise ValueError("Leaderboard limit must be positive")
        self.store = store
        self.limit = limit
        self.clock = clock or _utc_now

    def all(self) -> List[Score]:
        """Every stored score, fastest first."""
        raw = self.store.load() or []
        return [Score.from_dict(item) for item in raw]

    def top(self, difficulty_name: str) -> List[Score]:
        """Ranked scores for one difficulty."""
        return [
            score for score in self.all()
            if score.difficulty_name == difficulty_name
        ]

    def record(
        self, username: str, elapsed_seconds: int, difficulty_name: str
    ) -> Score:
        """
        Append a won game, re-rank and persist.

        Returns:
            The new score, whether or not it made the cut.
        """
        score = Score(
            username=username,
            elapsed_seconds=elapsed_seconds,
            completion_date=self.clock(),
            difficulty_name=difficulty_name,
        )
        scores = self._rank(self.all() + [score])
        self.store.save([item.to_dict() for item in scores])

        logger.info(
            "Recorded %s on %s in %s",
            username, difficulty_name, format_time(elapsed_seconds),
        )
        return score

    def clear(self) -> None:
        self.store.save([])

    def _rank(self, scores: List[Score]) -> List[Score]:
        """Sort ascending by time and keep the best entries per difficulty."""
        ranked = sorted(scores, key=lambda score: score.elapsed_seconds)
        kept: List[Score] = []
        per_difficulty: Dict[str, int] = {}
        for score in ranked:
            count = per_difficulty.get(score.difficulty_name, 0)
            if count < self.limit:
                kept.append(score)
                per_difficulty[score.difficulty_name] = count + 1
        return kept
