"""
Current player session.
"""
import logging
from typing import Optional

from .storage import KeyValueStore

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3


class InvalidUsernameError(ValueError):
    """Raised when a username fails validation."""


class SessionStore:
    """Remembers which player is logged in."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    @property
    def current_user(self) -> Optional[str]:
        return self.store.load() or None

    @property
    def logged_in(self) -> bool:
        return self.current_user is not None

    def login(self, username: str) -> str:
        """
        Log a player in.

        Args:
            username: Name as typed; surrounding whitespace is dropped.

        Returns:
            The stored username.

        Raises:
            InvalidUsernameError: If the name is shorter than 3 characters.
        """
        username = username.strip()
        if len(username) < MIN_USERNAME_LENGTH:
            raise InvalidUsernameError(
                f"Username must be at least {MIN_USERNAME_LENGTH} characters long"
            )
        self.store.save(username)
        logger.info("Logged in as %s", username)
        return username

    def logout(self) -> None:
        self.store.save(None)
