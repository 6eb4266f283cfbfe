"""
Key-value storage used by the score and session stores.

A store holds one JSON-compatible value and exposes load()/save().
"""
import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when persisted data cannot be read back."""


class KeyValueStore(Protocol):
    """Minimal persistence interface."""

    def load(self) -> Any:
        ...

    def save(self, value: Any) -> None:
        ...


class MemoryStore:
    """In-process store, mainly for tests and throwaway sessions."""

    def __init__(self, default: Any = None) -> None:
        self._value = copy.deepcopy(default)

    def load(self) -> Any:
        return copy.deepcopy(self._value)

    def save(self, value: Any) -> None:
        self._value = copy.deepcopy(value)


class JsonFileStore:
    """
    Store backed by a single JSON file.

    A missing file loads as the default value; the parent directory is
    created on the first save. Each save replaces the file in one step,
    so a failed write leaves the previous contents in place.
    """

    def __init__(self, path: Path, default: Any = None) -> None:
        """
        Initialize the store.

        Args:
            path: Location of the JSON file.
            default: Value returned while the file does not exist.
        """
        self.path = Path(path)
        self.default = default

    def load(self) -> Any:
        if not self.path.exists():
            return copy.deepcopy(self.default)
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as error:
            raise StorageError(f"Corrupt data in {self.path}: {error}") from error

    def save(self, value: Any) -> None:
        """Write the value to a temporary file, then move it over the target."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2)
            tmp_path.replace(self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Saved %s", self.path)
