"""
Key-value storage backends for the history store.

This module defines the KeyValueStorage interface and two implementations:
one JSON file per key in a directory, and a plain in-memory dictionary.
Values are any JSON-serializable data.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any
from urllib.parse import quote

logger = logging.getLogger(__name__)

# Environment variable overriding the default history directory
HISTORY_DIR_ENV = "JSONKIT_HISTORY_DIR"

DEFAULT_HISTORY_DIR = Path.home() / ".jsonkit" / "history"


def get_history_dir(override: str | os.PathLike | None = None) -> Path:
    """Resolve the history directory.

    Args:
        override: Explicit directory, e.g. from a CLI flag.

    Returns:
        The override if given, else $JSONKIT_HISTORY_DIR, else ~/.jsonkit/history.
    """
    if override:
        return Path(override)
    env_dir = os.environ.get(HISTORY_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    return DEFAULT_HISTORY_DIR


class KeyValueStorage(ABC):
    """Abstract base class for history persistence."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if the key is not present.

        Raises:
            OSError: If the backend cannot be read.
            ValueError: If the stored data cannot be decoded.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value under a key, replacing any previous one.

        Raises:
            OSError: If the backend cannot be written.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""
        pass


class MemoryStorage(KeyValueStorage):
    """Storage kept in a dictionary for the lifetime of the object."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        # Stored serialized so callers never share mutable state with the store
        self._data[key] = json.dumps(value, ensure_ascii=False)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage(KeyValueStorage):
    """Storage writing one UTF-8 JSON file per key.

    Attributes:
        directory: Directory holding the files; created on first write.
    """

    def __init__(self, directory: str | os.PathLike) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """Return the file used for a key.

        The key is percent-encoded, so distinct keys never share a file and
        path separators cannot leave the directory.
        """
        return self.directory / f"{quote(key, safe='')}.json"

    def get(self, key: str) -> Any | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def set(self, key: str, value: Any) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(value, f, ensure_ascii=False)
        os.replace(tmp_path, path)
        logger.debug("Wrote %s", path)

    def delete(self, key: str) -> None:
        try:
            self.path_for(key).unlink()
        except FileNotFoundError:
            pass
