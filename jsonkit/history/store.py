"""
Per-editor history of submitted texts.

Each editor key owns a most-recent-first list of HistoryItem entries:

    - Adding text already in the list moves it to the front with a fresh
      timestamp instead of creating a duplicate.
    - New text goes to the front; the list is capped at MAX_HISTORY_ITEMS and
      the oldest entries are dropped.
    - Blank text is ignored.

Lists are persisted through a KeyValueStorage under ``tool-history-<key>``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable

from jsonkit.history.storage import KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)

MAX_HISTORY_ITEMS = 50

# Preview length before the "..." suffix is added
PREVIEW_LENGTH = 50


def _now_ms() -> int:
    return int(time.time() * 1000)


def get_storage_key(editor_key: str) -> str:
    """Return the storage key for an editor's history."""
    return f"tool-history-{editor_key}"


def create_preview(content: str) -> str:
    """Short single-entry preview: trimmed, cut to 50 characters plus '...'."""
    trimmed = content.strip()
    if len(trimmed) <= PREVIEW_LENGTH:
        return trimmed
    return trimmed[:PREVIEW_LENGTH] + "..."


@dataclass(frozen=True)
class HistoryItem:
    """A stored text with the time it was last added (epoch milliseconds)."""

    content: str
    timestamp: int
    preview: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryItem:
        return cls(
            content=str(data["content"]),
            timestamp=int(data["timestamp"]),
            preview=str(data["preview"]),
        )


class HistoryStore:
    """History lists keyed by editor, backed by a key-value storage.

    Lists are loaded from storage on first use and written back after every
    change. If a write fails the change is kept in memory for this store.

    Attributes:
        storage: The persistence backend.
        max_items: Maximum entries kept per editor.
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        clock: Callable[[], int] | None = None,
        max_items: int = MAX_HISTORY_ITEMS,
    ) -> None:
        """Initialize the store.

        Args:
            storage: Backend to persist to (defaults to in-memory storage).
            clock: Returns the current time in epoch milliseconds.
            max_items: Maximum entries kept per editor.
        """
        self.storage = storage if storage is not None else MemoryStorage()
        self.max_items = max_items
        self._clock = clock or _now_ms
        self._cache: dict[str, list[HistoryItem]] = {}

    def _load(self, editor_key: str) -> list[HistoryItem]:
        if editor_key in self._cache:
            return self._cache[editor_key]

        items: list[HistoryItem] = []
        try:
            stored = self.storage.get(get_storage_key(editor_key))
            if stored:
                items = [HistoryItem.from_dict(entry) for entry in stored]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable history for %r: %s", editor_key, e)
            items = []

        self._cache[editor_key] = items
        return items

    def _save(self, editor_key: str, items: list[HistoryItem]) -> None:
        self._cache[editor_key] = items
        try:
            self.storage.set(get_storage_key(editor_key), [item.to_dict() for item in items])
        except OSError as e:
            logger.warning("Could not save history for %r: %s", editor_key, e)

    def add(self, editor_key: str, content: str) -> None:
        """Record text at the front of an editor's history.

        Args:
            editor_key: Identifier of the editor the text came from.
            content: The text to record; ignored if blank.
        """
        if not content.strip():
            return

        items = list(self._load(editor_key))
        now = self._clock()

        existing_index = next(
            (idx for idx, item in enumerate(items) if item.content == content), None
        )
        if existing_index is not None:
            existing = items.pop(existing_index)
            items.insert(0, replace(existing, timestamp=now))
        else:
            items.insert(0, HistoryItem(content, now, create_preview(content)))
            del items[self.max_items:]

        self._save(editor_key, items)

    def list(self, editor_key: str) -> list[HistoryItem]:
        """Return an editor's history, most recent first."""
        return list(self._load(editor_key))

    def remove(self, editor_key: str, index: int) -> HistoryItem:
        """Remove one entry by position.

        Returns:
            The removed item.

        Raises:
            IndexError: If the index is out of range.
        """
        items = list(self._load(editor_key))
        if index < 0 or index >= len(items):
            raise IndexError(f"History index {index} out of range (0-{len(items) - 1})")
        removed = items.pop(index)
        self._save(editor_key, items)
        return removed

    def clear(self, editor_key: str) -> None:
        """Remove every entry of an editor's history."""
        self._save(editor_key, [])

    def has_history(self, editor_key: str) -> bool:
        return bool(self._load(editor_key))
