"""
Edit history for the toolkit's text inputs.

Usage:
    from jsonkit.history import FileStorage, HistoryStore, get_history_dir

    store = HistoryStore(FileStorage(get_history_dir()))
    store.add("format", '{"key": "value"}')
    for item in store.list("format"):
        print(item.timestamp, item.preview)
"""

from jsonkit.history.storage import (
    DEFAULT_HISTORY_DIR,
    HISTORY_DIR_ENV,
    FileStorage,
    KeyValueStorage,
    MemoryStorage,
    get_history_dir,
)
from jsonkit.history.store import (
    MAX_HISTORY_ITEMS,
    HistoryItem,
    HistoryStore,
    create_preview,
    get_storage_key,
)

__all__ = [
    # Storage backends
    "KeyValueStorage",
    "FileStorage",
    "MemoryStorage",
    "get_history_dir",
    "DEFAULT_HISTORY_DIR",
    "HISTORY_DIR_ENV",
    # History store
    "HistoryStore",
    "HistoryItem",
    "MAX_HISTORY_ITEMS",
    "create_preview",
    "get_storage_key",
]
