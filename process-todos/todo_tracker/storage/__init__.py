"""Pluggable persistence for the tracker.

- LocalJsonStorage: JSON files on local disk
- DocumentStorage: per-user documents in a SQL database (SQLite or PostgreSQL)
"""

from __future__ import annotations

from todo_tracker.config import TrackerConfig

from .base import (
    ALL_PROCESSES_KEY,
    CUSTOM_PROCESSES_KEY,
    DAILY_TODOS_KEY,
    HIDDEN_PROCESSES_KEY,
    STORAGE_KEYS,
    StorageAdapter,
    StorageError,
)
from .document import DocumentStorage
from .local import LocalJsonStorage


def create_storage(config: TrackerConfig) -> StorageAdapter:
    if config.storage_backend == "document":
        if config.database_url.startswith("sqlite:"):
            config.data_dir.mkdir(parents=True, exist_ok=True)
        return DocumentStorage(config.database_url, config.user_id)
    return LocalJsonStorage(config.data_dir)


__all__ = [
    "ALL_PROCESSES_KEY",
    "CUSTOM_PROCESSES_KEY",
    "DAILY_TODOS_KEY",
    "HIDDEN_PROCESSES_KEY",
    "STORAGE_KEYS",
    "StorageAdapter",
    "StorageError",
    "DocumentStorage",
    "LocalJsonStorage",
    "create_storage",
]
