from __future__ import annotations

from typing import Any, Protocol

# Logical keys shared by every backend.
DAILY_TODOS_KEY = "dailyTodos"
CUSTOM_PROCESSES_KEY = "customProcesses"
HIDDEN_PROCESSES_KEY = "hiddenProcesses"
ALL_PROCESSES_KEY = "allProcesses"

STORAGE_KEYS = (DAILY_TODOS_KEY, CUSTOM_PROCESSES_KEY, HIDDEN_PROCESSES_KEY, ALL_PROCESSES_KEY)


class StorageError(Exception):
    """A backend failed to persist or clear data."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key


class StorageAdapter(Protocol):
    """Key/value persistence for JSON-compatible values.

    ``load`` never raises: unreadable data is logged and ``default`` returned.
    ``save`` and ``clear`` raise ``StorageError`` on failure.
    """

    name: str

    def load(self, key: str, default: Any) -> Any: ...

    def save(self, key: str, value: Any) -> None: ...

    def clear(self) -> None: ...
