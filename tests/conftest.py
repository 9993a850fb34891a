import copy

import pytest

from todo_tracker.date_cursor import DateCursor
from todo_tracker.process_registry import ProcessRegistry
from todo_tracker.storage import StorageError
from todo_tracker.sync import SyncStatus
from todo_tracker.task_store import TaskStore


class MemoryStorage:
    """In-memory adapter; values are deep-copied like a real serialising backend."""

    name = "memory"

    def __init__(self, initial=None):
        self.data = copy.deepcopy(initial or {})
        self.saves = []
        self.fail_saves = False

    def load(self, key, default):
        if key not in self.data:
            return default
        return copy.deepcopy(self.data[key])

    def save(self, key, value):
        if self.fail_saves:
            raise StorageError(key, "backend unavailable")
        self.saves.append(key)
        self.data[key] = copy.deepcopy(value)

    def clear(self):
        if self.fail_saves:
            raise StorageError("*", "backend unavailable")
        self.data = {}


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cursor():
    return DateCursor("2024-01-15")


@pytest.fixture
def store(storage, cursor):
    return TaskStore(storage, cursor, sync=SyncStatus(), seed_sample_data=False)


@pytest.fixture
def registry(storage):
    return ProcessRegistry(storage)
