"""Composition root: wires config, storage and the stores into one AppContext."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from todo_tracker.config import TrackerConfig, get_config
from todo_tracker.date_cursor import DateCursor
from todo_tracker.process_registry import ProcessRegistry
from todo_tracker.storage import StorageAdapter, StorageError, create_storage
from todo_tracker.sync import SyncStatus
from todo_tracker.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    config: TrackerConfig
    storage: StorageAdapter
    sync: SyncStatus
    cursor: DateCursor
    tasks: TaskStore
    processes: ProcessRegistry

    def reload(self) -> None:
        self.tasks.reload()
        self.processes.reload()

    def clear_all_data(self) -> bool:
        """Wipe the backend and start over from defaults."""
        try:
            self.storage.clear()
        except StorageError as exc:
            self.sync.record_failure("*", exc)
            return False
        self.sync.record_success("*")
        self.tasks.clear()
        self.processes.reload()
        return True


def build_context(
    config: Optional[TrackerConfig] = None,
    *,
    storage: Optional[StorageAdapter] = None,
    selected_date: Optional[str] = None,
) -> AppContext:
    """Create an AppContext. ``storage`` may be injected (tests, alternative backends)."""
    if config is None:
        config = get_config()
    if storage is None:
        storage = create_storage(config)

    sync = SyncStatus()
    cursor = DateCursor(selected_date)
    tasks = TaskStore(storage, cursor, sync=sync, seed_sample_data=config.seed_sample_data)
    processes = ProcessRegistry(storage, sync=sync, on_remove=tasks.purge_process)
    logger.info("Context ready backend=%s date=%s", storage.name, cursor.selected_date)
    return AppContext(
        config=config,
        storage=storage,
        sync=sync,
        cursor=cursor,
        tasks=tasks,
        processes=processes,
    )
