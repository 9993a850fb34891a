from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from todo_tracker.defaults import BUILTIN_PROCESS_IDS, PROCESS_PALETTE, default_processes
from todo_tracker.models import WorkProcess
from todo_tracker.storage import (
    ALL_PROCESSES_KEY,
    CUSTOM_PROCESSES_KEY,
    HIDDEN_PROCESSES_KEY,
    StorageAdapter,
)
from todo_tracker.sync import SyncStatus
from todo_tracker.utils import generate_unique_id

logger = logging.getLogger(__name__)


def _parse_processes(raw: Any) -> List[WorkProcess]:
    if not isinstance(raw, list):
        return []
    out = [WorkProcess.from_dict(p) for p in raw if isinstance(p, dict)]
    return [p for p in out if p.id and p.title]


class ProcessRegistry:
    """Builtin and user-created work processes.

    Deleting a builtin process hides it; deleting a custom one removes it and
    calls ``on_remove(process_id)`` so its task buckets can be purged.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        *,
        sync: Optional[SyncStatus] = None,
        on_remove: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self._storage = storage
        self.sync = sync if sync is not None else SyncStatus()
        self._on_remove = on_remove
        self._processes: List[WorkProcess] = []
        self._hidden: List[str] = []
        self.reload()

    def reload(self) -> None:
        stored = _parse_processes(self._storage.load(ALL_PROCESSES_KEY, None))
        if not stored:
            # Older data kept only the user-created processes.
            custom = _parse_processes(self._storage.load(CUSTOM_PROCESSES_KEY, None))
            stored = default_processes() + [p for p in custom if p.id not in BUILTIN_PROCESS_IDS]
            logger.info("Initialising process list with %d entries", len(stored))
            self._processes = stored
            self._save_processes()
        else:
            self._processes = stored

        hidden = self._storage.load(HIDDEN_PROCESSES_KEY, [])
        self._hidden = [str(h) for h in hidden if isinstance(h, str)] if isinstance(hidden, list) else []

    def _save_processes(self) -> None:
        self.sync.write(self._storage, ALL_PROCESSES_KEY, [p.to_dict() for p in self._processes])

    def _save_hidden(self) -> None:
        self.sync.write(self._storage, HIDDEN_PROCESSES_KEY, list(self._hidden))

    # ---- queries ----

    @staticmethod
    def is_builtin(process_id: str) -> bool:
        return process_id in BUILTIN_PROCESS_IDS

    @property
    def hidden_ids(self) -> List[str]:
        return list(self._hidden)

    def list_processes(self) -> List[WorkProcess]:
        return [p for p in self._processes if p.id not in self._hidden]

    def get(self, process_id: str) -> Optional[WorkProcess]:
        if not process_id or process_id in self._hidden:
            return None
        for p in self._processes:
            if p.id == process_id:
                return p
        return None

    # ---- mutations ----

    def add_process(
        self,
        title: str,
        description: str = "",
        icon: str = "Briefcase",
        color: Optional[str] = None,
    ) -> Optional[WorkProcess]:
        if not title or not title.strip():
            return None
        custom_count = sum(1 for p in self._processes if not self.is_builtin(p.id))
        gradient = PROCESS_PALETTE[custom_count % len(PROCESS_PALETTE)]
        if color:
            gradient = [color, color]
        process = WorkProcess(
            id=generate_unique_id(),
            title=title.strip(),
            description=(description or "").strip(),
            icon=(icon or "Briefcase").strip() or "Briefcase",
            color=color or gradient[0],
            gradient=list(gradient),
        )
        self._processes.append(process)
        logger.info("Added process %s (%s)", process.id, process.title)
        self._save_processes()
        return process

    def edit_process(self, process_id: str, title: str, description: str = "") -> Optional[WorkProcess]:
        process = self.get(process_id)
        if process is None or not title or not title.strip():
            return None
        process.title = title.strip()
        process.description = (description or "").strip()
        self._save_processes()
        return process

    def delete_process(self, process_id: str) -> bool:
        process = self.get(process_id)
        if process is None:
            return False

        if self.is_builtin(process_id):
            self._hidden.append(process_id)
            logger.info("Hid builtin process %s", process_id)
            self._save_hidden()
            return True

        self._processes = [p for p in self._processes if p.id != process_id]
        logger.info("Removed process %s", process_id)
        self._save_processes()
        if self._on_remove is not None:
            self._on_remove(process_id)
        return True

    def restore_hidden(self) -> int:
        restored = len(self._hidden)
        if restored:
            self._hidden = []
            self._save_hidden()
        return restored
