"""Task store: per-(process, date) task buckets over a storage backend.

Every bucket is keyed by ``(process_id, date)`` where ``date`` is an ISO day or
the ``"fixed"`` sentinel for recurring tasks shown on every day. Reads and
writes of dated buckets follow the selected day of the injected ``DateCursor``.

Mutations update memory first and then write the whole collection through to
storage; write failures are recorded in ``SyncStatus`` and never undone.
Empty or unknown identifiers are silent no-ops.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from todo_tracker.date_cursor import DateCursor
from todo_tracker.defaults import sample_buckets
from todo_tracker.models import FIXED_DATE, CompletionStats, DailyBucket, Priority, Task
from todo_tracker.storage import DAILY_TODOS_KEY, StorageAdapter
from todo_tracker.sync import SyncStatus
from todo_tracker.utils import generate_unique_id, round_half_up, shift_iso_date

logger = logging.getLogger(__name__)

ORDER_STEP = 10

BucketKey = Tuple[str, str]


def _blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def compute_stats(tasks: List[Task]) -> CompletionStats:
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    percentage = round_half_up(completed / total * 100) if total else 0
    return CompletionStats(completed=completed, total=total, percentage=percentage)


class TaskStore:
    def __init__(
        self,
        storage: StorageAdapter,
        cursor: DateCursor,
        *,
        sync: Optional[SyncStatus] = None,
        seed_sample_data: bool = True,
    ) -> None:
        self._storage = storage
        self._cursor = cursor
        self.sync = sync if sync is not None else SyncStatus()
        self._seed_sample_data = seed_sample_data
        self._buckets: Dict[BucketKey, DailyBucket] = {}
        self.reload()

    # ---- loading / persistence ----

    def _default_buckets(self) -> List[DailyBucket]:
        return sample_buckets() if self._seed_sample_data else []

    def reload(self) -> None:
        """Replace in-memory state with what the backend holds."""
        raw = self._storage.load(DAILY_TODOS_KEY, None)
        if raw is None:
            buckets = self._default_buckets()
        elif not isinstance(raw, list):
            logger.warning("Stored %s is %s, not a list; using default dataset", DAILY_TODOS_KEY, type(raw).__name__)
            buckets = self._default_buckets()
        else:
            buckets = [DailyBucket.from_dict(item) for item in raw if isinstance(item, dict)]

        self._buckets = {}
        for bucket in buckets:
            if _blank(bucket.process_id) or _blank(bucket.date):
                continue
            existing = self._buckets.get(bucket.key)
            if existing is None:
                self._buckets[bucket.key] = bucket
            else:
                # Merge duplicates so each (process, date) has one bucket.
                existing.todos.extend(bucket.todos)
        logger.info("Loaded %d task buckets from %s storage", len(self._buckets), self._storage.name)

    def snapshot(self) -> List[Dict[str, Any]]:
        return [b.to_dict() for b in self._buckets.values()]

    def _persist(self) -> bool:
        return self.sync.write(self._storage, DAILY_TODOS_KEY, self.snapshot())

    # ---- bucket helpers ----

    @property
    def selected_date(self) -> str:
        return self._cursor.selected_date

    @property
    def buckets(self) -> List[DailyBucket]:
        return list(self._buckets.values())

    def _bucket(self, process_id: str, date: str) -> Optional[DailyBucket]:
        return self._buckets.get((process_id, date))

    def _ensure_bucket(self, process_id: str, date: str) -> DailyBucket:
        bucket = self._buckets.get((process_id, date))
        if bucket is None:
            bucket = DailyBucket(process_id=process_id, date=date)
            self._buckets[bucket.key] = bucket
        return bucket

    def _target_date(self, is_fixed: bool) -> str:
        return FIXED_DATE if is_fixed else self.selected_date

    def _find(self, process_id: str, task_id: str, is_fixed: Optional[bool]) -> Optional[Tuple[DailyBucket, Task]]:
        """Locate a task by id.

        ``is_fixed=None`` checks the selected day first, then the fixed bucket.
        """
        if is_fixed is None:
            dates = [self.selected_date, FIXED_DATE]
        else:
            dates = [self._target_date(is_fixed)]
        for date in dates:
            bucket = self._bucket(process_id, date)
            if bucket is None:
                continue
            task = bucket.find(task_id)
            if task is not None:
                return bucket, task
        return None

    def _sorted(self, process_id: str, date: str) -> List[Task]:
        if _blank(process_id):
            return []
        bucket = self._bucket(process_id, date)
        return bucket.sorted_todos() if bucket is not None else []

    # ---- queries ----

    def get_daily_tasks(self, process_id: str) -> List[Task]:
        return self._sorted(process_id, self.selected_date)

    def get_fixed_tasks(self, process_id: str) -> List[Task]:
        return self._sorted(process_id, FIXED_DATE)

    def get_tasks_for_process(self, process_id: str) -> List[Task]:
        return self.get_fixed_tasks(process_id) + self.get_daily_tasks(process_id)

    def get_completion_stats(self, process_id: str) -> CompletionStats:
        return compute_stats(self.get_tasks_for_process(process_id))

    def completion_history(self, process_id: str, days: int = 7) -> List[Tuple[str, CompletionStats]]:
        """Daily-task stats for the ``days`` calendar days ending at the selected day.

        Fixed tasks carry one completion flag for every day, so they are left out.
        """
        out: List[Tuple[str, CompletionStats]] = []
        for offset in range(max(1, int(days)) - 1, -1, -1):
            date = shift_iso_date(self.selected_date, -offset)
            out.append((date, compute_stats(self._sorted(process_id, date))))
        return out

    # ---- mutations ----

    def add_task(
        self,
        process_id: str,
        title: str,
        description: str = "",
        priority: Any = Priority.NONE,
        is_fixed: bool = False,
        estimated_time: Optional[str] = None,
    ) -> Optional[Task]:
        if _blank(process_id) or _blank(title):
            logger.debug("add_task ignored: process_id=%r title=%r", process_id, title)
            return None

        bucket = self._ensure_bucket(process_id, self._target_date(is_fixed))
        orders = [t.sort_key for t in bucket.todos]
        task = Task(
            id=generate_unique_id(),
            title=title.strip(),
            description=(description or "").strip(),
            priority=Priority.coerce(priority),
            estimated_time=(estimated_time or "").strip() or None,
            fixed=bool(is_fixed),
            order=(max(orders) if orders else 0) + ORDER_STEP,
        )
        bucket.todos.append(task)
        logger.info("Added task %s to %s/%s", task.id, process_id, bucket.date)
        self._persist()
        return task

    def toggle_task(self, process_id: str, task_id: str, is_fixed: Optional[bool] = None) -> Optional[Task]:
        if _blank(process_id) or _blank(task_id):
            return None
        found = self._find(process_id, task_id, is_fixed)
        if found is None:
            logger.debug("toggle_task: %s not found in %s", task_id, process_id)
            return None
        _, task = found
        task.completed = not task.completed
        self._persist()
        return task

    def delete_task(self, process_id: str, task_id: str, is_fixed: Optional[bool] = None) -> bool:
        if _blank(process_id) or _blank(task_id):
            return False
        found = self._find(process_id, task_id, is_fixed)
        if found is None:
            logger.debug("delete_task: %s not found in %s", task_id, process_id)
            return False
        bucket, task = found
        bucket.todos.remove(task)
        logger.info("Deleted task %s from %s/%s", task_id, process_id, bucket.date)
        self._persist()
        return True

    def update_task(
        self,
        process_id: str,
        task_id: str,
        title: str,
        description: str = "",
        priority: Any = Priority.NONE,
        is_fixed: Optional[bool] = None,
    ) -> Optional[Task]:
        if _blank(process_id) or _blank(task_id) or _blank(title):
            return None
        found = self._find(process_id, task_id, is_fixed)
        if found is None:
            return None
        _, task = found
        task.title = title.strip()
        task.description = (description or "").strip()
        task.priority = Priority.coerce(priority)
        self._persist()
        return task

    def update_task_priority(
        self, process_id: str, task_id: str, priority: Any, is_fixed: Optional[bool] = None
    ) -> Optional[Task]:
        if _blank(process_id) or _blank(task_id):
            return None
        found = self._find(process_id, task_id, is_fixed)
        if found is None:
            return None
        _, task = found
        task.priority = Priority.coerce(priority)
        self._persist()
        return task

    def update_task_order(self, process_id: str, task_id: str, new_order: float, is_fixed: bool = False) -> Optional[Task]:
        if _blank(process_id) or _blank(task_id):
            return None
        found = self._find(process_id, task_id, is_fixed)
        if found is None:
            return None
        _, task = found
        task.order = new_order
        self._persist()
        return task

    def reorder_tasks(self, process_id: str, source_index: int, destination_index: int, is_fixed: bool = False) -> bool:
        """Move the task at ``source_index`` of the displayed list to ``destination_index``.

        Order keys are then rewritten to 10, 20, 30, ... leaving gaps for later inserts.
        """
        if _blank(process_id):
            return False
        bucket = self._bucket(process_id, self._target_date(is_fixed))
        if bucket is None:
            return False
        ordered = bucket.sorted_todos()
        size = len(ordered)
        if not (0 <= source_index < size and 0 <= destination_index < size):
            logger.debug("reorder_tasks: indexes %s->%s out of range (%d)", source_index, destination_index, size)
            return False

        moved = ordered.pop(source_index)
        ordered.insert(destination_index, moved)
        for position, task in enumerate(ordered):
            task.order = (position + 1) * ORDER_STEP
        bucket.todos = ordered
        self._persist()
        return True

    def copy_from_previous_day(self, process_id: str) -> int:
        """Append fresh, uncompleted copies of yesterday's tasks. Returns the number copied."""
        if _blank(process_id):
            return 0
        previous_date = shift_iso_date(self.selected_date, -1)
        previous = self._bucket(process_id, previous_date)
        if previous is None or not previous.todos:
            logger.debug("copy_from_previous_day: nothing on %s for %s", previous_date, process_id)
            return 0

        clones = [task.clone(generate_unique_id()) for task in previous.todos]
        self._ensure_bucket(process_id, self.selected_date).todos.extend(clones)
        logger.info("Copied %d tasks from %s to %s for %s", len(clones), previous_date, self.selected_date, process_id)
        self._persist()
        return len(clones)

    def purge_process(self, process_id: str) -> int:
        """Drop every bucket belonging to ``process_id``. Returns the number removed."""
        keys = [key for key in self._buckets if key[0] == process_id]
        if not keys:
            return 0
        for key in keys:
            del self._buckets[key]
        logger.info("Purged %d buckets of process %s", len(keys), process_id)
        self._persist()
        return len(keys)

    def clear(self) -> None:
        self._buckets = {}
        self._persist()
