from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Set

from todo_tracker.storage import StorageAdapter, StorageError

logger = logging.getLogger(__name__)


@dataclass
class SyncStatus:
    """Outcome of the most recent writes to the storage backend.

    In-memory state is updated before the write and never rolled back, so a
    failed key stays in ``pending_keys`` until a later save of it succeeds.
    """

    failed: bool = False
    last_error: Optional[str] = None
    last_saved_at: Optional[datetime] = None
    pending_keys: Set[str] = field(default_factory=set)

    def record_success(self, key: str) -> None:
        self.pending_keys.discard(key)
        self.last_saved_at = datetime.now(timezone.utc)
        if not self.pending_keys:
            self.failed = False
            self.last_error = None

    def record_failure(self, key: str, exc: BaseException) -> None:
        self.pending_keys.add(key)
        self.failed = True
        self.last_error = str(exc)
        logger.error("Write of %s failed; displayed data is not saved: %s", key, exc, exc_info=exc)

    def write(self, storage: StorageAdapter, key: str, value: Any) -> bool:
        """Write-through save; last write wins. Returns False on failure."""
        try:
            storage.save(key, value)
        except StorageError as exc:
            self.record_failure(key, exc)
            return False
        self.record_success(key)
        return True
