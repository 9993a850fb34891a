from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Union

from .base import STORAGE_KEYS, StorageError

logger = logging.getLogger(__name__)


class LocalJsonStorage:
    """Local key-value store: one pretty-printed ``<key>.json`` file per key."""

    name = "local"

    def __init__(self, data_dir: Union[str, Path]) -> None:
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def load(self, key: str, default: Any) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                value = json.load(f)
        except (OSError, ValueError):
            logger.exception("Failed to read %s; using default", path)
            return default
        logger.debug("Loaded %s from %s", key, path)
        return value

    def save(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2, ensure_ascii=False)
            os.replace(tmp, path)
        except (OSError, TypeError, ValueError) as exc:
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not remove partial file %s", tmp)
            raise StorageError(key, f"cannot write {path}: {exc}") from exc
        logger.debug("Saved %s to %s", key, path)

    def clear(self) -> None:
        for key in STORAGE_KEYS:
            path = self._path(key)
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                raise StorageError(key, f"cannot delete {path}: {exc}") from exc
        logger.info("Cleared local storage in %s", self.data_dir)

    def __repr__(self) -> str:
        return f"LocalJsonStorage({str(self.data_dir)!r})"
