"""Runtime configuration for the to-do tracker."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


STORAGE_BACKENDS = ("local", "document")


def _app_root() -> Path:
    return Path(__file__).resolve().parents[1]


def env_str(name: str, default: str, *, strip: bool = True) -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip() if strip else value


def env_optional_str(*names: str, default: Optional[str] = None) -> Optional[str]:
    """Return the first non-blank variable among ``names``."""
    for name in names:
        value = os.environ.get(name)
        if value is not None and value.strip():
            return value.strip()
    return default


def env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in {"1", "true", "yes", "y", "on"}:
        return True
    if raw in {"0", "false", "no", "n", "off"}:
        return False
    return default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def env_path(name: str, default: Path) -> Path:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return Path(raw.strip()).expanduser()


@dataclass(frozen=True)
class TrackerConfig:
    """Settings for storage, the access gate and logging.

    Storage:
    - TODO_STORAGE_BACKEND: local|document (default: local)
    - TODO_DATA_DIR: where the local JSON files and the default SQLite DB live
    - TODO_DATABASE_URL / PLATFORM_DATABASE_URL / DATABASE_URL: document store URL,
      defaults to SQLite at <data_dir>/todos.db
    - TODO_USER_ID: owner of the per-user documents (default: default-user)
    - TODO_SEED_SAMPLE_DATA: use the sample dataset when nothing is stored yet

    Access gate:
    - TODO_APP_PASSWORD: shared passphrase
    - TODO_SESSION_HOURS: session lifetime after login (default: 24)

    Logging:
    - TODO_LOG_LEVEL (default: INFO)
    - TODO_LOG_DIR (default: <data_dir>/logs)
    """

    storage_backend: str
    data_dir: Path
    database_url: str
    user_id: str
    seed_sample_data: bool

    app_password: str
    session_hours: int

    log_level: str
    log_dir: Path

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        backend = env_str("TODO_STORAGE_BACKEND", "local").lower()
        if backend not in STORAGE_BACKENDS:
            backend = "local"

        data_dir = env_path("TODO_DATA_DIR", _app_root() / "data")

        database_url = env_optional_str("TODO_DATABASE_URL", "PLATFORM_DATABASE_URL", "DATABASE_URL")
        if not database_url:
            database_url = f"sqlite:///{(data_dir / 'todos.db').as_posix()}"

        return cls(
            storage_backend=backend,
            data_dir=data_dir,
            database_url=database_url,
            user_id=env_str("TODO_USER_ID", "default-user") or "default-user",
            seed_sample_data=env_bool("TODO_SEED_SAMPLE_DATA", True),
            app_password=env_str("TODO_APP_PASSWORD", "ChangeThisPassphrase!", strip=False),
            session_hours=max(1, env_int("TODO_SESSION_HOURS", 24)),
            log_level=env_str("TODO_LOG_LEVEL", "INFO").upper(),
            log_dir=env_path("TODO_LOG_DIR", data_dir / "logs"),
        )


_config: Optional[TrackerConfig] = None


def get_config() -> TrackerConfig:
    """Get the tracker configuration (cached)."""
    global _config
    if _config is None:
        _config = TrackerConfig.from_env()
    return _config


def reset_config() -> None:
    global _config
    _config = None
