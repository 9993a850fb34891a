from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Union

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

_configured = False


class _ConsoleNoiseFilter(logging.Filter):
    """Keep todo_tracker logs on the console; third-party only from WARNING up."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("todo_tracker"):
            return True
        if record.name.startswith("sqlalchemy"):
            return record.levelno >= logging.ERROR
        return record.levelno >= logging.WARNING


def setup_logging(
    *,
    level: Union[str, int] = logging.INFO,
    log_dir: Union[str, Path, None] = None,
) -> None:
    """Configure root logging once per process.

    Streamlit re-executes page scripts on every interaction, so repeated calls
    are ignored after the first one.
    """
    global _configured
    if _configured:
        return

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_dir is not None:
        log_path = Path(log_dir)
        try:
            log_path.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(str(log_path / "todo_tracker.log"), encoding="utf-8")
        except OSError:
            logging.getLogger(__name__).warning("Cannot open log file under %s; console only.", log_path)
        else:
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(fmt)
            root.addHandler(fh)

    logging.captureWarnings(True)
    _configured = True
