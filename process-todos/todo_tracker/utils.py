from __future__ import annotations

import math
import re
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

import pandas as pd

from todo_tracker.models import Task

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

EXPORT_COLUMNS = ["section", "position", "title", "description", "priority", "completed", "estimated_time"]


def generate_unique_id() -> str:
    return uuid.uuid4().hex


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def format_date(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def parse_iso_date(value: str) -> Optional[date]:
    """Parse a strict ``YYYY-MM-DD`` string; anything else gives None."""
    if not isinstance(value, str) or not ISO_DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def shift_iso_date(value: str, days: int) -> str:
    return format_date(date.fromisoformat(value) + timedelta(days=days))


def format_long_date(value: str) -> str:
    """``2024-01-05`` -> ``Friday, January 5, 2024``."""
    d = date.fromisoformat(value)
    return f"{d.strftime('%A, %B')} {d.day}, {d.year}"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def tasks_to_df(fixed: Iterable[Task], daily: Iterable[Task]) -> pd.DataFrame:
    rows = []
    for section, tasks in (("fixed", fixed), ("daily", daily)):
        for position, t in enumerate(tasks, start=1):
            rows.append({
                "section": section,
                "position": position,
                "title": t.title,
                "description": t.description,
                "priority": t.priority.value,
                "completed": t.completed,
                "estimated_time": t.estimated_time or "",
            })
    if not rows:
        return pd.DataFrame(columns=EXPORT_COLUMNS)
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)
