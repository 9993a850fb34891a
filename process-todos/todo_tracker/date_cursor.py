from __future__ import annotations

import logging
from typing import Optional

from todo_tracker.utils import format_date, format_long_date, parse_iso_date, shift_iso_date, utc_today

logger = logging.getLogger(__name__)


class DateCursor:
    """The currently selected calendar day, kept as a UTC ``YYYY-MM-DD`` string."""

    def __init__(self, selected_date: Optional[str] = None) -> None:
        self._selected = format_date(utc_today())
        if selected_date is not None:
            self.go_to(selected_date)

    @property
    def selected_date(self) -> str:
        return self._selected

    @property
    def formatted(self) -> str:
        return format_long_date(self._selected)

    def go_to(self, iso: str) -> bool:
        if parse_iso_date(iso) is None:
            logger.debug("Ignoring invalid date %r", iso)
            return False
        self._selected = iso
        return True

    def add_days(self, days: int) -> str:
        self._selected = shift_iso_date(self._selected, int(days))
        return self._selected

    def go_prev_day(self) -> str:
        return self.add_days(-1)

    def go_next_day(self) -> str:
        return self.add_days(1)

    def go_to_today(self) -> str:
        self._selected = format_date(utc_today())
        return self._selected

    def is_today(self) -> bool:
        return self._selected == format_date(utc_today())

    def __repr__(self) -> str:
        return f"DateCursor({self._selected!r})"
