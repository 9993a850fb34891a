from datetime import date

import pytest

from todo_tracker.models import Priority, Task
from todo_tracker.utils import (
    EXPORT_COLUMNS,
    format_long_date,
    generate_unique_id,
    parse_iso_date,
    round_half_up,
    shift_iso_date,
    tasks_to_df,
)


@pytest.mark.parametrize("value", ["2024-13-01", "2024-02-30", "24-01-01", "2024-1-5", "", None, "yesterday"])
def test_parse_iso_date_rejects_invalid(value):
    assert parse_iso_date(value) is None


def test_parse_iso_date():
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)


def test_shift_iso_date_crosses_boundaries():
    assert shift_iso_date("2024-03-01", -1) == "2024-02-29"
    assert shift_iso_date("2023-12-31", 1) == "2024-01-01"


def test_format_long_date():
    assert format_long_date("2024-01-05") == "Friday, January 5, 2024"


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(33.333) == 33
    assert round_half_up(66.666) == 67


def test_unique_ids():
    assert len({generate_unique_id() for _ in range(100)}) == 100


def test_tasks_to_df():
    fixed = [Task(id="f", title="Fixed", fixed=True)]
    daily = [Task(id="a", title="A", priority=Priority.HIGH, completed=True, estimated_time="1h"), Task(id="b", title="B")]
    df = tasks_to_df(fixed, daily)
    assert list(df.columns) == EXPORT_COLUMNS
    assert list(df["section"]) == ["fixed", "daily", "daily"]
    assert list(df["position"]) == [1, 1, 2]
    assert df.iloc[1]["priority"] == "high"
    assert df.iloc[2]["estimated_time"] == ""


def test_tasks_to_df_empty():
    df = tasks_to_df([], [])
    assert df.empty
    assert list(df.columns) == EXPORT_COLUMNS
