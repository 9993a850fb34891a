from datetime import datetime, timezone

from todo_tracker.models import PRIORITIES, CompletionStats, Priority, Task, WorkProcess
from todo_tracker.sync import SyncStatus
from todo_tracker.ui import (
    PRIORITY_LABELS,
    format_last_saved,
    history_chart,
    icon_for,
    priority_badge_html,
    process_card_html,
    task_html,
)


def test_process_card_escapes_user_text():
    p = WorkProcess(id="x", title="<b>Hiring</b>", description="a & b", icon="Star", gradient=["#111111", "#222222"])
    html = process_card_html(p, CompletionStats(1, 4, 25))
    assert "&lt;b&gt;Hiring&lt;/b&gt;" in html
    assert "a &amp; b" in html
    assert "1/4 done" in html
    assert "width:25%" in html
    assert "#111111 0%,#222222 100%" in html


def test_icon_for_named_and_literal():
    assert icon_for(WorkProcess(id="x", title="X", icon="UserPlus")) == "🤝"
    assert icon_for(WorkProcess(id="x", title="X", icon="🚀")) == "🚀"


def test_priority_badges():
    assert priority_badge_html(Priority.NONE) == ""
    assert "ptd-priority-high" in priority_badge_html(Priority.HIGH)
    assert set(PRIORITY_LABELS) == set(PRIORITIES)


def test_task_html_marks_completed():
    html = task_html(Task(id="1", title="Done <now>", completed=True, estimated_time="5m"))
    assert "ptd-task-done" in html
    assert "Done &lt;now&gt;" in html
    assert "5m" in html


def test_history_chart_has_one_bar_per_day():
    history = [("2024-01-14", CompletionStats(0, 0, 0)), ("2024-01-15", CompletionStats(1, 2, 50))]
    fig = history_chart(history, "#3B82F6")
    assert list(fig.data[0].x) == ["2024-01-14", "2024-01-15"]
    assert list(fig.data[0].y) == [0, 50]


def test_format_last_saved():
    sync = SyncStatus()
    assert format_last_saved(sync) == "Not saved yet in this session"
    sync.last_saved_at = datetime(2024, 1, 15, 9, 30, 5, tzinfo=timezone.utc)
    assert format_last_saved(sync) == "Last saved 2024-01-15 09:30:05 UTC"
