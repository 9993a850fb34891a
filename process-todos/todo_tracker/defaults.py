"""Builtin work processes and the sample dataset used on first run."""

from __future__ import annotations

from typing import List, Optional

from todo_tracker.models import DailyBucket, Priority, Task, WorkProcess
from todo_tracker.utils import format_date, shift_iso_date, utc_today


WORK_PROCESSES: List[WorkProcess] = [
    WorkProcess(
        id="daily-todos",
        title="Daily To Do's",
        description="Manage your daily tasks and priorities",
        icon="ListChecks",
        color="#8B5CF6",
        gradient=["#8B5CF6", "#7C3AED"],
    ),
    WorkProcess(
        id="onboarding",
        title="Onboarding Partners",
        description="Welcome new partners and set them up for success",
        icon="UserPlus",
        color="#3B82F6",
        gradient=["#3B82F6", "#1D4ED8"],
    ),
    WorkProcess(
        id="accounts",
        title="Managing Accounts",
        description="Maintain and grow existing client relationships",
        icon="Users",
        color="#10B981",
        gradient=["#10B981", "#059669"],
    ),
]

BUILTIN_PROCESS_IDS = frozenset(p.id for p in WORK_PROCESSES)

# Colour pairs handed out to user-created processes, in rotation.
PROCESS_PALETTE: List[List[str]] = [
    ["#F59E0B", "#D97706"],
    ["#EF4444", "#DC2626"],
    ["#EC4899", "#DB2777"],
    ["#14B8A6", "#0D9488"],
    ["#6366F1", "#4F46E5"],
    ["#84CC16", "#65A30D"],
]

# Named icons rendered as emoji in the UI; any other value is shown as-is.
ICONS = {
    "ListChecks": "✅",
    "UserPlus": "🤝",
    "Users": "👥",
    "Briefcase": "💼",
    "Calendar": "📅",
    "Star": "⭐",
}


def default_processes() -> List[WorkProcess]:
    return [WorkProcess.from_dict(p.to_dict()) for p in WORK_PROCESSES]


def _task(task_id: str, title: str, description: str, priority: Priority, completed: bool = False) -> Task:
    return Task(id=task_id, title=title, description=description, priority=priority, completed=completed)


def sample_buckets(today: Optional[str] = None) -> List[DailyBucket]:
    """Demo tasks for today and yesterday so "copy from previous day" has something to copy."""
    today = today or format_date(utc_today())
    yesterday = shift_iso_date(today, -1)
    return [
        DailyBucket("onboarding", today, [
            _task("sample-1", "Review partner application", "Check all required documents and information", Priority.HIGH),
            _task("sample-2", "Schedule onboarding call", "Set up initial meeting with new partner", Priority.MEDIUM),
        ]),
        DailyBucket("accounts", today, [
            _task("sample-3", "Follow up with client", "Check on project status and next steps", Priority.LOW),
        ]),
        DailyBucket("onboarding", yesterday, [
            _task("sample-4", "Complete partner verification", "Verify all partner documents and credentials",
                  Priority.HIGH, completed=True),
            _task("sample-5", "Send welcome email", "Send onboarding welcome email to new partner", Priority.MEDIUM),
        ]),
        DailyBucket("accounts", yesterday, [
            _task("sample-6", "Update client dashboard", "Refresh metrics shared with the client", Priority.MEDIUM,
                  completed=True),
        ]),
    ]
