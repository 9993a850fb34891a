"""Domain records: tasks, per-day buckets and work processes.

Serialised keys keep the camelCase layout used by the stored documents
(``processId``, ``estimatedTime``) so both storage backends read the same data.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

FIXED_DATE = "fixed"


class Priority(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def coerce(cls, raw: Any) -> "Priority":
        if isinstance(raw, Priority):
            return raw
        try:
            return cls(str(raw or "").strip().lower())
        except ValueError:
            return cls.NONE


PRIORITIES: List[str] = [p.value for p in Priority]


@dataclass
class Task:
    id: str
    title: str
    description: str = ""
    completed: bool = False
    priority: Priority = Priority.NONE
    estimated_time: Optional[str] = None
    fixed: bool = False
    order: Optional[float] = None

    @property
    def sort_key(self) -> float:
        return self.order or 0

    def clone(self, new_id: str) -> "Task":
        """Copy with a new identity and completion reset."""
        return replace(self, id=new_id, completed=False)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority.value,
        }
        if self.estimated_time:
            data["estimatedTime"] = self.estimated_time
        if self.fixed:
            data["fixed"] = True
        if self.order is not None:
            data["order"] = self.order
        return data

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Task":
        order = raw.get("order")
        return cls(
            id=str(raw.get("id") or ""),
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            completed=bool(raw.get("completed", False)),
            priority=Priority.coerce(raw.get("priority")),
            estimated_time=raw.get("estimatedTime") or None,
            fixed=bool(raw.get("fixed", False)),
            order=order if isinstance(order, (int, float)) and not isinstance(order, bool) else None,
        )


@dataclass
class DailyBucket:
    process_id: str
    date: str
    todos: List[Task] = field(default_factory=list)

    @property
    def key(self) -> tuple:
        return (self.process_id, self.date)

    @property
    def is_fixed(self) -> bool:
        return self.date == FIXED_DATE

    def find(self, task_id: str) -> Optional[Task]:
        for task in self.todos:
            if task.id == task_id:
                return task
        return None

    def sorted_todos(self) -> List[Task]:
        # sorted() is stable, so equal order keys keep insertion position.
        return sorted(self.todos, key=lambda t: t.sort_key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processId": self.process_id,
            "date": self.date,
            "todos": [t.to_dict() for t in self.todos],
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DailyBucket":
        todos = raw.get("todos") or []
        return cls(
            process_id=str(raw.get("processId") or ""),
            date=str(raw.get("date") or ""),
            todos=[Task.from_dict(t) for t in todos if isinstance(t, dict)],
        )


@dataclass
class WorkProcess:
    id: str
    title: str
    description: str = ""
    icon: str = "ListChecks"
    color: str = "#8B5CF6"
    gradient: List[str] = field(default_factory=lambda: ["#8B5CF6", "#7C3AED"])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "color": self.color,
            "gradient": list(self.gradient),
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "WorkProcess":
        color = str(raw.get("color") or "#8B5CF6")
        gradient = raw.get("gradient")
        if not isinstance(gradient, list) or len(gradient) < 2:
            gradient = [color, color]
        return cls(
            id=str(raw.get("id") or ""),
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            icon=str(raw.get("icon") or "ListChecks"),
            color=color,
            gradient=[str(g) for g in gradient[:2]],
        )


@dataclass(frozen=True)
class CompletionStats:
    completed: int
    total: int
    percentage: int
