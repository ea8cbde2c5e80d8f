from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class Due:
    date: date
    string: str = ""
    is_recurring: bool = False
    datetime: Optional[str] = None
    timezone: Optional[str] = None


@dataclass
class Duration:
    amount: int
    unit: str


@dataclass
class Task:
    """Single node of the task forest as mirrored from the remote service."""

    id: str
    project_id: str
    content: str = ""
    description: str = ""
    parent_id: Optional[str] = None
    order: int = 0
    priority: int = 4
    due: Optional[Due] = None
    section_id: Optional[str] = None
    is_completed: bool = False
    labels: List[str] = field(default_factory=list)
    url: str = ""
    comment_count: int = 0
    created_at: str = ""
    creator_id: str = ""
    assignee_id: Optional[str] = None
    assigner_id: Optional[str] = None
    duration: Optional[Duration] = None

    @property
    def due_date(self) -> Optional[date]:
        return self.due.date if self.due else None

    @property
    def due_string(self) -> str:
        return self.due.string if self.due else ""


@dataclass
class Project:
    id: str
    name: str
    order: int = 0
    color: str = ""
    parent_id: Optional[str] = None
    is_favorite: bool = False
    is_inbox_project: bool = False
    view_style: str = "list"
    url: str = ""


@dataclass
class Section:
    id: str
    project_id: str
    name: str
    order: int = 0


PRIORITY_MIN = 1
PRIORITY_MAX = 4


def parse_priority(value: str) -> Optional[int]:
    """Parse user-entered priority text; None for empty or out-of-range input."""
    token = (value or "").strip()
    if not token:
        return None
    try:
        priority = int(token)
    except ValueError:
        return None
    if PRIORITY_MIN <= priority <= PRIORITY_MAX:
        return priority
    return None


__all__ = ["Due", "Duration", "Task", "Project", "Section", "PRIORITY_MIN", "PRIORITY_MAX", "parse_priority"]
