from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Optional

from .task import Task

Clock = Callable[[], date]


class FilterKind(Enum):
    ALL = "all"
    TODAY = "today"
    OVERDUE = "overdue"
    PROJECT = "project"


class SortCriterion(Enum):
    PRIORITY = "priority"
    DATE = "date"

    @classmethod
    def from_string(cls, value: str) -> "SortCriterion":
        token = (value or "").strip().lower()
        for criterion in cls:
            if criterion.value == token:
                return criterion
        raise ValueError(f"Unknown sort criterion: {value!r}")

    def toggled(self) -> "SortCriterion":
        return SortCriterion.DATE if self is SortCriterion.PRIORITY else SortCriterion.PRIORITY


@dataclass(frozen=True)
class Filter:
    """Active root-level filter. ``project_id`` is only set for PROJECT."""

    kind: FilterKind = FilterKind.ALL
    project_id: Optional[str] = None

    @classmethod
    def all(cls) -> "Filter":
        return cls(FilterKind.ALL)

    @classmethod
    def today(cls) -> "Filter":
        return cls(FilterKind.TODAY)

    @classmethod
    def overdue(cls) -> "Filter":
        return cls(FilterKind.OVERDUE)

    @classmethod
    def project(cls, project_id: str) -> "Filter":
        return cls(FilterKind.PROJECT, project_id)

    @classmethod
    def from_string(cls, value: str, project_id: Optional[str] = None) -> "Filter":
        token = (value or "all").strip().lower()
        if project_id:
            return cls.project(project_id)
        if token == FilterKind.TODAY.value:
            return cls.today()
        if token == FilterKind.OVERDUE.value:
            return cls.overdue()
        if token == FilterKind.ALL.value:
            return cls.all()
        raise ValueError(f"Unknown filter: {value!r}")

    def matches(self, task: Task, today: date) -> bool:
        """Evaluate the predicate on the task's own attributes only."""
        if self.kind is FilterKind.ALL:
            return True
        if self.kind is FilterKind.PROJECT:
            return task.project_id == self.project_id
        due = task.due_date
        if due is None:
            return False
        if self.kind is FilterKind.TODAY:
            return due == today
        return due < today

    @property
    def label(self) -> str:
        if self.kind is FilterKind.PROJECT:
            return f"project:{self.project_id}"
        return self.kind.value


__all__ = ["Clock", "FilterKind", "SortCriterion", "Filter"]
