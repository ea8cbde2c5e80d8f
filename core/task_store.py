"""Flat, owned collection of tasks.

Parent/child relations are string back-references (``Task.parent_id``); the
store keeps no tree structure of its own. Removal returns a new store so that
callers can rebuild derived views from a consistent snapshot.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from .task import Task


class TaskStore:
    def __init__(self, tasks: Optional[Iterable[Task]] = None) -> None:
        self._tasks: List[Task] = list(tasks or [])
        self._by_id: Dict[str, Task] = {t.id: t for t in self._tasks}

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._by_id

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def get(self, task_id: Optional[str]) -> Optional[Task]:
        if task_id is None:
            return None
        return self._by_id.get(task_id)

    def children_of(self, task_id: str) -> List[Task]:
        """Direct children ordered by the sibling ``order`` field."""
        children = [t for t in self._tasks if t.parent_id == task_id]
        children.sort(key=lambda t: t.order)
        return children

    def child_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for task in self._tasks:
            if task.parent_id is not None:
                counts[task.parent_id] = counts.get(task.parent_id, 0) + 1
        return counts

    def without(self, task_ids: Iterable[str]) -> "TaskStore":
        drop = set(task_ids)
        return TaskStore(t for t in self._tasks if t.id not in drop)

    def replace(self, task: Task) -> "TaskStore":
        return TaskStore(task if t.id == task.id else t for t in self._tasks)


__all__ = ["TaskStore"]
