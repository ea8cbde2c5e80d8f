"""Task-tree flattening and descendant resolution.

Pure domain logic: receives the task store as a parameter, performs no I/O and
never mutates the store.
"""

from datetime import date
from typing import Dict, List, Optional, Set

from .filters import Filter, SortCriterion
from .task import Task
from .task_store import TaskStore


class TaskCycleError(ValueError):
    """Raised when a parent chain loops back onto an already visited task."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Cycle detected in parent references at task {task_id!r}")
        self.task_id = task_id


def _children_index(store: TaskStore) -> Dict[str, List[Task]]:
    index: Dict[str, List[Task]] = {}
    for task in store:
        if task.parent_id is not None:
            index.setdefault(task.parent_id, []).append(task)
    for children in index.values():
        children.sort(key=lambda t: t.order)
    return index


def _root_sort_key(criterion: SortCriterion):
    if criterion is SortCriterion.DATE:
        # Undated roots rank after every dated one and equal to each other.
        return lambda t: (t.due_date is None, t.due_date or date.min)
    return lambda t: t.priority


def _emit_subtree(root: Task, index: Dict[str, List[Task]], out: List[str]) -> None:
    """Depth-first pre-order emission (iterative, LIFO)."""
    stack: List[Task] = [root]
    while stack:
        task = stack.pop()
        out.append(task.id)
        # Push in reverse so the lowest ``order`` is processed first.
        stack.extend(reversed(index.get(task.id, [])))


def select_roots(store: TaskStore, flt: Filter, today: date) -> List[Task]:
    return [t for t in store if t.parent_id is None and flt.matches(t, today)]


def rebuild(
    store: TaskStore,
    flt: Filter,
    criterion: SortCriterion,
    today: Optional[date] = None,
) -> List[str]:
    """Build the display list: filtered roots ordered by ``criterion``, each
    followed by its subtree in sibling ``order``.

    Tasks whose parent is missing from the store are unreachable from any root
    and therefore never emitted.
    """
    today = today or date.today()
    roots = sorted(select_roots(store, flt, today), key=_root_sort_key(criterion))
    index = _children_index(store)
    display: List[str] = []
    for root in roots:
        _emit_subtree(root, index, display)
    return display


def descendants_of(task_id: str, store: TaskStore) -> List[str]:
    """All transitive children of ``task_id`` in depth-first order.

    The task itself is not included. A child always precedes its own
    children in the result.
    """
    index = _children_index(store)
    result: List[str] = []
    visited: Set[str] = {task_id}
    stack: List[Task] = list(reversed(index.get(task_id, [])))
    while stack:
        task = stack.pop()
        if task.id in visited:
            raise TaskCycleError(task.id)
        visited.add(task.id)
        result.append(task.id)
        stack.extend(reversed(index.get(task.id, [])))
    return result


def cascade_ids(task_id: str, store: TaskStore) -> List[str]:
    """``task_id`` followed by its full descendant set."""
    return [task_id] + descendants_of(task_id, store)


def find_parent_cycles(store: TaskStore) -> List[str]:
    """Ids of tasks whose parent chain never terminates.

    Used to warn about malformed snapshots; the flattening engine already
    skips such tasks since they are unreachable from any root.
    """
    parents: Dict[str, Optional[str]] = {t.id: t.parent_id for t in store}
    state: Dict[str, bool] = {}  # id -> chain terminates
    looping: List[str] = []
    for start in parents:
        path: List[str] = []
        on_path: Set[str] = set()
        node: Optional[str] = start
        terminates = True
        while node is not None and node in parents:
            if node in state:
                terminates = state[node]
                break
            if node in on_path:
                terminates = False
                break
            on_path.add(node)
            path.append(node)
            node = parents[node]
        for visited in path:
            state[visited] = terminates
        if not terminates:
            looping.append(start)
    return looping


def depth_map(display: List[str], store: TaskStore) -> Dict[str, int]:
    """Nesting depth of every entry of a display list (roots are 0)."""
    depths: Dict[str, int] = {}
    for task_id in display:
        task = store.get(task_id)
        parent = task.parent_id if task else None
        depths[task_id] = depths[parent] + 1 if parent in depths else 0
    return depths


__all__ = [
    "TaskCycleError",
    "select_roots",
    "rebuild",
    "descendants_of",
    "cascade_ids",
    "find_parent_cycles",
    "depth_map",
]
