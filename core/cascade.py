"""Removal of a task together with its whole subtree as one logical step."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence, Set

from .filters import Filter, SortCriterion
from .selection import id_at, position_of, reanchor
from .task_store import TaskStore
from .tree import cascade_ids, rebuild


@dataclass
class CascadeResult:
    store: TaskStore
    display: List[str]
    selection: Optional[int]
    removed_ids: List[str] = field(default_factory=list)


def _successor_anchor(old_display: Sequence[str], removed: Set[str], block_start: Optional[int]) -> Optional[str]:
    """First surviving entry after the removed block, else the nearest one before it."""
    if block_start is None:
        return None
    for task_id in old_display[block_start:]:
        if task_id not in removed:
            return task_id
    for task_id in reversed(old_display[:block_start]):
        if task_id not in removed:
            return task_id
    return None


def cascade_remove(
    task_id: str,
    store: TaskStore,
    display: Sequence[str],
    selection: Optional[int],
    flt: Filter,
    criterion: SortCriterion,
    today: Optional[date] = None,
) -> CascadeResult:
    """Drop ``task_id`` and all its descendants, rebuild and re-anchor.

    Purely local: the caller issues one remote request per id in
    ``removed_ids`` after this returns.
    """
    removed_ids = cascade_ids(task_id, store)
    removed = set(removed_ids)
    new_store = store.without(removed)
    new_display = rebuild(new_store, flt, criterion, today)

    selected = id_at(display, selection)
    if selected is not None and selected not in removed:
        anchor: Optional[str] = selected
    else:
        anchor = _successor_anchor(display, removed, position_of(display, task_id))
    anchored = position_of(new_display, anchor)
    if anchored is not None:
        new_selection: Optional[int] = anchored
    else:
        new_selection = reanchor(selection, display, new_display)
    return CascadeResult(new_store, new_display, new_selection, removed_ids)


__all__ = ["CascadeResult", "cascade_remove"]
