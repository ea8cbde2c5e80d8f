from .task import Due, Duration, Task, Project, Section, PRIORITY_MIN, PRIORITY_MAX, parse_priority
from .task_store import TaskStore
from .filters import Clock, Filter, FilterKind, SortCriterion
from .tree import (
    TaskCycleError,
    rebuild,
    descendants_of,
    cascade_ids,
    find_parent_cycles,
    depth_map,
)
from .selection import SelectionTracker, reanchor, id_at, position_of
from .cascade import CascadeResult, cascade_remove
from .snapshot import Snapshot

__all__ = [
    "Due",
    "Duration",
    "Task",
    "Project",
    "Section",
    "PRIORITY_MIN",
    "PRIORITY_MAX",
    "parse_priority",
    "TaskStore",
    # Filtering / ordering
    "Clock",
    "Filter",
    "FilterKind",
    "SortCriterion",
    # Tree
    "TaskCycleError",
    "rebuild",
    "descendants_of",
    "cascade_ids",
    "find_parent_cycles",
    "depth_map",
    # Selection
    "SelectionTracker",
    "reanchor",
    "id_at",
    "position_of",
    # Cascade
    "CascadeResult",
    "cascade_remove",
    "Snapshot",
]
