"""Application-level owner of the task tree, its display list and cursor."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from core import (
    Filter,
    FilterKind,
    Project,
    Section,
    SelectionTracker,
    Snapshot,
    SortCriterion,
    Task,
    TaskStore,
    cascade_remove,
    depth_map,
    find_parent_cycles,
    parse_priority,
    rebuild,
    PRIORITY_MAX,
    PRIORITY_MIN,
)
from core.selection import next_position, previous_position
from core.desktop.devtools.application.mutation_dispatcher import (
    MutationCommand,
    MutationDispatcher,
    MutationOp,
    MutationResult,
)
from infrastructure.todoist.serializers import new_task_payload, task_update_payload

logger = logging.getLogger("todoist_tree.tasks")

Row = Tuple[Task, int, int]


class TaskListManager:
    """Single-threaded owner of the local task mirror.

    Every mutating method updates the store, rebuilds the display list and
    re-anchors the selection before returning; remote commands are queued
    only after the local state is consistent.
    """

    def __init__(
        self,
        dispatcher: MutationDispatcher,
        sort: SortCriterion = SortCriterion.PRIORITY,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.dispatcher = dispatcher
        self.clock = clock
        self.store = TaskStore()
        self.projects: List[Project] = []
        self.sections: List[Section] = []
        self.filter = Filter.all()
        self.sort = sort
        self.display: List[str] = []
        self.selection = SelectionTracker()
        self.project_cursor: Optional[int] = None
        self.needs_resync = False
        self._child_counts: Dict[str, int] = {}

    # ------------------------------------------------------------------ state

    @property
    def selected_project_id(self) -> Optional[str]:
        if self.filter.kind is FilterKind.PROJECT:
            return self.filter.project_id
        return None

    def selected_task(self) -> Optional[Task]:
        return self.store.get(self.selection.selected_id(self.display))

    def selected_project(self) -> Optional[Project]:
        if self.project_cursor is None or not (0 <= self.project_cursor < len(self.projects)):
            return None
        return self.projects[self.project_cursor]

    def children_of(self, task_id: str) -> List[Task]:
        return self.store.children_of(task_id)

    def child_count(self, task_id: str) -> int:
        return self._child_counts.get(task_id, 0)

    def rows(self) -> List[Row]:
        """(task, depth, child count) for every display entry, in order."""
        depths = depth_map(self.display, self.store)
        rows: List[Row] = []
        for task_id in self.display:
            task = self.store.get(task_id)
            if task is not None:
                rows.append((task, depths.get(task_id, 0), self.child_count(task_id)))
        return rows

    def cursor_snapshot(self) -> Tuple[Optional[int], Optional[str]]:
        return self.selection.position, self.selected_project_id

    def export_snapshot(self, timestamp: int = 0) -> Snapshot:
        """Current local state (including unsynced edits) with the cursor."""
        position, project_id = self.cursor_snapshot()
        return Snapshot(
            tasks=list(self.store),
            projects=list(self.projects),
            sections=list(self.sections),
            timestamp=timestamp,
            cursor_position=position,
            selected_project_id=project_id,
        )

    def default_project_id(self) -> Optional[str]:
        """Project for a new top-level task: filtered project, selected task's, then inbox."""
        if self.selected_project_id:
            return self.selected_project_id
        task = self.selected_task()
        if task is not None:
            return task.project_id
        inbox = next((p for p in self.projects if p.is_inbox_project), None)
        return inbox.id if inbox else None

    def _rebuild(self, auto_select: bool = False) -> None:
        old_display = self.display
        self.display = rebuild(self.store, self.filter, self.sort, self.clock())
        self.selection.rebase(old_display, self.display, auto_select_first=auto_select)

    def _replace_store(self, store: TaskStore) -> None:
        self.store = store
        self._child_counts = store.child_counts()

    # ---------------------------------------------------------------- loading

    def load(self, snapshot: Snapshot, auto_select: bool = True) -> None:
        """Replace local state with ``snapshot`` and rebuild.

        An existing selection is kept on the same task when it survives the
        reload; otherwise the cached cursor position is restored.
        """
        previous_id = self.selection.selected_id(self.display)
        self._replace_store(TaskStore(snapshot.tasks))
        self.projects = list(snapshot.projects)
        self.sections = list(snapshot.sections)
        looping = find_parent_cycles(self.store)
        if looping:
            logger.warning("Ignoring %d task(s) with cyclic parent references: %s", len(looping), ", ".join(looping))

        project_id = snapshot.selected_project_id or self.selected_project_id
        project_ids = [p.id for p in self.projects]
        if project_id and project_id in project_ids:
            self.filter = Filter.project(project_id)
            self.project_cursor = project_ids.index(project_id)
        elif self.filter.kind is FilterKind.PROJECT:
            self.filter = Filter.all()
            self.project_cursor = None

        self.display = rebuild(self.store, self.filter, self.sort, self.clock())
        self._restore_selection(previous_id, snapshot.cursor_position, auto_select)
        self.needs_resync = False
        logger.debug(
            "Loaded %d tasks (%d shown) from %s", len(self.store), len(self.display), snapshot.source
        )

    def _restore_selection(self, previous_id: Optional[str], cursor_position: Optional[int], auto_select: bool) -> None:
        if previous_id is not None and self.selection.select_id(previous_id, self.display) is not None:
            return
        if cursor_position is not None and self.selection.select(cursor_position, self.display) is not None:
            return
        if auto_select and self.display:
            self.selection.select(0, self.display)
        else:
            self.selection.unselect()

    # ---------------------------------------------------- filter / sort / nav

    def set_filter(self, flt: Filter, auto_select: bool = True) -> None:
        self.filter = flt
        if flt.kind is not FilterKind.PROJECT:
            self.project_cursor = None
        self.display = rebuild(self.store, self.filter, self.sort, self.clock())
        self.selection.unselect()
        if auto_select and self.display:
            self.selection.select(0, self.display)

    def set_sort(self, criterion: SortCriterion) -> None:
        self.sort = criterion
        self._rebuild()

    def toggle_sort(self) -> SortCriterion:
        self.set_sort(self.sort.toggled())
        return self.sort

    def refresh(self) -> None:
        """Re-evaluate date filters, e.g. after midnight."""
        self._rebuild()

    def next(self) -> Optional[int]:
        return self.selection.next(self.display)

    def previous(self) -> Optional[int]:
        return self.selection.previous(self.display)

    def select_project(self, delta: int) -> Optional[Project]:
        """Move the project cursor by one step (wrapping) and filter by it."""
        total = len(self.projects)
        if delta >= 0:
            self.project_cursor = next_position(self.project_cursor, total)
        else:
            self.project_cursor = previous_position(self.project_cursor, total)
        project = self.selected_project()
        if project is not None:
            self.set_filter(Filter.project(project.id), auto_select=False)
            self.project_cursor = [p.id for p in self.projects].index(project.id)
        return project

    # -------------------------------------------------------------- mutations

    def _cascade(self, op: MutationOp) -> List[str]:
        task = self.selected_task()
        if task is None:
            return []
        result = cascade_remove(
            task.id, self.store, self.display, self.selection.position, self.filter, self.sort, self.clock()
        )
        self._replace_store(result.store)
        self.display = result.display
        self.selection.position = result.selection
        for task_id in result.removed_ids:
            self.dispatcher.submit(MutationCommand(op, task_id))
        logger.info("%s %s with %d descendant(s)", op.value, task.id, len(result.removed_ids) - 1)
        return result.removed_ids

    def complete_selected(self) -> List[str]:
        return self._cascade(MutationOp.CLOSE)

    def delete_selected(self) -> List[str]:
        return self._cascade(MutationOp.DELETE)

    def set_priority(self, priority: int) -> Optional[Task]:
        if not PRIORITY_MIN <= priority <= PRIORITY_MAX:
            raise ValueError(f"Priority must be between {PRIORITY_MIN} and {PRIORITY_MAX}: {priority}")
        task = self.selected_task()
        if task is None:
            return None
        updated = replace(task, priority=priority)
        self._replace_store(self.store.replace(updated))
        self._rebuild()
        self.dispatcher.submit(MutationCommand(MutationOp.UPDATE, updated.id, task_update_payload(updated)))
        return updated

    def apply_edit(
        self,
        task_id: str,
        content: str,
        description: str,
        priority_text: str = "",
        due_string: Optional[str] = None,
    ) -> Optional[Task]:
        task = self.store.get(task_id)
        if task is None:
            return None
        priority = parse_priority(priority_text)
        updated = replace(
            task,
            content=content,
            description=description,
            priority=priority if priority is not None else task.priority,
        )
        self._replace_store(self.store.replace(updated))
        self._rebuild()
        self.dispatcher.submit(
            MutationCommand(MutationOp.UPDATE, updated.id, task_update_payload(updated, due_string))
        )
        return updated

    def create_task(
        self,
        content: str,
        project_id: str,
        parent_id: Optional[str] = None,
        description: str = "",
        priority_text: str = "",
        due_string: str = "",
    ) -> Optional[MutationCommand]:
        """Queue a remote create; the task shows up after the next resync."""
        content = (content or "").strip()
        if not content or not project_id:
            return None
        payload = new_task_payload(
            content,
            project_id,
            parent_id=parent_id,
            description=description,
            priority=parse_priority(priority_text),
            due_string=due_string.strip(),
        )
        command = MutationCommand(MutationOp.CREATE, None, payload)
        self.dispatcher.submit(command)
        return command

    def poll_results(self) -> List[MutationResult]:
        """Collect finished remote commands; failures do not roll anything back."""
        results = self.dispatcher.drain_results()
        for result in results:
            if not result.ok:
                logger.warning("Local state may diverge until next sync: %s (%s)", result.command.describe(), result.error)
            elif result.command.op is MutationOp.CREATE:
                self.needs_resync = True
        return results


__all__ = ["TaskListManager", "Row"]
