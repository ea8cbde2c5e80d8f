"""Task editor mixin for TUI."""

from typing import TYPE_CHECKING, List, Optional, Tuple

from core import Task

if TYPE_CHECKING:
    from prompt_toolkit.application import Application
    from prompt_toolkit.layout import Container
    from prompt_toolkit.widgets import TextArea

    from core.desktop.devtools.application.task_list_manager import TaskListManager

EDIT_FIELDS: Tuple[str, ...] = ("content", "description", "priority", "due", "children")
NEW_TASK_FIELDS: Tuple[str, ...] = ("content", "description", "priority", "due")


class EditingMixin:
    """Edit-existing and new-task forms for the TUI."""

    editing_mode: bool
    edit_context: Optional[str]
    edit_task_id: Optional[str]
    edit_project_id: Optional[str]
    edit_parent_id: Optional[str]
    edit_field_index: int
    child_index: Optional[int]
    content_field: "TextArea"
    description_field: "TextArea"
    priority_field: "TextArea"
    due_field: "TextArea"
    children_window: "Container"
    main_window: "Container"
    manager: "TaskListManager"
    app: Optional["Application"]

    def _field_container(self, name: str) -> "Container":
        return {
            "content": self.content_field,
            "description": self.description_field,
            "priority": self.priority_field,
            "due": self.due_field,
            "children": self.children_window,
        }[name]

    def _fill_fields(self, content: str, description: str, priority: str, due: str) -> None:
        for area, value in (
            (self.content_field, content),
            (self.description_field, description),
            (self.priority_field, priority),
            (self.due_field, due),
        ):
            area.text = value
            area.buffer.cursor_position = len(value)

    def _focus_current_field(self) -> None:
        if getattr(self, "app", None):
            self.app.layout.focus(self._field_container(self.editor_field_name()))

    def editor_field_names(self) -> Tuple[str, ...]:
        return EDIT_FIELDS if self.edit_context == "edit" else NEW_TASK_FIELDS

    def editor_field_name(self) -> str:
        if not self.editing_mode:
            return ""
        names = self.editor_field_names()
        return names[self.edit_field_index % len(names)]

    def editor_children(self) -> List[Task]:
        if self.edit_context != "edit" or not self.edit_task_id:
            return []
        return self.manager.children_of(self.edit_task_id)

    def editor_title(self) -> str:
        if self.edit_context == "edit":
            return self._t("EDITOR_TITLE")
        if self.edit_parent_id:
            parent = self.manager.store.get(self.edit_parent_id)
            return self._t("EDITOR_NEW_SUBTASK_TITLE", parent=parent.content if parent else self.edit_parent_id)
        project = next((p for p in self.manager.projects if p.id == self.edit_project_id), None)
        return self._t("EDITOR_NEW_TITLE", project=project.name if project else self.edit_project_id)

    def start_editing(self, task: Task) -> None:
        self.editing_mode = True
        self.edit_context = "edit"
        self.edit_task_id = task.id
        self.edit_project_id = task.project_id
        self.edit_parent_id = task.parent_id
        self.edit_field_index = 0
        self.child_index = 0 if self.manager.children_of(task.id) else None
        self._fill_fields(task.content, task.description, str(task.priority), task.due_string)
        self._focus_current_field()

    def start_new_task(self, project_id: str, parent_id: Optional[str] = None) -> None:
        self.editing_mode = True
        self.edit_context = "new"
        self.edit_task_id = None
        self.edit_project_id = project_id
        self.edit_parent_id = parent_id
        self.edit_field_index = 0
        self.child_index = None
        self._fill_fields("", "", "", "")
        self._focus_current_field()

    def cycle_field(self) -> None:
        self.edit_field_index = (self.edit_field_index + 1) % len(self.editor_field_names())
        self._focus_current_field()

    def open_selected_child(self) -> None:
        """Switch the editor to the highlighted subtask; unsaved edits are dropped."""
        children = self.editor_children()
        if self.child_index is None or not (0 <= self.child_index < len(children)):
            return
        self.start_editing(children[self.child_index])

    def new_subtask_from_editor(self) -> None:
        task = self.manager.store.get(self.edit_task_id)
        if task is not None:
            self.start_new_task(task.project_id, parent_id=task.id)

    def save_edit(self) -> None:
        from core.desktop.devtools.interface.edit_handlers import handle_create_task, handle_task_edit

        if not self.editing_mode:
            return
        if self.edit_context == "edit":
            done = handle_task_edit(self)
        else:
            done = handle_create_task(self)
        if done:
            self.cancel_edit()

    def cancel_edit(self) -> None:
        self.editing_mode = False
        self.edit_context = None
        self.edit_task_id = None
        self.edit_parent_id = None
        self.edit_field_index = 0
        self.child_index = None
        if getattr(self, "app", None):
            self.app.layout.focus(self.main_window)


__all__ = ["EditingMixin", "EDIT_FIELDS", "NEW_TASK_FIELDS"]
