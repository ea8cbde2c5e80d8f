"""Navigation helpers for TodoistTreeTUI to keep tui_app slim."""

from core.selection import next_position, previous_position


def move_vertical_selection(tui, delta: int) -> None:
    """Move the task cursor (wrapping), or the subtask cursor while the editor list is focused."""
    if getattr(tui, "editing_mode", False):
        if tui.editor_field_name() != "children":
            return
        total = len(tui.editor_children())
        if delta > 0:
            tui.child_index = next_position(tui.child_index, total)
        else:
            tui.child_index = previous_position(tui.child_index, total)
    elif delta > 0:
        tui.manager.next()
    else:
        tui.manager.previous()
    tui.force_render()


def move_project_selection(tui, delta: int) -> None:
    project = tui.manager.select_project(delta)
    if project is not None:
        tui.list_offset = 0
    tui.force_render()


__all__ = ["move_vertical_selection", "move_project_selection"]
