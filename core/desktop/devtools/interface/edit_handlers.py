"""Save handlers for the TUI task editor."""

from typing import Optional

NO_DATE = "no date"


def _due_change(previous: str, entered: str) -> Optional[str]:
    """Due string to send, or None when the field was left untouched."""
    entered = entered.strip()
    if entered == (previous or "").strip():
        return None
    return entered or NO_DATE


def handle_task_edit(tui) -> bool:
    task = tui.manager.store.get(tui.edit_task_id)
    if task is None:
        return True
    content = tui.content_field.text.strip()
    if not content:
        tui.set_status_message(tui._t("STATUS_MESSAGE_EMPTY_CONTENT"), style="class:status.fail")
        return False
    tui.manager.apply_edit(
        task.id,
        content,
        tui.description_field.text,
        priority_text=tui.priority_field.text,
        due_string=_due_change(task.due_string, tui.due_field.text),
    )
    tui.set_status_message(tui._t("STATUS_MESSAGE_SAVED"))
    return True


def handle_create_task(tui) -> bool:
    content = tui.content_field.text.strip()
    if not content:
        tui.set_status_message(tui._t("STATUS_MESSAGE_EMPTY_CONTENT"), style="class:status.fail")
        return False
    command = tui.manager.create_task(
        content,
        tui.edit_project_id or "",
        parent_id=tui.edit_parent_id,
        description=tui.description_field.text,
        priority_text=tui.priority_field.text,
        due_string=tui.due_field.text,
    )
    if command is None:
        tui.set_status_message(tui._t("STATUS_MESSAGE_NO_PROJECT"), style="class:status.fail")
        return True
    tui.set_status_message(tui._t("STATUS_MESSAGE_CREATED", content=content))
    return True


__all__ = ["handle_task_edit", "handle_create_task"]
