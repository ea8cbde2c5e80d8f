"""Formatted-text renderers for TodoistTreeTUI panes."""

from datetime import date
from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText
from wcwidth import wcswidth, wcwidth

from core import Task
from core.desktop.devtools.interface.constants import PRIORITY_STYLES
from util.responsive import ResponsiveLayoutManager

INDENT = "  "
CHILD_MARKER = "▸ "
LEAF_MARKER = "  "
PROJECTS_WIDTH = 24


def display_width(text: str) -> int:
    width = wcswidth(text)
    if width >= 0:
        return width
    return sum(max(0, wcwidth(ch)) for ch in text)


def fit(text: str, width: int) -> str:
    """Pad or cut ``text`` to exactly ``width`` terminal cells."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text + " " * (width - display_width(text))
    out: List[str] = []
    used = 0
    for ch in text:
        w = max(0, wcwidth(ch))
        if used + w > width - 1:
            break
        out.append(ch)
        used += w
    return "".join(out) + "…" + " " * (width - used - 1)


def format_due(task: Task, today: date) -> Tuple[str, str]:
    due = task.due_date
    if due is None:
        return "class:due", ""
    label = task.due_string or due.isoformat()
    if due < today:
        return "class:due.overdue", label
    if due == today:
        return "class:due.today", label
    return "class:due", label


def priority_label(task: Task) -> Tuple[str, str]:
    return PRIORITY_STYLES.get(task.priority, "class:text.dim"), f"p{task.priority}"


def scroll_offset(selected: Optional[int], offset: int, visible: int, total: int) -> int:
    """Keep ``selected`` inside a window of ``visible`` rows."""
    if visible <= 0 or total <= visible:
        return 0
    if selected is None:
        return max(0, min(offset, total - visible))
    if selected < offset:
        return selected
    if selected >= offset + visible:
        return selected - visible + 1
    return max(0, min(offset, total - visible))


def render_task_list_text(tui) -> FormattedText:
    manager = tui.manager
    term_width = max(20, tui.get_terminal_width() - PROJECTS_WIDTH - 1)
    rows = manager.rows()
    if not rows:
        return FormattedText([
            ("class:text.dim", tui._t("TASK_LIST_EMPTY") + "\n"),
            ("class:text.dimmer", tui._t("TASK_LIST_EMPTY_HINT")),
        ])

    layout = ResponsiveLayoutManager.select_layout(term_width)
    desired = {
        "due": max((display_width(format_due(t, tui.today())[1]) for t, _, _ in rows), default=0),
        "children": max((len(str(count)) + 1 for _, _, count in rows), default=0),
    }
    widths = layout.calculate_widths(term_width, desired)
    selected = manager.selection.position
    visible = max(1, tui.get_terminal_height() - 4)
    tui.list_offset = scroll_offset(selected, getattr(tui, "list_offset", 0), visible, len(rows))

    result: List[Tuple[str, str]] = []
    header = [fit(tui._t("TABLE_HEADER_PRIORITY"), widths["prio"]), fit(tui._t("TABLE_HEADER_TASK"), widths["title"])]
    if layout.has_column("due"):
        header.append(fit(tui._t("TABLE_HEADER_DUE"), widths["due"]))
    if layout.has_column("children"):
        header.append(fit(tui._t("TABLE_HEADER_CHILDREN"), widths["children"]))
    result.append(("class:header", " ".join(header) + "\n"))

    today = tui.today()
    for index in range(tui.list_offset, min(len(rows), tui.list_offset + visible)):
        task, depth, count = rows[index]
        is_selected = index == selected

        def style(base: str) -> str:
            return "class:selected" if is_selected else base

        prio_style, prio_text = priority_label(task)
        result.append((style(prio_style), fit(prio_text, widths["prio"])))
        result.append((style("class:text"), " "))
        marker = CHILD_MARKER if count else LEAF_MARKER
        result.append((style("class:text"), fit(INDENT * depth + marker + task.content, widths["title"])))
        if layout.has_column("due"):
            due_style, due_text = format_due(task, today)
            result.append((style("class:text"), " "))
            result.append((style(due_style), fit(due_text, widths["due"])))
        if layout.has_column("children"):
            result.append((style("class:text"), " "))
            result.append((style("class:text.dim"), fit(f"Σ{count}" if count else "", widths["children"])))
        result.append(("", "\n"))
    return FormattedText(result)


def render_projects_text(tui) -> FormattedText:
    manager = tui.manager
    result: List[Tuple[str, str]] = [("class:header", fit(tui._t("PROJECTS_HEADER"), PROJECTS_WIDTH) + "\n")]
    for index, project in enumerate(manager.projects):
        active = index == manager.project_cursor
        result.append(("class:project.selected" if active else "class:project", fit(" " + project.name, PROJECTS_WIDTH)))
        result.append(("", "\n"))
    return FormattedText(result)


def render_children_text(tui) -> FormattedText:
    """Subtask list inside the task editor."""
    children = tui.editor_children()
    focused = tui.editor_field_name() == "children"
    label_style = "class:field.active" if focused else "class:field.label"
    result: List[Tuple[str, str]] = [(label_style, tui._t("FIELD_CHILDREN") + "\n")]
    if not children:
        result.append(("class:text.dim", "  " + tui._t("CHILDREN_EMPTY")))
        return FormattedText(result)
    for index, child in enumerate(children):
        prio_style, prio_text = priority_label(child)
        selected = focused and index == tui.child_index
        marker = CHILD_MARKER if tui.manager.child_count(child.id) else LEAF_MARKER
        result.append(("class:selected" if selected else prio_style, f"  {prio_text} "))
        result.append(("class:selected" if selected else "class:text", marker + child.content))
        result.append(("", "\n"))
    return FormattedText(result)


__all__ = [
    "display_width",
    "fit",
    "format_due",
    "priority_label",
    "scroll_offset",
    "render_task_list_text",
    "render_projects_text",
    "render_children_text",
    "PROJECTS_WIDTH",
]
