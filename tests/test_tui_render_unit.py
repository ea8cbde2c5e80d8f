from datetime import date
from types import SimpleNamespace

import pytest

from core import Due, Project, Snapshot, Task
from core.desktop.devtools.application.mutation_dispatcher import MutationDispatcher
from core.desktop.devtools.application.task_list_manager import TaskListManager
from core.desktop.devtools.interface.tui_render import (
    display_width,
    fit,
    format_due,
    priority_label,
    render_children_text,
    render_projects_text,
    render_task_list_text,
    scroll_offset,
)

TODAY = date(2026, 3, 10)


class DummyTUI(SimpleNamespace):
    def _t(self, key, **kwargs):
        return key

    def today(self):
        return TODAY

    def get_terminal_width(self):
        return self.width

    def get_terminal_height(self):
        return self.height


def _manager(tasks, projects=()):
    manager = TaskListManager(MutationDispatcher(api=None), clock=lambda: TODAY)
    manager.load(Snapshot(tasks=list(tasks), projects=list(projects)))
    return manager


def _text(fragments):
    return "".join(text for _, text in fragments)


def test_fit_pads_and_truncates_by_cells():
    assert fit("abc", 5) == "abc  "
    assert fit("abcdef", 4) == "abc…"
    assert fit("日本語", 4) == "日… "
    assert display_width(fit("日本語テキスト", 7)) == 7
    assert fit("x", 0) == ""


def test_format_due_styles():
    overdue = Task(id="1", project_id="P", due=Due(date=date(2026, 3, 1), string="Mar 1"))
    today = Task(id="2", project_id="P", due=Due(date=TODAY))
    none = Task(id="3", project_id="P")

    assert format_due(overdue, TODAY) == ("class:due.overdue", "Mar 1")
    assert format_due(today, TODAY) == ("class:due.today", "2026-03-10")
    assert format_due(none, TODAY) == ("class:due", "")


def test_priority_label_uses_raw_value():
    assert priority_label(Task(id="1", project_id="P", priority=4)) == ("class:priority.urgent", "p4")
    assert priority_label(Task(id="1", project_id="P", priority=1))[1] == "p1"


@pytest.mark.parametrize(
    "selected, offset, visible, total, expected",
    [
        (None, 5, 10, 5, 0),
        (2, 0, 5, 20, 0),
        (7, 0, 5, 20, 3),
        (1, 4, 5, 20, 1),
        (None, 18, 5, 20, 15),
    ],
)
def test_scroll_offset(selected, offset, visible, total, expected):
    assert scroll_offset(selected, offset, visible, total) == expected


def test_task_list_shows_depth_and_selection():
    manager = _manager(
        [
            Task(id="A", project_id="P", content="Root", priority=1),
            Task(id="B", project_id="P", content="Leaf", parent_id="A"),
        ]
    )
    manager.next()
    tui = DummyTUI(manager=manager, width=120, height=20, list_offset=0)

    fragments = render_task_list_text(tui)
    lines = _text(fragments).splitlines()

    assert "TABLE_HEADER_TASK" in lines[0]
    assert "▸ Root" in lines[1]
    assert "    Leaf" in lines[2]
    assert any(style == "class:selected" and "Leaf" in text for style, text in fragments)


def test_task_list_scrolls_to_selection():
    manager = _manager([Task(id=str(i), project_id="P", content=f"task {i}", order=i) for i in range(30)])
    for _ in range(25):
        manager.next()
    tui = DummyTUI(manager=manager, width=80, height=10, list_offset=0)

    text = _text(render_task_list_text(tui))

    assert tui.list_offset == 25 - 6 + 1
    assert "task 25" in text
    assert "task 0" not in text


def test_empty_list_shows_hint():
    tui = DummyTUI(manager=_manager([]), width=80, height=10, list_offset=0)

    assert _text(render_task_list_text(tui)) == "TASK_LIST_EMPTY\nTASK_LIST_EMPTY_HINT"


def test_projects_pane_marks_cursor():
    manager = _manager([], [Project(id="P", name="Work"), Project(id="Q", name="Home")])
    manager.select_project(1)
    manager.select_project(1)
    fragments = render_projects_text(DummyTUI(manager=manager))

    selected = [text for style, text in fragments if style == "class:project.selected"]
    assert selected and "Home" in selected[0]


def test_children_list_in_editor():
    manager = _manager(
        [
            Task(id="A", project_id="P", content="Root"),
            Task(id="B", project_id="P", content="First", parent_id="A", order=1),
            Task(id="C", project_id="P", content="Second", parent_id="A", order=2),
        ]
    )
    tui = DummyTUI(
        manager=manager,
        child_index=1,
        editor_children=lambda: manager.children_of("A"),
        editor_field_name=lambda: "children",
    )

    fragments = render_children_text(tui)

    assert fragments[0] == ("class:field.active", "FIELD_CHILDREN\n")
    assert ("class:selected", "  Second") in fragments

    tui.editor_children = lambda: []
    assert "CHILDREN_EMPTY" in _text(render_children_text(tui))
