from types import SimpleNamespace

from core.desktop.devtools.interface.tui_navigation import move_project_selection, move_vertical_selection


class DummyManager:
    def __init__(self):
        self.calls = []
        self.project = SimpleNamespace(id="P")

    def next(self):
        self.calls.append("next")

    def previous(self):
        self.calls.append("previous")

    def select_project(self, delta):
        self.calls.append(("project", delta))
        return self.project


def _tui(**kwargs):
    renders = []
    values = dict(
        manager=DummyManager(),
        editing_mode=False,
        child_index=None,
        list_offset=7,
        force_render=lambda: renders.append(1),
        editor_field_name=lambda: "content",
        editor_children=lambda: [],
    )
    values.update(kwargs)
    tui = SimpleNamespace(**values)
    tui.renders = renders
    return tui


def test_list_navigation_delegates_to_manager():
    tui = _tui()

    move_vertical_selection(tui, 1)
    move_vertical_selection(tui, -1)

    assert tui.manager.calls == ["next", "previous"]
    assert len(tui.renders) == 2


def test_child_cursor_wraps_when_children_focused():
    tui = _tui(editing_mode=True, child_index=0, editor_field_name=lambda: "children", editor_children=lambda: ["a", "b"])

    move_vertical_selection(tui, 1)
    assert tui.child_index == 1
    move_vertical_selection(tui, 1)
    assert tui.child_index == 0
    move_vertical_selection(tui, -1)
    assert tui.child_index == 1
    assert tui.manager.calls == []


def test_editor_text_field_ignores_vertical_moves():
    tui = _tui(editing_mode=True)

    move_vertical_selection(tui, 1)

    assert tui.manager.calls == []
    assert tui.renders == []


def test_project_selection_resets_scroll():
    tui = _tui()

    move_project_selection(tui, -1)

    assert tui.manager.calls == [("project", -1)]
    assert tui.list_offset == 0

    tui.manager.project = None
    tui.list_offset = 3
    move_project_selection(tui, 1)
    assert tui.list_offset == 3
