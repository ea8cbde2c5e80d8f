from datetime import date, timedelta

import pytest
from prompt_toolkit.application.current import create_app_session
from prompt_toolkit.input import DummyInput
from prompt_toolkit.output import DummyOutput

from core import Due, Filter, Project, Snapshot, Task
from core.desktop.devtools.application.mutation_dispatcher import MutationDispatcher
from core.desktop.devtools.application.task_list_manager import TaskListManager
from core.desktop.devtools.interface.tui_app import TodoistTreeTUI

TODAY = date(2026, 3, 10)


class FakeApi:
    def __init__(self):
        self.calls = []

    def create_task(self, payload):
        self.calls.append(("create", payload))
        return Task(id="new", project_id=payload["project_id"], content=payload["content"])

    def update_task(self, task_id, payload):
        self.calls.append(("update", task_id, payload))

    def close_task(self, task_id):
        self.calls.append(("close", task_id))

    def delete_task(self, task_id):
        self.calls.append(("delete", task_id))


class FakeSnapshots:
    def __init__(self, snapshot=None, error=None):
        self.snapshot = snapshot
        self.error = error
        self.remembered = []

    def resync(self, cursor_position=None, selected_project_id=None):
        if self.error:
            raise self.error
        return self.snapshot

    def remember(self, snapshot):
        self.remembered.append(snapshot)


def _snapshot():
    return Snapshot(
        tasks=[
            Task(id="A", project_id="P", content="Parent", priority=1),
            Task(id="B", project_id="P", content="Child one", parent_id="A", order=1),
            Task(id="C", project_id="P", content="Child two", parent_id="A", order=2),
            Task(id="D", project_id="P", content="Other"),
        ],
        projects=[Project(id="P", name="Work")],
        timestamp=10,
    )


@pytest.fixture
def tui():
    with create_app_session(input=DummyInput(), output=DummyOutput()):
        api = FakeApi()
        manager = TaskListManager(MutationDispatcher(api), clock=lambda: TODAY)
        app = TodoistTreeTUI(manager, FakeSnapshots(_snapshot()), clock=lambda: TODAY)
        app.get_terminal_width = lambda: 100
        app.get_terminal_height = lambda: 30
        app.load_snapshot(_snapshot())
        app.api = api
        yield app


def _text(fragments):
    return "".join(text for _, text in fragments)


def test_renders_tree_with_indentation(tui):
    rendered = _text(tui.get_task_list_text())

    lines = rendered.splitlines()
    assert "Parent" in lines[1] and "Σ2" in lines[1]
    assert "  " + "  " + "Child one" in lines[2]
    assert "Work" in _text(tui.get_projects_text())


def test_status_bar_shows_filter_and_counts(tui):
    status = _text(tui.get_status_text())

    assert "All" in status
    assert "4 shown / 4 tasks" in status


def test_complete_then_poll_reports_pending_work(tui):
    tui.complete_current()

    assert tui.manager.display == ["D"]
    assert "3 pending" in _text(tui.get_status_text())
    assert "Completed 3 task(s)" in tui.status_message

    tui.dispatcher.run_pending()
    tui.poll_results()
    assert [c[0] for c in tui.api.calls] == ["close", "close", "close"]
    assert tui.failed_count == 0


def test_editor_saves_through_manager(tui):
    tui.start_editing(tui.manager.selected_task())
    assert tui.editing_mode and tui.editor_field_name() == "content"
    assert [c.id for c in tui.editor_children()] == ["B", "C"]

    tui.content_field.text = "Parent renamed"
    tui.priority_field.text = "2"
    tui.save_edit()

    assert not tui.editing_mode
    assert tui.manager.store.get("A").content == "Parent renamed"
    assert tui.manager.store.get("A").priority == 2


def test_editor_field_cycle_and_child_navigation(tui):
    tui.start_editing(tui.manager.store.get("A"))
    for _ in range(4):
        tui.cycle_field()
    assert tui.editor_field_name() == "children"

    tui.cycle_field()
    assert tui.editor_field_name() == "content"

    tui.edit_field_index = 4
    tui.child_index = 1
    tui.open_selected_child()
    assert tui.edit_task_id == "C"

    tui.new_subtask_from_editor()
    assert tui.edit_context == "new" and tui.edit_parent_id == "C"
    assert "children" not in tui.editor_field_names()


def test_empty_content_keeps_editor_open(tui):
    tui.start_new_task("P")
    tui.save_edit()

    assert tui.editing_mode
    assert tui.manager.dispatcher.pending() == 0

    tui.content_field.text = "Fresh"
    tui.save_edit()
    assert not tui.editing_mode
    assert tui.manager.dispatcher.pending() == 1


def test_resync_snapshot_is_applied_on_tick(tui):
    updated = _snapshot()
    updated.tasks.append(Task(id="E", project_id="P", content="From server"))
    tui.snapshots.snapshot = updated

    tui.start_resync()
    tui._sync_thread.join(timeout=2)
    tui.tick()

    assert not tui.syncing
    assert "E" in tui.manager.store
    assert "Synced 5 tasks" in tui.status_message


def test_resync_failure_is_reported(tui):
    tui.snapshots.error = RuntimeError("offline")

    tui.start_resync()
    tui._sync_thread.join(timeout=2)
    tui.tick()

    assert not tui.syncing
    assert "offline" in tui.status_message


def test_unexpected_resync_error_still_clears_syncing(tui, caplog):
    tui.snapshots.error = KeyError("id")

    tui.start_resync()
    tui._sync_thread.join(timeout=2)
    tui.tick()

    assert not tui.syncing
    assert "KeyError" in tui.status_message
    assert "Resync crashed" in caplog.text

    tui.snapshots.error = None
    tui.start_resync()
    tui._sync_thread.join(timeout=2)
    tui.tick()
    assert not tui.syncing
    assert "Synced 4 tasks" in tui.status_message


def test_date_filters_refresh_when_day_changes():
    days = [TODAY]
    tomorrow = TODAY + timedelta(days=1)
    snapshot = Snapshot(
        tasks=[Task(id="T", project_id="P", content="Later", due=Due(date=tomorrow))],
        projects=[Project(id="P", name="Work")],
    )
    with create_app_session(input=DummyInput(), output=DummyOutput()):
        manager = TaskListManager(MutationDispatcher(FakeApi()), clock=lambda: days[0])
        app = TodoistTreeTUI(manager, FakeSnapshots(snapshot), clock=lambda: days[0])
        app.load_snapshot(snapshot)
        manager.set_filter(Filter.today())
        app.tick()
        assert manager.display == []

        days[0] = tomorrow
        app.tick()
        assert manager.display == ["T"]


def test_set_priority_shortcut_and_status(tui):
    tui.manager.selection.select_id("D", tui.manager.display)
    tui.set_priority(3)

    assert tui.manager.store.get("D").priority == 3
    assert "Priority set to 3" in tui.status_message
