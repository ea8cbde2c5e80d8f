from datetime import date
from types import SimpleNamespace

import pytest

from core import Due, Project, Snapshot, Task
from core.desktop.devtools.application.mutation_dispatcher import MutationDispatcher, MutationOp
from core.desktop.devtools.application.task_list_manager import TaskListManager
from core.desktop.devtools.interface.edit_handlers import NO_DATE, _due_change, handle_create_task, handle_task_edit


class DummyTUI(SimpleNamespace):
    def _t(self, key, **kwargs):
        return key

    def set_status_message(self, message, ttl=3.0, style="class:status.ok"):
        self.messages.append((message, style))


def _field(text=""):
    return SimpleNamespace(text=text)


def _tui(manager, **kwargs):
    values = dict(
        manager=manager,
        messages=[],
        edit_task_id="1",
        edit_project_id="P",
        edit_parent_id=None,
        content_field=_field(),
        description_field=_field(),
        priority_field=_field(),
        due_field=_field(),
    )
    values.update(kwargs)
    return DummyTUI(**values)


@pytest.fixture
def manager():
    mgr = TaskListManager(MutationDispatcher(api=None), clock=lambda: date(2026, 3, 10))
    mgr.load(
        Snapshot(
            tasks=[Task(id="1", project_id="P", content="Call mom", due=Due(date=date(2026, 3, 12), string="thursday"))],
            projects=[Project(id="P", name="Inbox", is_inbox_project=True)],
        )
    )
    return mgr


def _queued(manager):
    manager.dispatcher.api = SimpleNamespace(
        update_task=lambda task_id, payload: None,
        create_task=lambda payload: None,
    )
    manager.dispatcher.run_pending()
    return [r.command for r in manager.dispatcher.drain_results()]


@pytest.mark.parametrize(
    "previous, entered, expected",
    [
        ("thursday", "thursday ", None),
        ("thursday", "tomorrow", "tomorrow"),
        ("thursday", "  ", NO_DATE),
        ("", "", None),
    ],
)
def test_due_change(previous, entered, expected):
    assert _due_change(previous, entered) == expected


def test_edit_saves_content_and_leaves_due_untouched(manager):
    tui = _tui(manager, content_field=_field(" Call dad "), description_field=_field("notes"), priority_field=_field("3"), due_field=_field("thursday"))

    assert handle_task_edit(tui) is True

    task = manager.store.get("1")
    assert (task.content, task.description, task.priority) == ("Call dad", "notes", 3)
    (command,) = _queued(manager)
    assert command.op is MutationOp.UPDATE
    assert "due_string" not in command.payload
    assert tui.messages == [("STATUS_MESSAGE_SAVED", "class:status.ok")]


def test_edit_clearing_due_sends_no_date(manager):
    tui = _tui(manager, content_field=_field("Call mom"), due_field=_field(""))

    handle_task_edit(tui)

    (command,) = _queued(manager)
    assert command.payload["due_string"] == NO_DATE


def test_edit_rejects_empty_content(manager):
    tui = _tui(manager, content_field=_field("   "))

    assert handle_task_edit(tui) is False
    assert manager.store.get("1").content == "Call mom"
    assert tui.messages[0] == ("STATUS_MESSAGE_EMPTY_CONTENT", "class:status.fail")


def test_edit_of_vanished_task_closes_editor(manager):
    assert handle_task_edit(_tui(manager, edit_task_id="gone")) is True
    assert manager.dispatcher.pending() == 0


def test_create_queues_command_for_parent(manager):
    tui = _tui(manager, edit_task_id=None, edit_parent_id="1", content_field=_field("Buy flowers"), priority_field=_field("2"))

    assert handle_create_task(tui) is True

    (command,) = _queued(manager)
    assert command.op is MutationOp.CREATE
    assert command.payload["parent_id"] == "1"
    assert command.payload["priority"] == 2
    assert tui.messages[-1][0] == "STATUS_MESSAGE_CREATED"


def test_create_without_project_reports_error(manager):
    tui = _tui(manager, edit_task_id=None, edit_project_id=None, content_field=_field("Orphan"))

    assert handle_create_task(tui) is True
    assert tui.messages[-1] == ("STATUS_MESSAGE_NO_PROJECT", "class:status.fail")
    assert manager.dispatcher.pending() == 0


def test_create_with_empty_content_stays_open(manager):
    tui = _tui(manager, edit_task_id=None, content_field=_field(""))

    assert handle_create_task(tui) is False
