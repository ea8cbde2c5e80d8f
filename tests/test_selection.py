import pytest

from core import SelectionTracker, id_at, position_of, reanchor
from core.selection import next_position, previous_position


def test_id_at_is_bounds_checked():
    display = ["a", "b"]
    assert id_at(display, 1) == "b"
    assert id_at(display, None) is None
    assert id_at(display, 2) is None
    assert id_at(display, -1) is None
    assert position_of(display, "b") == 1
    assert position_of(display, "z") is None


def test_reanchor_follows_task_identity():
    old = ["a", "b", "c"]
    new = ["c", "a", "b"]

    assert reanchor(1, old, new) == 2


def test_reanchor_falls_back_to_first_entry_when_task_vanished():
    assert reanchor(1, ["a", "b"], ["x", "y"]) == 0
    assert reanchor(1, ["a", "b"], []) is None


def test_reanchor_without_previous_selection():
    assert reanchor(None, ["a"], ["a", "b"]) is None
    assert reanchor(None, ["a"], ["a", "b"], auto_select_first=True) == 0
    assert reanchor(None, [], [], auto_select_first=True) is None


def test_reanchor_treats_out_of_range_as_vanished():
    assert reanchor(7, ["a"], ["b"]) == 0


@pytest.mark.parametrize(
    "current,total,expected",
    [(None, 3, 0), (0, 3, 1), (2, 3, 0), (5, 3, 0), (None, 0, None)],
)
def test_next_position_wraps(current, total, expected):
    assert next_position(current, total) == expected


@pytest.mark.parametrize(
    "current,total,expected",
    [(None, 3, 0), (2, 3, 1), (0, 3, 2), (9, 3, 0), (0, 0, None)],
)
def test_previous_position_wraps(current, total, expected):
    assert previous_position(current, total) == expected


def test_tracker_navigation_and_rebase():
    display = ["a", "b", "c"]
    tracker = SelectionTracker()

    assert tracker.next(display) == 0
    assert tracker.previous(display) == 2
    assert tracker.selected_id(display) == "c"

    assert tracker.rebase(display, ["c", "a"]) == 0
    assert tracker.select_id("a", ["c", "a"]) == 1

    tracker.unselect()
    assert tracker.selected_id(display) is None
    assert tracker.select(5, display) is None
    assert "position=None" in repr(tracker)


def test_tracker_on_empty_list():
    tracker = SelectionTracker(0)
    assert tracker.next([]) is None
    assert tracker.previous([]) is None
