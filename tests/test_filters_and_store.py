from datetime import date

import pytest

from core import Due, Filter, FilterKind, SortCriterion, Task, TaskStore, parse_priority

TODAY = date(2026, 3, 10)


def _task(task_id, parent=None, order=0, due=None, project="P"):
    return Task(id=task_id, project_id=project, parent_id=parent, order=order, due=Due(date=due) if due else None)


def test_filter_matches_by_kind():
    overdue = _task("o", due=date(2026, 3, 9))
    today = _task("t", due=TODAY)
    undated = _task("u")

    assert Filter.all().matches(undated, TODAY)
    assert Filter.today().matches(today, TODAY)
    assert not Filter.today().matches(overdue, TODAY)
    assert Filter.overdue().matches(overdue, TODAY)
    assert not Filter.overdue().matches(today, TODAY)
    assert not Filter.overdue().matches(undated, TODAY)
    assert Filter.project("P").matches(undated, TODAY)
    assert not Filter.project("Q").matches(undated, TODAY)


def test_filter_from_string():
    assert Filter.from_string("today").kind is FilterKind.TODAY
    assert Filter.from_string("OVERDUE").kind is FilterKind.OVERDUE
    assert Filter.from_string("").kind is FilterKind.ALL
    assert Filter.from_string("all", project_id="42") == Filter.project("42")
    assert Filter.project("42").label == "project:42"
    with pytest.raises(ValueError):
        Filter.from_string("someday")


def test_sort_criterion_parsing_and_toggle():
    assert SortCriterion.from_string(" Date ") is SortCriterion.DATE
    assert SortCriterion.PRIORITY.toggled() is SortCriterion.DATE
    assert SortCriterion.DATE.toggled() is SortCriterion.PRIORITY
    with pytest.raises(ValueError):
        SortCriterion.from_string("alpha")


@pytest.mark.parametrize("text,expected", [("1", 1), (" 4 ", 4), ("0", None), ("5", None), ("x", None), ("", None)])
def test_parse_priority(text, expected):
    assert parse_priority(text) == expected


def test_task_store_relations():
    store = TaskStore([_task("r"), _task("b", parent="r", order=2), _task("a", parent="r", order=1)])

    assert [t.id for t in store.children_of("r")] == ["a", "b"]
    assert store.child_counts() == {"r": 2}
    assert "a" in store and "zz" not in store
    assert store.get(None) is None


def test_task_store_without_and_replace_return_new_stores():
    store = TaskStore([_task("r"), _task("c", parent="r")])

    smaller = store.without({"c"})
    renamed = store.replace(Task(id="r", project_id="P", content="renamed"))

    assert len(store) == 2 and len(smaller) == 1
    assert renamed.get("r").content == "renamed"
    assert store.get("r").content == ""
    assert [t.id for t in smaller] == ["r"]


def test_task_due_helpers():
    task = Task(id="1", project_id="P", due=Due(date=TODAY, string="every day", is_recurring=True))

    assert task.due_date == TODAY
    assert task.due_string == "every day"
    assert task.parent_id is None
    assert Task(id="2", project_id="P").due_string == ""
