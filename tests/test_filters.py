# tests/test_filters.py
from taskboard.filters import DashboardState, filter_tasks, search

from .fakes import make_task

TASKS = [
    make_task("1", title="Buy Milk", priority="HIGH"),
    make_task("2", title="Write report", description="quarterly MILK sales", status="IN_PROGRESS"),
    make_task("3", title="Call plumber", priority="LOW", status="COMPLETED"),
]


def test_search_is_case_insensitive_on_title_and_description():
    found = search(TASKS, "milk")
    assert [t.id for t in found] == ["1", "2"]


def test_search_excludes_unrelated_tasks():
    assert [t.id for t in search(TASKS, "plumb")] == ["3"]
    assert search(TASKS, "nothing like this") == []


def test_blank_query_is_identity():
    assert search(TASKS, "") == TASKS
    assert search(TASKS, "   ") == TASKS


def test_all_sentinel_passes_through():
    assert filter_tasks(TASKS) == TASKS
    assert filter_tasks(TASKS, "ALL", "ALL") == TASKS


def test_filters_compose_with_and():
    assert [t.id for t in filter_tasks(TASKS, status="COMPLETED")] == ["3"]
    assert [t.id for t in filter_tasks(TASKS, priority="MEDIUM")] == ["2"]
    assert filter_tasks(TASKS, status="COMPLETED", priority="HIGH") == []


def test_state_combines_search_and_filters():
    state = DashboardState().with_tasks(TASKS).with_filters(query="milk", priority="HIGH")
    assert [t.id for t in state.visible()] == ["1"]
    assert state.is_filtered()


def test_state_is_immutable_value():
    base = DashboardState().with_tasks(TASKS)
    narrowed = base.with_filters(status="COMPLETED")
    assert base.status_filter == "ALL"
    assert len(base.visible()) == 3
    assert len(narrowed.visible()) == 1
    cleared = narrowed.cleared()
    assert not cleared.is_filtered()
    assert cleared.tasks == base.tasks


def test_new_snapshot_keeps_filters():
    state = DashboardState().with_filters(status="TODO").with_tasks(TASKS)
    assert [t.id for t in state.visible()] == ["1"]


def test_query_is_matched_untrimmed():
    tasks = [make_task("1", title="Buy Milk")]
    assert search(tasks, "milk ") == []
    assert search(tasks, " milk") == [tasks[0]]
    assert search(tasks, "buy milk") == [tasks[0]]
