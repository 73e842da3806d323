# tests/test_store.py
from datetime import datetime, timedelta, timezone

import pytest

from taskboard.errors import StoreError
from taskboard.store import INDEX_KEY, RedisTaskStore, task_key

from .fakes import FakeRedis, make_task

BASE = datetime(2024, 5, 1, tzinfo=timezone.utc)


@pytest.fixture()
def r():
    return FakeRedis()


@pytest.fixture()
def store(r):
    return RedisTaskStore(r)


def test_create_writes_document_and_index(store, r):
    task = make_task("abc", title="Buy milk", created=BASE)
    store.create(task)
    assert task_key("abc") in r.strings
    assert r.zsets[INDEX_KEY]["abc"] == BASE.timestamp()
    assert store.get("abc") == task


def test_list_is_newest_first(store):
    for i in range(3):
        store.create(make_task(f"t{i}", created=BASE + timedelta(hours=i)))
    assert [t.id for t in store.list_tasks()] == ["t2", "t1", "t0"]


def test_list_empty(store):
    assert store.list_tasks() == []


def test_list_skips_dangling_index_entries(store, r):
    store.create(make_task("a", created=BASE))
    r.zadd(INDEX_KEY, {"ghost": BASE.timestamp() + 10})
    assert [t.id for t in store.list_tasks()] == ["a"]


def test_get_missing_returns_none(store):
    assert store.get("nope") is None


def test_replace_only_existing(store):
    task = make_task("a", created=BASE)
    assert store.replace(task) is None
    assert store.get("a") is None

    store.create(task)
    renamed = task.model_copy(update={"title": "Renamed"})
    assert store.replace(renamed) == renamed
    assert store.get("a").title == "Renamed"


def test_delete(store, r):
    store.create(make_task("a", created=BASE))
    assert store.delete("a") is True
    assert store.get("a") is None
    assert "a" not in r.zsets[INDEX_KEY]
    assert store.delete("a") is False


def test_redis_failures_become_store_errors(store, r):
    r.down = True
    with pytest.raises(StoreError):
        store.list_tasks()
    with pytest.raises(StoreError):
        store.create(make_task("a"))
    with pytest.raises(StoreError):
        store.delete("a")
    with pytest.raises(StoreError) as excinfo:
        store.ping()
    assert excinfo.value.__cause__ is not None


def test_corrupt_documents_become_store_errors(store, r):
    store.create(make_task("a", created=BASE))
    r.strings[task_key("a")] = '{"id": "a", "title":'
    with pytest.raises(StoreError):
        store.get("a")
    with pytest.raises(StoreError):
        store.list_tasks()
