"""Task persistence.

Redis layout:
    task:{id}           JSON document of the Task
    tasks:by_created    sorted set of ids scored by createdAt (epoch seconds)
"""
import contextlib
import logging
from typing import Iterator, List, Optional, Protocol

import redis
from pydantic import ValidationError

from taskboard.config import Settings
from taskboard.errors import StoreError
from taskboard.models import Task

logger = logging.getLogger(__name__)

INDEX_KEY = "tasks:by_created"


def task_key(task_id: str) -> str:
    return f"task:{task_id}"


class TaskStore(Protocol):
    def list_tasks(self) -> List[Task]: ...

    def get(self, task_id: str) -> Optional[Task]: ...

    def create(self, task: Task) -> Task: ...

    def replace(self, task: Task) -> Optional[Task]: ...

    def delete(self, task_id: str) -> bool: ...

    def ping(self) -> None: ...


@contextlib.contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except redis.RedisError as exc:
        raise StoreError(f"{action} failed: {exc}") from exc


def _parse(task_id: str, doc: str) -> Task:
    try:
        return Task.model_validate_json(doc)
    except ValidationError as exc:
        raise StoreError(f"task {task_id} has an unreadable document") from exc


class RedisTaskStore:
    def __init__(self, client: "redis.Redis"):
        self.r = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisTaskStore":
        client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            decode_responses=True,
        )
        logger.info("Using redis at %s:%s db=%s", settings.redis_host, settings.redis_port, settings.redis_db)
        return cls(client)

    def list_tasks(self) -> List[Task]:
        """All tasks, newest first."""
        with _store_errors("list"):
            ids = self.r.zrevrange(INDEX_KEY, 0, -1)
            if not ids:
                return []
            raw = self.r.mget([task_key(task_id) for task_id in ids])
        tasks = []
        for task_id, doc in zip(ids, raw):
            if doc is None:
                logger.warning("Index entry %s has no task document; skipping", task_id)
                continue
            tasks.append(_parse(task_id, doc))
        return tasks

    def get(self, task_id: str) -> Optional[Task]:
        with _store_errors("get"):
            raw = self.r.get(task_key(task_id))
        if raw is None:
            return None
        return _parse(task_id, raw)

    def create(self, task: Task) -> Task:
        with _store_errors("create"):
            with self.r.pipeline(transaction=True) as p:
                p.set(task_key(task.id), task.model_dump_json())
                p.zadd(INDEX_KEY, {task.id: task.createdAt.timestamp()})
                p.execute()
        logger.info("Created task %s", task.id)
        return task

    def replace(self, task: Task) -> Optional[Task]:
        """Overwrite an existing task; returns None when it no longer exists."""
        with _store_errors("update"):
            written = self.r.set(task_key(task.id), task.model_dump_json(), xx=True)
        if not written:
            return None
        logger.info("Updated task %s status=%s", task.id, task.status)
        return task

    def delete(self, task_id: str) -> bool:
        with _store_errors("delete"):
            with self.r.pipeline(transaction=True) as p:
                p.delete(task_key(task_id))
                p.zrem(INDEX_KEY, task_id)
                deleted_task, removed_from_index = p.execute()
        if deleted_task:
            logger.info("Deleted task %s", task_id)
        return bool(deleted_task)

    def ping(self) -> None:
        with _store_errors("ping"):
            self.r.ping()
