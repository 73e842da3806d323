"""Task lifecycle rules.

Pure functions: they compute a new Task from an old one (or from create
input) and never touch the store. ``now`` is injectable for tests.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from taskboard.errors import TaskValidationError
from taskboard.models import Task, TaskCreate, TaskUpdate


def _now() -> datetime:
    return datetime.now(timezone.utc)


def new_task_id() -> str:
    return str(uuid.uuid4())


def normalize_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise TaskValidationError("Title is required")
    return cleaned


def normalize_description(description: Optional[str]) -> Optional[str]:
    cleaned = (description or "").strip()
    return cleaned or None


def create_task(data: TaskCreate, now: Optional[datetime] = None) -> Task:
    title = normalize_title(data.title)
    time = now or _now()
    return Task(
        id=new_task_id(),
        title=title,
        description=normalize_description(data.description),
        status="TODO",
        priority=data.priority or "MEDIUM",
        createdAt=time,
        updatedAt=time,
        completedAt=None,
    )


def apply_update(existing: Task, patch: TaskUpdate, now: Optional[datetime] = None) -> Task:
    """Resolve a partial update against ``existing`` and return the new Task.

    Only fields the caller actually sent are applied. A ``null`` status,
    title or priority is ignored; a ``null`` or blank description clears it.
    Moving into COMPLETED stamps ``completedAt``; moving to any other status
    clears it; leaving status out keeps it as it was.
    """
    time = now or _now()
    sent = patch.model_fields_set
    changes = {}

    if "title" in sent and patch.title is not None:
        changes["title"] = normalize_title(patch.title)
    if "description" in sent:
        changes["description"] = normalize_description(patch.description)
    if "priority" in sent and patch.priority is not None:
        changes["priority"] = patch.priority
    if "status" in sent and patch.status is not None:
        changes["status"] = patch.status
        if patch.status == "COMPLETED":
            changes["completedAt"] = time
        else:
            changes["completedAt"] = None

    changes["updatedAt"] = max(time, existing.createdAt)
    return existing.model_copy(update=changes)
