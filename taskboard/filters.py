"""In-memory search and filtering over an already-fetched task snapshot."""
from dataclasses import dataclass, replace
from typing import List, Sequence, Tuple

from taskboard.models import ALL, Task


def search(tasks: Sequence[Task], query: str) -> List[Task]:
    if not (query or "").strip():
        return list(tasks)
    needle = query.lower()
    return [
        t for t in tasks
        if needle in t.title.lower() or (t.description and needle in t.description.lower())
    ]


def filter_tasks(tasks: Sequence[Task], status: str = ALL, priority: str = ALL) -> List[Task]:
    filtered = list(tasks)
    if status != ALL:
        filtered = [t for t in filtered if t.status == status]
    if priority != ALL:
        filtered = [t for t in filtered if t.priority == priority]
    return filtered


@dataclass(frozen=True)
class DashboardState:
    """The dashboard's view state: the latest snapshot plus the active filters.

    Instances are immutable; every change produces a new state.
    """

    tasks: Tuple[Task, ...] = ()
    query: str = ""
    status_filter: str = ALL
    priority_filter: str = ALL

    def visible(self) -> List[Task]:
        return filter_tasks(search(self.tasks, self.query), self.status_filter, self.priority_filter)

    def is_filtered(self) -> bool:
        return bool(self.query.strip()) or self.status_filter != ALL or self.priority_filter != ALL

    def with_tasks(self, tasks: Sequence[Task]) -> "DashboardState":
        return replace(self, tasks=tuple(tasks))

    def with_filters(self, query=None, status=None, priority=None) -> "DashboardState":
        return replace(
            self,
            query=self.query if query is None else query,
            status_filter=self.status_filter if status is None else status,
            priority_filter=self.priority_filter if priority is None else priority,
        )

    def cleared(self) -> "DashboardState":
        return replace(self, query="", status_filter=ALL, priority_filter=ALL)
