"""HTTP client for the task API and the dashboard controller built on it.

``Dashboard`` keeps one explicit ``DashboardState`` and re-fetches the whole
collection after every mutation, successful or not. It never patches its
local snapshot in place.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from taskboard import analytics
from taskboard.filters import DashboardState
from taskboard.models import Task

logger = logging.getLogger(__name__)


class TaskClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return fallback


class TaskClient:
    def __init__(self, base_url: str, prefix: str = "/api", http: Optional[httpx.Client] = None):
        self.prefix = prefix.rstrip("/")
        self.http = http or httpx.Client(base_url=base_url, timeout=10.0)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "TaskClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, expected: int, fallback: str, **kwargs) -> Any:
        try:
            response = self.http.request(method, f"{self.prefix}{path}", **kwargs)
        except httpx.HTTPError as exc:
            raise TaskClientError(f"{fallback}: {exc}") from exc
        if response.status_code != expected:
            raise TaskClientError(_error_message(response, fallback), response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise TaskClientError(f"{fallback}: response is not JSON") from exc

    def list_tasks(self) -> List[Task]:
        data = self._request("GET", "/tasks", 200, "Failed to fetch tasks")
        if not isinstance(data, list):
            raise TaskClientError("Task list payload is not an array")
        return [Task.model_validate(item) for item in data]

    def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> Task:
        payload: Dict[str, Any] = {"title": title}
        if description is not None:
            payload["description"] = description
        if priority is not None:
            payload["priority"] = priority
        data = self._request("POST", "/tasks", 201, "Failed to create task", json=payload)
        return Task.model_validate(data)

    def update_task(self, task_id: str, **fields: Any) -> Task:
        data = self._request("PATCH", f"/tasks/{task_id}", 200, "Failed to update task", json=fields)
        return Task.model_validate(data)

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}", 200, "Failed to delete task")

    def health(self) -> Dict[str, Any]:
        try:
            response = self.http.get(f"{self.prefix}/health")
        except httpx.HTTPError as exc:
            raise TaskClientError(f"Health check failed: {exc}") from exc
        try:
            body = response.json()
        except ValueError as exc:
            raise TaskClientError("Health check failed: response is not JSON", response.status_code) from exc
        if response.status_code != 200:
            raise TaskClientError(_error_message(response, "Health check failed"), response.status_code)
        return body


class Dashboard:
    def __init__(self, client: TaskClient, trend_days: int = analytics.DEFAULT_TREND_DAYS):
        self.client = client
        self.trend_days = trend_days
        self.state = DashboardState()

    def refresh(self) -> DashboardState:
        """Replace the snapshot with the server's full collection.

        Any failure, including a payload that is not a list of tasks, leaves
        an empty snapshot.
        """
        try:
            tasks = self.client.list_tasks()
        except (TaskClientError, ValidationError) as exc:
            logger.error("Failed to fetch tasks: %s", exc)
            tasks = []
        self.state = self.state.with_tasks(tasks)
        return self.state

    def _mutate(self, action: str, call, *args, **kwargs):
        try:
            return call(*args, **kwargs)
        except TaskClientError:
            logger.error("Failed to %s", action, exc_info=True)
            raise
        finally:
            self.refresh()

    def add_task(self, title: str, description: Optional[str] = None, priority: Optional[str] = None) -> Task:
        return self._mutate("create task", self.client.create_task, title, description, priority)

    def set_status(self, task_id: str, status: str) -> Task:
        return self._mutate("update task", self.client.update_task, task_id, status=status)

    def rename(self, task_id: str, title: str) -> Optional[Task]:
        if not title.strip():
            return None
        return self._mutate("update task", self.client.update_task, task_id, title=title)

    def edit(self, task_id: str, **fields: Any) -> Task:
        return self._mutate("update task", self.client.update_task, task_id, **fields)

    def remove(self, task_id: str) -> None:
        self._mutate("delete task", self.client.delete_task, task_id)

    def search(self, query: str) -> List[Task]:
        self.state = self.state.with_filters(query=query)
        return self.state.visible()

    def filter(self, status: str, priority: str) -> List[Task]:
        self.state = self.state.with_filters(status=status, priority=priority)
        return self.state.visible()

    def clear_filters(self) -> List[Task]:
        self.state = self.state.cleared()
        return self.state.visible()

    def visible(self) -> List[Task]:
        return self.state.visible()

    def summary(self) -> analytics.DashboardSummary:
        return analytics.summarize(list(self.state.tasks), self.trend_days)
