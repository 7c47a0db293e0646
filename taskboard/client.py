import logging
from typing import Any, Dict, List, Optional

import httpx
import pydantic

from .schemas import ErrorOut, TaskOut, TaskStatus

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8080"


class TaskClientError(Exception):
    """A request to the task API failed; ``message`` is fit for display."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TaskClient:
    """
    Thin HTTP client for the task API.

    Pass ``http`` to reuse an existing ``httpx.Client`` (for example FastAPI's
    ``TestClient``); otherwise one is created for ``base_url``.
    """

    def __init__(self, base_url: str = DEFAULT_API_URL, http: Optional[httpx.Client] = None, timeout: float = 10.0):
        self._owns_http = http is None
        self.http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "TaskClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, fallback: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self.http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TaskClientError(fallback) from exc
        if response.is_error:
            raise TaskClientError(_error_message(response, fallback), response.status_code)
        return response

    def list_tasks(self, status: Optional[str] = None) -> List[TaskOut]:
        params = {"status": status} if status else None
        response = self._request("GET", "/api/tasks", "Failed to load tasks", params=params)
        return [TaskOut.model_validate(item) for item in response.json()]

    def get_task(self, task_id: int) -> TaskOut:
        response = self._request("GET", f"/api/tasks/{task_id}", "Failed to load task")
        return TaskOut.model_validate(response.json())

    def create_task(self, title: str, description: str = "") -> TaskOut:
        payload: Dict[str, Any] = {"title": title, "description": description}
        response = self._request("POST", "/api/tasks", "Failed to create task", json=payload)
        return TaskOut.model_validate(response.json())

    def set_status(self, task_id: int, status: TaskStatus) -> TaskOut:
        payload = {"status": TaskStatus(status).value}
        response = self._request("PATCH", f"/api/tasks/{task_id}", "Failed to update task", json=payload)
        return TaskOut.model_validate(response.json())

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}", "Failed to delete task")


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        return ErrorOut.model_validate(response.json()).error
    except (ValueError, pydantic.ValidationError):
        return fallback
