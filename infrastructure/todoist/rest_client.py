import logging
import random
import time
import uuid
from typing import Any, Callable, Dict, List, Optional

import requests

from core import Project, Section, Task
from .rate_limiter import RateLimiter
from .serializers import project_from_dict, section_from_dict, task_from_dict

REST_URL = "https://api.todoist.com/rest/v2"
logger = logging.getLogger("todoist_tree.api")


class TodoistClientError(RuntimeError):
    pass


class TodoistPermissionError(TodoistClientError):
    pass


class TodoistRateLimitError(TodoistClientError):
    pass


class TodoistClient:
    """Blocking Todoist REST v2 client.

    Network errors and 5xx responses are retried with exponential backoff and
    jitter; 429 responses are retried after the server's ``Retry-After``.
    """

    def __init__(
        self,
        token_provider: Callable[[], Optional[str]],
        session: Optional[requests.Session] = None,
        rate_limiter: Optional[RateLimiter] = None,
        base_url: str = REST_URL,
        timeout: int = 30,
        max_attempts: int = 3,
    ) -> None:
        self.token_provider = token_provider
        self.session = session or requests.Session()
        self.rate_limiter = rate_limiter or RateLimiter()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        token = self.token_provider()
        if not token:
            raise TodoistPermissionError("Todoist API token missing")
        headers = {"Authorization": f"Bearer {token}"}
        if method in ("post", "delete"):
            headers["X-Request-Id"] = uuid.uuid4().hex
        url = f"{self.base_url}/{path.lstrip('/')}"
        kwargs: Dict[str, Any] = {"headers": headers, "timeout": self.timeout}
        if payload is not None:
            kwargs["json"] = payload
        attempt = 0
        delay = 1.0
        while True:
            attempt += 1
            try:
                self.rate_limiter.acquire()
                response = getattr(self.session, method)(url, **kwargs)
            except requests.RequestException as exc:
                if attempt >= self.max_attempts:
                    raise TodoistClientError(f"Todoist API network error: {exc}") from exc
                logger.debug("%s %s failed (%s), retry #%s", method.upper(), path, exc, attempt)
                self._sleep(delay)
                delay *= 2
                continue
            self.rate_limiter.update(response.headers)
            if response.status_code == 429:
                if attempt < self.max_attempts:
                    logger.info("Todoist rate limit hit on %s %s, retry #%s", method.upper(), path, attempt)
                    if not (response.headers.get("Retry-After") or response.headers.get("retry-after")):
                        self._sleep(delay)
                        delay *= 2
                    continue
                raise TodoistRateLimitError(f"HTTP 429 on {method.upper()} {path}")
            if response.status_code >= 500 and attempt < self.max_attempts:
                logger.debug("%s %s returned %s, retry #%s", method.upper(), path, response.status_code, attempt)
                self._sleep(delay)
                delay *= 2
                continue
            if response.status_code in (401, 403):
                raise TodoistPermissionError(f"HTTP {response.status_code}")
            if response.status_code >= 400:
                raise TodoistClientError(f"Todoist API error: {response.status_code} {response.text}")
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

    def _sleep(self, base_delay: float) -> None:
        time.sleep(base_delay + random.uniform(0, base_delay))

    @staticmethod
    def _decode(parser: Callable[[Any], Any], data: Any) -> Any:
        try:
            return parser(data)
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            logger.warning("Malformed Todoist payload: %r", exc)
            raise TodoistClientError(f"Malformed Todoist response: {exc!r}") from exc

    def _decode_list(self, parser: Callable[[Any], Any], items: Any) -> List[Any]:
        return self._decode(lambda rows: [parser(item) for item in rows or []], items)

    def list_tasks(self) -> List[Task]:
        return self._decode_list(task_from_dict, self._request("get", "tasks"))

    def list_projects(self) -> List[Project]:
        return self._decode_list(project_from_dict, self._request("get", "projects"))

    def list_sections(self) -> List[Section]:
        return self._decode_list(section_from_dict, self._request("get", "sections"))

    def create_task(self, payload: Dict[str, Any]) -> Task:
        return self._decode(task_from_dict, self._request("post", "tasks", payload))

    def update_task(self, task_id: str, payload: Dict[str, Any]) -> Optional[Task]:
        data = self._request("post", f"tasks/{task_id}", payload)
        return self._decode(task_from_dict, data) if data else None

    def close_task(self, task_id: str) -> None:
        self._request("post", f"tasks/{task_id}/close")

    def delete_task(self, task_id: str) -> None:
        self._request("delete", f"tasks/{task_id}")


__all__ = [
    "REST_URL",
    "TodoistClient",
    "TodoistClientError",
    "TodoistPermissionError",
    "TodoistRateLimitError",
]
