from .rest_client import (
    REST_URL,
    TodoistClient,
    TodoistClientError,
    TodoistPermissionError,
    TodoistRateLimitError,
)
from .rate_limiter import RateLimiter

__all__ = [
    "REST_URL",
    "TodoistClient",
    "TodoistClientError",
    "TodoistPermissionError",
    "TodoistRateLimitError",
    "RateLimiter",
]
