"""Non-interactive commands: list, sync, cache, auth."""

import argparse
import logging
import sys
import time
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from config import get_cache_dir, get_cache_max_age, get_default_sort, get_user_token, set_user_token
from core import Filter, SortCriterion
from core.desktop.devtools.application.mutation_dispatcher import MutationDispatcher
from core.desktop.devtools.application.snapshot_service import SnapshotService
from core.desktop.devtools.application.task_list_manager import Row, TaskListManager
from core.desktop.devtools.interface.cli_io import structured_error, structured_response
from core.desktop.devtools.interface.constants import TIMESTAMP_FORMAT
from infrastructure.snapshot_cache import SnapshotCache, SnapshotCacheError
from infrastructure.todoist import TodoistClient, TodoistClientError
from infrastructure.todoist.serializers import task_to_dict

logger = logging.getLogger("todoist_tree.cli")


def make_client() -> TodoistClient:
    return TodoistClient(get_user_token)


def make_cache() -> SnapshotCache:
    return SnapshotCache(get_cache_dir())


def resolve_sort(args: argparse.Namespace) -> SortCriterion:
    value = getattr(args, "sort", None) or get_default_sort()
    try:
        return SortCriterion.from_string(value)
    except ValueError:
        logger.warning("Unknown sort %r in config, using priority", value)
        return SortCriterion.PRIORITY


def build_services(args: argparse.Namespace) -> Optional[Tuple[TaskListManager, SnapshotService]]:
    if not get_user_token():
        print("Todoist API token missing: run `todoist-tree auth --token <token>` or set TODOIST_API_TOKEN", file=sys.stderr)
        return None
    client = make_client()
    manager = TaskListManager(MutationDispatcher(client), sort=resolve_sort(args))
    return manager, SnapshotService(client, make_cache())


def format_row(row: Row) -> str:
    task, depth, count = row
    parts = ["  " * depth + f"[p{task.priority}] {task.content}"]
    if task.due is not None:
        parts.append(f"({task.due_string or task.due.date.isoformat()})")
    if count:
        parts.append(f"Σ{count}")
    return " ".join(parts)


def _rows_payload(rows: List[Row]) -> List[Dict[str, Any]]:
    payload = []
    for task, depth, count in rows:
        item = task_to_dict(task)
        item["depth"] = depth
        item["child_count"] = count
        payload.append(item)
    return payload


def cmd_list(args: argparse.Namespace) -> int:
    services = build_services(args)
    if services is None:
        return 1
    manager, snapshots = services
    try:
        if getattr(args, "refresh", False):
            snapshot = snapshots.resync()
        else:
            snapshot = snapshots.load_initial(get_cache_max_age())
    except TodoistClientError as exc:
        return structured_error("list", str(exc))
    manager.load(snapshot, auto_select=False)
    manager.set_filter(Filter.from_string(args.filter, getattr(args, "project", None)), auto_select=False)
    rows = manager.rows()
    if getattr(args, "json", False):
        return structured_response(
            "list",
            message=f"{len(rows)} tasks",
            payload={"filter": manager.filter.label, "sort": manager.sort.value, "source": snapshot.source, "tasks": _rows_payload(rows)},
        )
    for row in rows:
        print(format_row(row))
    return 0


def cmd_sync(args: argparse.Namespace) -> int:
    services = build_services(args)
    if services is None:
        return 1
    _, snapshots = services
    try:
        snapshot = snapshots.resync()
    except TodoistClientError as exc:
        return structured_error("sync", str(exc))
    return structured_response(
        "sync",
        message=f"Synced {len(snapshot.tasks)} tasks",
        payload={"tasks": len(snapshot.tasks), "projects": len(snapshot.projects), "sections": len(snapshot.sections)},
    )


def cmd_cache(args: argparse.Namespace) -> int:
    cache = make_cache()
    if args.action == "clear":
        removed = cache.clear()
        return structured_response("cache", message="cleared" if removed else "nothing to clear", payload={"path": str(cache.path)})
    try:
        age = cache.age_seconds()
    except SnapshotCacheError as exc:
        return structured_error("cache", str(exc), payload={"path": str(cache.path)})
    max_age = get_cache_max_age()
    payload: Dict[str, Any] = {
        "path": str(cache.path),
        "exists": age is not None,
        "age_seconds": round(age, 1) if age is not None else None,
        "max_age": max_age,
        "valid": age is not None and age < max_age,
        "written_at": datetime.fromtimestamp(time.time() - age).strftime(TIMESTAMP_FORMAT) if age is not None else None,
    }
    return structured_response("cache", message="present" if age is not None else "absent", payload=payload)


def cmd_auth(args: argparse.Namespace) -> int:
    set_user_token(args.token)
    return structured_response("auth", message="token saved" if args.token.strip() else "token removed")


__all__ = ["build_services", "cmd_list", "cmd_sync", "cmd_cache", "cmd_auth", "format_row", "make_client", "make_cache"]
