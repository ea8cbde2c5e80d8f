"""On-disk cache of the last synced snapshot.

A single JSON document holding projects, tasks, sections, the time it was
written and the cursor the user left it with.
"""

import json
import logging
import time
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from core import Snapshot
from .todoist.serializers import (
    project_from_dict,
    project_to_dict,
    section_from_dict,
    section_to_dict,
    task_from_dict,
    task_to_dict,
)

CACHE_FILE_NAME = "cache.json"
logger = logging.getLogger("todoist_tree.cache")


class SnapshotCacheError(RuntimeError):
    pass


class SnapshotCache:
    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = Path(cache_dir)
        self.path = self.cache_dir / CACHE_FILE_NAME
        self._lock = Lock()

    def save(self, snapshot: Snapshot) -> None:
        data: Dict[str, Any] = {
            "projects": [project_to_dict(p) for p in snapshot.projects],
            "tasks": [task_to_dict(t) for t in snapshot.tasks],
            "sections": [section_to_dict(s) for s in snapshot.sections],
            "timestamp": int(snapshot.timestamp or time.time()),
            "cursor_position": snapshot.cursor_position,
            "selected_project_id": snapshot.selected_project_id,
        }
        with self._lock:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(".json.tmp")
            tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            tmp.replace(self.path)

    def load(self) -> Optional[Snapshot]:
        """Read the cached snapshot; ``None`` when absent.

        Raises SnapshotCacheError when the file exists but cannot be parsed.
        """
        with self._lock:
            if not self.path.exists():
                return None
            try:
                raw = json.loads(self.path.read_text(encoding="utf-8"))
                return Snapshot(
                    tasks=[task_from_dict(item) for item in raw.get("tasks", [])],
                    projects=[project_from_dict(item) for item in raw.get("projects", [])],
                    sections=[section_from_dict(item) for item in raw.get("sections", [])],
                    timestamp=int(raw.get("timestamp", 0)),
                    cursor_position=raw.get("cursor_position"),
                    selected_project_id=raw.get("selected_project_id"),
                    source="cache",
                )
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
                raise SnapshotCacheError(f"Corrupt cache {self.path}: {exc}") from exc

    def is_valid(self, max_age_seconds: int) -> bool:
        snapshot = self.load()
        if snapshot is None:
            return False
        return time.time() - snapshot.timestamp < max_age_seconds

    def age_seconds(self) -> Optional[float]:
        snapshot = self.load()
        if snapshot is None:
            return None
        return max(0.0, time.time() - snapshot.timestamp)

    def clear(self) -> bool:
        with self._lock:
            if self.path.exists():
                self.path.unlink()
                return True
        return False


__all__ = ["SnapshotCache", "SnapshotCacheError", "CACHE_FILE_NAME"]
