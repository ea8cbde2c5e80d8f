"""Fetch remote state and keep the on-disk snapshot in step with it."""

import logging
import time
from typing import Optional

from application.ports import SnapshotStore, TaskApi
from core import Snapshot

logger = logging.getLogger("todoist_tree.sync")


class SnapshotService:
    def __init__(self, api: TaskApi, cache: SnapshotStore) -> None:
        self.api = api
        self.cache = cache

    def _cached(self, max_age: int) -> Optional[Snapshot]:
        try:
            if not self.cache.is_valid(max_age):
                return None
            return self.cache.load()
        except RuntimeError as exc:
            logger.warning("Ignoring unreadable cache: %s", exc)
            return None

    def fetch(self) -> Snapshot:
        projects = self.api.list_projects()
        tasks = self.api.list_tasks()
        sections = self.api.list_sections()
        logger.info("Fetched %d projects, %d tasks, %d sections", len(projects), len(tasks), len(sections))
        return Snapshot(tasks=tasks, projects=projects, sections=sections, timestamp=int(time.time()))

    def load_initial(self, max_age: int) -> Snapshot:
        """Prefer a fresh cache; otherwise fetch and persist remote state."""
        cached = self._cached(max_age)
        if cached is not None:
            logger.debug("Using cached snapshot from %s", cached.timestamp)
            return cached
        snapshot = self.fetch()
        self._persist(snapshot)
        return snapshot

    def resync(self, cursor_position: Optional[int] = None, selected_project_id: Optional[str] = None) -> Snapshot:
        snapshot = self.fetch()
        snapshot.cursor_position = cursor_position
        snapshot.selected_project_id = selected_project_id
        self._persist(snapshot)
        return snapshot

    def remember(self, snapshot: Snapshot) -> None:
        """Persist local state and cursor on exit; keeps the original fetch time."""
        self._persist(snapshot)

    def _persist(self, snapshot: Snapshot) -> None:
        try:
            self.cache.save(snapshot)
        except OSError as exc:
            logger.warning("Could not write cache: %s", exc)


__all__ = ["SnapshotService"]
