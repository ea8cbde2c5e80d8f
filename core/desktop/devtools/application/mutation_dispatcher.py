"""Fire-and-forget dispatch of remote task mutations.

Commands are queued by the interaction loop and executed on a worker thread.
Outcomes come back through a result queue that the loop drains on its own
schedule; the worker never sees the local task store.
"""

import logging
import queue
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from application.ports import TaskApi
from core import Task

logger = logging.getLogger("todoist_tree.dispatch")


class MutationOp(Enum):
    CREATE = "create"
    UPDATE = "update"
    CLOSE = "close"
    DELETE = "delete"


@dataclass(frozen=True)
class MutationCommand:
    op: MutationOp
    task_id: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)

    def describe(self) -> str:
        target = self.task_id or self.payload.get("content", "")
        return f"{self.op.value} {target}".strip()


@dataclass
class MutationResult:
    command: MutationCommand
    ok: bool
    error: str = ""
    task: Optional[Task] = None


class MutationDispatcher:
    def __init__(self, api: TaskApi) -> None:
        self.api = api
        self._commands: "queue.Queue[Optional[MutationCommand]]" = queue.Queue()
        self._results: "queue.Queue[MutationResult]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self._stop_requested = False

    @property
    def running(self) -> bool:
        return bool(self._worker and self._worker.is_alive())

    def pending(self) -> int:
        return self._commands.qsize()

    def start(self) -> None:
        if self.running:
            return
        self._stop_requested = False

        def worker() -> None:
            logger.debug("Mutation worker started")
            while True:
                command = self._commands.get()
                try:
                    if command is None:
                        logger.debug("Mutation worker received stop signal")
                        return
                    self._results.put(self.execute(command))
                finally:
                    self._commands.task_done()

        self._worker = threading.Thread(target=worker, name="todoist-mutations", daemon=True)
        self._worker.start()

    def submit(self, command: MutationCommand) -> None:
        logger.debug("Queued %s", command.describe())
        self._commands.put(command)

    def execute(self, command: MutationCommand) -> MutationResult:
        """Run one command against the API; failures become results, never raise."""
        try:
            task: Optional[Task] = None
            if command.op is MutationOp.CREATE:
                task = self.api.create_task(command.payload)
            elif command.op is MutationOp.UPDATE:
                task = self.api.update_task(command.task_id or "", command.payload)
            elif command.op is MutationOp.CLOSE:
                self.api.close_task(command.task_id or "")
            elif command.op is MutationOp.DELETE:
                self.api.delete_task(command.task_id or "")
        except Exception as exc:
            logger.warning("Remote %s failed: %s", command.describe(), exc)
            return MutationResult(command, ok=False, error=str(exc))
        logger.info("Remote %s done", command.describe())
        return MutationResult(command, ok=True, task=task)

    def run_pending(self) -> int:
        """Execute queued commands on the calling thread (no worker running)."""
        if self.running:
            return 0
        done = 0
        while True:
            try:
                command = self._commands.get_nowait()
            except queue.Empty:
                return done
            try:
                if command is not None:
                    self._results.put(self.execute(command))
                    done += 1
            finally:
                self._commands.task_done()

    def drain_results(self) -> List[MutationResult]:
        results: List[MutationResult] = []
        while True:
            try:
                results.append(self._results.get_nowait())
            except queue.Empty:
                return results

    def join(self) -> None:
        """Block until every queued command has been processed."""
        if self.running:
            self._commands.join()
        else:
            self.run_pending()

    def stop(self, timeout: float = 2.0) -> None:
        if not self.running or self._stop_requested:
            return
        self._stop_requested = True
        self._commands.put(None)
        if self._worker is not None:
            self._worker.join(timeout=timeout)


__all__ = ["MutationOp", "MutationCommand", "MutationResult", "MutationDispatcher"]
