from typing import Any, Dict, List, Optional, Protocol

from core import Project, Section, Snapshot, Task


class TaskApi(Protocol):
    def list_tasks(self) -> List[Task]:
        ...

    def list_projects(self) -> List[Project]:
        ...

    def list_sections(self) -> List[Section]:
        ...

    def create_task(self, payload: Dict[str, Any]) -> Task:
        ...

    def update_task(self, task_id: str, payload: Dict[str, Any]) -> Optional[Task]:
        ...

    def close_task(self, task_id: str) -> None:
        ...

    def delete_task(self, task_id: str) -> None:
        ...


class SnapshotStore(Protocol):
    def load(self) -> Optional[Snapshot]:
        ...

    def save(self, snapshot: Snapshot) -> None:
        ...

    def is_valid(self, max_age_seconds: int) -> bool:
        ...

    def clear(self) -> bool:
        ...
