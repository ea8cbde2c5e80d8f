from dataclasses import dataclass, field
from typing import List, Optional

from .task import Project, Section, Task


@dataclass
class Snapshot:
    """Last known remote state plus the cursor it was viewed with."""

    tasks: List[Task] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    sections: List[Section] = field(default_factory=list)
    timestamp: int = 0
    cursor_position: Optional[int] = None
    selected_project_id: Optional[str] = None
    source: str = "remote"


__all__ = ["Snapshot"]
