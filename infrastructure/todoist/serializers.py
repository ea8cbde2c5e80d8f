"""Mapping between Todoist REST payloads and domain objects.

The same dict shape is used for the on-disk snapshot cache, so a cached file
can be read with the functions that parse live API responses.
"""

from datetime import date
from typing import Any, Dict, Optional

from core import Due, Duration, Project, Section, Task

DATE_FORMAT = "%Y-%m-%d"


def _parse_date(value: Any) -> date:
    text = str(value or "").strip()
    # Datetime-bearing dues still carry a plain "date" key; keep only the day.
    return date.fromisoformat(text[:10])


def due_from_dict(data: Optional[Dict[str, Any]]) -> Optional[Due]:
    if not data or not data.get("date"):
        return None
    return Due(
        date=_parse_date(data["date"]),
        string=str(data.get("string") or ""),
        is_recurring=bool(data.get("is_recurring", False)),
        datetime=data.get("datetime"),
        timezone=data.get("timezone"),
    )


def due_to_dict(due: Due) -> Dict[str, Any]:
    return {
        "string": due.string,
        "date": due.date.strftime(DATE_FORMAT),
        "is_recurring": due.is_recurring,
        "datetime": due.datetime,
        "timezone": due.timezone,
    }


def task_from_dict(data: Dict[str, Any]) -> Task:
    duration_raw = data.get("duration") or None
    duration = None
    if duration_raw:
        duration = Duration(amount=int(duration_raw.get("amount", 0)), unit=str(duration_raw.get("unit", "")))
    parent_id = data.get("parent_id")
    return Task(
        id=str(data["id"]),
        project_id=str(data.get("project_id") or ""),
        section_id=data.get("section_id") or None,
        content=str(data.get("content") or ""),
        description=str(data.get("description") or ""),
        is_completed=bool(data.get("is_completed", False)),
        labels=list(data.get("labels") or []),
        parent_id=str(parent_id) if parent_id else None,
        order=int(data.get("order") or 0),
        priority=int(data.get("priority") or 4),
        due=due_from_dict(data.get("due")),
        url=str(data.get("url") or ""),
        comment_count=int(data.get("comment_count") or 0),
        created_at=str(data.get("created_at") or ""),
        creator_id=str(data.get("creator_id") or ""),
        assignee_id=data.get("assignee_id"),
        assigner_id=data.get("assigner_id"),
        duration=duration,
    )


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "project_id": task.project_id,
        "section_id": task.section_id,
        "content": task.content,
        "description": task.description,
        "is_completed": task.is_completed,
        "labels": list(task.labels),
        "parent_id": task.parent_id,
        "order": task.order,
        "priority": task.priority,
        "due": due_to_dict(task.due) if task.due else None,
        "url": task.url,
        "comment_count": task.comment_count,
        "created_at": task.created_at,
        "creator_id": task.creator_id,
        "assignee_id": task.assignee_id,
        "assigner_id": task.assigner_id,
        "duration": {"amount": task.duration.amount, "unit": task.duration.unit} if task.duration else None,
    }


def task_update_payload(task: Task, due_string: Optional[str] = None) -> Dict[str, Any]:
    """Writable fields for ``POST /tasks/{id}``; server-owned fields are omitted."""
    payload: Dict[str, Any] = {
        "content": task.content,
        "description": task.description,
        "priority": task.priority,
        "labels": list(task.labels),
    }
    if due_string is not None:
        payload["due_string"] = due_string
    return payload


def new_task_payload(
    content: str,
    project_id: str,
    parent_id: Optional[str] = None,
    description: str = "",
    priority: Optional[int] = None,
    due_string: str = "",
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"content": content, "project_id": project_id}
    if parent_id:
        payload["parent_id"] = parent_id
    if description:
        payload["description"] = description
    if priority is not None:
        payload["priority"] = priority
    if due_string:
        payload["due_string"] = due_string
    return payload


def project_from_dict(data: Dict[str, Any]) -> Project:
    parent_id = data.get("parent_id")
    return Project(
        id=str(data["id"]),
        name=str(data.get("name") or ""),
        order=int(data.get("order") or 0),
        color=str(data.get("color") or ""),
        parent_id=str(parent_id) if parent_id else None,
        is_favorite=bool(data.get("is_favorite", False)),
        is_inbox_project=bool(data.get("is_inbox_project", False)),
        view_style=str(data.get("view_style") or "list"),
        url=str(data.get("url") or ""),
    )


def project_to_dict(project: Project) -> Dict[str, Any]:
    return {
        "id": project.id,
        "name": project.name,
        "order": project.order,
        "color": project.color,
        "parent_id": project.parent_id,
        "is_favorite": project.is_favorite,
        "is_inbox_project": project.is_inbox_project,
        "view_style": project.view_style,
        "url": project.url,
    }


def section_from_dict(data: Dict[str, Any]) -> Section:
    return Section(
        id=str(data["id"]),
        project_id=str(data.get("project_id") or ""),
        name=str(data.get("name") or ""),
        order=int(data.get("order") or 0),
    )


def section_to_dict(section: Section) -> Dict[str, Any]:
    return {"id": section.id, "project_id": section.project_id, "name": section.name, "order": section.order}


__all__ = [
    "due_from_dict",
    "due_to_dict",
    "task_from_dict",
    "task_to_dict",
    "task_update_payload",
    "new_task_payload",
    "project_from_dict",
    "project_to_dict",
    "section_from_dict",
    "section_to_dict",
]
