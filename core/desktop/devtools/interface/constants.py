"""Interface-level constants for the todoist-tree CLI/TUI."""

from typing import Dict

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
LOG_FILE_NAME = "todoist-tree.log"
STATUS_MESSAGE_TTL = 3.0
RESULT_POLL_INTERVAL = 0.5

# Todoist REST priorities: 4 is the most urgent ("p1" in the web client).
PRIORITY_STYLES: Dict[int, str] = {
    4: "class:priority.urgent",
    3: "class:priority.high",
    2: "class:priority.medium",
    1: "class:priority.normal",
}

LANG_PACK: Dict[str, Dict[str, str]] = {
    "en": {
        "APP_TITLE": "todoist-tree",
        "FILTER_ALL": "All",
        "FILTER_TODAY": "Today",
        "FILTER_OVERDUE": "Overdue",
        "FILTER_PROJECT": "Project: {name}",
        "SORT_PRIORITY": "priority",
        "SORT_DATE": "due date",
        "STATUS_COUNTS": "{shown} shown / {total} tasks",
        "STATUS_PENDING": "{count} pending",
        "STATUS_FAILED": "{count} failed",
        "STATUS_SYNCING": "syncing…",
        "STATUS_SOURCE_CACHE": "cached",
        "STATUS_MESSAGE_SYNCED": "Synced {count} tasks",
        "STATUS_MESSAGE_SYNC_FAILED": "Sync failed: {error}",
        "STATUS_MESSAGE_COMPLETED": "Completed {count} task(s)",
        "STATUS_MESSAGE_DELETED": "Deleted {count} task(s)",
        "STATUS_MESSAGE_PRIORITY": "Priority set to {priority}",
        "STATUS_MESSAGE_SAVED": "Saved",
        "STATUS_MESSAGE_CREATED": "Creating \"{content}\"…",
        "STATUS_MESSAGE_REMOTE_FAILED": "Remote {action} failed: {error}",
        "STATUS_MESSAGE_NO_PROJECT": "Select a project first (J/K)",
        "STATUS_MESSAGE_EMPTY_CONTENT": "Task content cannot be empty",
        "STATUS_MESSAGE_SORT": "Sorted by {sort}",
        "TASK_LIST_EMPTY": "No tasks match this view",
        "TASK_LIST_EMPTY_HINT": "A: all · T: today · O: overdue · n: new task",
        "PROJECTS_HEADER": "Projects",
        "TABLE_HEADER_TASK": "Task",
        "TABLE_HEADER_PRIORITY": "P",
        "TABLE_HEADER_DUE": "Due",
        "TABLE_HEADER_CHILDREN": "Σ",
        "EDITOR_TITLE": "Edit task",
        "EDITOR_NEW_TITLE": "New task in {project}",
        "EDITOR_NEW_SUBTASK_TITLE": "New subtask of \"{parent}\"",
        "FIELD_CONTENT": "Content",
        "FIELD_DESCRIPTION": "Description",
        "FIELD_PRIORITY": "Priority (1-4)",
        "FIELD_DUE": "Due",
        "FIELD_CHILDREN": "Subtasks",
        "CHILDREN_EMPTY": "(none)",
        "FOOTER_LIST": "j/k move · J/K project · T/O/A filter · s sort · enter edit · x done · d delete · n new · o subtask · 1-4 priority · r sync · q quit",
        "FOOTER_EDITOR": "tab next field · c-s save · esc cancel · in subtasks: j/k move, enter open, n new",
    },
    "ru": {
        "FILTER_ALL": "Все",
        "FILTER_TODAY": "Сегодня",
        "FILTER_OVERDUE": "Просрочено",
        "FILTER_PROJECT": "Проект: {name}",
        "SORT_PRIORITY": "приоритет",
        "SORT_DATE": "срок",
        "STATUS_COUNTS": "{shown} видно / {total} задач",
        "STATUS_PENDING": "{count} в очереди",
        "STATUS_FAILED": "{count} ошибок",
        "STATUS_SYNCING": "синхронизация…",
        "STATUS_SOURCE_CACHE": "кэш",
        "STATUS_MESSAGE_SYNCED": "Синхронизировано задач: {count}",
        "STATUS_MESSAGE_SYNC_FAILED": "Ошибка синхронизации: {error}",
        "STATUS_MESSAGE_COMPLETED": "Выполнено задач: {count}",
        "STATUS_MESSAGE_DELETED": "Удалено задач: {count}",
        "STATUS_MESSAGE_PRIORITY": "Приоритет: {priority}",
        "STATUS_MESSAGE_SAVED": "Сохранено",
        "TASK_LIST_EMPTY": "Нет задач для этого вида",
        "PROJECTS_HEADER": "Проекты",
        "TABLE_HEADER_TASK": "Задача",
        "TABLE_HEADER_DUE": "Срок",
        "EDITOR_TITLE": "Редактирование",
        "FIELD_CONTENT": "Заголовок",
        "FIELD_DESCRIPTION": "Описание",
        "FIELD_PRIORITY": "Приоритет (1-4)",
        "FIELD_DUE": "Срок",
        "FIELD_CHILDREN": "Подзадачи",
        "CHILDREN_EMPTY": "(нет)",
    },
}
