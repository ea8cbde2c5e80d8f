"""Status bar builder for TodoistTreeTUI."""

import time
from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import FilterKind, SortCriterion
from util.sync_status import remote_status_fragments


def filter_label(tui) -> str:
    manager = tui.manager
    flt = manager.filter
    if flt.kind is FilterKind.TODAY:
        return tui._t("FILTER_TODAY")
    if flt.kind is FilterKind.OVERDUE:
        return tui._t("FILTER_OVERDUE")
    if flt.kind is FilterKind.PROJECT:
        project = manager.selected_project()
        return tui._t("FILTER_PROJECT", name=project.name if project else flt.project_id)
    return tui._t("FILTER_ALL")


def sort_label(tui) -> str:
    if tui.manager.sort is SortCriterion.DATE:
        return tui._t("SORT_DATE")
    return tui._t("SORT_PRIORITY")


def build_status_text(tui) -> FormattedText:
    manager = tui.manager
    parts: List[Tuple[str, str]] = [
        ("class:header", f" {tui._t('APP_TITLE')} "),
        ("class:border", "│ "),
        ("class:text", filter_label(tui)),
        ("class:border", " │ "),
        ("class:text.dim", "↕ " + sort_label(tui)),
        ("class:border", " │ "),
        ("class:text.dim", tui._t("STATUS_COUNTS", shown=len(manager.display), total=len(manager.store))),
    ]
    if tui.snapshot_source == "cache":
        parts.append(("class:border", " │ "))
        parts.append(("class:text.dimmer", tui._t("STATUS_SOURCE_CACHE")))
    pending = tui.dispatcher.pending()
    labels = {
        "syncing": tui._t("STATUS_SYNCING"),
        "pending": tui._t("STATUS_PENDING", count=pending),
        "failed": tui._t("STATUS_FAILED", count=tui.failed_count),
    }
    parts.append(("class:border", " │ "))
    for style, text in remote_status_fragments(pending, tui.failed_count, tui.syncing, labels):
        parts.append((style, text + " "))
    if tui.status_message and time.time() < tui.status_message_until:
        parts.append(("class:border", "│ "))
        parts.append((tui.status_message_style, tui.status_message))
    return FormattedText(parts)


__all__ = ["build_status_text", "filter_label", "sort_label"]
