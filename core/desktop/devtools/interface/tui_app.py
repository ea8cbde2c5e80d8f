#!/usr/bin/env python3
"""TUI application - TodoistTreeTUI class and cmd_tui command."""

import logging
import os
import sys
import threading
import time
from datetime import date
from typing import Callable, Optional

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.containers import DynamicContainer
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame, TextArea

from config import get_cache_max_age, get_theme
from core import Filter, Snapshot
from core.desktop.devtools.application.mutation_dispatcher import MutationDispatcher, MutationOp
from core.desktop.devtools.application.snapshot_service import SnapshotService
from core.desktop.devtools.application.task_list_manager import TaskListManager
from core.desktop.devtools.interface.cli_commands import build_services
from core.desktop.devtools.interface.constants import RESULT_POLL_INTERVAL, STATUS_MESSAGE_TTL
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_footer import build_footer_text
from core.desktop.devtools.interface.tui_navigation import move_project_selection, move_vertical_selection
from core.desktop.devtools.interface.tui_render import (
    PROJECTS_WIDTH,
    render_children_text,
    render_projects_text,
    render_task_list_text,
)
from core.desktop.devtools.interface.tui_status import build_status_text, sort_label
from infrastructure.todoist import TodoistClientError
from util.responsive import editor_content_width

from .tui_editing import EditingMixin
from .tui_themes import DEFAULT_THEME, THEMES, build_style

logger = logging.getLogger("todoist_tree.tui")

ACTION_KEYS = {
    MutationOp.CREATE: "create",
    MutationOp.UPDATE: "update",
    MutationOp.CLOSE: "complete",
    MutationOp.DELETE: "delete",
}


class TodoistTreeTUI(EditingMixin):
    @classmethod
    def build_style(cls, theme: str) -> Style:
        return build_style(theme)

    def __init__(
        self,
        manager: TaskListManager,
        snapshots: SnapshotService,
        theme: str = DEFAULT_THEME,
        lang: Optional[str] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.manager = manager
        self.dispatcher: MutationDispatcher = manager.dispatcher
        self.snapshots = snapshots
        self.clock = clock
        self.lang = lang
        self.theme_name = theme
        self.style = self.build_style(theme)

        self.snapshot_source = "remote"
        self.snapshot_timestamp = 0
        self.syncing = False
        self.failed_count = 0
        self.status_message = ""
        self.status_message_style = "class:status.ok"
        self.status_message_until = 0.0
        self.list_offset = 0
        self._last_poll = 0.0
        self._last_day = clock()
        self._incoming_lock = threading.Lock()
        self._incoming: Optional[Snapshot] = None
        self._incoming_error: Optional[str] = None
        self._sync_thread: Optional[threading.Thread] = None

        self.editing_mode = False
        self.edit_context: Optional[str] = None
        self.edit_task_id: Optional[str] = None
        self.edit_project_id: Optional[str] = None
        self.edit_parent_id: Optional[str] = None
        self.edit_field_index = 0
        self.child_index: Optional[int] = None
        self.app: Optional[Application] = None

        self.content_field = TextArea(multiline=False, wrap_lines=False)
        self.description_field = TextArea(multiline=True, wrap_lines=True, height=Dimension(min=3, max=8))
        self.priority_field = TextArea(multiline=False, wrap_lines=False)
        self.due_field = TextArea(multiline=False, wrap_lines=False)

        kb = KeyBindings()
        not_editing = Condition(lambda: not self.editing_mode)
        editing_active = Condition(lambda: self.editing_mode)
        children_focused = editing_active & Condition(lambda: self.editor_field_name() == "children")

        @kb.add("q", filter=not_editing)
        @kb.add("c-c")
        def _(event):
            event.app.exit()

        @kb.add("j", filter=not_editing)
        @kb.add("down", filter=not_editing)
        @kb.add("j", filter=children_focused)
        @kb.add("down", filter=children_focused)
        def _(event):
            move_vertical_selection(self, 1)

        @kb.add("k", filter=not_editing)
        @kb.add("up", filter=not_editing)
        @kb.add("k", filter=children_focused)
        @kb.add("up", filter=children_focused)
        def _(event):
            move_vertical_selection(self, -1)

        @kb.add("J", filter=not_editing)
        def _(event):
            move_project_selection(self, 1)

        @kb.add("K", filter=not_editing)
        def _(event):
            move_project_selection(self, -1)

        @kb.add("A", filter=not_editing)
        def _(event):
            self.apply_filter(Filter.all())

        @kb.add("T", filter=not_editing)
        def _(event):
            self.apply_filter(Filter.today())

        @kb.add("O", filter=not_editing)
        def _(event):
            self.apply_filter(Filter.overdue())

        @kb.add("s", filter=not_editing)
        def _(event):
            self.manager.toggle_sort()
            self.set_status_message(self._t("STATUS_MESSAGE_SORT", sort=sort_label(self)))

        @kb.add("x", filter=not_editing)
        def _(event):
            self.complete_current()

        @kb.add("d", filter=not_editing)
        def _(event):
            self.delete_current()

        @kb.add("1", filter=not_editing)
        @kb.add("2", filter=not_editing)
        @kb.add("3", filter=not_editing)
        @kb.add("4", filter=not_editing)
        def _(event):
            self.set_priority(int(event.key_sequence[0].key))

        @kb.add("enter", filter=not_editing)
        def _(event):
            task = self.manager.selected_task()
            if task is not None:
                self.start_editing(task)

        @kb.add("n", filter=not_editing)
        @kb.add("a", filter=not_editing)
        def _(event):
            project_id = self.manager.default_project_id()
            if project_id is None:
                self.set_status_message(self._t("STATUS_MESSAGE_NO_PROJECT"), style="class:status.fail")
                return
            self.start_new_task(project_id)

        @kb.add("o", filter=not_editing)
        def _(event):
            task = self.manager.selected_task()
            if task is not None:
                self.start_new_task(task.project_id, parent_id=task.id)

        @kb.add("r", filter=not_editing)
        def _(event):
            self.start_resync()

        @kb.add("tab", filter=editing_active)
        def _(event):
            self.cycle_field()

        @kb.add("enter", filter=children_focused)
        def _(event):
            self.open_selected_child()

        @kb.add("n", filter=children_focused)
        def _(event):
            self.new_subtask_from_editor()

        @kb.add("c-s", filter=editing_active)
        def _(event):
            self.save_edit()

        @kb.add("escape", filter=editing_active, eager=True)
        def _(event):
            self.cancel_edit()

        self.status_bar = Window(content=FormattedTextControl(self.get_status_text), height=1, always_hide_cursor=True)
        self.projects_pane = Window(
            content=FormattedTextControl(self.get_projects_text),
            width=Dimension.exact(PROJECTS_WIDTH),
            always_hide_cursor=True,
        )
        self.main_window = Window(
            content=FormattedTextControl(self.get_task_list_text, focusable=True),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        self.children_window = Window(
            content=FormattedTextControl(self.get_children_text, focusable=True),
            always_hide_cursor=True,
            height=Dimension(min=2, max=12),
        )
        self.footer = Window(content=FormattedTextControl(self.get_footer_text), height=Dimension(min=1, max=3), always_hide_cursor=True)

        self.normal_body = VSplit([self.projects_pane, Window(width=1, char="│", style="class:border"), self.main_window])
        self.editor_body = Frame(
            HSplit(
                [
                    self._labelled("content", "FIELD_CONTENT", self.content_field),
                    self._labelled("description", "FIELD_DESCRIPTION", self.description_field),
                    self._labelled("priority", "FIELD_PRIORITY", self.priority_field),
                    self._labelled("due", "FIELD_DUE", self.due_field),
                    self.children_window,
                ],
                width=Dimension(preferred=editor_content_width(self.get_terminal_width())),
            ),
            title=lambda: self.editor_title(),
        )
        self.body_container = DynamicContainer(lambda: self.editor_body if self.editing_mode else self.normal_body)

        self.app = Application(
            layout=Layout(HSplit([self.status_bar, self.body_container, self.footer]), focused_element=self.main_window),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
            refresh_interval=RESULT_POLL_INTERVAL,
            before_render=lambda _app: self.tick(),
        )
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("TODOIST_TREE_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    def _labelled(self, name: str, label_key: str, area: TextArea) -> HSplit:
        def label() -> FormattedText:
            style = "class:field.active" if self.editor_field_name() == name else "class:field.label"
            return FormattedText([(style, self._t(label_key))])

        return HSplit([Window(content=FormattedTextControl(label), height=1, always_hide_cursor=True), area])

    @staticmethod
    def get_terminal_width() -> int:
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    @staticmethod
    def get_terminal_height() -> int:
        try:
            return os.get_terminal_size().lines
        except (AttributeError, ValueError, OSError):
            return 40

    def _t(self, key: str, **kwargs) -> str:
        return translate(key, lang=self.lang, **kwargs)

    def today(self) -> date:
        return self.clock()

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    def set_status_message(self, message: str, ttl: float = STATUS_MESSAGE_TTL, style: str = "class:status.ok") -> None:
        self.status_message = message
        self.status_message_style = style
        self.status_message_until = time.time() + ttl
        self.force_render()

    # ------------------------------------------------------------ renderers

    def get_status_text(self) -> FormattedText:
        return build_status_text(self)

    def get_task_list_text(self) -> FormattedText:
        return render_task_list_text(self)

    def get_projects_text(self) -> FormattedText:
        return render_projects_text(self)

    def get_children_text(self) -> FormattedText:
        return render_children_text(self)

    def get_footer_text(self) -> FormattedText:
        return build_footer_text(self)

    # -------------------------------------------------------------- actions

    def load_snapshot(self, snapshot: Snapshot, auto_select: bool = True) -> None:
        self.manager.load(snapshot, auto_select=auto_select)
        self.snapshot_source = snapshot.source
        self.snapshot_timestamp = snapshot.timestamp
        self.force_render()

    def apply_filter(self, flt: Filter) -> None:
        self.manager.set_filter(flt)
        self.list_offset = 0
        self.force_render()

    def complete_current(self) -> None:
        removed = self.manager.complete_selected()
        if removed:
            self.set_status_message(self._t("STATUS_MESSAGE_COMPLETED", count=len(removed)))

    def delete_current(self) -> None:
        removed = self.manager.delete_selected()
        if removed:
            self.set_status_message(self._t("STATUS_MESSAGE_DELETED", count=len(removed)))

    def set_priority(self, priority: int) -> None:
        if self.manager.set_priority(priority) is not None:
            self.set_status_message(self._t("STATUS_MESSAGE_PRIORITY", priority=priority))

    def poll_results(self) -> None:
        for result in self.manager.poll_results():
            if not result.ok:
                self.failed_count += 1
                action = ACTION_KEYS.get(result.command.op, result.command.op.value)
                self.set_status_message(
                    self._t("STATUS_MESSAGE_REMOTE_FAILED", action=action, error=result.error),
                    ttl=STATUS_MESSAGE_TTL * 2,
                    style="class:status.fail",
                )
        if self.manager.needs_resync and not self.syncing:
            self.start_resync()

    def tick(self) -> None:
        """Runs before every render on the loop thread."""
        now = time.time()
        if now - self._last_poll >= RESULT_POLL_INTERVAL:
            self._last_poll = now
            self.poll_results()
        today = self.clock()
        if today != self._last_day:
            self._last_day = today
            self.manager.refresh()
        self._consume_incoming()

    # --------------------------------------------------------------- resync

    def start_resync(self) -> None:
        if self.syncing:
            return
        self.syncing = True
        self.manager.needs_resync = False
        position, project_id = self.manager.cursor_snapshot()

        def worker() -> None:
            try:
                snapshot = self.snapshots.resync(position, project_id)
            except (RuntimeError, OSError, ValueError) as exc:
                logger.warning("Resync failed: %s", exc)
                with self._incoming_lock:
                    self._incoming_error = str(exc)
            except Exception as exc:
                logger.exception("Resync crashed")
                with self._incoming_lock:
                    self._incoming_error = f"{type(exc).__name__}: {exc}"
            else:
                with self._incoming_lock:
                    self._incoming = snapshot
            self.force_render()

        self._sync_thread = threading.Thread(target=worker, name="todoist-resync", daemon=True)
        self._sync_thread.start()
        self.force_render()

    def _consume_incoming(self) -> None:
        with self._incoming_lock:
            snapshot, error = self._incoming, self._incoming_error
            self._incoming, self._incoming_error = None, None
        if snapshot is not None:
            self.syncing = False
            self.load_snapshot(snapshot, auto_select=False)
            self.set_status_message(self._t("STATUS_MESSAGE_SYNCED", count=len(snapshot.tasks)))
        elif error is not None:
            self.syncing = False
            self.set_status_message(self._t("STATUS_MESSAGE_SYNC_FAILED", error=error), style="class:status.fail")

    # ------------------------------------------------------------------ run

    def run(self) -> None:
        self.dispatcher.start()
        try:
            self.app.run()
        finally:
            self.dispatcher.stop()
            self.snapshots.remember(self.manager.export_snapshot(self.snapshot_timestamp))


def cmd_tui(args) -> int:
    services = build_services(args)
    if services is None:
        return 1
    manager, snapshots = services
    theme = getattr(args, "theme", None) or get_theme()
    if theme not in THEMES:
        logger.warning("Unknown theme %r, using %s", theme, DEFAULT_THEME)
        theme = DEFAULT_THEME
    tui = TodoistTreeTUI(manager, snapshots, theme=theme, lang=getattr(args, "lang", None))
    try:
        snapshot = snapshots.load_initial(get_cache_max_age())
    except TodoistClientError as exc:
        print(f"Could not load tasks: {exc}", file=sys.stderr)
        return 1
    tui.load_snapshot(snapshot)
    if snapshot.source == "cache":
        tui.start_resync()
    tui.run()
    return 0


__all__ = ["TodoistTreeTUI", "cmd_tui"]
