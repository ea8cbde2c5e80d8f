"""Footer renderer for TodoistTreeTUI."""

import textwrap
from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText


def build_footer_text(tui) -> FormattedText:
    key = "FOOTER_EDITOR" if tui.editing_mode else "FOOTER_LIST"
    width = max(20, tui.get_terminal_width() - 2)
    lines = textwrap.wrap(tui._t(key), width)[:2] or [""]
    fragments: List[Tuple[str, str]] = []
    task = None if tui.editing_mode else tui.manager.selected_task()
    if task is not None and task.description:
        snippet = task.description.splitlines()[0]
        fragments.append(("class:text.dim", " " + snippet[:width] + "\n"))
    for idx, line in enumerate(lines):
        fragments.append(("class:text.dimmer", " " + line + ("\n" if idx < len(lines) - 1 else "")))
    return FormattedText(fragments)


__all__ = ["build_footer_text"]
