"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark-olive": {
        "": "#d7dfe6",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "text.dimmer": "#6d717a",
        "selected": "bg:#3b3b3b #d7dfe6 bold",
        "header": "#ffb347 bold",
        "border": "#4b525a",
        "priority.urgent": "#e06c75 bold",
        "priority.high": "#e5c07b bold",
        "priority.medium": "#61afef",
        "priority.normal": "#7a7f85",
        "due.overdue": "#ff6b6b bold",
        "due.today": "#9ad974 bold",
        "due": "#97a0a9",
        "project": "#d7dfe6",
        "project.selected": "bg:#3b3b3b #ffb347 bold",
        "status.ok": "#9ad974 bold",
        "status.warn": "#e5c07b bold",
        "status.fail": "#e06c75 bold",
        "field.label": "#ffb347",
        "field.active": "#ffb347 bold underline",
    },
    "dark-contrast": {
        "": "#e8eaec",
        "text": "#e8eaec",
        "text.dim": "#a7b0ba",
        "text.dimmer": "#6f757d",
        "selected": "bg:#3d4047 #e8eaec bold",
        "header": "#ffb347 bold",
        "border": "#5a6169",
        "priority.urgent": "#ff5156 bold",
        "priority.high": "#f9ac60 bold",
        "priority.medium": "#7cc7ff",
        "priority.normal": "#8a9097",
        "due.overdue": "#ff5156 bold",
        "due.today": "#b8f171 bold",
        "due": "#a7b0ba",
        "project": "#e8eaec",
        "project.selected": "bg:#3d4047 #ffb347 bold",
        "status.ok": "#b8f171 bold",
        "status.warn": "#f0c674 bold",
        "status.fail": "#ff6b6b bold",
        "field.label": "#ffb347",
        "field.active": "#ffb347 bold underline",
    },
}

DEFAULT_THEME = "dark-olive"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme) or THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    return Style.from_dict(get_theme_palette(theme))


__all__ = ["THEMES", "DEFAULT_THEME", "get_theme_palette", "build_style"]
