#!/usr/bin/env python3
"""
todoist-tree: keyboard-driven Todoist client (CLI/TUI).

Thin facade wiring the argument parser to the command modules.
"""

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from typing import List, Optional

from config import get_cache_dir
from core.desktop.devtools.interface.cli_parser import build_parser as build_cli_parser
from core.desktop.devtools.interface.logging_setup import setup_logging

from .cli_commands import cmd_auth, cmd_cache, cmd_list, cmd_sync
from .tui_app import TodoistTreeTUI, cmd_tui
from .tui_themes import DEFAULT_THEME, THEMES

__all__ = [
    "cmd_auth",
    "cmd_cache",
    "cmd_list",
    "cmd_sync",
    "cmd_tui",
    "TodoistTreeTUI",
    "THEMES",
    "DEFAULT_THEME",
    "build_parser",
    "main",
]


def build_parser() -> argparse.ArgumentParser:
    parser = build_cli_parser(commands=sys.modules[__name__], themes=THEMES, default_theme=DEFAULT_THEME)
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        try:
            print(pkg_version("todoist-tree"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    if not getattr(args, "command", None) or args.command == "help":
        parser.print_help()
        return 0 if getattr(args, "command", None) == "help" else 1
    setup_logging(get_cache_dir(), verbose=getattr(args, "verbose", False), console=args.command != "tui")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
