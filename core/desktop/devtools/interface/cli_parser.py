"""CLI parser construction for todoist-tree."""

import argparse
from typing import Any, Mapping


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todoist-tree",
        description="todoist-tree: keyboard-driven Todoist client with a subtask tree view",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging to the log file")

    def add_view_args(sp):
        sp.add_argument("--filter", "-f", choices=["all", "today", "overdue"], default="all", help="root-level filter")
        sp.add_argument("--project", "-p", help="only tasks of this project id")
        sp.add_argument("--sort", "-s", choices=["priority", "date"], help="root ordering (default from config)")
        return sp

    sub = parser.add_subparsers(dest="command", help="Commands")

    tui_p = sub.add_parser("tui", help="Start the interactive TUI")
    tui_p.add_argument("--theme", choices=list(themes.keys()), help=f"colour palette (default from config, else {default_theme})")
    tui_p.add_argument("--sort", choices=["priority", "date"], help="initial root ordering")
    tui_p.add_argument("--lang", help="interface language (en, ru); default from config")
    tui_p.set_defaults(func=commands.cmd_tui)

    lp = sub.add_parser("list", help="Print the task tree")
    add_view_args(lp)
    lp.add_argument("--refresh", action="store_true", help="ignore the cache and fetch from Todoist")
    lp.add_argument("--json", action="store_true", help="structured JSON output")
    lp.set_defaults(func=commands.cmd_list)

    sp = sub.add_parser("sync", help="Fetch remote state and refresh the cache")
    sp.set_defaults(func=commands.cmd_sync)

    cp = sub.add_parser("cache", help="Inspect or clear the snapshot cache")
    cp.add_argument("action", choices=["status", "clear"])
    cp.set_defaults(func=commands.cmd_cache)

    ap = sub.add_parser("auth", help="Store the Todoist API token in the user config")
    ap.add_argument("--token", required=True, help="personal API token (empty string removes it)")
    ap.set_defaults(func=commands.cmd_auth)

    hp = sub.add_parser("help", help="Show help")
    hp.set_defaults(func=None)

    return parser


__all__ = ["build_parser"]
