"""Logging configuration for the CLI and TUI entry points."""

import logging
import sys
from pathlib import Path
from typing import Optional

from core.desktop.devtools.interface.constants import LOG_FILE_NAME

APP_LOGGER_PREFIX = "todoist_tree"


class _ConsoleNoiseFilter(logging.Filter):
    """Our own warnings reach the console; third-party libraries only on ERROR."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(APP_LOGGER_PREFIX + ".") or record.name == APP_LOGGER_PREFIX:
            return True
        return record.levelno >= logging.ERROR


def setup_logging(log_dir: Path, *, verbose: bool = False, console: bool = True) -> Optional[Path]:
    """Attach a file handler under ``log_dir`` and, outside the TUI, a stderr handler.

    Returns the log file path, or None when the directory is not writable.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(logging.WARNING)
        ch.setFormatter(fmt)
        ch.addFilter(_ConsoleNoiseFilter())
        root.addHandler(ch)

    log_file: Optional[Path] = Path(log_dir) / LOG_FILE_NAME
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError:
        log_file = None
    else:
        fh.setLevel(logging.DEBUG if verbose else logging.INFO)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.captureWarnings(True)
    return log_file


__all__ = ["setup_logging"]
