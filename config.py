from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

USER_CONFIG_PATH = Path(os.environ.get("TODOIST_TREE_CONFIG", Path.home() / ".todoist_tree_config.yaml"))
DEFAULT_CACHE_MAX_AGE = 300
DEFAULT_SORT = "priority"
DEFAULT_THEME = "dark-olive"
logger = logging.getLogger("todoist_tree.config")


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Unreadable config %s: %s", USER_CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    if not data:
        if USER_CONFIG_PATH.exists():
            USER_CONFIG_PATH.unlink()
        return
    USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    USER_CONFIG_PATH.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def _set_value(key: str, value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data[key] = value
    else:
        data.pop(key, None)
    _save_config(data)


def get_user_token() -> str:
    env_token = os.getenv("TODOIST_API_TOKEN")
    if env_token:
        return env_token.strip()
    return str(_load_config().get("token", "") or "").strip()


def set_user_token(value: str) -> None:
    _set_value("token", value)


def get_user_lang() -> str:
    return str(_load_config().get("lang", "") or "").strip()


def get_default_sort() -> str:
    return str(_load_config().get("default_sort", DEFAULT_SORT) or DEFAULT_SORT).strip().lower()


def get_theme() -> str:
    return str(_load_config().get("theme", DEFAULT_THEME) or DEFAULT_THEME).strip()


def get_cache_dir() -> Path:
    env_dir = os.getenv("TODOIST_TREE_CACHE_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".cache" / "todoist-tree"


def get_cache_max_age() -> int:
    """Seconds a cached snapshot is trusted on startup before a remote fetch."""
    raw = os.getenv("TODOIST_TREE_CACHE_TTL")
    if raw is None:
        raw = _load_config().get("cache_max_age", DEFAULT_CACHE_MAX_AGE)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_CACHE_MAX_AGE
    return max(0, value)
