"""Persistent JSON config helpers.

Stores the UI theme, syntax style, highlight toggle, log level, and keymap
overrides. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .keys import DEFAULT_KEYMAP

logger = logging.getLogger(__name__)

APP_NAME = "gitstage"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored so a read-only config
    directory never stops the UI.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot write config %s: %s", CONFIG_PATH, exc)


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_style_name() -> str | None:
    """Load the pygments style used for the file view."""
    return _load_string("style")


def load_highlight_enabled() -> bool:
    """Return whether viewed files are syntax highlighted (default ``True``)."""
    value = load_config().get("highlight")
    return value if isinstance(value, bool) else True


def load_log_level() -> str:
    value = _load_string("log_level")
    if value is None or value.upper() not in LOG_LEVEL_NAMES:
        return DEFAULT_LOG_LEVEL
    return value.upper()


def load_key_overrides() -> dict[str, tuple[str, ...]]:
    """Load per-action key overrides such as ``{"stage": ["=", "a"]}``.

    Unknown actions, non-list values, and non-string keys are dropped.
    """
    value = load_config().get("keys")
    if not isinstance(value, dict):
        return {}

    overrides: dict[str, tuple[str, ...]] = {}
    for action, combos in value.items():
        if action not in DEFAULT_KEYMAP or not isinstance(combos, list):
            continue
        cleaned = tuple(combo for combo in combos if isinstance(combo, str) and combo)
        if cleaned:
            overrides[action] = cleaned
    return overrides
