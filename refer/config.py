"""Read-only JSON config helpers.

Holds the polling tick, UI theme, and focus-region layout. All access is
defensive: malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .input.dispatch import DEFAULT_FOCUS_KEYS, RESERVED_KEYS
from .state import DEFAULT_ENTRY_REGIONS, DEFAULT_NAVIGATION_REGIONS
from .terminal import DEFAULT_TICK_MS

logger = logging.getLogger(__name__)

APP_NAME = "refer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
MAX_TICK_MS = 1000


@dataclass(frozen=True)
class FocusLayout:
    navigation: tuple[str, ...] = DEFAULT_NAVIGATION_REGIONS
    entry: tuple[str, ...] = DEFAULT_ENTRY_REGIONS
    focus_keys: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_FOCUS_KEYS))


def load_config() -> dict[str, object]:
    """Load the JSON config object.

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


def coerce_tick_ms(value: object) -> int | None:
    """Accept integer ticks in ``1..MAX_TICK_MS``; booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < 1 or value > MAX_TICK_MS:
        return None
    return value


def load_tick_ms(data: dict[str, object] | None = None) -> int:
    data = load_config() if data is None else data
    tick = coerce_tick_ms(data.get("tick_ms"))
    return DEFAULT_TICK_MS if tick is None else tick


def load_theme_name(data: dict[str, object] | None = None) -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    data = load_config() if data is None else data
    value = data.get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _region_tuple(value: object, default: tuple[str, ...]) -> tuple[str, ...]:
    if not isinstance(value, list):
        return default
    regions = tuple(item.strip() for item in value if isinstance(item, str) and item.strip())
    if not regions or len(set(regions)) != len(regions):
        return default
    return regions


def load_focus_layout(data: dict[str, object] | None = None) -> FocusLayout:
    """Load region sets and focus-key bindings.

    Overlapping region sets fall back to the defaults. Focus keys that name a
    region outside the navigation set, or that would shadow a quit or
    entry-toggle key, are dropped.
    """
    data = load_config() if data is None else data
    navigation = _region_tuple(data.get("regions"), DEFAULT_NAVIGATION_REGIONS)
    entry = _region_tuple(data.get("entry_regions"), DEFAULT_ENTRY_REGIONS)
    if set(navigation) & set(entry):
        navigation, entry = DEFAULT_NAVIGATION_REGIONS, DEFAULT_ENTRY_REGIONS

    raw_keys = data.get("focus_keys")
    if not isinstance(raw_keys, dict):
        raw_keys = dict(DEFAULT_FOCUS_KEYS)
    focus_keys = {
        token: region
        for token, region in raw_keys.items()
        if isinstance(token, str) and token and isinstance(region, str) and region in navigation
    }
    for token in RESERVED_KEYS.intersection(focus_keys):
        logger.warning("config focus_keys cannot rebind reserved key %s", token)
        del focus_keys[token]
    return FocusLayout(navigation=navigation, entry=entry, focus_keys=focus_keys)
