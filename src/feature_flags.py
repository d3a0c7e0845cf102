"""Event log switch read from ``config/features.toml``.

``[event_log]`` holds the defaults and ``[event_log.by_profile.<name>]``
overrides them for one run profile. Environment keys beat both.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping

from project_config import FEATURES_PATH, read_toml

__all__ = ["coerce_bool", "get_event_log_feature", "is_event_log_enabled", "reload"]

EVENT_LOG_OVERRIDE_KEYS = (
    "CLI_SUDOKU_EVENT_LOG",
    "SUDOKU_EVENT_LOG",
)

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


@lru_cache(maxsize=1)
def _event_log_table() -> dict[str, Any]:
    table = read_toml(FEATURES_PATH).get("event_log")
    return table if isinstance(table, dict) else {}


def reload() -> None:
    """Forget the cached feature table."""

    _event_log_table.cache_clear()


def coerce_bool(value: Any) -> bool | None:
    """Read ``value`` as a switch, or ``None`` when it is not one."""
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return None
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return None


def get_event_log_feature(profile: str | None = None) -> dict[str, Any]:
    """Defaults of the ``event_log`` table with the profile block applied on top."""

    table = _event_log_table()
    merged = {key: value for key, value in table.items() if key != "by_profile"}
    profiles = table.get("by_profile")
    if profile and isinstance(profiles, dict):
        block = profiles.get(profile.lower())
        if isinstance(block, dict):
            merged.update(block)
    return merged


def is_event_log_enabled(env: Mapping[str, str] | None = None, *, profile: str | None = None) -> bool:
    """Return ``True`` when run events should be appended to the JSONL log.

    The first override key holding a recognisable switch decides; otherwise
    the profile's feature block does.
    """

    for key in EVENT_LOG_OVERRIDE_KEYS:
        override = coerce_bool((env or {}).get(key))
        if override is not None:
            return override
    return bool(get_event_log_feature(profile).get("enabled", False))
