"""Project configuration: ``config.toml`` and ``config/features.toml`` at the repo root."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]

from contracts.errors import ConfigError


PROJECT_ROOT = Path(__file__).resolve().parents[1]
CONFIG_PATH = PROJECT_ROOT / "config.toml"
FEATURES_PATH = PROJECT_ROOT / "config" / "features.toml"

_MISSING = object()


def read_toml(path: Path) -> Dict[str, Any]:
    """Parse ``path``; a missing file reads as an empty table."""
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path.name} is not valid TOML: {exc}") from exc


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Cached contents of ``config.toml``.

    Without the file every caller runs on its built-in defaults.
    """
    return read_toml(CONFIG_PATH)


def get_section(path: str, default: Any = _MISSING) -> Any:
    """Look up a dotted path such as ``"pdf.layout"``.

    Raises :class:`KeyError` when the path is absent and no default is given.
    """
    data: Any = get_config()
    for part in path.split("."):
        if not isinstance(data, dict) or part not in data:
            if default is _MISSING:
                raise KeyError(f"Configuration path '{path}' not found")
            return default
        data = data[part]
    return data


def reload() -> None:
    get_config.cache_clear()


__all__ = ["CONFIG_PATH", "FEATURES_PATH", "get_config", "get_section", "read_toml", "reload"]
