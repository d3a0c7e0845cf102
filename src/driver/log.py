"""Append-only JSONL event log: one directory per UTC day, size-rotated files."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

__all__ = ["EventLog", "append_event", "configure", "current_log_path", "log_dir"]

DEFAULT_DIR = Path("logs/events")
DEFAULT_MAX_BYTES = 10 * 1024 * 1024


class EventLog:
    """Writes one JSON object per line under ``base_dir/YYYYMMDD/events_NN.jsonl``."""

    def __init__(self, base_dir: str | Path, *, max_bytes: int | None = None) -> None:
        self.base_dir = Path(base_dir)
        self.max_bytes = max_bytes or DEFAULT_MAX_BYTES
        self.current_path: Path | None = None
        self._lock = threading.Lock()

    def _day_dir(self) -> Path:
        return self.base_dir / datetime.now(timezone.utc).strftime("%Y%m%d")

    def _has_room(self, path: Path) -> bool:
        return not path.exists() or path.stat().st_size < self.max_bytes

    def _target(self) -> Path:
        day_dir = self._day_dir()
        day_dir.mkdir(parents=True, exist_ok=True)

        current = self.current_path
        if current is not None and current.parent == day_dir and self._has_room(current):
            return current

        index = 0
        while not self._has_room(day_dir / f"events_{index:02d}.jsonl"):
            index += 1
        self.current_path = day_dir / f"events_{index:02d}.jsonl"
        return self.current_path

    def append(self, event: Dict[str, Any]) -> Path:
        """Write ``event`` (stamped with ``ts`` unless it has one) and return the file used."""

        record = dict(event)
        record.setdefault("ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))
        line = json.dumps(record, sort_keys=True, ensure_ascii=False)
        with self._lock:
            path = self._target()
            with path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        return path


_ACTIVE = EventLog(DEFAULT_DIR)


def configure(base_dir: str | Path, *, max_bytes: int | None = None) -> EventLog:
    """Point the process-wide log at ``base_dir``; the next event opens a fresh file."""

    global _ACTIVE
    _ACTIVE = EventLog(base_dir, max_bytes=max_bytes)
    return _ACTIVE


def log_dir() -> Path:
    return _ACTIVE.base_dir


def append_event(event: Dict[str, Any]) -> Path:
    return _ACTIVE.append(event)


def current_log_path() -> Path | None:
    return _ACTIVE.current_path
