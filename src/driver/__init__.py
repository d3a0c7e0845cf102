"""Run driver: session ownership, event log, terminal display and CLI."""

from .session import Session, SessionSettings, resolve_settings
from . import log

__all__ = [
    "Session",
    "SessionSettings",
    "log",
    "resolve_settings",
]
