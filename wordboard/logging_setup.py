"""Logovanie hry: Rich na konzolu, rotujúci súbor na disk.

Každý záznam nesie `turn_id` ťahu, počas ktorého vznikol.
"""
from __future__ import annotations

import logging
import os
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.logging import RichHandler

# Kontextové ID ťahu, nastavuje ho GameController
TURN_ID_VAR: ContextVar[str] = ContextVar("turn_id", default="-")

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [turn=%(turn_id)s] %(message)s"


class _TurnIdFilter(logging.Filter):
    """Skopíruje hodnotu `TURN_ID_VAR` do atribútu `record.turn_id`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.turn_id = TURN_ID_VAR.get()
        return True


def default_log_path() -> str:
    """`WORDBOARD_LOG_PATH`, inak `wordboard.log` v aktuálnom priečinku."""
    env = os.getenv("WORDBOARD_LOG_PATH")
    if env:
        return env
    return str(Path.cwd() / "wordboard.log")


def configure_logging(*, log_path: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """Nastaví handlery na root loggeri, ak ešte žiadne nemá.

    `level` platí pre konzolu; súbor (1 MB, 5 záloh) berie aj DEBUG.
    """

    root = logging.getLogger()
    if root.handlers:
        return logging.getLogger("wordboard")

    root.setLevel(logging.DEBUG)
    turn_filter = _TurnIdFilter()

    console = RichHandler(rich_tracebacks=True)
    console.setLevel(level)
    console.addFilter(turn_filter)
    console.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(console)

    path = log_path or default_log_path()
    try:
        rotating = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    except OSError as exc:
        logging.getLogger("wordboard").warning("log_file_unavailable path=%s error=%s", path, exc)
    else:
        rotating.setLevel(logging.DEBUG)
        rotating.addFilter(turn_filter)
        rotating.setFormatter(logging.Formatter(_FILE_FORMAT))
        root.addHandler(rotating)

    return logging.getLogger("wordboard")
