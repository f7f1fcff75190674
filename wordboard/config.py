"""Konfigurácia hry z prostredia (.env + OS premenné).

Pravidlá:
- `.env` sa načíta veľmi skoro, ale nikdy neprepíše už existujúce OS premenné.
- Počas pytestu sa `.env` nenačítava (testy si prostredie riadia samy).
- Nerozpoznaná hodnota sa ignoruje (zaloguje sa) a použije sa predvolená.
"""
from __future__ import annotations

import logging
import os
from contextlib import suppress
from dataclasses import dataclass

from dotenv import load_dotenv

from .core.assets import get_premiums_path, get_wordlist_path

log = logging.getLogger("wordboard.config")

if os.getenv("PYTEST_CURRENT_TEST") is None:
    # pragma: no cover
    with suppress(Exception):
        load_dotenv(override=False)

_TRUE = {"1", "true", "yes", "on", "y", "t"}
_FALSE = {"0", "false", "no", "off", "n", "f"}


def _parse_bool(val: str | None) -> bool | None:
    """Bezpečné parsovanie boolean reťazcov; None ak neznáme."""
    if val is None:
        return None
    v = val.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return None


def _parse_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        log.warning("config_invalid_int name=%s value=%r -> default=%s", name, raw, default)
        return default


def _parse_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        log.warning("config_invalid_float name=%s value=%r -> default=%s", name, raw, default)
        return default
    if value <= 0:
        log.warning("config_non_positive name=%s value=%s -> default=%s", name, value, default)
        return default
    return value


@dataclass(frozen=True)
class GameSettings:
    """Nastavenia jednej hernej relácie."""

    board_size: int = 15
    premiums_path: str = get_premiums_path()
    wordlist_path: str = get_wordlist_path()
    timer_mode: bool = False
    turn_seconds: float = 30.0
    save_path: str = "game_save.json"
    seed: int | None = None
    max_ai_players: int = 5


def load_settings() -> GameSettings:
    """Zostaví `GameSettings` z premenných prostredia `WORDBOARD_*`.

    Komentár (SK): Každá premenná je voliteľná; chýbajúca alebo neplatná
    hodnota znamená predvolenú hodnotu z `GameSettings`.
    """
    defaults = GameSettings()
    board_size = _parse_int("WORDBOARD_BOARD_SIZE", defaults.board_size) or defaults.board_size
    if board_size < 1:
        log.warning("config_invalid_board_size value=%s -> default", board_size)
        board_size = defaults.board_size
    max_ai = _parse_int("WORDBOARD_MAX_AI_PLAYERS", defaults.max_ai_players)
    return GameSettings(
        board_size=board_size,
        premiums_path=os.getenv("WORDBOARD_PREMIUMS_PATH") or defaults.premiums_path,
        wordlist_path=os.getenv("WORDBOARD_WORDLIST_PATH") or defaults.wordlist_path,
        timer_mode=bool(_parse_bool(os.getenv("WORDBOARD_TIMER_MODE"))),
        turn_seconds=_parse_float("WORDBOARD_TURN_SECONDS", defaults.turn_seconds),
        save_path=os.getenv("WORDBOARD_SAVE_PATH") or defaults.save_path,
        seed=_parse_int("WORDBOARD_SEED", None),
        max_ai_players=max(0, max_ai if max_ai is not None else defaults.max_ai_players),
    )
