"""Cesty k súborom pribaleným v `wordboard/assets`."""

from __future__ import annotations

from pathlib import Path

_ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"


def get_premiums_path() -> str:
    """Predvolené rozloženie prémií (15×15)."""
    return str(_ASSETS_DIR / "premiums.json")


def get_wordlist_path() -> str:
    return str(_ASSETS_DIR / "wordlist.txt")
