"""Slovník platných slov pre validáciu ťahov a filtrovanie AI kandidátov.

Poznámky:
- Slová sa ukladajú ako `frozenset[str]` v lowercase.
- Overovanie je case-insensitive.
- Chýbajúci súbor nie je chyba: vznikne prázdny slovník (žiadne slovo
  neprejde validáciou) a zaloguje sa varovanie.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

log = logging.getLogger("wordboard.dictionary")


class Dictionary:
    """Množina povolených slov (len na čítanie).

    Atribúty:
        words: množina slov v lowercase.
        source: cesta, z ktorej bol slovník načítaný (ak nejaká).
    """

    def __init__(self, words: Iterable[str] = (), *, source: str | None = None) -> None:
        self.words: frozenset[str] = frozenset(
            w.strip().lower() for w in words if w and w.strip()
        )
        self.source = source

    @classmethod
    def from_path(cls, path: str | Path) -> Dictionary:
        """Načíta wordlist zo súboru (jedno slovo na riadok)."""
        p = Path(path)
        try:
            with p.open(encoding="utf-8", errors="ignore") as f:
                lines = [line.strip() for line in f]
        except OSError as exc:
            log.warning("wordlist_load_failed path=%s error=%s", p, exc)
            return cls(source=str(p))
        dictionary = cls(lines, source=str(p))
        log.info("wordlist_loaded path=%s words=%s", p, dictionary.count())
        return dictionary

    def contains(self, word: str) -> bool:
        """Vracia True, ak je `word` v slovníku (case-insensitive)."""
        if not word:
            return False
        return word.lower() in self.words

    __contains__ = contains

    def count(self) -> int:
        """Počet slov v aktuálne načítanom slovníku."""
        return len(self.words)

    def __len__(self) -> int:
        return len(self.words)
