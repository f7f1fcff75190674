"""Rozloženie prémiových polí (DL/TL/DW/TW) a jeho načítanie zo súboru.

Formát súboru (JSON)::

    {"size": 15, "squares": [{"row": 0, "col": 0, "type": "TW"}, ...]}

Akákoľvek chyba v súbore znamená návrat k vstavanému predvolenému rozloženiu
ako celku; čiastočné zmiešanie vlastných a predvolených polí sa nepripúšťa.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from .types import Position, Premium

log = logging.getLogger("wordboard.premiums")

_DEFAULT_SQUARES: dict[Premium, tuple[tuple[int, int], ...]] = {
    Premium.TW: (
        (0, 0), (0, 7), (0, 14), (7, 0), (7, 14), (14, 0), (14, 7), (14, 14),
    ),
    Premium.DW: (
        (1, 1), (2, 2), (3, 3), (4, 4), (10, 10), (11, 11), (12, 12), (13, 13),
        (1, 13), (2, 12), (3, 11), (4, 10), (10, 4), (11, 3), (12, 2), (13, 1),
    ),
    Premium.TL: (
        (1, 5), (1, 9), (5, 1), (5, 5), (5, 9), (5, 13),
        (9, 1), (9, 5), (9, 9), (9, 13), (13, 5), (13, 9),
    ),
    Premium.DL: (
        (0, 3), (0, 11), (2, 6), (2, 8), (3, 0), (3, 14), (6, 2), (6, 6),
        (6, 8), (6, 12), (8, 2), (8, 6), (8, 8), (8, 12), (11, 0), (11, 14),
        (12, 6), (12, 8), (14, 3), (14, 11),
    ),
}


@dataclass(frozen=True)
class PremiumLayout:
    """Nemenné rozloženie prémií: štyri po dvoch disjunktné množiny pozícií."""

    triple_word: frozenset[Position]
    double_word: frozenset[Position]
    triple_letter: frozenset[Position]
    double_letter: frozenset[Position]

    def premium_at(self, pos: Position) -> Premium | None:
        """Typ prémie na danej pozícii (alebo None)."""
        if pos in self.double_letter:
            return Premium.DL
        if pos in self.triple_letter:
            return Premium.TL
        if pos in self.double_word:
            return Premium.DW
        if pos in self.triple_word:
            return Premium.TW
        return None

    def squares(self, premium: Premium) -> frozenset[Position]:
        return {
            Premium.TW: self.triple_word,
            Premium.DW: self.double_word,
            Premium.TL: self.triple_letter,
            Premium.DL: self.double_letter,
        }[premium]

    @classmethod
    def from_sets(cls, sets: dict[Premium, set[Position]]) -> PremiumLayout:
        return cls(
            triple_word=frozenset(sets.get(Premium.TW, ())),
            double_word=frozenset(sets.get(Premium.DW, ())),
            triple_letter=frozenset(sets.get(Premium.TL, ())),
            double_letter=frozenset(sets.get(Premium.DL, ())),
        )


def default_layout(size: int = 15) -> PremiumLayout:
    """Vstavané rozloženie (klasická 15×15 mapa).

    Pri menšej doske sa pozície mimo rozsahu vynechajú.
    """
    sets: dict[Premium, set[Position]] = {}
    for premium, coords in _DEFAULT_SQUARES.items():
        sets[premium] = {Position(r, c) for r, c in coords if r < size and c < size}
    return PremiumLayout.from_sets(sets)


def _parse_coord(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def load_layout(path: str | Path, size: int) -> PremiumLayout | None:
    """Načíta a zvaliduje rozloženie zo súboru.

    Vráti None (a zaloguje dôvod), ak treba použiť predvolené rozloženie.
    """
    p = Path(path)
    if not p.exists():
        log.warning("premiums_file_missing path=%s -> defaults", p)
        return None
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        log.warning("premiums_parse_failed path=%s error=%s -> defaults", p, exc)
        return None

    if not isinstance(data, dict) or "size" not in data:
        log.warning("premiums_size_missing path=%s -> defaults", p)
        return None
    declared = _parse_coord(data.get("size"))
    if declared != size:
        log.warning(
            "premiums_size_mismatch path=%s declared=%s expected=%s -> defaults",
            p,
            data.get("size"),
            size,
        )
        return None
    squares = data.get("squares")
    if not isinstance(squares, list):
        log.warning("premiums_squares_missing path=%s -> defaults", p)
        return None

    sets: dict[Premium, set[Position]] = {premium: set() for premium in Premium}
    seen: set[Position] = set()
    for idx, raw in enumerate(squares):
        if not isinstance(raw, dict):
            log.warning("premiums_square_invalid path=%s index=%s -> defaults", p, idx)
            return None
        row = _parse_coord(raw.get("row"))
        col = _parse_coord(raw.get("col"))
        tag = str(raw.get("type") or "").strip()
        if row is None or col is None or not tag:
            log.warning("premiums_square_incomplete path=%s index=%s -> defaults", p, idx)
            return None
        if not (0 <= row < size and 0 <= col < size):
            log.warning("premiums_square_out_of_range path=%s row=%s col=%s -> defaults", p, row, col)
            return None
        premium = Premium.__members__.get(tag)
        if premium is None:
            log.warning("premiums_unknown_type path=%s type=%s -> defaults", p, tag)
            return None
        pos = Position(row, col)
        if pos in seen:
            log.warning("premiums_square_duplicate path=%s row=%s col=%s -> defaults", p, row, col)
            return None
        seen.add(pos)
        sets[premium].add(pos)

    return PremiumLayout.from_sets(sets)


def resolve_layout(path: str | Path | None, size: int) -> PremiumLayout:
    """Načíta rozloženie alebo (pri akejkoľvek chybe) vráti predvolené."""
    if path is None:
        return default_layout(size)
    layout = load_layout(path, size)
    if layout is None:
        return default_layout(size)
    log.info("premiums_loaded path=%s", path)
    return layout
