from __future__ import annotations

import random
from dataclasses import dataclass, field

from .types import TilePoints

# Standardna anglicka distribucia (100 kociek, bez blankov).
TILE_DISTRIBUTION: dict[str, int] = {
    "A": 9, "B": 2, "C": 2, "D": 4, "E": 12, "F": 2, "G": 3, "H": 2, "I": 9,
    "J": 1, "K": 1, "L": 4, "M": 2, "N": 6, "O": 8, "P": 2, "Q": 1, "R": 6,
    "S": 4, "T": 6, "U": 4, "V": 2, "W": 2, "X": 1, "Y": 2, "Z": 1,
}

_POINT_GROUPS: dict[int, str] = {
    1: "AEIONRTLSU",
    2: "DG",
    3: "BCMP",
    4: "FHVWY",
    5: "K",
    8: "JX",
    10: "QZ",
}

TILE_POINTS: TilePoints = {
    letter: points for points, letters in _POINT_GROUPS.items() for letter in letters
}


def get_tile_points() -> TilePoints:
    """Vrati kopiu tabulky bodovych hodnot pismen."""

    return dict(TILE_POINTS)


def get_tile_distribution() -> dict[str, int]:
    """Vrati kopiu distribucie pismen v taske."""

    return dict(TILE_DISTRIBUTION)


def letter_value(letter: str | None) -> int:
    """Bodova hodnota pismena; blank a nezname znaky maju 0."""
    if not letter:
        return 0
    return TILE_POINTS.get(letter.upper(), 0)


@dataclass
class TileBag:
    """Taska s pismenami; velkost sa len zmensuje (tahanie z konca)."""

    seed: int | None = None
    tiles: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Pozn.: Ak su poskytnute `tiles`, zachovaj ich presne v danom poradi
        # (pouzite pri load-e hry). Inak napln podla distribucie a premiesaj.
        if not self.tiles:
            for ch, count in TILE_DISTRIBUTION.items():
                self.tiles.extend([ch] * count)
            random.Random(self.seed).shuffle(self.tiles)

    def draw_tile(self) -> str | None:
        """Potiahne jednu kocku z konca tasky (None ak je prazdna)."""
        if not self.tiles:
            return None
        return self.tiles.pop()

    def draw(self, n: int) -> list[str]:
        """Potiahne n kociek (alebo menej, ak taska je prazdna)."""
        out: list[str] = []
        while len(out) < n and self.tiles:
            out.append(self.tiles.pop())
        return out

    def remaining(self) -> int:
        return len(self.tiles)

    def is_empty(self) -> bool:
        return not self.tiles
