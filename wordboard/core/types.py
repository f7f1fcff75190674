from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

# Pozn.: Komentare su v slovencine, nazvy a logy po anglicky.

BLANK = " "  # blank (zolik) sa na doske uklada ako medzera a ma 0 bodov
RACK_CAPACITY = 7


@dataclass(frozen=True, order=True)
class Position:
    """Suradnica bunky na doske (0-index)."""
    row: int
    col: int

    def neighbours(self) -> tuple[Position, Position, Position, Position]:
        """Styria ortogonalni susedia (bez kontroly hranic dosky)."""
        return (
            Position(self.row - 1, self.col),
            Position(self.row + 1, self.col),
            Position(self.row, self.col - 1),
            Position(self.row, self.col + 1),
        )


@dataclass
class WordFound:
    """Jedno vzniknute slovo na doske spolu so suradnicami jeho buniek."""
    word: str
    letters: list[Position]


@dataclass
class ScoreBreakdown:
    """Detailne skore jedneho slova."""
    word: str
    base_points: int
    letter_bonus_points: int
    word_multiplier: int
    total: int


class Premium(Enum):
    """Premiove polia na doske."""
    DL = auto()  # Double Letter
    TL = auto()  # Triple Letter
    DW = auto()  # Double Word
    TW = auto()  # Triple Word


TilePoints = dict[str, int]
