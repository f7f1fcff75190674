
from __future__ import annotations

from collections.abc import Mapping

from .board import Board
from .types import Position, WordFound


def covers_center(board: Board) -> bool:
    """Ci je stredove pole obsadene."""
    center = board.center
    return board.is_occupied(center.row, center.col)


def has_adjacent_tiles(board: Board, placements: Mapping[Position, str]) -> bool:
    """Aspon jedno nove pismeno musi susedit s pismenom z predosleho tahu.

    Susedia, ktori su sami sucastou tohto tahu, sa nepocitaju.
    """
    for pos in placements:
        for n in pos.neighbours():
            if board.is_occupied(n.row, n.col) and n not in placements:
                return True
    return False


def collect_new_words(board: Board, placements: Mapping[Position, str]) -> list[WordFound]:
    """Vsetky slova (dlzka > 1) prechadzajuce novymi pismenami.

    Poradie: podla poradia kladenia, pre kazdu poziciu najprv vodorovne,
    potom zvisle slovo. Duplicity sa odstranuju podla retazca (nie pozicie).
    """
    words: list[WordFound] = []
    seen: set[str] = set()
    for pos in placements:
        for horizontal in (True, False):
            found = board.word_at(pos.row, pos.col, horizontal)
            if len(found.word) > 1 and found.word not in seen:
                seen.add(found.word)
                words.append(found)
    return words
