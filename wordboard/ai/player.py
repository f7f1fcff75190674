"""Brute-force AI hráč: permutácie racku proti slovníku.

Postup jedného ťahu:
1. rack sa oreže na 7 kociek (snapshot ako n-tica, živý rack sa nemení),
2. vygenerujú sa všetky usporiadania všetkých neprázdnych podmnožín,
3. ponechajú sa tie, ktoré sú v slovníku,
4. zoradia sa zostupne podľa súčtu hodnôt písmen,
5. pre prvé slovo, ktoré sa dá niekam položiť (náhodné poradie pozícií,
   najprv vodorovne, potom zvislo), sa písmená položia a ťah sa potvrdí.

Komentár (SK): Kontrola susednosti nemá výnimku pre prvý ťah, preto AI na
prázdnej doske vždy pasuje; stred musí otvoriť človek.
"""
from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from itertools import permutations

from ..core.board import Board
from ..core.dictionary import Dictionary
from ..core.game import GameSession
from ..core.scoring import word_heuristic_score
from ..core.types import RACK_CAPACITY, Position

log = logging.getLogger("wordboard.ai")


def generate_all_combinations(tiles: Sequence[str]) -> set[str]:
    """Všetky usporiadania všetkých neprázdnych podmnožín racku."""
    snapshot = tuple(tiles)
    combinations: set[str] = set()
    for length in range(1, len(snapshot) + 1):
        for indices in permutations(range(len(snapshot)), length):
            combinations.add("".join(snapshot[i] for i in indices))
    return combinations


def filter_valid_words(candidates: set[str], dictionary: Dictionary) -> list[str]:
    return [word for word in candidates if dictionary.contains(word)]


def rank_words(words: list[str]) -> list[str]:
    """Zoradí slová zostupne podľa heuristického skóre (pri zhode abecedne)."""
    return sorted(words, key=lambda w: (-word_heuristic_score(w), w))


def word_cells(word: str, row: int, col: int, horizontal: bool) -> list[Position]:
    dr, dc = (0, 1) if horizontal else (1, 0)
    return [Position(row + dr * i, col + dc * i) for i in range(len(word))]


def can_place_word(board: Board, word: str, row: int, col: int, horizontal: bool) -> bool:
    """Všetky cieľové bunky musia byť voľné a aspoň jedna musí susediť s písmenom."""
    has_adjacent = False
    for pos in word_cells(word, row, col, horizontal):
        if not board.inside(pos.row, pos.col) or board.is_occupied(pos.row, pos.col):
            return False
        if board.has_occupied_neighbour(pos.row, pos.col):
            has_adjacent = True
    return has_adjacent


class BruteForceSearch:
    """Hľadanie ťahu pre AI hráča aktívneho v danej relácii."""

    def __init__(self, session: GameSession, *, rng: random.Random | None = None) -> None:
        self.session = session
        self.rng = rng or random.Random()

    def candidate_words(self) -> list[str]:
        rack = self.session.current_player().rack[:RACK_CAPACITY]
        candidates = generate_all_combinations(rack)
        valid = filter_valid_words(candidates, self.session.dictionary)
        ranked = rank_words(valid)
        log.debug(
            "ai_candidates rack=%s generated=%s valid=%s",
            "".join(rack),
            len(candidates),
            len(ranked),
        )
        return ranked

    def find_placement(self, word: str) -> tuple[int, int, bool] | None:
        """Prvá legálna pozícia pre slovo v náhodnom poradí buniek."""
        board = self.session.board
        positions = [(r, c) for r in range(board.size) for c in range(board.size)]
        self.rng.shuffle(positions)
        for row, col in positions:
            for horizontal in (True, False):
                if can_place_word(board, word, row, col, horizontal):
                    return row, col, horizontal
        return None

    def play(self) -> bool:
        """Odohrá ťah aktívneho hráča; False znamená pas (stav bez zmeny)."""
        player = self.session.current_player()
        for word in self.candidate_words():
            placement = self.find_placement(word)
            if placement is None:
                continue
            row, col, horizontal = placement
            rack_before = list(player.rack)
            for pos, letter in zip(word_cells(word, row, col, horizontal), word):
                self.session.place_tile(letter, pos.row, pos.col)
            if self.session.submit_word():
                log.info(
                    "ai_played player=%s word=%s row=%s col=%s horizontal=%s",
                    player.name,
                    word,
                    row,
                    col,
                    horizontal,
                )
                return True
            # restore vrátil písmená na koniec racku; obnov pôvodné poradie
            player.rack[:] = rack_before
            log.info("ai_submit_rejected player=%s word=%s", player.name, word)
            return False
        log.info("ai_no_move player=%s", player.name)
        return False
