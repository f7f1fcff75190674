from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from .board import Board
from .premiums import PremiumLayout
from .tiles import letter_value
from .types import Position, Premium, ScoreBreakdown, WordFound

log = logging.getLogger("wordboard.scoring")


def _canonical_key(found: WordFound) -> tuple[int, Position, str]:
    letters = found.letters
    vertical = len(letters) > 1 and letters[0].col == letters[1].col
    start = letters[0] if letters else Position(-1, -1)
    return (int(vertical), start, found.word)


def score_words(
    board: Board,
    layout: PremiumLayout,
    placements: Mapping[Position, str],
    words: Iterable[WordFound],
) -> tuple[int, list[ScoreBreakdown]]:
    """Vypocita celkove skore tahu a vrati aj rozpis pre jednotlive slova.

    Kazde pismeno slova prispeje svojou hodnotou. Premie DL/TL/DW/TW sa
    uplatnia len na novych pismenach (`placements`) a kazda pozicia najviac
    raz za cely tah: mnozina spracovanych pozicii je spolocna pre vsetky slova.

    Slova sa spracuju v kanonickom poradi (vodorovne pred zvislymi, potom podla
    prvej bunky), takze premiu na spolocnej novej bunke dostane vzdy to iste
    slovo bez ohladu na poradie vstupu. V tomto poradi je aj rozpis.
    """
    processed: set[Position] = set()
    total_score = 0
    breakdowns: list[ScoreBreakdown] = []

    for found in sorted(words, key=_canonical_key):
        word_multiplier = 1
        word_points = 0
        letter_bonus = 0
        for pos in found.letters:
            letter = board.get_letter(pos.row, pos.col)
            base = letter_value(letter)
            word_points += base
            if pos not in placements or pos in processed:
                continue
            processed.add(pos)
            premium = layout.premium_at(pos)
            if premium == Premium.DL:
                letter_bonus += base  # +1x dalsi nasobok (2x celkovo)
            elif premium == Premium.TL:
                letter_bonus += base * 2  # +2x (3x celkovo)
            elif premium == Premium.DW:
                word_multiplier *= 2
            elif premium == Premium.TW:
                word_multiplier *= 3
            log.debug(
                "tile_scored letter=%r row=%s col=%s base=%s premium=%s",
                letter,
                pos.row,
                pos.col,
                base,
                premium.name if premium else "-",
            )
        total = (word_points + letter_bonus) * word_multiplier
        log.debug(
            "word_scored word=%s base=%s bonus=%s multiplier=%s total=%s",
            found.word,
            word_points,
            letter_bonus,
            word_multiplier,
            total,
        )
        total_score += total
        breakdowns.append(
            ScoreBreakdown(
                word=found.word,
                base_points=word_points,
                letter_bonus_points=letter_bonus,
                word_multiplier=word_multiplier,
                total=total,
            )
        )
    return total_score, breakdowns


def word_heuristic_score(word: str) -> int:
    """Sucet hodnot pismen bez premii (pozicia slova este nie je znama)."""
    return sum(letter_value(ch) for ch in word)
