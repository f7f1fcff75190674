from wordboard.core.board import Board
from wordboard.core.premiums import default_layout
from wordboard.core.rules import collect_new_words
from wordboard.core.scoring import score_words, word_heuristic_score
from wordboard.core.types import Position, WordFound

LAYOUT = default_layout(15)


def _place(board: Board, word: str, row: int, col: int, horizontal: bool = True) -> dict[Position, str]:
    placements: dict[Position, str] = {}
    for i, ch in enumerate(word):
        r, c = (row, col + i) if horizontal else (row + i, col)
        board.set_letter(r, c, ch)
        placements[Position(r, c)] = ch
    return placements


def test_single_tile_on_tw() -> None:
    b = Board()
    placements = _place(b, "A", 0, 0)
    score, _ = score_words(b, LAYOUT, placements, [WordFound("A", [Position(0, 0)])])
    assert score == 3


def test_single_tile_on_dl() -> None:
    b = Board()
    placements = _place(b, "D", 0, 3)
    score, bds = score_words(b, LAYOUT, placements, [WordFound("D", [Position(0, 3)])])
    assert score == 4
    assert bds[0].letter_bonus_points == 2


def test_plain_cat_through_center() -> None:
    b = Board()
    placements = _place(b, "CAT", 7, 6)
    score, _ = score_words(b, LAYOUT, placements, collect_new_words(b, placements))
    assert score == 5


def test_tl_on_c_in_cat() -> None:
    # TL na (5,5) -> 'C' nech padne na (5,5)
    b = Board()
    placements = _place(b, "CAT", 5, 5)
    score, _ = score_words(b, LAYOUT, placements, collect_new_words(b, placements))
    assert score == 5 + 3 * 2


def test_breakdown_word_multipliers_compound() -> None:
    """Stĺpec 0 od (0,0) po (7,0): dve TW (×9) a DL na (3,0)."""
    b = Board()
    placements = _place(b, "AAAAAAAA", 0, 0, horizontal=False)
    score, bds = score_words(b, LAYOUT, placements, collect_new_words(b, placements))
    assert len(bds) == 1
    bd = bds[0]
    assert bd.base_points == 8
    assert bd.letter_bonus_points == 1
    assert bd.word_multiplier == 9
    assert bd.total == 81
    assert score == 81


def test_premium_ignored_on_existing_tiles() -> None:
    b = Board()
    b.set_letter(0, 0, "A")  # starý ťah na TW
    placements = _place(b, "T", 0, 1)
    score, _ = score_words(b, LAYOUT, placements, collect_new_words(b, placements))
    assert score == 2


def test_premium_counted_once_per_position() -> None:
    # nové 'A' na DL (0,3) tvorí "CA" vodorovne aj "AT" zvislo
    b = Board()
    b.set_letter(0, 2, "C")
    b.set_letter(1, 3, "T")
    placements = _place(b, "A", 0, 3)
    words = collect_new_words(b, placements)
    assert [w.word for w in words] == ["CA", "AT"]
    score, bds = score_words(b, LAYOUT, placements, words)
    assert [bd.total for bd in bds] == [5, 2]
    assert score == 7


def test_shared_word_premium_independent_of_word_order() -> None:
    # nové 'A' na DW (1,1) tvorí "CA" vodorovne aj "AT" zvislo
    b = Board()
    b.set_letter(1, 0, "C")
    b.set_letter(2, 1, "T")
    placements = _place(b, "A", 1, 1)
    ca = WordFound("CA", [Position(1, 0), Position(1, 1)])
    at = WordFound("AT", [Position(1, 1), Position(2, 1)])
    forward = score_words(b, LAYOUT, placements, [ca, at])
    backward = score_words(b, LAYOUT, placements, [at, ca])
    assert forward == backward
    score, bds = forward
    assert [(bd.word, bd.word_multiplier, bd.total) for bd in bds] == [("CA", 2, 8), ("AT", 1, 2)]
    assert score == 10


def test_lower_diagonal_cell_doubles_word() -> None:
    b = Board()
    placements = _place(b, "AT", 11, 11)
    score, bds = score_words(b, LAYOUT, placements, collect_new_words(b, placements))
    assert bds[0].word_multiplier == 2
    assert bds[0].letter_bonus_points == 0
    assert score == 4


def test_blank_scores_zero() -> None:
    b = Board()
    placements = _place(b, "C T", 7, 6)
    score, _ = score_words(b, LAYOUT, placements, collect_new_words(b, placements))
    assert score == 4


def test_heuristic_score() -> None:
    assert word_heuristic_score("CAT") == 5
    assert word_heuristic_score("quiz") == 22
