from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from wordboard.core import observers as ev
from wordboard.core.dictionary import Dictionary
from wordboard.core.game import GameSession
from wordboard.core.state import (
    SaveGameError,
    SaveGameState,
    build_save_state,
    load_game,
    read_save_state,
    save_game,
)
from wordboard.core.types import Position


def _mid_game(make_session):
    s = make_session([list("CATSEEE"), list("SXXXXXX")], seed=123)
    for i, ch in enumerate("CAT"):
        s.place_tile(ch, 7, 6 + i)
    assert s.submit_word()
    s.next_turn()
    # rozpracovaný ťah s jedným undo
    s.place_tile("S", 7, 9)
    s.place_tile("X", 8, 9)
    s.undo()
    return s


def test_round_trip_preserves_state_and_bag_order(make_session, tmp_path: Path, words, recorder) -> None:
    s = _mid_game(make_session)
    path = save_game(s, tmp_path / "save.json")

    restored = load_game(path, dictionary=words, observers=[recorder])
    assert restored.board.rows() == s.board.rows()
    assert restored.bag.tiles == s.bag.tiles
    assert restored.current_turn_placements == {Position(7, 9): "S"}
    assert restored.current_index == 1
    assert not restored.is_first_turn
    assert restored.layout == s.layout
    assert restored.scores() == {"P1": 5, "P2": 0}
    p2 = restored.players[1]
    assert p2.rack == s.players[1].rack
    assert p2.history == [Position(7, 9)]
    assert p2.undo_history == [Position(8, 9)]
    assert p2.undone_letters == ["X"]
    # odberatelia sa pripájajú nanovo
    restored.notify(ev.INITIALIZE)
    assert recorder.events == [ev.INITIALIZE]

    # redo po načítaní vráti presne to isté písmeno
    assert restored.redo() == Position(8, 9)
    assert restored.board.get_letter(8, 9) == "X"

    # pokračovanie: ťah je platný aj po obnove
    restored.undo()
    assert restored.submit_word()
    assert restored.players[1].score == 6


def test_next_draws_match_after_reload(make_session, tmp_path: Path, words) -> None:
    s = _mid_game(make_session)
    save_game(s, tmp_path / "save.json")
    restored = load_game(tmp_path / "save.json", dictionary=words)
    assert restored.bag.draw(7) == s.bag.draw(7)


def test_missing_file_raises_friendly_error(tmp_path: Path) -> None:
    with pytest.raises(SaveGameError) as exc:
        read_save_state(tmp_path / "none.json")
    assert exc.value.message == "Súbor s uloženou hrou neexistuje."


@pytest.mark.parametrize("payload", ["{not json", json.dumps({"board_size": 15})])
def test_corrupt_file_raises_friendly_error(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "bad.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(SaveGameError) as exc:
        read_save_state(path)
    assert exc.value.message == "Uložená hra je poškodená alebo nekompatibilná."


def test_state_validation_rejects_inconsistent_snapshots(make_session) -> None:
    s = make_session([list("CATEEEE")])
    data = build_save_state(s).model_dump()

    even = dict(data, board_size=14, grid=["." * 14] * 14)
    with pytest.raises(ValidationError):
        SaveGameState.model_validate(even)

    short_grid = dict(data, grid=data["grid"][:-1])
    with pytest.raises(ValidationError):
        SaveGameState.model_validate(short_grid)

    bad_index = dict(data, current_index=3)
    with pytest.raises(ValidationError):
        SaveGameState.model_validate(bad_index)

    ghost = dict(data, placements=[{"row": 0, "col": 0, "letter": "A"}])
    with pytest.raises(ValidationError):
        SaveGameState.model_validate(ghost)

    nobody = dict(data, players=[])
    with pytest.raises(ValidationError):
        SaveGameState.model_validate(nobody)

    player = data["players"][0]
    far_history = dict(data, players=[dict(player, history=[{"row": 40, "col": 40}])])
    with pytest.raises(ValidationError):
        SaveGameState.model_validate(far_history)

    empty_history = dict(data, players=[dict(player, history=[{"row": 0, "col": 0}])])
    with pytest.raises(ValidationError):
        SaveGameState.model_validate(empty_history)

    far_undo = dict(
        data,
        players=[dict(player, undo_history=[{"row": 3, "col": 15}], undone_letters=["A"])],
    )
    with pytest.raises(ValidationError):
        SaveGameState.model_validate(far_undo)

    far_layout = dict(data, layout=dict(data["layout"], triple_word=[{"row": 15, "col": 0}]))
    with pytest.raises(ValidationError):
        SaveGameState.model_validate(far_layout)


def test_corrupt_history_file_not_loaded(make_session, tmp_path: Path) -> None:
    s = make_session([list("CATEEEE")])
    data = build_save_state(s).model_dump()
    data["players"][0]["history"] = [{"row": 40, "col": 40}]
    path = tmp_path / "save.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(SaveGameError):
        read_save_state(path)


def test_save_without_players_rejected(tmp_path: Path) -> None:
    with pytest.raises(SaveGameError):
        save_game(GameSession(), tmp_path / "save.json")
    assert not (tmp_path / "save.json").exists()


def test_dictionary_reloaded_from_snapshot_path(make_session, tmp_path: Path) -> None:
    wordlist = tmp_path / "words.txt"
    wordlist.write_text("cat\nat\n", encoding="utf-8")
    s = make_session([list("CATEEEE")])
    s.dictionary = Dictionary.from_path(wordlist)
    save_game(s, tmp_path / "save.json")
    restored = load_game(tmp_path / "save.json")
    assert restored.dictionary.source == str(wordlist)
    assert restored.validate_word("cat")
    assert not restored.validate_word("cats")
