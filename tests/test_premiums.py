from __future__ import annotations

import json
from pathlib import Path

import pytest

from wordboard.core.assets import get_premiums_path
from wordboard.core.game import GameSession
from wordboard.core.premiums import default_layout, load_layout, resolve_layout
from wordboard.core.types import Position, Premium


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "premiums.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_default_counts_and_center() -> None:
    layout = default_layout(15)
    assert len(layout.triple_word) == 8
    assert len(layout.double_word) == 16
    assert len(layout.triple_letter) == 12
    assert len(layout.double_letter) == 20
    # stred nemá žiadnu prémiu
    assert layout.premium_at(Position(7, 7)) is None


def test_dw_spotchecks() -> None:
    layout = default_layout()
    for r, c in [(1, 1), (2, 2), (3, 3), (4, 4), (10, 10), (13, 13), (1, 13), (13, 1)]:
        assert layout.premium_at(Position(r, c)) is Premium.DW
    # obe diagonály sú súmerné aj v dolnej polovici
    assert layout.premium_at(Position(11, 3)) is Premium.DW
    assert layout.premium_at(Position(11, 11)) is Premium.DW
    assert Position(11, 11) not in layout.double_letter


def test_premium_sets_are_disjoint() -> None:
    layout = default_layout()
    sets = [layout.squares(p) for p in Premium]
    total = sum(len(s) for s in sets)
    assert len(frozenset().union(*sets)) == total


def test_default_layout_clipped_to_small_board() -> None:
    layout = default_layout(5)
    everything = frozenset().union(*(layout.squares(p) for p in Premium))
    assert everything
    assert all(p.row < 5 and p.col < 5 for p in everything)
    assert layout.premium_at(Position(0, 0)) is Premium.TW


def test_bundled_asset_matches_defaults() -> None:
    loaded = load_layout(get_premiums_path(), 15)
    assert loaded == default_layout(15)


def test_custom_layout_loads(tmp_path: Path) -> None:
    path = _write(tmp_path, {
        "size": 5,
        "squares": [
            {"row": 2, "col": 2, "type": "DW"},
            {"row": 0, "col": 4, "type": "TL"},
        ],
    })
    layout = resolve_layout(path, 5)
    assert layout.premium_at(Position(2, 2)) is Premium.DW
    assert layout.premium_at(Position(0, 4)) is Premium.TL
    # vlastné rozloženie nahrádza predvolené úplne
    assert layout.premium_at(Position(0, 0)) is None


@pytest.mark.parametrize(
    "data",
    [
        {"squares": []},
        {"size": 7, "squares": []},
        {"size": 5},
        {"size": 5, "squares": ["TW"]},
        {"size": 5, "squares": [{"row": 1, "type": "TW"}]},
        {"size": 5, "squares": [{"row": 9, "col": 0, "type": "TW"}]},
        {"size": 5, "squares": [{"row": 0, "col": 0, "type": "QW"}]},
        {"size": 5, "squares": [
            {"row": 0, "col": 0, "type": "TW"},
            {"row": 0, "col": 0, "type": "DL"},
        ]},
    ],
)
def test_invalid_file_falls_back_to_defaults(tmp_path: Path, data: object) -> None:
    path = _write(tmp_path, data)
    assert load_layout(path, 5) is None
    assert resolve_layout(path, 5) == default_layout(5)


def test_missing_and_malformed_files(tmp_path: Path) -> None:
    assert load_layout(tmp_path / "nope.json", 15) is None
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert load_layout(broken, 15) is None
    assert resolve_layout(broken, 15) == default_layout(15)
    assert resolve_layout(None, 15) == default_layout(15)


def test_session_reload_replaces_layout(tmp_path: Path) -> None:
    s = GameSession(board_size=5)
    assert s.layout == default_layout(5)
    path = _write(tmp_path, {"size": 5, "squares": [{"row": 2, "col": 2, "type": "TW"}]})
    s.load_layout(path)
    assert s.layout.premium_at(Position(2, 2)) is Premium.TW
    assert s.layout.premium_at(Position(0, 0)) is None
    s.load_layout(tmp_path / "missing.json")
    assert s.layout == default_layout(5)
