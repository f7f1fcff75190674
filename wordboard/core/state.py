"""Serializácia celej hernej relácie pre uloženie/obnovu (schema v1).

Snapshot obsahuje dosku, prémie, hráčov, tašku (presné poradie), rozpracovaný
ťah, kurzor ťahu a príznaky. Odberatelia udalostí súčasťou snapshotu nie sú;
volajúci ich po obnove znovu pripojí.

Poznámka (SK): Používame Pydantic v2 (`model_validator`, `model_dump_json`).
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from .board import Board
from .dictionary import Dictionary
from .game import GameSession
from .observers import Observer
from .player import Player
from .premiums import PremiumLayout
from .tiles import TileBag
from .types import Position, Premium

log = logging.getLogger("wordboard.state")

SCHEMA_VERSION = "1"


class SaveGameError(Exception):
    """Chyba pri ukladaní alebo načítaní hry; `message` je určená pre používateľa."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Pos(BaseModel):
    """Pozícia bunky (row, col)."""

    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)

    @classmethod
    def of(cls, pos: Position) -> Pos:
        return cls(row=pos.row, col=pos.col)

    def to_position(self) -> Position:
        return Position(self.row, self.col)


class PlacedTile(BaseModel):
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    letter: str = Field(..., min_length=1, max_length=1)


class PlayerSave(BaseModel):
    name: str
    score: int = 0
    rack: list[str] = Field(default_factory=list)
    history: list[Pos] = Field(default_factory=list)
    undo_history: list[Pos] = Field(default_factory=list)
    undone_letters: list[str] = Field(default_factory=list)
    is_ai: bool = False

    @model_validator(mode="after")
    def _stacks_parallel(self) -> PlayerSave:
        if len(self.undo_history) != len(self.undone_letters):
            raise ValueError("undo_stacks_mismatch")
        return self


class LayoutSave(BaseModel):
    triple_word: list[Pos] = Field(default_factory=list)
    double_word: list[Pos] = Field(default_factory=list)
    triple_letter: list[Pos] = Field(default_factory=list)
    double_letter: list[Pos] = Field(default_factory=list)


class SaveGameState(BaseModel):
    """JSON-serializovateľný stav celej relácie (schema v1).

    - grid: N reťazcov dĺžky N ('.' prázdne, inak písmeno, ' ' pre blank)
    - bag: zvyšné kocky v presnom poradí (ťahá sa z konca)
    - placements: rozpracovaný ťah v poradí kladenia
    """

    schema_version: str = SCHEMA_VERSION
    board_size: int = Field(..., ge=1)
    grid: list[str]
    layout: LayoutSave
    players: list[PlayerSave] = Field(default_factory=list)
    bag: list[str] = Field(default_factory=list)
    placements: list[PlacedTile] = Field(default_factory=list)
    current_index: int = Field(0, ge=0)
    is_first_turn: bool = True
    display_messages: bool = True
    timer_mode: bool = False
    wordlist_path: str | None = None

    @model_validator(mode="after")
    def _check_consistency(self) -> SaveGameState:
        if self.schema_version != SCHEMA_VERSION:
            raise ValueError("unsupported_schema_version")
        if self.board_size % 2 == 0:
            raise ValueError("board_size_must_be_odd")
        if len(self.grid) != self.board_size:
            raise ValueError("grid_rows_mismatch")
        if any(len(row) != self.board_size for row in self.grid):
            raise ValueError("grid_cols_mismatch")
        if not self.players:
            raise ValueError("players_missing")
        if self.current_index >= len(self.players):
            raise ValueError("current_index_out_of_range")
        for player in self.players:
            for pos in player.history:
                if not self._in_range(pos):
                    raise ValueError("history_out_of_range")
                if self.grid[pos.row][pos.col] == ".":
                    raise ValueError("history_on_empty_cell")
            if not all(self._in_range(pos) for pos in player.undo_history):
                raise ValueError("undo_history_out_of_range")
        layout_cells = (
            self.layout.triple_word
            + self.layout.double_word
            + self.layout.triple_letter
            + self.layout.double_letter
        )
        if not all(self._in_range(pos) for pos in layout_cells):
            raise ValueError("layout_out_of_range")
        for tile in self.placements:
            if tile.row >= self.board_size or tile.col >= self.board_size:
                raise ValueError("placement_out_of_range")
            if self.grid[tile.row][tile.col] == ".":
                raise ValueError("placement_on_empty_cell")
        return self

    def _in_range(self, pos: Pos) -> bool:
        return pos.row < self.board_size and pos.col < self.board_size


def _layout_to_save(layout: PremiumLayout) -> LayoutSave:
    def _sorted(positions: frozenset[Position]) -> list[Pos]:
        return [Pos.of(p) for p in sorted(positions)]

    return LayoutSave(
        triple_word=_sorted(layout.triple_word),
        double_word=_sorted(layout.double_word),
        triple_letter=_sorted(layout.triple_letter),
        double_letter=_sorted(layout.double_letter),
    )


def _layout_from_save(data: LayoutSave) -> PremiumLayout:
    return PremiumLayout.from_sets({
        Premium.TW: {p.to_position() for p in data.triple_word},
        Premium.DW: {p.to_position() for p in data.double_word},
        Premium.TL: {p.to_position() for p in data.triple_letter},
        Premium.DL: {p.to_position() for p in data.double_letter},
    })


def build_save_state(session: GameSession) -> SaveGameState:
    """Vytvorí snapshot relácie (bez odberateľov)."""
    players = [
        PlayerSave(
            name=p.name,
            score=p.score,
            rack=list(p.rack),
            history=[Pos.of(pos) for pos in p.history],
            undo_history=[Pos.of(pos) for pos in p.undo_history],
            undone_letters=list(p.undone_letters),
            is_ai=p.is_ai,
        )
        for p in session.players
    ]
    return SaveGameState(
        board_size=session.board_size,
        grid=session.board.rows(),
        layout=_layout_to_save(session.layout),
        players=players,
        bag=list(session.bag.tiles),
        placements=[
            PlacedTile(row=pos.row, col=pos.col, letter=letter)
            for pos, letter in session.current_turn_placements.items()
        ],
        current_index=session.current_index,
        is_first_turn=session.is_first_turn,
        display_messages=session.display_messages,
        timer_mode=session.timer_mode,
        wordlist_path=session.dictionary.source,
    )


def restore_session(
    state: SaveGameState,
    *,
    dictionary: Dictionary | None = None,
    observers: list[Observer] | None = None,
) -> GameSession:
    """Z `SaveGameState` vybuduje novú reláciu a pripojí odberateľov.

    Ak `dictionary` nie je zadaný, načíta sa z `wordlist_path` snapshotu.
    """
    if dictionary is None:
        dictionary = Dictionary.from_path(state.wordlist_path) if state.wordlist_path else Dictionary()
    session = GameSession(
        board_size=state.board_size,
        layout=_layout_from_save(state.layout),
        dictionary=dictionary,
        # Dôležité: pri poskytnutých `tiles` sa taška už nesmie premiešať
        bag=TileBag(tiles=list(state.bag)),
        timer_mode=state.timer_mode,
    )
    board: Board = session.board
    for r, row in enumerate(state.grid):
        for c, ch in enumerate(row):
            if ch != ".":
                board.set_letter(r, c, ch)
    for ps in state.players:
        session.players.append(
            Player(
                name=ps.name,
                score=ps.score,
                rack=list(ps.rack),
                history=[p.to_position() for p in ps.history],
                undo_history=[p.to_position() for p in ps.undo_history],
                undone_letters=list(ps.undone_letters),
                is_ai=ps.is_ai,
            )
        )
    session.current_turn_placements = {
        Position(t.row, t.col): t.letter.upper() for t in state.placements
    }
    session.current_index = state.current_index
    session.is_first_turn = state.is_first_turn
    session.observers.display_messages = state.display_messages
    for observer in observers or []:
        session.subscribe(observer)
    return session


def save_game(session: GameSession, path: str | Path) -> Path:
    """Uloží reláciu do JSON súboru."""
    p = Path(path)
    if not session.players:
        raise SaveGameError("Hra bez hráčov sa nedá uložiť.")
    payload = build_save_state(session).model_dump_json(indent=2)
    try:
        p.write_text(payload, encoding="utf-8")
    except OSError as exc:
        log.warning("save_failed path=%s error=%s", p, exc)
        raise SaveGameError(f"Chyba pri ukladaní hry: {exc}") from exc
    log.info("game_saved path=%s", p)
    return p


def read_save_state(path: str | Path) -> SaveGameState:
    """Načíta a zvaliduje snapshot zo súboru; chyby mapuje na `SaveGameError`."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SaveGameError("Súbor s uloženou hrou neexistuje.") from exc
    except UnicodeDecodeError as exc:
        log.warning("save_not_utf8 path=%s", p)
        raise SaveGameError("Uložená hra je poškodená alebo nekompatibilná.") from exc
    except OSError as exc:
        raise SaveGameError(f"Chyba pri načítaní hry: {exc}") from exc
    try:
        return SaveGameState.model_validate_json(text)
    except ValidationError as exc:
        log.warning("save_corrupt path=%s errors=%s", p, exc.error_count())
        raise SaveGameError("Uložená hra je poškodená alebo nekompatibilná.") from exc


def load_game(
    path: str | Path,
    *,
    dictionary: Dictionary | None = None,
    observers: list[Observer] | None = None,
) -> GameSession:
    """Načíta reláciu zo súboru (pôvodná relácia volajúceho sa nemení)."""
    session = restore_session(read_save_state(path), dictionary=dictionary, observers=observers)
    log.info("game_loaded path=%s players=%s", path, len(session.players))
    return session
