from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from . import observers as ev
from .board import Board
from .dictionary import Dictionary
from .observers import Observer, ObserverRegistry
from .player import Player
from .premiums import PremiumLayout, resolve_layout
from .rules import collect_new_words, covers_center, has_adjacent_tiles
from .scoring import score_words, word_heuristic_score
from .tiles import TileBag
from .types import Position, ScoreBreakdown, WordFound

log = logging.getLogger("wordboard.game")

GAME_OVER_RACK_THRESHOLD = 3


def determine_game_over(*, bag_remaining: int, racks: Iterable[Sequence[str]]) -> bool:
    """Koniec hry: taška je prázdna a niektorý hráč má menej ako 3 kocky."""

    if bag_remaining > 0:
        return False
    return any(len(rack) < GAME_OVER_RACK_THRESHOLD for rack in racks)


class GameSession:
    """Jedna herná relácia: doska, hráči, taška, prémie a rozpracovaný ťah.

    Reláciu vlastní volajúci (žiadny singleton). Všetky zmeny stavu idú cez
    metódy tejto triedy a po každom prechode sa notifikujú odberatelia.
    """

    def __init__(
        self,
        *,
        board_size: int = 15,
        layout: PremiumLayout | None = None,
        premiums_path: str | Path | None = None,
        dictionary: Dictionary | None = None,
        bag: TileBag | None = None,
        seed: int | None = None,
        timer_mode: bool = False,
    ) -> None:
        self.board = Board(board_size)
        self.layout = layout if layout is not None else resolve_layout(premiums_path, self.board.size)
        self.dictionary = dictionary if dictionary is not None else Dictionary()
        self.bag = bag if bag is not None else TileBag(seed=seed)
        self.players: list[Player] = []
        self.current_index = 0
        self.current_turn_placements: dict[Position, str] = {}
        self.is_first_turn = True
        self.timer_mode = timer_mode
        self.observers = ObserverRegistry()

    # ---------------- Konfigurácia a odberatelia ----------------
    @property
    def board_size(self) -> int:
        return self.board.size

    def load_layout(self, path: str | Path | None) -> PremiumLayout:
        """Znovu načíta rozloženie prémií; nahrádza ho vždy ako celok."""
        self.layout = resolve_layout(path, self.board.size)
        return self.layout

    def subscribe(self, observer: Observer) -> Observer:
        return self.observers.subscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        self.observers.unsubscribe(observer)

    def notify(self, event: str) -> None:
        self.observers.notify(event, self)

    @property
    def display_messages(self) -> bool:
        return self.observers.display_messages

    def toggle_display_messages(self) -> None:
        self.observers.display_messages = not self.observers.display_messages
        self.notify(ev.TOGGLE_MESSAGES)

    def set_timer_mode(self, timer_mode: bool) -> None:
        self.timer_mode = timer_mode
        self.notify(ev.TIMER_MODE_CHANGED)

    def reset_timer(self) -> None:
        self.notify(ev.RESET_TIMER)

    # ---------------- Hráči ----------------
    def add_player(self, player: Player) -> Player:
        """Pridá hráča a doplní mu rack z tašky."""
        player.replenish(self.bag)
        self.players.append(player)
        log.info("player_added name=%s ai=%s rack=%s", player.name, player.is_ai, "".join(player.rack))
        return player

    def add_ai_players(self, count: int) -> list[Player]:
        added: list[Player] = []
        for i in range(count):
            added.append(self.add_player(Player(f"AI {i + 1}", is_ai=True)))
        return added

    def current_player(self) -> Player:
        if not self.players:
            raise RuntimeError("Relácia nemá žiadnych hráčov")
        return self.players[self.current_index]

    def scores(self) -> dict[str, int]:
        return {player.name: player.score for player in self.players}

    def remaining_tiles(self) -> int:
        return self.bag.remaining()

    # ---------------- Kladenie písmen ----------------
    def is_valid_position(self, row: int, col: int) -> bool:
        return self.board.inside(row, col)

    def place_tile(self, letter: str, row: int, col: int) -> bool:
        """Položí písmeno z racku aktívneho hráča na dosku.

        Vráti False (bez zmeny stavu), ak hráč písmeno nemá, pozícia je mimo
        dosky alebo je bunka obsadená.
        """
        player = self.current_player()
        letter = letter.upper()
        if not player.has_tile(letter):
            return False
        if not self.is_valid_position(row, col):
            return False
        if self.board.is_occupied(row, col):
            return False

        pos = Position(row, col)
        self.board.set_letter(row, col, letter)
        player.remove_tile(letter)
        player.history.append(pos)
        # nové položenie ruší možnosť redo
        player.undo_history.clear()
        player.undone_letters.clear()
        self.current_turn_placements[pos] = letter
        self.notify(ev.TILE_PLACED)
        return True

    def remove_current_placement_tile(self, position: Position) -> str | None:
        """Odoberie záznam z rozpracovaného ťahu (doska sa nemení)."""
        return self.current_turn_placements.pop(position, None)

    def remove_tile_from_board(self, row: int, col: int) -> None:
        self.board.clear(row, col)
        self.notify(ev.BOARD)

    def add_tile_to_board(self, letter: str, row: int, col: int) -> None:
        self.board.set_letter(row, col, letter)
        self.current_turn_placements[Position(row, col)] = letter.upper()
        self.notify(ev.BOARD)

    def restore_player_tiles(self) -> None:
        """Vráti všetky písmená rozpracovaného ťahu späť do racku."""
        player = self.current_player()
        for pos in self.current_turn_placements:
            letter = self.board.get_letter(pos.row, pos.col)
            if letter is not None:
                player.add_tile(letter)
            self.board.clear(pos.row, pos.col)
        self.current_turn_placements.clear()
        player.clear_history()
        self.notify(ev.RESET_TILES)

    # ---------------- Slová ----------------
    def word_at_position(self, row: int, col: int, horizontal: bool) -> str:
        return self.board.word_at(row, col, horizontal).word

    def all_new_word_spans(self) -> list[WordFound]:
        return collect_new_words(self.board, self.current_turn_placements)

    def all_new_words(self) -> list[str]:
        return [found.word for found in self.all_new_word_spans()]

    def validate_word(self, word: str) -> bool:
        return self.dictionary.contains(word)

    def has_adjacent_tiles(self) -> bool:
        return has_adjacent_tiles(self.board, self.current_turn_placements)

    def is_center_covered(self) -> bool:
        return covers_center(self.board)

    # ---------------- Skórovanie ----------------
    def score_breakdown(self, words: Iterable[WordFound] | None = None) -> tuple[int, list[ScoreBreakdown]]:
        spans = self.all_new_word_spans() if words is None else list(words)
        return score_words(self.board, self.layout, self.current_turn_placements, spans)

    def calculate_total_score(self, words: Iterable[WordFound] | None = None) -> int:
        total, _ = self.score_breakdown(words)
        return total

    @staticmethod
    def calculate_word_score(word: str) -> int:
        return word_heuristic_score(word)

    # ---------------- Potvrdenie ťahu ----------------
    def _reject(self, event: str, detail: str = "") -> bool:
        log.info(
            "submit_rejected reason=%s player=%s %s",
            event,
            self.current_player().name,
            detail,
        )
        self.restore_player_tiles()
        self.notify(event)
        return False

    def submit_word(self) -> bool:
        """Overí a potvrdí rozpracovaný ťah.

        Pri zamietnutí sa doska aj rack vrátia do stavu pred ťahom.
        """
        if not self.is_first_turn and not self.has_adjacent_tiles():
            return self._reject(ev.NO_ADJACENT_TILES)

        spans = self.all_new_word_spans()
        if not spans:
            return self._reject(ev.NO_WORD_FOUND)

        for found in spans:
            if not self.validate_word(found.word):
                return self._reject(ev.INVALID_WORD, f"word={found.word}")

        if self.is_first_turn:
            if not self.is_center_covered():
                return self._reject(ev.CENTER_NOT_COVERED)
            self.is_first_turn = False

        player = self.current_player()
        total, _ = self.score_breakdown(spans)
        player.add_score(total)
        drawn = player.replenish(self.bag)
        log.info(
            "word_submitted player=%s words=%s points=%s drawn=%s bag=%s",
            player.name,
            ",".join(found.word for found in spans),
            total,
            len(drawn),
            self.bag.remaining(),
        )
        self.current_turn_placements.clear()
        player.clear_history()
        self.notify(ev.WORD_SUBMITTED)
        return True

    # ---------------- Ťahy ----------------
    def next_turn(self) -> None:
        """Posunie ťah na ďalšieho hráča (počas prvého ťahu len notifikuje)."""
        if self.is_first_turn:
            self.notify(ev.FIRST_TURN)
            return
        if self.current_turn_placements:
            self.restore_player_tiles()
        self.current_index = (self.current_index + 1) % len(self.players)
        self.current_turn_placements.clear()
        self.current_player().clear_history()
        log.debug("next_turn player=%s", self.current_player().name)
        self.notify(ev.NEXT_TURN)

    def is_game_over(self) -> bool:
        """Kontrola konca hry; pri kladnom výsledku notifikuje `gameOver`."""
        over = determine_game_over(
            bag_remaining=self.bag.remaining(),
            racks=[player.rack for player in self.players],
        )
        if over:
            self.notify(ev.GAME_OVER)
        return over

    # ---------------- Undo / Redo ----------------
    def can_undo(self) -> bool:
        return bool(self.players) and bool(self.current_player().history)

    def can_redo(self) -> bool:
        return bool(self.players) and bool(self.current_player().undo_history)

    def undo(self) -> Position:
        """Vráti posledné položené písmeno do racku.

        Predpoklad: história nie je prázdna (inak `RuntimeError`).
        """
        player = self.current_player()
        if not player.history:
            raise RuntimeError("Nie je čo vrátiť: história ťahu je prázdna")
        pos = player.history.pop()
        letter = self.remove_current_placement_tile(pos)
        if letter is None:
            letter = self.board.get_letter(pos.row, pos.col) or ""
        player.undo_history.append(pos)
        player.undone_letters.append(letter)
        player.add_tile(letter)
        self.remove_tile_from_board(pos.row, pos.col)
        return pos

    def redo(self) -> Position:
        """Znovu položí naposledy vrátené písmeno.

        Predpoklad: undo história nie je prázdna (inak `RuntimeError`).
        """
        player = self.current_player()
        if not player.undo_history:
            raise RuntimeError("Nie je čo zopakovať: undo história je prázdna")
        pos = player.undo_history[-1]
        letter = player.undone_letters[-1]
        if self.board.is_occupied(pos.row, pos.col) or not player.has_tile(letter):
            raise RuntimeError(f"Redo nie je možné: pole {pos} alebo písmeno {letter!r} už nie je k dispozícii")
        player.undo_history.pop()
        player.undone_letters.pop()
        player.remove_tile(letter)
        player.history.append(pos)
        self.add_tile_to_board(letter, pos.row, pos.col)
        return pos
