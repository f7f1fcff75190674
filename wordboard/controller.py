"""Riadenie hry bez UI: jeden serializovaný vstupný bod pre všetky akcie.

Každá akcia (položenie, potvrdenie, preskočenie, undo/redo, uloženie/načítanie
aj vypršanie časovača) prechádza cez `threading.RLock`, takže odpočet na
vlastnom vlákne sa nikdy neprekryje s rozpracovaným ťahom.
"""
from __future__ import annotations

import logging
import random
import threading
from collections.abc import Sequence
from pathlib import Path

from .ai.player import BruteForceSearch
from .config import GameSettings, load_settings
from .core import observers as ev
from .core.dictionary import Dictionary
from .core.game import GameSession
from .core.observers import Observer
from .core.player import Player
from .core.state import SaveGameError, read_save_state, restore_session, save_game
from .core.timer import TurnTimer
from .logging_setup import TURN_ID_VAR

log = logging.getLogger("wordboard.controller")


class GameController:
    """Orchestrácia ťahov: človek, AI, časovač a perzistencia."""

    def __init__(
        self,
        session: GameSession,
        *,
        settings: GameSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.session = session
        self.settings = settings or GameSettings()
        self.rng = rng or random.Random(self.settings.seed)
        self.messages: list[str] = []
        self.final_scores: dict[str, int] | None = None
        self._observers: list[Observer] = list(session.observers.observers())
        self._lock = threading.RLock()
        self._turn_counter = 0
        self.timer = TurnTimer(self.settings.turn_seconds, self._on_timer_expired, guard=self._lock)
        if session.timer_mode:
            self.timer.start()

    @classmethod
    def new_game(
        cls,
        human_names: Sequence[str],
        *,
        ai_players: int = 0,
        settings: GameSettings | None = None,
        rng: random.Random | None = None,
    ) -> GameController:
        """Založí novú reláciu podľa nastavení (veľkosť dosky, prémie, slovník)."""
        settings = settings or load_settings()
        session = GameSession(
            board_size=settings.board_size,
            premiums_path=settings.premiums_path,
            dictionary=Dictionary.from_path(settings.wordlist_path),
            seed=settings.seed,
            timer_mode=settings.timer_mode,
        )
        controller = cls(session, settings=settings, rng=rng)
        controller.add_players(human_names)
        controller.add_ai_players(ai_players)
        return controller

    # ---------------- Pomocné ----------------
    def _message(self, text: str) -> None:
        self.messages.append(text)
        log.info("message text=%s", text)

    def _advance(self) -> None:
        self.session.next_turn()
        self._turn_counter += 1
        TURN_ID_VAR.set(str(self._turn_counter))

    def _check_game_over(self) -> bool:
        if not self.session.is_game_over():
            return False
        self.final_scores = self.session.scores()
        lines = [f"{name}: {score}" for name, score in self.final_scores.items()]
        self._message("Koniec hry! Konečné skóre:\n" + "\n".join(lines))
        self.timer.cancel()
        return True

    def _reset_timer(self) -> None:
        if self.final_scores is not None:
            return
        self.timer.reset()
        self.session.reset_timer()

    # ---------------- Hráči a odberatelia ----------------
    def add_players(self, names: Sequence[str]) -> list[Player]:
        with self._lock:
            return [self.session.add_player(Player(name)) for name in names]

    def add_ai_players(self, count: int) -> list[Player]:
        capped = min(count, self.settings.max_ai_players)
        if capped != count:
            log.warning("ai_players_capped requested=%s max=%s", count, capped)
        with self._lock:
            return self.session.add_ai_players(capped)

    def subscribe(self, observer: Observer) -> Observer:
        with self._lock:
            if observer not in self._observers:
                self._observers.append(observer)
            return self.session.subscribe(observer)

    def set_timer_mode(self, enabled: bool) -> None:
        with self._lock:
            self.session.set_timer_mode(enabled)
            if enabled:
                self._reset_timer()
            else:
                self.timer.cancel()

    # ---------------- Akcie hráča ----------------
    def place(self, letter: str, row: int, col: int) -> bool:
        with self._lock:
            return self.session.place_tile(letter, row, col)

    def submit(self) -> bool:
        """Potvrdí ťah; pri úspechu posunie ťah a odohrá prípadné ťahy AI."""
        with self._lock:
            if not self.session.submit_word():
                return False
            self._advance()
            if not self._check_game_over():
                self.handle_ai_turns()
            if self.session.timer_mode:
                self._reset_timer()
            return True

    def skip_turn(self) -> None:
        with self._lock:
            if self.session.is_first_turn:
                # len notifikácia: prvý ťah musí odohrať človek
                self.session.next_turn()
                return
            self.session.restore_player_tiles()
            self._advance()
            if not self._check_game_over():
                self.handle_ai_turns()
            if self.session.timer_mode:
                self._reset_timer()

    def undo(self) -> bool:
        with self._lock:
            if not self.session.can_undo():
                return False
            self.session.undo()
            return True

    def redo(self) -> bool:
        with self._lock:
            if not self.session.can_redo():
                return False
            self.session.redo()
            return True

    def handle_ai_turns(self) -> None:
        """Odohrá ťahy AI, kým nie je na rade človek alebo koniec hry.

        Počas ťahov AI sú hlásenia stlmené. Ak v celom kole všetci pasovali
        (stôl bez ľudí), slučka sa zastaví.
        """
        with self._lock:
            if self.session.is_first_turn:
                return
            self.session.toggle_display_messages()
            try:
                passes = 0
                while self.session.current_player().is_ai:
                    ai = self.session.current_player()
                    if BruteForceSearch(self.session, rng=self.rng).play():
                        passes = 0
                    else:
                        passes += 1
                        self._message(f"{ai.name} preskočil ťah.")
                    self._advance()
                    if self._check_game_over():
                        break
                    if passes >= len(self.session.players):
                        log.warning("ai_round_all_passed players=%s", len(self.session.players))
                        break
            finally:
                self.session.toggle_display_messages()

    # ---------------- Časovač ----------------
    def _on_timer_expired(self) -> None:
        with self._lock:
            if not self.session.timer_mode or self.final_scores is not None:
                return
            self._message("Čas vypršal! Na ťahu je ďalší hráč.")
            self.skip_turn()
            if not self.timer.running and self.final_scores is None:
                self._reset_timer()

    def close(self) -> None:
        self.timer.cancel()

    # ---------------- Perzistencia ----------------
    def save(self, path: str | Path | None = None) -> str:
        target = path or self.settings.save_path
        with self._lock:
            try:
                save_game(self.session, target)
            except SaveGameError as exc:
                self._message(exc.message)
                return exc.message
        message = "Hra bola úspešne uložená."
        self._message(message)
        return message

    def load(self, path: str | Path | None = None) -> str:
        """Nahradí reláciu uloženou; pri chybe ostáva pôvodná relácia nedotknutá."""
        source = path or self.settings.save_path
        with self._lock:
            try:
                state = read_save_state(source)
            except SaveGameError as exc:
                self._message(exc.message)
                return exc.message
            current = self.session.dictionary
            reuse = state.wordlist_path is None or state.wordlist_path == current.source
            dictionary = current if reuse else None
            session = restore_session(state, dictionary=dictionary, observers=self._observers)
            self.session = session
            self.final_scores = None
            session.notify(ev.INITIALIZE)
            if session.timer_mode:
                self._reset_timer()
            else:
                self.timer.cancel()
        message = "Hra bola úspešne načítaná."
        self._message(message)
        return message
