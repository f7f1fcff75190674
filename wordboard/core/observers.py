"""Register odberateľov udalostí hernej relácie.

Odberateľ je ľubovoľný callable `(event, session) -> None`; volá sa synchrónne
po každom prechode stavu. Informačné udalosti (vyskakovacie hlásenia) sa dajú
dočasne stlmiť, štrukturálne udalosti (doska, rack, ťah) idú vždy.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .game import GameSession

log = logging.getLogger("wordboard.observers")

Observer = Callable[[str, "GameSession"], Any]

INITIALIZE = "initialize"
TILE_PLACED = "tilePlaced"
BOARD = "board"
NO_ADJACENT_TILES = "noAdjacentTiles"
NO_WORD_FOUND = "noWordFound"
INVALID_WORD = "invalidWord"
CENTER_NOT_COVERED = "centerNotCovered"
WORD_SUBMITTED = "wordSubmitted"
NEXT_TURN = "nextTurn"
FIRST_TURN = "firstTurn"
GAME_OVER = "gameOver"
RESET_TILES = "resetTiles"
TOGGLE_MESSAGES = "toggleMessages"
TIMER_MODE_CHANGED = "timerModeChanged"
RESET_TIMER = "resetTimer"

EVENTS: frozenset[str] = frozenset({
    INITIALIZE,
    TILE_PLACED,
    BOARD,
    NO_ADJACENT_TILES,
    NO_WORD_FOUND,
    INVALID_WORD,
    CENTER_NOT_COVERED,
    WORD_SUBMITTED,
    NEXT_TURN,
    FIRST_TURN,
    GAME_OVER,
    RESET_TILES,
    TOGGLE_MESSAGES,
    TIMER_MODE_CHANGED,
    RESET_TIMER,
})

# Udalosti, ktoré UI zobrazuje ako hlásenie; počas ťahov AI sa stlmia.
MESSAGE_EVENTS: frozenset[str] = frozenset({
    NO_ADJACENT_TILES,
    NO_WORD_FOUND,
    INVALID_WORD,
    CENTER_NOT_COVERED,
    FIRST_TURN,
})


class ObserverRegistry:
    """Zoznam odberateľov s príznakom stlmenia hlásení."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []
        self.display_messages: bool = True

    def subscribe(self, observer: Observer) -> Observer:
        """Zaregistruje odberateľa; vráti ho ako handle pre `unsubscribe`."""
        if observer not in self._observers:
            self._observers.append(observer)
        return observer

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def observers(self) -> list[Observer]:
        return list(self._observers)

    def __len__(self) -> int:
        return len(self._observers)

    def notify(self, event: str, session: GameSession) -> None:
        if event not in EVENTS:
            raise ValueError(f"Neznáma udalosť: {event}")
        if event in MESSAGE_EVENTS and not self.display_messages:
            log.debug("event_suppressed event=%s", event)
            return
        for observer in list(self._observers):
            observer(event, session)
