"""Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides:
- Environment variable loading from .env
- Shared fixtures for all tests (malý slovník, deterministická relácia)
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from dotenv import load_dotenv

from wordboard.core.dictionary import Dictionary
from wordboard.core.game import GameSession
from wordboard.core.player import Player
from wordboard.core.tiles import TileBag

TEST_WORDS = ("cat", "cats", "act", "at", "ta", "as", "tact")


def pytest_configure(config):
    """Load environment variables from .env file."""
    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file, override=False)
    # Testy si WORDBOARD_* premenné nastavujú samy cez monkeypatch
    for name in list(os.environ):
        if name.startswith("WORDBOARD_"):
            os.environ.pop(name)


@pytest.fixture
def words() -> Dictionary:
    return Dictionary(TEST_WORDS)


@pytest.fixture
def make_session(words: Dictionary) -> Callable[..., GameSession]:
    """Továreň na reláciu s hráčmi a presne zadanými rackmi.

    Rack sa po `add_player` prepíše, aby testy nezáviseli od poradia v taške.
    """

    def _make(
        racks: Sequence[Sequence[str]] = (("C", "A", "T", "S", "E", "E", "E"),),
        *,
        board_size: int = 15,
        dictionary: Dictionary | None = None,
        ai: Sequence[bool] | None = None,
        seed: int = 7,
    ) -> GameSession:
        session = GameSession(
            board_size=board_size,
            dictionary=dictionary if dictionary is not None else words,
            bag=TileBag(seed=seed),
        )
        flags = list(ai) if ai is not None else [False] * len(racks)
        for idx, (rack, is_ai) in enumerate(zip(racks, flags)):
            player = session.add_player(Player(f"P{idx + 1}", is_ai=is_ai))
            player.rack = list(rack)
        return session

    return _make


@pytest.fixture
def recorder() -> Callable[[str, GameSession], None]:
    """Odberateľ, ktorý si zapisuje prijaté udalosti."""

    events: list[str] = []

    def _observer(event: str, session: GameSession) -> None:
        events.append(event)

    _observer.events = events  # type: ignore[attr-defined]
    return _observer
