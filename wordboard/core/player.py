from __future__ import annotations

from dataclasses import dataclass, field

from .tiles import TileBag
from .types import RACK_CAPACITY, Position


@dataclass
class Player:
    """Stav hráča: rack, skóre a história ťahov v rámci aktuálneho kola.

    - `history`: pozície položené v tomto ťahu (v poradí kladenia).
    - `undo_history`: pozície vrátené cez undo (v poradí vracania).
    - `undone_letters`: písmená zodpovedajúce `undo_history` (paralelný zásobník),
      aby redo vzalo z racku presne to písmeno, ktoré undo vrátilo.
    """

    name: str
    score: int = 0
    rack: list[str] = field(default_factory=list)
    history: list[Position] = field(default_factory=list)
    undo_history: list[Position] = field(default_factory=list)
    undone_letters: list[str] = field(default_factory=list)
    is_ai: bool = False

    def has_tile(self, letter: str) -> bool:
        return letter in self.rack

    def add_tile(self, letter: str) -> None:
        """Pridá písmeno na koniec racku (limit 7 sa tu nevynucuje)."""
        self.rack.append(letter)

    def remove_tile(self, letter: str) -> bool:
        """Odoberie jeden výskyt písmena; False ak ho hráč nemá."""
        try:
            self.rack.remove(letter)
        except ValueError:
            return False
        return True

    def add_score(self, points: int) -> None:
        self.score += points

    def replenish(self, bag: TileBag) -> list[str]:
        """Doplní rack z tašky na 7 kociek; vráti potiahnuté písmená."""
        drawn = bag.draw(max(0, RACK_CAPACITY - len(self.rack)))
        self.rack.extend(drawn)
        return drawn

    def clear_history(self) -> None:
        self.history.clear()
        self.undo_history.clear()
        self.undone_letters.clear()
