
from __future__ import annotations

from .types import Position, WordFound


def normalize_board_size(size: int) -> int:
    """Doska musi mat neparny rozmer; parne rozmery sa zvacsia o jedna."""
    if size < 1:
        raise ValueError("Rozmer dosky musí byť kladný")
    return size + 1 if size % 2 == 0 else size


class Board:
    """Mriezka NxN; bunka je None (prazdna) alebo jedno pismeno (uppercase).

    Doska nerobi ziadne pravidlove kontroly, to je uloha `GameSession`.
    """
    def __init__(self, size: int = 15) -> None:
        self.size = normalize_board_size(size)
        self.cells: list[list[str | None]] = [
            [None] * self.size for _ in range(self.size)
        ]

    @property
    def center(self) -> Position:
        mid = self.size // 2
        return Position(mid, mid)

    def inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get_letter(self, row: int, col: int) -> str | None:
        if not self.inside(row, col):
            return None
        return self.cells[row][col]

    def is_occupied(self, row: int, col: int) -> bool:
        return self.get_letter(row, col) is not None

    def set_letter(self, row: int, col: int, letter: str) -> None:
        self.cells[row][col] = letter.upper()

    def clear(self, row: int, col: int) -> None:
        self.cells[row][col] = None

    def is_empty(self) -> bool:
        return all(cell is None for row in self.cells for cell in row)

    def count_tiles(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is not None)

    def has_occupied_neighbour(self, row: int, col: int) -> bool:
        """Ci ma bunka aspon jedneho obsadeneho ortogonalneho suseda."""
        return any(
            self.is_occupied(n.row, n.col) for n in Position(row, col).neighbours()
        )

    def extend_word(self, row: int, col: int, horizontal: bool) -> list[Position]:
        """Vrati suradnice celeho slova prechadzajuceho danym polom v danom smere."""
        dr, dc = (0, 1) if horizontal else (1, 0)
        # posun dolava/nahor
        r, c = row, col
        while self.is_occupied(r - dr, c - dc):
            r -= dr
            c -= dc
        coords: list[Position] = []
        # dopln doprava/nadol
        while self.is_occupied(r, c):
            coords.append(Position(r, c))
            r += dr
            c += dc
        return coords

    def word_at(self, row: int, col: int, horizontal: bool) -> WordFound:
        coords = self.extend_word(row, col, horizontal)
        word = "".join(self.cells[p.row][p.col] or "" for p in coords)
        return WordFound(word, coords)

    def rows(self) -> list[str]:
        """Textova podoba dosky: '.' pre prazdne, inak pismeno (aj ' ' pre blank)."""
        return ["".join(cell if cell is not None else "." for cell in row) for row in self.cells]
