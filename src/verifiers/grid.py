"""Board storage: letter tiles over a fixed layer of ability tiles."""

from typing import Iterable, Iterator, List, Optional

from .models import Location, OutOfBoundsError
from .tiles import Tile

BOARD_SIZE = 15
CENTER = Location(BOARD_SIZE // 2, BOARD_SIZE // 2)


class Grid:
    """
    Fixed N x N board.

    Ability tiles are seeded once at construction and never removed. A letter
    tile placed on an ability cell covers it: ``get`` then returns the letter
    and ``is_ability_tile`` is False, while ``ability_at`` still reports what
    was underneath. The grid enforces one letter per cell but knows nothing
    about the game rules.
    """

    def __init__(self, abilities: Iterable[Tile] = (), size: int = BOARD_SIZE):
        self.size = size
        self._letters: List[List[Optional[Tile]]] = [[None] * size for _ in range(size)]
        self._abilities: List[List[Optional[Tile]]] = [[None] * size for _ in range(size)]
        for tile in abilities:
            if not tile.is_ability or tile.location is None:
                raise ValueError(f"Cannot seed {tile} as a board ability")
            row, col = tile.location
            self._check(row, col)
            if self._abilities[row][col] is not None:
                raise ValueError(f"Ability already seeded at ({row}, {col})")
            self._abilities[row][col] = tile

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self.size)

    def get(self, row: int, col: int) -> Optional[Tile]:
        """The tile showing at a cell: a letter if one is placed, else any ability."""
        self._check(row, col)
        return self._letters[row][col] or self._abilities[row][col]

    def set(self, row: int, col: int, tile: Tile) -> None:
        """Place a letter tile. Committed letters are never replaced."""
        self._check(row, col)
        if not tile.is_letter:
            raise ValueError("Ability tiles are seeded at construction, not placed")
        if self._letters[row][col] is not None:
            raise ValueError(f"Cell ({row}, {col}) already holds a letter tile")
        self._letters[row][col] = tile

    def letter_at(self, row: int, col: int) -> Optional[Tile]:
        self._check(row, col)
        return self._letters[row][col]

    def ability_at(self, row: int, col: int) -> Optional[Tile]:
        """The seeded ability of a cell, covered or not."""
        self._check(row, col)
        return self._abilities[row][col]

    def has_letter(self, row: int, col: int) -> bool:
        return self.letter_at(row, col) is not None

    def is_ability_tile(self, row: int, col: int) -> bool:
        """True when the cell shows an uncovered ability tile."""
        return self.letter_at(row, col) is None and self._abilities[row][col] is not None

    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col) is None

    def is_board_empty(self) -> bool:
        """True until the first letter tile is committed."""
        return not any(tile is not None for row in self._letters for tile in row)

    def letter_tiles(self) -> Iterator[Tile]:
        for row in self._letters:
            for tile in row:
                if tile is not None:
                    yield tile

    def abilities(self) -> Iterator[Tile]:
        for row in self._abilities:
            for tile in row:
                if tile is not None:
                    yield tile

    def copy(self) -> "Grid":
        clone = Grid(size=self.size)
        clone._letters = [row.copy() for row in self._letters]
        clone._abilities = [row.copy() for row in self._abilities]
        return clone

    def with_tiles(self, tiles: Iterable[Tile]) -> "Grid":
        """A speculative copy with staged tiles placed at their locations."""
        clone = self.copy()
        for tile in tiles:
            clone.set(tile.location.row, tile.location.col, tile)
        return clone
