"""Tile and board builders shared by the test modules."""

from typing import Dict, List

from src.verifiers import Grid, Location, Tile, normal_tile

WORDS = [
    "at", "as", "ta", "to", "be", "ab",
    "act", "bat", "tab", "cat", "oat", "sat", "eat", "ate", "tea", "tot", "toe",
    "cats", "coat", "boat", "bats", "east", "seat", "acts",
]

POINTS: Dict[str, int] = {"A": 1, "B": 3, "C": 3, "E": 1, "O": 1, "S": 1, "T": 1}


def tiles(letters: str) -> List[Tile]:
    """Normal tiles for ``letters`` using the standard point values."""
    return [normal_tile(ch, POINTS.get(ch, 1)) for ch in letters]


def commit(grid: Grid, word: str, row: int, col: int, across: bool = True) -> List[Tile]:
    """Put a word straight onto the grid as if it had been played earlier."""
    placed = []
    for i, tile in enumerate(tiles(word)):
        loc = Location(row, col + i) if across else Location(row + i, col)
        put(grid, tile, loc.row, loc.col)
        placed.append(tile)
    return placed


def put(grid: Grid, tile: Tile, row: int, col: int) -> Tile:
    """Place a single tile on the grid."""
    tile.place(Location(row, col))
    grid.set(row, col, tile)
    return tile


def stage(tile: Tile, row: int, col: int) -> Tile:
    """Give a loose tile a staged location without touching any grid."""
    tile.place(Location(row, col))
    return tile


def staged_word(word: str, row: int, col: int, across: bool = True) -> List[Tile]:
    """Loose tiles spelling ``word`` with staged locations."""
    return [
        stage(tile, row, col + i) if across else stage(tile, row + i, col)
        for i, tile in enumerate(tiles(word))
    ]
