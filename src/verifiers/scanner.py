"""Word extraction over a grid."""

from typing import Dict, List, Optional, Sequence, Set, Tuple

from .grid import Grid
from .models import Direction
from .tiles import Tile


def extract_word(row: int, col: int, direction: Direction, grid: Grid) -> Optional[str]:
    """
    Read letters from (row, col) moving ``direction`` (SOUTH or EAST).

    The run stops at an empty cell, an uncovered ability cell, or the board
    edge. Runs of 0 or 1 letters are not words and give None. The result is
    lower-cased for dictionary lookup.
    """
    if direction not in (Direction.SOUTH, Direction.EAST):
        raise ValueError(f"Words are read SOUTH or EAST, not {direction.name}")

    letters: List[str] = []
    while grid.in_bounds(row, col):
        tile = grid.letter_at(row, col)
        if tile is None:
            break
        letters.append(tile.letter)
        row += direction.drow
        col += direction.dcol

    if len(letters) < 2:
        return None
    return ''.join(letters).lower()


def collect_influence(move: Sequence[Tile], grid: Grid) -> List[Tile]:
    """
    Every letter tile in every word the move touches, each exactly once.

    Walks outward from each move tile in all four directions until an empty
    or ability cell. ``grid`` must already contain the move's tiles.
    """
    found: Dict[str, Tile] = {}
    for tile in move:
        found.setdefault(tile.uid, tile)
        row, col = tile.location
        for direction in Direction:
            r, c = row + direction.drow, col + direction.dcol
            while grid.in_bounds(r, c):
                neighbour = grid.letter_at(r, c)
                if neighbour is None:
                    break
                found.setdefault(neighbour.uid, neighbour)
                r += direction.drow
                c += direction.dcol
    return list(found.values())


def _is_word_start(row: int, col: int, direction: Direction, grid: Grid) -> bool:
    prev_r, prev_c = row - direction.drow, col - direction.dcol
    return not grid.in_bounds(prev_r, prev_c) or not grid.has_letter(prev_r, prev_c)


def extract_all_words(grid: Grid) -> List[str]:
    """All words (2+ letters) on the grid, scanning from every word start."""
    words: List[str] = []
    for row in range(grid.size):
        for col in range(grid.size):
            for direction in (Direction.SOUTH, Direction.EAST):
                if _is_word_start(row, col, direction, grid):
                    word = extract_word(row, col, direction, grid)
                    if word is not None:
                        words.append(word)
    return words


def words_formed(move: Sequence[Tile], grid: Grid) -> List[str]:
    """Words running through at least one of the move's tiles, in discovery order."""
    seen: Set[Tuple[int, int, Direction]] = set()
    words: List[str] = []
    for tile in move:
        for direction in (Direction.EAST, Direction.SOUTH):
            row, col = tile.location
            # Back up to the start of the run
            while not _is_word_start(row, col, direction, grid):
                row -= direction.drow
                col -= direction.dcol
            key = (row, col, direction)
            if key in seen:
                continue
            seen.add(key)
            word = extract_word(row, col, direction, grid)
            if word is not None:
                words.append(word)
    return words
