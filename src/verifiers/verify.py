"""
Move verification for staged tile placements.

Validates, in order, stopping at the first failing stage:
1. Placement rules (bounds, one row or column, no covering a letter, no repeated cell)
2. Anchoring (touches an existing letter; the opening move covers the center)
3. Word validity (every word on the resulting board is in the lexicon)
"""

from typing import List, Sequence

from .grid import Grid, CENTER
from .lexicon import Lexicon
from .models import Direction, Location, ValidationError, ValidationResult
from .scanner import extract_all_words, words_formed
from .tiles import Tile


def validate_step(move: Sequence[Tile], grid: Grid) -> ValidationResult:
    """
    Cell-level checks, safe to run after every staged tile.

    A single tile is trivially collinear. Does not mutate anything.
    """
    locations: List[Location] = [tile.location for tile in move]

    for loc in locations:
        if not grid.in_bounds(loc.row, loc.col):
            return ValidationResult.fail(
                "OUT_OF_BOUNDS",
                f"Cell ({loc.row}, {loc.col}) is off the board",
                location=loc,
            )

    # 1) all in one row or all in one column
    rows = {loc.row for loc in locations}
    cols = {loc.col for loc in locations}
    if len(rows) > 1 and len(cols) > 1:
        return ValidationResult.fail(
            "NOT_COLLINEAR",
            f"Tiles must share a single row or column: {sorted(map(tuple, locations))}",
        )

    # 2) never on top of a placed letter (abilities may be covered)
    for loc in locations:
        if grid.has_letter(loc.row, loc.col):
            return ValidationResult.fail(
                "CELL_OCCUPIED",
                f"Cell ({loc.row}, {loc.col}) already holds a letter",
                location=loc,
            )

    # 3) one tile per cell within the move
    seen = set()
    for loc in locations:
        if loc in seen:
            return ValidationResult.fail(
                "DUPLICATE_CELL",
                f"Cell ({loc.row}, {loc.col}) is used twice in this move",
                location=loc,
            )
        seen.add(loc)

    return ValidationResult.ok()


def validate_anchoring(
    move: Sequence[Tile],
    grid: Grid,
    require_center_start: bool = True,
) -> ValidationResult:
    """Check the move connects to the board, or opens it through the center."""
    locations = [tile.location for tile in move]

    if grid.is_board_empty():
        if require_center_start and CENTER not in locations:
            return ValidationResult.fail(
                "CENTER_NOT_COVERED",
                f"The first move must use the center cell ({CENTER.row}, {CENTER.col})",
            )
        return ValidationResult.ok()

    for loc in locations:
        for direction in Direction:
            row, col = loc.row + direction.drow, loc.col + direction.dcol
            if grid.in_bounds(row, col) and grid.has_letter(row, col):
                return ValidationResult.ok()

    return ValidationResult.fail(
        "NOT_CONNECTED",
        "At least one tile must be placed next to a tile already on the board",
    )


def validate_words(move: Sequence[Tile], grid: Grid, lexicon: Lexicon) -> ValidationResult:
    """Check every word on the board, with the move applied, against the lexicon."""
    speculative = grid.with_tiles(move)
    errors: List[ValidationError] = []
    reported = set()

    for word in extract_all_words(speculative):
        if word in reported or lexicon.check_word(word):
            continue
        reported.add(word)
        errors.append(ValidationError(
            code="INVALID_WORD",
            message=f"'{word.upper()}' is not a valid dictionary word",
            word=word,
        ))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        words=words_formed(move, speculative),
    )


def verify_move(
    move: Sequence[Tile],
    grid: Grid,
    lexicon: Lexicon,
    require_center_start: bool = True,
) -> ValidationResult:
    """
    Full submit-time verification of a staged move.

    Returns a ValidationResult with:
    - valid: True if the move can be committed
    - errors: the failures of the first stage that rejected the move
    - words: the words the move forms (when it reached the word stage)
    """
    if not move:
        return ValidationResult.fail("EMPTY_MOVE", "No tiles have been placed")

    result = validate_step(move, grid)
    if not result.valid:
        return result

    result = validate_anchoring(move, grid, require_center_start)
    if not result.valid:
        return result

    return validate_words(move, grid, lexicon)
