"""Board model and move verification."""

from .verify import verify_move, validate_step, validate_anchoring, validate_words
from .models import Location, Direction, OutOfBoundsError, ValidationError, ValidationResult
from .tiles import (
    Tile,
    TileKind,
    TileColor,
    ABILITY_KINDS,
    TRAP_KINDS,
    normal_tile,
    ability_tile,
    trap_tile,
)
from .grid import Grid, BOARD_SIZE, CENTER
from .scanner import extract_word, collect_influence, extract_all_words, words_formed
from .lexicon import Lexicon

__all__ = [
    # Verification
    "verify_move",
    "validate_step",
    "validate_anchoring",
    "validate_words",
    # Models
    "Location",
    "Direction",
    "OutOfBoundsError",
    "ValidationError",
    "ValidationResult",
    # Tiles
    "Tile",
    "TileKind",
    "TileColor",
    "ABILITY_KINDS",
    "TRAP_KINDS",
    "normal_tile",
    "ability_tile",
    "trap_tile",
    # Grid
    "Grid",
    "BOARD_SIZE",
    "CENTER",
    "extract_word",
    "collect_influence",
    "extract_all_words",
    "words_formed",
    # Dictionary
    "Lexicon",
]
