"""Tile model shared by the board, the bag and the players' hands."""

import uuid
from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, Field

from .models import Location


class TileKind(str, Enum):
    """Closed set of tile kinds."""
    NORMAL = "normal"
    # Board-seeded abilities
    DOUBLE_WORD = "double_word"
    TRIPLE_WORD = "triple_word"
    DOUBLE_LETTER = "double_letter"
    TRIPLE_LETTER = "triple_letter"
    # Traps hidden in the letter pool
    NEGATIVE_POINTS = "negative_points"
    STEAL_WORD = "steal_word"
    LOSE_WORD = "lose_word"
    LETTER_BOMB = "letter_bomb"


class TileColor(str, Enum):
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    GREEN = "green"
    BLACK = "black"
    BLUE = "blue"


ABILITY_KINDS = frozenset({
    TileKind.DOUBLE_WORD,
    TileKind.TRIPLE_WORD,
    TileKind.DOUBLE_LETTER,
    TileKind.TRIPLE_LETTER,
})

TRAP_KINDS = frozenset({
    TileKind.NEGATIVE_POINTS,
    TileKind.STEAL_WORD,
    TileKind.LOSE_WORD,
    TileKind.LETTER_BOMB,
})

# Lower priority resolves first
HIGH_PRIORITY = 0
LOW_PRIORITY = 10

# Layout token -> ability kind
ABILITY_CODES: Dict[str, TileKind] = {
    "TW": TileKind.TRIPLE_WORD,
    "DW": TileKind.DOUBLE_WORD,
    "TL": TileKind.TRIPLE_LETTER,
    "DL": TileKind.DOUBLE_LETTER,
}

ABILITY_PRIORITY: Dict[TileKind, int] = {
    TileKind.TRIPLE_WORD: LOW_PRIORITY,
    TileKind.DOUBLE_WORD: LOW_PRIORITY,
    TileKind.TRIPLE_LETTER: HIGH_PRIORITY,
    TileKind.DOUBLE_LETTER: HIGH_PRIORITY,
}

KIND_COLORS: Dict[TileKind, TileColor] = {
    TileKind.NORMAL: TileColor.BLACK,
    TileKind.TRIPLE_WORD: TileColor.RED,
    TileKind.DOUBLE_WORD: TileColor.MAGENTA,
    TileKind.TRIPLE_LETTER: TileColor.BLUE,
    TileKind.DOUBLE_LETTER: TileColor.CYAN,
    TileKind.NEGATIVE_POINTS: TileColor.RED,
    TileKind.STEAL_WORD: TileColor.CYAN,
    TileKind.LOSE_WORD: TileColor.GREEN,
    TileKind.LETTER_BOMB: TileColor.MAGENTA,
}

BOARD_CREATOR = "all"


class Tile(BaseModel):
    """
    A single game tile.

    Identity fields (kind, letter, points, color, priority) never change.
    ``location`` is set when the tile is staged or seeded and cleared only
    when a staged move is rolled back. ``creator`` is the name of the player
    who played the tile, or ``"all"`` for board abilities.

    Equality includes ``uid``, so two tiles with the same letter are still
    distinct tiles.
    """

    kind: TileKind = TileKind.NORMAL
    letter: Optional[str] = Field(None, pattern=r'^[A-Z]$')
    points: int = Field(0, ge=0)
    color: TileColor = TileColor.BLACK
    priority: Optional[int] = None
    creator: Optional[str] = None
    location: Optional[Location] = None
    revealed: bool = False
    uid: str = Field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def is_ability(self) -> bool:
        return self.kind in ABILITY_KINDS

    @property
    def is_trap(self) -> bool:
        return self.kind in TRAP_KINDS

    @property
    def is_normal(self) -> bool:
        return self.kind is TileKind.NORMAL

    @property
    def is_letter(self) -> bool:
        """Letter tiles are everything a player can hold: normal tiles and traps."""
        return not self.is_ability

    def place(self, location: Location) -> None:
        """Give an unplaced tile its board location."""
        if self.location is not None:
            raise ValueError(f"Tile {self.letter} is already placed at {tuple(self.location)}")
        self.location = Location(*location)

    def unplace(self) -> None:
        self.location = None

    def visible_to(self, viewer: Optional[str]) -> bool:
        """Whether ``viewer`` can see what kind of tile this is."""
        if not self.is_trap:
            return True
        return self.revealed or (viewer is not None and viewer == self.creator)

    def __str__(self) -> str:
        if self.is_ability:
            return self.kind.value
        return f"{self.letter}{self.points}"


def normal_tile(letter: str, points: int) -> Tile:
    return Tile(kind=TileKind.NORMAL, letter=letter.upper(), points=points, color=TileColor.BLACK)


def ability_tile(kind: TileKind, location: Location) -> Tile:
    """Create a board-native ability tile already seeded at ``location``."""
    if kind not in ABILITY_KINDS:
        raise ValueError(f"{kind.value} is not an ability tile kind")
    return Tile(
        kind=kind,
        color=KIND_COLORS[kind],
        priority=ABILITY_PRIORITY[kind],
        creator=BOARD_CREATOR,
        location=Location(*location),
    )


def trap_tile(kind: TileKind, letter: str, points: int) -> Tile:
    if kind not in TRAP_KINDS:
        raise ValueError(f"{kind.value} is not a trap tile kind")
    return Tile(kind=kind, letter=letter.upper(), points=points, color=KIND_COLORS[kind])
