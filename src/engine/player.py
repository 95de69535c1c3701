"""
Player class for per-player turn state.

Holds the player's hand, the tiles staged this turn, tiles marked for
exchange, and the running score. Only the game mutates it.
"""

import random
from typing import List, Dict, Optional
from pydantic import BaseModel, Field

from ..verifiers.tiles import Tile


class Player(BaseModel):
    """
    Manages individual player state.

    Attributes:
        name: Unique display name, also used as the player's key
        hand: Tiles currently held
        moves: Tiles staged this turn, in placement order
        staged_from: Hand index each staged tile was taken from
        exchange: uids of hand tiles marked for exchange
        score: Running score, may go negative
        is_turn: Whether it is this player's turn
        turn_done: Set once the player committed a word or exchanged this turn
        turn_count: Number of turns taken
    """

    name: str
    hand: List[Tile] = Field(default_factory=list)
    moves: List[Tile] = Field(default_factory=list)
    staged_from: List[int] = Field(default_factory=list)
    exchange: List[str] = Field(default_factory=list)
    score: int = 0
    is_turn: bool = False
    turn_done: bool = False
    turn_count: int = 0

    @property
    def tiles_in_hand(self) -> int:
        """Number of tiles currently in hand."""
        return len(self.hand)

    @property
    def hand_summary(self) -> Dict[str, int]:
        """Get a count of each letter in hand."""
        summary: Dict[str, int] = {}
        for tile in self.hand:
            summary[tile.letter] = summary.get(tile.letter, 0) + 1
        return dict(sorted(summary.items()))

    def take_from_hand(self, index: int) -> Optional[Tile]:
        """Remove and return the hand tile at ``index``, or None if there is none."""
        if not 0 <= index < len(self.hand):
            return None
        return self.hand.pop(index)

    def return_to_hand(self, tile: Tile, index: Optional[int] = None) -> None:
        """Put a staged tile back, clearing its location."""
        tile.unplace()
        if index is None:
            self.hand.append(tile)
        else:
            self.hand.insert(index, tile)

    def change_turn(self) -> None:
        self.is_turn = not self.is_turn
        self.turn_done = False

    def change_score(self, value: int) -> None:
        self.score += value

    def mix_tiles(self, rng: random.Random) -> None:
        """Shuffle the order of the hand."""
        rng.shuffle(self.hand)

    def get_state(self, reveal_hand: bool = True) -> Dict:
        """
        Get the current player state as a dictionary.

        Useful for serialization and logging.

        Args:
            reveal_hand: Include the letters in hand

        Returns:
            Dictionary containing player state
        """
        state = {
            "name": self.name,
            "score": self.score,
            "tiles_in_hand": self.tiles_in_hand,
            "staged": [(t.letter, tuple(t.location)) for t in self.moves],
            "is_turn": self.is_turn,
            "turn_count": self.turn_count,
        }
        if reveal_hand:
            state["hand"] = [t.letter for t in self.hand]
            state["hand_summary"] = self.hand_summary
        return state
