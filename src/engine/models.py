"""
Pydantic models for the engine layer.

This module contains the configuration, scripted-turn and result models used
throughout the engine. The main logic classes (ScrabbleGame, Player, TileBag)
live in their respective files.
"""

from pathlib import Path
from typing import List, Dict, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..verifiers.models import ValidationResult


# Type aliases
Action = Literal["PLAY", "EXCHANGE", "PASS"]

HAND_LIMIT = 7
MIN_PLAYERS = 2
MAX_PLAYERS = 4


class Placement(BaseModel):
    """One tile of a scripted play: a letter from hand put on a cell."""
    letter: str = Field(..., pattern=r'^[A-Za-z]$')
    row: int
    col: int

    @field_validator("letter")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


class TurnSpec(BaseModel):
    """A scripted turn: exactly one of play, exchange or pass."""
    model_config = ConfigDict(populate_by_name=True)

    play: Optional[List[Placement]] = None
    exchange: Optional[List[str]] = None
    pass_turn: bool = Field(False, alias="pass")

    @model_validator(mode="after")
    def _one_action(self) -> "TurnSpec":
        chosen = sum([self.play is not None, self.exchange is not None, self.pass_turn])
        if chosen != 1:
            raise ValueError("a turn needs exactly one of 'play', 'exchange' or 'pass'")
        return self

    @property
    def action(self) -> Action:
        if self.play is not None:
            return "PLAY"
        if self.exchange is not None:
            return "EXCHANGE"
        return "PASS"


class GameConfig(BaseModel):
    """Configuration for a game."""
    players: List[str] = Field(..., min_length=MIN_PLAYERS, max_length=MAX_PLAYERS)
    hand_limit: int = Field(default=HAND_LIMIT, ge=1)
    special_tiles: bool = False
    special_tile_count: int = Field(default=15, ge=0)
    require_center_start: bool = True
    seed: Optional[int] = None
    starting_player: Optional[str] = None
    ability_layout: Optional[Path] = None
    letter_values: Optional[Path] = None
    word_list: Optional[Path] = None
    turns: List[TurnSpec] = Field(default_factory=list)

    @field_validator("players")
    @classmethod
    def _unique_names(cls, names: List[str]) -> List[str]:
        if len(set(names)) != len(names):
            raise ValueError("player names must be unique")
        return names

    @model_validator(mode="after")
    def _known_starter(self) -> "GameConfig":
        if self.starting_player is not None and self.starting_player not in self.players:
            raise ValueError(f"starting_player '{self.starting_player}' is not one of the players")
        return self


class TurnResult(BaseModel):
    """Result of a single submitted turn."""
    player: str
    turn_number: int
    action: Action
    valid: bool = True
    validation: Optional[ValidationResult] = None
    words: List[str] = Field(default_factory=list)
    base_score: int = 0
    final_score: int = 0
    score_deltas: Dict[str, int] = Field(default_factory=dict)
    abilities: List[str] = Field(default_factory=list)
    traps: List[str] = Field(default_factory=list)
    tiles_before: List[str] = Field(default_factory=list)
    tiles_after: List[str] = Field(default_factory=list)
    tiles_drawn: int = 0
    error: Optional[str] = None


class GameResult(BaseModel):
    """Summary of a finished or interrupted game."""
    config: GameConfig
    winners: List[str] = Field(default_factory=list)
    is_complete: bool = False
    total_turns: int = 0
    scores: Dict[str, int] = Field(default_factory=dict)
    turn_history: List[TurnResult] = Field(default_factory=list)
    board: List[str] = Field(default_factory=list)
    tiles_remaining: int = 0
