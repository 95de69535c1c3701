"""Game engine: tiles in play, players, scoring and turn flow."""

from .models import (
    Action,
    Placement,
    TurnSpec,
    TurnResult,
    GameConfig,
    GameResult,
    HAND_LIMIT,
    MIN_PLAYERS,
    MAX_PLAYERS,
)
from .assets import SetupError, add_special_tiles
from .effects import EffectContext, ScoreEffect, resolve
from .scoring import MoveScore, score_move
from .tile_bag import TileBag
from .player import Player
from .game import ScrabbleGame

__all__ = [
    "Action",
    "Placement",
    "TurnSpec",
    "TurnResult",
    "GameConfig",
    "GameResult",
    "HAND_LIMIT",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "SetupError",
    "add_special_tiles",
    "EffectContext",
    "ScoreEffect",
    "resolve",
    "MoveScore",
    "score_move",
    "TileBag",
    "Player",
    "ScrabbleGame",
]
