"""Shared fixtures: a small lexicon and a game factory with fixed hands."""

from typing import Dict, Iterable

import pytest

from src.engine import GameConfig, ScrabbleGame
from src.verifiers import Lexicon, Tile

from helpers import WORDS, tiles


@pytest.fixture
def lexicon() -> Lexicon:
    return Lexicon(WORDS)


@pytest.fixture
def make_game(lexicon):
    """Build a game with fixed hands and bag contents instead of random draws."""

    def _make(
        hands: Dict[str, str],
        bag: str = "",
        abilities: Iterable[Tile] = (),
        require_center_start: bool = True,
        starting_player: str = None,
        seed: int = 0,
    ) -> ScrabbleGame:
        names = list(hands)
        config = GameConfig(
            players=names,
            starting_player=starting_player or names[0],
            require_center_start=require_center_start,
            seed=seed,
        )
        game = ScrabbleGame.create(
            config=config,
            lexicon=lexicon,
            abilities=list(abilities),
            tiles=[],
        )
        for player in game.players:
            player.hand = tiles(hands[player.name])
        game.bag.tiles.extend(tiles(bag))
        return game

    return _make
