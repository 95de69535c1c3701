"""
Tile effects as a dispatch table over tile kinds.

Every ``TileKind`` maps to one resolver taking an ``EffectContext`` and
returning a ``ScoreEffect``. Abilities only transform the running score;
traps leave it alone and instead hand out per-player deltas.
"""

from typing import Callable, Dict, List
from pydantic import BaseModel, Field

from ..verifiers.tiles import Tile, TileKind


class EffectContext(BaseModel):
    """Everything an effect may look at while a move is scored."""
    tile: Tile
    move: List[Tile]
    mover: str
    players: List[str]
    score: int


class ScoreEffect(BaseModel):
    """Outcome of one effect: the new running score and direct score changes."""
    score: int
    deltas: Dict[str, int] = Field(default_factory=dict)


def _unchanged(ctx: EffectContext) -> ScoreEffect:
    return ScoreEffect(score=ctx.score)


def _covering_tile(ctx: EffectContext) -> Tile | None:
    """The move tile placed on the ability's cell."""
    for tile in ctx.move:
        if tile.location == ctx.tile.location:
            return tile
    return None


def _letter_bonus(extra_copies: int) -> Callable[[EffectContext], ScoreEffect]:
    def resolve(ctx: EffectContext) -> ScoreEffect:
        tile = _covering_tile(ctx)
        if tile is None:
            return ScoreEffect(score=ctx.score)
        return ScoreEffect(score=ctx.score + extra_copies * tile.points)
    return resolve


def _word_multiplier(factor: int) -> Callable[[EffectContext], ScoreEffect]:
    def resolve(ctx: EffectContext) -> ScoreEffect:
        return ScoreEffect(score=ctx.score * factor)
    return resolve


def _negative_points(ctx: EffectContext) -> ScoreEffect:
    return ScoreEffect(score=ctx.score, deltas={ctx.mover: -ctx.score})


def _steal_word(ctx: EffectContext) -> ScoreEffect:
    return ScoreEffect(
        score=ctx.score,
        deltas={p: ctx.score for p in ctx.players if p != ctx.mover},
    )


def _lose_word(ctx: EffectContext) -> ScoreEffect:
    return ScoreEffect(score=ctx.score)


def _letter_bomb(ctx: EffectContext) -> ScoreEffect:
    # Pays out to the mover, halved if they played the bomb's letter
    payout = ctx.score
    if any(tile.letter == ctx.tile.letter for tile in ctx.move):
        payout = payout // 2
    return ScoreEffect(score=ctx.score, deltas={ctx.mover: payout})


RESOLVERS: Dict[TileKind, Callable[[EffectContext], ScoreEffect]] = {
    TileKind.NORMAL: _unchanged,
    TileKind.DOUBLE_LETTER: _letter_bonus(1),
    TileKind.TRIPLE_LETTER: _letter_bonus(2),
    TileKind.DOUBLE_WORD: _word_multiplier(2),
    TileKind.TRIPLE_WORD: _word_multiplier(3),
    TileKind.NEGATIVE_POINTS: _negative_points,
    TileKind.STEAL_WORD: _steal_word,
    TileKind.LOSE_WORD: _lose_word,
    TileKind.LETTER_BOMB: _letter_bomb,
}


def resolve(kind: TileKind, context: EffectContext) -> ScoreEffect:
    """Look up and apply the effect for ``kind``."""
    try:
        resolver = RESOLVERS[kind]
    except KeyError:
        raise ValueError(f"No effect registered for tile kind {kind!r}") from None
    return resolver(context)
