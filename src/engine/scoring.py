"""
Move scoring: base points, ability folding and trap resolution.

The grid passed to ``score_move`` must already contain the move's tiles.
"""

from typing import Dict, List, Sequence
from pydantic import BaseModel, Field

from ..verifiers.grid import Grid
from ..verifiers.scanner import collect_influence
from ..verifiers.tiles import Tile
from .effects import EffectContext, resolve


class MoveScore(BaseModel):
    """Breakdown of how a committed move was scored."""
    base_score: int
    final_score: int
    deltas: Dict[str, int] = Field(default_factory=dict)
    abilities: List[str] = Field(default_factory=list)
    traps: List[str] = Field(default_factory=list)
    trap_tiles: List[Tile] = Field(default_factory=list, exclude=True)

    @property
    def intercepted(self) -> bool:
        """Whether a trap took over the payout of the move."""
        return bool(self.traps)


def base_score(move: Sequence[Tile], grid: Grid) -> int:
    """Sum of the points of every tile in every word the move touches."""
    return sum(tile.points for tile in collect_influence(move, grid))


def abilities_used(move: Sequence[Tile], grid: Grid) -> List[Tile]:
    """
    Abilities under the move's cells, in resolution order.

    Sorted by priority; ``sorted`` is stable so equal priorities keep the
    order the tiles were staged in.
    """
    found = []
    for tile in move:
        ability = grid.ability_at(tile.location.row, tile.location.col)
        if ability is not None:
            found.append(ability)
    return sorted(found, key=lambda t: t.priority)


def triggered_traps(move: Sequence[Tile], grid: Grid) -> List[Tile]:
    """Traps in the influence set that were played on earlier turns."""
    own = {tile.uid for tile in move}
    return [
        tile for tile in collect_influence(move, grid)
        if tile.is_trap and tile.uid not in own
    ]


def score_move(
    move: Sequence[Tile],
    grid: Grid,
    mover: str,
    players: Sequence[str],
) -> MoveScore:
    """
    Score a move and work out every player's score change.

    Abilities fold over the running score first. If any trap is triggered,
    each trap's effect decides the payout from that score and the mover is
    not credited directly; otherwise the mover gets the running score.
    """
    move = list(move)
    players = list(players)
    base = base_score(move, grid)

    score = base
    ability_tiles = abilities_used(move, grid)
    for ability in ability_tiles:
        ctx = EffectContext(tile=ability, move=move, mover=mover, players=players, score=score)
        score = resolve(ability.kind, ctx).score

    deltas: Dict[str, int] = {p: 0 for p in players}
    traps = triggered_traps(move, grid)
    if traps:
        for trap in traps:
            ctx = EffectContext(tile=trap, move=move, mover=mover, players=players, score=score)
            for player, delta in resolve(trap.kind, ctx).deltas.items():
                deltas[player] = deltas.get(player, 0) + delta
    else:
        deltas[mover] = deltas.get(mover, 0) + score

    return MoveScore(
        base_score=base,
        final_score=score,
        deltas=deltas,
        abilities=[t.kind.value for t in ability_tiles],
        traps=[t.kind.value for t in traps],
        trap_tiles=traps,
    )


def hand_penalties(hands: Dict[str, Sequence[Tile]]) -> Dict[str, int]:
    """End-of-game deduction for each player: minus the points left in hand."""
    return {player: -sum(tile.points for tile in hand) for player, hand in hands.items()}


def find_winners(scores: Dict[str, int]) -> List[str]:
    """Every player sharing the highest score."""
    if not scores:
        return []
    best = max(scores.values())
    return [player for player, score in scores.items() if score == best]
