"""Tests for move scoring: base points, abilities and traps."""

import pytest

from src.engine import EffectContext, resolve, score_move
from src.engine.effects import RESOLVERS
from src.engine.scoring import abilities_used, base_score, find_winners, hand_penalties
from src.verifiers import Grid, Location, TileKind, ability_tile, normal_tile, trap_tile

from helpers import commit, put, tiles

PLAYERS = ["ana", "ben", "cy"]


def play(grid, letters, row, col, across=True):
    """Put the mover's tiles on the grid and return them as the move."""
    move = []
    for i, tile in enumerate(letters):
        r, c = (row, col + i) if across else (row + i, col)
        move.append(put(grid, tile, r, c))
    return move


def trapped_board(kind, letter="T"):
    """CA plus a trap in the third cell, laid by ben on an earlier turn."""
    grid = Grid()
    commit(grid, "CA", 7, 6)
    trap = trap_tile(kind, letter, 1)
    trap.creator = "ben"
    put(grid, trap, 7, 8)
    return grid, trap


class TestBaseScore:
    """Points of every tile the move touches."""

    def test_single_word(self):
        grid = Grid()
        move = play(grid, tiles("CAT"), 7, 6)
        assert base_score(move, grid) == 5

    def test_extension_counts_existing_tiles(self):
        grid = Grid()
        commit(grid, "CAT", 7, 6)
        move = play(grid, tiles("S"), 7, 9)
        assert base_score(move, grid) == 6

    def test_plain_move_credits_mover(self):
        grid = Grid()
        move = play(grid, tiles("CAT"), 7, 6)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.final_score == 5
        assert outcome.deltas == {"ana": 5, "ben": 0, "cy": 0}
        assert outcome.abilities == []
        assert outcome.traps == []
        assert not outcome.intercepted


class TestAbilities:
    """Letter bonuses resolve before word multipliers."""

    @pytest.fixture
    def grid(self):
        return Grid([
            ability_tile(TileKind.DOUBLE_LETTER, Location(7, 6)),
            ability_tile(TileKind.DOUBLE_WORD, Location(7, 7)),
        ])

    def test_double_letter_then_double_word(self, grid):
        """C on DL adds 3, then DW doubles: (5 + 3) * 2."""
        move = play(grid, tiles("CAT"), 7, 6)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.base_score == 5
        assert outcome.final_score == 16
        assert outcome.abilities == ["double_letter", "double_word"]

    def test_order_independent_of_staging(self, grid):
        """Staging the DW cell first does not change the result."""
        c, a, t = tiles("CAT")
        put(grid, c, 7, 6)
        put(grid, a, 7, 7)
        put(grid, t, 7, 8)
        outcome = score_move([t, a, c], grid, "ana", PLAYERS)
        assert outcome.final_score == 16
        assert [tile.kind for tile in abilities_used([t, a, c], grid)] == [
            TileKind.DOUBLE_LETTER,
            TileKind.DOUBLE_WORD,
        ]

    def test_triple_letter_adds_two_copies(self):
        grid = Grid([ability_tile(TileKind.TRIPLE_LETTER, Location(7, 6))])
        move = play(grid, tiles("CAT"), 7, 6)
        assert score_move(move, grid, "ana", PLAYERS).final_score == 11

    def test_triple_word(self):
        grid = Grid([ability_tile(TileKind.TRIPLE_WORD, Location(7, 8))])
        move = play(grid, tiles("CAT"), 7, 6)
        assert score_move(move, grid, "ana", PLAYERS).final_score == 15

    def test_two_word_multipliers_stack(self):
        grid = Grid([
            ability_tile(TileKind.DOUBLE_WORD, Location(7, 6)),
            ability_tile(TileKind.TRIPLE_WORD, Location(7, 8)),
        ])
        move = play(grid, tiles("CAT"), 7, 6)
        assert score_move(move, grid, "ana", PLAYERS).final_score == 30

    def test_covered_ability_not_used_again(self):
        """Only abilities under the move's own tiles apply."""
        grid = Grid([ability_tile(TileKind.DOUBLE_WORD, Location(7, 6))])
        commit(grid, "CAT", 7, 6)
        move = play(grid, tiles("S"), 7, 9)
        outcome = score_move(move, grid, "ben", PLAYERS)
        assert outcome.final_score == 6
        assert outcome.abilities == []


class TestTraps:
    """Traps laid on earlier turns take over the payout."""

    def test_steal_word(self):
        """Every other player gets the score, the mover gets nothing."""
        grid, _ = trapped_board(TileKind.STEAL_WORD)
        move = play(grid, [normal_tile("S", 5)], 7, 9)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.final_score == 10
        assert outcome.deltas == {"ana": 0, "ben": 10, "cy": 10}
        assert outcome.traps == ["steal_word"]
        assert outcome.intercepted

    def test_negative_points(self):
        grid, _ = trapped_board(TileKind.NEGATIVE_POINTS)
        move = play(grid, [normal_tile("S", 5)], 7, 9)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.deltas == {"ana": -10, "ben": 0, "cy": 0}

    def test_lose_word(self):
        grid, _ = trapped_board(TileKind.LOSE_WORD)
        move = play(grid, [normal_tile("S", 5)], 7, 9)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.final_score == 10
        assert outcome.deltas == {"ana": 0, "ben": 0, "cy": 0}

    def test_letter_bomb_without_match_pays_in_full(self):
        grid, _ = trapped_board(TileKind.LETTER_BOMB, letter="T")
        move = play(grid, [normal_tile("S", 5)], 7, 9)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.deltas["ana"] == 10

    def test_letter_bomb_with_match_halves(self):
        """Playing the bomb's own letter halves the payout."""
        grid, _ = trapped_board(TileKind.LETTER_BOMB, letter="T")
        move = play(grid, [normal_tile("T", 9)], 8, 8)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.final_score == 10
        assert outcome.deltas["ana"] == 5

    @pytest.mark.parametrize("bomb_letter, mover_payout", [("T", 10), ("S", 5)])
    def test_two_traps_sum_their_deltas(self, bomb_letter, mover_payout):
        """A StealWord and a LetterBomb in one word each pay out on their own."""
        grid = Grid()
        commit(grid, "C", 7, 6)
        steal = put(grid, trap_tile(TileKind.STEAL_WORD, "A", 1), 7, 7)
        steal.creator = "ben"
        bomb = put(grid, trap_tile(TileKind.LETTER_BOMB, bomb_letter, 1), 7, 8)
        bomb.creator = "cy"
        move = play(grid, [normal_tile("S", 5)], 7, 9)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.final_score == 10
        assert sorted(outcome.traps) == ["letter_bomb", "steal_word"]
        assert outcome.deltas == {"ana": mover_payout, "ben": 10, "cy": 10}

    def test_trap_sees_ability_adjusted_score(self):
        grid = Grid([ability_tile(TileKind.DOUBLE_WORD, Location(7, 9))])
        commit(grid, "CA", 7, 6)
        trap = put(grid, trap_tile(TileKind.STEAL_WORD, "T", 1), 7, 8)
        trap.creator = "ben"
        move = play(grid, [normal_tile("S", 5)], 7, 9)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.deltas == {"ana": 0, "ben": 20, "cy": 20}

    def test_own_trap_in_move_is_not_triggered(self):
        """A trap the mover lays this turn scores like a normal tile."""
        grid = Grid()
        c, a = tiles("CA")
        t = trap_tile(TileKind.NEGATIVE_POINTS, "T", 1)
        move = play(grid, [c, a, t], 7, 6)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.traps == []
        assert outcome.deltas["ana"] == 5

    def test_triggered_trap_tiles_are_reported(self):
        grid, trap = trapped_board(TileKind.LOSE_WORD)
        move = play(grid, tiles("S"), 7, 9)
        outcome = score_move(move, grid, "ana", PLAYERS)
        assert outcome.trap_tiles == [trap]
        assert "trap_tiles" not in outcome.model_dump()


class TestEffects:
    """The effect dispatch table."""

    def test_every_kind_has_an_effect(self):
        assert set(RESOLVERS) == set(TileKind)

    def test_normal_tile_is_identity(self):
        tile = tiles("A")[0]
        ctx = EffectContext(tile=tile, move=[], mover="ana", players=PLAYERS, score=7)
        effect = resolve(TileKind.NORMAL, ctx)
        assert effect.score == 7
        assert effect.deltas == {}

    def test_letter_bonus_needs_a_covering_tile(self):
        """An ability with no move tile on it leaves the score alone."""
        ability = ability_tile(TileKind.TRIPLE_LETTER, Location(0, 0))
        ctx = EffectContext(tile=ability, move=[], mover="ana", players=PLAYERS, score=4)
        assert resolve(TileKind.TRIPLE_LETTER, ctx).score == 4


class TestEndOfGame:
    """Hand penalties and winners."""

    def test_hand_penalties(self):
        penalties = hand_penalties({"ana": [], "ben": tiles("CB")})
        assert penalties == {"ana": 0, "ben": -6}

    def test_single_winner(self):
        assert find_winners({"ana": 12, "ben": 9}) == ["ana"]

    def test_tied_winners(self):
        assert find_winners({"ana": 10, "ben": 10, "cy": 3}) == ["ana", "ben"]

    def test_all_negative_scores(self):
        assert find_winners({"ana": -3, "ben": -5}) == ["ana"]

    def test_no_players(self):
        assert find_winners({}) == []
