import json
import logging
import random
from pathlib import Path
from typing import List, Dict, Optional, Any, Callable
from pydantic import BaseModel, Field, ConfigDict

from ..utils.grid_visualizer import render_board, render_grid
from ..verifiers.grid import Grid
from ..verifiers.lexicon import Lexicon
from ..verifiers.models import Location, OutOfBoundsError, ValidationResult
from ..verifiers.tiles import Tile
from ..verifiers.verify import validate_step, verify_move
from .assets import add_special_tiles, load_ability_layout, load_letter_values, load_word_list
from .models import Action, GameConfig, GameResult, TurnResult, TurnSpec
from .player import Player
from .scoring import find_winners, hand_penalties, score_move
from .tile_bag import TileBag

logger = logging.getLogger(__name__)


class ScrabbleGame(BaseModel):
    """
    One game: board, bag, lexicon and the seated players.

    All rule enforcement goes through this class. Rule violations never
    raise; they come back as a ``ValidationResult`` or ``TurnResult`` with
    ``valid=False`` and the game state exactly as it was before the attempt.

    Attributes:
        config: Game configuration
        grid: The board
        bag: The undrawn letter tiles
        lexicon: Playable words
        players: Players in seat order
        current_index: Seat of the player whose turn it is
        turn_number: Number of turns recorded so far
        turn_history: Every recorded turn
        is_complete: Whether final scores have been settled
        winners: Names of the winning players once complete
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig
    grid: Grid
    bag: TileBag
    lexicon: Lexicon
    players: List[Player] = Field(default_factory=list)
    current_index: int = 0
    turn_number: int = 0
    turn_history: List[TurnResult] = Field(default_factory=list)
    is_complete: bool = False
    winners: List[str] = Field(default_factory=list)
    _rng: random.Random = None

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        lexicon: Optional[Lexicon] = None,
        abilities: Optional[List[Tile]] = None,
        tiles: Optional[List[Tile]] = None,
        **config_kwargs: Any
    ) -> "ScrabbleGame":
        """
        Factory method to set up a game and deal the starting hands.

        Assets not passed in are loaded from the paths in the config (or the
        bundled defaults). Asset problems raise ``SetupError``.

        Args:
            config: Optional GameConfig instance
            rng: Random source for draws, traps, starting player and mixing
            lexicon: Word list to use instead of loading one
            abilities: Board abilities to use instead of loading a layout
            tiles: Initial bag contents to use instead of loading values
            **config_kwargs: Config parameters if config not provided

        Returns:
            A ready ScrabbleGame
        """
        if config is None:
            config = GameConfig(**config_kwargs)
        if rng is None:
            rng = random.Random(config.seed)

        if abilities is None:
            abilities = load_ability_layout(config.ability_layout)
        if tiles is None:
            tiles = load_letter_values(config.letter_values)
        else:
            tiles = list(tiles)
        if lexicon is None:
            lexicon = load_word_list(config.word_list)
        if config.special_tiles:
            add_special_tiles(tiles, rng, config.special_tile_count)

        game = cls(
            config=config,
            grid=Grid(abilities),
            bag=TileBag.create(tiles, rng=rng),
            lexicon=lexicon,
            players=[Player(name=name) for name in config.players],
        )
        game._rng = rng
        game.setup()
        return game

    def setup(self) -> None:
        """Deal starting hands and pick who goes first."""
        for player in self.players:
            self._replenish(player)

        starter = self.config.starting_player or self._rng.choice(self.config.players)
        self.current_index = self.config.players.index(starter)
        self.current_player.change_turn()
        logger.info(
            "Game set up: %d players, %d tiles in bag, %s goes first",
            len(self.players), self.bag.remaining(), starter,
        )

    # ------------------------------------------------------------------
    # Queries

    @property
    def current_player(self) -> Player:
        """Get the player whose turn it is."""
        return self.players[self.current_index]

    @property
    def tiles_remaining(self) -> int:
        return self.bag.remaining()

    def get_player(self, name: str) -> Optional[Player]:
        for player in self.players:
            if player.name == name:
                return player
        return None

    def scores(self) -> Dict[str, int]:
        return {p.name: p.score for p in self.players}

    def hand(self, name: str) -> List[Tile]:
        """A copy of a player's hand."""
        player = self.get_player(name)
        return list(player.hand) if player else []

    def staged(self) -> List[Tile]:
        return list(self.current_player.moves)

    def board_snapshot(self, viewer: Optional[str] = None) -> List[str]:
        """The board as text rows; traps show only to their creator until triggered."""
        return render_board(self.grid, viewer)

    def total_tiles(self) -> int:
        """Letter tiles anywhere in the game: bag, hands, staged and on the board."""
        in_play = sum(len(p.hand) + len(p.moves) for p in self.players)
        on_board = sum(1 for _ in self.grid.letter_tiles())
        return self.bag.remaining() + in_play + on_board

    # ------------------------------------------------------------------
    # Staging

    def _check_turn(self, name: str) -> Optional[ValidationResult]:
        """Reason ``name`` may not act right now, or None if they may."""
        if self.is_complete:
            return ValidationResult.fail("GAME_OVER", "The game is over")
        if name != self.current_player.name:
            return ValidationResult.fail("NOT_YOUR_TURN", f"It is not {name}'s turn")
        if self.current_player.turn_done:
            return ValidationResult.fail("TURN_OVER", f"{name} has already finished this turn")
        return None

    def stage_tile(self, name: str, hand_index: int, row: int, col: int) -> ValidationResult:
        """
        Put a hand tile on a cell as part of the current move.

        The placement rules are rechecked with the new tile; a placement that
        breaks them is refused and the tile stays in hand.

        Args:
            name: The acting player
            hand_index: Index of the tile in the player's hand
            row: Target row
            col: Target column

        Returns:
            ValidationResult of the staged move including the new tile
        """
        refusal = self._check_turn(name)
        if refusal:
            return refusal

        try:
            self.grid.get(row, col)
        except OutOfBoundsError as e:
            return ValidationResult.fail("OUT_OF_BOUNDS", str(e), location=Location(row, col))

        player = self.current_player
        tile = player.take_from_hand(hand_index)
        if tile is None:
            return ValidationResult.fail("TILE_NOT_IN_HAND", f"No tile at hand position {hand_index}")

        tile.place(Location(row, col))
        player.moves.append(tile)
        player.staged_from.append(hand_index)

        result = validate_step(player.moves, self.grid)
        if not result.valid:
            player.moves.pop()
            player.staged_from.pop()
            player.return_to_hand(tile, hand_index)
            logger.debug("%s: refused %s at (%d, %d): %s", name, tile.letter, row, col, result.codes)
            return result

        if tile.uid in player.exchange:
            player.exchange.remove(tile.uid)
        logger.debug("%s: staged %s at (%d, %d)", name, tile.letter, row, col)
        return result

    def unstage_tile(self, name: str) -> ValidationResult:
        """
        Take back the most recently staged tile.

        Returns:
            ValidationResult; fails with NOTHING_TO_UNDO when nothing is staged
        """
        refusal = self._check_turn(name)
        if refusal:
            return refusal
        player = self.current_player
        if not player.moves:
            return ValidationResult.fail("NOTHING_TO_UNDO", f"{name} has no staged tiles")
        tile = player.moves.pop()
        player.return_to_hand(tile, player.staged_from.pop())
        logger.debug("%s: unstaged %s", name, tile.letter)
        return ValidationResult.ok()

    def undo_move(self, name: str) -> ValidationResult:
        """Return every staged tile to hand."""
        refusal = self._check_turn(name)
        if refusal:
            return refusal
        if not self.current_player.moves:
            return ValidationResult.fail("NOTHING_TO_UNDO", f"{name} has no staged tiles")
        self._rollback(self.current_player)
        return ValidationResult.ok()

    def _rollback(self, player: Player) -> int:
        count = len(player.moves)
        # Reverse order puts every tile back in its original hand slot
        while player.moves:
            player.return_to_hand(player.moves.pop(), player.staged_from.pop())
        return count

    def _replenish(self, player: Player) -> int:
        drawn = 0
        while len(player.hand) < self.config.hand_limit:
            tile = self.bag.draw()
            if tile is None:
                break
            player.hand.append(tile)
            drawn += 1
        return drawn

    # ------------------------------------------------------------------
    # Turn actions

    def submit(self, name: str) -> TurnResult:
        """
        Play the staged move.

        If the move is legal it is scored, committed to the board and the hand
        is refilled from the bag. Otherwise every staged tile goes back to the
        hand and nothing else changes; the player may try again.

        Args:
            name: The acting player

        Returns:
            TurnResult describing the outcome
        """
        turn_number = self.turn_number + 1
        refusal = self._check_turn(name)
        if refusal:
            return TurnResult(
                player=name,
                turn_number=turn_number,
                action="PLAY",
                valid=False,
                validation=refusal,
                error=refusal.errors[0].message,
            )

        player = self.current_player
        tiles_before = [t.letter for t in player.hand + player.moves]
        validation = verify_move(
            player.moves, self.grid, self.lexicon, self.config.require_center_start
        )

        if not validation.valid:
            self._rollback(player)
            logger.warning("%s: move rejected: %s", name, ", ".join(validation.codes))
            return TurnResult(
                player=name,
                turn_number=turn_number,
                action="PLAY",
                valid=False,
                validation=validation,
                tiles_before=tiles_before,
                tiles_after=[t.letter for t in player.hand],
                error="; ".join(e.message for e in validation.errors),
            )

        move = list(player.moves)
        for tile in move:
            tile.creator = player.name
            self.grid.set(tile.location.row, tile.location.col, tile)

        outcome = score_move(move, self.grid, player.name, [p.name for p in self.players])
        for other in self.players:
            other.change_score(outcome.deltas.get(other.name, 0))
        for trap in outcome.trap_tiles:
            trap.revealed = True

        player.moves.clear()
        player.staged_from.clear()
        player.exchange.clear()
        drawn = self._replenish(player)
        player.turn_done = True

        logger.info(
            "%s played %s for %d (base %d, abilities %s, traps %s)",
            name, ", ".join(validation.words) or "a single tile",
            outcome.final_score, outcome.base_score, outcome.abilities, outcome.traps,
        )

        turn_result = TurnResult(
            player=name,
            turn_number=turn_number,
            action="PLAY",
            validation=validation,
            words=validation.words,
            base_score=outcome.base_score,
            final_score=outcome.final_score,
            score_deltas=outcome.deltas,
            abilities=outcome.abilities,
            traps=outcome.traps,
            tiles_before=tiles_before,
            tiles_after=[t.letter for t in player.hand],
            tiles_drawn=drawn,
        )
        self.record_turn(turn_result)
        return turn_result

    def mark_exchange(self, name: str, hand_index: int) -> bool:
        """Mark a hand tile to be swapped with the bag."""
        if self._check_turn(name):
            return False
        player = self.current_player
        if not 0 <= hand_index < len(player.hand):
            return False
        uid = player.hand[hand_index].uid
        if uid not in player.exchange:
            player.exchange.append(uid)
        return True

    def unmark_exchange(self, name: str, hand_index: int) -> bool:
        if self._check_turn(name):
            return False
        player = self.current_player
        if not 0 <= hand_index < len(player.hand):
            return False
        uid = player.hand[hand_index].uid
        if uid in player.exchange:
            player.exchange.remove(uid)
        return True

    def exchange_tiles(self, name: str) -> TurnResult:
        """
        Swap every marked tile for a fresh one from the bag.

        Each new tile is drawn before the old one goes back, so a tile cannot
        come straight back. With an empty bag marked tiles stay in hand. An
        exchange uses up the turn.
        """
        turn_number = self.turn_number + 1
        refusal = self._check_turn(name)
        if refusal:
            return TurnResult(
                player=name,
                turn_number=turn_number,
                action="EXCHANGE",
                valid=False,
                validation=refusal,
                error=refusal.errors[0].message,
            )

        player = self.current_player
        self._rollback(player)
        tiles_before = [t.letter for t in player.hand]

        swapped = 0
        for uid in player.exchange:
            index = next((i for i, t in enumerate(player.hand) if t.uid == uid), None)
            if index is None:
                continue
            new_tile = self.bag.draw()
            if new_tile is None:
                continue
            old_tile = player.hand[index]
            player.hand[index] = new_tile
            self.bag.put(old_tile)
            swapped += 1
        player.exchange.clear()
        player.turn_done = True
        logger.info("%s exchanged %d tile(s)", name, swapped)

        turn_result = TurnResult(
            player=name,
            turn_number=turn_number,
            action="EXCHANGE",
            tiles_before=tiles_before,
            tiles_after=[t.letter for t in player.hand],
            tiles_drawn=swapped,
        )
        self.record_turn(turn_result)
        return turn_result

    def mix_hand(self, name: str) -> bool:
        """Shuffle the current player's hand."""
        if self._check_turn(name):
            return False
        self.current_player.mix_tiles(self._rng)
        return True

    def advance_turn(self) -> Player:
        """
        End the current turn and hand over to the next player in seat order.

        Staged tiles and exchange marks are dropped. A player who neither
        played nor exchanged is recorded as passing.

        Returns:
            The player whose turn it now is
        """
        player = self.current_player
        self._rollback(player)
        player.exchange.clear()
        if not player.turn_done and not self.is_complete:
            self._record_pass(player)
        player.turn_count += 1

        self.current_index = (self.current_index + 1) % len(self.players)
        nxt = self.current_player
        player.change_turn()
        nxt.change_turn()
        logger.debug("Turn passes from %s to %s", player.name, nxt.name)
        return nxt

    def _record_pass(self, player: Player) -> TurnResult:
        turn_result = TurnResult(
            player=player.name,
            turn_number=self.turn_number + 1,
            action="PASS",
            tiles_before=[t.letter for t in player.hand],
            tiles_after=[t.letter for t in player.hand],
        )
        self.record_turn(turn_result)
        return turn_result

    def check_for_win(self) -> Optional[List[str]]:
        """
        Settle the game if it is over.

        The game ends once the bag is empty and some player has no tiles
        left. Every player then loses the points still in their hand, and the
        players sharing the top score win. Settling happens only once.

        Returns:
            Winner names, or None while the game goes on
        """
        if self.is_complete:
            return self.winners
        if not self.bag.is_empty():
            return None
        if not any(len(p.hand) == 0 for p in self.players):
            return None

        penalties = hand_penalties({p.name: p.hand for p in self.players})
        for player in self.players:
            player.change_score(penalties[player.name])

        self.winners = find_winners(self.scores())
        self.is_complete = True
        logger.info("Game over. Final scores %s, winners %s", self.scores(), self.winners)
        return self.winners

    def record_turn(self, turn_result: TurnResult) -> None:
        """Record a turn result in history."""
        self.turn_history.append(turn_result)
        self.turn_number += 1

    # ------------------------------------------------------------------
    # Scripted play

    def _hand_index(self, player: Player, letter: str, skip: Optional[set] = None) -> Optional[int]:
        for i, tile in enumerate(player.hand):
            if tile.letter == letter and (skip is None or tile.uid not in skip):
                return i
        return None

    def step(self, spec: TurnSpec) -> TurnResult:
        """
        Play one scripted turn for the current player, then advance.

        A play that cannot be staged or fails verification costs the player
        their turn. If the current player has already finished their turn the
        refusal comes back unrecorded and the game does not advance.

        Args:
            spec: The scripted turn

        Returns:
            TurnResult containing the turn outcome
        """
        if self.is_complete:
            raise ValueError("Game is already complete")

        player = self.current_player
        action: Action = spec.action

        refusal = self._check_turn(player.name)
        if refusal:
            return TurnResult(
                player=player.name,
                turn_number=self.turn_number + 1,
                action=action,
                valid=False,
                validation=refusal,
                error=refusal.errors[0].message,
            )

        if action == "PLAY":
            turn_result = self._scripted_play(player, spec)
            if not turn_result.valid:
                self.record_turn(turn_result)
                player.turn_done = True
        elif action == "EXCHANGE":
            marked = set()
            for letter in spec.exchange:
                index = self._hand_index(player, letter.upper(), skip=marked)
                if index is not None:
                    marked.add(player.hand[index].uid)
                    self.mark_exchange(player.name, index)
            turn_result = self.exchange_tiles(player.name)
        else:
            turn_result = self._record_pass(player)
            player.turn_done = True

        self.advance_turn()
        self.check_for_win()
        return turn_result

    def _scripted_play(self, player: Player, spec: TurnSpec) -> TurnResult:
        for placement in spec.play:
            index = self._hand_index(player, placement.letter)
            if index is None:
                result = ValidationResult.fail(
                    "TILE_NOT_IN_HAND", f"'{placement.letter}' is not in {player.name}'s hand"
                )
            else:
                result = self.stage_tile(player.name, index, placement.row, placement.col)
            if not result.valid:
                tiles_before = [t.letter for t in player.hand + player.moves]
                self._rollback(player)
                return TurnResult(
                    player=player.name,
                    turn_number=self.turn_number + 1,
                    action="PLAY",
                    valid=False,
                    validation=result,
                    tiles_before=tiles_before,
                    tiles_after=[t.letter for t in player.hand],
                    error=result.errors[0].message,
                )
        return self.submit(player.name)

    def run(
        self,
        turns: Optional[List[TurnSpec]] = None,
        on_turn: Optional[Callable[[TurnResult], None]] = None,
        verbose: bool = False,
    ) -> GameResult:
        """
        Play scripted turns until they run out or the game ends.

        Args:
            turns: Turns to play (defaults to the config's turns)
            on_turn: Optional callback called after each turn
            verbose: If True, print progress to stdout

        Returns:
            GameResult for the game so far
        """
        if turns is None:
            turns = self.config.turns

        if verbose:
            print(f"Starting game with {len(self.players)} players")
            print(f"Tiles in bag: {self.bag.remaining()}")
            print(f"{self.current_player.name} goes first")
            print("-" * 40)

        for spec in turns:
            if self.is_complete:
                break
            player = self.current_player
            turn_result = self.step(spec)

            if verbose:
                print(f"Turn {turn_result.turn_number}: {player.name} {turn_result.action}")
                if turn_result.error:
                    print(f"  rejected: {turn_result.error}")
                elif turn_result.action == "PLAY":
                    print(f"  words: {', '.join(turn_result.words) or '-'}")
                    print(f"  score: {turn_result.final_score} (deltas {turn_result.score_deltas})")
                    if turn_result.traps:
                        print(f"  traps triggered: {', '.join(turn_result.traps)}")

            if on_turn:
                on_turn(turn_result)

        if verbose:
            print("-" * 40)
            print(render_grid(self.grid))
            if self.is_complete:
                print(f"Winners: {', '.join(self.winners)}")

        return self.get_result()

    # ------------------------------------------------------------------
    # Reporting

    def get_state(self) -> Dict:
        """
        Get the current game state.

        Returns:
            Dictionary containing game state
        """
        return {
            "turn_number": self.turn_number,
            "current_player": self.current_player.name,
            "is_complete": self.is_complete,
            "winners": self.winners,
            "tiles_remaining": self.bag.remaining(),
            "board_empty": self.grid.is_board_empty(),
            "players": [p.get_state(reveal_hand=False) for p in self.players],
        }

    def get_result(self) -> GameResult:
        return GameResult(
            config=self.config,
            winners=self.winners,
            is_complete=self.is_complete,
            total_turns=self.turn_number,
            scores=self.scores(),
            turn_history=self.turn_history,
            board=self.board_snapshot(),
            tiles_remaining=self.bag.remaining(),
        )

    def save_result(self, path: str | Path) -> None:
        """
        Save the game result to a JSON file.

        Args:
            path: Path to save the result file
        """
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(mode="json", by_alias=True), f, indent=2, default=str)
