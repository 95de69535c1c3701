"""
Main entry point for setting up and playing scripted word-placement games.

Usage:
    python -m src.main config.yaml
    python -m src.main config.yaml --output results/game.json --verbose
    python -m src.main --players Ana Ben --seed 7
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from .engine import GameConfig, ScrabbleGame, SetupError
from .utils.grid_visualizer import render_grid

# Exit status for unusable setup assets, before any game begins
SETUP_FAILURE = 2


def load_config(config_path: str) -> GameConfig:
    """
    Load a game configuration from a YAML file.

    Relative asset paths are resolved against the config file's directory.
    Raises SetupError if the file is missing or malformed.
    """
    path = Path(config_path)

    if not path.exists():
        raise SetupError(str(path), "config file not found")

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SetupError(str(path), f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise SetupError(str(path), "config must be a mapping")

    for key in ("ability_layout", "letter_values", "word_list"):
        if data.get(key):
            asset = Path(data[key])
            data[key] = asset if asset.is_absolute() else path.parent / asset

    try:
        return GameConfig(**data)
    except ValidationError as e:
        raise SetupError(str(path), str(e)) from e


def main():
    parser = argparse.ArgumentParser(
        description="Set up a word-placement game and play any scripted turns",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  players: [Ana, Ben]
  seed: 42
  special_tiles: true
  starting_player: Ana
  turns:
    - play:
        - {letter: C, row: 7, col: 6}
        - {letter: A, row: 7, col: 7}
        - {letter: T, row: 7, col: 8}
    - exchange: [Q, Z]
    - pass: true
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (not needed with --players)"
    )
    parser.add_argument(
        "--players",
        nargs="+",
        help="Player names for a quick game with default settings"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (overrides the config)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save the game result JSON"
    )
    parser.add_argument(
        "--viewer",
        help="Show the board as this player sees it (reveals their traps)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.config:
            config = load_config(args.config)
        elif args.players:
            config = GameConfig(players=args.players)
        else:
            print("Error: config file or --players required", file=sys.stderr)
            return 1

        if args.seed is not None:
            config = config.model_copy(update={"seed": args.seed})

        game = ScrabbleGame.create(config=config)
    except (SetupError, ValidationError) as e:
        print(f"Setup failed: {e}", file=sys.stderr)
        return SETUP_FAILURE

    try:
        result = game.run(verbose=args.verbose)
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        result = game.get_result()

    if args.output:
        game.save_result(args.output)
        if args.verbose:
            print(f"Results saved to: {args.output}")

    # Print summary
    print()
    print("=== Game Summary ===")
    print(f"Turns played: {result.total_turns}")
    print(f"Tiles in bag: {result.tiles_remaining}")
    for name, score in result.scores.items():
        marker = " <- to play" if name == game.current_player.name and not result.is_complete else ""
        print(f"  {name}: {score}{marker}")
    if result.is_complete:
        print(f"Winners: {', '.join(result.winners)}")
    print()
    print(render_grid(game.grid, viewer=args.viewer))

    return 0


if __name__ == "__main__":
    sys.exit(main())
