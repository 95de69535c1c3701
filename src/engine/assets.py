"""
Parsers for the setup assets: ability layout, letter distribution, word list.

Any malformed asset raises ``SetupError``; there is no partial recovery.
"""

import logging
import random
import re
from pathlib import Path
from typing import List, Optional

from ..verifiers.grid import BOARD_SIZE
from ..verifiers.lexicon import Lexicon
from ..verifiers.models import Location
from ..verifiers.tiles import (
    ABILITY_CODES,
    TRAP_KINDS,
    Tile,
    ability_tile,
    normal_tile,
    trap_tile,
)

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_ABILITY_LAYOUT = DATA_DIR / "ability.txt"
DEFAULT_LETTER_VALUES = DATA_DIR / "values.txt"
DEFAULT_WORD_LIST = DATA_DIR / "dictionary.txt"

EMPTY_CELL = "--"
SPECIAL_TILES_ALLOWED = 15

# Fixed order so seeded games pick the same trap kinds
_TRAP_ORDER = sorted(TRAP_KINDS, key=lambda kind: kind.value)

_VALUES_LINE = re.compile(r'^(\S+) (\S+) (\S+)$')


class SetupError(ValueError):
    """A setup asset could not be parsed."""

    def __init__(self, source: str, message: str, line: Optional[int] = None):
        where = f"{source}:{line}" if line is not None else source
        super().__init__(f"{where}: {message}")
        self.source = source
        self.line = line


def _lines(text: str) -> List[str]:
    # Trailing blank lines are tolerated, interior ones are not
    return text.rstrip("\n").split("\n") if text.strip() else []


def parse_ability_layout(text: str, source: str = "ability.txt") -> List[Tile]:
    """
    Parse a board layout of 15 lines of 15 tokens (TW, DW, TL, DL or --).

    Returns:
        The ability tiles, each already carrying its board location
    """
    lines = _lines(text)
    if len(lines) != BOARD_SIZE:
        raise SetupError(source, f"expected {BOARD_SIZE} lines, found {len(lines)}")

    abilities: List[Tile] = []
    for row, line in enumerate(lines):
        tokens = line.strip().split(" ")
        if len(tokens) != BOARD_SIZE:
            raise SetupError(source, f"expected {BOARD_SIZE} tokens, found {len(tokens)}", line=row + 1)
        for col, token in enumerate(tokens):
            if token == EMPTY_CELL:
                continue
            kind = ABILITY_CODES.get(token)
            if kind is None:
                raise SetupError(source, f"'{token}' is not a valid ability tile value", line=row + 1)
            abilities.append(ability_tile(kind, Location(row, col)))
    return abilities


def parse_letter_values(text: str, source: str = "values.txt") -> List[Tile]:
    """
    Parse ``<letter> <count> <points>`` lines into the initial bag contents.

    Returns:
        ``count`` normal tiles for every line
    """
    tiles: List[Tile] = []
    for number, line in enumerate(_lines(text), start=1):
        match = _VALUES_LINE.match(line.strip())
        if not match:
            raise SetupError(source, "<letter> <amount> <points> parse failed", line=number)
        letter, amount, points = match.groups()
        if not re.fullmatch(r'[A-Z]', letter):
            raise SetupError(source, f"{letter} is not an uppercase letter", line=number)
        try:
            amount_value = int(amount)
            points_value = int(points)
        except ValueError:
            raise SetupError(source, "amount/points must be integers", line=number) from None
        if amount_value < 0 or points_value < 0:
            raise SetupError(source, "amount/points must be >= 0", line=number)
        tiles.extend(normal_tile(letter, points_value) for _ in range(amount_value))
    return tiles


def parse_word_list(text: str) -> Lexicon:
    return Lexicon.from_text(text)


def _read(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SetupError(str(path), f"cannot read asset: {e.strerror or e}") from e


def load_ability_layout(path: Optional[Path] = None) -> List[Tile]:
    path = Path(path or DEFAULT_ABILITY_LAYOUT)
    abilities = parse_ability_layout(_read(path), source=path.name)
    logger.debug("Loaded %d ability tiles from %s", len(abilities), path)
    return abilities


def load_letter_values(path: Optional[Path] = None) -> List[Tile]:
    path = Path(path or DEFAULT_LETTER_VALUES)
    tiles = parse_letter_values(_read(path), source=path.name)
    logger.debug("Loaded %d letter tiles from %s", len(tiles), path)
    return tiles


def load_word_list(path: Optional[Path] = None) -> Lexicon:
    path = Path(path or DEFAULT_WORD_LIST)
    lexicon = parse_word_list(_read(path))
    logger.debug("Loaded %d words from %s", len(lexicon), path)
    return lexicon


def add_special_tiles(
    tiles: List[Tile],
    rng: random.Random,
    count: int = SPECIAL_TILES_ALLOWED,
) -> List[Tile]:
    """
    Turn ``count`` random normal tiles of the pool into traps, in place.

    Each trap keeps the letter and points of the tile it replaces and gets a
    uniformly chosen trap kind.

    Returns:
        The traps that were created
    """
    candidates = [i for i, tile in enumerate(tiles) if tile.is_normal]
    count = min(count, len(candidates))
    traps: List[Tile] = []
    for index in rng.sample(candidates, count):
        old = tiles[index]
        trap = trap_tile(rng.choice(_TRAP_ORDER), old.letter, old.points)
        tiles[index] = trap
        traps.append(trap)
    logger.debug("Hid %d trap tiles in the letter pool", len(traps))
    return traps
