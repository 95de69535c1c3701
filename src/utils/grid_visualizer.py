from typing import Dict, List, Optional

from ..verifiers.grid import Grid
from ..verifiers.tiles import ABILITY_CODES, Tile, TileKind

ABILITY_LABELS: Dict[TileKind, str] = {kind: code for code, kind in ABILITY_CODES.items()}
EMPTY = " ."


def render_cell(tile: Optional[Tile], viewer: Optional[str] = None) -> str:
    """Two-character token for one cell as seen by ``viewer``."""
    if tile is None:
        return EMPTY
    if tile.is_ability:
        return ABILITY_LABELS[tile.kind]
    # Traps look like any other letter unless the viewer may know about them
    if tile.is_trap and tile.visible_to(viewer):
        return f"{tile.letter}*"
    return f" {tile.letter}"


def render_board(grid: Grid, viewer: Optional[str] = None) -> List[str]:
    """Render the board to one string per row."""
    return [
        ' '.join(render_cell(grid.get(row, col), viewer) for col in range(grid.size))
        for row in range(grid.size)
    ]


def render_grid(grid: Grid, viewer: Optional[str] = None) -> str:
    """Render the board with row and column numbers."""
    header = '   ' + ' '.join(f"{col:>2}" for col in range(grid.size))
    lines = [header]
    for row, line in enumerate(render_board(grid, viewer)):
        lines.append(f"{row:>2} {line}")
    return '\n'.join(lines)
