"""Render the dungeon state to an ASCII grid."""

from __future__ import annotations

from typing import Dict, List

from dungeon_constants import (
    DOORWAY_CHAR,
    EMPTY_CHAR,
    OCCUPIED_CHAR,
    PROCESSED_CHAR,
    ROOM_CHARS,
    UNCLASSIFIED_CHAR,
    VOID_CHAR,
)
from dungeon_grid import DungeonGrid
from dungeon_layout import DungeonLayout
from dungeon_models import CellState

CELL_CHARS: Dict[CellState, str] = {
    CellState.UNCLASSIFIED: UNCLASSIFIED_CHAR,
    CellState.PROCESSED: PROCESSED_CHAR,
    CellState.EMPTY: EMPTY_CHAR,
    CellState.OCCUPIED: OCCUPIED_CHAR,
}


def render_cells(grid: DungeonGrid) -> List[str]:
    """One string per row showing the raw classification of every cell."""
    return [
        "".join(CELL_CHARS[grid.cell_at(x, y)] for x in range(grid.width))
        for y in range(grid.height)
    ]


def render_rooms(layout: DungeonLayout) -> List[str]:
    """Draw each room with its own glyph and overlay doorway entrances."""
    rows = [[VOID_CHAR for _ in range(layout.width)] for _ in range(layout.height)]
    for room in layout.placed_rooms:
        room_char = ROOM_CHARS[room.index % len(ROOM_CHARS)]
        for tile in room.bounds.tiles():
            rows[tile.y][tile.x] = room_char
    for room in layout.placed_rooms:
        for doorway in room.doorways:
            rows[doorway.entrance.y][doorway.entrance.x] = DOORWAY_CHAR
    return ["".join(row) for row in rows]


def print_grid(rows: List[str], horizontal_sep: str = "") -> None:
    """Prints the ASCII grid to the console."""
    for row in rows:
        print(horizontal_sep.join(row))
