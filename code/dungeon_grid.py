"""Cell-state grid shared by the region carver and the room placer."""

from __future__ import annotations

from typing import Iterator, List, Tuple

from dungeon_geometry import Rect, TilePos
from dungeon_models import CellState

GridSnapshot = Tuple[Tuple[CellState, ...], ...]


class DungeonGrid:
    """Owns the ``width`` x ``height`` array of cell states.

    Rows are indexed by ``y``; all rectangle arguments use inclusive corners.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells: List[List[CellState]] = [
            [CellState.UNCLASSIFIED for _ in range(width)] for _ in range(height)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> CellState:
        return self._cells[y][x]

    def set_cell(self, x: int, y: int, state: CellState) -> None:
        self._cells[y][x] = state

    def fill(self, top_left: TilePos, bot_right: TilePos, state: CellState) -> None:
        """Set every cell of the inclusive rectangle; callers validate with ``can_place``."""
        for y in range(top_left.y, bot_right.y + 1):
            row = self._cells[y]
            for x in range(top_left.x, bot_right.x + 1):
                row[x] = state

    def fill_rect(self, bounds: Rect, state: CellState) -> None:
        self.fill(bounds.top_left, bounds.bot_right, state)

    def can_place(self, top_left: TilePos, bot_right: TilePos) -> bool:
        """Return True if the rectangle is in bounds and every covered cell is still vacant."""
        if top_left.x > bot_right.x or top_left.y > bot_right.y:
            return False
        if not (self.in_bounds(*top_left) and self.in_bounds(*bot_right)):
            return False
        for y in range(top_left.y, bot_right.y + 1):
            row = self._cells[y]
            for x in range(top_left.x, bot_right.x + 1):
                if not row[x].is_vacant:
                    return False
        return True

    def reset(self) -> None:
        """Return every cell to ``UNCLASSIFIED``."""
        self.fill(TilePos(0, 0), TilePos(self.width - 1, self.height - 1), CellState.UNCLASSIFIED)

    def count(self, state: CellState) -> int:
        return sum(1 for row in self._cells for cell in row if cell is state)

    def iter_cells(self) -> Iterator[Tuple[TilePos, CellState]]:
        for y, row in enumerate(self._cells):
            for x, cell in enumerate(row):
                yield TilePos(x, y), cell

    def snapshot(self) -> GridSnapshot:
        """Immutable copy of the cell states, row-major."""
        return tuple(tuple(row) for row in self._cells)
