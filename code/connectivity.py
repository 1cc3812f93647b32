"""Flood-fill certification that all vacant carved territory forms one region."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Optional

from dungeon_geometry import CARDINAL_DIRECTIONS, TilePos
from dungeon_grid import DungeonGrid
from dungeon_models import CellState

logger = logging.getLogger(__name__)


def count_reachable(grid: DungeonGrid, x: int, y: int) -> int:
    """Flood fill from ``(x, y)`` and return the number of cells relabeled.

    A cell is counted, and relabeled ``PROCESSED``, only if it is currently
    ``UNCLASSIFIED``; the fill spreads 4-directionally.
    """
    if not grid.in_bounds(x, y) or grid.cell_at(x, y) is not CellState.UNCLASSIFIED:
        return 0

    grid.set_cell(x, y, CellState.PROCESSED)
    reached = 1
    frontier: Deque[TilePos] = deque([TilePos(x, y)])
    while frontier:
        current = frontier.pop()
        for direction in CARDINAL_DIRECTIONS:
            neighbor = current.step(direction)
            if not grid.in_bounds(*neighbor):
                continue
            if grid.cell_at(*neighbor) is not CellState.UNCLASSIFIED:
                continue
            grid.set_cell(neighbor.x, neighbor.y, CellState.PROCESSED)
            reached += 1
            frontier.append(neighbor)
    return reached


def all_reachable(grid: DungeonGrid) -> bool:
    """Return True if every ``UNCLASSIFIED`` cell is reachable from every other.

    On success all of those cells are left ``PROCESSED``. On failure the grid
    is partially relabeled and must be reset before retrying.
    """
    total_unclassified = 0
    start: Optional[TilePos] = None
    for pos, cell in grid.iter_cells():
        if cell is CellState.UNCLASSIFIED:
            start = pos
            total_unclassified += 1

    if start is None:
        return True

    reached = count_reachable(grid, start.x, start.y)
    if reached != total_unclassified:
        logger.debug(
            "Connectivity check failed: reached %d of %d vacant cells", reached, total_unclassified
        )
        return False
    return True
