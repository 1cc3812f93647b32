"""Carves permanently empty rectangles out of the grid while keeping the rest connected."""

from __future__ import annotations

import logging
import random
from typing import Optional

from connectivity import all_reachable
from dungeon_config import ConfigurationError, DungeonConfig
from dungeon_geometry import Rect, TilePos
from dungeon_grid import DungeonGrid
from dungeon_models import CellState

logger = logging.getLogger(__name__)


class RegionCarver:
    """Generate-and-test carving of ``EMPTY`` cells.

    Each round resets the grid, scatters small empty rectangles until the
    target area is met, then certifies that the remaining cells form a single
    4-connected region. Failed rounds are discarded wholesale.
    """

    def __init__(self, config: DungeonConfig, grid: DungeonGrid, rng: random.Random) -> None:
        self.config = config
        self.grid = grid
        self.rng = rng

    def carve(self) -> int:
        """Carve the grid and return the number of rounds it took.

        Raises ``ConfigurationError`` once ``max_carve_attempts`` rounds fail.
        """
        target_area = self.config.target_empty_area
        for attempt in range(1, self.config.max_carve_attempts + 1):
            self.grid.reset()
            if not self._scatter_empty_rects(target_area):
                logger.debug("Carve round %d ran out of rectangle samples", attempt)
                continue
            if not all_reachable(self.grid):
                continue
            if self.grid.count(CellState.PROCESSED) == 0:
                logger.debug("Carve round %d left no vacant cells", attempt)
                continue
            logger.debug("Carved %d empty cells in %d round(s)", self.grid.count(CellState.EMPTY), attempt)
            return attempt

        raise ConfigurationError(
            f"Could not carve a connected layout after {self.config.max_carve_attempts} rounds: "
            f"percent_empty={self.config.percent_empty} is too high for "
            f"max_empty_width={self.config.max_empty_width}, "
            f"max_empty_height={self.config.max_empty_height} "
            f"on a {self.config.width}x{self.config.height} grid"
        )

    def _scatter_empty_rects(self, target_area: int) -> bool:
        """Fill empty rectangles until ``target_area`` is reached; False if sampling gives up."""
        carved_area = 0
        while carved_area < target_area:
            bounds = self._sample_empty_rect()
            if bounds is None:
                return False
            self.grid.fill_rect(bounds, CellState.EMPTY)
            carved_area += bounds.area
        return True

    def _sample_empty_rect(self) -> Optional[Rect]:
        for _ in range(self.config.max_rect_samples):
            # Offsets are drawn with an exclusive upper bound, so extents never exceed max_empty_*.
            offset_x = self.rng.randrange(self.config.max_empty_width)
            offset_y = self.rng.randrange(self.config.max_empty_height)
            top_left = TilePos(self.rng.randrange(self.grid.width), self.rng.randrange(self.grid.height))
            bot_right = TilePos(top_left.x + offset_x, top_left.y + offset_y)
            if self.grid.can_place(top_left, bot_right):
                return Rect.from_corners(top_left, bot_right)
        return None
