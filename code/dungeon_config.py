"""Configuration container for the carved dungeon generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from dungeon_constants import (
    EXTRA_DOORWAY_CHANCE,
    MAX_CARVE_ATTEMPTS,
    MAX_EMPTY_HEIGHT,
    MAX_EMPTY_WIDTH,
    MAX_PLACEMENT_ATTEMPTS,
    MAX_RECT_SAMPLES,
    MAX_ROOM_HEIGHT,
    MAX_ROOM_WIDTH,
    PERCENT_EMPTY,
)


class ConfigurationError(ValueError):
    """Raised when generation settings are invalid or provably unachievable."""


@dataclass
class DungeonConfig:
    """Aggregates all tunable parameters for dungeon generation."""

    width: int
    height: int

    # Fraction of the grid area carved out as permanently empty cells.
    percent_empty: float = PERCENT_EMPTY
    # Exclusive upper bound on the offset between corners of a carved rectangle.
    max_empty_width: int = MAX_EMPTY_WIDTH
    max_empty_height: int = MAX_EMPTY_HEIGHT
    # Inclusive upper bound on room extents.
    max_room_width: int = MAX_ROOM_WIDTH
    max_room_height: int = MAX_ROOM_HEIGHT
    # Chance per room of adding one extra doorway to an already-adjacent room.
    extra_doorway_chance: float = EXTRA_DOORWAY_CHANCE

    random_seed: Optional[int] = None
    collect_metrics: bool = False
    max_carve_attempts: int = MAX_CARVE_ATTEMPTS
    max_rect_samples: int = MAX_RECT_SAMPLES
    max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"DungeonConfig width and height must be positive, got {self.width}x{self.height}"
            )
        self.percent_empty = float(self.percent_empty)
        if not (0.0 <= self.percent_empty < 1.0):
            raise ConfigurationError(
                f"DungeonConfig percent_empty must lie in [0, 1), got {self.percent_empty}"
            )
        if self.max_empty_width <= 0 or self.max_empty_height <= 0:
            raise ConfigurationError("DungeonConfig max_empty_width and max_empty_height must be positive")
        if self.max_room_width <= 0 or self.max_room_height <= 0:
            raise ConfigurationError("DungeonConfig max_room_width and max_room_height must be positive")
        self.extra_doorway_chance = float(self.extra_doorway_chance)
        if not (0.0 <= self.extra_doorway_chance <= 1.0):
            raise ConfigurationError(
                f"DungeonConfig extra_doorway_chance must lie in [0, 1], got {self.extra_doorway_chance}"
            )
        if self.max_carve_attempts <= 0:
            raise ConfigurationError("DungeonConfig max_carve_attempts must be positive")
        if self.max_rect_samples <= 0:
            raise ConfigurationError("DungeonConfig max_rect_samples must be positive")
        if self.max_placement_attempts <= 0:
            raise ConfigurationError("DungeonConfig max_placement_attempts must be positive")
        if self.target_empty_area >= self.area:
            raise ConfigurationError(
                f"DungeonConfig percent_empty={self.percent_empty} leaves no cells for rooms "
                f"on a {self.width}x{self.height} grid"
            )

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def target_empty_area(self) -> int:
        """Number of cells the carver must turn empty (rounded down)."""
        return int(self.area * self.percent_empty)
