"""Geometry helpers for working with grid cells, directions, and rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class Direction(Enum):
    """Cardinal directions with unit vectors on the tile grid."""

    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def is_horizontal(self) -> bool:
        """True for EAST/WEST, i.e. movement along the x axis."""
        return self.dx != 0

    def opposite(self) -> Direction:
        return Direction.from_tuple((-self.dx, -self.dy))

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> Direction:
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Unsupported direction {value}") from exc


# Fixed side order used when scanning around a room.
CARDINAL_DIRECTIONS = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


@dataclass(frozen=True, order=True)
class TilePos:
    """Integer tile coordinate."""

    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y

    def step(self, direction: Direction, distance: int = 1) -> TilePos:
        """Return the tile ``distance`` steps away along ``direction``."""
        return TilePos(self.x + direction.dx * distance, self.y + direction.dy * distance)

    def to_tuple(self) -> Tuple[int, int]:
        return self.x, self.y

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> TilePos:
        return cls(*value)


@dataclass(frozen=True)
class Rect:
    """Immutable axis-aligned rectangle using integer tile coordinates."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_corners(cls, top_left: TilePos, bot_right: TilePos) -> Rect:
        """Build a rect from inclusive top-left and bottom-right corners."""
        return cls(
            top_left.x,
            top_left.y,
            bot_right.x - top_left.x + 1,
            bot_right.y - top_left.y + 1,
        )

    @property
    def max_x(self) -> int:
        """Right edge (exclusive)."""
        return self.x + self.width

    @property
    def max_y(self) -> int:
        """Bottom edge (exclusive)."""
        return self.y + self.height

    @property
    def top_left(self) -> TilePos:
        return TilePos(self.x, self.y)

    @property
    def bot_right(self) -> TilePos:
        """Bottom-right corner (inclusive)."""
        return TilePos(self.max_x - 1, self.max_y - 1)

    @property
    def area(self) -> int:
        return self.width * self.height

    def overlaps(self, other: Rect) -> bool:
        """Return True when the interior of this rect intersects another rect."""
        if self.max_x <= other.x or other.max_x <= self.x:
            return False
        if self.max_y <= other.y or other.max_y <= self.y:
            return False
        return True

    def contains(self, point: TilePos) -> bool:
        """Return True if the provided tile lies inside this rect."""
        return self.x <= point.x < self.max_x and self.y <= point.y < self.max_y

    def tiles(self) -> Iterator[TilePos]:
        """Iterate covered tiles row by row."""
        for ty in range(self.y, self.max_y):
            for tx in range(self.x, self.max_x):
                yield TilePos(tx, ty)

    def border_tiles(self, direction: Direction) -> Tuple[TilePos, ...]:
        """Return the tiles one step outside this rect on the ``direction`` side."""
        if direction is Direction.NORTH:
            return tuple(TilePos(tx, self.y - 1) for tx in range(self.x, self.max_x))
        if direction is Direction.SOUTH:
            return tuple(TilePos(tx, self.max_y) for tx in range(self.x, self.max_x))
        if direction is Direction.WEST:
            return tuple(TilePos(self.x - 1, ty) for ty in range(self.y, self.max_y))
        if direction is Direction.EAST:
            return tuple(TilePos(self.max_x, ty) for ty in range(self.y, self.max_y))
        raise AssertionError(f"Unhandled direction {direction}")

    def to_tuple(self) -> Tuple[int, int, int, int]:
        """Return the rect as an ``(x, y, width, height)`` tuple."""
        return self.x, self.y, self.width, self.height
