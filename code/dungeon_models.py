"""Core dataclasses used by the dungeon generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from dungeon_geometry import Direction, Rect, TilePos


class CellState(Enum):
    """Classification of a single grid cell."""
    UNCLASSIFIED = 0 # Initial state; not yet visited by a connectivity check.
    PROCESSED = 1 # Vacant and reached by the last connectivity check; available for rooms.
    EMPTY = 2 # Carved out; never part of a room.
    OCCUPIED = 3 # Belongs to a placed room.

    @property
    def is_vacant(self) -> bool:
        """True if a room or carved rectangle may still claim this cell."""
        return self in (CellState.UNCLASSIFIED, CellState.PROCESSED)


@dataclass(frozen=True)
class Doorway:
    """One side of a reciprocal connection between two adjacent rooms.

    ``entrance`` lies inside the owning room and ``direction`` points from it
    into ``connecting_room`` (an index into the layout's room list).
    """

    connecting_room: int
    entrance: TilePos
    direction: Direction

    @property
    def far_side(self) -> TilePos:
        """The matching entrance tile inside the connecting room."""
        return self.entrance.step(self.direction)


@dataclass
class Room:
    """Represents a rectangular room placed on the dungeon grid."""

    bounds: Rect
    tag: str
    index: int = -1
    doorways: List[Doorway] = field(default_factory=list)

    @property
    def top_left(self) -> TilePos:
        return self.bounds.top_left

    @property
    def bot_right(self) -> TilePos:
        return self.bounds.bot_right

    def is_connected_to(self, room_index: int) -> bool:
        return any(doorway.connecting_room == room_index for doorway in self.doorways)

