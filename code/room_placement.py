"""Room placement: seed room, outward growth, and doorway densification."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Tuple

from dungeon_constants import GROWN_ROOM_TAG, SEED_ROOM_TAG
from dungeon_geometry import CARDINAL_DIRECTIONS, Direction, TilePos
from dungeon_layout import DungeonLayout
from dungeon_models import CellState, Room

logger = logging.getLogger(__name__)


class RoomPlacer:
    """Fill the carved, connected territory of a layout with adjacent rooms.

    Expects the layout's grid to have been carved already: every cell is either
    ``EMPTY`` or ``PROCESSED``. When placement finishes, every ``PROCESSED``
    cell has become part of a room.
    """

    def __init__(self, layout: DungeonLayout) -> None:
        self.layout = layout
        self.config = layout.config
        self.grid = layout.grid
        self.rng = layout.rng

    def place_rooms(self) -> int:
        """Place the seed room and grow rooms from it; return the number of rooms placed."""
        seed_room = self.place_seed_room()
        if seed_room is None:
            return 0
        self.grow_from(seed_room)
        logger.info("Placed %d rooms", len(self.layout.placed_rooms))
        return len(self.layout.placed_rooms)

    def place_seed_room(self) -> Optional[Room]:
        """Sample random rectangles until one fits; fall back to a single vacant cell."""
        for _ in range(self.config.max_placement_attempts):
            top_left = TilePos(self.rng.randrange(self.grid.width), self.rng.randrange(self.grid.height))
            width, height = self._sample_room_size()
            bot_right = TilePos(top_left.x + width - 1, top_left.y + height - 1)
            if self.grid.can_place(top_left, bot_right):
                return self.layout.place_room(top_left, bot_right, SEED_ROOM_TAG)

        vacant = [pos for pos, cell in self.grid.iter_cells() if cell is CellState.PROCESSED]
        if not vacant:
            logger.warning("No carved cells available for a seed room")
            return None
        logger.debug("Seed sampling exhausted; using a single-cell seed room")
        cell = self.rng.choice(vacant)
        return self.layout.place_room(cell, cell, SEED_ROOM_TAG)

    def grow_from(self, seed_room: Room) -> int:
        """Grow rooms outward until no carved cell touches any room; return rooms added."""
        added = 0
        pending: Deque[Room] = deque([seed_room])
        while pending:
            room = pending.popleft()
            for child in self._grow(room):
                pending.append(child)
                added += 1
        return added

    def _grow(self, room: Room) -> List[Room]:
        children: List[Room] = []
        for direction in CARDINAL_DIRECTIONS:
            cells = list(self.layout.adjacent_cells(room, direction))
            self.rng.shuffle(cells)
            for cell in cells:
                # Earlier children may already have claimed this cell.
                if self.grid.cell_at(*cell) is not CellState.PROCESSED:
                    continue
                child = self._place_child(room, cell, direction)
                self.layout.connect_rooms(child, room, cell, direction.opposite())
                children.append(child)
        return children

    def _place_child(self, parent: Room, entrance: TilePos, direction: Direction) -> Room:
        for _ in range(self.config.max_placement_attempts):
            width, height = self._sample_room_size()
            top_left, bot_right = self._child_corners(entrance, direction, width, height)
            if self.grid.can_place(top_left, bot_right):
                return self.layout.place_room(top_left, bot_right, GROWN_ROOM_TAG)

        logger.debug(
            "Placement budget exhausted next to room %d at %s; using a single-cell room",
            parent.index,
            entrance.to_tuple(),
        )
        return self.layout.place_room(entrance, entrance, GROWN_ROOM_TAG)

    def _child_corners(
        self, entrance: TilePos, direction: Direction, width: int, height: int
    ) -> Tuple[TilePos, TilePos]:
        """Corners of a ``width`` x ``height`` room whose leading edge holds ``entrance``.

        The room extends away from the parent along ``direction`` and is shifted
        across it by a random offset within its span.
        """
        if direction.is_horizontal:
            offset = self.rng.randrange(height)
            top = entrance.y - offset
            left = entrance.x if direction is Direction.EAST else entrance.x - width + 1
        else:
            offset = self.rng.randrange(width)
            left = entrance.x - offset
            top = entrance.y if direction is Direction.SOUTH else entrance.y - height + 1
        return TilePos(left, top), TilePos(left + width - 1, top + height - 1)

    def _sample_room_size(self) -> Tuple[int, int]:
        return (
            self.rng.randint(1, self.config.max_room_width),
            self.rng.randint(1, self.config.max_room_height),
        )

    def add_extra_doorways(self) -> int:
        """Give some rooms one more doorway to an adjacent room they aren't connected to yet."""
        added = 0
        for room in self.layout.placed_rooms:
            if self.rng.random() >= self.config.extra_doorway_chance:
                continue
            if self._add_extra_doorway(room):
                added += 1
        logger.debug("Added %d extra doorways", added)
        return added

    def _add_extra_doorway(self, room: Room) -> bool:
        for direction, cell in self.layout.iter_adjacent_cells(room):
            neighbor = self.layout.room_at(*cell)
            if neighbor is None or neighbor == room.index:
                continue
            if room.is_connected_to(neighbor):
                continue
            self.layout.connect_rooms(room, neighbor, cell.step(direction.opposite()), direction)
            return True
        return False
