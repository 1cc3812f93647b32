"""Data container for the state of one generation pass."""

from __future__ import annotations

import random
from collections import deque
from typing import Deque, Dict, List, Optional, Set, Tuple, Union

import networkx as nx

from dungeon_config import DungeonConfig
from dungeon_geometry import CARDINAL_DIRECTIONS, Direction, Rect, TilePos
from dungeon_grid import DungeonGrid, GridSnapshot
from dungeon_models import CellState, Doorway, Room
from spatial_index import SpatialIndex

RoomRef = Union[Room, int]


class DungeonLayout:
    """Stores the mutable state for a dungeon layout.

    One layout is built per generation pass: it owns the cell grid, the
    append-only room list (the dungeon graph's nodes, in placement order) and
    the random source used to build them.
    """

    def __init__(
        self,
        config: DungeonConfig,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.grid = DungeonGrid(config.width, config.height)
        self.placed_rooms: List[Room] = []
        self.spatial_index = SpatialIndex()
        self.carve_attempts = 0
        self._graph_distance_cache: Dict[Tuple[int, int], Optional[int]] = {}

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def cell_at(self, x: int, y: int) -> CellState:
        return self.grid.cell_at(x, y)

    def cell_states(self) -> GridSnapshot:
        return self.grid.snapshot()

    def place_room(self, top_left: TilePos, bot_right: TilePos, tag: str) -> Room:
        """Claim the rectangle for a new room and append it to the graph."""
        if not self.grid.can_place(top_left, bot_right):
            raise ValueError(
                f"Cannot place room at {top_left.to_tuple()}-{bot_right.to_tuple()}: out of bounds or not vacant"
            )
        room = Room(bounds=Rect.from_corners(top_left, bot_right), tag=tag)
        self.grid.fill(top_left, bot_right, CellState.OCCUPIED)
        self.register_room(room)
        return room

    def register_room(self, room: Room) -> None:
        self.placed_rooms.append(room)
        room_index = len(self.placed_rooms) - 1
        room.index = room_index
        self.spatial_index.add_room(room_index, room)
        self._invalidate_graph_cache()

    def room_at(self, x: int, y: int) -> Optional[int]:
        return self.spatial_index.get_room_at(TilePos(x, y))

    def is_in_bounds(self, room: Room) -> bool:
        """True if every tile of ``room`` lies on the grid."""
        bounds = room.bounds
        return (
            0 <= bounds.x
            and 0 <= bounds.y
            and bounds.max_x <= self.config.width
            and bounds.max_y <= self.config.height
        )

    def adjacent_cells(self, room: RoomRef, direction: Direction) -> Tuple[TilePos, ...]:
        """In-bounds tiles one step outside ``room`` on the ``direction`` side."""
        bounds = self.placed_rooms[self._normalize_room(room)].bounds
        return tuple(tile for tile in bounds.border_tiles(direction) if self.grid.in_bounds(*tile))

    def iter_adjacent_cells(self, room: RoomRef) -> List[Tuple[Direction, TilePos]]:
        """All in-bounds tiles around ``room`` with the side they lie on, sides in fixed order."""
        return [
            (direction, tile)
            for direction in CARDINAL_DIRECTIONS
            for tile in self.adjacent_cells(room, direction)
        ]

    def connect_rooms(
        self,
        room_a: RoomRef,
        room_b: RoomRef,
        entrance_a: TilePos,
        direction: Direction,
    ) -> Tuple[Doorway, Doorway]:
        """Record a reciprocal doorway pair between two adjacent rooms.

        ``entrance_a`` is a tile of ``room_a``; stepping once along ``direction``
        must land inside ``room_b``.
        """
        idx_a = self._normalize_room(room_a)
        idx_b = self._normalize_room(room_b)
        if idx_a == idx_b:
            raise ValueError(f"Cannot connect room {idx_a} to itself")
        first = self.placed_rooms[idx_a]
        second = self.placed_rooms[idx_b]
        if not first.bounds.contains(entrance_a):
            raise ValueError(f"Entrance {entrance_a.to_tuple()} is not inside room {idx_a}")
        entrance_b = entrance_a.step(direction)
        if not second.bounds.contains(entrance_b):
            raise ValueError(
                f"Room {idx_b} is not adjacent to {entrance_a.to_tuple()} facing {direction.name}"
            )

        doorway_a = Doorway(connecting_room=idx_b, entrance=entrance_a, direction=direction)
        doorway_b = Doorway(connecting_room=idx_a, entrance=entrance_b, direction=direction.opposite())
        first.doorways.append(doorway_a)
        second.doorways.append(doorway_b)
        self._invalidate_graph_cache()
        return doorway_a, doorway_b

    def rooms_connected(self, room_a: RoomRef, room_b: RoomRef) -> bool:
        idx_a = self._normalize_room(room_a)
        idx_b = self._normalize_room(room_b)
        return self.placed_rooms[idx_a].is_connected_to(idx_b)

    def doorway_count(self) -> int:
        return sum(len(room.doorways) for room in self.placed_rooms)

    def shortest_distance(self, start: RoomRef, target: RoomRef) -> Optional[int]:
        """Breadth-first doorway distance between two rooms; None if unreachable."""
        idx_start = self._normalize_room(start)
        idx_target = self._normalize_room(target)
        cache_key = self._graph_distance_cache_key(idx_start, idx_target)
        if cache_key in self._graph_distance_cache:
            return self._graph_distance_cache[cache_key]
        if idx_start == idx_target:
            self._graph_distance_cache[cache_key] = 0
            return 0

        visited: Set[int] = {idx_start}
        queue: Deque[Tuple[int, int]] = deque([(idx_start, 0)])

        result: Optional[int] = None
        while queue:
            current, distance = queue.popleft()
            if current == idx_target:
                result = distance
                break
            for doorway in self.placed_rooms[current].doorways:
                neighbor = doorway.connecting_room
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                queue.append((neighbor, distance + 1))

        self._graph_distance_cache[cache_key] = result
        return result

    def to_networkx(self) -> nx.Graph:
        """Undirected room graph; nodes are room indices carrying ``tag`` and ``bounds``."""
        graph = nx.Graph()
        for room in self.placed_rooms:
            graph.add_node(room.index, tag=room.tag, bounds=room.bounds.to_tuple())
        for room in self.placed_rooms:
            for doorway in room.doorways:
                graph.add_edge(room.index, doorway.connecting_room)
        return graph

    def _graph_distance_cache_key(self, idx_a: int, idx_b: int) -> Tuple[int, int]:
        # Doorways always come in pairs, so distances are symmetric.
        return (idx_a, idx_b) if idx_a <= idx_b else (idx_b, idx_a)

    def _normalize_room(self, room: RoomRef) -> int:
        if isinstance(room, Room):
            idx = room.index
            if idx < 0 or idx >= len(self.placed_rooms) or self.placed_rooms[idx] is not room:
                raise ValueError("Room does not belong to this layout")
            return idx
        if isinstance(room, bool) or not isinstance(room, int):
            raise TypeError("Rooms must be given as Room instances or integer indices")
        if not (0 <= room < len(self.placed_rooms)):
            raise IndexError(f"Room index {room} out of range")
        return room

    def _invalidate_graph_cache(self) -> None:
        self._graph_distance_cache.clear()
