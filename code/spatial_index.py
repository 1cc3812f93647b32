"""Spatial index mapping occupied tiles back to the room that owns them."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Dict, Optional

from dungeon_geometry import TilePos
from dungeon_models import Room


class SpatialIndex:
    """Caches tile occupancy to accelerate room lookups."""

    def __init__(self) -> None:
        self._tile_to_room: Dict[TilePos, int] = {}

    def add_room(self, room_index: int, room: Room) -> None:
        """Record all tiles occupied by ``room`` under ``room_index``."""
        for tile in self._iter_room_tiles(room):
            owner = self._tile_to_room.get(tile)
            if owner is not None and owner != room_index:
                raise ValueError(
                    f"Tile {tile.to_tuple()} already belongs to room {owner}, cannot assign to room {room_index}"
                )
            self._tile_to_room[tile] = room_index

    def get_room_at(self, tile: TilePos) -> Optional[int]:
        """Return the room index occupying ``tile`` if any."""
        return self._tile_to_room.get(tile)

    def __len__(self) -> int:
        return len(self._tile_to_room)

    @staticmethod
    def _iter_room_tiles(room: Room) -> Iterator[TilePos]:
        return room.bounds.tiles()

