import random

import pytest

from dungeon_config import DungeonConfig
from dungeon_constants import GROWN_ROOM_TAG, SEED_ROOM_TAG
from dungeon_geometry import Direction, TilePos
from dungeon_layout import DungeonLayout
from dungeon_models import CellState
from region_carver import RegionCarver
from room_placement import RoomPlacer


def _carved_layout(config: DungeonConfig, seed: int) -> DungeonLayout:
    layout = DungeonLayout(config, rng=random.Random(seed))
    RegionCarver(config, layout.grid, layout.rng).carve()
    return layout


def _assert_doorways_reciprocal(layout: DungeonLayout) -> None:
    for room in layout.placed_rooms:
        for doorway in room.doorways:
            other = layout.placed_rooms[doorway.connecting_room]
            matches = [
                back
                for back in other.doorways
                if back.connecting_room == room.index
                and back.entrance == doorway.far_side
                and back.direction is doorway.direction.opposite()
            ]
            assert len(matches) == 1
            assert room.bounds.contains(doorway.entrance)
            assert other.bounds.contains(doorway.far_side)


@pytest.mark.parametrize("seed", [0, 3, 11, 29])
def test_rooms_cover_all_carved_cells_without_overlap(dungeon_config, seed):
    layout = _carved_layout(dungeon_config, seed)
    carved_cells = layout.grid.count(CellState.PROCESSED)

    placed = RoomPlacer(layout).place_rooms()

    rooms = layout.placed_rooms
    assert placed == len(rooms) >= 1
    assert rooms[0].tag == SEED_ROOM_TAG
    assert all(room.tag == GROWN_ROOM_TAG for room in rooms[1:])
    assert layout.grid.count(CellState.PROCESSED) == 0
    assert sum(room.bounds.area for room in rooms) == carved_cells
    for i, room in enumerate(rooms):
        assert room.index == i
        assert layout.is_in_bounds(room)
        assert room.bounds.width <= dungeon_config.max_room_width
        assert room.bounds.height <= dungeon_config.max_room_height
        for other in rooms[i + 1:]:
            assert not room.bounds.overlaps(other.bounds)
        for tile in room.bounds.tiles():
            assert layout.cell_at(*tile) is CellState.OCCUPIED
            assert layout.room_at(*tile) == i


@pytest.mark.parametrize("seed", [0, 5, 8])
def test_growth_builds_connected_tree_of_reciprocal_doorways(dungeon_config, seed):
    layout = _carved_layout(dungeon_config, seed)

    RoomPlacer(layout).place_rooms()

    _assert_doorways_reciprocal(layout)
    # Each grown room is wired to exactly one parent, so growth alone forms a tree.
    assert layout.doorway_count() == 2 * (len(layout.placed_rooms) - 1)
    for room in layout.placed_rooms:
        assert layout.shortest_distance(0, room) is not None


def test_child_corners_keep_entrance_on_leading_edge():
    layout = DungeonLayout(DungeonConfig(width=20, height=20), rng=random.Random(3))
    placer = RoomPlacer(layout)
    entrance = TilePos(10, 10)

    for direction in Direction:
        for _ in range(25):
            top_left, bot_right = placer._child_corners(entrance, direction, 3, 2)
            assert bot_right.x - top_left.x == 2
            assert bot_right.y - top_left.y == 1
            assert top_left.x <= entrance.x <= bot_right.x
            assert top_left.y <= entrance.y <= bot_right.y
            if direction is Direction.EAST:
                assert top_left.x == entrance.x
            elif direction is Direction.WEST:
                assert bot_right.x == entrance.x
            elif direction is Direction.SOUTH:
                assert top_left.y == entrance.y
            else:
                assert bot_right.y == entrance.y


def test_exhausted_placement_budget_falls_back_to_single_cell_room():
    config = DungeonConfig(width=3, height=1, percent_empty=0.0, max_room_width=1, max_room_height=1, max_placement_attempts=1)
    layout = DungeonLayout(config, rng=random.Random(0))
    RegionCarver(config, layout.grid, layout.rng).carve()

    placed = RoomPlacer(layout).place_rooms()

    assert placed == 3
    assert all(room.bounds.area == 1 for room in layout.placed_rooms)
    assert layout.grid.count(CellState.OCCUPIED) == 3


def test_extra_doorways_only_join_adjacent_unconnected_rooms():
    config = DungeonConfig(width=4, height=4, percent_empty=0.0, extra_doorway_chance=1.0)
    layout = DungeonLayout(config, rng=random.Random(0))
    # Four 2x2 rooms in a square, wired as a path 0-1-3-2.
    layout.place_room(TilePos(0, 0), TilePos(1, 1), "seed")
    layout.place_room(TilePos(2, 0), TilePos(3, 1), "room")
    layout.place_room(TilePos(0, 2), TilePos(1, 3), "room")
    layout.place_room(TilePos(2, 2), TilePos(3, 3), "room")
    layout.connect_rooms(0, 1, TilePos(1, 0), Direction.EAST)
    layout.connect_rooms(1, 3, TilePos(2, 1), Direction.SOUTH)
    layout.connect_rooms(3, 2, TilePos(2, 2), Direction.WEST)

    added = RoomPlacer(layout).add_extra_doorways()

    # Only rooms 0 and 2 were adjacent but unconnected; room 0 wires it first.
    assert added == 1
    assert layout.rooms_connected(0, 2)
    assert layout.rooms_connected(2, 0)
    assert not layout.rooms_connected(0, 3)
    _assert_doorways_reciprocal(layout)
    doorway = layout.placed_rooms[0].doorways[-1]
    assert doorway.direction is Direction.SOUTH
    assert doorway.entrance.y == 1


def test_extra_doorways_skipped_when_chance_is_zero(dungeon_config):
    dungeon_config.extra_doorway_chance = 0.0
    layout = _carved_layout(dungeon_config, 4)
    placer = RoomPlacer(layout)
    placer.place_rooms()
    doorways_before = layout.doorway_count()

    assert placer.add_extra_doorways() == 0
    assert layout.doorway_count() == doorways_before


def test_extra_doorways_add_at_most_one_per_room(dungeon_config):
    dungeon_config.extra_doorway_chance = 1.0
    layout = _carved_layout(dungeon_config, 6)
    placer = RoomPlacer(layout)
    placer.place_rooms()
    before = {room.index: len(room.doorways) for room in layout.placed_rooms}

    added = placer.add_extra_doorways()

    assert added <= len(layout.placed_rooms)
    assert layout.doorway_count() == sum(before.values()) + 2 * added
    _assert_doorways_reciprocal(layout)
