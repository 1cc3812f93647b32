import random
import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
CODE_DIR = ROOT_DIR / "code"
if str(CODE_DIR) not in sys.path:
    sys.path.insert(0, str(CODE_DIR))

from dungeon_config import DungeonConfig
from dungeon_geometry import Direction, TilePos
from dungeon_grid import DungeonGrid
from dungeon_layout import DungeonLayout
from dungeon_models import CellState


@pytest.fixture
def dungeon_config() -> DungeonConfig:
    return DungeonConfig(
        width=10,
        height=10,
        percent_empty=0.25,
        max_empty_width=3,
        max_empty_height=2,
        max_room_width=3,
        max_room_height=3,
    )


@pytest.fixture
def dungeon_layout(dungeon_config: DungeonConfig) -> DungeonLayout:
    return DungeonLayout(dungeon_config, rng=random.Random(0))


@pytest.fixture
def make_grid() -> Callable[..., DungeonGrid]:
    """Build a grid from rows of ``.`` (unclassified) and ``#`` (empty) characters."""

    def _make_grid(rows: Iterable[str]) -> DungeonGrid:
        rows = list(rows)
        grid = DungeonGrid(len(rows[0]), len(rows))
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                if char == "#":
                    grid.set_cell(x, y, CellState.EMPTY)
        return grid

    return _make_grid


@pytest.fixture
def make_room_chain() -> Callable[..., DungeonLayout]:
    """Place single-cell rooms along row 0 and connect each one to the next."""

    def _make_room_chain(length: int, *, width: int = 10, height: int = 3) -> DungeonLayout:
        layout = DungeonLayout(DungeonConfig(width=width, height=height, percent_empty=0.0))
        for x in range(length):
            cell = TilePos(x, 0)
            layout.place_room(cell, cell, "room")
        for x in range(length - 1):
            layout.connect_rooms(x, x + 1, TilePos(x, 0), Direction.EAST)
        return layout

    return _make_room_chain

