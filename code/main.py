#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from dungeon_config import DungeonConfig
from dungeon_constants import (
    EXTRA_DOORWAY_CHANCE,
    MAX_EMPTY_HEIGHT,
    MAX_EMPTY_WIDTH,
    MAX_ROOM_HEIGHT,
    MAX_ROOM_WIDTH,
    PERCENT_EMPTY,
)
from dungeon_generator import DungeonGenerator
from grid_renderer import print_grid, render_cells, render_rooms


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a carved room-and-doorway dungeon.")
    parser.add_argument("--width", type=int, default=16)
    parser.add_argument("--height", type=int, default=10)
    parser.add_argument("--percent-empty", type=float, default=PERCENT_EMPTY)
    parser.add_argument("--max-empty-width", type=int, default=MAX_EMPTY_WIDTH)
    parser.add_argument("--max-empty-height", type=int, default=MAX_EMPTY_HEIGHT)
    parser.add_argument("--max-room-width", type=int, default=MAX_ROOM_WIDTH)
    parser.add_argument("--max-room-height", type=int, default=MAX_ROOM_HEIGHT)
    parser.add_argument("--extra-doorway-chance", type=float, default=EXTRA_DOORWAY_CHANCE)
    parser.add_argument("--seed", type=int, default=None, help="Random seed; picked and printed when omitted.")
    parser.add_argument("--cells", action="store_true", help="Also print the raw cell classification grid.")
    parser.add_argument(
        "--distance",
        nargs=2,
        type=int,
        metavar=("ROOM_A", "ROOM_B"),
        help="Print the doorway distance between two room indices.",
    )
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = DungeonConfig(
        width=args.width,
        height=args.height,
        percent_empty=args.percent_empty,
        max_empty_width=args.max_empty_width,
        max_empty_height=args.max_empty_height,
        max_room_width=args.max_room_width,
        max_room_height=args.max_room_height,
        extra_doorway_chance=args.extra_doorway_chance,
        random_seed=args.seed,
    )

    seed = config.random_seed
    if seed is None:
        # Pick a random seed randomly and print it, so we can reproduce bugs by passing --seed next run.
        seed = random.randint(0, 1000000)
        config.random_seed = seed
    print(f"Using random seed {seed}")

    generator = DungeonGenerator(config)
    layout = generator.generate()

    if args.cells:
        print_grid(render_cells(layout.grid))
        print()
    print_grid(render_rooms(layout))
    print(f"{len(layout.placed_rooms)} rooms, {layout.doorway_count() // 2} doorway pairs")

    if args.distance:
        room_a, room_b = args.distance
        distance = layout.shortest_distance(room_a, room_b)
        if distance is None:
            print(f"Room {room_b} is unreachable from room {room_a}")
        else:
            print(f"Distance from room {room_a} to room {room_b}: {distance}")


if __name__ == "__main__":
    main()
