"""DungeonGenerator orchestrates carving and room placement for one pass."""

from __future__ import annotations

import logging
import random
from time import perf_counter
from typing import Callable, Optional

from dungeon_config import DungeonConfig
from dungeon_layout import DungeonLayout
from metrics import GenerationMetrics
from region_carver import RegionCarver
from room_placement import RoomPlacer

logger = logging.getLogger(__name__)


class DungeonGenerator:
    """Manages the overall process of generating a dungeon floor layout."""

    def __init__(self, config: DungeonConfig) -> None:
        self.config = config
        self.layout: Optional[DungeonLayout] = None
        self.metrics = GenerationMetrics() if config.collect_metrics else None

    def _run_phase(
        self,
        name: str,
        layout: DungeonLayout,
        func: Callable[[], int],
    ) -> int:
        if self.metrics is None:
            return func()

        rooms_before = len(layout.placed_rooms)
        doorways_before = layout.doorway_count()
        start = perf_counter()
        try:
            return func()
        finally:
            duration = perf_counter() - start
            self.metrics.record_phase_run(
                name,
                duration,
                len(layout.placed_rooms) - rooms_before,
                layout.doorway_count() - doorways_before,
            )

    def generate(
        self,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> DungeonLayout:
        """Build a fresh layout: carve empty space, place rooms, then add extra doorways.

        The random source is ``rng`` if given, otherwise one seeded with ``seed``
        or, failing that, ``config.random_seed``. With no seed at all a random one
        is picked and stored on the layout so the run can be reproduced.
        """
        if rng is None:
            if seed is None:
                seed = self.config.random_seed
            if seed is None:
                seed = random.randint(0, 1_000_000)
            rng = random.Random(seed)

        layout = DungeonLayout(self.config, rng=rng, seed=seed)
        self.layout = layout

        # Step 1: Carve empty regions, restarting until what remains is connected.
        carver = RegionCarver(self.config, layout.grid, layout.rng)
        layout.carve_attempts = self._run_phase("carve", layout, carver.carve)
        if self.metrics is not None:
            self.metrics.carve_attempts += layout.carve_attempts

        # Step 2: Place the seed room and grow outward over the carved territory.
        placer = RoomPlacer(layout)
        self._run_phase("place_rooms", layout, placer.place_rooms)

        # Step 3: Add a few extra doorways between rooms that already touch.
        self._run_phase("extra_doorways", layout, placer.add_extra_doorways)

        logger.info(
            "Generated %dx%d dungeon (seed=%s): %d rooms, %d doorways, %d carve round(s)",
            self.config.width,
            self.config.height,
            seed,
            len(layout.placed_rooms),
            layout.doorway_count(),
            layout.carve_attempts,
        )
        return layout
