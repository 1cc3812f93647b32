"""Shared constants for the carved dungeon generator."""

from __future__ import annotations

RANDOM_SEED = None  # Set to a number for reproducible behavior (for debugging); set to None to produce different dungeon on every run.

# Default generation settings.
PERCENT_EMPTY = 0.35
MAX_EMPTY_WIDTH = 2
MAX_EMPTY_HEIGHT = 2
MAX_ROOM_WIDTH = 4
MAX_ROOM_HEIGHT = 3
EXTRA_DOORWAY_CHANCE = 0.25

# Retry budgets. Exhausting the carve budget is reported as a configuration error.
MAX_CARVE_ATTEMPTS = 500
MAX_RECT_SAMPLES = 2000
MAX_PLACEMENT_ATTEMPTS = 40 # After this many rejected samples a room shrinks to its single entrance cell.

SEED_ROOM_TAG = "seed"
GROWN_ROOM_TAG = "room"

# Console glyphs.
UNCLASSIFIED_CHAR = "~"
PROCESSED_CHAR = "O"
EMPTY_CHAR = "X"
OCCUPIED_CHAR = "R"
ROOM_CHARS = "OX/LNMW123456789"
DOORWAY_CHAR = "+"
VOID_CHAR = "."
