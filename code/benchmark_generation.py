#!/usr/bin/env python3

# This file performs multiple runs of dungeon generation, collecting and reporting metrics.
# Used for testing both performance of the algorithm and quality of resulting dungeons.

from __future__ import annotations

import argparse
import datetime
from dataclasses import asdict, dataclass
import json
import math
import random
import time
from typing import Any, Dict, List, Optional

import networkx as nx

from dungeon_config import DungeonConfig
from dungeon_generator import DungeonGenerator
from dungeon_layout import DungeonLayout

DEFAULT_CONFIG_KWARGS = dict(
    width=30,
    height=20,
    percent_empty=0.2,
    max_empty_width=3,
    max_empty_height=2,
    max_room_width=4,
    max_room_height=3,
    extra_doorway_chance=0.25,
    collect_metrics=True,
)

PERCENTILES = [1.0, 5.0] + [float(value) for value in range(10, 100, 10)] + [99.0]
# Number of random room pairs per run whose BFS distance is checked against networkx.
DISTANCE_SAMPLES = 20


def build_config(seed: int, **overrides: Any) -> DungeonConfig:
    kwargs = dict(DEFAULT_CONFIG_KWARGS)
    kwargs.update(overrides)
    return DungeonConfig(random_seed=seed, **kwargs)  # type: ignore[arg-type]


@dataclass
class GenerationRunResult:
    seed: int
    duration: float
    total_rooms: int
    total_doorway_pairs: int
    carve_attempts: int
    occupied_fraction: float
    cycle_count: int
    largest_component_fraction: float
    graph_diameter: int
    distance_mismatches: int
    phase_metrics: Dict[str, Dict[str, float | int]]


def percentile(values: List[float], pct: float) -> float:
    if not values:
        return float("nan")
    if pct <= 0:
        return min(values)
    if pct >= 100:
        return max(values)
    ordered = sorted(values)
    rank = (len(ordered) - 1) * (pct / 100.0)
    lower = math.floor(rank)
    upper = math.ceil(rank)
    if lower == upper:
        return ordered[int(rank)]
    lower_value = ordered[lower]
    upper_value = ordered[upper]
    fraction = rank - lower
    return lower_value + (upper_value - lower_value) * fraction


def format_seconds(value: float) -> str:
    if value >= 1.0:
        return f"{value:.3f}s"
    return f"{value * 1000:.1f}ms"


def count_distance_mismatches(layout: DungeonLayout, graph: nx.Graph, rng: random.Random) -> int:
    """Compare BFS doorway distances with networkx on random room pairs."""
    room_count = len(layout.placed_rooms)
    if room_count == 0:
        return 0
    mismatches = 0
    for _ in range(DISTANCE_SAMPLES):
        room_a = rng.randrange(room_count)
        room_b = rng.randrange(room_count)
        try:
            expected: Optional[int] = nx.shortest_path_length(graph, room_a, room_b)
        except nx.NetworkXNoPath:
            expected = None
        if layout.shortest_distance(room_a, room_b) != expected:
            mismatches += 1
    return mismatches


def run_single_generation(seed: int, **config_overrides: Any) -> GenerationRunResult:
    """Run one dungeon generation with the provided seed and collect metrics."""
    config = build_config(seed, **config_overrides)
    generator = DungeonGenerator(config)

    start = time.perf_counter()
    layout = generator.generate()
    end = time.perf_counter()

    total_rooms = len(layout.placed_rooms)
    occupied_cells = sum(room.bounds.area for room in layout.placed_rooms)

    graph = layout.to_networkx()
    cycle_count = len(nx.cycle_basis(graph))

    largest_component_fraction = 0.0
    graph_diameter = 0
    if graph.number_of_nodes() > 0:
        largest_component_nodes = max(nx.connected_components(graph), key=len)
        largest_component_fraction = len(largest_component_nodes) / total_rooms
        if len(largest_component_nodes) >= 2:
            subgraph = graph.subgraph(largest_component_nodes).copy()
            try:
                graph_diameter = int(nx.diameter(subgraph))
            except nx.NetworkXError:
                graph_diameter = 0

    return GenerationRunResult(
        seed=seed,
        duration=end - start,
        total_rooms=total_rooms,
        total_doorway_pairs=layout.doorway_count() // 2,
        carve_attempts=layout.carve_attempts,
        occupied_fraction=occupied_cells / config.area,
        cycle_count=cycle_count,
        largest_component_fraction=largest_component_fraction,
        graph_diameter=graph_diameter,
        distance_mismatches=count_distance_mismatches(layout, graph, random.Random(seed)),
        phase_metrics=generator.metrics.snapshot() if generator.metrics else {},
    )


def run_benchmark(num_runs: int, seed: Optional[int], **config_overrides: Any) -> List[GenerationRunResult]:
    """Run the generator multiple times and collect run-level metrics."""
    rng = random.Random(seed)

    results: List[GenerationRunResult] = []

    for _ in range(num_runs):
        run_seed = rng.randint(0, 1_000_000)
        results.append(run_single_generation(run_seed, **config_overrides))

    return results


def summarize(values: List[float]) -> Dict[str, float]:
    summary = {
        "min": min(values) if values else float("nan"),
        "max": max(values) if values else float("nan"),
        "mean": sum(values) / len(values) if values else float("nan"),
    }
    for pct in PERCENTILES:
        summary[f"p{pct:g}"] = percentile(values, pct)
    return summary


def report(results: List[GenerationRunResult]) -> Dict[str, Dict[str, float]]:
    metrics = {
        "duration": [result.duration for result in results],
        "total_rooms": [float(result.total_rooms) for result in results],
        "doorway_pairs": [float(result.total_doorway_pairs) for result in results],
        "carve_attempts": [float(result.carve_attempts) for result in results],
        "occupied_fraction": [result.occupied_fraction for result in results],
        "cycle_count": [float(result.cycle_count) for result in results],
        "graph_diameter": [float(result.graph_diameter) for result in results],
        "largest_component_fraction": [result.largest_component_fraction for result in results],
    }
    aggregated = {name: summarize(values) for name, values in metrics.items()}

    for name, summary in aggregated.items():
        if name == "duration":
            formatted = {key: format_seconds(value) for key, value in summary.items()}
        else:
            formatted = {key: f"{value:.2f}" for key, value in summary.items()}
        print(
            f"{name}: min={formatted['min']} mean={formatted['mean']} "
            f"p50={formatted['p50']} p90={formatted['p90']} max={formatted['max']}"
        )

    mismatches = sum(result.distance_mismatches for result in results)
    disconnected = sum(1 for result in results if result.largest_component_fraction < 1.0)
    print(f"BFS/networkx distance mismatches: {mismatches}")
    print(f"Runs with a disconnected room graph: {disconnected}")
    return aggregated


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark carved dungeon generation.")
    parser.add_argument("--runs", type=int, default=50)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--width", type=int, default=DEFAULT_CONFIG_KWARGS["width"])
    parser.add_argument("--height", type=int, default=DEFAULT_CONFIG_KWARGS["height"])
    parser.add_argument("--json", dest="json_path", default=None, help="Write raw results to this file.")
    args = parser.parse_args()

    results = run_benchmark(args.runs, args.seed, width=args.width, height=args.height)
    aggregated = report(results)

    if args.json_path:
        timestamp = datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0)
        benchmark_data = {
            "benchmark_run_info": {
                "timestamp": timestamp.isoformat(),
                "num_iterations": args.runs,
                "parameters": {"seed": args.seed, "width": args.width, "height": args.height},
            },
            "aggregated_results": aggregated,
            "results": [asdict(result) for result in results],
        }
        with open(args.json_path, "w", encoding="utf-8") as handle:
            json.dump(benchmark_data, handle, indent=2, sort_keys=True)
            handle.write("\n")
        print(f"\nSaved benchmark results to {args.json_path}")


if __name__ == "__main__":
    main()
