import benchmark_generation
import main


def test_main_prints_seed_and_distance(capsys):
    main.main(["--width", "10", "--height", "6", "--percent-empty", "0.2", "--seed", "17", "--distance", "0", "0"])

    out = capsys.readouterr().out
    assert out.startswith("Using random seed 17\n")
    assert "rooms," in out
    assert "Distance from room 0 to room 0: 0" in out


def test_main_cells_flag_prints_both_grids(capsys):
    main.main(["--width", "8", "--height", "4", "--percent-empty", "0", "--seed", "2", "--cells"])

    lines = capsys.readouterr().out.splitlines()
    # Seed line, 4 cell rows, blank line, 4 room rows, summary.
    assert len(lines) == 11
    assert lines[1:5] == ["RRRRRRRR"] * 4


def test_benchmark_single_run_agrees_with_networkx():
    result = benchmark_generation.run_single_generation(5, width=12, height=8)

    assert result.seed == 5
    assert result.total_rooms >= 1
    assert result.distance_mismatches == 0
    assert result.largest_component_fraction == 1.0
    assert set(result.phase_metrics) == {"carve", "place_rooms", "extra_doorways"}


def test_benchmark_percentile_interpolates():
    values = [1.0, 2.0, 3.0, 4.0]

    assert benchmark_generation.percentile(values, 50.0) == 2.5
    assert benchmark_generation.percentile(values, 0) == 1.0
    assert benchmark_generation.percentile(values, 100) == 4.0
