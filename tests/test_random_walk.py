"""Tests for the random-walk cave generator."""

import pytest

from dungeongen import GenerationConfig, GenerationTimeoutError, Grid, Tile
from dungeongen.random_walk import generate_random_walk, scanline_has_gap
from dungeongen.topology import floor_bounding_box, is_floor_connected


def relaxed_config(**overrides) -> GenerationConfig:
    """Generous time budget so slow machines never hit a timer-driven retry."""
    values = dict(retry_timeout=10.0, failure_timeout=60.0, max_attempts=1_000_000)
    values.update(overrides)
    return GenerationConfig(**values)


def grid_from_rows(rows) -> Grid:
    """Build a border-less grid from strings, '#' is floor."""
    grid = Grid(len(rows[0]), len(rows), config=GenerationConfig(border=0))
    for y, line in enumerate(rows):
        for x, char in enumerate(line):
            if char == "#":
                grid.write(x, y, Tile.FLOOR)
    return grid


class TestScanlineHasGap:
    """The "convexity" heuristic on a single row."""

    def test_floor_gap_floor(self):
        grid = grid_from_rows(["##..##"])

        assert scanline_has_gap(grid, 0, 0, 6)

    def test_unbroken_run(self):
        grid = grid_from_rows([".####."])

        assert not scanline_has_gap(grid, 0, 0, 6)

    def test_gap_before_first_floor_does_not_count(self):
        grid = grid_from_rows(["..###."])

        assert not scanline_has_gap(grid, 0, 0, 6)

    def test_end_is_exclusive(self):
        grid = grid_from_rows(["#...#"])

        assert not scanline_has_gap(grid, 0, 0, 4)
        assert scanline_has_gap(grid, 0, 0, 5)

    def test_walls_are_not_gaps(self):
        grid = grid_from_rows(["#.#"])
        grid.write(1, 0, Tile.WALL)

        assert not scanline_has_gap(grid, 0, 0, 3)


class TestGenerateRandomWalk:
    """Whole-walk properties."""

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_bounding_box_spans_half_the_grid(self, seed):
        grid = Grid(40, 40, config=relaxed_config(), seed=seed)

        grid.generate_random_walk(200)

        min_x, min_y, max_x, max_y = floor_bounding_box(grid)
        assert max_x - min_x >= 40 // 2 or max_y - min_y >= 40 // 2

    @pytest.mark.parametrize("seed", [10, 20, 30])
    def test_tile_budget_is_reached(self, seed):
        grid = Grid(40, 40, config=relaxed_config(), seed=seed)

        grid.generate_random_walk(150)

        assert grid.count(Tile.FLOOR) >= 150

    @pytest.mark.parametrize("seed", [7, 8])
    def test_only_floor_is_written_and_never_in_border(self, seed):
        grid = Grid(40, 30, config=relaxed_config(), seed=seed)

        grid.generate_random_walk(150)

        assert grid.count(Tile.FLOOR) + grid.count(Tile.VOID) == 40 * 30
        for x, y in grid.positions(Tile.FLOOR):
            assert grid.in_playable_area(x, y)

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_walk_is_connected(self, seed):
        """Each carve overlaps the previous one, so the cave is one piece."""
        grid = Grid(40, 40, config=relaxed_config(corridor_width=2), seed=seed)

        grid.generate_random_walk(200)

        assert is_floor_connected(grid)

    def test_midline_passes_the_convexity_check(self):
        grid = Grid(40, 40, config=relaxed_config(), seed=12)

        grid.generate_random_walk(200)

        _, min_y, _, max_y = floor_bounding_box(grid)
        rows_with_gap = [
            y for y in range(min_y, max_y + 1) if scanline_has_gap(grid, y, 0, grid.width)
        ]
        assert rows_with_gap

    def test_fixed_seed_is_reproducible(self):
        """A 20x20 grid with border 2 and a 40 tile walk always carves the same cave."""
        first = Grid(20, 20, config=relaxed_config(border=2), seed=2024)
        second = Grid(20, 20, config=relaxed_config(border=2), seed=2024)

        generate_random_walk(first, 40)
        generate_random_walk(second, 40)

        assert first.positions(Tile.FLOOR) == second.positions(Tile.FLOOR)
        assert first.count(Tile.FLOOR) >= 40

    def test_wide_brush_ignores_room_sizes(self):
        """The walk has no rooms, so a brush wider than the smallest room is fine."""
        grid = Grid(40, 40, config=relaxed_config(corridor_width=5), seed=6)

        grid.generate_random_walk(400)

        assert grid.count(Tile.FLOOR) >= 400
        min_x, min_y, max_x, max_y = floor_bounding_box(grid)
        assert max_x - min_x >= 40 // 2 or max_y - min_y >= 40 // 2

    def test_thick_walls_ignore_lattice_size(self):
        grid = Grid(40, 40, config=relaxed_config(wall_thickness=7), seed=6)

        grid.generate_random_walk(200)

        assert grid.count(Tile.FLOOR) >= 200

    def test_impossible_budget_times_out(self):
        """More tiles than the playable area can never finish."""
        config = GenerationConfig(retry_timeout=0.05, failure_timeout=0.2)
        grid = Grid(20, 20, config=config, seed=1)

        with pytest.raises(GenerationTimeoutError):
            grid.generate_random_walk(1000)
