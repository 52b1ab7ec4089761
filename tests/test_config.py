"""Tests for generation parameter validation."""

import numpy as np
import pytest

from dungeongen import ConfigError, GenerationConfig, Grid, Tile


class TestValidate:
    """GenerationConfig.validate rejects inconsistent parameters."""

    def test_defaults_are_valid(self):
        config = GenerationConfig()

        config.validate()

        assert config.border == 2
        assert config.wall_thickness == 2
        assert config.corridor_width == 2
        assert (config.min_room_width, config.max_room_width) == (4, 8)
        assert (config.min_room_height, config.max_room_height) == (4, 8)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"border": -1},
            {"wall_thickness": -2},
            {"corridor_width": 0},
            {"retry_timeout": 0},
            {"failure_timeout": -1.0},
            {"max_attempts": 0},
            {"min_island_size": -1},
        ],
    )
    def test_bad_parameters_are_rejected(self, overrides):
        config = GenerationConfig(**overrides)

        with pytest.raises(ConfigError):
            config.validate()
        with pytest.raises(ConfigError):
            config.validate_rooms()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"min_room_width": 9},
            {"min_room_height": 10, "max_room_height": 6},
            {"corridor_width": 5},
            {"max_room_width": 4, "wall_thickness": 3},
            {"wall_thickness": 7},
        ],
    )
    def test_room_rules_only_apply_to_rooms(self, overrides):
        config = GenerationConfig(**overrides)

        config.validate()
        with pytest.raises(ConfigError):
            config.validate_rooms()

    def test_config_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            GenerationConfig(min_room_width=20).validate_rooms()

    def test_grid_room_size_leaves_room_for_walls(self):
        config = GenerationConfig(max_room_width=10, wall_thickness=3)

        assert config.lattice_cell_size == 10
        assert config.grid_room_size == 7


class TestGeneratorsValidateFirst:
    """Generators refuse bad parameters before touching the grid."""

    @pytest.mark.parametrize(
        "generate",
        [
            lambda grid: grid.generate_random_walk(50),
            lambda grid: grid.generate_grid_rooms(3),
            lambda grid: grid.generate_freeform_rooms(3),
        ],
        ids=["random_walk", "grid_rooms", "freeform_rooms"],
    )
    def test_invalid_config_leaves_grid_untouched(self, generate):
        grid = Grid(60, 60, config=GenerationConfig(corridor_width=0), seed=1)
        grid.write(10, 10, Tile.FLOOR)
        before = grid.tiles.copy()

        with pytest.raises(ConfigError):
            generate(grid)

        assert np.array_equal(grid.tiles, before)

    @pytest.mark.parametrize(
        "generate",
        [
            lambda grid: grid.generate_grid_rooms(3),
            lambda grid: grid.generate_freeform_rooms(3),
        ],
        ids=["grid_rooms", "freeform_rooms"],
    )
    def test_room_generators_check_room_sizes(self, generate):
        grid = Grid(60, 60, config=GenerationConfig(min_room_width=9), seed=1)
        grid.write(10, 10, Tile.FLOOR)
        before = grid.tiles.copy()

        with pytest.raises(ConfigError):
            generate(grid)

        assert np.array_equal(grid.tiles, before)

    @pytest.mark.parametrize(
        "generate",
        [
            lambda grid: grid.generate_random_walk(0),
            lambda grid: grid.generate_grid_rooms(0),
            lambda grid: grid.generate_freeform_rooms(-1),
        ],
        ids=["random_walk", "grid_rooms", "freeform_rooms"],
    )
    def test_non_positive_counts_are_rejected(self, generate):
        grid = Grid(60, 60, seed=1)

        with pytest.raises(ConfigError):
            generate(grid)
