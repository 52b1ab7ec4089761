#!/usr/bin/env python3
"""
Render a generated dungeon as ASCII art for debugging.

Usage:
    uv run tools/render_dungeon_ascii.py [--style walk|grid|rooms] [--width N] [--height N] [--seed S]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path so we can import dungeongen
sys.path.insert(0, str(Path(__file__).parent.parent))

from dungeongen import DungeonGenError, GenerationConfig, Grid, Tile, TileMap


TILE_TO_ASCII = {
    Tile.VOID: " ",
    Tile.WALL: "#",
    Tile.PENDING_WALL: "+",
    Tile.FLOOR: ".",
}

# Default amount of content per style, scaled to an 80x80 map
DEFAULT_COUNTS = {
    "walk": (80 * 80) // 4,
    "grid": 5 * 5,
    "rooms": 20,
}


def build_dungeon(style: str, width: int, height: int, seed=None, count=None) -> Grid:
    """Generate a finished map: carve, tidy up, then wall in every floor tile."""
    if count is None:
        count = DEFAULT_COUNTS[style] * (width * height) // (80 * 80)

    if style == "walk":
        grid = Grid(width, height, config=GenerationConfig(wall_thickness=2), seed=seed)
        grid.generate_random_walk(count)
        # clean up the small floaters and ragged wall edges
        grid.clean_islands()
        grid.thicken_walls()
        grid.prune_walls(5)
        grid.prune_walls(5)
        grid.clean_islands()
        grid.prune_walls(6)
        grid.prune_walls(6)
    elif style == "grid":
        grid = Grid(width, height, config=GenerationConfig(wall_thickness=2), seed=seed)
        grid.generate_grid_rooms(count)
    elif style == "rooms":
        config = GenerationConfig(wall_thickness=1, allow_random_corridor_offset=True)
        grid = Grid(width, height, config=config, seed=seed)
        grid.generate_freeform_rooms(count)
    else:
        raise ValueError(f"unknown style {style!r}")

    grid.thicken_walls()
    return grid


def render_dungeon_ascii(dungeon_map: TileMap) -> str:
    """Convert a dungeon map to ASCII string."""
    lines = []
    rows, cols = dungeon_map.shape
    for row in range(rows):
        line = ""
        for col in range(cols):
            tile = dungeon_map[row, col]
            char = TILE_TO_ASCII.get(tile, "?")
            line += char
        lines.append(line)
    return "\n".join(lines)


def add_generation_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by the render tools."""
    parser.add_argument("--style", choices=sorted(DEFAULT_COUNTS), default="rooms", help="Generation style")
    parser.add_argument("--width", type=int, default=80, help="Map width in tiles")
    parser.add_argument("--height", type=int, default=80, help="Map height in tiles")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible generation")
    parser.add_argument(
        "--count",
        type=int,
        help="Floor tiles (walk) or rooms (grid, rooms); scaled to the map size by default",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log generator progress")


def main():
    parser = argparse.ArgumentParser(description="Render dungeon as ASCII art")
    add_generation_arguments(parser)
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        grid = build_dungeon(args.style, args.width, args.height, args.seed, args.count)
    except DungeonGenError as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(render_dungeon_ascii(grid.tiles))

    # Print some debug info
    print(f"\n--- Debug Info ---", file=sys.stderr)
    print(f"Style: {args.style}", file=sys.stderr)
    print(f"Map size: {grid.width}x{grid.height} tiles", file=sys.stderr)
    print(f"Floor tiles: {grid.count(Tile.FLOOR)}", file=sys.stderr)
    print(f"Wall tiles: {grid.count(Tile.WALL)}", file=sys.stderr)


if __name__ == "__main__":
    main()
