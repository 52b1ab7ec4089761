#!/usr/bin/env python3
"""
Render a dungeon to an image file for visual inspection.

Useful for:
- Comparing generation styles side by side
- Tuning wall thickness, corridor width and room sizes
- Debugging dungeon generation

Usage:
    uv run tools/render_dungeon_image.py                        # Default: freeform rooms, random seed
    uv run tools/render_dungeon_image.py --style walk           # Cave-like random walk
    uv run tools/render_dungeon_image.py --seed 42              # Reproducible dungeon
    uv run tools/render_dungeon_image.py --output my.png        # Custom output path
"""

import argparse
import logging
import sys
from pathlib import Path

import cv2
import numpy as np

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dungeongen import DungeonGenError, Tile, TileMap
from render_dungeon_ascii import add_generation_arguments, build_dungeon

# BGR, as OpenCV expects
TILE_COLORS = {
    Tile.VOID: (24, 16, 16),
    Tile.WALL: (96, 96, 112),
    Tile.PENDING_WALL: (0, 128, 255),
    Tile.FLOOR: (180, 210, 220),
}


def render_dungeon_image(dungeon_map: TileMap, tile_size: int) -> np.ndarray:
    """Paint one tile_size square per tile."""
    rows, cols = dungeon_map.shape
    palette = np.zeros((len(Tile), 3), dtype=np.uint8)
    for tile, color in TILE_COLORS.items():
        palette[tile] = color
    small = palette[dungeon_map.astype(np.intp)]
    return cv2.resize(small, (cols * tile_size, rows * tile_size), interpolation=cv2.INTER_NEAREST)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render a dungeon to an image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    add_generation_arguments(parser)
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="dungeon_render.png",
        help="Output image path (default: dungeon_render.png)",
    )
    parser.add_argument(
        "--tile-size",
        type=int,
        default=8,
        help="Pixels per tile (default: 8)",
    )
    parser.add_argument(
        "--show-grid",
        action="store_true",
        help="Overlay a tile grid on the image",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.seed is not None:
        print(f"Using random seed: {args.seed}", file=sys.stderr)

    print(f"Generating {args.style} dungeon ({args.width}x{args.height})...", file=sys.stderr)
    try:
        grid = build_dungeon(args.style, args.width, args.height, args.seed, args.count)
    except DungeonGenError as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Floor tiles: {grid.count(Tile.FLOOR)}, wall tiles: {grid.count(Tile.WALL)}", file=sys.stderr)

    image = render_dungeon_image(grid.tiles, args.tile_size)
    height_pixels, width_pixels = image.shape[:2]

    if args.show_grid:
        print("Adding tile grid overlay...", file=sys.stderr)
        for col in range(grid.width + 1):
            x = col * args.tile_size
            cv2.line(image, (x, 0), (x, height_pixels), (64, 64, 64), 1)
        for row in range(grid.height + 1):
            y = row * args.tile_size
            cv2.line(image, (0, y), (width_pixels, y), (64, 64, 64), 1)

    # Mark the grid centre, where every generator starts
    center_x, center_y = grid.center
    half = args.tile_size // 2
    cv2.circle(
        image,
        (center_x * args.tile_size + half, center_y * args.tile_size + half),
        max(2, half),
        (0, 255, 0),
        -1,
    )

    output_path = Path(args.output)
    cv2.imwrite(str(output_path), image)
    print(f"Saved to: {output_path.absolute()}", file=sys.stderr)


if __name__ == "__main__":
    main()
