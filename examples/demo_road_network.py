"""Demo script for road network generation with a synthetic graph.

Builds a small street grid with a diagonal avenue, generates the road
envelopes and the merged outline, and prints a summary of the result.

Usage:
    python examples/demo_road_network.py --width 40 --roundness 8
"""

import argparse
import sys
import time
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from roadnet.geometry.boundary import find_crossings
from roadnet.graph import Graph
from roadnet.scene import build_layers, edges_frame
from roadnet.world import MergePolicy, RoadConfig, World


def create_street_grid(blocks: int = 3, block_size: float = 200.0) -> Graph:
    """Create a square street grid plus one diagonal avenue.

    Parameters
    ----------
    blocks : int
        Number of blocks along each side.
    block_size : float
        Side length of a block.

    Returns
    -------
    Graph
        Grid graph with horizontal streets first, then vertical ones,
        then the diagonal.
    """
    pairs = []
    extent = blocks * block_size
    for i in range(blocks + 1):
        offset = i * block_size
        for j in range(blocks):
            pairs.append(((j * block_size, offset), ((j + 1) * block_size, offset)))
    for i in range(blocks + 1):
        offset = i * block_size
        for j in range(blocks):
            pairs.append(((offset, j * block_size), (offset, (j + 1) * block_size)))
    pairs.append(((0.0, 0.0), (extent, extent)))
    return Graph.from_coordinates(pairs)


def main():
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Generate road outlines for a synthetic grid")
    parser.add_argument("--config", type=str, default=None, help="YAML configuration file")
    parser.add_argument("--width", type=float, default=None, help="Road width")
    parser.add_argument("--roundness", type=int, default=None, help="Facets per rounded cap")
    parser.add_argument(
        "--policy",
        choices=[p.value for p in MergePolicy],
        default=None,
        help="Merge policy",
    )
    parser.add_argument("--blocks", type=int, default=3, help="Blocks per side (default: 3)")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level, e.g. DEBUG")
    args = parser.parse_args()

    config = RoadConfig.from_file(args.config) if args.config else RoadConfig(40.0, 8)
    config = RoadConfig(
        args.width if args.width is not None else config.road_width,
        args.roundness if args.roundness is not None else config.road_roundness,
        args.policy if args.policy is not None else config.merge_policy,
        args.log_level if args.log_level is not None else config.log_level,
    )

    graph = create_street_grid(blocks=args.blocks)
    print(f"Graph: {len(graph.points)} points, {len(graph.segments)} segments")

    started = time.perf_counter()
    world = World.from_config(graph, config)
    elapsed = time.perf_counter() - started

    print(f"Road width: {world.road_width}, roundness: {world.road_roundness}")
    print(f"Merge policy: {world.merge_policy.value}")
    print(f"Envelopes: {len(world.envelopes)}")
    print(f"Boundary edges: {len(world.boundary)}")
    print(f"Crossings resolved: {len(world.intersections)}")
    print(f"Remaining crossings: {len(find_crossings(world.boundary))}")
    print(f"Generation time: {elapsed:.3f} s")

    for layer in build_layers(world):
        print(f"  layer {layer.name}: {len(layer.polygons)} polygons, {len(layer.segments)} segments")

    print(edges_frame(world.boundary).describe())
    return 0


if __name__ == "__main__":
    sys.exit(main())
