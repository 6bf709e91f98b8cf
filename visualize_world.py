#!/usr/bin/env python3
"""
Render a generated world: sites, triangulation edges, triangle centroids
and the dual polygons.

Usage:
    python visualize_world.py [--generator jittered] [--seed 42] [--output world.png]

Settings not given on the command line come from WORLDMESH_* environment
variables (see py_worldmesh/config.py).
"""

from datetime import datetime

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection, PolyCollection
from matplotlib.lines import Line2D

from py_worldmesh.config import Settings
from py_worldmesh.core.world import World
from py_worldmesh.utils.logging import configure_logging


def visualize_world(world: World, width: float, height: float, filename: str,
                    show: bool = False):
    """Draw the world the way the game renderer does and save it to a PNG."""
    buffers = world.vertex_buffers()

    fig, ax = plt.subplots(figsize=(12, 12 * height / width))
    ax.set_facecolor("black")

    # Dual polygons first so the wireframe stays visible on top
    closed = [poly for poly in buffers.polygons if len(poly) >= 3]
    ax.add_collection(PolyCollection(closed, facecolors="#224466", edgecolors="#6699cc",
                                     linewidths=0.5, alpha=0.6))

    segments = buffers.edges.reshape(-1, 2, 2)
    ax.add_collection(LineCollection(segments, colors="magenta", linewidths=0.4))

    ax.scatter(buffers.points[:, 0], buffers.points[:, 1], c="magenta", s=4, zorder=3)
    ax.scatter(buffers.centroids[:, 0], buffers.centroids[:, 1], c="white", s=1, zorder=3)

    ax.set_xlim(0, width)
    ax.set_ylim(0, height)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])

    summary = world.summary()
    ax.set_title(
        f"{summary['name']}\nSites: {summary['sites']} | Triangles: {summary['triangles']} "
        f"| Closed polygons: {summary['closed_polygons']}",
        fontsize=12,
    )

    legend_elements = [
        Line2D([0], [0], marker="o", color="w", markerfacecolor="magenta", label="Site"),
        Line2D([0], [0], marker="o", color="w", markerfacecolor="white",
               markeredgecolor="gray", label="Centroid"),
        Line2D([0], [0], color="magenta", linewidth=1, label="Delaunay edge"),
        Line2D([0], [0], color="#6699cc", linewidth=1, label="Dual polygon"),
    ]
    ax.legend(handles=legend_elements, loc="upper right", fontsize=9)

    plt.tight_layout()
    plt.savefig(filename, dpi=200, bbox_inches="tight")
    print(f"World visualization saved as: {filename}")

    if show:
        plt.show()


def main():
    """Main function."""
    import argparse

    parser = argparse.ArgumentParser(description="Generate and visualize a world mesh")
    parser.add_argument("--generator", choices=["random", "jittered"],
                        help="Point generator")
    parser.add_argument("--points", type=int, help="Site count for the random generator")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--output", help="Output PNG (timestamped if omitted)")
    parser.add_argument("--show", action="store_true", help="Open a window as well")

    args = parser.parse_args()

    overrides = {"generator": args.generator, "point_count": args.points, "seed": args.seed}
    settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    configure_logging(settings.log_level, settings.log_format)

    world = World.from_settings(settings)

    filename = args.output
    if not filename:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"world_{settings.seed or 'random'}_{timestamp}.png"

    visualize_world(world, settings.world_width, settings.world_height, filename, args.show)


if __name__ == "__main__":
    main()
