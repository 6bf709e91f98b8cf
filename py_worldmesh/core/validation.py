"""
Checks for generated meshes.

These are brute-force checks meant for tests and debugging runs, not for
the hot path: the Delaunay check is O(sites * triangles).
"""

from typing import List, Sequence, Tuple

import numpy as np
import structlog

from .exceptions import DegenerateGeometryError
from .geometry import Edge, Point, Polygon, Triangle, as_points

logger = structlog.get_logger()


def find_delaunay_violations(sites: Sequence, triangles: Sequence[Triangle],
                             tolerance: float = 1e-9) -> List[Tuple[int, int]]:
    """
    Find sites lying strictly inside a triangle's circumcircle.

    A site counts as inside when its squared distance to the circumcenter is
    below ``radius_squared * (1 - tolerance)``, so cocircular sites are
    accepted.

    Args:
        sites: All sites of the triangulation
        triangles: Triangles to check
        tolerance: Relative slack on the squared radius

    Returns:
        ``(triangle_index, site_index)`` pairs, empty when the triangulation
        is Delaunay. Degenerate triangles are reported with site index -1.
    """
    points = as_points(sites)
    if not points:
        return []
    coords = np.asarray(points, dtype=float)

    violations = []
    for t_index, triangle in enumerate(triangles):
        try:
            circle = triangle.circumcircle()
        except DegenerateGeometryError:
            violations.append((t_index, -1))
            continue

        d2 = np.sum((coords - np.asarray(circle.center)) ** 2, axis=1)
        inside = np.nonzero(d2 < circle.radius_squared * (1.0 - tolerance))[0]
        for s_index in inside:
            if not triangle.contains_vertex(points[s_index]):
                violations.append((t_index, int(s_index)))

    if violations:
        logger.warning("Delaunay violations found", count=len(violations))
    return violations


def check_mesh_invariants(sites: Sequence, triangles: Sequence[Triangle],
                          edges: Sequence[Edge], polygons: Sequence[Polygon],
                          super_vertices: Sequence[Point] = ()) -> List[str]:
    """
    Check the structural invariants of a generated mesh.

    Returns:
        Human-readable problem descriptions, empty when all invariants hold
    """
    points = as_points(sites)
    site_set = set(points)
    problems = []

    if len(edges) != 3 * len(triangles):
        problems.append(f"expected {3 * len(triangles)} edges, found {len(edges)}")

    if len(polygons) != len(points):
        problems.append(f"expected {len(points)} polygons, found {len(polygons)}")

    for vertex in super_vertices:
        if any(t.contains_vertex(vertex) for t in triangles):
            problems.append(f"super-triangle vertex {vertex} left in triangles")
        if any(vertex in (e.a, e.b) for e in edges):
            problems.append(f"super-triangle vertex {vertex} left in edges")
        if any(vertex in p.vertices for p in polygons):
            problems.append(f"super-triangle vertex {vertex} left in polygons")

    incident_counts = {}
    for t_index, triangle in enumerate(triangles):
        for vertex in dict.fromkeys(triangle.vertices):
            if vertex not in site_set:
                problems.append(f"triangle {t_index} has non-site vertex {vertex}")
            incident_counts[vertex] = incident_counts.get(vertex, 0) + 1

    for s_index, (point, polygon) in enumerate(zip(points, polygons)):
        expected = incident_counts.get(point, 0)
        if len(polygon) != expected:
            problems.append(
                f"polygon {s_index} has {len(polygon)} vertices, "
                f"site is on {expected} triangles"
            )

    return problems
