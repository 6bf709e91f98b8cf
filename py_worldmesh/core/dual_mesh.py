"""
Barycentric dual mesh construction.

Each site's polygon is made from the centroids of the triangles incident to
it, sorted around the site. Centroids rather than circumcenters are used, so
the polygons approximate Voronoi cells without matching them exactly.
"""

from functools import cmp_to_key
from typing import Callable, Dict, List, Sequence

import structlog

from .geometry import Point, Polygon, Site, Triangle, as_points, cross, length_squared, sub

logger = structlog.get_logger()


def angular_comparator(center: Point) -> Callable[[Point, Point], int]:
    """
    Build a comparator ordering points around ``center``.

    Points right of the center (``x >= center.x``) come before points left
    of it. Points both exactly on the vertical through the center are
    ordered by descending ``y``. Otherwise the sign of the cross product
    ``(a - center) x (b - center)`` decides, and collinear points are
    ordered nearest first.

    Consecutive points in the sorted order have negative cross products:
    clockwise in a y-up frame, counter-clockwise on a y-down screen.
    """
    def compare(a: Point, b: Point) -> int:
        ax = a.x - center.x
        bx = b.x - center.x
        if ax >= 0 and bx < 0:
            return -1
        if ax < 0 and bx >= 0:
            return 1
        if ax == 0 and bx == 0:
            if a.y > b.y:
                return -1
            return 1 if a.y < b.y else 0

        da = sub(a, center)
        db = sub(b, center)
        det = cross(da, db)
        if det < 0:
            return -1
        if det > 0:
            return 1

        # collinear with the center
        d1 = length_squared(da)
        d2 = length_squared(db)
        return (d1 > d2) - (d1 < d2)

    return compare


def sort_around(center: Point, vertices: Sequence[Point]) -> List[Point]:
    return sorted(vertices, key=cmp_to_key(angular_comparator(center)))


def _incident_centroids(triangles: Sequence[Triangle]) -> Dict[Point, List[Point]]:
    """Map each vertex to the centroids of its triangles, in triangle order."""
    incident: Dict[Point, List[Point]] = {}
    for triangle in triangles:
        # a triangle counts once per distinct vertex
        for vertex in dict.fromkeys(triangle.vertices):
            incident.setdefault(vertex, []).append(triangle.centroid)
    return incident


def build_polygons(sites: Sequence, triangles: Sequence[Triangle]) -> List[Polygon]:
    """
    Build one dual polygon per site.

    Args:
        sites: Ordered sites, as Points or (x, y) pairs
        triangles: Final triangulation of the sites

    Returns:
        Polygons aligned by index with ``sites``. A site on no triangle gets
        an empty polygon.
    """
    points = as_points(sites)
    incident = _incident_centroids(triangles)

    polygons = []
    for point in points:
        centroids = incident.get(point, [])
        polygons.append(Polygon(sort_around(point, centroids)))

    open_count = sum(1 for polygon in polygons if not polygon.is_closed)
    logger.info("Dual mesh built", polygons=len(polygons), open_polygons=open_count)
    return polygons


def build_sites(sites: Sequence, triangles: Sequence[Triangle]) -> List[Site]:
    points = as_points(sites)
    return [Site(point, polygon)
            for point, polygon in zip(points, build_polygons(points, triangles))]


def polygon_winding(center: Point, polygon: Polygon) -> List[float]:
    """
    Cross products of consecutive polygon vertices relative to ``center``.

    The pair closing the ring (last vertex to first) is included once the
    polygon has at least 3 vertices.
    """
    vertices = list(polygon)
    if len(vertices) < 2:
        return []
    pairs = list(zip(vertices, vertices[1:]))
    if polygon.is_closed:
        pairs.append((vertices[-1], vertices[0]))
    return [cross(sub(a, center), sub(b, center)) for a, b in pairs]
