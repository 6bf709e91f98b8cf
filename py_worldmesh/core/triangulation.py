"""
Delaunay triangulation by incremental Bowyer-Watson insertion.

Sites are inserted one at a time into a triangulation seeded with a large
synthetic super-triangle. Each insertion removes the triangles whose
circumcircle contains the new site and fills the resulting cavity with a fan
of triangles around it. Triangles touching the super-triangle are dropped at
the end.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

import numpy as np
import structlog

from .exceptions import (
    DegenerateGeometryError,
    DuplicateSiteError,
    InsufficientSitesError,
)
from .geometry import DEFAULT_EPSILON, Circumcircle, Edge, Point, Triangle, as_points

logger = structlog.get_logger()


class DegeneracyPolicy(str, Enum):
    """What to do with a triangle whose circumcircle cannot be computed."""

    SKIP = "skip"  # never treat it as a bad triangle
    FAIL = "fail"  # raise DegenerateGeometryError


class DuplicatePolicy(str, Enum):
    """What to do with a site repeating an earlier site's coordinates."""

    ADMIT = "admit"    # insert it anyway
    SKIP = "skip"      # leave it out of the triangulation
    REJECT = "reject"  # raise DuplicateSiteError


@dataclass
class TriangulationOptions:
    """Configuration for the triangulator."""

    super_triangle_margin: float = 20.0
    epsilon: float = DEFAULT_EPSILON
    degeneracy_policy: DegeneracyPolicy = DegeneracyPolicy.SKIP
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.ADMIT

    def __post_init__(self):
        self.degeneracy_policy = DegeneracyPolicy(self.degeneracy_policy)
        self.duplicate_policy = DuplicatePolicy(self.duplicate_policy)
        if self.super_triangle_margin <= 0:
            raise ValueError("super_triangle_margin must be positive")


class _Candidate:
    """Working-list entry: a triangle and its cached circumcircle."""

    __slots__ = ("triangle", "circle")

    def __init__(self, triangle: Triangle, circle: Optional[Circumcircle]):
        self.triangle = triangle
        self.circle = circle


def super_triangle(sites: Sequence[Point], margin: float = 20.0) -> Triangle:
    """
    Build a triangle enclosing every site with a wide margin.

    Args:
        sites: Sites to enclose (at least one)
        margin: Multiple of the bounding box's larger side used to place
            the apex and base corners

    Returns:
        Triangle with vertices below-left, above and below-right of the sites
    """
    coords = np.asarray(sites, dtype=float)
    min_x, min_y = coords.min(axis=0)
    max_x, max_y = coords.max(axis=0)

    d_max = float(max(max_x - min_x, max_y - min_y))
    if d_max == 0.0:
        # All sites coincide; any positive size encloses them.
        d_max = 1.0
    mid_x = float(min_x + max_x) / 2.0
    mid_y = float(min_y + max_y) / 2.0

    return Triangle(
        Point(mid_x - margin * d_max, mid_y - d_max),
        Point(mid_x, mid_y + margin * d_max),
        Point(mid_x + margin * d_max, mid_y - d_max),
    )


def _candidate(triangle: Triangle, site_index: Optional[int],
               options: TriangulationOptions) -> _Candidate:
    try:
        circle = triangle.circumcircle(options.epsilon)
    except DegenerateGeometryError as e:
        if options.degeneracy_policy == DegeneracyPolicy.FAIL:
            raise DegenerateGeometryError(e.vertices, site_index=site_index) from e
        logger.warning("Skipping degenerate triangle",
                       site_index=site_index, vertices=e.vertices)
        circle = None
    return _Candidate(triangle, circle)


def cavity_boundary(bad_triangles: Sequence[Triangle]) -> List[Edge]:
    """
    Find the edges bounding the union of the given triangles.

    An edge is on the boundary when it occurs an odd number of times across
    the triangles, i.e. it is not shared by two of them. Edges keep the
    orientation and order in which they are first met.
    """
    counts = Counter(edge for triangle in bad_triangles for edge in triangle.edges)

    boundary = []
    emitted = set()
    for triangle in bad_triangles:
        for edge in triangle.edges:
            if counts[edge] % 2 == 1 and edge not in emitted:
                emitted.add(edge)
                boundary.append(edge)
    return boundary


def triangulate(sites: Sequence, options: Optional[TriangulationOptions] = None) -> List[Triangle]:
    """
    Compute the Delaunay triangulation of a set of sites.

    Args:
        sites: Ordered sites, as Points or (x, y) pairs
        options: Triangulation options; defaults are used when omitted

    Returns:
        List of triangles whose vertices are all input sites

    Raises:
        InsufficientSitesError: if fewer than 3 sites are given
        DegenerateGeometryError: under DegeneracyPolicy.FAIL
        DuplicateSiteError: under DuplicatePolicy.REJECT
    """
    options = options or TriangulationOptions()
    points = as_points(sites)
    if len(points) < 3:
        raise InsufficientSitesError(len(points))

    logger.info("Starting triangulation", sites=len(points),
                degeneracy_policy=options.degeneracy_policy.value,
                duplicate_policy=options.duplicate_policy.value)

    outer = super_triangle(points, options.super_triangle_margin)
    working: List[_Candidate] = [_candidate(outer, None, options)]
    seen: Dict[Point, int] = {}
    skipped = 0

    for index, point in enumerate(points):
        if point in seen:
            if options.duplicate_policy == DuplicatePolicy.REJECT:
                raise DuplicateSiteError(point, index, seen[point])
            if options.duplicate_policy == DuplicatePolicy.SKIP:
                logger.warning("Skipping duplicate site", site_index=index,
                               duplicate_of=seen[point])
                skipped += 1
                continue
        else:
            seen[point] = index

        survivors = []
        bad_triangles = []
        for entry in working:
            if entry.circle is not None and entry.circle.contains(point):
                bad_triangles.append(entry.triangle)
            else:
                survivors.append(entry)

        for edge in cavity_boundary(bad_triangles):
            survivors.append(_candidate(Triangle(edge.a, edge.b, point), index, options))
        working = survivors

    triangles = [
        entry.triangle for entry in working
        if not any(entry.triangle.contains_vertex(v) for v in outer.vertices)
    ]

    if not triangles:
        logger.warning("Triangulation produced no triangles; sites may be collinear",
                       sites=len(points))
    logger.info("Triangulation complete", triangles=len(triangles),
                skipped_duplicates=skipped)
    return triangles


def extract_edges(triangles: Sequence[Triangle]) -> List[Edge]:
    """Every triangle's edges (ab, bc, ca) in triangle order, not deduplicated."""
    return [edge for triangle in triangles for edge in triangle.edges]
