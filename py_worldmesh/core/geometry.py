"""
Planar geometry primitives for the world mesh.

Points are plain value types compared by exact coordinates. Only the 2D
vector operations the mesh needs are provided here: subtraction, addition,
scaling, dot product, the scalar cross product and squared length.
"""

import math
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, NamedTuple, Sequence, Tuple

from .exceptions import DegenerateGeometryError

DEFAULT_EPSILON = 1e-10


class Point(NamedTuple):
    """A 2D coordinate."""
    x: float
    y: float


def as_points(coordinates: Iterable) -> List[Point]:
    """Coerce ``(x, y)`` pairs (tuples, arrays, Points) into Points."""
    return [Point(float(x), float(y)) for x, y in coordinates]


def sub(a: Point, b: Point) -> Point:
    return Point(a.x - b.x, a.y - b.y)


def add(a: Point, b: Point) -> Point:
    return Point(a.x + b.x, a.y + b.y)


def scale(a: Point, s: float) -> Point:
    return Point(a.x * s, a.y * s)


def dot(a: Point, b: Point) -> float:
    return a.x * b.x + a.y * b.y


def cross(a: Point, b: Point) -> float:
    """Scalar (z component) cross product of two 2D vectors."""
    return a.x * b.y - a.y * b.x


def length_squared(a: Point) -> float:
    return dot(a, a)


class Edge:
    """Unordered pair of points.

    Two edges are equal when they share both endpoints in either order. The
    creation order of the endpoints is kept for line rendering.
    """

    __slots__ = ("a", "b")

    def __init__(self, a: Point, b: Point):
        self.a = a
        self.b = b

    def key(self) -> FrozenSet[Point]:
        return frozenset((self.a, self.b))

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return ((self.a == other.a and self.b == other.b) or
                (self.a == other.b and self.b == other.a))

    def __hash__(self):
        return hash(self.key())

    def __iter__(self) -> Iterator[Point]:
        yield self.a
        yield self.b

    def __repr__(self):
        return f"Edge({self.a!r}, {self.b!r})"


class Circumcircle(NamedTuple):
    center: Point
    radius_squared: float

    def contains(self, v: Point) -> bool:
        """Inclusive test: points on the circle count as inside."""
        return length_squared(sub(v, self.center)) <= self.radius_squared


def circumcircle(a: Point, b: Point, c: Point,
                 epsilon: float = DEFAULT_EPSILON) -> Circumcircle:
    """
    Compute the circle through three points.

    Coordinates are taken relative to ``a`` before solving, which keeps the
    squared lengths small for triangles far from the origin.

    Args:
        a, b, c: Triangle vertices
        epsilon: Relative threshold below which the triple counts as collinear

    Returns:
        Circumcircle with center and squared radius

    Raises:
        DegenerateGeometryError: if the vertices are (near-)collinear or the
            result is not finite
    """
    ab = sub(b, a)
    ac = sub(c, a)
    ab_sq = length_squared(ab)
    ac_sq = length_squared(ac)
    det = 2.0 * cross(ab, ac)

    # |det| is four times the area; compare against the summed squared edge
    # lengths so the threshold does not depend on the coordinate scale.
    extent = ab_sq + ac_sq + length_squared(sub(c, b))
    if not math.isfinite(det) or abs(det) <= epsilon * extent:
        raise DegenerateGeometryError((a, b, c))

    ux = (ac.y * ab_sq - ab.y * ac_sq) / det
    uy = (ab.x * ac_sq - ac.x * ab_sq) / det
    radius_squared = ux * ux + uy * uy
    if not (math.isfinite(ux) and math.isfinite(uy)):
        raise DegenerateGeometryError((a, b, c))

    return Circumcircle(Point(a.x + ux, a.y + uy), radius_squared)


def does_circumcircle_contain(a: Point, b: Point, c: Point, v: Point,
                              epsilon: float = DEFAULT_EPSILON) -> bool:
    """Check whether ``v`` lies inside or on the circumcircle of ``a, b, c``."""
    return circumcircle(a, b, c, epsilon).contains(v)


@dataclass(eq=False)
class Triangle:
    """Three vertices plus their derived edges and centroid."""
    a: Point
    b: Point
    c: Point
    edge1: Edge = field(init=False, repr=False)
    edge2: Edge = field(init=False, repr=False)
    edge3: Edge = field(init=False, repr=False)
    centroid: Point = field(init=False, repr=False)

    def __post_init__(self):
        self.edge1 = Edge(self.a, self.b)
        self.edge2 = Edge(self.b, self.c)
        self.edge3 = Edge(self.c, self.a)
        self.centroid = Point((self.a.x + self.b.x + self.c.x) / 3.0,
                              (self.a.y + self.b.y + self.c.y) / 3.0)

    @property
    def vertices(self) -> Tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    @property
    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return (self.edge1, self.edge2, self.edge3)

    def vertex_key(self) -> FrozenSet[Point]:
        """Vertex set, for callers comparing triangulations as sets."""
        return frozenset(self.vertices)

    def contains_vertex(self, p: Point) -> bool:
        return p == self.a or p == self.b or p == self.c

    def circumcircle(self, epsilon: float = DEFAULT_EPSILON) -> Circumcircle:
        return circumcircle(self.a, self.b, self.c, epsilon)

    def does_circumcircle_contain(self, v: Point,
                                  epsilon: float = DEFAULT_EPSILON) -> bool:
        return does_circumcircle_contain(self.a, self.b, self.c, v, epsilon)

    def signed_area(self) -> float:
        return 0.5 * cross(sub(self.b, self.a), sub(self.c, self.a))

    def __eq__(self, other):
        # Every vertex of this triangle must match some vertex of the other.
        if not isinstance(other, Triangle):
            return NotImplemented
        return all(other.contains_vertex(v) for v in self.vertices)


class Polygon:
    """Ordered ring of vertices; closed implicitly once it has 3 or more."""

    __slots__ = ("vertices",)

    def __init__(self, vertices: Sequence[Point] = ()):
        self.vertices: Tuple[Point, ...] = tuple(vertices)

    @property
    def is_closed(self) -> bool:
        return len(self.vertices) >= 3

    def __len__(self):
        return len(self.vertices)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.vertices)

    def __getitem__(self, index):
        return self.vertices[index]

    def __eq__(self, other):
        if not isinstance(other, Polygon):
            return NotImplemented
        return self.vertices == other.vertices

    def __hash__(self):
        return hash(self.vertices)

    def __repr__(self):
        return f"Polygon({list(self.vertices)!r})"


class Site(NamedTuple):
    """An input point and its dual polygon."""
    point: Point
    polygon: Polygon
