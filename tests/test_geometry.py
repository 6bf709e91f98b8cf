"""Tests for geometry primitives."""

import pytest
from py_worldmesh.core.exceptions import DegenerateGeometryError
from py_worldmesh.core.geometry import (
    Edge, Point, Polygon, Triangle, circumcircle, cross, does_circumcircle_contain,
    dot, length_squared, sub
)


class TestVectorOps:
    """Test 2D vector helpers."""

    def test_basic_ops(self):
        a, b = Point(3, 4), Point(1, 2)
        assert sub(a, b) == Point(2, 2)
        assert dot(a, b) == 11
        assert cross(a, b) == 2
        assert length_squared(a) == 25

    def test_point_exact_equality(self):
        """Points compare by exact coordinates, with no tolerance."""
        assert Point(1.0, 2.0) == Point(1.0, 2.0)
        assert Point(1.0, 2.0) != Point(1.0, 2.0 + 1e-12)


class TestEdge:
    """Test unordered edges."""

    def test_swap_equality(self):
        a, b = Point(0, 0), Point(1, 1)
        assert Edge(a, b) == Edge(b, a)
        assert hash(Edge(a, b)) == hash(Edge(b, a))

    def test_keeps_orientation(self):
        a, b = Point(0, 0), Point(1, 1)
        assert list(Edge(b, a)) == [b, a]

    def test_different_edges(self):
        assert Edge(Point(0, 0), Point(1, 1)) != Edge(Point(0, 0), Point(1, 2))


class TestTriangle:
    """Test triangle derived data and equality."""

    @pytest.fixture
    def triangle(self):
        return Triangle(Point(0, 0), Point(6, 0), Point(0, 3))

    def test_derived_edges(self, triangle):
        a, b, c = triangle.vertices
        assert triangle.edges == (Edge(a, b), Edge(b, c), Edge(c, a))
        assert (triangle.edge1.a, triangle.edge1.b) == (a, b)

    def test_centroid(self, triangle):
        assert triangle.centroid == Point(2, 1)

    def test_contains_vertex(self, triangle):
        assert triangle.contains_vertex(Point(6, 0))
        assert not triangle.contains_vertex(Point(6, 1))

    def test_equality_ignores_vertex_order(self, triangle):
        a, b, c = triangle.vertices
        assert triangle == Triangle(c, a, b)
        assert triangle == Triangle(b, a, c)
        assert triangle != Triangle(a, b, Point(1, 1))

    def test_not_hashable(self, triangle):
        with pytest.raises(TypeError):
            hash(triangle)
        assert triangle.vertex_key() == frozenset(triangle.vertices)

    def test_signed_area(self, triangle):
        a, b, c = triangle.vertices
        assert triangle.signed_area() == 9
        assert Triangle(a, c, b).signed_area() == -9


class TestCircumcircle:
    """Test circumcircle computation and containment."""

    def test_right_triangle(self):
        circle = circumcircle(Point(0, 0), Point(10, 0), Point(0, 10))
        assert circle.center == Point(5, 5)
        assert circle.radius_squared == 50

    def test_far_from_origin(self):
        offset = 1e6
        circle = circumcircle(Point(offset, offset), Point(offset + 10, offset),
                              Point(offset, offset + 10))
        assert circle.center.x == pytest.approx(offset + 5)
        assert circle.center.y == pytest.approx(offset + 5)
        assert circle.radius_squared == pytest.approx(50)

    def test_containment_is_inclusive(self):
        a, b, c = Point(0, 0), Point(10, 0), Point(0, 10)
        assert does_circumcircle_contain(a, b, c, Point(5, 5))
        assert does_circumcircle_contain(a, b, c, Point(10, 10))  # on the circle
        assert not does_circumcircle_contain(a, b, c, Point(11, 11))
        assert Triangle(a, b, c).does_circumcircle_contain(Point(1, 1))

    @pytest.mark.parametrize("vertices", [
        (Point(0, 0), Point(1, 1), Point(2, 2)),
        (Point(0, 0), Point(0, 0), Point(1, 0)),
        (Point(5, 5), Point(5, 5), Point(5, 5)),
        (Point(0, 0), Point(1e6, 0), Point(2e6, 1e-9)),
    ])
    def test_degenerate_raises(self, vertices):
        with pytest.raises(DegenerateGeometryError) as exc_info:
            circumcircle(*vertices)
        assert exc_info.value.vertices == vertices

    def test_epsilon_is_scale_free(self):
        """The same shape is degenerate or not regardless of its size."""
        for size in (1e-3, 1.0, 1e4):
            circumcircle(Point(0, 0), Point(size, 0), Point(0, size))


class TestPolygon:
    """Test polygon container."""

    def test_closed_needs_three_vertices(self):
        assert not Polygon([Point(0, 0), Point(1, 0)]).is_closed
        assert Polygon([Point(0, 0), Point(1, 0), Point(0, 1)]).is_closed
        assert len(Polygon()) == 0
