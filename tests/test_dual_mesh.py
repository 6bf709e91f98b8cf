"""Tests for barycentric dual mesh construction."""

import numpy as np
import pytest
from py_worldmesh.core.dual_mesh import (
    angular_comparator, build_polygons, build_sites, polygon_winding, sort_around
)
from py_worldmesh.core.geometry import Point, Polygon, Triangle
from py_worldmesh.core.triangulation import extract_edges, triangulate
from py_worldmesh.core.validation import check_mesh_invariants


SQUARE = [Point(0, 0), Point(10, 0), Point(0, 10), Point(10, 10)]


def perturbed_grid(columns=10, rows=10, spacing=10.0, amount=0.1, seed=3):
    """Grid sites moved by at most ``amount`` of the spacing."""
    rng = np.random.default_rng(seed)
    sites = []
    for row in range(rows):
        for col in range(columns):
            dx, dy = (rng.random(2) * 2 - 1) * amount * spacing
            sites.append(Point(col * spacing + dx, row * spacing + dy))
    return sites


class TestAngularComparator:
    """Test the ordering of points around a center."""

    @pytest.fixture
    def compare(self):
        return angular_comparator(Point(0, 0))

    def test_right_half_plane_first(self, compare):
        assert compare(Point(1, 0), Point(-1, 0)) == -1
        assert compare(Point(-1, 5), Point(0, -5)) == 1

    def test_vertical_line_by_descending_y(self, compare):
        assert compare(Point(0, 2), Point(0, 1)) == -1
        assert compare(Point(0, -3), Point(0, 1)) == 1
        assert compare(Point(0, 1), Point(0, 1)) == 0

    def test_cross_product_sign(self, compare):
        assert compare(Point(1, 1), Point(1, -1)) == -1
        assert compare(Point(1, -1), Point(1, 1)) == 1

    def test_collinear_nearer_first(self, compare):
        assert compare(Point(1, 1), Point(2, 2)) == -1
        assert compare(Point(-2, -2), Point(-1, -1)) == 1

    def test_full_turn(self):
        center = Point(5, 5)
        ring = [Point(6, 6), Point(6, 4), Point(4, 4), Point(4, 6)]
        shuffled = [ring[2], ring[0], ring[3], ring[1]]

        assert sort_around(center, shuffled) == ring
        assert all(w < 0 for w in polygon_winding(center, Polygon(ring)))


class TestBuildPolygons:
    """Test per-site polygon construction."""

    def test_square(self):
        triangles = triangulate(SQUARE)
        polygons = build_polygons(SQUARE, triangles)

        assert len(polygons) == 4
        assert sum(len(p) for p in polygons) == 3 * len(triangles)
        centroids = {t.centroid for t in triangles}
        for polygon in polygons:
            assert set(polygon) <= centroids

    def test_polygon_sizes_match_incidence(self):
        sites = perturbed_grid(6, 6)
        triangles = triangulate(sites)
        polygons = build_polygons(sites, triangles)

        problems = check_mesh_invariants(sites, triangles, extract_edges(triangles), polygons)
        assert problems == []

    def test_isolated_site_gets_empty_polygon(self):
        triangle = Triangle(*SQUARE[:3])
        polygons = build_polygons(SQUARE, [triangle])

        assert [len(p) for p in polygons] == [1, 1, 1, 0]
        assert polygons[0][0] == triangle.centroid

    def test_repeated_vertex_counted_once(self):
        triangle = Triangle(Point(0, 0), Point(0, 0), Point(1, 0))
        polygons = build_polygons([Point(0, 0)], [triangle])
        assert len(polygons[0]) == 1

    def test_interior_winding(self):
        """Interior sites get closed rings with a consistent turn direction."""
        columns = rows = 10
        sites = perturbed_grid(columns, rows)
        triangles = triangulate(sites)
        polygons = build_polygons(sites, triangles)

        for index, (site, polygon) in enumerate(zip(sites, polygons)):
            row, col = divmod(index, columns)
            if row in (0, rows - 1) or col in (0, columns - 1):
                continue
            assert polygon.is_closed
            windings = polygon_winding(site, polygon)
            assert len(windings) == len(polygon)
            assert all(w < 0 for w in windings), f"site {index} reverses winding"

    def test_hull_sites_wind_consistently_within_ring(self):
        """Hull rings are open, but consecutive vertices still turn one way."""
        sites = perturbed_grid(5, 5)
        triangles = triangulate(sites)
        polygon = build_polygons(sites, triangles)[0]  # corner site

        windings = polygon_winding(sites[0], polygon)
        interior_turns = windings[:len(polygon) - 1]
        assert all(w < 0 for w in interior_turns)

    def test_build_sites(self):
        triangles = triangulate(SQUARE)
        sites = build_sites(SQUARE, triangles)
        assert [s.point for s in sites] == SQUARE
        assert [s.polygon for s in sites] == build_polygons(SQUARE, triangles)
