"""
World construction.

A World owns its sites and everything derived from them. All collections
are built once, synchronously, when the World is created and stay
read-only afterwards.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import structlog

from .dual_mesh import build_polygons
from .exceptions import DUAL_MESH, MeshValidationError, WorldGenerationError
from .geometry import Edge, Point, Polygon, Site, Triangle, as_points
from .point_generators import PointGenerator, create_point_generator
from .triangulation import TriangulationOptions, extract_edges, super_triangle, triangulate
from .validation import check_mesh_invariants, find_delaunay_violations

logger = structlog.get_logger()


@dataclass
class WorldBuffers:
    """Vertex data laid out for upload to a renderer.

    ``edges`` holds one row per endpoint, so consecutive row pairs form the
    line segments.
    """
    points: np.ndarray
    edges: np.ndarray
    centroids: np.ndarray
    polygons: List[np.ndarray]


def _as_array(points) -> np.ndarray:
    return np.asarray(points, dtype=np.float32).reshape(-1, 2)


class World:
    """Sites, their Delaunay triangulation and the dual polygons."""

    def __init__(self, name: str, point_generator: PointGenerator,
                 options: Optional[TriangulationOptions] = None,
                 validate: bool = False):
        """
        Generate the world.

        Args:
            name: World name, used in logs
            point_generator: Source of the sites, called exactly once
            options: Triangulation options
            validate: Run the Delaunay and invariant checks after building

        Raises:
            WorldGenerationError: if any stage fails; ``stage`` tells which
        """
        self.name = name
        self.options = options or TriangulationOptions()
        log = logger.bind(world=name)

        self._points: Tuple[Point, ...] = tuple(as_points(point_generator.generate()))
        log.info("Generating world", sites=len(self._points),
                 width=point_generator.width, height=point_generator.height)

        try:
            triangles = triangulate(self._points, self.options)
        except WorldGenerationError as e:
            log.error("World generation failed", stage=e.stage,
                      site_index=e.site_index, error=e.detail)
            raise
        self._triangles: Tuple[Triangle, ...] = tuple(triangles)
        self._edges: Tuple[Edge, ...] = tuple(extract_edges(self._triangles))

        try:
            polygons = build_polygons(self._points, self._triangles)
        except Exception as e:
            log.error("World generation failed", stage=DUAL_MESH, error=str(e))
            raise WorldGenerationError(str(e), stage=DUAL_MESH) from e
        self._polygons: Tuple[Polygon, ...] = tuple(polygons)

        if validate:
            self.validate()

        log.info("World generated", **self.summary())

    @classmethod
    def from_settings(cls, settings=None) -> "World":
        """Build a World from application settings."""
        if settings is None:
            from ..config import settings
        options = TriangulationOptions(
            super_triangle_margin=settings.super_triangle_margin,
            epsilon=settings.degeneracy_epsilon,
            degeneracy_policy=settings.degeneracy_policy,
            duplicate_policy=settings.duplicate_policy,
        )
        return cls(settings.world_name, create_point_generator(settings), options,
                   validate=settings.validate_output)

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    @property
    def triangles(self) -> Tuple[Triangle, ...]:
        return self._triangles

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    @property
    def polygons(self) -> Tuple[Polygon, ...]:
        return self._polygons

    @property
    def sites(self) -> List[Site]:
        return [Site(point, polygon) for point, polygon in zip(self._points, self._polygons)]

    @property
    def centroids(self) -> List[Point]:
        return [triangle.centroid for triangle in self._triangles]

    def validate(self) -> None:
        """
        Check the Delaunay property and structural invariants.

        Raises:
            MeshValidationError: listing every problem found
        """
        outer = super_triangle(self._points, self.options.super_triangle_margin)
        problems = check_mesh_invariants(self._points, self._triangles, self._edges,
                                         self._polygons, outer.vertices)
        for t_index, s_index in find_delaunay_violations(self._points, self._triangles):
            if s_index < 0:
                problems.append(f"triangle {t_index} is degenerate")
            else:
                problems.append(f"site {s_index} inside circumcircle of triangle {t_index}")

        if problems:
            logger.error("World validation failed", world=self.name, problems=len(problems))
            raise MeshValidationError(problems)
        logger.info("World validated", world=self.name)

    def vertex_buffers(self) -> WorldBuffers:
        """Pack points, edge endpoints, centroids and polygons as float32 arrays."""
        return WorldBuffers(
            points=_as_array(self._points),
            edges=_as_array([p for edge in self._edges for p in (edge.a, edge.b)]),
            centroids=_as_array(self.centroids),
            polygons=[_as_array(polygon.vertices) for polygon in self._polygons],
        )

    def summary(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "sites": len(self._points),
            "triangles": len(self._triangles),
            "edges": len(self._edges),
            "closed_polygons": sum(1 for p in self._polygons if p.is_closed),
        }
