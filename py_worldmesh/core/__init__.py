"""
Core mesh generation functionality.
"""

from .geometry import Point, Edge, Triangle, Polygon, Site, Circumcircle, circumcircle, does_circumcircle_contain
from .exceptions import (
    WorldGenerationError, InsufficientSitesError, DegenerateGeometryError,
    DuplicateSiteError, MeshValidationError,
)
from .triangulation import (
    TriangulationOptions, DegeneracyPolicy, DuplicatePolicy,
    triangulate, extract_edges, super_triangle,
)
from .dual_mesh import build_polygons, build_sites, angular_comparator
from .point_generators import (
    PointGenerator, UniformRandomGenerator, JitteredGridGenerator,
    FixedPointGenerator, create_point_generator,
)
from .validation import find_delaunay_violations, check_mesh_invariants
from .world import World, WorldBuffers

__all__ = ['Point', 'Edge', 'Triangle', 'Polygon', 'Site', 'Circumcircle',
           'circumcircle', 'does_circumcircle_contain',
           'WorldGenerationError', 'InsufficientSitesError', 'DegenerateGeometryError',
           'DuplicateSiteError', 'MeshValidationError',
           'TriangulationOptions', 'DegeneracyPolicy', 'DuplicatePolicy',
           'triangulate', 'extract_edges', 'super_triangle',
           'build_polygons', 'build_sites', 'angular_comparator',
           'PointGenerator', 'UniformRandomGenerator', 'JitteredGridGenerator',
           'FixedPointGenerator', 'create_point_generator',
           'find_delaunay_violations', 'check_mesh_invariants',
           'World', 'WorldBuffers']
