"""
Procedural planar mesh generation: Delaunay triangulation of 2D sites and
their barycentric dual polygons.
"""

__version__ = "0.1.0"
