"""Site placement strategies."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import numpy as np
import structlog

from .geometry import Point, as_points

logger = structlog.get_logger()


class PointGenerator(ABC):
    """Produces the initial site set for a world of the given size."""

    def __init__(self, width: float, height: float):
        if width <= 0 or height <= 0:
            raise ValueError(f"width and height must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    @abstractmethod
    def generate(self) -> List[Point]:
        """Return the sites, in insertion order."""


class UniformRandomGenerator(PointGenerator):
    """``count`` points drawn uniformly over the world rectangle."""

    def __init__(self, width: float, height: float, count: int, seed: Optional[int] = None):
        super().__init__(width, height)
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        self.count = count
        self.seed = seed

    def generate(self) -> List[Point]:
        rng = np.random.default_rng(self.seed)
        coords = rng.random((self.count, 2)) * np.array([self.width, self.height])
        logger.info("Uniform sites generated", count=self.count, seed=self.seed)
        return as_points(coords)


class JitteredGridGenerator(PointGenerator):
    """
    One point per grid cell, randomly displaced from the cell center.

    Each coordinate moves by at most 90% of half the cell size, so points
    stay inside their own cell and never coincide.
    """

    def __init__(self, width: float, height: float, columns: int, rows: int,
                 seed: Optional[int] = None):
        super().__init__(width, height)
        if columns < 1 or rows < 1:
            raise ValueError(f"grid must have at least one cell, got {columns}x{rows}")
        self.columns = columns
        self.rows = rows
        self.seed = seed

    def generate(self) -> List[Point]:
        rng = np.random.default_rng(self.seed)

        cell = np.array([self.width / self.columns, self.height / self.rows])
        jittering = cell / 2 * 0.9  # max deviation

        # row-major: y outer, x inner
        cols, rows = np.meshgrid(np.arange(self.columns), np.arange(self.rows))
        centers = (np.column_stack([cols.ravel(), rows.ravel()]) + 0.5) * cell
        offsets = rng.random(centers.shape) * (2 * jittering) - jittering

        logger.info("Jittered sites generated", columns=self.columns, rows=self.rows,
                    seed=self.seed)
        return as_points(centers + offsets)


class FixedPointGenerator(PointGenerator):
    """Replays a pre-fixed, ordered list of sites."""

    def __init__(self, points: Sequence, width: Optional[float] = None,
                 height: Optional[float] = None):
        self.points = as_points(points)
        # Default to the extent of the sites, at least one unit each way.
        span = np.ptp(np.asarray(self.points), axis=0) if self.points else np.zeros(2)
        super().__init__(width if width is not None else max(float(span[0]), 1.0),
                         height if height is not None else max(float(span[1]), 1.0))

    def generate(self) -> List[Point]:
        return list(self.points)


def create_point_generator(settings) -> PointGenerator:
    """
    Build the generator selected by the settings.

    Args:
        settings: Object with ``generator``, ``world_width``, ``world_height``,
            ``point_count``, ``grid_columns``, ``grid_rows`` and ``seed``

    Returns:
        Configured PointGenerator
    """
    kind = settings.generator.lower()
    if kind == "random":
        return UniformRandomGenerator(settings.world_width, settings.world_height,
                                      settings.point_count, settings.seed)
    if kind == "jittered":
        return JitteredGridGenerator(settings.world_width, settings.world_height,
                                     settings.grid_columns, settings.grid_rows,
                                     settings.seed)
    raise ValueError(f"Unknown point generator: {settings.generator}")
