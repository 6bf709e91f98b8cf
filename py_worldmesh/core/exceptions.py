"""Errors raised while generating a world mesh."""

from typing import List, Optional, Sequence

TRIANGULATION = "triangulation"
DUAL_MESH = "dual_mesh"
VALIDATION = "validation"


class WorldGenerationError(ValueError):
    """Base error for the generation pipeline.

    Carries the pipeline stage that failed and, where known, the index of the
    site being processed when the failure happened.
    """

    def __init__(self, message: str, stage: str = TRIANGULATION,
                 site_index: Optional[int] = None):
        self.stage = stage
        self.site_index = site_index
        self.detail = message
        location = f" at site {site_index}" if site_index is not None else ""
        super().__init__(f"{stage} failed{location}: {message}")


class InsufficientSitesError(WorldGenerationError):
    """Fewer than three sites were supplied."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"need at least 3 sites, got {count}", stage=TRIANGULATION)


class DegenerateGeometryError(WorldGenerationError):
    """Circumcircle of a (near-)collinear or coincident vertex triple."""

    def __init__(self, vertices: Sequence, site_index: Optional[int] = None,
                 stage: str = TRIANGULATION):
        self.vertices = tuple(vertices)
        super().__init__(
            f"degenerate triangle {self.vertices} has no stable circumcircle",
            stage=stage,
            site_index=site_index,
        )


class DuplicateSiteError(WorldGenerationError):
    """A site repeats the exact coordinates of an earlier one."""

    def __init__(self, point, site_index: int, first_index: int):
        self.point = point
        self.first_index = first_index
        super().__init__(
            f"site {point} duplicates site {first_index}",
            stage=TRIANGULATION,
            site_index=site_index,
        )


class MeshValidationError(WorldGenerationError):
    """Generated mesh broke one of its invariants."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        summary = "; ".join(self.problems[:5])
        if len(self.problems) > 5:
            summary += f" (+{len(self.problems) - 5} more)"
        super().__init__(summary, stage=VALIDATION)
