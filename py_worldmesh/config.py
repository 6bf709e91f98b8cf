"""Configuration management."""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.triangulation import DegeneracyPolicy, DuplicatePolicy


class Settings(BaseSettings):
    """Application settings pulled from WORLDMESH_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WORLDMESH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # World
    world_name: str = Field(default="world", description="World name")
    world_width: float = Field(default=1920.0, gt=0, description="World width")
    world_height: float = Field(default=1080.0, gt=0, description="World height")

    # Site generation
    generator: Literal["random", "jittered"] = Field(
        default="random", description="Point generator (random or jittered)"
    )
    point_count: int = Field(default=500, ge=0, description="Sites for the random generator")
    grid_columns: int = Field(default=32, ge=1, description="Columns for the jittered generator")
    grid_rows: int = Field(default=18, ge=1, description="Rows for the jittered generator")
    seed: Optional[int] = Field(default=None, description="Random seed for reproducible sites")

    # Triangulation
    super_triangle_margin: float = Field(
        default=20.0, gt=0, description="Super-triangle size as a multiple of the site extent"
    )
    degeneracy_epsilon: float = Field(
        default=1e-10, ge=0, description="Relative threshold for collinear triangles"
    )
    degeneracy_policy: DegeneracyPolicy = Field(
        default=DegeneracyPolicy.SKIP, description="skip or fail on degenerate triangles"
    )
    duplicate_policy: DuplicatePolicy = Field(
        default=DuplicatePolicy.ADMIT, description="admit, skip or reject duplicate sites"
    )
    validate_output: bool = Field(
        default=False, description="Check the Delaunay property after generation"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["json", "plain"] = Field(default="json", description="Log format")


settings = Settings()
