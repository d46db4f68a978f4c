"""Configuration settings for msdfkit."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class GeometryConfig(BaseModel):
    """Tolerances used when validating and measuring contours.

    Tolerances are relative to the size (bounding-box diagonal) of the
    contour being checked, so they hold for font units and unit squares alike.
    """

    closure_tolerance: float = Field(
        default=1e-6,
        gt=0.0,
        le=0.1,
        description="Max gap between consecutive edge endpoints (relative to contour size)",
    )
    area_tolerance: float = Field(
        default=1e-9,
        gt=0.0,
        le=0.1,
        description="Signed area below this (relative to size squared) is ambiguous",
    )
    samples_per_curve: int = Field(
        default=16,
        ge=2,
        le=256,
        description="Points sampled per curved edge for area and containment tests",
    )

    def scaled_closure_tolerance(self, size: float) -> float:
        """Get the closure tolerance for a contour of the given size."""
        return self.closure_tolerance * max(size, 1.0)


class ColoringConfig(BaseModel):
    """Configuration for edge coloring."""

    corner_angle_threshold: float = Field(
        default=3.0,
        gt=0.0,
        lt=180.0,
        description="Tangent deviation (degrees) above which a corner is sharp",
    )
    min_edges: int = Field(
        default=3,
        ge=2,
        le=16,
        description="Fewest edges a contour with sharp corners needs to be colored",
    )


class FieldConfig(BaseModel):
    """Configuration for the output distance field."""

    width: int = Field(default=32, ge=1, le=8192, description="Field width in pixels")
    height: int = Field(default=32, ge=1, le=8192, description="Field height in pixels")
    channels: int = Field(default=3, description="Channels per pixel (1, 3 or 4)")
    distance_range: float = Field(
        default=4.0,
        gt=0.0,
        description="Width of the representable distance range, in pixels",
    )
    scale: float | None = Field(
        default=None,
        gt=0.0,
        description="Pixels per shape unit (None = fit the shape into the field)",
    )
    translate: tuple[float, float] | None = Field(
        default=None,
        description="Shape-space translation applied before scaling (None = center)",
    )
    sub_samples: int = Field(
        default=1,
        ge=1,
        le=8,
        description="Sub-samples per pixel along each axis",
    )

    @field_validator("channels")
    @classmethod
    def _check_channels(cls, value: int) -> int:
        if value not in (1, 3, 4):
            raise ValueError("channels must be 1, 3 or 4")
        return value


class ProcessingConfig(BaseModel):
    """Configuration for field sampling."""

    max_workers: int | None = Field(
        default=1,
        ge=1,
        description="Worker processes for sampling (1 = in-process, None = auto)",
    )
    rows_per_task: int = Field(
        default=8,
        ge=1,
        description="Raster rows sampled per worker task",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )

    @field_validator("log_level", "file_log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        if value.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {value}")
        return value.upper()


class MsdfSettings(BaseModel):
    """Main application settings."""

    coloring: ColoringConfig = Field(default_factory=ColoringConfig)
    field: FieldConfig = Field(default_factory=FieldConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> MsdfSettings:
    """Get default application settings."""
    return MsdfSettings()
