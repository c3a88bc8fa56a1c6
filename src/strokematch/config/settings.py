"""Configuration settings for Strokematch."""

from pathlib import Path

from pydantic import BaseModel, Field


class EncoderConfig(BaseModel):
    """Configuration for shape encoding.

    Minimum sizes are in input coordinate units. The defaults suit input
    coordinates in the range of a typical screen (x: 0-1200, y: 0-800); scale
    them with the input if strokes are drawn in much smaller units.
    """

    precision: int = Field(
        default=5,
        ge=1,
        le=32,
        description="Resolution of every map: grid size, ring count, sqrt of flat map length",
    )
    min_width: float = Field(
        default=50.0,
        gt=0.0,
        description="Minimum bounding box width before partitioning",
    )
    min_height: float = Field(
        default=50.0,
        gt=0.0,
        description="Minimum bounding box height before partitioning",
    )
    min_radius: float = Field(
        default=25.0,
        gt=0.0,
        description="Minimum circle map radius for tightly clustered points",
    )


class WeightsConfig(BaseModel):
    """Weights applied to each representation difference when scoring."""

    grid: float = Field(default=1.0, ge=0.0, description="Grid map weight")
    circle: float = Field(default=1.0, ge=0.0, description="Circle map weight")
    horizontal: float = Field(default=1.0, ge=0.0, description="Horizontal flat map weight")
    vertical: float = Field(default=1.0, ge=0.0, description="Vertical flat map weight")


class LibraryConfig(BaseModel):
    """Configuration for the libraries a recognizer starts with."""

    default_names: list[str] = Field(
        default_factory=lambda: ["Default"],
        min_length=1,
        description="Names of the libraries created on startup",
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


class StrokeMatchSettings(BaseModel):
    """Main application settings."""

    encoder: EncoderConfig = Field(default_factory=EncoderConfig)
    weights: WeightsConfig = Field(default_factory=WeightsConfig)
    library: LibraryConfig = Field(default_factory=LibraryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> StrokeMatchSettings:
    """Get default application settings."""
    return StrokeMatchSettings()
