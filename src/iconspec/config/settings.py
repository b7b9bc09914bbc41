"""Configuration settings for iconspec."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ExpandConfig(BaseModel):
    """Default flags for preset expansion.

    These mirror the per-request expansion options and are used whenever a
    caller does not supply its own.
    """

    normalize: bool = Field(
        default=True,
        description="Canonicalize viewBox and number formatting",
    )
    snap_to_grid: bool = Field(
        default=True,
        description="Round geometry numbers to the preset grid",
    )
    fill_missing_defaults: bool = Field(
        default=True,
        description="Fill missing export settings with defaults",
    )


class ValidationConfig(BaseModel):
    """Configuration for spec validation."""

    grid_epsilon: float = Field(
        default=1e-6,
        gt=0.0,
        le=0.01,
        description="Tolerance when testing whether a value sits on the grid",
    )


class OutputConfig(BaseModel):
    """Configuration for written artifacts."""

    output_dir: Path | None = Field(
        default=None,
        description="Directory for generated files (None = next to the input)",
    )
    color: str | None = Field(
        default=None,
        description="Replace currentColor with this color when writing SVG",
    )
    minified: bool = Field(
        default=False,
        description="Write the minified SVG form instead of the pretty form",
    )
    write_expanded: bool = Field(
        default=False,
        description="Also write the expanded spec as JSON",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch builds."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
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
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level


class IconSpecSettings(BaseModel):
    """Main application settings."""

    expand: ExpandConfig = Field(default_factory=ExpandConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> IconSpecSettings:
    """Get default application settings."""
    return IconSpecSettings()
