"""Configuration settings for clipbridge."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from clipbridge.domain.enums import EndType, FillRule, JoinType

# Decimal precision range accepted by the engine's double-precision API
MIN_PRECISION = -8
MAX_PRECISION = 8


class BooleanOptions(BaseModel):
    """Options for boolean set operations."""

    model_config = ConfigDict(frozen=True)

    fill_rule: FillRule = Field(
        default=FillRule.EVEN_ODD,
        description="Winding rule deciding which regions are filled",
    )
    precision: int = Field(
        default=2,
        ge=MIN_PRECISION,
        le=MAX_PRECISION,
        description="Decimal places kept when scaling coordinates to integers",
    )
    preserve_collinear: bool = Field(
        default=True,
        description="Keep vertices lying on a straight edge",
    )
    reverse_solution: bool = Field(
        default=False,
        description="Reverse the orientation of output paths",
    )


class OffsetOptions(BaseModel):
    """Options for path offsetting (inflate/shrink)."""

    model_config = ConfigDict(frozen=True)

    join_type: JoinType = Field(
        default=JoinType.MITER,
        description="How offset edges are joined at vertices",
    )
    end_type: EndType = Field(
        default=EndType.POLYGON,
        description="How path ends are treated",
    )
    precision: int = Field(
        default=2,
        ge=MIN_PRECISION,
        le=MAX_PRECISION,
        description="Decimal places kept when scaling coordinates to integers",
    )
    miter_limit: float = Field(
        default=2.0,
        gt=0.0,
        description="Maximum ratio of miter length to offset delta",
    )
    arc_tolerance: float = Field(
        default=0.0,
        ge=0.0,
        description="Maximum deviation when approximating round joins (0 = engine default)",
    )
    reverse_solution: bool = Field(
        default=False,
        description="Reverse the orientation of output paths",
    )


class RectClipOptions(BaseModel):
    """Options for rectangle clipping."""

    model_config = ConfigDict(frozen=True)

    precision: int = Field(
        default=2,
        ge=MIN_PRECISION,
        le=MAX_PRECISION,
        description="Decimal places kept when scaling coordinates to integers",
    )


class EngineConfig(BaseModel):
    """Native engine location."""

    library_path: Path | None = Field(
        default=None,
        description="Explicit path to the Clipper2 shared library (None = search)",
    )


class BufferConfig(BaseModel):
    """Capacity hints for decoded collections."""

    initial_points: int = Field(
        default=16,
        ge=0,
        description="Anticipated number of points per path",
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


class ClipBridgeSettings(BaseModel):
    """Main application settings."""

    boolean: BooleanOptions = Field(default_factory=BooleanOptions)
    offset: OffsetOptions = Field(default_factory=OffsetOptions)
    rect_clip: RectClipOptions = Field(default_factory=RectClipOptions)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    buffers: BufferConfig = Field(default_factory=BufferConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ClipBridgeSettings:
    """Get default application settings."""
    return ClipBridgeSettings()
