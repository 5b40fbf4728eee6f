"""Configuration settings for gridfont."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from gridfont.exceptions import ConfigurationError


class _ConfigModel(BaseModel):
    """Accepts both snake_case and the camelCase keys of font-config.json."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FontInfoConfig(_ConfigModel):
    """Naming metadata written to the font's name table."""

    family_name: str = Field(default="Gridfont", min_length=1, description="Font family name")
    version: str = Field(
        default="1.000",
        pattern=r"^\d+\.\d+$",
        description="Font version as major.minor, also written as the head revision",
    )
    description: str = Field(default="", description="Font description")
    designer: str = Field(default="", description="Designer name")
    url: str = Field(default="", description="Vendor or project URL")


class GridConfig(_ConfigModel):
    """Raster dimensions shared by every glyph in the corpus."""

    width: int = Field(default=8, ge=1, description="Standard glyph width in pixels")
    height: int = Field(default=16, ge=1, description="Glyph height in pixels")
    baseline_row: int = Field(
        default=13,
        ge=0,
        description="Row index of the baseline (0-based from the top)",
    )


class MetricsConfig(_ConfigModel):
    """Mapping from pixels to font units."""

    pixel_size: int = Field(default=120, ge=1, description="Size of one pixel in font units")
    ascender_px: int = Field(default=13, ge=0, description="Pixel rows above the baseline")
    descender_px: int = Field(default=3, ge=0, description="Pixel rows below the baseline")
    line_gap_px: int = Field(default=0, ge=0, description="Extra line gap in pixel rows")

    @property
    def ascender(self) -> int:
        return self.ascender_px * self.pixel_size

    @property
    def descender(self) -> int:
        """Descender in font units (negative)."""
        return -(self.descender_px * self.pixel_size)

    @property
    def line_gap(self) -> int:
        return self.line_gap_px * self.pixel_size


class WeightsConfig(_ConfigModel):
    """OS/2 weight classes for each weight variant."""

    regular: int = Field(default=400, ge=1, le=1000)
    bold: int = Field(default=700, ge=1, le=1000)


class CorpusConfig(_ConfigModel):
    """Where glyph sources live and what a complete corpus contains."""

    glyph_dirs: list[Path] = Field(
        default_factory=lambda: [Path("glyphs/ascii")],
        description="Directories scanned (non-recursively) for .glyph files",
    )
    required_start: int = Field(
        default=0x20,
        ge=0,
        le=0x10FFFF,
        description="First codepoint every corpus must contain",
    )
    required_end: int = Field(
        default=0x7E,
        ge=0,
        le=0x10FFFF,
        description="Last codepoint (inclusive) every corpus must contain",
    )
    ligatures: bool = Field(default=True, description="Compile ligature composites")
    derive_bold: bool = Field(
        default=True,
        description="Build a bold font, deriving missing bold glyphs from regular ones",
    )
    missing_reference: str = Field(
        default="glyphs/ascii/",
        description="Source reference reported for missing required glyphs",
    )

    @model_validator(mode="after")
    def _check_range(self) -> "CorpusConfig":
        if self.required_start > self.required_end:
            raise ValueError(
                f"required_start ({self.required_start:#x}) is after "
                f"required_end ({self.required_end:#x})"
            )
        return self


class ProcessingConfig(_ConfigModel):
    """Configuration for corpus parsing and glyph compilation."""

    max_workers: int | None = Field(
        default=1,
        ge=1,
        description="Max worker processes (1 = in-process, None = auto)",
    )


class LoggingConfig(_ConfigModel):
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


class GridfontSettings(_ConfigModel):
    """Main application settings."""

    font: FontInfoConfig = Field(default_factory=FontInfoConfig)
    grid: GridConfig = Field(default_factory=GridConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)
    weights: WeightsConfig = Field(default_factory=WeightsConfig)
    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    project_root: Path = Field(
        default=Path("."),
        description="Directory relative paths are resolved against",
    )

    @model_validator(mode="after")
    def _check_baseline(self) -> "GridfontSettings":
        if self.grid.baseline_row > self.grid.height:
            raise ValueError(
                f"baseline_row {self.grid.baseline_row} lies outside a "
                f"{self.grid.height}-row grid"
            )
        return self

    @property
    def units_per_em(self) -> int:
        """Em square height: one pixel size per grid row."""
        return self.metrics.pixel_size * self.grid.height

    @property
    def advance_width(self) -> int:
        """Advance width of a standalone glyph."""
        return self.metrics.pixel_size * self.grid.width

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the project root."""
        return path if path.is_absolute() else self.project_root / path

    def glyph_dirs(self) -> list[Path]:
        return [self.resolve(d) for d in self.corpus.glyph_dirs]


def get_default_settings() -> GridfontSettings:
    """Get default application settings."""
    return GridfontSettings()


def load_settings(path: Path) -> GridfontSettings:
    """Load settings from a font-config JSON file.

    Relative paths inside the file are resolved against the file's directory
    unless the file sets ``projectRoot`` explicitly.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Parsed settings

    Raises:
        ConfigurationError: If the file is missing, not JSON, or invalid
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(str(path), e.strerror or str(e)) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(str(path), f"not valid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(str(path), "top-level value must be an object")

    if "projectRoot" not in raw and "project_root" not in raw:
        raw["projectRoot"] = str(path.parent)

    try:
        return GridfontSettings.model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(str(path), f"{location}: {first['msg']}") from e
