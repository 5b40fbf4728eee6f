"""Domain models for gridfont.

This module contains the core domain models representing glyph sources,
rectangles, outlines and validation reports. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel compilation)
- Independent of fonttools implementation details

Key classes:
- GlyphSource: One parsed `.glyph` file (header metadata + raster)
- Rectangle: A block of filled pixels produced by compaction
- Point / Contour: Vector geometry in font units
- Outline: Vector outline of one glyph plus its metrics
- CompiledFont: Outlines and ligature substitutions of one weight variant
- ParseFailure: A source file that could not be read or parsed
- ValidationIssue / ValidationReport: Corpus validation results
"""

from gridfont.domain.contour import Contour, Point, WindingDirection
from gridfont.domain.glyph import (
    EMPTY,
    FILLED,
    Grid,
    GlyphKind,
    GlyphSource,
    Weight,
    grid_from_rows,
)
from gridfont.domain.outline import CompiledFont, LigatureSubstitution, Outline, Rectangle
from gridfont.domain.report import ParseFailure, Severity, ValidationIssue, ValidationReport

__all__: list[str] = [
    # Constants and aliases
    "EMPTY",
    "FILLED",
    "Grid",
    # Enums
    "GlyphKind",
    "Severity",
    "Weight",
    "WindingDirection",
    # Core types
    "CompiledFont",
    "Contour",
    "GlyphSource",
    "LigatureSubstitution",
    "Outline",
    "ParseFailure",
    "Point",
    "Rectangle",
    "ValidationIssue",
    "ValidationReport",
    "grid_from_rows",
]
