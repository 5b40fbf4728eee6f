"""Exception hierarchy for gridfont."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gridfont.domain.report import ValidationReport


class GridfontError(Exception):
    """Base exception for all gridfont errors."""

    pass


class ConfigurationError(GridfontError):
    """Invalid or unreadable font configuration."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid configuration '{source}': {reason}")


class GlyphSourceError(GridfontError):
    """Errors related to reading glyph source files."""

    pass


class GlyphParseError(GlyphSourceError):
    """A glyph source file has malformed header syntax."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse glyph '{path}': {reason}")


class GlyphReadError(GlyphSourceError):
    """A glyph source file could not be read from disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read glyph '{path}': {reason}")


class CompilationError(GridfontError):
    """Errors raised while turning rasters into outlines."""

    pass


class GridShapeError(CompilationError):
    """A non-rectangular raster reached the compactor."""

    def __init__(self, row: int, length: int, expected: int) -> None:
        self.row = row
        self.length = length
        self.expected = expected
        super().__init__(
            f"Raster row {row} has {length} cells, expected {expected}; "
            "grids must be validated before compaction"
        )


class GlyphCompileError(CompilationError):
    """Error compiling a specific glyph."""

    def __init__(self, label: str, reason: str) -> None:
        self.label = label
        self.reason = reason
        super().__init__(f"Error compiling glyph '{label}': {reason}")


class ValidationFailedError(GridfontError):
    """The glyph corpus did not pass validation."""

    def __init__(self, report: "ValidationReport") -> None:
        self.report = report
        super().__init__(
            f"Glyph corpus failed validation with {len(report.errors)} error(s)"
        )


class FontError(GridfontError):
    """Errors related to font assembly or saving."""

    pass


class FontSaveError(FontError):
    """Error saving a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save font '{path}': {reason}")
