"""Glyph source records.

This module defines the in-memory form of one `.glyph` source file: its
header metadata plus the boolean raster. Records are immutable; every
transform (such as weight derivation) returns a new record.
"""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any

Grid = tuple[tuple[bool, ...], ...]

FILLED = "X"
EMPTY = "."


class Weight(str, Enum):
    """Weight variant of a glyph."""

    REGULAR = "regular"
    BOLD = "bold"


class GlyphKind(str, Enum):
    """Standalone character or multi-character ligature composite."""

    STANDALONE = "standalone"
    LIGATURE = "ligature"


def grid_from_rows(rows: list[list[bool]] | list[tuple[bool, ...]]) -> Grid:
    """Freeze a list of rows into an immutable grid."""
    return tuple(tuple(bool(cell) for cell in row) for row in rows)


@dataclass(frozen=True)
class GlyphSource:
    """One parsed glyph source file.

    Attributes:
        label: Human-readable short name (e.g. "A" or "=>")
        codepoint: Unicode scalar value (None for ligatures)
        weight: Weight variant
        components: Component labels for ligatures, None otherwise
        kind: Standalone glyph or ligature composite
        grid: grid[row][col] is True when the pixel is filled
        raster_lines: Raster rows exactly as they appeared in the source
        source_path: Path of the source file
        derived: True when produced by weight derivation
    """

    label: str
    codepoint: int | None
    grid: Grid
    weight: Weight = Weight.REGULAR
    components: tuple[str, ...] | None = None
    kind: GlyphKind = GlyphKind.STANDALONE
    raster_lines: tuple[str, ...] = ()
    source_path: Path | None = None
    derived: bool = False

    @property
    def width(self) -> int:
        """Number of columns, measured on the first row."""
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        """Number of raster rows."""
        return len(self.grid)

    @property
    def is_ligature(self) -> bool:
        return self.kind == GlyphKind.LIGATURE

    @property
    def reference(self) -> str:
        """Short reference used in logs and reports."""
        return str(self.source_path) if self.source_path is not None else self.label

    def identity(self) -> tuple[str, int | str]:
        """Key shared by all weight variants of the same character."""
        if self.is_ligature or self.codepoint is None:
            return ("label", self.label)
        return ("codepoint", self.codepoint)

    def is_rectangular(self) -> bool:
        """Check that every row has the width of the first row."""
        width = self.width
        return all(len(row) == width for row in self.grid)

    def is_empty(self) -> bool:
        """Check if the raster has no filled pixels."""
        return not any(any(row) for row in self.grid)

    def with_grid(self, grid: Grid, **changes: Any) -> "GlyphSource":
        """Return a copy of this record with a different raster.

        The raster text is regenerated from the new grid so that the
        record stays self-consistent.
        """
        raster_lines = tuple(
            "".join(FILLED if cell else EMPTY for cell in row) for row in grid
        )
        return replace(self, grid=grid, raster_lines=raster_lines, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the record
        """
        return {
            "label": self.label,
            "codepoint": self.codepoint,
            "weight": self.weight.value,
            "components": list(self.components) if self.components is not None else None,
            "kind": self.kind.value,
            "grid": [list(row) for row in self.grid],
            "raster_lines": list(self.raster_lines),
            "source_path": str(self.source_path) if self.source_path is not None else None,
            "derived": self.derived,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphSource":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a record

        Returns:
            GlyphSource instance
        """
        components = data.get("components")
        source_path = data.get("source_path")
        return cls(
            label=data["label"],
            codepoint=data["codepoint"],
            grid=grid_from_rows(data["grid"]),
            weight=Weight(data.get("weight", Weight.REGULAR.value)),
            components=tuple(components) if components is not None else None,
            kind=GlyphKind(data.get("kind", GlyphKind.STANDALONE.value)),
            raster_lines=tuple(data.get("raster_lines", ())),
            source_path=Path(source_path) if source_path is not None else None,
            derived=data.get("derived", False),
        )
