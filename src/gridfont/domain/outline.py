"""Rectangles and vector outlines.

Rectangles are the transient product of raster compaction; outlines are
what the font assembler consumes.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from gridfont.domain.contour import Contour
from gridfont.domain.glyph import Weight


@dataclass(frozen=True, slots=True)
class Rectangle:
    """An axis-aligned block of filled pixels.

    Attributes:
        x: Column of the leftmost pixel
        y: Row of the topmost pixel (row 0 is the top of the raster)
        w: Width in pixels
        h: Height in pixels
    """

    x: int
    y: int
    w: int
    h: int

    def __post_init__(self) -> None:
        if self.w <= 0 or self.h <= 0:
            raise ValueError(f"Rectangle extent must be positive, got {self.w}x{self.h}")

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yield every covered (row, col) cell."""
        for row in range(self.y, self.y + self.h):
            for col in range(self.x, self.x + self.w):
                yield (row, col)

    @property
    def area(self) -> int:
        return self.w * self.h


@dataclass(frozen=True)
class Outline:
    """Vector outline of one glyph in font units.

    Attributes:
        name: PostScript-safe glyph name used in the font
        label: Label of the source record
        contours: Closed clockwise sub-paths, one per rectangle
        advance_width: Horizontal advance in font units
        unicode: Unicode value (None for ligatures)
        weight: Weight variant the outline belongs to
    """

    name: str
    label: str
    contours: tuple[Contour, ...]
    advance_width: int
    unicode: int | None = None
    weight: Weight = Weight.REGULAR

    def is_empty(self) -> bool:
        """Check if outline has no sub-paths (e.g. space)."""
        return len(self.contours) == 0

    def bounding_box(self) -> tuple[int, int, int, int]:
        """Union of the contour bounding boxes, (0, 0, 0, 0) when empty."""
        if not self.contours:
            return (0, 0, 0, 0)
        boxes = [c.bounding_box() for c in self.contours]
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "name": self.name,
            "label": self.label,
            "contours": [c.to_dict() for c in self.contours],
            "advance_width": self.advance_width,
            "unicode": self.unicode,
            "weight": self.weight.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Outline":
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            label=data["label"],
            contours=tuple(Contour.from_dict(c) for c in data["contours"]),
            advance_width=data["advance_width"],
            unicode=data["unicode"],
            weight=Weight(data["weight"]),
        )


@dataclass(frozen=True)
class CompiledFont:
    """Everything the font assembler needs for one weight variant.

    Attributes:
        weight: Weight variant
        outlines: Glyph outlines in glyph order
        substitutions: Ligature substitutions to register
    """

    weight: Weight
    outlines: tuple[Outline, ...]
    substitutions: tuple["LigatureSubstitution", ...] = ()

    @property
    def rectangle_count(self) -> int:
        return sum(len(o.contours) for o in self.outlines)


@dataclass(frozen=True)
class LigatureSubstitution:
    """Single substitution of a component sequence by a ligature glyph.

    Attributes:
        ligature: Glyph name of the ligature
        components: Glyph names of the components, in typing order
        codepoints: Codepoints of the components, in typing order
    """

    ligature: str
    components: tuple[str, ...]
    codepoints: tuple[int, ...]
