"""Coordinate mapping from pixel rectangles to font-unit outlines.

Coordinate system:
- In font units, y=0 is the baseline and y grows upward.
- Row 0 of the raster is the visual top.
- fontY = (baseline_row - row) * pixel_size  (top edge of a pixel row)
- fontX = col * pixel_size                    (left edge of a pixel column)

Every rectangle becomes one closed four-vertex sub-path traversed
top-left, top-right, bottom-right, bottom-left. That is clockwise in a
Y-up frame, the TrueType convention for filled contours; all sub-paths of
a glyph share it.
"""

from collections.abc import Sequence

from gridfont.domain import Contour, GlyphSource, Outline, Point, Rectangle


def map_rectangle(rect: Rectangle, pixel_size: int, baseline_row: int) -> Contour:
    """Map one pixel rectangle to a clockwise contour in font units."""
    left = rect.x * pixel_size
    right = (rect.x + rect.w) * pixel_size
    top = (baseline_row - rect.y) * pixel_size
    bottom = (baseline_row - (rect.y + rect.h)) * pixel_size

    return Contour(
        points=(
            Point(left, top),
            Point(right, top),
            Point(right, bottom),
            Point(left, bottom),
        )
    )


def map_rectangles(
    rectangles: Sequence[Rectangle],
    pixel_size: int,
    baseline_row: int,
) -> tuple[Contour, ...]:
    """Map rectangles to contours, preserving their order."""
    return tuple(map_rectangle(rect, pixel_size, baseline_row) for rect in rectangles)


def advance_width_for(glyph: GlyphSource, base_width: int, pixel_size: int) -> int:
    """Advance width of a glyph in font units.

    Standalone glyphs are monospaced at ``base_width`` pixels. Ligatures keep
    their own width (a multiple of the base) so the cursor moves as far as it
    would over the characters they replace.
    """
    if glyph.is_ligature:
        return glyph.width * pixel_size
    return base_width * pixel_size


def glyph_name_for(glyph: GlyphSource) -> str:
    """PostScript-safe glyph name for a record.

    Encoded glyphs use the AGL ``uniXXXX`` / ``uXXXXX`` forms; ligatures and
    unencoded glyphs are named after the hex codes of their label.
    """
    if not glyph.is_ligature and glyph.codepoint is not None:
        if glyph.codepoint <= 0xFFFF:
            return f"uni{glyph.codepoint:04X}"
        return f"u{glyph.codepoint:05X}"

    if glyph.label.isascii() and glyph.label.isalnum():
        return f"lig.{glyph.label}"
    return "lig." + "_".join(f"{ord(char):04X}" for char in glyph.label)


def build_outline(
    glyph: GlyphSource,
    rectangles: Sequence[Rectangle],
    pixel_size: int,
    baseline_row: int,
    base_width: int,
) -> Outline:
    """Build the outline of one glyph from its compacted rectangles.

    Args:
        glyph: Source record (label, codepoint, kind, weight)
        rectangles: Compactor output for the record's raster
        pixel_size: Size of one pixel in font units
        baseline_row: Raster row aligned with the baseline
        base_width: Standard glyph width in pixels

    Returns:
        Immutable outline with one contour per rectangle
    """
    return Outline(
        name=glyph_name_for(glyph),
        label=glyph.label,
        contours=map_rectangles(rectangles, pixel_size, baseline_row),
        advance_width=advance_width_for(glyph, base_width, pixel_size),
        unicode=None if glyph.is_ligature else glyph.codepoint,
        weight=glyph.weight,
    )
