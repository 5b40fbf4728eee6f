"""Converters from domain outlines to fonttools glyphs.

This module handles the conversion between our domain models (Outline,
Contour, Point) and fonttools' TrueType glyph representation.
"""

from typing import Any

from fontTools.pens.recordingPen import RecordingPen
from fontTools.pens.ttGlyphPen import TTGlyphPen

from gridfont.domain import Contour, Outline, Point


def outline_to_ttglyph(outline: Outline) -> Any:
    """Draw an outline into a TrueType glyph.

    Contour points are written in their stored order, so the clockwise
    winding of the outline builder reaches the `glyf` table unchanged.

    Args:
        outline: Domain outline in font units

    Returns:
        fonttools `Glyph` object for the `glyf` table
    """
    pen = TTGlyphPen(None)
    for contour in outline.contours:
        _draw_contour(contour, pen)
    return pen.glyph()


def _draw_contour(contour: Contour, pen: Any) -> None:
    if not contour.points:
        return
    first, *rest = contour.points
    pen.moveTo(first.to_tuple())
    for point in rest:
        pen.lineTo(point.to_tuple())
    pen.closePath()


def glyph_to_contours(glyph_set: Any, name: str) -> list[Contour]:
    """Read a glyph of a compiled font back into domain contours.

    Uses a RecordingPen to extract the outline as drawing commands. Only
    straight segments occur in pixel fonts.

    Args:
        glyph_set: Glyph set of a loaded TTFont
        name: Glyph name

    Returns:
        List of contours in drawing order
    """
    pen = RecordingPen()
    glyph_set[name].draw(pen)

    contours: list[Contour] = []
    current: list[Point] = []
    for command, args in pen.value:
        if command == "moveTo":
            current = [Point(*args[0])]
        elif command == "lineTo":
            current.append(Point(*args[0]))
        elif command in ("closePath", "endPath"):
            if current:
                contours.append(Contour(points=tuple(current)))
            current = []
    return contours
