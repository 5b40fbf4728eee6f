"""Bold weight derivation.

When a corpus has no hand-drawn bold variant of a glyph, a bold raster is
derived from the regular one by widening every stroke one pixel to the
right. Hand-drawn bold records always take precedence.
"""

from collections.abc import Sequence

from gridfont.domain import Grid, GlyphSource, Weight


def derive_bold_grid(grid: Grid) -> Grid:
    """Fill the cell right of every filled cell, except on the last column.

    Returns a freshly allocated grid; the input is never modified.
    """
    bold_rows: list[tuple[bool, ...]] = []
    for row in grid:
        cells = list(row)
        for col in range(len(row) - 1):
            if row[col]:
                cells[col + 1] = True
        bold_rows.append(tuple(cells))
    return tuple(bold_rows)


def derive_bold(glyph: GlyphSource) -> GlyphSource:
    """Derive a bold record from a regular one."""
    return glyph.with_grid(derive_bold_grid(glyph.grid), weight=Weight.BOLD, derived=True)


def resolve_weight(glyphs: Sequence[GlyphSource], weight: Weight) -> list[GlyphSource]:
    """Select the records that make up one weight variant.

    For the regular weight this is every regular record. For bold, explicit
    bold records are used as they are and every regular record without a
    bold counterpart (same codepoint, or same label for ligatures) gets a
    derived bold record. Input order is preserved, derived records taking the
    position of their regular source.

    Args:
        glyphs: Full corpus, sorted by source path
        weight: Weight variant to assemble

    Returns:
        Records for the requested weight
    """
    if weight == Weight.REGULAR:
        return [g for g in glyphs if g.weight == Weight.REGULAR]

    explicit = {g.identity() for g in glyphs if g.weight == Weight.BOLD}
    resolved: list[GlyphSource] = []
    for glyph in glyphs:
        if glyph.weight == Weight.BOLD:
            resolved.append(glyph)
        elif glyph.identity() not in explicit:
            resolved.append(derive_bold(glyph))
    return resolved
