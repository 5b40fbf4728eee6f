"""Unit tests for grid-to-font-unit coordinate mapping."""

import pytest

from gridfont.core.compactor import compact_grid
from gridfont.core.mapper import (
    advance_width_for,
    build_outline,
    glyph_name_for,
    map_rectangle,
    map_rectangles,
)
from gridfont.domain import GlyphKind, GlyphSource, Point, Rectangle, Weight, WindingDirection

PIXEL = 120
BASELINE = 13


class TestMapRectangle:
    """Tests for map_rectangle."""

    def test_cell_above_baseline_sits_on_it(self):
        contour = map_rectangle(Rectangle(x=0, y=BASELINE - 1, w=1, h=1), PIXEL, BASELINE)
        assert contour.points == (
            Point(0, 120),
            Point(120, 120),
            Point(120, 0),
            Point(0, 0),
        )

    def test_cell_below_baseline_is_negative(self):
        contour = map_rectangle(Rectangle(x=2, y=BASELINE, w=1, h=2), PIXEL, BASELINE)
        assert contour.bounding_box() == (240, -240, 360, 0)

    def test_top_row(self):
        contour = map_rectangle(Rectangle(x=0, y=0, w=8, h=1), PIXEL, BASELINE)
        assert contour.bounding_box() == (0, 12 * PIXEL, 8 * PIXEL, 13 * PIXEL)

    @pytest.mark.parametrize(
        "rect",
        [Rectangle(0, 0, 1, 1), Rectangle(3, 5, 2, 7), Rectangle(0, 14, 8, 2)],
    )
    def test_always_clockwise(self, rect):
        contour = map_rectangle(rect, PIXEL, BASELINE)
        assert contour.direction == WindingDirection.CLOCKWISE
        assert contour.signed_area() == -(rect.w * rect.h * PIXEL * PIXEL)

    def test_map_rectangles_preserves_order(self):
        rects = [Rectangle(0, 0, 1, 1), Rectangle(5, 5, 1, 1)]
        contours = map_rectangles(rects, PIXEL, BASELINE)
        assert [c.points[0] for c in contours] == [Point(0, 13 * PIXEL), Point(600, 8 * PIXEL)]


class TestGlyphMetrics:
    """Tests for advance widths and glyph names."""

    def test_standalone_advance(self):
        glyph = GlyphSource(label="A", codepoint=0x41, grid=())
        assert advance_width_for(glyph, base_width=8, pixel_size=PIXEL) == 960

    def test_ligature_advance_scales_with_width(self):
        grid = tuple(tuple([False] * 24) for _ in range(16))
        glyph = GlyphSource(
            label="===",
            codepoint=None,
            grid=grid,
            components=("=", "=", "="),
            kind=GlyphKind.LIGATURE,
        )
        assert advance_width_for(glyph, base_width=8, pixel_size=PIXEL) == 3 * 960

    @pytest.mark.parametrize(
        ("label", "codepoint", "kind", "expected"),
        [
            ("A", 0x41, GlyphKind.STANDALONE, "uni0041"),
            ("emoji", 0x1F600, GlyphKind.STANDALONE, "u1F600"),
            ("fi", None, GlyphKind.LIGATURE, "lig.fi"),
            ("=>", None, GlyphKind.LIGATURE, "lig.003D_003E"),
        ],
    )
    def test_glyph_names(self, label, codepoint, kind, expected):
        glyph = GlyphSource(label=label, codepoint=codepoint, grid=(), kind=kind)
        assert glyph_name_for(glyph) == expected


class TestBuildOutline:
    """Tests for build_outline."""

    def test_standalone_outline(self):
        glyph = GlyphSource(label="A", codepoint=0x41, grid=(), weight=Weight.BOLD)
        outline = build_outline(
            glyph,
            [Rectangle(0, 0, 1, 1), Rectangle(1, 1, 2, 2)],
            pixel_size=PIXEL,
            baseline_row=BASELINE,
            base_width=8,
        )
        assert outline.name == "uni0041"
        assert outline.unicode == 0x41
        assert outline.weight == Weight.BOLD
        assert outline.advance_width == 960
        assert len(outline.contours) == 2

    def test_empty_grid_has_no_subpaths(self):
        glyph = GlyphSource(
            label="space", codepoint=0x20, grid=tuple(tuple([False] * 8) for _ in range(16))
        )
        outline = build_outline(
            glyph,
            compact_grid(glyph.grid),
            pixel_size=PIXEL,
            baseline_row=BASELINE,
            base_width=8,
        )
        assert outline.contours == ()
        assert outline.advance_width == 960

    def test_ligature_has_no_unicode(self):
        glyph = GlyphSource(
            label="fi",
            codepoint=None,
            grid=tuple(tuple([True] * 16) for _ in range(16)),
            components=("f", "i"),
            kind=GlyphKind.LIGATURE,
        )
        outline = build_outline(glyph, [], pixel_size=PIXEL, baseline_row=BASELINE, base_width=8)
        assert outline.unicode is None
        assert outline.advance_width == 1920
        assert outline.is_empty()
