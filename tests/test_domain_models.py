"""Tests for domain models to verify they work correctly."""

from pathlib import Path

import pytest

from gridfont.domain import (
    CompiledFont,
    Contour,
    GlyphKind,
    GlyphSource,
    Outline,
    Point,
    Rectangle,
    Severity,
    ValidationReport,
    Weight,
    WindingDirection,
    grid_from_rows,
)


def _square(clockwise: bool) -> Contour:
    points = [Point(0, 100), Point(100, 100), Point(100, 0), Point(0, 0)]
    if not clockwise:
        points.reverse()
    return Contour(points=tuple(points))


class TestPoint:
    """Tests for Point class."""

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(120, -360).to_tuple() == (120, -360)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(240, 960)
        p2 = Point.from_dict(p1.to_dict())
        assert p2 == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(1, 2)
        with pytest.raises(AttributeError):
            p.x = 3  # type: ignore


class TestContour:
    """Tests for Contour class."""

    def test_clockwise_has_negative_area(self) -> None:
        contour = _square(clockwise=True)
        assert contour.signed_area() == -10000.0
        assert contour.direction == WindingDirection.CLOCKWISE

    def test_counter_clockwise_has_positive_area(self) -> None:
        contour = _square(clockwise=False)
        assert contour.signed_area() == 10000.0
        assert contour.direction == WindingDirection.COUNTER_CLOCKWISE

    def test_degenerate_contour_has_no_direction(self) -> None:
        contour = Contour(points=(Point(0, 0), Point(10, 0)))
        assert contour.direction is None

    def test_bounding_box(self) -> None:
        assert _square(clockwise=True).bounding_box() == (0, 0, 100, 100)

    def test_contour_serialization(self) -> None:
        contour = _square(clockwise=True)
        assert Contour.from_dict(contour.to_dict()) == contour


class TestRectangle:
    """Tests for Rectangle class."""

    def test_cells(self) -> None:
        rect = Rectangle(x=2, y=5, w=2, h=3)
        assert list(rect.cells()) == [(5, 2), (5, 3), (6, 2), (6, 3), (7, 2), (7, 3)]
        assert rect.area == 6

    @pytest.mark.parametrize(("w", "h"), [(0, 1), (1, 0), (-1, 2)])
    def test_rejects_empty_extent(self, w: int, h: int) -> None:
        with pytest.raises(ValueError):
            Rectangle(x=0, y=0, w=w, h=h)


class TestGlyphSource:
    """Tests for GlyphSource class."""

    @pytest.fixture
    def glyph(self) -> GlyphSource:
        grid = grid_from_rows([[False, True, False], [True, True, True]])
        return GlyphSource(
            label="A",
            codepoint=0x41,
            grid=grid,
            raster_lines=(".X.", "XXX"),
            source_path=Path("glyphs/U+0041_A.glyph"),
        )

    def test_dimensions(self, glyph: GlyphSource) -> None:
        assert glyph.width == 3
        assert glyph.height == 2
        assert glyph.is_rectangular()
        assert not glyph.is_empty()

    def test_ragged_grid_is_not_rectangular(self) -> None:
        glyph = GlyphSource(label="x", codepoint=0x78, grid=grid_from_rows([[True], [True, False]]))
        assert not glyph.is_rectangular()

    def test_identity_uses_codepoint_for_standalone(self, glyph: GlyphSource) -> None:
        assert glyph.identity() == ("codepoint", 0x41)

    def test_identity_uses_label_for_ligature(self) -> None:
        lig = GlyphSource(
            label="=>",
            codepoint=None,
            grid=(),
            components=("=", ">"),
            kind=GlyphKind.LIGATURE,
        )
        assert lig.is_ligature
        assert lig.identity() == ("label", "=>")

    def test_with_grid_regenerates_raster_lines(self, glyph: GlyphSource) -> None:
        changed = glyph.with_grid(grid_from_rows([[True, True, False], [True, True, True]]))
        assert changed.raster_lines == ("XX.", "XXX")
        assert glyph.raster_lines == (".X.", "XXX")
        assert changed.source_path == glyph.source_path

    def test_serialization(self, glyph: GlyphSource) -> None:
        """Records survive the dict form used between worker processes."""
        bold = glyph.with_grid(glyph.grid, weight=Weight.BOLD, derived=True)
        restored = GlyphSource.from_dict(bold.to_dict())
        assert restored == bold


class TestOutline:
    """Tests for Outline and CompiledFont."""

    def test_empty_outline(self) -> None:
        outline = Outline(name="uni0020", label="space", contours=(), advance_width=960, unicode=0x20)
        assert outline.is_empty()
        assert outline.bounding_box() == (0, 0, 0, 0)

    def test_bounding_box_spans_contours(self) -> None:
        a = Contour(points=(Point(0, 10), Point(10, 10), Point(10, 0), Point(0, 0)))
        b = Contour(points=(Point(20, 50), Point(30, 50), Point(30, -5), Point(20, -5)))
        outline = Outline(name="x", label="x", contours=(a, b), advance_width=40)
        assert outline.bounding_box() == (0, -5, 30, 50)

    def test_rectangle_count(self) -> None:
        contour = _square(clockwise=True)
        outlines = (
            Outline(name="a", label="a", contours=(contour, contour), advance_width=1),
            Outline(name="b", label="b", contours=(contour,), advance_width=1),
        )
        assert CompiledFont(weight=Weight.REGULAR, outlines=outlines).rectangle_count == 3

    def test_serialization(self) -> None:
        outline = Outline(
            name="uni0041",
            label="A",
            contours=(_square(clockwise=True),),
            advance_width=960,
            unicode=0x41,
            weight=Weight.BOLD,
        )
        assert Outline.from_dict(outline.to_dict()) == outline


class TestValidationReport:
    """Tests for ValidationReport."""

    def test_warnings_do_not_invalidate(self) -> None:
        report = ValidationReport()
        report.add("glyphs/LIG_x.glyph", "Ligature components not found: q.", Severity.WARNING)
        assert report.is_valid
        assert len(report.warnings) == 1

    def test_errors_invalidate(self) -> None:
        report = ValidationReport()
        report.add("glyphs/U+0041_A.glyph", "Grid has 15 rows, expected 16.")
        assert not report.is_valid
        assert str(report.errors[0]) == "[glyphs/U+0041_A.glyph] Grid has 15 rows, expected 16."
