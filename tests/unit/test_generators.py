"""Unit tests for programmatic glyph generators."""

import pytest

from gridfont.config import GridConfig
from gridfont.core.generators import (
    BRAILLE_BASE,
    GENERATORS,
    braille_grid,
    braille_name,
    generate_block_elements,
    generate_braille,
)
from gridfont.exceptions import ConfigurationError


class TestBlockElements:
    """Tests for block element generation."""

    def test_codepoints_and_dimensions(self):
        glyphs = generate_block_elements(GridConfig())
        assert len(glyphs) == 14
        assert glyphs[0].codepoint == 0x2580
        assert all(g.width == 8 and g.height == 16 for g in glyphs)
        assert all(len(g.raster_lines) == 16 for g in glyphs)

    def test_full_block_is_filled(self):
        full = {g.label: g for g in generate_block_elements(GridConfig())}["fullblock"]
        assert all(all(row) for row in full.grid)

    def test_lower_half(self):
        lower = {g.label: g for g in generate_block_elements(GridConfig())}["lowerhalf"]
        assert [any(row) for row in lower.grid] == [False] * 8 + [True] * 8

    def test_follows_grid_size(self):
        glyphs = generate_block_elements(GridConfig(width=6, height=8, baseline_row=6))
        assert all(g.width == 6 and g.height == 8 for g in glyphs)


class TestBraille:
    """Tests for braille pattern generation."""

    def test_all_patterns(self):
        glyphs = generate_braille(GridConfig())
        assert len(glyphs) == 256
        assert glyphs[0].codepoint == BRAILLE_BASE
        assert glyphs[-1].codepoint == BRAILLE_BASE + 255
        assert glyphs[0].is_empty()

    def test_names(self):
        assert braille_name(0) == "brailleblank"
        assert braille_name(0b00010011) == "braille125"
        assert braille_name(0xFF) == "braille12345678"

    def test_dot_one_is_top_left(self):
        grid = braille_grid(0x01)
        filled = {(r, c) for r, row in enumerate(grid) for c, cell in enumerate(row) if cell}
        assert filled == {(3, 1), (3, 2), (4, 1), (4, 2)}

    def test_each_dot_is_four_cells(self):
        grid = braille_grid(0xFF)
        assert sum(cell for row in grid for cell in row) == 32

    def test_requires_default_grid(self):
        with pytest.raises(ConfigurationError, match="8x16"):
            generate_braille(GridConfig(width=10, height=16))


def test_registry():
    assert set(GENERATORS) == {"block-elements", "braille"}
