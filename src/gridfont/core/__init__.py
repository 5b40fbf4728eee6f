"""Core algorithms for gridfont.

This module contains the core algorithms for:

- Corpus validation (dimensions, character set, codepoints, completeness)
- Rectangle compaction (row spans merged vertically)
- Coordinate mapping (grid rectangles to font-unit contours)
- Weight derivation (bold by horizontal dilation)
- Ligature resolution

All transforms are designed to be:
- Stateless (safe for use in worker processes)
- Pure (inputs are never mutated)

Key functions:
- compact_grid: Cover the filled cells of a raster with rectangles
- map_rectangle: Convert a grid rectangle into a clockwise contour
- derive_bold: Produce the bold record of a regular glyph
- validate_corpus: Check a parsed corpus before compilation

Key classes:
- CorpusValidator: Produces the validation report of a corpus
- FontCompiler: Runs the full read, validate, compile and write pipeline
"""

from gridfont.core.compactor import compact_grid, rectangles_to_grid
from gridfont.core.compiler import FontCompiler, compile_glyph
from gridfont.core.generators import GENERATORS, generate_block_elements, generate_braille
from gridfont.core.ligatures import LigatureResolution, resolve_ligatures
from gridfont.core.mapper import build_outline, glyph_name_for, map_rectangle, map_rectangles
from gridfont.core.validator import CorpusValidator, validate_corpus
from gridfont.core.weight import derive_bold, derive_bold_grid, resolve_weight

__all__ = [
    "GENERATORS",
    "CorpusValidator",
    "FontCompiler",
    "LigatureResolution",
    "build_outline",
    "compact_grid",
    "compile_glyph",
    "derive_bold",
    "derive_bold_grid",
    "generate_block_elements",
    "generate_braille",
    "glyph_name_for",
    "map_rectangle",
    "map_rectangles",
    "rectangles_to_grid",
    "resolve_ligatures",
    "resolve_weight",
    "validate_corpus",
]
