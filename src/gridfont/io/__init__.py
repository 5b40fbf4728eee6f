"""File I/O layer for gridfont.

This module handles reading glyph sources and writing fonts using
fonttools. It provides a clean abstraction layer between the file system,
fonttools and the domain models.

Key responsibilities:
- Parse and format `.glyph` source text
- Enumerate and parse `.glyph` files in corpus directories
- Convert domain outlines to fonttools glyphs
- Assemble and save TrueType and WOFF2 fonts
- Write generated glyph sources

Key classes:
- GlyphReader: Load glyph sources from directories
- FontWriter: Assemble and save fonts
"""

from gridfont.io.parser import format_glyph, glyph_filename, parse_glyph_text
from gridfont.io.reader import CorpusParseResult, GlyphReader, read_corpus
from gridfont.io.writer import FontWriter, write_glyph_files

__all__ = [
    "CorpusParseResult",
    "FontWriter",
    "GlyphReader",
    "format_glyph",
    "glyph_filename",
    "parse_glyph_text",
    "read_corpus",
    "write_glyph_files",
]
