"""Gridfont - Compile pixel-grid glyph sources into fonts.

Gridfont reads a corpus of `.glyph` files, each a header plus a raster of
'.' and 'X' cells, validates it, collapses every raster into a small set of
rectangles and assembles TrueType and WOFF2 fonts from the result. A bold
variant can be derived from the regular glyphs.

Example:
    $ gridfont build --config font-config.json

This will write Gridfont-Regular.ttf/.woff2 and Gridfont-Bold.ttf/.woff2
into the build directory.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
