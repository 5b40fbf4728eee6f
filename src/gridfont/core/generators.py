"""Programmatic glyph generators.

Some Unicode blocks are pure geometry and are generated rather than drawn:
- Block elements (U+2580-U+2593): fractional blocks and shades
- Braille patterns (U+2800-U+28FF): 2x4 dot cells encoded as a bitmask
"""

from collections.abc import Callable
from dataclasses import dataclass

from gridfont.config import GridConfig
from gridfont.domain import GlyphSource, grid_from_rows
from gridfont.exceptions import ConfigurationError

BRAILLE_BASE = 0x2800
BRAILLE_COUNT = 256

Fill = Callable[[int, int], bool]


@dataclass(frozen=True)
class BlockElement:
    """A generated block element glyph."""

    codepoint: int
    name: str
    fill: Fill


def _block_elements(width: int, height: int) -> list[BlockElement]:
    eighth = height / 8

    def lower(eighths: int) -> Fill:
        return lambda row, _col: row >= height - round(eighths * eighth)

    return [
        BlockElement(0x2580, "upperhalf", lambda row, _col: row < height // 2),
        BlockElement(0x2581, "loweroneeighth", lower(1)),
        BlockElement(0x2582, "loweronequarter", lower(2)),
        BlockElement(0x2583, "lowerthreeeighths", lower(3)),
        BlockElement(0x2584, "lowerhalf", lower(4)),
        BlockElement(0x2585, "lowerfiveeighths", lower(5)),
        BlockElement(0x2586, "lowerthreequarters", lower(6)),
        BlockElement(0x2587, "lowerseveneighths", lower(7)),
        BlockElement(0x2588, "fullblock", lambda _row, _col: True),
        BlockElement(0x258C, "lefthalf", lambda _row, col: col < width // 2),
        BlockElement(0x2590, "righthalf", lambda _row, col: col >= width // 2),
        BlockElement(0x2591, "lightshade", lambda row, col: (row + col) % 4 == 0),
        BlockElement(0x2592, "mediumshade", lambda row, col: (row + col) % 2 == 0),
        BlockElement(0x2593, "darkshade", lambda row, col: (row + col) % 2 != 0),
    ]


def _render(width: int, height: int, fill: Fill) -> tuple[tuple[bool, ...], ...]:
    return grid_from_rows(
        [[fill(row, col) for col in range(width)] for row in range(height)]
    )


def generate_block_elements(grid: GridConfig) -> list[GlyphSource]:
    """Generate the block element glyphs for the configured grid size."""
    return [
        GlyphSource(label=block.name, codepoint=block.codepoint, grid=()).with_grid(
            _render(grid.width, grid.height, block.fill)
        )
        for block in _block_elements(grid.width, grid.height)
    ]


# Bit, rows, columns of each braille dot as a 2x2 pixel block.
# Dots 1-3 and 7 form the left column, dots 4-6 and 8 the right one.
BRAILLE_DOTS: tuple[tuple[int, tuple[int, int], tuple[int, int]], ...] = (
    (0x01, (3, 4), (1, 2)),
    (0x02, (6, 7), (1, 2)),
    (0x04, (9, 10), (1, 2)),
    (0x08, (3, 4), (5, 6)),
    (0x10, (6, 7), (5, 6)),
    (0x20, (9, 10), (5, 6)),
    (0x40, (12, 13), (1, 2)),
    (0x80, (12, 13), (5, 6)),
)
BRAILLE_GRID = (8, 16)


def braille_name(offset: int) -> str:
    """Glyph label for a braille pattern, e.g. ``braille125``."""
    if offset == 0:
        return "brailleblank"
    dots = "".join(str(bit + 1) for bit in range(8) if offset & (1 << bit))
    return f"braille{dots}"


def braille_grid(offset: int) -> tuple[tuple[bool, ...], ...]:
    """Raster of the braille pattern ``U+2800 + offset``."""
    width, height = BRAILLE_GRID
    rows = [[False] * width for _ in range(height)]
    for bit, dot_rows, dot_cols in BRAILLE_DOTS:
        if offset & bit:
            for row in dot_rows:
                for col in dot_cols:
                    rows[row][col] = True
    return grid_from_rows(rows)


def generate_braille(grid: GridConfig) -> list[GlyphSource]:
    """Generate all 256 braille pattern glyphs.

    Raises:
        ConfigurationError: If the grid is not 8x16, the only layout the
            dot positions are defined for
    """
    if (grid.width, grid.height) != BRAILLE_GRID:
        raise ConfigurationError(
            "grid",
            f"braille patterns need an {BRAILLE_GRID[0]}x{BRAILLE_GRID[1]} grid, "
            f"got {grid.width}x{grid.height}",
        )

    glyphs = []
    for offset in range(BRAILLE_COUNT):
        record = GlyphSource(label=braille_name(offset), codepoint=BRAILLE_BASE + offset, grid=())
        glyphs.append(record.with_grid(braille_grid(offset)))
    return glyphs


GENERATORS: dict[str, Callable[[GridConfig], list[GlyphSource]]] = {
    "block-elements": generate_block_elements,
    "braille": generate_braille,
}
