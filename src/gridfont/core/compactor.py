"""Rectangle compaction of pixel rasters.

Converts a boolean raster into a set of non-overlapping rectangles that
exactly covers its filled cells, using two greedy passes:

1. Row spans: each row is scanned left to right and every run of filled
   cells becomes one span.
2. Vertical merge: spans are grouped by their horizontal extent (x, w);
   within a group, spans on consecutive rows are merged into one rectangle.

The result is deterministic but not a minimum rectangle cover. Shapes such
as an "L" can produce more rectangles than an exact decomposition would;
only exact coverage without overlap is guaranteed.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from gridfont.domain import Grid, Rectangle, grid_from_rows
from gridfont.exceptions import GridShapeError


@dataclass(frozen=True, slots=True)
class RowSpan:
    """A horizontal run of filled pixels within a single row.

    Attributes:
        x: Column of the leftmost pixel
        y: Row index
        w: Number of consecutive filled pixels
    """

    x: int
    y: int
    w: int


def extract_row_spans(row: Sequence[bool], row_index: int) -> list[RowSpan]:
    """Merge horizontally adjacent filled pixels of one row into spans."""
    spans: list[RowSpan] = []
    col = 0
    n = len(row)

    while col < n:
        if row[col]:
            start = col
            while col < n and row[col]:
                col += 1
            spans.append(RowSpan(x=start, y=row_index, w=col - start))
        else:
            col += 1

    return spans


def merge_spans_vertically(spans: Sequence[RowSpan]) -> list[Rectangle]:
    """Merge spans with equal (x, w) on consecutive rows into rectangles.

    Groups are keyed by the value of (x, w) and visited in order of first
    appearance, so output order is stable for a given input.

    Args:
        spans: Row spans in row-major order

    Returns:
        Rectangles covering exactly the cells of the spans
    """
    by_extent: dict[tuple[int, int], list[RowSpan]] = {}
    for span in spans:
        by_extent.setdefault((span.x, span.w), []).append(span)

    rectangles: list[Rectangle] = []

    for group in by_extent.values():
        group.sort(key=lambda s: s.y)

        i = 0
        while i < len(group):
            start = group[i]
            height = 1
            while i + height < len(group) and group[i + height].y == start.y + height:
                height += 1

            rectangles.append(Rectangle(x=start.x, y=start.y, w=start.w, h=height))
            i += height

    return rectangles


def compact_grid(grid: Sequence[Sequence[bool]]) -> list[Rectangle]:
    """Convert a raster into rectangles covering exactly its filled cells.

    Args:
        grid: grid[row][col] is True for filled pixels

    Returns:
        Rectangles in deterministic order; empty for an empty raster

    Raises:
        GridShapeError: If rows differ in length (the raster was not validated)
    """
    if not grid:
        return []

    width = len(grid[0])
    spans: list[RowSpan] = []
    for row_index, row in enumerate(grid):
        if len(row) != width:
            raise GridShapeError(row_index, len(row), width)
        spans.extend(extract_row_spans(row, row_index))

    if not spans:
        return []

    return merge_spans_vertically(spans)


def rectangles_to_grid(rectangles: Sequence[Rectangle], width: int, height: int) -> Grid:
    """Rasterize rectangles back into a width x height grid.

    Raises:
        ValueError: If a rectangle falls outside the grid
    """
    rows = [[False] * width for _ in range(height)]
    for rect in rectangles:
        if rect.x + rect.w > width or rect.y + rect.h > height or rect.x < 0 or rect.y < 0:
            raise ValueError(f"{rect} lies outside a {width}x{height} grid")
        for row, col in rect.cells():
            rows[row][col] = True
    return grid_from_rows(rows)
