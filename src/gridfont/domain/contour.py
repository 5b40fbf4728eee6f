"""Core geometric types for outline representation.

This module defines the vector types produced by the outline builder:
- Point: A 2D point in font units
- Contour: A closed polygonal sub-path
- WindingDirection: Enum for contour winding direction
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class WindingDirection(Enum):
    """Contour winding direction.

    In TrueType convention (Y axis pointing up):
    - Filled contours wind clockwise
    - Holes wind counter-clockwise

    Pixel outlines never contain holes, so every contour the outline
    builder emits is clockwise.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in font units.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units (positive above the baseline)
    """

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True)
class Contour:
    """A closed polygonal sub-path.

    The closing edge from the last point back to the first is implicit.

    Attributes:
        points: Vertices in traversal order
    """

    points: tuple[Point, ...]

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        The sign of the area indicates winding direction in a Y-up frame:
        - Positive area: counter-clockwise winding
        - Negative area: clockwise winding

        Returns:
            Signed area of the contour
        """
        n = len(self.points)
        area = 0.0
        if n >= 3:
            for i in range(n):
                j = (i + 1) % n
                area += self.points[i].x * self.points[j].y
                area -= self.points[j].x * self.points[i].y
            area /= 2.0
        return area

    @property
    def direction(self) -> WindingDirection | None:
        """Winding direction, or None for a degenerate contour."""
        area = self.signed_area()
        if area < 0:
            return WindingDirection.CLOCKWISE
        if area > 0:
            return WindingDirection.COUNTER_CLOCKWISE
        return None

    def bounding_box(self) -> tuple[int, int, int, int]:
        """Calculate bounding box of the contour.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.points:
            return (0, 0, 0, 0)

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the contour
        """
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a contour

        Returns:
            Contour instance
        """
        return cls(points=tuple(Point.from_dict(p) for p in data["points"]))
