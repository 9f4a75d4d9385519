"""Geometric primitives in canvas (pixel) coordinates."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A 2D point in canvas (pixel) coordinates."""

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class GridCell:
    """A cell of the occupancy grid (column, row)."""

    col: int
    row: int


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def expanded(self, margin: float) -> Rect:
        return Rect(self.x - margin, self.y - margin, self.width + 2 * margin, self.height + 2 * margin)

    def contains(self, p: Point) -> bool:
        """Inclusive containment test (points on the border count as inside)."""
        return self.x <= p.x <= self.right and self.y <= p.y <= self.bottom

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def bounding_rect(rects: Sequence[Rect], points: Sequence[Point] = ()) -> Rect:
    """Smallest rectangle enclosing every rect and point given."""
    xs: list[float] = [p.x for p in points]
    ys: list[float] = [p.y for p in points]
    for r in rects:
        xs.extend((r.x, r.right))
        ys.extend((r.y, r.bottom))
    if not xs:
        return Rect(0, 0, 0, 0)
    min_x, min_y = min(xs), min(ys)
    return Rect(min_x, min_y, max(xs) - min_x, max(ys) - min_y)
