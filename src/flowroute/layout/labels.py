"""Label placement along routed connector polylines."""

from __future__ import annotations

import logging
import math

from flowroute.geometry import Point, Rect
from flowroute.layout.types import LabelPosition

logger = logging.getLogger(__name__)


def segment_lengths(waypoints: list[Point]) -> list[float]:
    return [math.hypot(b.x - a.x, b.y - a.y) for a, b in zip(waypoints, waypoints[1:])]


def place_label(waypoints: list[Point], label: str | None, min_distance_from_ends: float) -> LabelPosition | None:
    """Center a label on the longest segment that keeps its distance from both path ends.

    A segment qualifies when its start lies at least ``min_distance_from_ends``
    along the path from the first waypoint and its end lies at least that far
    from the last one. Ties go to the segment closest to the path start. When
    no segment qualifies the longest segment overall is used and
    ``has_clearance`` is False.

    Returns None when there is no label text or fewer than two waypoints.
    """
    if not label or len(waypoints) < 2:
        return None

    lengths = segment_lengths(waypoints)
    total = sum(lengths)

    best: int | None = None
    offset = 0.0
    for i, length in enumerate(lengths):
        seg_start, seg_end = offset, offset + length
        offset = seg_end
        if seg_start < min_distance_from_ends or total - seg_end < min_distance_from_ends:
            continue
        if best is None or length > lengths[best]:
            best = i

    has_clearance = best is not None
    if best is None:
        best = max(range(len(lengths)), key=lambda i: (lengths[i], -i))
        logger.debug("label %r: no segment clears %.1fpx from both ends, using segment %d", label, min_distance_from_ends, best)

    a, b = waypoints[best], waypoints[best + 1]
    midpoint = Point((a.x + b.x) / 2, (a.y + b.y) / 2)
    return LabelPosition(position=midpoint, segment_index=best, has_clearance=has_clearance)


def label_box(position: Point, text: str, char_width: float, line_height: float, padding: float) -> Rect:
    """Estimated background rectangle for a label centered on ``position``."""
    lines = text.split("\n")
    width = max(len(line) for line in lines) * char_width + 2 * padding
    height = len(lines) * line_height + 2 * padding
    return Rect(position.x - width / 2, position.y - height / 2, width, height)
