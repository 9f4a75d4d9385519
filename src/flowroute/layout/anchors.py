"""Anchor resolution: named (or automatic) connector endpoints on node boundaries."""

from __future__ import annotations

from flowroute.geometry import Point, Rect
from flowroute.layout.types import AnchorPoint
from flowroute.types import Anchor


def anchor_point(rect: Rect, side: Anchor) -> Point:
    """Midpoint of one edge of ``rect``."""
    if side is Anchor.Top:
        return Point(rect.x + rect.width / 2, rect.y)
    if side is Anchor.Right:
        return Point(rect.right, rect.y + rect.height / 2)
    if side is Anchor.Bottom:
        return Point(rect.x + rect.width / 2, rect.bottom)
    if side is Anchor.Left:
        return Point(rect.x, rect.y + rect.height / 2)
    raise ValueError(f"{side!r} is not a concrete side")


def auto_side(rect: Rect, other_center: Point) -> Anchor:
    """Pick the side of ``rect`` facing ``other_center``.

    Horizontal sides win ties between |dx| and |dy|; coincident centers
    resolve to the right side.
    """
    center = rect.center
    dx = other_center.x - center.x
    dy = other_center.y - center.y
    if abs(dx) >= abs(dy):
        return Anchor.Left if dx < 0 else Anchor.Right
    return Anchor.Top if dy < 0 else Anchor.Bottom


def resolve_anchor(rect: Rect, anchor: Anchor, other_center: Point) -> AnchorPoint:
    side = auto_side(rect, other_center) if anchor is Anchor.Auto else anchor
    return AnchorPoint(point=anchor_point(rect, side), side=side)


def nudge(anchor: AnchorPoint, distance: float) -> Point:
    """Move the anchor point ``distance`` along its outward direction."""
    dx, dy = anchor.direction
    return Point(anchor.point.x + dx * distance, anchor.point.y + dy * distance)
