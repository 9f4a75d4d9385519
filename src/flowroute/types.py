"""Shared type definitions for flowroute.

Enums used across parsers, IR, layout, and renderers.
"""

from __future__ import annotations

from enum import Enum


class Anchor(Enum):
    Top = "top"
    Right = "right"
    Bottom = "bottom"
    Left = "left"
    Auto = "auto"

    @classmethod
    def default(cls) -> Anchor:
        return cls.Auto

    @property
    def direction(self) -> tuple[int, int]:
        """Outward unit vector of a concrete side."""
        return _SIDE_DIRECTIONS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Anchor.Top, Anchor.Bottom)


_SIDE_DIRECTIONS: dict[Anchor, tuple[int, int]] = {
    Anchor.Top: (0, -1),
    Anchor.Right: (1, 0),
    Anchor.Bottom: (0, 1),
    Anchor.Left: (-1, 0),
}


class LayoutDirection(Enum):
    Vertical = "vertical"  # layers stack downwards
    Horizontal = "horizontal"  # layers stack rightwards

    @classmethod
    def default(cls) -> LayoutDirection:
        return cls.Vertical


class NodeKind(Enum):
    Rect = "rect"

    @classmethod
    def default(cls) -> NodeKind:
        return cls.Rect
