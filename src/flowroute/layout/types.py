"""Layout types shared across the layout engine and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flowroute.geometry import Point, Rect
from flowroute.types import Anchor


@dataclass(frozen=True)
class AnchorPoint:
    """A resolved connector endpoint on a node boundary."""

    point: Point
    side: Anchor

    @property
    def direction(self) -> tuple[int, int]:
        return self.side.direction


@dataclass(frozen=True)
class LabelPosition:
    """Where the label placer put a label on a polyline."""

    position: Point
    segment_index: int
    has_clearance: bool
    rotation: float = 0.0


@dataclass
class PlacedLabel:
    """A label entry of the render model."""

    connection_index: int
    position: Point
    text: str
    box: Rect
    clearance: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "connectionIndex": self.connection_index,
            "position": self.position.to_dict(),
            "text": self.text,
            "box": self.box.to_dict(),
            "clearance": self.clearance,
        }


@dataclass
class RoutedConnection:
    """A routed connection with orthogonal waypoints."""

    from_id: str
    to_id: str
    waypoints: list[Point]
    fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_id,
            "to": self.to_id,
            "waypoints": [p.to_dict() for p in self.waypoints],
            "fallback": self.fallback,
        }


@dataclass
class RenderModel:
    """Self-contained build output, everything a renderer needs."""

    node_positions: dict[str, Point] = field(default_factory=dict)
    connection_paths: list[RoutedConnection] = field(default_factory=list)
    label_placements: list[PlacedLabel] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodePositions": {node_id: p.to_dict() for node_id, p in self.node_positions.items()},
            "connectionPaths": [c.to_dict() for c in self.connection_paths],
            "labelPlacements": [lbl.to_dict() for lbl in self.label_placements],
        }
