"""Diagram model: the flat, already-resolved snapshot the engine consumes.

Nodes carry a tagged geometry variant instead of loose width/height fields so
that the anchor resolver and the grid builder can dispatch on ``kind`` and
reject shapes they do not know about.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from flowroute.geometry import Point, Rect
from flowroute.types import Anchor, NodeKind

DEFAULT_NODE_WIDTH: float = 140
DEFAULT_NODE_HEIGHT: float = 60


@dataclass(frozen=True)
class RectGeometry:
    width: float = DEFAULT_NODE_WIDTH
    height: float = DEFAULT_NODE_HEIGHT
    kind: NodeKind = field(default=NodeKind.Rect, init=False)


NodeGeometry = Union[RectGeometry]


@dataclass(frozen=True)
class Node:
    id: str
    text: str | None = None
    geometry: NodeGeometry = field(default_factory=RectGeometry)
    position: Point | None = None
    tint: str | None = None

    def __post_init__(self) -> None:
        # Text defaults to the node id
        if self.text is None:
            object.__setattr__(self, "text", self.id)

    @property
    def width(self) -> float:
        return self.geometry.width

    @property
    def height(self) -> float:
        return self.geometry.height


@dataclass(frozen=True)
class Connection:
    from_id: str
    to_id: str
    from_anchor: Anchor = Anchor.Auto
    to_anchor: Anchor = Anchor.Auto
    label: str | None = None
    label_min_distance: float | None = None


@dataclass
class Diagram:
    nodes: list[Node] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)

    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]

    def unpositioned(self) -> list[Node]:
        return [n for n in self.nodes if n.position is None]


def node_bounds(node: Node, position: Point) -> Rect:
    """Bounding rectangle of ``node`` with its top-left corner at ``position``."""
    geometry = node.geometry
    if geometry.kind is NodeKind.Rect:
        return Rect(position.x, position.y, geometry.width, geometry.height)
    raise TypeError(f"unsupported node geometry kind: {geometry.kind!r}")
