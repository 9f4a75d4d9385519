"""Input validation for diagrams.

All checks are fatal and raise a :class:`~flowroute.errors.DiagramError`
subclass naming the offending node or connection.
"""

from __future__ import annotations

import math

from flowroute.errors import DiagramError, DuplicateNodeError, SelfLoopError, UnknownNodeError
from flowroute.ir.model import Diagram, Node


def validate_diagram(diagram: Diagram) -> None:
    """Check node ids, node sizes, and connection references."""
    seen: set[str] = set()
    for node in diagram.nodes:
        if node.id in seen:
            raise DuplicateNodeError(node.id)
        seen.add(node.id)
        validate_node(node)

    for index, conn in enumerate(diagram.connections):
        if conn.from_id not in seen:
            raise UnknownNodeError(index, conn.from_id, "from")
        if conn.to_id not in seen:
            raise UnknownNodeError(index, conn.to_id, "to")
        if conn.from_id == conn.to_id:
            raise SelfLoopError(index, conn.from_id)
        if conn.label_min_distance is not None and not _finite(conn.label_min_distance, allow_zero=True):
            raise DiagramError(
                f"connection {index}: labelMinDistanceFromEnds must be a non-negative number, "
                f"got {conn.label_min_distance!r}"
            )


def validate_node(node: Node) -> None:
    if not isinstance(node.id, str) or not node.id:
        raise DiagramError(f"node id must be a non-empty string, got {node.id!r}")
    if not _finite(node.width) or not _finite(node.height):
        raise DiagramError(f"node '{node.id}': width and height must be positive, got {node.width}x{node.height}")
    if node.position is not None and not (math.isfinite(node.position.x) and math.isfinite(node.position.y)):
        raise DiagramError(f"node '{node.id}': position must be finite")


def _finite(value: float, *, allow_zero: bool = False) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if not math.isfinite(value):
        return False
    return value >= 0 if allow_zero else value > 0
