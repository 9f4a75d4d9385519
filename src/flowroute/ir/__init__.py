"""Intermediate representation: diagram model and graph topology."""

from flowroute.ir.graph import DiagramGraph
from flowroute.ir.model import Connection, Diagram, Node, NodeGeometry, RectGeometry, node_bounds
from flowroute.ir.validation import validate_diagram

__all__ = [
    "Connection",
    "Diagram",
    "DiagramGraph",
    "Node",
    "NodeGeometry",
    "RectGeometry",
    "node_bounds",
    "validate_diagram",
]
