"""flowroute: hierarchical auto-layout and orthogonal connector routing for flowcharts."""

from flowroute.config import RoutingConfig, parse_direction
from flowroute.errors import DiagramError
from flowroute.geometry import Point, Rect
from flowroute.ir.model import Connection, Diagram, Node, RectGeometry
from flowroute.layout.engine import DiagramBuilder, build
from flowroute.layout.types import RenderModel
from flowroute.parsers import parse, parse_dict
from flowroute.renderers.json_model import JsonRenderer
from flowroute.types import Anchor, LayoutDirection

__all__ = [
    "Anchor",
    "Connection",
    "Diagram",
    "DiagramBuilder",
    "DiagramError",
    "LayoutDirection",
    "Node",
    "Point",
    "Rect",
    "RectGeometry",
    "RenderModel",
    "RoutingConfig",
    "build",
    "parse",
    "parse_dict",
    "route_json",
]


def route_json(src: str, direction: str | None = None, indent: int | None = 2) -> str:
    """Parse a JSON diagram, lay it out, route it, and return the render model as JSON.

    Args:
        src: JSON diagram document (nodes, connections, optional config).
        direction: Override the layout direction ('vertical' or 'horizontal'); None keeps the document's.
        indent: JSON indentation; None for compact output.

    Returns:
        The render model serialized as JSON text.

    Raises:
        DiagramError: If the input cannot be parsed or fails validation.
    """
    doc = parse(src)
    config = doc.config
    if direction is not None:
        config = config.with_overrides(layout_direction=parse_direction(direction))
    model = build(doc.diagram, config)
    return JsonRenderer(indent=indent).render(model)
