"""JSON diagram parser.

Accepts the document shape::

    {
      "nodes": [{"id", "text", "width", "height", "position": {"x", "y"}, "tint"}],
      "connections": [{"from", "to", "fromAnchor", "toAnchor", "label",
                       "labelMinDistanceFromEnds"}],
      "config": {...}
    }

``width``/``height`` may also be given as ``"size": {"width", "height"}``.
Structural problems raise :class:`DiagramParseError`; semantic checks
(duplicate ids, unknown references) are left to validation.
"""

from __future__ import annotations

import json
from typing import Any

from flowroute.config import RoutingConfig
from flowroute.errors import DiagramParseError
from flowroute.geometry import Point
from flowroute.ir.model import DEFAULT_NODE_HEIGHT, DEFAULT_NODE_WIDTH, Connection, Diagram, Node, RectGeometry
from flowroute.parsers.base import DiagramDocument
from flowroute.types import Anchor

_NODE_KEYS = {"id", "text", "width", "height", "size", "position", "tint", "kind"}
_CONNECTION_KEYS = {"from", "to", "fromAnchor", "toAnchor", "label", "labelMinDistanceFromEnds"}


class JsonDiagramParser:
    def parse(self, src: str) -> DiagramDocument:
        try:
            data = json.loads(src)
        except json.JSONDecodeError as e:
            raise DiagramParseError(f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}") from e
        return self.parse_dict(data)

    def parse_dict(self, data: Any) -> DiagramDocument:
        if not isinstance(data, dict):
            raise DiagramParseError(f"diagram must be a JSON object, got {type(data).__name__}")
        unknown = set(data) - {"nodes", "connections", "config"}
        if unknown:
            raise DiagramParseError(f"unknown top-level keys: {', '.join(sorted(unknown))}")

        nodes = [_parse_node(n, i) for i, n in enumerate(_list(data, "nodes"))]
        connections = [_parse_connection(c, i) for i, c in enumerate(_list(data, "connections"))]
        config = RoutingConfig.from_dict(data.get("config"))
        return DiagramDocument(diagram=Diagram(nodes=nodes, connections=connections), config=config)


def _list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise DiagramParseError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _parse_node(raw: Any, index: int) -> Node:
    where = f"nodes[{index}]"
    if not isinstance(raw, dict):
        raise DiagramParseError(f"{where} must be an object")
    unknown = set(raw) - _NODE_KEYS
    if unknown:
        raise DiagramParseError(f"{where}: unknown keys: {', '.join(sorted(unknown))}")

    node_id = raw.get("id")
    if not isinstance(node_id, str) or not node_id:
        raise DiagramParseError(f"{where}: 'id' must be a non-empty string")
    where = f"node '{node_id}'"

    kind = raw.get("kind", "rect")
    if kind != "rect":
        raise DiagramParseError(f"{where}: unsupported kind {kind!r}")

    size = raw.get("size", {})
    if not isinstance(size, dict):
        raise DiagramParseError(f"{where}: 'size' must be an object")
    width = _number(raw.get("width", size.get("width", DEFAULT_NODE_WIDTH)), f"{where} width")
    height = _number(raw.get("height", size.get("height", DEFAULT_NODE_HEIGHT)), f"{where} height")

    position = None
    if raw.get("position") is not None:
        position = _point(raw["position"], f"{where} position")

    text = raw.get("text")
    if text is not None and not isinstance(text, str):
        raise DiagramParseError(f"{where}: 'text' must be a string")
    tint = raw.get("tint")
    if tint is not None and not isinstance(tint, str):
        raise DiagramParseError(f"{where}: 'tint' must be a string")

    return Node(id=node_id, text=text, geometry=RectGeometry(width, height), position=position, tint=tint)


def _parse_connection(raw: Any, index: int) -> Connection:
    where = f"connections[{index}]"
    if not isinstance(raw, dict):
        raise DiagramParseError(f"{where} must be an object")
    unknown = set(raw) - _CONNECTION_KEYS
    if unknown:
        raise DiagramParseError(f"{where}: unknown keys: {', '.join(sorted(unknown))}")

    endpoints = []
    for key in ("from", "to"):
        value = raw.get(key)
        if not isinstance(value, str) or not value:
            raise DiagramParseError(f"{where}: '{key}' must be a node id string")
        endpoints.append(value)

    label = raw.get("label")
    if label is not None and not isinstance(label, str):
        raise DiagramParseError(f"{where}: 'label' must be a string")

    min_distance = raw.get("labelMinDistanceFromEnds")
    if min_distance is not None:
        min_distance = _number(min_distance, f"{where} labelMinDistanceFromEnds")

    return Connection(
        from_id=endpoints[0],
        to_id=endpoints[1],
        from_anchor=_anchor(raw.get("fromAnchor"), f"{where} fromAnchor"),
        to_anchor=_anchor(raw.get("toAnchor"), f"{where} toAnchor"),
        label=label,
        label_min_distance=min_distance,
    )


def _anchor(value: Any, where: str) -> Anchor:
    if value is None:
        return Anchor.default()
    if isinstance(value, str):
        try:
            return Anchor(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(a.value for a in Anchor)
    raise DiagramParseError(f"{where}: unknown anchor {value!r}; use one of {allowed}")


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DiagramParseError(f"{where}: expected a number, got {value!r}")
    return value


def _point(value: Any, where: str) -> Point:
    if not isinstance(value, dict) or "x" not in value or "y" not in value:
        raise DiagramParseError(f"{where}: expected an object with 'x' and 'y'")
    return Point(_number(value["x"], where), _number(value["y"], where))
