"""Parser entry points: JSON text or an already-decoded dict to a diagram document."""

from __future__ import annotations

from typing import Any

from flowroute.parsers.base import DiagramDocument, Parser
from flowroute.parsers.json_diagram import JsonDiagramParser

__all__ = ["DiagramDocument", "JsonDiagramParser", "Parser", "parse", "parse_dict"]


def parse(src: str) -> DiagramDocument:
    """Parse a JSON diagram document."""
    return JsonDiagramParser().parse(src)


def parse_dict(data: Any) -> DiagramDocument:
    """Parse a decoded diagram document (e.g. an API payload)."""
    return JsonDiagramParser().parse_dict(data)
