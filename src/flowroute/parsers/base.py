"""Base parser protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from flowroute.config import RoutingConfig
from flowroute.ir.model import Diagram


@dataclass
class DiagramDocument:
    """A parsed diagram together with its embedded ``config`` block."""

    diagram: Diagram
    config: RoutingConfig = field(default_factory=RoutingConfig)


class Parser(Protocol):
    """Protocol that all diagram parsers must implement."""

    def parse(self, src: str) -> DiagramDocument:
        """Parse source text into a diagram document."""
        ...
