"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from flowroute.layout.types import RenderModel


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, model: RenderModel) -> str:
        """Render a built diagram to an output string."""
        ...
