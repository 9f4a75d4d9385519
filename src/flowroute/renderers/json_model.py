"""JSON renderer: serializes the render model for an external drawing surface."""

from __future__ import annotations

import json

from flowroute.layout.types import RenderModel


class JsonRenderer:
    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def render(self, model: RenderModel) -> str:
        return json.dumps(model.to_dict(), indent=self.indent) + "\n"
