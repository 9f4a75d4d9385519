"""Renderers: render model to output text."""

from flowroute.renderers.base import Renderer
from flowroute.renderers.json_model import JsonRenderer

__all__ = ["JsonRenderer", "Renderer"]
