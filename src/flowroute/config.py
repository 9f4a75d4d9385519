"""Centralized configuration for flowroute."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any

from flowroute.errors import ConfigError
from flowroute.types import LayoutDirection

# camelCase JSON key -> dataclass field
_JSON_KEYS: dict[str, str] = {
    "gridSize": "grid_size",
    "nodePadding": "node_padding",
    "minSpacing": "min_spacing",
    "layoutDirection": "layout_direction",
    "nodeSpacing": "node_spacing",
    "levelSpacing": "level_spacing",
    "layoutMargin": "layout_margin",
    "startPosition": "start_position",
    "preferStraight": "prefer_straight",
    "maxSearchExpansions": "max_search_expansions",
    "optimizeLayerOrder": "optimize_layer_order",
    "labelCharWidth": "label_char_width",
    "labelHeight": "label_height",
    "labelPadding": "label_padding",
    "routingMargin": "routing_margin",
}

_POSITIVE = ("grid_size", "label_char_width", "label_height")
_NON_NEGATIVE = (
    "node_padding",
    "min_spacing",
    "node_spacing",
    "level_spacing",
    "layout_margin",
    "label_padding",
    "routing_margin",
)


@dataclass(frozen=True)
class RoutingConfig:
    """Configuration for the layout and routing pipeline."""

    grid_size: float = 10
    node_padding: float = 25
    min_spacing: float = 35
    layout_direction: LayoutDirection = LayoutDirection.Vertical
    node_spacing: float = 60
    level_spacing: float = 100
    layout_margin: float = 50
    start_position: tuple[float, float] = (0.0, 0.0)
    prefer_straight: bool = True
    max_search_expansions: int | None = None
    optimize_layer_order: bool = False
    label_char_width: float = 8
    label_height: float = 18
    label_padding: float = 6
    routing_margin: float = 0

    def __post_init__(self) -> None:
        for name in _POSITIVE:
            value = _number(name, getattr(self, name))
            if value <= 0:
                raise ConfigError(_json_name(name), f"must be > 0, got {value}")
        for name in _NON_NEGATIVE:
            value = _number(name, getattr(self, name))
            if value < 0:
                raise ConfigError(_json_name(name), f"must be >= 0, got {value}")
        if not isinstance(self.layout_direction, LayoutDirection):
            raise ConfigError("layoutDirection", f"expected LayoutDirection, got {self.layout_direction!r}")
        if len(self.start_position) != 2:
            raise ConfigError("startPosition", "expected an (x, y) pair")
        for coord in self.start_position:
            _number("start_position", coord)
        if self.max_search_expansions is not None:
            if isinstance(self.max_search_expansions, bool) or not isinstance(self.max_search_expansions, int):
                raise ConfigError("maxSearchExpansions", "expected an integer or null")
            if self.max_search_expansions <= 0:
                raise ConfigError("maxSearchExpansions", "must be > 0")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> RoutingConfig:
        """Build a config from the camelCase ``config`` block of a diagram.

        Missing keys keep their defaults; unknown keys are rejected.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("config", f"expected an object, got {type(data).__name__}")

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            field_name = _JSON_KEYS.get(key)
            if field_name is None:
                raise ConfigError(key, "unknown configuration key")
            kwargs[field_name] = _convert(key, value)
        return cls(**kwargs)

    def with_overrides(self, **changes: Any) -> RoutingConfig:
        """Return a copy with the given fields replaced; ``None`` values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return dataclasses.replace(self, **changes)


def parse_direction(value: Any) -> LayoutDirection:
    """Parse ``"vertical"``/``"horizontal"`` (case-insensitive)."""
    if isinstance(value, LayoutDirection):
        return value
    if isinstance(value, str):
        try:
            return LayoutDirection(value.strip().lower())
        except ValueError:
            pass
    raise ConfigError("layoutDirection", f"unknown direction {value!r}; use 'vertical' or 'horizontal'")


def _convert(key: str, value: Any) -> Any:
    if key == "layoutDirection":
        return parse_direction(value)
    if key == "startPosition":
        if not isinstance(value, dict) or "x" not in value or "y" not in value:
            raise ConfigError(key, "expected an object with 'x' and 'y'")
        return (_number(key, value["x"]), _number(key, value["y"]))
    if key in ("preferStraight", "optimizeLayerOrder"):
        if not isinstance(value, bool):
            raise ConfigError(key, f"expected a boolean, got {value!r}")
        return value
    if key == "maxSearchExpansions":
        return value
    return _number(key, value)


def _number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(_json_name(name), f"expected a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigError(_json_name(name), f"must be finite, got {value}")
    return value


def _json_name(field_name: str) -> str:
    for key, name in _JSON_KEYS.items():
        if name == field_name:
            return key
    return field_name
