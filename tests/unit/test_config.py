"""Tests for config.py: defaults, camelCase loading and validation."""

from __future__ import annotations

import pytest

from flowroute.config import RoutingConfig, parse_direction
from flowroute.errors import ConfigError
from flowroute.types import LayoutDirection


class TestDefaults:
    def test_default_values(self):
        cfg = RoutingConfig()
        assert cfg.grid_size == 10
        assert cfg.node_padding == 25
        assert cfg.min_spacing == 35
        assert cfg.layout_direction is LayoutDirection.Vertical
        assert cfg.node_spacing == 60
        assert cfg.level_spacing == 100
        assert cfg.layout_margin == 50
        assert cfg.start_position == (0.0, 0.0)
        assert cfg.prefer_straight is True
        assert cfg.max_search_expansions is None
        assert cfg.routing_margin == 0

    def test_from_none_is_default(self):
        assert RoutingConfig.from_dict(None) == RoutingConfig()


class TestFromDict:
    def test_camel_case_keys(self):
        cfg = RoutingConfig.from_dict(
            {
                "gridSize": 5,
                "nodePadding": 10,
                "minSpacing": 20,
                "layoutDirection": "Horizontal",
                "nodeSpacing": 40,
                "levelSpacing": 80,
                "layoutMargin": 0,
                "startPosition": {"x": 10, "y": 20},
                "preferStraight": False,
                "maxSearchExpansions": 1000,
                "optimizeLayerOrder": True,
                "routingMargin": 30,
            }
        )
        assert cfg.grid_size == 5
        assert cfg.node_padding == 10
        assert cfg.min_spacing == 20
        assert cfg.layout_direction is LayoutDirection.Horizontal
        assert cfg.node_spacing == 40
        assert cfg.level_spacing == 80
        assert cfg.layout_margin == 0
        assert cfg.start_position == (10, 20)
        assert cfg.prefer_straight is False
        assert cfg.max_search_expansions == 1000
        assert cfg.optimize_layer_order is True
        assert cfg.routing_margin == 30

    def test_missing_keys_keep_defaults(self):
        cfg = RoutingConfig.from_dict({"gridSize": 20})
        assert cfg.grid_size == 20
        assert cfg.node_padding == 25

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError, match="gridsize"):
            RoutingConfig.from_dict({"gridsize": 5})

    def test_not_an_object(self):
        with pytest.raises(ConfigError):
            RoutingConfig.from_dict([1, 2])

    @pytest.mark.parametrize(
        "data",
        [
            {"gridSize": 0},
            {"gridSize": -10},
            {"gridSize": "10"},
            {"nodePadding": -1},
            {"minSpacing": True},
            {"layoutDirection": "diagonal"},
            {"startPosition": [0, 0]},
            {"preferStraight": "yes"},
            {"maxSearchExpansions": 0},
            {"maxSearchExpansions": 2.5},
            {"routingMargin": -5},
            {"gridSize": float("nan")},
            {"gridSize": float("inf")},
            {"nodePadding": float("inf")},
            {"layoutMargin": float("nan")},
            {"routingMargin": float("-inf")},
            {"startPosition": {"x": float("nan"), "y": 0}},
        ],
    )
    def test_invalid_values_rejected(self, data):
        with pytest.raises(ConfigError):
            RoutingConfig.from_dict(data)

    def test_non_finite_constructor_values_rejected(self):
        with pytest.raises(ConfigError, match="finite"):
            RoutingConfig(layout_margin=float("nan"))
        with pytest.raises(ConfigError) as exc:
            RoutingConfig(start_position=(float("inf"), 0))
        assert exc.value.field == "startPosition"

    def test_error_names_json_key(self):
        with pytest.raises(ConfigError) as exc:
            RoutingConfig(grid_size=0)
        assert exc.value.field == "gridSize"


class TestOverrides:
    def test_none_values_ignored(self):
        cfg = RoutingConfig(grid_size=5)
        assert cfg.with_overrides(grid_size=None, layout_direction=None) == cfg

    def test_replaces_values(self):
        cfg = RoutingConfig().with_overrides(grid_size=20, layout_direction=LayoutDirection.Horizontal)
        assert cfg.grid_size == 20
        assert cfg.layout_direction is LayoutDirection.Horizontal

    def test_overrides_are_validated(self):
        with pytest.raises(ConfigError):
            RoutingConfig().with_overrides(node_padding=-3)


class TestParseDirection:
    def test_case_insensitive(self):
        assert parse_direction("VERTICAL") is LayoutDirection.Vertical
        assert parse_direction(" horizontal ") is LayoutDirection.Horizontal

    def test_enum_passthrough(self):
        assert parse_direction(LayoutDirection.Horizontal) is LayoutDirection.Horizontal

    def test_unknown(self):
        with pytest.raises(ConfigError):
            parse_direction("sideways")
