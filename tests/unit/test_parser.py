"""Tests for the JSON diagram parser."""

from __future__ import annotations

import json

import pytest

from flowroute.errors import ConfigError, DiagramParseError
from flowroute.geometry import Point
from flowroute.parsers import parse, parse_dict
from flowroute.types import Anchor, LayoutDirection

# ─── Helpers ──────────────────────────────────────────────────────────────────


def doc(**overrides) -> dict:
    data = {
        "nodes": [{"id": "a", "text": "Alpha"}, {"id": "b", "width": 200, "height": 80, "position": {"x": 5, "y": 6}}],
        "connections": [{"from": "a", "to": "b", "label": "go", "fromAnchor": "BOTTOM"}],
    }
    data.update(overrides)
    return data


# ─── Node Tests ───────────────────────────────────────────────────────────────


class TestNodes:
    def test_defaults(self):
        diagram = parse_dict(doc()).diagram
        a = diagram.nodes[0]
        assert a.id == "a"
        assert a.text == "Alpha"
        assert (a.width, a.height) == (140, 60)
        assert a.position is None

    def test_explicit_size_and_position(self):
        b = parse_dict(doc()).diagram.nodes[1]
        assert (b.width, b.height) == (200, 80)
        assert b.position == Point(5, 6)

    def test_text_defaults_to_id(self):
        assert parse_dict(doc()).diagram.nodes[1].text == "b"

    def test_size_object(self):
        diagram = parse_dict({"nodes": [{"id": "a", "size": {"width": 90, "height": 40}}]}).diagram
        assert (diagram.nodes[0].width, diagram.nodes[0].height) == (90, 40)

    def test_tint(self):
        diagram = parse_dict({"nodes": [{"id": "a", "tint": "#ffcc00"}]}).diagram
        assert diagram.nodes[0].tint == "#ffcc00"

    @pytest.mark.parametrize(
        "node",
        [
            {"text": "no id"},
            {"id": ""},
            {"id": 7},
            {"id": "a", "width": "wide"},
            {"id": "a", "position": {"x": 1}},
            {"id": "a", "kind": "ellipse"},
            {"id": "a", "colour": "red"},
        ],
    )
    def test_malformed_nodes(self, node):
        with pytest.raises(DiagramParseError):
            parse_dict({"nodes": [node]})


# ─── Connection Tests ─────────────────────────────────────────────────────────


class TestConnections:
    def test_fields(self):
        conn = parse_dict(doc()).diagram.connections[0]
        assert (conn.from_id, conn.to_id) == ("a", "b")
        assert conn.label == "go"
        assert conn.from_anchor is Anchor.Bottom
        assert conn.to_anchor is Anchor.Auto
        assert conn.label_min_distance is None

    def test_label_min_distance(self):
        data = doc(connections=[{"from": "a", "to": "b", "labelMinDistanceFromEnds": 12}])
        assert parse_dict(data).diagram.connections[0].label_min_distance == 12

    def test_unknown_references_are_left_to_validation(self):
        data = doc(connections=[{"from": "a", "to": "ghost"}])
        assert parse_dict(data).diagram.connections[0].to_id == "ghost"

    @pytest.mark.parametrize(
        "conn",
        [
            {"to": "b"},
            {"from": "a", "to": 3},
            {"from": "a", "to": "b", "toAnchor": "middle"},
            {"from": "a", "to": "b", "label": 5},
            {"from": "a", "to": "b", "weight": 2},
        ],
    )
    def test_malformed_connections(self, conn):
        with pytest.raises(DiagramParseError):
            parse_dict(doc(connections=[conn]))


# ─── Document Tests ───────────────────────────────────────────────────────────


class TestDocument:
    def test_parse_text(self):
        document = parse(json.dumps(doc(config={"layoutDirection": "horizontal"})))
        assert len(document.diagram.nodes) == 2
        assert document.config.layout_direction is LayoutDirection.Horizontal

    def test_empty_document(self):
        document = parse("{}")
        assert document.diagram.nodes == []
        assert document.diagram.connections == []

    def test_invalid_json(self):
        with pytest.raises(DiagramParseError, match="invalid JSON"):
            parse("{nodes: ")

    def test_not_an_object(self):
        with pytest.raises(DiagramParseError):
            parse("[]")

    def test_unknown_top_level_key(self):
        with pytest.raises(DiagramParseError, match="edges"):
            parse_dict({"nodes": [], "edges": []})

    def test_nodes_must_be_list(self):
        with pytest.raises(DiagramParseError):
            parse_dict({"nodes": {"a": {}}})

    def test_bad_config(self):
        with pytest.raises(ConfigError):
            parse_dict(doc(config={"gridSize": -1}))

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_config_literal(self, literal):
        text = '{"nodes": [{"id": "a"}], "config": {"gridSize": ' + literal + "}}"
        with pytest.raises(ConfigError, match="gridSize"):
            parse(text)
