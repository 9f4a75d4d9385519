"""Route every diagram under examples/ and check the render model end to end."""

import json
from pathlib import Path

import pytest

from flowroute import build, parse, route_json
from flowroute.geometry import GridCell, Point
from flowroute.ir.model import node_bounds
from flowroute.layout.pathfinder import OccupancyGrid, build_grid, routing_bounds

EXAMPLES_DIR = Path(__file__).parent.parent.parent / "examples"

EXAMPLE_FILES = sorted(EXAMPLES_DIR.glob("*.json"))


def on_border(p: dict, rect: tuple[float, float, float, float]) -> bool:
    x, y, w, h = rect
    inside = x <= p["x"] <= x + w and y <= p["y"] <= y + h
    strictly = x < p["x"] < x + w and y < p["y"] < y + h
    return inside and not strictly


def crosses_interior(a: dict, b: dict, rect: tuple[float, float, float, float]) -> bool:
    x, y, w, h = rect
    lo_x, hi_x = min(a["x"], b["x"]), max(a["x"], b["x"])
    lo_y, hi_y = min(a["y"], b["y"]), max(a["y"], b["y"])
    return lo_x < x + w and hi_x > x and lo_y < y + h and hi_y > y


def node_rects(doc: dict, positions: dict) -> dict[str, tuple[float, float, float, float]]:
    rects = {}
    for node in doc["nodes"]:
        size = node.get("size", {})
        width = node.get("width", size.get("width", 140))
        height = node.get("height", size.get("height", 60))
        pos = positions[node["id"]]
        rects[node["id"]] = (pos["x"], pos["y"], width, height)
    return rects


def test_examples_present():
    assert EXAMPLE_FILES, f"no example diagrams in {EXAMPLES_DIR}"


@pytest.mark.parametrize("path", EXAMPLE_FILES, ids=[p.stem for p in EXAMPLE_FILES])
def test_example_routes_cleanly(path: Path) -> None:
    src = path.read_text()
    doc = json.loads(src)
    model = json.loads(route_json(src))

    positions = model["nodePositions"]
    assert list(positions) == [n["id"] for n in doc["nodes"]]
    for node in doc["nodes"]:
        if "position" in node:
            assert positions[node["id"]] == node["position"]

    rects = node_rects(doc, positions)
    paths = model["connectionPaths"]
    assert [(p["from"], p["to"]) for p in paths] == [(c["from"], c["to"]) for c in doc["connections"]]

    for routed in paths:
        waypoints = routed["waypoints"]
        assert len(waypoints) >= 2
        assert on_border(waypoints[0], rects[routed["from"]])
        assert on_border(waypoints[-1], rects[routed["to"]])
        if routed["fallback"]:
            assert len(waypoints) == 2
            continue
        for a, b in zip(waypoints, waypoints[1:]):
            assert a["x"] == b["x"] or a["y"] == b["y"], f"diagonal segment in {routed['from']}->{routed['to']}"
            for node_id, rect in rects.items():
                if node_id in (routed["from"], routed["to"]):
                    continue
                assert not crosses_interior(a, b, rect), f"{routed['from']}->{routed['to']} crosses {node_id}"

    labelled = [i for i, c in enumerate(doc["connections"]) if c.get("label")]
    assert [lbl["connectionIndex"] for lbl in model["labelPlacements"]] == labelled


@pytest.mark.parametrize("path", EXAMPLE_FILES, ids=[p.stem for p in EXAMPLE_FILES])
def test_example_output_is_stable(path: Path) -> None:
    src = path.read_text()
    assert route_json(src) == route_json(src)


def padded_cells_touched(grid: OccupancyGrid, waypoints: list[Point]) -> list[GridCell]:
    """Blocked cells under an orthogonal polyline, skipping the cells at its two anchors."""
    g = grid.cell_size
    ends = (waypoints[0], waypoints[-1])
    touched = []
    for a, b in zip(waypoints, waypoints[1:]):
        ca, cb = grid.cell_of(a), grid.cell_of(b)
        cols = range(min(ca.col, cb.col), max(ca.col, cb.col) + 1)
        rows = range(min(ca.row, cb.row), max(ca.row, cb.row) + 1)
        for cell in (GridCell(col, row) for col in cols for row in rows):
            center = grid.cell_center(cell)
            if any(abs(center.x - p.x) <= g and abs(center.y - p.y) <= g for p in ends):
                continue
            if not grid.is_free(cell.col, cell.row):
                touched.append(cell)
    return touched


@pytest.mark.parametrize("path", EXAMPLE_FILES, ids=[p.stem for p in EXAMPLE_FILES])
def test_example_paths_stay_out_of_padding(path: Path) -> None:
    doc = parse(path.read_text())
    cfg = doc.config
    model = build(doc.diagram, cfg)
    rects = {n.id: node_bounds(n, model.node_positions[n.id]) for n in doc.diagram.nodes}
    obstacles = [r.expanded(cfg.node_padding) for r in rects.values()]

    for routed in model.connection_paths:
        if routed.fallback:
            continue
        bounds = routing_bounds(obstacles, routed.waypoints, cfg.grid_size)
        grid = build_grid(rects, (routed.from_id, routed.to_id), cfg.grid_size, cfg.node_padding, bounds)
        touched = padded_cells_touched(grid, routed.waypoints)
        assert touched == [], f"{routed.from_id}->{routed.to_id} enters padding at {touched}"
