"""Diagram build pipeline: validate, auto-layout, then route every connection."""

from __future__ import annotations

import logging

from flowroute.config import RoutingConfig
from flowroute.geometry import Point, Rect
from flowroute.ir.model import Connection, Diagram, node_bounds
from flowroute.ir.validation import validate_diagram
from flowroute.layout.anchors import nudge, resolve_anchor
from flowroute.layout.hierarchical import HierarchicalLayout
from flowroute.layout.labels import label_box, place_label
from flowroute.layout.pathfinder import a_star, build_grid, cells_to_waypoints, count_turns, routing_bounds
from flowroute.layout.types import PlacedLabel, RenderModel, RoutedConnection

logger = logging.getLogger(__name__)


class DiagramBuilder:
    """Turns a diagram into a render model. Holds no state between builds."""

    def __init__(self, config: RoutingConfig | None = None) -> None:
        self.config = config or RoutingConfig()

    def build(self, diagram: Diagram) -> RenderModel:
        validate_diagram(diagram)

        positions = self.resolve_positions(diagram)
        rects: dict[str, Rect] = {n.id: node_bounds(n, positions[n.id]) for n in diagram.nodes}

        model = RenderModel(node_positions=positions)
        for index, conn in enumerate(diagram.connections):
            routed = self.route_connection(conn, rects)
            model.connection_paths.append(routed)
            label = self.place_connection_label(index, conn, routed.waypoints)
            if label is not None:
                model.label_placements.append(label)
        return model

    def resolve_positions(self, diagram: Diagram) -> dict[str, Point]:
        """Explicit positions merged with auto-layout results, in node order."""
        auto = HierarchicalLayout.from_config(self.config).layout(diagram)
        return {n.id: n.position if n.position is not None else auto[n.id] for n in diagram.nodes}

    def route_connection(self, conn: Connection, rects: dict[str, Rect]) -> RoutedConnection:
        """Route one connection around every node except its own endpoints.

        Falls back to the straight segment between the two anchor points when
        the obstacles leave no path.
        """
        cfg = self.config
        from_rect, to_rect = rects[conn.from_id], rects[conn.to_id]
        start = resolve_anchor(from_rect, conn.from_anchor, to_rect.center)
        end = resolve_anchor(to_rect, conn.to_anchor, from_rect.center)

        half_cell = cfg.grid_size / 2
        exit_point, entry_point = nudge(start, half_cell), nudge(end, half_cell)

        obstacles = [r.expanded(cfg.node_padding) for nid, r in rects.items() if nid not in (conn.from_id, conn.to_id)]
        bounds = routing_bounds(
            obstacles,
            [start.point, end.point, exit_point, entry_point],
            cfg.grid_size,
            cfg.routing_margin,
        )
        grid = build_grid(rects, (conn.from_id, conn.to_id), cfg.grid_size, cfg.node_padding, bounds)

        inward = (-end.direction[0], -end.direction[1])
        cells = a_star(
            grid,
            grid.cell_of(exit_point),
            grid.cell_of(entry_point),
            start_heading=start.direction,
            goal_heading=inward,
            prefer_straight=cfg.prefer_straight,
            max_expansions=cfg.max_search_expansions,
        )
        if cells is None:
            logger.debug("no route %s -> %s; using straight fallback", conn.from_id, conn.to_id)
            return RoutedConnection(conn.from_id, conn.to_id, [start.point, end.point], fallback=True)

        waypoints = cells_to_waypoints(grid, cells, start, end)
        logger.debug(
            "routed %s -> %s: %d cells, %d waypoints, %d turns",
            conn.from_id,
            conn.to_id,
            len(cells),
            len(waypoints),
            count_turns(waypoints),
        )
        return RoutedConnection(conn.from_id, conn.to_id, waypoints)

    def place_connection_label(self, index: int, conn: Connection, waypoints: list[Point]) -> PlacedLabel | None:
        cfg = self.config
        min_distance = conn.label_min_distance if conn.label_min_distance is not None else cfg.min_spacing
        placed = place_label(waypoints, conn.label, min_distance)
        if placed is None:
            return None
        box = label_box(placed.position, conn.label, cfg.label_char_width, cfg.label_height, cfg.label_padding)
        return PlacedLabel(
            connection_index=index,
            position=placed.position,
            text=conn.label,
            box=box,
            clearance=placed.has_clearance,
        )


def build(diagram: Diagram, config: RoutingConfig | None = None) -> RenderModel:
    """Run the full pipeline with the given (or default) configuration."""
    return DiagramBuilder(config).build(diagram)
