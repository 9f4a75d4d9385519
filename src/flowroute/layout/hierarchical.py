"""Hierarchical (layered) auto-layout for nodes without an explicit position.

Phases:
  1. Layer assignment (multi-source BFS from in-degree-0 roots)
  2. Optional crossing reduction (barycenter sweeps)
  3. Coordinate assignment along the main and cross axes
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from itertools import combinations

from flowroute.config import RoutingConfig
from flowroute.geometry import Point
from flowroute.ir.graph import DiagramGraph
from flowroute.ir.model import Connection, Diagram, Node
from flowroute.types import LayoutDirection

logger = logging.getLogger(__name__)

_MAX_ORDER_PASSES = 24


# ─── Layer Assignment ────────────────────────────────────────────────────────


class LayerAssignment:
    """BFS depth of every node plus the per-layer discovery order."""

    def __init__(self, layers: dict[str, int], ordering: list[list[str]], synthetic_roots: list[str]) -> None:
        self.layers = layers
        self.ordering = ordering
        self.synthetic_roots = synthetic_roots

    @property
    def layer_count(self) -> int:
        return len(self.ordering)

    @classmethod
    def assign(cls, graph: DiagramGraph, unpositioned: set[str] | None = None) -> LayerAssignment:
        """Assign layers over the whole graph.

        Roots are nodes with no incoming connection. A node keeps the first
        depth at which the BFS reaches it, so back-edges never move it. Nodes
        the roots cannot reach (cycles) are covered by promoting the unvisited
        node with the smallest insertion index to an extra layer-0 root,
        unpositioned nodes first.
        """
        if unpositioned is None:
            unpositioned = set(graph.node_ids())

        layers: dict[str, int] = {}
        ordering: list[list[str]] = []

        def visit(node_id: str, depth: int) -> None:
            layers[node_id] = depth
            while len(ordering) <= depth:
                ordering.append([])
            ordering[depth].append(node_id)

        def bfs(sources: list[str]) -> None:
            queue: deque[str] = deque()
            for src in sources:
                visit(src, 0)
                queue.append(src)
            while queue:
                current = queue.popleft()
                for child in graph.successors(current):
                    if child not in layers:
                        visit(child, layers[current] + 1)
                        queue.append(child)

        bfs(graph.roots())

        synthetic_roots: list[str] = []
        pending = [n for n in graph.node_ids() if n not in layers]
        pending.sort(key=lambda n: (n not in unpositioned, graph.insertion_index(n)))
        for node_id in pending:
            if node_id in layers:
                continue
            synthetic_roots.append(node_id)
            bfs([node_id])

        if synthetic_roots:
            logger.debug("no natural root reaches %s; promoted to layer 0", synthetic_roots)

        return cls(layers=layers, ordering=ordering, synthetic_roots=synthetic_roots)


# ─── Crossing Reduction ──────────────────────────────────────────────────────


def minimise_crossings(ordering: list[list[str]], graph: DiagramGraph) -> list[list[str]]:
    """Reorder nodes within layers using the barycenter heuristic.

    Nodes without neighbors in the adjacent layer keep their current slot.
    Returns the best ordering seen; the input is not modified.
    """
    current = [list(layer) for layer in ordering]
    best = [list(layer) for layer in current]
    best_count = count_crossings(current, graph)
    if best_count == 0:
        return best

    for _pass in range(_MAX_ORDER_PASSES):
        for layer_idx in range(1, len(current)):
            prev = {nid: float(i) for i, nid in enumerate(current[layer_idx - 1])}
            current[layer_idx] = _sorted_by_barycenter(current[layer_idx], graph, prev, "incoming")

        for layer_idx in range(len(current) - 2, -1, -1):
            nxt = {nid: float(i) for i, nid in enumerate(current[layer_idx + 1])}
            current[layer_idx] = _sorted_by_barycenter(current[layer_idx], graph, nxt, "outgoing")

        new = count_crossings(current, graph)
        if new >= best_count:
            break
        best_count = new
        best = [list(layer) for layer in current]

    return best


def _sorted_by_barycenter(layer: list[str], graph: DiagramGraph, neighbor_pos: dict[str, float], direction: str) -> list[str]:
    keyed = [(_barycenter(node_id, graph, neighbor_pos, direction, float(i)), i, node_id) for i, node_id in enumerate(layer)]
    keyed.sort()
    return [node_id for _, _, node_id in keyed]


def _barycenter(node_id: str, graph: DiagramGraph, neighbor_pos: dict[str, float], direction: str, default: float) -> float:
    neighbors = graph.predecessors(node_id) if direction == "incoming" else graph.successors(node_id)
    positions = [neighbor_pos[nb] for nb in neighbors if nb in neighbor_pos]
    if not positions:
        return default
    return sum(positions) / len(positions)


def count_crossings(ordering: list[list[str]], graph: DiagramGraph) -> int:
    """Count pairs of connections between adjacent layers that cross."""
    slots = {nid: (layer_idx, pos) for layer_idx, layer in enumerate(ordering) for pos, nid in enumerate(layer)}
    spans: dict[int, list[tuple[int, int]]] = {}
    for src, dst in graph.edges():
        if src not in slots or dst not in slots:
            continue
        src_layer, src_pos = slots[src]
        dst_layer, dst_pos = slots[dst]
        if dst_layer == src_layer + 1:
            spans.setdefault(src_layer, []).append((src_pos, dst_pos))
    # Two spans cross when their endpoints are ordered oppositely in the two layers
    return sum(
        1
        for layer_spans in spans.values()
        for (a_src, a_dst), (b_src, b_dst) in combinations(layer_spans, 2)
        if (a_src - b_src) * (a_dst - b_dst) < 0
    )


# ─── Coordinate Assignment ───────────────────────────────────────────────────


def assign_coordinates(
    ordering: list[list[str]],
    nodes: dict[str, Node],
    direction: LayoutDirection,
    node_spacing: float,
    level_spacing: float,
    margin: float,
    start_position: tuple[float, float],
) -> dict[str, Point]:
    """Top-left position of every node in ``ordering``.

    Layers advance along the main axis (y for vertical, x for horizontal),
    each as deep as its largest node; nodes are centered on the main axis
    within their layer band. Empty layers take no space.
    """
    is_vertical = direction is LayoutDirection.Vertical
    start_x, start_y = start_position
    main_start, cross_start = (start_y, start_x) if is_vertical else (start_x, start_y)

    def dims(node: Node) -> tuple[float, float]:
        # (main, cross)
        return (node.height, node.width) if is_vertical else (node.width, node.height)

    positions: dict[str, Point] = {}
    main_offset = main_start + margin
    for layer in ordering:
        if not layer:
            continue
        extent = max(dims(nodes[nid])[0] for nid in layer)
        cross_offset = cross_start + margin
        for node_id in layer:
            main_size, cross_size = dims(nodes[node_id])
            main_pos = main_offset + (extent - main_size) / 2
            if is_vertical:
                positions[node_id] = Point(cross_offset, main_pos)
            else:
                positions[node_id] = Point(main_pos, cross_offset)
            cross_offset += cross_size + node_spacing
        main_offset += extent + level_spacing

    return positions


# ─── HierarchicalLayout Engine ───────────────────────────────────────────────


@dataclass
class HierarchicalLayout:
    """Layered layout engine for unpositioned nodes."""

    direction: LayoutDirection = LayoutDirection.Vertical
    node_spacing: float = 60
    level_spacing: float = 100
    margin: float = 50
    start_position: tuple[float, float] = (0.0, 0.0)
    optimize_order: bool = False

    @classmethod
    def from_config(cls, config: RoutingConfig) -> HierarchicalLayout:
        return cls(
            direction=config.layout_direction,
            node_spacing=config.node_spacing,
            level_spacing=config.level_spacing,
            margin=config.layout_margin,
            start_position=config.start_position,
            optimize_order=config.optimize_layer_order,
        )

    def assign_layers(self, diagram: Diagram, graph: DiagramGraph | None = None) -> LayerAssignment:
        graph = graph or DiagramGraph.from_diagram(diagram)
        return LayerAssignment.assign(graph, {n.id for n in diagram.unpositioned()})

    def layout(self, diagram: Diagram) -> dict[str, Point]:
        """Positions for the diagram's unpositioned nodes only.

        Explicitly positioned nodes take part in the BFS (they can be roots
        or bridges) but are left out of every layer when spacing is computed.
        """
        unpositioned = {n.id for n in diagram.unpositioned()}
        if not unpositioned:
            return {}

        graph = DiagramGraph.from_diagram(diagram)
        la = LayerAssignment.assign(graph, unpositioned)
        ordering = [[nid for nid in layer if nid in unpositioned] for layer in la.ordering]
        ordering = [layer for layer in ordering if layer]
        if self.optimize_order:
            ordering = minimise_crossings(ordering, graph)

        nodes = {n.id: n for n in diagram.nodes}
        return assign_coordinates(
            ordering,
            nodes,
            self.direction,
            self.node_spacing,
            self.level_spacing,
            self.margin,
            self.start_position,
        )


def layout(
    nodes: list[Node],
    connections: list[Connection],
    direction: LayoutDirection = LayoutDirection.Vertical,
    node_spacing: float = 60,
    level_spacing: float = 100,
    margin: float = 50,
    start_position: tuple[float, float] = (0.0, 0.0),
) -> dict[str, Point]:
    """Functional entry point: positions for every node lacking one."""
    engine = HierarchicalLayout(direction, node_spacing, level_spacing, margin, start_position)
    return engine.layout(Diagram(nodes=list(nodes), connections=list(connections)))
