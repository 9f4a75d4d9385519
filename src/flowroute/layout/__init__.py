"""Layout and routing engine public API."""

from __future__ import annotations

from flowroute.layout.anchors import anchor_point, auto_side, nudge, resolve_anchor
from flowroute.layout.engine import DiagramBuilder, build
from flowroute.layout.hierarchical import (
    HierarchicalLayout,
    LayerAssignment,
    assign_coordinates,
    count_crossings,
    layout,
    minimise_crossings,
)
from flowroute.layout.labels import label_box, place_label, segment_lengths
from flowroute.layout.pathfinder import (
    OccupancyGrid,
    a_star,
    build_grid,
    cells_to_waypoints,
    count_turns,
    routing_bounds,
    simplify_path,
)
from flowroute.layout.types import (
    AnchorPoint,
    LabelPosition,
    PlacedLabel,
    RenderModel,
    RoutedConnection,
)

__all__ = [
    "AnchorPoint",
    "DiagramBuilder",
    "HierarchicalLayout",
    "LabelPosition",
    "LayerAssignment",
    "OccupancyGrid",
    "PlacedLabel",
    "RenderModel",
    "RoutedConnection",
    "a_star",
    "anchor_point",
    "assign_coordinates",
    "auto_side",
    "build",
    "build_grid",
    "cells_to_waypoints",
    "count_crossings",
    "count_turns",
    "label_box",
    "layout",
    "minimise_crossings",
    "nudge",
    "place_label",
    "resolve_anchor",
    "routing_bounds",
    "segment_lengths",
    "simplify_path",
]
