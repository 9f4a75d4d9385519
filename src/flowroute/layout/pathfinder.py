"""A* pathfinder for connector routing on a pixel-space occupancy grid."""

from __future__ import annotations

import heapq
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from flowroute.geometry import GridCell, Point, Rect, bounding_rect
from flowroute.layout.types import AnchorPoint

logger = logging.getLogger(__name__)

_EPS = 1e-9


@dataclass
class OccupancyGrid:
    """2D boolean grid laid over the canvas, tracking which cells are blocked by nodes.

    Cell ``(col, row)`` covers ``origin + [col, col + 1) * cell_size`` on x and
    the same on y.
    """

    width: int
    height: int
    blocked: list[list[bool]]
    origin: Point = field(default_factory=lambda: Point(0, 0))
    cell_size: float = 1

    @classmethod
    def create(cls, width: int, height: int, origin: Point | None = None, cell_size: float = 1) -> OccupancyGrid:
        blocked = [[False] * width for _ in range(height)]
        return cls(width=width, height=height, blocked=blocked, origin=origin or Point(0, 0), cell_size=cell_size)

    @classmethod
    def for_bounds(cls, bounds: Rect, cell_size: float) -> OccupancyGrid:
        """Cover ``bounds`` with ``ceil(width / cell_size) x ceil(height / cell_size)`` cells."""
        cols = max(1, math.ceil(bounds.width / cell_size - _EPS))
        rows = max(1, math.ceil(bounds.height / cell_size - _EPS))
        return cls.create(cols, rows, Point(bounds.x, bounds.y), cell_size)

    def mark_rect_blocked(self, rect: Rect) -> None:
        """Mark every cell whose center lies inside ``rect`` (inclusive) as blocked."""
        g = self.cell_size
        col_lo = max(0, math.ceil((rect.x - self.origin.x) / g - 0.5 - _EPS))
        col_hi = min(self.width - 1, math.floor((rect.right - self.origin.x) / g - 0.5 + _EPS))
        row_lo = max(0, math.ceil((rect.y - self.origin.y) / g - 0.5 - _EPS))
        row_hi = min(self.height - 1, math.floor((rect.bottom - self.origin.y) / g - 0.5 + _EPS))
        for row in range(row_lo, row_hi + 1):
            for col in range(col_lo, col_hi + 1):
                self.blocked[row][col] = True

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def is_free(self, col: int, row: int) -> bool:
        if not self.in_bounds(col, row):
            return False
        return not self.blocked[row][col]

    def cell_of(self, p: Point) -> GridCell:
        """Cell containing ``p``, clamped to the grid."""
        col = math.floor((p.x - self.origin.x) / self.cell_size)
        row = math.floor((p.y - self.origin.y) / self.cell_size)
        return GridCell(min(max(col, 0), self.width - 1), min(max(row, 0), self.height - 1))

    def cell_center(self, cell: GridCell) -> Point:
        g = self.cell_size
        return Point(self.origin.x + (cell.col + 0.5) * g, self.origin.y + (cell.row + 0.5) * g)

    def blocked_count(self) -> int:
        return sum(row.count(True) for row in self.blocked)


def routing_bounds(
    obstacles: Iterable[Rect],
    points: Iterable[Point],
    cell_size: float,
    margin: float = 0,
) -> Rect:
    """Grid-aligned canvas enclosing the obstacles and the given points.

    The box is grown by ``margin`` on every side, then the minimum corner is
    floored to a multiple of ``cell_size`` and the maximum corner is extended
    so that the cell containing it is included.
    """
    raw = bounding_rect(list(obstacles), list(points)).expanded(margin)
    x0 = math.floor(raw.x / cell_size) * cell_size
    y0 = math.floor(raw.y / cell_size) * cell_size
    x1 = (math.floor(raw.right / cell_size) + 1) * cell_size
    y1 = (math.floor(raw.bottom / cell_size) + 1) * cell_size
    return Rect(x0, y0, x1 - x0, y1 - y0)


def build_grid(
    rects: dict[str, Rect],
    exclude_ids: Iterable[str],
    grid_size: float,
    node_padding: float,
    canvas_bounds: Rect,
) -> OccupancyGrid:
    """Rasterize every node rect not in ``exclude_ids``, expanded by ``node_padding``."""
    excluded = set(exclude_ids)
    grid = OccupancyGrid.for_bounds(canvas_bounds, grid_size)
    for node_id, rect in rects.items():
        if node_id in excluded:
            continue
        grid.mark_rect_blocked(rect.expanded(node_padding))
    return grid


# 4-directional neighbors
_DIRS: list[tuple[int, int]] = [(0, 1), (0, -1), (1, 0), (-1, 0)]


def _heuristic(ax: int, ay: int, bx: int, by: int) -> int:
    """Manhattan distance."""
    return abs(ax - bx) + abs(ay - by)


def a_star(
    grid: OccupancyGrid,
    start: GridCell,
    goal: GridCell,
    *,
    start_heading: tuple[int, int] | None = None,
    goal_heading: tuple[int, int] | None = None,
    prefer_straight: bool = True,
    max_expansions: int | None = None,
) -> list[GridCell] | None:
    """Find a shortest 4-connected path from ``start`` to ``goal``, avoiding blocked cells.

    The cost is lexicographic ``(steps, turns)``: the path always has the
    minimal number of cells, and among those the fewest direction changes
    when ``prefer_straight`` is set. ``start_heading`` is the direction the
    path is considered to be travelling in before its first step;
    ``goal_heading`` is the direction it should be travelling in when it
    enters the goal (one extra turn otherwise).

    The start and goal cells are allowed to be blocked (they sit on the
    endpoint nodes' borders). Each ``(cell, heading)`` state is expanded at
    most once, so the search is bounded by ``4 * width * height`` expansions;
    ``max_expansions`` lowers that bound.

    Returns the list of cells from start to goal, or None if no path exists.
    """
    sx, sy = start.col, start.row
    ex, ey = goal.col, goal.row
    start_h = _DIRS.index(start_heading) if start_heading in _DIRS else -1
    goal_h = _DIRS.index(goal_heading) if goal_heading in _DIRS else -1

    start_state = (sx, sy, start_h)
    # Priority queue: (f, turns, -counter, state); most recent insertion wins ties
    counter = 0
    open_set: list[tuple[int, int, int, tuple[int, int, int]]] = []
    heapq.heappush(open_set, (_heuristic(sx, sy, ex, ey), 0, 0, start_state))

    cost_so_far: dict[tuple[int, int, int], tuple[int, int]] = {start_state: (0, 0)}
    came_from: dict[tuple[int, int, int], tuple[int, int, int] | None] = {start_state: None}
    closed: set[tuple[int, int, int]] = set()

    while open_set:
        _, _, _, state = heapq.heappop(open_set)
        if state in closed:
            continue
        cx, cy, ch = state

        if cx == ex and cy == ey:
            # Reconstruct path
            path: list[GridCell] = []
            cur: tuple[int, int, int] | None = state
            while cur is not None:
                path.append(GridCell(cur[0], cur[1]))
                cur = came_from[cur]
            path.reverse()
            return path

        closed.add(state)
        if max_expansions is not None and len(closed) > max_expansions:
            logger.warning("A* search aborted after %d expansions (%s -> %s)", max_expansions, start, goal)
            return None

        steps, turns = cost_so_far[state]

        for h, (dx, dy) in enumerate(_DIRS):
            nx_, ny = cx + dx, cy + dy
            at_goal = nx_ == ex and ny == ey

            # Allow stepping onto the goal even if blocked
            if at_goal:
                pass
            elif not grid.is_free(nx_, ny):
                continue

            new_turns = turns
            if prefer_straight:
                if ch != -1 and h != ch:
                    new_turns += 1
                if at_goal and goal_h != -1 and h != goal_h:
                    new_turns += 1

            key = (nx_, ny, h)
            if key in closed:
                continue
            new_cost = (steps + 1, new_turns)
            if key not in cost_so_far or new_cost < cost_so_far[key]:
                cost_so_far[key] = new_cost
                came_from[key] = state
                counter += 1
                priority = steps + 1 + _heuristic(nx_, ny, ex, ey)
                heapq.heappush(open_set, (priority, new_turns, -counter, key))

    return None


def _sign(v: float) -> int:
    if v > _EPS:
        return 1
    if v < -_EPS:
        return -1
    return 0


def _direction(a: Point, b: Point) -> tuple[int, int]:
    return (_sign(b.x - a.x), _sign(b.y - a.y))


def simplify_path(path: list[Point]) -> list[Point]:
    """Drop repeated points and collinear intermediate points, keeping only direction changes.

    Applying it twice gives the same result as applying it once.
    """
    deduped: list[Point] = []
    for p in path:
        if not deduped or _direction(deduped[-1], p) != (0, 0):
            deduped.append(p)
    if len(deduped) <= 2:
        return deduped

    result = [deduped[0]]
    for i in range(1, len(deduped) - 1):
        curr = deduped[i]
        # Keep point if direction changes
        if _direction(result[-1], curr) != _direction(curr, deduped[i + 1]):
            result.append(curr)
    result.append(deduped[-1])
    return result


def count_turns(path: list[Point]) -> int:
    """Number of direction changes along a polyline."""
    simplified = simplify_path(path)
    return max(0, len(simplified) - 2)


def cells_to_waypoints(
    grid: OccupancyGrid,
    cells: list[GridCell],
    start: AnchorPoint,
    end: AnchorPoint,
) -> list[Point]:
    """Convert a cell path into an axis-aligned polyline from ``start`` to ``end``.

    Cell centers are used for the interior. The first and last straight runs
    are pulled onto the exact anchor points: a run parallel to the anchor's
    outward axis is shifted onto the anchor line, a perpendicular one gets a
    short stub along that axis. The shift never leaves the run's cells.
    """
    centers = simplify_path([grid.cell_center(c) for c in cells])
    if len(centers) < 2:
        return simplify_path(_elbow(start.point, end.point, start.side.is_vertical))

    points = _attach(centers, start.point, start.side.is_vertical, locked=False)
    points.reverse()
    points = _attach(points, end.point, end.side.is_vertical, locked=len(points) == 2)
    points.reverse()
    return simplify_path(_orthogonalize(points, start.side.is_vertical))


def _attach(points: list[Point], anchor: Point, vertical: bool, *, locked: bool) -> list[Point]:
    """Replace ``points[0]`` by ``anchor``; ``locked`` forbids moving ``points[1]``."""
    first, second = points[0], points[1]
    run_vertical = _sign(first.x - second.x) == 0
    if run_vertical != vertical:
        # Elbow lies on the run's line, within the first cell
        elbow = Point(anchor.x, first.y) if vertical else Point(first.x, anchor.y)
        return [anchor, elbow, *points[1:]]
    if not locked:
        moved = Point(anchor.x, second.y) if vertical else Point(second.x, anchor.y)
        return [anchor, moved, *points[2:]]
    # Both ends share one straight run: jog halfway if they are not aligned
    if vertical:
        if _sign(anchor.x - second.x) == 0:
            return [anchor, second]
        mid = (anchor.y + second.y) / 2
        return [anchor, Point(anchor.x, mid), Point(second.x, mid), second]
    if _sign(anchor.y - second.y) == 0:
        return [anchor, second]
    mid = (anchor.x + second.x) / 2
    return [anchor, Point(mid, anchor.y), Point(mid, second.y), second]


def _elbow(a: Point, b: Point, vertical_first: bool) -> list[Point]:
    if _sign(a.x - b.x) == 0 or _sign(a.y - b.y) == 0:
        return [a, b]
    corner = Point(a.x, b.y) if vertical_first else Point(b.x, a.y)
    return [a, corner, b]


def _orthogonalize(points: list[Point], vertical_first: bool) -> list[Point]:
    """Insert an elbow between any two consecutive points that are not axis-aligned."""
    result = [points[0]]
    for p in points[1:]:
        result.extend(_elbow(result[-1], p, vertical_first)[1:])
    return result
