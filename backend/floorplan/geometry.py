# floorplan/geometry.py
import math
from collections import namedtuple
from typing import Iterable, Optional, Sequence, Tuple

from floorplan.model import RoomPolygon

Vec = Tuple[float, float]

# Below this determinant two offset lines are treated as parallel
MITER_EPSILON = 1e-4


class Bounds(namedtuple("Bounds", ["min_x", "max_x", "min_z", "max_z"])):
    __slots__ = ()

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def depth(self) -> float:
        return self.max_z - self.min_z

    @property
    def is_default(self) -> bool:
        return self == DEFAULT_BOUNDS


# Returned when no room survives filtering; callers read it as "empty plan"
DEFAULT_BOUNDS = Bounds(0.0, 100.0, 0.0, 100.0)


def plan_bounds(rooms: Iterable[RoomPolygon]) -> Bounds:
    """Axis-aligned extent of every point of every non-Reference, non-empty room."""
    min_x = min_z = math.inf
    max_x = max_z = -math.inf
    for room in rooms:
        if room.is_reference or not room.floor_polygon:
            continue
        for p in room.floor_polygon:
            min_x, max_x = min(min_x, p.x), max(max_x, p.x)
            min_z, max_z = min(min_z, p.z), max(max_z, p.z)
    if min_x == math.inf:
        return DEFAULT_BOUNDS
    return Bounds(min_x, max_x, min_z, max_z)


def line_intersection(p1: Vec, p2: Vec, p3: Vec, p4: Vec,
                      epsilon: float = MITER_EPSILON) -> Optional[Vec]:
    """
    Intersection of the infinite line through p1-p2 with the one through p3-p4.

    Returns ``None`` when the lines are parallel or nearly so (determinant
    magnitude under *epsilon*) or when the result is not finite.
    """
    denom = (p1[0] - p2[0]) * (p3[1] - p4[1]) - (p1[1] - p2[1]) * (p3[0] - p4[0])
    if abs(denom) < epsilon:
        return None
    t = ((p1[0] - p3[0]) * (p3[1] - p4[1]) - (p1[1] - p3[1]) * (p3[0] - p4[0])) / denom
    x = p1[0] + t * (p2[0] - p1[0])
    y = p1[1] + t * (p2[1] - p1[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return (x, y)


def vertex_centroid(points: Sequence[Vec]) -> Vec:
    """Mean of the vertices (not the area centroid)."""
    n = len(points)
    if n == 0:
        return (0.0, 0.0)
    return (sum(p[0] for p in points) / n, sum(p[1] for p in points) / n)


def unit_direction(start: Vec, end: Vec) -> Optional[Tuple[Vec, Vec, float]]:
    """Unit direction, left-hand unit normal and length of a segment; ``None`` if it has no length."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.hypot(dx, dy)
    if length == 0 or not math.isfinite(length):
        return None
    ux, uy = dx / length, dy / length
    return (ux, uy), (-uy, ux), length
