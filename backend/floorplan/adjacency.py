# floorplan/adjacency.py
"""
Exposed vs. shared wall detection.

An edge is internal when another room has an edge with the same two
endpoints (either direction) within the coordinate tolerance. Wall and
Reference rooms never act as partners.
"""

from typing import Dict, List, Sequence, Tuple

from floorplan.model import Point, RoomPolygon
from floorplan.viewport import DEFAULT_ADJACENCY_TOLERANCE

INTERNAL = "internal"
EXTERNAL = "external"

# (owner index, x0, z0, x1, z1)
_Edge = Tuple[int, float, float, float, float]


def _close(a: float, b: float, tol: float) -> bool:
    return abs(a - b) < tol


def edges_match(s1: Point, e1: Point, s2: Point, e2: Point, tolerance: float) -> bool:
    same = (_close(s1.x, s2.x, tolerance) and _close(s1.z, s2.z, tolerance)
            and _close(e1.x, e2.x, tolerance) and _close(e1.z, e2.z, tolerance))
    if same:
        return True
    return (_close(s1.x, e2.x, tolerance) and _close(s1.z, e2.z, tolerance)
            and _close(e1.x, s2.x, tolerance) and _close(e1.z, s2.z, tolerance))


class AdjacencyClassifier:
    """Classifies room edges against every other partner room's edges."""

    def __init__(self, rooms: Sequence[RoomPolygon], tolerance: float = DEFAULT_ADJACENCY_TOLERANCE):
        self.rooms = list(rooms)
        self.tolerance = tolerance
        self._edges: List[_Edge] = []
        for idx, room in enumerate(self.rooms):
            if room.is_wall or room.is_reference:
                continue
            for _, s, e in room.edges():
                self._edges.append((idx, s.x, s.z, e.x, e.z))

    def is_internal(self, room_index: int, start: Point, end: Point) -> bool:
        tol = self.tolerance
        lo_x, hi_x = min(start.x, end.x) - tol, max(start.x, end.x) + tol
        lo_z, hi_z = min(start.z, end.z) - tol, max(start.z, end.z) + tol
        for owner, x0, z0, x1, z1 in self._edges:
            if owner == room_index:
                continue
            # cheap reject before the endpoint comparison
            if not (lo_x < x0 < hi_x and lo_x < x1 < hi_x and lo_z < z0 < hi_z and lo_z < z1 < hi_z):
                continue
            if edges_match(start, end, Point(x0, z0), Point(x1, z1), tol):
                return True
        return False

    def classify(self, room_index: int, start: Point, end: Point) -> str:
        return INTERNAL if self.is_internal(room_index, start, end) else EXTERNAL

    def classify_room(self, room_index: int) -> List[str]:
        """Classification of every edge of one room, in edge order."""
        room = self.rooms[room_index]
        return [self.classify(room_index, s, e) for _, s, e in room.edges()]

    def classify_all(self) -> Dict[int, List[str]]:
        return {
            idx: self.classify_room(idx)
            for idx, room in enumerate(self.rooms)
            if not (room.is_wall or room.is_reference) and room.is_closed
        }
