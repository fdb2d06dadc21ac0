# floorplan/model.py
import logging
import math
from collections import namedtuple
from numbers import Real
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

WALL = "Wall"
REFERENCE = "Reference"
BOUNDARY = "Boundary"

Point = namedtuple("Point", ["x", "z"])


class InvalidFloorPlanError(ValueError):
    """Raised when a floor-plan record breaks the basic type contract."""


def _coerce_number(value: Any, where: str) -> float:
    # bool is a subclass of int but never a coordinate
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidFloorPlanError(f"{where}: expected a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidFloorPlanError(f"{where}: expected a finite number, got {value!r}")
    return float(value)


def parse_point(raw: Any, where: str = "point") -> Point:
    if isinstance(raw, Point):
        return Point(_coerce_number(raw.x, where + ".x"), _coerce_number(raw.z, where + ".z"))
    if isinstance(raw, dict):
        if "x" not in raw or "z" not in raw:
            raise InvalidFloorPlanError(f"{where}: missing 'x' or 'z'")
        return Point(_coerce_number(raw["x"], where + ".x"), _coerce_number(raw["z"], where + ".z"))
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return Point(_coerce_number(raw[0], where + ".x"), _coerce_number(raw[1], where + ".z"))
    raise InvalidFloorPlanError(f"{where}: cannot read a point from {raw!r}")


class RoomPolygon:
    def __init__(self, id, room_type: str, floor_polygon: Sequence[Point],
                 area: Optional[float] = None, height: Optional[float] = None,
                 width: Optional[float] = None, is_regular: Optional[bool] = None,
                 is_boundary: bool = False):
        self.id = id
        self.room_type = room_type
        self.floor_polygon = list(floor_polygon)
        self.area, self.height, self.width = area, height, width
        self.is_regular = is_regular
        self.is_boundary = bool(is_boundary)

    @property
    def is_reference(self) -> bool:
        return self.room_type == REFERENCE

    @property
    def is_wall(self) -> bool:
        return self.room_type == WALL

    @property
    def is_standalone_wall(self) -> bool:
        return self.is_wall and len(self.floor_polygon) == 2

    @property
    def is_closed(self) -> bool:
        return len(self.floor_polygon) >= 3

    @property
    def renders_as_outline(self) -> bool:
        return self.is_boundary or self.room_type == BOUNDARY

    def edges(self):
        """Yield ``(index, start, end)`` for every edge, wrapping the last vertex to the first."""
        pts = self.floor_polygon
        n = len(pts)
        for i in range(n):
            yield i, pts[i], pts[(i + 1) % n]

    def __repr__(self):
        return f"RoomPolygon(id={self.id!r}, room_type={self.room_type!r}, points={len(self.floor_polygon)})"

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "id": self.id,
            "room_type": self.room_type,
            "floor_polygon": [{"x": p.x, "z": p.z} for p in self.floor_polygon],
        }
        for key, value in (("area", self.area), ("height", self.height),
                           ("width", self.width), ("is_regular", self.is_regular)):
            if value is not None:
                out[key] = value
        if self.is_boundary:
            out["isBoundary"] = True
        return out

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], index: int = 0) -> "RoomPolygon":
        if not isinstance(raw, dict):
            raise InvalidFloorPlanError(f"rooms[{index}]: expected an object, got {type(raw).__name__}")
        if "floor_polygon" not in raw or raw["floor_polygon"] is None:
            raise InvalidFloorPlanError(f"rooms[{index}]: missing 'floor_polygon'")
        raw_points = raw["floor_polygon"]
        if not isinstance(raw_points, (list, tuple)):
            raise InvalidFloorPlanError(f"rooms[{index}].floor_polygon: expected a list")
        points = [parse_point(p, f"rooms[{index}].floor_polygon[{i}]") for i, p in enumerate(raw_points)]

        room_type = raw.get("room_type") or ""
        if not isinstance(room_type, str):
            raise InvalidFloorPlanError(f"rooms[{index}].room_type: expected a string")

        return cls(
            id=raw.get("id", index),
            room_type=room_type,
            floor_polygon=points,
            area=raw.get("area"),
            height=raw.get("height"),
            width=raw.get("width"),
            is_regular=raw.get("is_regular"),
            is_boundary=bool(raw.get("isBoundary", raw.get("is_boundary", False))),
        )


class FloorPlan:
    """A whole plan as supplied by the caller.

    ``room_count``, ``total_area`` and ``room_types`` are informational
    metadata; they are carried through as given and never recomputed.
    """

    def __init__(self, rooms: List[RoomPolygon], room_count: Optional[int] = None,
                 total_area: Optional[float] = None, room_types: Optional[List[str]] = None):
        self.rooms = list(rooms)
        self.room_count = room_count
        self.total_area = total_area
        self.room_types = room_types

    def renderable_rooms(self) -> List[RoomPolygon]:
        """Rooms that take part in geometry: not a Reference sentinel and at least one point."""
        return [r for r in self.rooms if not r.is_reference and r.floor_polygon]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rooms": [r.to_dict() for r in self.rooms],
            "room_count": self.room_count,
            "total_area": self.total_area,
            "room_types": self.room_types,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "FloorPlan":
        if not isinstance(raw, dict):
            raise InvalidFloorPlanError(f"floor plan: expected an object, got {type(raw).__name__}")
        if "rooms" not in raw or not isinstance(raw["rooms"], (list, tuple)):
            raise InvalidFloorPlanError("floor plan: missing 'rooms' list")
        rooms = [RoomPolygon.from_dict(r, i) for i, r in enumerate(raw["rooms"])]
        return cls(
            rooms=rooms,
            room_count=raw.get("room_count"),
            total_area=raw.get("total_area"),
            room_types=raw.get("room_types"),
        )


def as_floor_plan(plan: Any) -> FloorPlan:
    if isinstance(plan, FloorPlan):
        return plan
    return FloorPlan.from_dict(plan)
