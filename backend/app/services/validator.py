import logging
from typing import Any, List, Tuple

from shapely.geometry import Polygon
from shapely.validation import explain_validity, make_valid

from floorplan.model import FloorPlan, InvalidFloorPlanError, RoomPolygon

logger = logging.getLogger(__name__)

OVERLAP_AREA_TOLERANCE = 0.01


def _room_name(room: RoomPolygon) -> str:
    return f'{room.room_type or "room"} "{room.id}"'


def _shape(room: RoomPolygon) -> Polygon:
    return Polygon([(p.x, p.z) for p in room.floor_polygon])


def _room_warnings(room: RoomPolygon) -> List[str]:
    warnings: List[str] = []
    pts = room.floor_polygon

    if room.is_wall:
        if len(pts) < 2:
            warnings.append(f"{_room_name(room)} has {len(pts)} point(s) and will not be drawn.")
        return warnings

    if not room.is_closed:
        warnings.append(f"{_room_name(room)} has only {len(pts)} point(s) and will not be drawn.")
        return warnings

    for i, start, end in room.edges():
        if start == end:
            warnings.append(f"{_room_name(room)} repeats vertex {i}; that edge gets no wall.")

    poly = _shape(room)
    # make_valid keeps the area of a bow-tie but collapses a flat ring to a line
    if make_valid(poly).area < 1e-9:
        warnings.append(f"{_room_name(room)} has zero area.")
    elif not poly.is_valid:
        warnings.append(f"{_room_name(room)} is not a simple polygon ({explain_validity(poly)}).")
    return warnings


def _overlap_warnings(rooms: List[RoomPolygon]) -> List[str]:
    """Pairs of filled rooms whose interiors overlap; boundary outlines are allowed to overlap."""
    candidates = [r for r in rooms if r.is_closed and not r.is_wall and not r.renders_as_outline]
    shapes = []
    for r in candidates:
        poly = _shape(r)
        shapes.append(poly if poly.is_valid else poly.buffer(0))

    warnings: List[str] = []
    for i in range(len(candidates)):
        for j in range(i + 1, len(candidates)):
            if shapes[i].is_empty or shapes[j].is_empty:
                continue
            if shapes[i].intersection(shapes[j]).area > OVERLAP_AREA_TOLERANCE:
                warnings.append(f"{_room_name(candidates[i])} overlaps with {_room_name(candidates[j])}.")
    return warnings


def validate_floor_plan(raw: Any) -> Tuple[bool, List[str], List[str]]:
    """
    Checks a floor-plan record before rendering.

    Errors break the type contract and stop rendering. Warnings describe
    geometry the renderer will degrade around (skipped rooms, dropped edges,
    self-intersections, overlaps); they never block a render.
    """
    errors: List[str] = []
    warnings: List[str] = []

    try:
        plan = raw if isinstance(raw, FloorPlan) else FloorPlan.from_dict(raw)
    except InvalidFloorPlanError as e:
        errors.append(str(e))
        return (False, errors, warnings)

    rooms = plan.renderable_rooms()
    if not rooms:
        warnings.append("No renderable rooms; the plan renders blank.")
        return (True, errors, warnings)

    for room in rooms:
        warnings.extend(_room_warnings(room))
    warnings.extend(_overlap_warnings(rooms))

    if warnings:
        logger.debug("Floor plan has %d geometry warning(s)", len(warnings))
    return (len(errors) == 0, errors, warnings)

