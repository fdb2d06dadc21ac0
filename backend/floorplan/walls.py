# floorplan/walls.py
"""
Wall strips for closed rooms: one offset quad per edge, thickness by
adjacency, corners mitered against the neighbouring edges of the same room.

All coordinates here are display coordinates.
"""

import logging
from collections import namedtuple
from typing import List, Optional, Sequence, Tuple

from floorplan.adjacency import AdjacencyClassifier
from floorplan.geometry import MITER_EPSILON, Vec, line_intersection, unit_direction
from floorplan.model import RoomPolygon
from floorplan.viewport import ViewportConfig, ViewportMapper

logger = logging.getLogger(__name__)

WallSegment = namedtuple(
    "WallSegment", ["owner_room_id", "edge_index", "start", "end", "thickness", "is_external"])


class MiteredQuad(namedtuple("MiteredQuad", ["top_start", "top_end", "bottom_start", "bottom_end"])):
    __slots__ = ()

    def polygon(self) -> List[Vec]:
        """Corners in drawing order: along the top side, back along the bottom."""
        return [self.top_start, self.top_end, self.bottom_end, self.bottom_start]


class WallQuad(namedtuple("WallQuad", ["segment", "quad"])):
    __slots__ = ()

    @property
    def is_external(self) -> bool:
        return self.segment.is_external


class StandaloneWall(namedtuple("StandaloneWall", ["owner_room_id", "edge_index", "start", "end", "thickness"])):
    """A Wall room drawn as a plain thick line; always in the external band."""
    __slots__ = ()
    is_external = True


# === WallGeometryBuilder ===
def build_wall_segments(room: RoomPolygon, room_index: int, classifier: AdjacencyClassifier,
                        mapper: ViewportMapper, config: ViewportConfig) -> List[WallSegment]:
    """One segment per edge of a closed, non-Wall, non-Reference room."""
    if room.is_wall or room.is_reference or not room.is_closed:
        return []

    segments = []
    for i, start, end in room.edges():
        internal = classifier.is_internal(room_index, start, end)
        thickness = config.internal_thickness if internal else config.external_thickness
        segments.append(WallSegment(
            owner_room_id=room.id,
            edge_index=i,
            start=mapper.transform(start),
            end=mapper.transform(end),
            thickness=thickness,
            is_external=not internal,
        ))
    return segments


def offset_lines(segment: WallSegment) -> Optional[Tuple[Vec, Vec, Vec, Vec]]:
    """Un-mitered ``(top_start, top_end, bottom_start, bottom_end)``; ``None`` for a zero-length edge."""
    frame = unit_direction(segment.start, segment.end)
    if frame is None:
        return None
    _, (px, py), _ = frame
    half = segment.thickness / 2
    sx, sy = segment.start
    ex, ey = segment.end
    return (
        (sx + px * half, sy + py * half),
        (ex + px * half, ey + py * half),
        (sx - px * half, sy - py * half),
        (ex - px * half, ey - py * half),
    )


def offset_quad(segment: WallSegment) -> Optional[MiteredQuad]:
    lines = offset_lines(segment)
    return MiteredQuad(*lines) if lines else None


# === CornerMiterer ===
def _neighbour_lines(offsets, index: int, step: int):
    """Offsets of the nearest non-degenerate edge before/after *index* in the cycle."""
    n = len(offsets)
    for k in range(1, n):
        candidate = offsets[(index + step * k) % n]
        if candidate is not None:
            return candidate
    return None


def miter_corners(segments: Sequence[WallSegment], epsilon: float = MITER_EPSILON) -> List[Optional[MiteredQuad]]:
    """
    Miter the quads of one room's cyclic edge sequence.

    The start corners of each quad move to where its offset lines cross the
    previous edge's offset lines, the end corners to where they cross the
    next edge's. Top and bottom are handled independently. Parallel or
    degenerate neighbours leave the corner un-mitered. The result is aligned
    with *segments*; zero-length edges give ``None``.
    """
    offsets = [offset_lines(s) for s in segments]
    quads: List[Optional[MiteredQuad]] = []

    for i, own in enumerate(offsets):
        if own is None:
            quads.append(None)
            continue
        top_start, top_end, bottom_start, bottom_end = own

        prev = _neighbour_lines(offsets, i, -1) if len(offsets) > 1 else None
        if prev is not None:
            p_ts, p_te, p_bs, p_be = prev
            top_start = line_intersection(p_ts, p_te, top_start, top_end, epsilon) or top_start
            bottom_start = line_intersection(p_bs, p_be, bottom_start, bottom_end, epsilon) or bottom_start

        nxt = _neighbour_lines(offsets, i, 1) if len(offsets) > 1 else None
        if nxt is not None:
            n_ts, n_te, n_bs, n_be = nxt
            top_end = line_intersection(top_start, top_end, n_ts, n_te, epsilon) or top_end
            bottom_end = line_intersection(bottom_start, bottom_end, n_bs, n_be, epsilon) or bottom_end

        quads.append(MiteredQuad(top_start, top_end, bottom_start, bottom_end))

    dropped = quads.count(None)
    if dropped:
        logger.debug("Dropped %d zero-length wall edge(s)", dropped)
    return quads


def build_room_quads(room: RoomPolygon, room_index: int, classifier: AdjacencyClassifier,
                     mapper: ViewportMapper, config: ViewportConfig) -> List[WallQuad]:
    segments = build_wall_segments(room, room_index, classifier, mapper, config)
    quads = miter_corners(segments)
    return [WallQuad(seg, quad) for seg, quad in zip(segments, quads) if quad is not None]


def build_standalone_walls(room: RoomPolygon, mapper: ViewportMapper,
                           config: ViewportConfig) -> List[StandaloneWall]:
    """
    Line segments for a Wall room: one for a 2-point wall, one per edge of a closed one.

    Closed Wall rooms are drawn on purpose; older views only drew 2-point walls.
    """
    if not room.is_wall:
        return []
    pts = room.floor_polygon
    if len(pts) == 2:
        edges = [(0, pts[0], pts[1])]
    elif len(pts) >= 3:
        edges = list(room.edges())
    else:
        logger.debug("Skipping Wall room %r with %d point(s)", room.id, len(pts))
        return []
    return [
        StandaloneWall(room.id, i, mapper.transform(s), mapper.transform(e), config.external_thickness)
        for i, s, e in edges
    ]


# === RenderOrderSorter ===
def sort_for_rendering(items):
    """Internal walls first so the thicker external ones cover the seams. Stable."""
    return sorted(items, key=lambda item: 1 if item.is_external else 0)
