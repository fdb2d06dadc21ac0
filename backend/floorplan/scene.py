# floorplan/scene.py
"""
Scene assembly: room fills, sorted walls, labels.

``render_floor_plan`` is the single entry point used by every view; the
caller supplies only the frame and style through ``ViewportConfig``.
"""

import logging
from collections import namedtuple
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Optional, Tuple

from floorplan.adjacency import AdjacencyClassifier
from floorplan.geometry import Bounds, plan_bounds, vertex_centroid
from floorplan.model import FloorPlan, RoomPolygon, as_floor_plan
from floorplan.styles import room_color
from floorplan.viewport import ViewportConfig, ViewportMapper
from floorplan.walls import (StandaloneWall, build_room_quads,
                             build_standalone_walls, sort_for_rendering)

logger = logging.getLogger(__name__)

FILL_POLYGON = "fill-polygon"
LINE = "line"
LABEL = "label"

BOUNDARY_STYLE = {
    "fill": "none",
    "fill_opacity": 0.0,
    "stroke": "#ff6b00",
    "stroke_width": 2.0,
    "stroke_dasharray": "4,2",
}

ColorFn = Callable[[str, str], str]


def _frozen(value):
    if isinstance(value, dict):
        return MappingProxyType({k: _frozen(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_frozen(v) for v in value)
    return value


def _plain(value):
    if isinstance(value, MappingProxyType):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    return value


class Primitive(namedtuple("Primitive", ["kind", "geometry", "style", "text", "room_id"],
                           defaults=[None, None])):
    __slots__ = ()

    def frozen(self) -> "Primitive":
        return self._replace(geometry=tuple(tuple(pt) for pt in self.geometry),
                             style=_frozen(dict(self.style)))

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "kind": self.kind,
            "geometry": [[x, y] for x, y in self.geometry],
            "style": _plain(self.style),
        }
        if self.text is not None:
            out["text"] = self.text
        if self.room_id is not None:
            out["room_id"] = self.room_id
        return out


class Scene:
    """
    Ordered primitives for one viewport.

    Read-only once built; cached scenes are shared between callers.
    """

    def __init__(self, primitives: List[Primitive], bounds: Bounds, width: float, height: float,
                 empty: bool = False, metadata: Optional[Dict[str, Any]] = None):
        self.primitives: Tuple[Primitive, ...] = tuple(p.frozen() for p in primitives)
        self.bounds = bounds
        self.width = width
        self.height = height
        self.empty = empty
        self.metadata = _frozen(dict(metadata or {}))

    def __len__(self):
        return len(self.primitives)

    def __iter__(self):
        return iter(self.primitives)

    def __eq__(self, other):
        if not isinstance(other, Scene):
            return NotImplemented
        return (self.primitives == other.primitives and self.bounds == other.bounds
                and self.width == other.width and self.height == other.height
                and self.empty == other.empty and self.metadata == other.metadata)

    def __repr__(self):
        return f"Scene({len(self.primitives)} primitives, {self.width}x{self.height}, empty={self.empty})"

    def of_kind(self, kind: str) -> List[Primitive]:
        return [p for p in self.primitives if p.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "empty": self.empty,
            "bounds": self.bounds._asdict(),
            "metadata": _plain(self.metadata),
            "primitives": [p.to_dict() for p in self.primitives],
        }


class SceneComposer:
    """Turns a floor plan into an ordered primitive list for one viewport."""

    def __init__(self, config: Optional[ViewportConfig] = None, color_fn: Optional[ColorFn] = None):
        self.config = config or ViewportConfig()
        self.color_fn = color_fn or room_color

    def compose(self, plan: FloorPlan) -> Scene:
        cfg = self.config
        rooms = plan.renderable_rooms()
        bounds = plan_bounds(rooms)
        metadata = {"room_count": plan.room_count, "total_area": plan.total_area,
                    "room_types": plan.room_types}

        if not rooms:
            logger.debug("No renderable rooms; returning an empty scene")
            return Scene([], bounds, cfg.width, cfg.height, empty=True, metadata=metadata)

        mapper = ViewportMapper(bounds, cfg)
        classifier = AdjacencyClassifier(rooms, tolerance=cfg.adjacency_tolerance)

        fills: List[Primitive] = []
        labels: List[Primitive] = []
        walls: List[Any] = []

        for idx, room in enumerate(rooms):
            if room.is_wall:
                walls.extend(build_standalone_walls(room, mapper, cfg))
                continue
            if not room.is_closed:
                logger.debug("Skipping room %r: %d point(s) cannot be filled", room.id, len(room.floor_polygon))
                continue

            display = mapper.transform_all(room.floor_polygon)
            fills.append(self._fill(room, display))
            if cfg.show_room_labels and not room.renders_as_outline:
                labels.append(self._label(room, display))
            walls.extend(build_room_quads(room, idx, classifier, mapper, cfg))

        wall_prims = [self._wall(item) for item in sort_for_rendering(walls)]
        primitives = fills + wall_prims + labels
        logger.debug("Composed scene: %d fills, %d walls, %d labels", len(fills), len(wall_prims), len(labels))
        return Scene(primitives, bounds, cfg.width, cfg.height, empty=False, metadata=metadata)

    # --- primitive builders ---
    def _fill(self, room: RoomPolygon, display) -> Primitive:
        if room.renders_as_outline:
            style = dict(BOUNDARY_STYLE)
            style["role"] = "boundary"
        else:
            style = {
                "fill": self.color_fn(room.room_type, self.config.color_scheme),
                "fill_opacity": 1.0,
                "stroke": "none",
                "stroke_width": 0.0,
                "role": "room",
            }
        return Primitive(FILL_POLYGON, display, style, room_id=room.id)

    def _label(self, room: RoomPolygon, display) -> Primitive:
        style = {"fill": self.config.label_color, "font_size": self.config.label_font_size, "anchor": "middle"}
        return Primitive(LABEL, [vertex_centroid(display)], style, text=room.room_type, room_id=room.id)

    def _wall(self, item) -> Primitive:
        if isinstance(item, StandaloneWall):
            style = {
                "stroke": self.config.standalone_wall_color,
                "stroke_width": item.thickness,
                "stroke_linecap": "round",
                "fill": "none",
                "role": "wall",
            }
            return Primitive(LINE, [item.start, item.end], style, room_id=item.owner_room_id)
        style = {
            "fill": self.config.wall_color,
            "fill_opacity": 1.0,
            "stroke": "none",
            "role": "wall",
            "external": item.is_external,
            "thickness": item.segment.thickness,
        }
        return Primitive(FILL_POLYGON, item.quad.polygon(), style, room_id=item.segment.owner_room_id)


def render_floor_plan(plan: Any, config: Optional[ViewportConfig] = None,
                      color_fn: Optional[ColorFn] = None, cache=None, plan_key=None) -> Scene:
    """
    Render a floor plan (a ``FloorPlan`` or its plain dict record) for one viewport.

    Raises ``InvalidFloorPlanError`` only for records that break the type
    contract; degenerate geometry is absorbed. When *cache* is given the
    scene is looked up and stored there under ``(plan_key, config)``.
    """
    config = config or ViewportConfig()
    floor_plan = as_floor_plan(plan)
    if cache is None:
        return SceneComposer(config, color_fn).compose(floor_plan)

    key = cache.key_for(floor_plan, config, plan_key)
    scene = cache.get(key)
    if scene is None:
        scene = SceneComposer(config, color_fn).compose(floor_plan)
        cache.put(key, scene)
    return scene
