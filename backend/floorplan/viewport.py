# floorplan/viewport.py
from collections import namedtuple
from typing import Any, Dict, Tuple

from floorplan.geometry import Bounds
from floorplan.model import Point

# Wall thickness is in display units, so it does not grow with the plan
DEFAULT_EXTERNAL_THICKNESS = 1.8
DEFAULT_INTERNAL_THICKNESS = 1.2
# Plan units; endpoints closer than this on both axes are the same vertex
DEFAULT_ADJACENCY_TOLERANCE = 0.1

COLOR_SCHEMES = ("standard", "monochrome", "pastel", "contrast")

_FIELDS = [
    ("width", 300.0),
    ("height", 300.0),
    ("padding", 15.0),
    ("fit_scale", 1.0),
    ("origin_x", 0.0),
    ("origin_y", 0.0),
    ("external_thickness", DEFAULT_EXTERNAL_THICKNESS),
    ("internal_thickness", DEFAULT_INTERNAL_THICKNESS),
    ("adjacency_tolerance", DEFAULT_ADJACENCY_TOLERANCE),
    ("color_scheme", "standard"),
    ("show_room_labels", False),
    ("label_font_size", 10.0),
    ("label_color", "#000000"),
    ("wall_color", "#000000"),
    ("standalone_wall_color", "#333333"),
]


class ViewportConfig(namedtuple("ViewportConfig", [name for name, _ in _FIELDS],
                                defaults=[default for _, default in _FIELDS])):
    """Frame size, fit policy and style for one render.

    Immutable and hashable so it can be part of a cache key.
    """
    __slots__ = ()

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._asdict())

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ViewportConfig":
        known = {k: v for k, v in (raw or {}).items() if k in cls._fields and v is not None}
        return cls(**known)


# --- Former call sites, now thin presets over one mapper ---
PRESETS: Dict[str, Dict[str, Any]] = {
    # project list cards
    "thumbnail": {"width": 240.0, "height": 160.0, "padding": 15.0,
                  "external_thickness": 1.8, "internal_thickness": 1.2},
    # share dialog preview
    "share_preview": {"width": 300.0, "height": 300.0, "padding": 15.0,
                      "external_thickness": 4.0, "internal_thickness": 2.0},
    # side-by-side proposal comparison; uniform walls, small labels
    "comparison": {"width": 300.0, "height": 200.0, "padding": 25.0, "fit_scale": 0.8,
                   "external_thickness": 1.0, "internal_thickness": 1.0,
                   "show_room_labels": True, "label_font_size": 6.0, "label_color": "#333333"},
}


def preset(name: str, **overrides) -> ViewportConfig:
    if name not in PRESETS:
        raise KeyError(f"Unknown viewport preset '{name}'. Available: {', '.join(sorted(PRESETS))}")
    settings = dict(PRESETS[name])
    settings.update({k: v for k, v in overrides.items() if v is not None})
    return ViewportConfig(**settings)


class ViewportMapper:
    """
    Maps plan coordinates into the display frame.

    One uniform scale keeps the aspect ratio; the scaled plan is centred in
    the frame. A zero extent on an axis divides by 1 instead of 0.
    """

    def __init__(self, bounds: Bounds, config: ViewportConfig):
        self.bounds = bounds
        self.config = config

        avail_w = max(0.0, config.width - 2 * config.padding)
        avail_h = max(0.0, config.height - 2 * config.padding)
        scale_x = avail_w / (bounds.width or 1)
        scale_z = avail_h / (bounds.depth or 1)
        self.scale = min(scale_x, scale_z) * config.fit_scale

        self.scaled_width = bounds.width * self.scale
        self.scaled_height = bounds.depth * self.scale
        self.offset_x = config.origin_x + (config.width - self.scaled_width) / 2
        self.offset_y = config.origin_y + (config.height - self.scaled_height) / 2

    def transform(self, p: Point) -> Tuple[float, float]:
        return (
            (p.x - self.bounds.min_x) * self.scale + self.offset_x,
            (p.z - self.bounds.min_z) * self.scale + self.offset_y,
        )

    def transform_all(self, points):
        return [self.transform(p) for p in points]

    @property
    def content_box(self) -> Tuple[float, float, float, float]:
        """``(x0, y0, x1, y1)`` of the scaled plan inside the frame."""
        return (self.offset_x, self.offset_y,
                self.offset_x + self.scaled_width, self.offset_y + self.scaled_height)
