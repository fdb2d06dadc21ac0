import math

import pytest

from floorplan.geometry import DEFAULT_BOUNDS, Bounds, line_intersection, plan_bounds, vertex_centroid
from floorplan.model import FloorPlan, Point
from floorplan.viewport import ViewportConfig, ViewportMapper, preset


def _rooms(raw):
    return FloorPlan.from_dict(raw).rooms


def test_bounds_cover_every_point(mixed_plan):
    b = plan_bounds(_rooms(mixed_plan))
    assert b == Bounds(-2.0, 20.0, -2.0, 18.0)


def test_bounds_ignore_reference_rooms():
    rooms = _rooms({"rooms": [
        {"room_type": "Reference", "floor_polygon": [{"x": -500, "z": 900}]},
        {"room_type": "Kitchen", "floor_polygon": [{"x": 1, "z": 2}, {"x": 3, "z": 4}, {"x": 1, "z": 4}]},
    ]})
    assert plan_bounds(rooms) == Bounds(1.0, 3.0, 2.0, 4.0)


def test_bounds_default_when_nothing_survives(reference_only_plan):
    b = plan_bounds(_rooms(reference_only_plan))
    assert b == DEFAULT_BOUNDS
    assert b.is_default
    assert plan_bounds([]) == DEFAULT_BOUNDS


def test_line_intersection_perpendicular():
    assert line_intersection((0, 1), (10, 1), (3, -5), (3, 5)) == pytest.approx((3.0, 1.0))


def test_line_intersection_parallel_returns_none():
    assert line_intersection((0, 0), (10, 0), (0, 2), (10, 2)) is None
    assert line_intersection((0, 0), (10, 0), (20, 0), (30, 0)) is None


def test_line_intersection_degenerate_segment_returns_none():
    assert line_intersection((1, 1), (1, 1), (0, 0), (5, 5)) is None


def test_vertex_centroid_is_vertex_mean():
    assert vertex_centroid([(0, 0), (10, 0), (10, 10), (0, 10)]) == (5.0, 5.0)
    # mean of vertices, not area centroid
    assert vertex_centroid([(0, 0), (4, 0), (4, 0), (0, 4)]) == (2.0, 1.0)
    assert vertex_centroid([]) == (0.0, 0.0)


def test_mapper_fits_and_centres_square():
    mapper = ViewportMapper(Bounds(0, 10, 0, 10), ViewportConfig())
    assert mapper.scale == pytest.approx(27.0)
    assert mapper.transform(Point(0, 0)) == pytest.approx((15.0, 15.0))
    assert mapper.transform(Point(10, 10)) == pytest.approx((285.0, 285.0))


def test_mapper_centres_wide_plan_vertically():
    mapper = ViewportMapper(Bounds(0, 20, 0, 10), ViewportConfig())
    # width limits the scale: 270 / 20
    assert mapper.scale == pytest.approx(13.5)
    x0, y0, x1, y1 = mapper.content_box
    assert (x0, x1) == pytest.approx((15.0, 285.0))
    assert (y0 + y1) / 2 == pytest.approx(150.0)


def test_mapper_applies_fit_scale_and_origin():
    cfg = ViewportConfig(width=400, height=300, padding=25, fit_scale=0.8, origin_x=10, origin_y=20)
    mapper = ViewportMapper(Bounds(0, 10, 0, 10), cfg)
    assert mapper.scale == pytest.approx(min(350 / 10, 250 / 10) * 0.8)
    x0, y0, x1, y1 = mapper.content_box
    assert (x0 + x1) / 2 == pytest.approx(10 + 200)
    assert (y0 + y1) / 2 == pytest.approx(20 + 150)


def test_mapper_zero_extent_axis_divides_by_one():
    mapper = ViewportMapper(Bounds(0, 5, 3, 3), ViewportConfig())
    assert mapper.scale == pytest.approx(270 / 5)
    x, y = mapper.transform(Point(5, 3))
    assert math.isfinite(x) and math.isfinite(y)
    assert y == pytest.approx(150.0)


def test_mapper_padding_larger_than_frame_does_not_mirror():
    mapper = ViewportMapper(Bounds(0, 10, 0, 10), ViewportConfig(width=20, height=20, padding=50))
    assert mapper.scale == 0.0


@pytest.mark.parametrize("config", [
    ViewportConfig(),
    ViewportConfig(width=640, height=120, padding=4),
    preset("thumbnail"),
    preset("comparison"),
    preset("share_preview"),
])
def test_transformed_vertices_stay_inside_content_box(mixed_plan, config):
    rooms = FloorPlan.from_dict(mixed_plan).renderable_rooms()
    mapper = ViewportMapper(plan_bounds(rooms), config)
    x0, y0, x1, y1 = mapper.content_box
    eps = 1e-9
    for room in rooms:
        for x, y in mapper.transform_all(room.floor_polygon):
            assert x0 - eps <= x <= x1 + eps
            assert y0 - eps <= y <= y1 + eps
