from floorplan.adjacency import EXTERNAL, INTERNAL, AdjacencyClassifier, edges_match
from floorplan.model import FloorPlan, Point

from conftest import rect, square


def _classifier(raw, tolerance=0.1):
    rooms = FloorPlan.from_dict(raw).renderable_rooms()
    return rooms, AdjacencyClassifier(rooms, tolerance=tolerance)


def test_lone_room_is_all_external(single_room_plan):
    _, clf = _classifier(single_room_plan)
    assert clf.classify_room(0) == [EXTERNAL] * 4


def test_shared_edge_is_internal_on_both_sides(two_room_plan):
    _, clf = _classifier(two_room_plan)
    assert clf.classify_room(0) == [EXTERNAL, INTERNAL, EXTERNAL, EXTERNAL]
    assert clf.classify_room(1) == [EXTERNAL, EXTERNAL, EXTERNAL, INTERNAL]


def test_match_within_tolerance_only():
    near = {"rooms": [square("a", "Kitchen", 0, 0), square("b", "Bathroom", 10.05, 0.05)]}
    _, clf = _classifier(near)
    assert clf.classify_room(0)[1] == INTERNAL

    far = {"rooms": [square("a", "Kitchen", 0, 0), square("b", "Bathroom", 10.2, 0)]}
    _, clf = _classifier(far)
    assert clf.classify_room(0)[1] == EXTERNAL


def test_tolerance_is_configurable():
    plan = {"rooms": [square("a", "Kitchen", 0, 0), square("b", "Bathroom", 10.3, 0)]}
    _, clf = _classifier(plan, tolerance=0.5)
    assert clf.classify_room(0)[1] == INTERNAL


def test_partial_overlap_is_not_a_match():
    # room b's left edge spans only half of room a's right edge
    plan = {"rooms": [square("a", "Kitchen", 0, 0), rect("b", "Bathroom", 10, 0, 15, 5)]}
    _, clf = _classifier(plan)
    assert clf.classify_room(0)[1] == EXTERNAL


def test_wall_rooms_never_partner():
    plan = {"rooms": [
        square("a", "Kitchen", 0, 0),
        {"id": "w", "room_type": "Wall", "floor_polygon": [{"x": 10, "z": 0}, {"x": 10, "z": 10}]},
        {"id": "w2", "room_type": "Wall", "floor_polygon": [
            {"x": 10, "z": 0}, {"x": 20, "z": 0}, {"x": 20, "z": 10}, {"x": 10, "z": 10}]},
    ]}
    _, clf = _classifier(plan)
    assert clf.classify_room(0) == [EXTERNAL] * 4


def test_boundary_rooms_take_part_like_any_room():
    plan = {"rooms": [square("a", "Kitchen", 0, 0), square("site", "Boundary", 10, 0, isBoundary=True)]}
    _, clf = _classifier(plan)
    assert clf.classify_room(0)[1] == INTERNAL


def test_classification_is_symmetric(mixed_plan, t_junction_plan, two_room_plan):
    for raw in (mixed_plan, t_junction_plan, two_room_plan):
        rooms, clf = _classifier(raw)
        for a_idx, room_a in enumerate(rooms):
            if room_a.is_wall:
                continue
            for _, s, e in room_a.edges():
                if not clf.is_internal(a_idx, s, e):
                    continue
                partners = [
                    (b_idx, bs, be)
                    for b_idx, room_b in enumerate(rooms) if b_idx != a_idx and not room_b.is_wall
                    for _, bs, be in room_b.edges()
                    if edges_match(s, e, bs, be, clf.tolerance)
                ]
                assert partners
                for b_idx, bs, be in partners:
                    assert clf.is_internal(b_idx, bs, be)


def test_edges_match_either_direction():
    a, b = Point(0, 0), Point(5, 0)
    assert edges_match(a, b, Point(0.05, 0), Point(5, 0.05), 0.1)
    assert edges_match(a, b, Point(5, 0), Point(0, 0), 0.1)
    assert not edges_match(a, b, Point(0, 0), Point(5, 1), 0.1)


def test_t_junction_long_edge_stays_external(t_junction_plan):
    _, clf = _classifier(t_junction_plan)
    # r3's top edge spans both r1 and r2, so it matches neither whole edge
    assert clf.classify_room(2)[0] == EXTERNAL
    assert clf.classify_room(0)[1] == INTERNAL
