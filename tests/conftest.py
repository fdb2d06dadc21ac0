import pytest


def square(room_id, room_type, x0, z0, size=10.0, **extra):
    room = {
        "id": room_id,
        "room_type": room_type,
        "floor_polygon": [
            {"x": x0, "z": z0},
            {"x": x0 + size, "z": z0},
            {"x": x0 + size, "z": z0 + size},
            {"x": x0, "z": z0 + size},
        ],
    }
    room.update(extra)
    return room


def rect(room_id, room_type, x0, z0, x1, z1):
    return {
        "id": room_id,
        "room_type": room_type,
        "floor_polygon": [
            {"x": x0, "z": z0}, {"x": x1, "z": z0}, {"x": x1, "z": z1}, {"x": x0, "z": z1},
        ],
    }


@pytest.fixture
def single_room_plan():
    return {"rooms": [square("living", "LivingRoom", 0, 0)], "room_count": 1,
            "total_area": 100.0, "room_types": ["LivingRoom"]}


@pytest.fixture
def two_room_plan():
    return {"rooms": [square("a", "LivingRoom", 0, 0), square("b", "Kitchen", 10, 0)]}


@pytest.fixture
def standalone_wall_plan():
    return {"rooms": [{"id": "w1", "room_type": "Wall",
                       "floor_polygon": [{"x": 0, "z": 0}, {"x": 5, "z": 0}]}]}


@pytest.fixture
def reference_only_plan():
    return {"rooms": [{"id": "ref", "room_type": "Reference",
                       "floor_polygon": [{"x": 0, "z": 0}, {"x": 0, "z": 0}, {"x": 0, "z": 0}]}]}


@pytest.fixture
def t_junction_plan():
    # rooms 1 and 2 share an edge; room 3 runs under both, so three walls meet at (10, 10)
    return {"rooms": [
        rect("r1", "Bathroom", 0, 0, 10, 10),
        rect("r2", "Kitchen", 10, 0, 20, 10),
        rect("r3", "LivingRoom", 0, 10, 20, 20),
    ]}


@pytest.fixture
def mixed_plan():
    return {"rooms": [
        {"id": "ref", "room_type": "Reference", "floor_polygon": [{"x": 0, "z": 0}]},
        rect("living", "LivingRoom", 0, 0, 12, 8),
        rect("kitchen", "Kitchen", 12, 0, 18, 8),
        {"id": "l-bed", "room_type": "MasterRoom", "floor_polygon": [
            {"x": 0, "z": 8}, {"x": 12, "z": 8}, {"x": 12, "z": 12},
            {"x": 6, "z": 12}, {"x": 6, "z": 16}, {"x": 0, "z": 16}]},
        {"id": "w", "room_type": "Wall", "floor_polygon": [{"x": 18, "z": 8}, {"x": 18, "z": 16}]},
        dict(rect("site", "Boundary", -2, -2, 20, 18), isBoundary=True),
    ]}
