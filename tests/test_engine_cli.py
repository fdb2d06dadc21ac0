import base64
import json

import engine


def _write(tmp_path, data, name="plan.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return str(path)


def test_svg_to_file(tmp_path, two_room_plan):
    out = tmp_path / "plan.svg"
    assert engine.main([_write(tmp_path, two_room_plan), "-o", str(out)]) == 0
    assert out.read_text().startswith("<svg")


def test_wrapped_plan_and_scene_output(tmp_path, capsys, single_room_plan):
    path = _write(tmp_path, {"floor_plan": single_room_plan})
    assert engine.main([path, "--format", "scene", "--preset", "comparison", "--labels"]) == 0
    scene = json.loads(capsys.readouterr().out)
    assert (scene["width"], scene["height"]) == (300.0, 200.0)
    assert [p["kind"] for p in scene["primitives"]].count("label") == 1


def test_png_to_file(tmp_path, single_room_plan):
    out = tmp_path / "plan.png"
    assert engine.main([_write(tmp_path, single_room_plan), "--format", "png", "-o", str(out)]) == 0
    assert out.read_bytes()[:4] == b"\x89PNG"


def test_custom_frame(tmp_path, capsys, single_room_plan):
    path = _write(tmp_path, single_room_plan)
    assert engine.main([path, "--format", "scene", "--width", "120", "--height", "80",
                        "--scheme", "monochrome"]) == 0
    scene = json.loads(capsys.readouterr().out)
    assert (scene["width"], scene["height"]) == (120.0, 80.0)
    assert scene["primitives"][0]["style"]["fill"] == "#B5DBFF"


def test_invalid_plan_exit_code(tmp_path, capsys):
    path = _write(tmp_path, {"rooms": [{"floor_polygon": [{"x": "a", "z": 1}]}]})
    assert engine.main([path]) == 2
    assert "Invalid floor plan" in capsys.readouterr().err


def test_unreadable_file_exit_code(tmp_path):
    assert engine.main([str(tmp_path / "missing.json")]) == 2


def test_png_to_stdout_is_base64(tmp_path, capsys, standalone_wall_plan):
    assert engine.main([_write(tmp_path, standalone_wall_plan), "--format", "png"]) == 0
    assert base64.b64decode(capsys.readouterr().out.strip())[:4] == b"\x89PNG"


def test_non_finite_coordinate_exit_code(tmp_path, capsys):
    plan = {"rooms": [{"room_type": "Kitchen", "floor_polygon": [
        {"x": float("nan"), "z": 0}, {"x": 10, "z": 0}, {"x": 10, "z": 10}]}]}
    assert engine.main([_write(tmp_path, plan)]) == 2
    assert "finite" in capsys.readouterr().err
