import argparse
import base64
import json
import logging
import sys
from typing import Dict, List, Optional

from app.services.renderer import render_png_base64, render_svg
from app.services.validator import validate_floor_plan
from floorplan.model import InvalidFloorPlanError
from floorplan.scene import render_floor_plan
from floorplan.viewport import PRESETS, ViewportConfig, preset

logger = logging.getLogger("engine")


# ========== INPUT ==========
def load_plan(path: str) -> Dict:
    """Reads a plan file; accepts the plan itself or ``{"floor_plan": plan}``."""
    if path == "-":
        data = json.load(sys.stdin)
    else:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    if isinstance(data, dict) and "floor_plan" in data:
        return data["floor_plan"]
    return data


def build_config(args: argparse.Namespace) -> ViewportConfig:
    overrides = {
        "width": args.width,
        "height": args.height,
        "padding": args.padding,
        "color_scheme": args.scheme,
        "show_room_labels": True if args.labels else None,
    }
    if args.preset:
        return preset(args.preset, **overrides)
    return ViewportConfig()._replace(**{k: v for k, v in overrides.items() if v is not None})


# ========== CLI ==========
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a floor-plan JSON file to SVG, PNG or a scene listing.")
    parser.add_argument("plan", help="floor-plan JSON file, or - for stdin")
    parser.add_argument("-o", "--output", help="output file (stdout when omitted)")
    parser.add_argument("--format", choices=["svg", "png", "scene"], default="svg")
    parser.add_argument("--preset", choices=sorted(PRESETS))
    parser.add_argument("--width", type=float)
    parser.add_argument("--height", type=float)
    parser.add_argument("--padding", type=float)
    parser.add_argument("--scheme", choices=["standard", "monochrome", "pastel", "contrast"])
    parser.add_argument("--labels", action="store_true", help="draw room-type labels")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        plan = load_plan(args.plan)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read {args.plan}: {e}", file=sys.stderr)
        return 2

    ok, errors, warnings = validate_floor_plan(plan)
    for w in warnings:
        logger.warning(w)
    if not ok:
        for err in errors:
            print(f"Invalid floor plan: {err}", file=sys.stderr)
        return 2

    try:
        scene = render_floor_plan(plan, build_config(args))
    except InvalidFloorPlanError as e:
        print(f"Invalid floor plan: {e}", file=sys.stderr)
        return 2

    if args.format == "svg":
        out = render_svg(scene)
    elif args.format == "png":
        out = render_png_base64(scene)
    else:
        out = json.dumps(scene.to_dict(), indent=2)

    if args.format == "png" and args.output:
        with open(args.output, "wb") as fh:
            fh.write(base64.b64decode(out))
    elif args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(out)
    else:
        print(out)
    return 0


# ========== MAIN ==========
if __name__ == "__main__":
    sys.exit(main())
