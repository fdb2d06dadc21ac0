# app/routes/render.py

from fastapi import APIRouter, HTTPException, Request
from app.config import Config
from app.models.requests import RenderRequest, ViewportIn
from app.models.responses import PresetsResponse, RenderResponse, SceneOut
from app.services.renderer import render_png_base64, render_svg
from app.services.validator import validate_floor_plan
from floorplan.model import InvalidFloorPlanError
from floorplan.scene import render_floor_plan
from floorplan.viewport import PRESETS, ViewportConfig, preset
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

# request field -> ViewportConfig field
_VIEWPORT_FIELDS = {
    "width": "width",
    "height": "height",
    "padding": "padding",
    "fit_scale": "fit_scale",
    "colorScheme": "color_scheme",
    "showRoomLabels": "show_room_labels",
    "external_thickness": "external_thickness",
    "internal_thickness": "internal_thickness",
    "adjacency_tolerance": "adjacency_tolerance",
}


def build_viewport(preset_name, viewport: ViewportIn = None) -> ViewportConfig:
    if preset_name:
        base = preset(preset_name)
    else:
        base = Config.base_viewport()
    if viewport is None:
        return base
    overrides = {
        _VIEWPORT_FIELDS[k]: v
        for k, v in viewport.model_dump(exclude_none=True).items()
        if k in _VIEWPORT_FIELDS
    }
    return base._replace(**overrides)


@router.get("/viewport-presets", response_model=PresetsResponse)
def list_presets():
    return PresetsResponse(presets={name: preset(name).to_dict() for name in PRESETS})


@router.post("/render-floorplan", response_model=RenderResponse)
def render_floorplan(req: RenderRequest, request: Request):
    try:
        plan = req.floor_plan.model_dump(exclude_none=True)

        ok, errors, warnings = validate_floor_plan(plan)
        if not ok:
            raise HTTPException(status_code=422, detail={"errors": errors})

        config = build_viewport(req.preset, req.viewport)
        cache = getattr(request.app.state, "scene_cache", None)
        scene = render_floor_plan(plan, config, cache=cache, plan_key=req.plan_id)

        response = RenderResponse(empty=scene.empty, primitive_count=len(scene), warnings=warnings)
        if req.format == "scene":
            response.scene = SceneOut(**scene.to_dict())
        elif req.format == "svg":
            response.svg = render_svg(scene)
        else:
            response.image_base64 = render_png_base64(scene)
        return response

    except HTTPException:
        raise
    except InvalidFloorPlanError as e:
        raise HTTPException(status_code=422, detail={"errors": [str(e)]})
    except Exception as e:
        logger.exception("Unexpected error while rendering floor plan")
        raise HTTPException(status_code=500, detail=f"An internal server error occurred: {str(e)}")
