# app/models/requests.py
from pydantic import BaseModel, ConfigDict, Field, StrictInt, confloat
from typing import Optional, List, Literal, Union

# Strict so "1.5" or true never pass as a coordinate; NaN and inf are not coordinates either
Coordinate = Union[StrictInt, confloat(strict=True, allow_inf_nan=False)]


class PointIn(BaseModel):
    x: Coordinate
    z: Coordinate


class RoomIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[Union[str, int]] = None
    room_type: str = ""
    floor_polygon: List[PointIn]
    area: Optional[float] = None
    height: Optional[float] = None
    width: Optional[float] = None
    is_regular: Optional[bool] = None
    isBoundary: Optional[bool] = False


class FloorPlanIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    rooms: List[RoomIn]
    room_count: Optional[int] = None
    total_area: Optional[float] = None
    room_types: Optional[List[str]] = None


class ViewportIn(BaseModel):
    width: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    padding: Optional[float] = Field(None, ge=0)
    fit_scale: Optional[float] = Field(None, gt=0)
    colorScheme: Optional[Literal["standard", "monochrome", "pastel", "contrast"]] = None
    showRoomLabels: Optional[bool] = None
    external_thickness: Optional[float] = Field(None, gt=0)
    internal_thickness: Optional[float] = Field(None, gt=0)
    adjacency_tolerance: Optional[float] = Field(None, gt=0)


class RenderRequest(BaseModel):
    floor_plan: FloorPlanIn
    viewport: Optional[ViewportIn] = None
    preset: Optional[Literal["thumbnail", "share_preview", "comparison"]] = None
    format: Literal["scene", "svg", "png"] = "scene"
    plan_id: Optional[str] = None  # cache key; content hash when omitted
