from pydantic import BaseModel
from typing import List, Dict, Any, Optional


class PrimitiveOut(BaseModel):
    kind: str
    geometry: List[List[float]]
    style: Dict[str, Any]
    text: Optional[str] = None
    room_id: Optional[Any] = None


class SceneOut(BaseModel):
    width: float
    height: float
    empty: bool
    bounds: Dict[str, float]
    metadata: Dict[str, Any] = {}
    primitives: List[PrimitiveOut]


class RenderResponse(BaseModel):
    empty: bool
    primitive_count: int
    scene: Optional[SceneOut] = None
    svg: Optional[str] = None
    image_base64: Optional[str] = None
    warnings: List[str] = []


class PresetsResponse(BaseModel):
    presets: Dict[str, Dict[str, Any]]
