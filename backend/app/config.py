# Environment configuration (.env supported)
import os
from dotenv import load_dotenv

from floorplan.viewport import (DEFAULT_ADJACENCY_TOLERANCE, DEFAULT_EXTERNAL_THICKNESS,
                                DEFAULT_INTERNAL_THICKNESS, ViewportConfig)

load_dotenv()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


class Config:
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", "8000"))
    CORS_ORIGINS = [o.strip() for o in os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",") if o.strip()]

    # Render defaults; unset values keep the engine's own defaults
    DEFAULT_COLOR_SCHEME = os.getenv("DEFAULT_COLOR_SCHEME", "standard")
    EXTERNAL_WALL_THICKNESS = _float_env("EXTERNAL_WALL_THICKNESS", DEFAULT_EXTERNAL_THICKNESS)
    INTERNAL_WALL_THICKNESS = _float_env("INTERNAL_WALL_THICKNESS", DEFAULT_INTERNAL_THICKNESS)
    ADJACENCY_TOLERANCE = _float_env("ADJACENCY_TOLERANCE", DEFAULT_ADJACENCY_TOLERANCE)
    SCENE_CACHE_SIZE = int(os.getenv("SCENE_CACHE_SIZE", "128"))

    @classmethod
    def base_viewport(cls) -> ViewportConfig:
        return ViewportConfig(
            color_scheme=cls.DEFAULT_COLOR_SCHEME,
            external_thickness=cls.EXTERNAL_WALL_THICKNESS,
            internal_thickness=cls.INTERNAL_WALL_THICKNESS,
            adjacency_tolerance=cls.ADJACENCY_TOLERANCE,
        )
