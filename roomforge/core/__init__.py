"""Core modules for roomforge."""

from .config import RoomforgeConfig
from .models import EntityDraft, FloorPlan, Room, RoomDimensions, SceneEntity, Vector3

__all__ = [
    "RoomforgeConfig",
    "EntityDraft",
    "FloorPlan",
    "Room",
    "RoomDimensions",
    "SceneEntity",
    "Vector3",
]
