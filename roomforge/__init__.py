"""roomforge - Text-driven 3D room modeling.

A Python library and CLI for building 3D interior scenes from short text
commands ("create red cube at 1 2 3", "rotate object 90"), procedurally
generated rooms and staged apartment layouts synthesized from a blueprint
image.
"""

__version__ = "0.1.0"

from .core.config import RoomforgeConfig
from .core.models import EntityDraft, FloorPlan, Room, RoomDimensions, SceneEntity, Vector3
from .commands.parser import CommandParser, parse_command
from .commands.executor import CommandExecutor
from .scene.store import SceneStore
from .scene.session import ModelingSession
from .rooms.builder import RoomBuilder
from .rooms.blueprint import import_blueprint
from .rooms.synthesis import ApartmentSynthesizer

__all__ = [
    "RoomforgeConfig",
    "EntityDraft",
    "FloorPlan",
    "Room",
    "RoomDimensions",
    "SceneEntity",
    "Vector3",
    "CommandParser",
    "parse_command",
    "CommandExecutor",
    "SceneStore",
    "ModelingSession",
    "RoomBuilder",
    "import_blueprint",
    "ApartmentSynthesizer",
]
