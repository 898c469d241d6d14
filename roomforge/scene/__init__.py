"""Scene state: entity store, session container, transforms and export.

This package holds the single mutable scene resource and the helpers that
read it: per-entity transforms for geometry queries and the JSON export
format.
"""

from .transform import Transform3D
from .store import SceneStore
from .session import ModelingSession
from .export import SceneDocument, export_scene, import_scene, load_scene, save_scene

__all__ = [
    "Transform3D",
    "SceneStore",
    "ModelingSession",
    "SceneDocument",
    "export_scene",
    "import_scene",
    "load_scene",
    "save_scene",
]
