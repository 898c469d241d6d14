"""Mesh handling: external model import and scene mesh export."""

from .loader import ModelAsset, import_model, load_model_mesh
from .export import export_mesh, hex_to_rgba, scene_to_mesh

__all__ = [
    "ModelAsset",
    "import_model",
    "load_model_mesh",
    "export_mesh",
    "hex_to_rgba",
    "scene_to_mesh",
]
