"""Convert scene entities to a trimesh scene and write mesh files.

Each entity becomes one geometry node: a unit-sized primitive centered on
the origin, placed by the entity's transform. Boxes stand in for walls,
floors, openings and furniture. Imported entities load their model file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import numpy as np
import trimesh

from ..core.errors import ModelImportError
from ..core.models import SceneEntity
from ..scene.transform import Transform3D
from .loader import load_model_mesh

logger = logging.getLogger(__name__)

MESH_FORMATS = {".glb", ".gltf", ".obj", ".stl", ".ply"}

# trimesh builds cylinders and cones along +Z; scene entities stand along +Y
_Z_TO_Y = trimesh.transformations.rotation_matrix(-np.pi / 2, [1, 0, 0])


def hex_to_rgba(color: str, alpha: float = 1.0) -> list[int]:
    """``"#ff8800"`` (or ``"#f80"``) -> ``[255, 136, 0, 255]``."""
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return [r, g, b, int(round(alpha * 255))]


def primitive_mesh(kind: str) -> trimesh.Trimesh:
    """Unit-sized mesh for an entity kind, centered on the origin."""
    if kind == "sphere":
        return trimesh.creation.icosphere(subdivisions=3, radius=0.5)
    if kind == "cylinder":
        mesh = trimesh.creation.cylinder(radius=0.5, height=1.0, sections=32)
        mesh.apply_transform(_Z_TO_Y)
        return mesh
    if kind == "cone":
        mesh = trimesh.creation.cone(radius=0.5, height=1.0, sections=32)
        mesh.apply_translation([0, 0, -0.5])
        mesh.apply_transform(_Z_TO_Y)
        return mesh
    if kind == "torus":
        mesh = trimesh.creation.torus(major_radius=0.35, minor_radius=0.15)
        mesh.apply_transform(_Z_TO_Y)
        return mesh
    if kind == "plane":
        return trimesh.creation.box(extents=[1.0, 0.01, 1.0])
    return trimesh.creation.box(extents=[1.0, 1.0, 1.0])


def entity_mesh(entity: SceneEntity) -> trimesh.Trimesh | None:
    """Untransformed, colored mesh for one entity (None if it cannot be built)."""
    if entity.kind == "imported":
        if not entity.model_path:
            logger.warning(f"Skipping imported entity {entity.id}: no model path")
            return None
        try:
            mesh = load_model_mesh(entity.model_path).copy()
        except ModelImportError as e:
            logger.warning(f"Skipping imported entity {entity.id}: {e}")
            return None
    else:
        mesh = primitive_mesh(entity.kind)

    alpha = entity.opacity if entity.opacity is not None else 1.0
    mesh.visual.face_colors = hex_to_rgba(entity.color, alpha)
    return mesh


def scene_to_mesh(entities: Iterable[SceneEntity]) -> trimesh.Scene:
    """Build a trimesh scene with one node per visible entity."""
    scene = trimesh.Scene()
    for entity in entities:
        if entity.visible is False:
            continue
        mesh = entity_mesh(entity)
        if mesh is None:
            continue
        scene.add_geometry(
            mesh,
            node_name=entity.id,
            geom_name=entity.id,
            transform=Transform3D.from_entity(entity).to_matrix(),
        )
    return scene


def export_mesh(entities: Iterable[SceneEntity], path: str | Path) -> Path:
    """Write entities to a mesh file; the format follows the file extension.

    Args:
        entities: Entities to export
        path: Output path (.glb, .gltf, .obj, .stl or .ply)

    Returns:
        The written path

    Raises:
        ValueError: If the extension is not a supported mesh format or
            nothing could be exported
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in MESH_FORMATS:
        raise ValueError(f"Unsupported mesh format: {suffix}. Supported: {sorted(MESH_FORMATS)}")

    scene = scene_to_mesh(entities)
    if not scene.geometry:
        raise ValueError("Nothing to export: scene has no visible geometry")

    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix in (".stl", ".ply"):
        # Single-mesh formats: bake node transforms into one mesh
        scene.to_mesh().export(str(path))
    else:
        scene.export(str(path))

    logger.info(f"Exported {len(scene.geometry)} meshes to {path}")
    return path
