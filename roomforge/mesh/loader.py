"""External model import using trimesh.

Imported models become ``imported`` scene entities that point at the model
file through ``model_path``. The file is validated up front (existence,
format, size); the mesh itself is only loaded when something needs its
geometry, such as mesh export.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import trimesh

from ..core.config import ImportParams
from ..core.errors import ModelImportError
from ..core.models import EntityDraft, SceneEntity, Vector3

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from ..scene.session import ModelingSession

logger = logging.getLogger(__name__)


class ModelAsset:
    """A validated model file on disk."""

    def __init__(self, path: str | Path, params: ImportParams | None = None):
        """Validate a model file.

        Args:
            path: Path to the model (glTF, GLB, OBJ, FBX, STL, PLY)
            params: Import limits; defaults to ``ImportParams()``

        Raises:
            ModelImportError: If the file is missing, of an unsupported
                format or too large
        """
        self.path = Path(path)
        self.params = params or ImportParams()

        if not self.path.is_file():
            raise ModelImportError(f"Model file not found: {self.path}")

        if self.path.suffix.lower() not in self.params.supported_formats:
            raise ModelImportError(
                f"Unsupported format: {self.path.suffix}. "
                f"Supported: {', '.join(self.params.supported_formats)}"
            )

        size_mb = self.path.stat().st_size / (1024 * 1024)
        if size_mb > self.params.max_file_size_mb:
            raise ModelImportError(
                f"File too large: {size_mb:.1f} MB. Max size: {self.params.max_file_size_mb:g} MB"
            )

        self._mesh: trimesh.Trimesh | None = None

    @property
    def name(self) -> str:
        return self.path.stem

    @property
    def mesh(self) -> trimesh.Trimesh:
        """Load (once) and return the model as a single mesh."""
        if self._mesh is None:
            self._mesh = load_model_mesh(self.path)
        return self._mesh

    @property
    def bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Return (min, max) bounding box coordinates."""
        return self.mesh.bounds[0], self.mesh.bounds[1]


def load_model_mesh(path: str | Path) -> trimesh.Trimesh:
    """Load a model file as one mesh, concatenating multi-part scenes.

    Raises:
        ModelImportError: If trimesh cannot read the file or it has no meshes
    """
    try:
        loaded = trimesh.load(str(path))
    except Exception as e:
        raise ModelImportError(f"Could not load model {path}: {e}") from e

    if isinstance(loaded, trimesh.Scene):
        meshes = [
            geom for geom in loaded.geometry.values()
            if isinstance(geom, trimesh.Trimesh)
        ]
        if not meshes:
            raise ModelImportError(f"No valid meshes found in {path}")
        return trimesh.util.concatenate(meshes)
    if isinstance(loaded, trimesh.Trimesh):
        return loaded
    raise ModelImportError(f"Unexpected type from trimesh.load: {type(loaded).__name__}")


def import_model(
    session: ModelingSession,
    path: str | Path,
    params: ImportParams | None = None,
) -> SceneEntity:
    """Add an external model to the scene as an ``imported`` entity.

    The entity is named after the file, colored white, raised to y=1 and
    scaled uniformly by ``params.import_scale``. It becomes the selection.

    Raises:
        ModelImportError: If the file fails validation
    """
    asset = ModelAsset(path, params)
    entity = session.store.create(
        EntityDraft(
            kind="imported",
            name=asset.name,
            model_path=str(asset.path.resolve()),
            color="#ffffff",
            position=Vector3.of(0, 1, 0),
            scale=Vector3.uniform(asset.params.import_scale),
        )
    )
    logger.info(f"Imported model '{asset.name}' as {entity.id}")
    return entity
