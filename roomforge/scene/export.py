"""Scene export and import as JSON documents.

An exported scene is ``{"objects": [...], "timestamp": ISO-8601, "version":
"1.0"}``. Imported models carry a ``modelPath`` that points at a local file,
which is not portable, so it is dropped on export.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ..core.models import SceneEntity
from .store import SceneStore

SCENE_FORMAT_VERSION = "1.0"


class SceneDocument(BaseModel):
    """The exported form of a scene."""

    objects: list[SceneEntity] = Field(default_factory=list)
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="ISO-8601 export time",
    )
    version: str = Field(default=SCENE_FORMAT_VERSION)


def _portable(entity: SceneEntity) -> SceneEntity:
    if entity.kind == "imported" and entity.model_path is not None:
        return entity.model_copy(update={"model_path": None})
    return entity


def export_scene(store: SceneStore) -> dict[str, Any]:
    """Build the JSON-ready export of every entity in ``store``."""
    doc = SceneDocument(objects=[_portable(e) for e in store.objects])
    return {
        "objects": [entity.to_json_dict() for entity in doc.objects],
        "timestamp": doc.timestamp,
        "version": doc.version,
    }


def save_scene(store: SceneStore, path: str | Path) -> None:
    """Export ``store`` to a JSON file.

    Args:
        store: Scene to export
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        json.dump(export_scene(store), f, indent=2)


def load_scene(source: str | Path | dict[str, Any]) -> SceneDocument:
    """Parse an exported scene from a file path or an already-decoded dict.

    Raises:
        pydantic.ValidationError: If the document is malformed
    """
    if isinstance(source, dict):
        data = source
    else:
        with open(Path(source)) as f:
            data = json.load(f)
    return SceneDocument.model_validate(data)


def import_scene(store: SceneStore, document: SceneDocument) -> int:
    """Replace the contents of ``store`` with the document's objects.

    Returns:
        Number of entities loaded
    """
    store.load(document.objects)
    return len(document.objects)
