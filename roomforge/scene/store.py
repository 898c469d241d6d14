"""In-memory scene entity store.

The store is the single mutable collection of scene entities plus one
"selected" pointer. Entities are immutable pydantic models; every update
replaces the stored instance with a merged copy. Selection is kept as an id
and resolved on read, so ``store.selected`` always reflects the latest state
of the selected entity and can never dangle after a delete.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping

from ..core.models import (
    ColorPatch,
    EntityDraft,
    PositionPatch,
    RotationPatch,
    ScalePatch,
    SceneEntity,
    Vector3,
    generate_id,
)

logger = logging.getLogger(__name__)

_ARTICLES = {"the", "a", "an"}


class SceneStore:
    """Keyed collection of scene entities with a single selection."""

    def __init__(self) -> None:
        self._entities: dict[str, SceneEntity] = {}
        self._selected_id: str | None = None

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __iter__(self) -> Iterator[SceneEntity]:
        return iter(list(self._entities.values()))

    @property
    def objects(self) -> list[SceneEntity]:
        """All entities in creation order."""
        return list(self._entities.values())

    @property
    def selected(self) -> SceneEntity | None:
        """The selected entity, or None."""
        if self._selected_id is None:
            return None
        return self._entities.get(self._selected_id)

    def get(self, entity_id: str) -> SceneEntity | None:
        """Get an entity by id, or None if absent."""
        return self._entities.get(entity_id)

    def create(self, draft: EntityDraft) -> SceneEntity:
        """Add an entity built from ``draft`` and select it.

        Args:
            draft: Entity fields (any ``id`` on the draft is ignored)

        Returns:
            The stored entity with its freshly assigned id
        """
        entity_id = generate_id("obj")
        while entity_id in self._entities:
            entity_id = generate_id("obj")

        fields = draft.model_dump(exclude={"id"})
        entity = SceneEntity.model_validate({**fields, "id": entity_id})

        self._entities[entity_id] = entity
        self._selected_id = entity_id
        logger.debug(f"Created {entity.kind} {entity_id}")
        return entity

    def update(
        self,
        entity_id: str,
        patch: PositionPatch | RotationPatch | ScalePatch | ColorPatch | Mapping[str, Any],
    ) -> SceneEntity | None:
        """Merge a patch onto an entity.

        Args:
            entity_id: Entity to update
            patch: A typed property patch, or a mapping of field name to value

        Returns:
            The merged entity, or None if ``entity_id`` is not in the store

        Raises:
            ValueError: If the patch tries to change the entity id
            pydantic.ValidationError: If the merged fields are invalid
        """
        current = self._entities.get(entity_id)
        if current is None:
            return None

        changes = self._patch_fields(current, patch)
        if "id" in changes and changes["id"] != entity_id:
            raise ValueError("Entity ids are immutable")

        merged = SceneEntity.model_validate({**current.model_dump(), **changes, "id": entity_id})
        self._entities[entity_id] = merged
        logger.debug(f"Updated {entity_id}: {sorted(changes)}")
        return merged

    @staticmethod
    def _patch_fields(current: SceneEntity, patch: Any) -> dict[str, Any]:
        if isinstance(patch, PositionPatch):
            position = current.position + patch.position if patch.relative else patch.position
            return {"position": position}
        if isinstance(patch, RotationPatch):
            return {"rotation": patch.rotation}
        if isinstance(patch, ScalePatch):
            return {"scale": patch.scale}
        if isinstance(patch, ColorPatch):
            return {"color": patch.color}
        if isinstance(patch, Mapping):
            # Accept both snake_case attributes and camelCase JSON keys
            by_alias = {
                field.alias: name
                for name, field in SceneEntity.model_fields.items()
                if field.alias
            }
            return {by_alias.get(key, key): value for key, value in patch.items()}
        raise TypeError(f"Unsupported patch type: {type(patch).__name__}")

    def delete(self, entity_id: str) -> bool:
        """Remove an entity.

        Returns:
            True if the entity was removed, False if it was not found
        """
        if self._entities.pop(entity_id, None) is None:
            return False
        if self._selected_id == entity_id:
            self._selected_id = None
        logger.debug(f"Deleted {entity_id}")
        return True

    def duplicate(self, entity_id: str) -> SceneEntity | None:
        """Copy an entity one unit along +X and +Z and select the copy.

        Returns:
            The new entity, or None if ``entity_id`` is not in the store
        """
        original = self._entities.get(entity_id)
        if original is None:
            return None

        p = original.position
        draft = original.to_draft().model_copy(
            update={
                "name": f"{original.name} Copy" if original.name else None,
                "position": Vector3(x=p.x + 1, y=p.y, z=p.z + 1),
            }
        )
        return self.create(draft)

    def select(self, entity_id: str | None) -> SceneEntity | None:
        """Select an entity by id, or clear the selection with None.

        An unknown id also clears the selection.
        """
        if entity_id is None or entity_id not in self._entities:
            self._selected_id = None
            return None
        self._selected_id = entity_id
        return self._entities[entity_id]

    def clear(self) -> None:
        """Remove every entity and the selection."""
        self._entities = {}
        self._selected_id = None
        logger.debug("Scene cleared")

    def load(self, entities: Iterable[SceneEntity]) -> None:
        """Replace the contents with ``entities``, keeping their ids."""
        loaded = {entity.id: entity for entity in entities}
        self._entities = loaded
        self._selected_id = None
        logger.debug(f"Loaded {len(loaded)} entities")

    def find(self, reference: str) -> SceneEntity | None:
        """Resolve a free-text reference to an entity.

        Tries an exact id, then a case-insensitive name, then the most
        recently created entity whose kind or subtype matches. Leading
        articles ("the cube") are ignored.

        Returns:
            The matching entity, or None
        """
        text = reference.strip()
        if not text:
            return None
        if text in self._entities:
            return self._entities[text]

        words = [w for w in text.lower().split() if w not in _ARTICLES]
        wanted = " ".join(words)
        if not wanted:
            return None

        for entity in self._entities.values():
            if entity.name and entity.name.lower() == wanted:
                return entity

        for entity in reversed(list(self._entities.values())):
            if wanted in (entity.kind, entity.subtype):
                return entity
        return None
