"""Data models for scene entities, rooms and floor plans.

All models are pydantic models. JSON field names are camelCase (``modelPath``,
``isStructural``) to match exported scene files; Python code uses the
snake_case attribute names. Either spelling is accepted on input.
"""

from __future__ import annotations

import time
import uuid
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

from .vocabulary import RoomType

EntityKind = Literal[
    "cube",
    "sphere",
    "cylinder",
    "cone",
    "torus",
    "plane",
    "imported",
    "wall",
    "floor",
    "ceiling",
    "door",
    "window",
    "furniture",
]

EntityCategory = Literal["room", "furniture", "decoration", "structure"]

MaterialName = Literal["standard", "basic", "phong", "lambert"]


def generate_id(prefix: str) -> str:
    """Return ``<prefix>_<epoch ms>_<random suffix>``."""
    return f"{prefix}_{time.time_ns() // 1_000_000}_{uuid.uuid4().hex[:9]}"


class Vector3(BaseModel):
    """Immutable XYZ triple. Components must be finite."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    model_config = {"frozen": True, "allow_inf_nan": False}

    @model_validator(mode="before")
    @classmethod
    def _from_sequence(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise ValueError(f"Vector3 needs 3 components, got {len(data)}")
            return {"x": data[0], "y": data[1], "z": data[2]}
        return data

    @classmethod
    def of(cls, x: float, y: float, z: float) -> Vector3:
        return cls(x=x, y=y, z=z)

    @classmethod
    def uniform(cls, value: float) -> Vector3:
        return cls(x=value, y=value, z=value)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __repr__(self) -> str:
        return f"Vector3({self.x:g}, {self.y:g}, {self.z:g})"


class EntityDraft(BaseModel):
    """Everything that describes a scene entity except its id.

    Drafts are handed to :meth:`roomforge.scene.store.SceneStore.create`,
    which assigns the id.
    """

    kind: EntityKind = Field(alias="type", description="Geometry/behavior kind")
    category: EntityCategory | None = Field(default=None, description="Coarse grouping")
    subtype: str | None = Field(default=None, description="Furniture type, e.g. 'bed'")
    name: str | None = Field(default=None, description="Display name")

    position: Vector3 = Field(default_factory=Vector3)
    rotation: Vector3 = Field(default_factory=Vector3, description="Euler XYZ in radians")
    scale: Vector3 = Field(default_factory=lambda: Vector3.uniform(1.0))

    color: str = Field(default="#666666", description="Hex color")
    opacity: float | None = Field(default=None, ge=0.0, le=1.0)
    material: MaterialName | None = None
    wireframe: bool | None = None
    visible: bool | None = None

    model_path: str | None = Field(
        default=None,
        description="External model reference (imported entities only)",
    )
    room: str | None = Field(default=None, description="Id of the owning room")
    is_structural: bool | None = Field(default=None, description="Part of a room shell")

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
        "protected_namespaces": (),
    }

    def to_json_dict(self) -> dict[str, Any]:
        """Dump with camelCase keys, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SceneEntity(EntityDraft):
    """A placeable scene object living in the scene store."""

    id: str = Field(description="Unique identifier assigned by the store")

    def to_draft(self) -> EntityDraft:
        """Return the id-less draft with the same field values."""
        return EntityDraft.model_validate(self.model_dump(exclude={"id"}))


class PositionPatch(BaseModel):
    """Set the position, or offset it when ``relative`` is True."""

    property: Literal["position"] = "position"
    position: Vector3
    relative: bool = False

    model_config = {"frozen": True}


class RotationPatch(BaseModel):
    """Set the Euler rotation (radians)."""

    property: Literal["rotation"] = "rotation"
    rotation: Vector3

    model_config = {"frozen": True}


class ScalePatch(BaseModel):
    """Set the per-axis scale."""

    property: Literal["scale"] = "scale"
    scale: Vector3

    model_config = {"frozen": True}


class ColorPatch(BaseModel):
    """Set the hex color."""

    property: Literal["color"] = "color"
    color: str

    model_config = {"frozen": True}


EntityPatch = Annotated[
    Union[PositionPatch, RotationPatch, ScalePatch, ColorPatch],
    Field(discriminator="property"),
]


class RoomDimensions(BaseModel):
    """Interior size of a rectangular room in scene units (meters)."""

    width: float = Field(gt=0, description="Extent along X")
    length: float = Field(gt=0, description="Extent along Z")
    height: float = Field(default=3.0, gt=0, description="Wall height along Y")


class Room(BaseModel):
    """Index of the entities that make up one rectangular room.

    The room references entities by id; the entities themselves live in the
    scene store and may be updated or deleted independently.
    """

    id: str = Field(default_factory=lambda: generate_id("room"))
    name: str
    type: RoomType
    dimensions: RoomDimensions
    walls: list[str] = Field(default_factory=list, description="Wall entity ids")
    floor: str = Field(description="Floor entity id")
    ceiling: str | None = None
    furniture: list[str] = Field(default_factory=list)
    doors: list[str] = Field(default_factory=list)
    windows: list[str] = Field(default_factory=list)

    model_config = {"frozen": False}

    @property
    def entity_ids(self) -> list[str]:
        """All referenced entity ids, shell first."""
        ids = [*self.walls, self.floor]
        if self.ceiling is not None:
            ids.append(self.ceiling)
        return ids + self.furniture + self.doors + self.windows


class PlanDimensions(BaseModel):
    width: float = Field(default=20.0, gt=0)
    length: float = Field(default=20.0, gt=0)


class FloorPlan(BaseModel):
    """A blueprint import record.

    ``rooms`` stays empty after import: synthesized rooms are written straight
    into the scene store rather than attached here.
    """

    id: str = Field(default_factory=lambda: f"plan_{time.time_ns() // 1_000_000}")
    name: str
    rooms: list[Room] = Field(default_factory=list)
    scale: float = Field(default=1.0, gt=0, description="Scene units per meter")
    image_url: str | None = None
    content_type: str | None = None
    size_bytes: int = Field(default=0, ge=0)
    dimensions: PlanDimensions = Field(default_factory=PlanDimensions)
