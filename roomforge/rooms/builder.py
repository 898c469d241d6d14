"""Room synthesis: rectangular room shells, furniture and openings.

A room is a floor slab centered on the origin plus four walls whose
centerlines run exactly along the floor's edges. North/South walls span the
width and sit at z = +/-length/2; East/West walls span the length and sit at
x = +/-width/2. Every entity is created through the scene store; the returned
:class:`Room` only records their ids.
"""

from __future__ import annotations

import logging

import numpy as np

from ..core.config import RoomParams
from ..core.models import EntityDraft, Room, RoomDimensions, SceneEntity, Vector3, generate_id
from ..core.vocabulary import (
    PRESET_ROOM_HEIGHT,
    ROOM_PRESETS,
    ROOM_TYPES,
    STRUCTURAL_ELEMENTS,
    RoomType,
    furniture_defaults,
)
from ..scene.session import ModelingSession
from ..scene.transform import Transform3D

logger = logging.getLogger(__name__)


def room_display_name(room_type: str) -> str:
    """``"living_room"`` -> ``"LIVING ROOM"``."""
    return room_type.replace("_", " ").upper()


class RoomBuilder:
    """Build rooms and place furniture into a modeling session."""

    def __init__(
        self,
        session: ModelingSession,
        params: RoomParams | None = None,
        rng: np.random.Generator | None = None,
    ):
        """
        Args:
            session: Session whose store receives the entities
            params: Wall/floor geometry; defaults to ``RoomParams()``
            rng: Random source for placement hints. Pass a seeded generator
                for reproducible layouts.
        """
        self.session = session
        self.params = params or RoomParams()
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def store(self):
        return self.session.store

    def build_room(
        self,
        room_type: RoomType,
        dimensions: RoomDimensions | dict,
        name: str | None = None,
    ) -> Room:
        """Create a floor and four walls and make the room current.

        Args:
            room_type: Room archetype
            dimensions: Width (X), length (Z) and height (Y)
            name: Display name; defaults to the upper-cased type

        Returns:
            The new Room, referencing the created entity ids

        Raises:
            ValueError: If ``room_type`` is not a known archetype
            ValidationError: If the dimensions are not positive
        """
        if room_type not in ROOM_TYPES:
            raise ValueError(f"Unknown room type: {room_type}. Known: {list(ROOM_TYPES)}")
        dims = RoomDimensions.model_validate(dimensions)
        room_id = generate_id("room")
        w, l, h = dims.width, dims.length, dims.height
        t = self.params.wall_thickness

        floor = self.store.create(
            EntityDraft(
                kind="floor",
                category="room",
                name=f"{room_type} Floor",
                position=Vector3.of(0, 0, 0),
                scale=Vector3.of(w, self.params.floor_thickness, l),
                color=self.params.floor_color,
                room=room_id,
                is_structural=True,
            )
        )

        wall_specs = [
            ("North Wall", (0.0, h / 2, l / 2), (w, h, t)),
            ("South Wall", (0.0, h / 2, -l / 2), (w, h, t)),
            ("East Wall", (w / 2, h / 2, 0.0), (t, h, l)),
            ("West Wall", (-w / 2, h / 2, 0.0), (t, h, l)),
        ]
        walls = [
            self.store.create(
                EntityDraft(
                    kind="wall",
                    category="room",
                    name=wall_name,
                    position=Vector3.of(*position),
                    scale=Vector3.of(*scale),
                    color=self.params.wall_color,
                    room=room_id,
                    is_structural=True,
                )
            )
            for wall_name, position, scale in wall_specs
        ]

        room = Room(
            id=room_id,
            name=name or room_display_name(room_type),
            type=room_type,
            dimensions=dims,
            walls=[wall.id for wall in walls],
            floor=floor.id,
        )
        self.session.register_room(room)
        logger.info(f"Built {room.name} ({w:g} x {l:g} x {h:g}) as {room_id}")
        return room

    def build_preset(self, room_type: RoomType) -> Room:
        """Build a room with the preset footprint for its type."""
        width, length = ROOM_PRESETS[room_type]
        return self.build_room(
            room_type,
            RoomDimensions(width=width, length=length, height=PRESET_ROOM_HEIGHT),
        )

    def random_position(self, room: Room) -> Vector3:
        """Uniform placement hint inside the room, minus the margin.

        Overlap with other furniture is not checked.
        """
        margin = self.params.placement_margin
        half_w = max(room.dimensions.width - margin, 0.0) / 2
        half_l = max(room.dimensions.length - margin, 0.0) / 2
        x = float(self.rng.uniform(-half_w, half_w)) if half_w > 0 else 0.0
        z = float(self.rng.uniform(-half_l, half_l)) if half_l > 0 else 0.0
        return Vector3.of(x, self.params.furniture_height, z)

    def add_furniture(
        self,
        room_id: str,
        furniture_type: str,
        position: Vector3 | None = None,
    ) -> SceneEntity:
        """Create a furniture entity with the type's default color and size.

        Unknown types become a brown unit box.

        Args:
            room_id: Room the piece belongs to
            furniture_type: Furniture subtype, e.g. ``"sofa"``
            position: Where to put it; defaults to ``(0, 0.5, 0)``

        Raises:
            UnknownRoomError: If ``room_id`` was not built in this session
        """
        room = self.session.get_room(room_id)
        color, scale = furniture_defaults(furniture_type)

        entity = self.store.create(
            EntityDraft(
                kind="furniture",
                category="furniture",
                subtype=furniture_type,
                name=furniture_type[:1].upper() + furniture_type[1:],
                position=position if position is not None else Vector3.of(0, 0.5, 0),
                scale=Vector3.of(*scale),
                color=color,
                room=room_id,
            )
        )
        room.furniture.append(entity.id)
        return entity

    def place_furniture(self, furniture_type: str) -> SceneEntity:
        """Add furniture to the current room at a random placement hint.

        Raises:
            NoCurrentRoomError: If no room has been built
        """
        room = self.session.require_current_room()
        return self.add_furniture(room.id, furniture_type, self.random_position(room))

    def place_structural(self, element_type: str) -> SceneEntity:
        """Put a door, window or wall piece against the current room's north wall.

        Raises:
            NoCurrentRoomError: If no room has been built
            ValueError: If ``element_type`` is not door, window or wall
        """
        room = self.session.require_current_room()
        if element_type not in STRUCTURAL_ELEMENTS:
            raise ValueError(
                f"Unknown structural element: {element_type}. "
                f"Known: {list(STRUCTURAL_ELEMENTS)}"
            )
        color, scale = STRUCTURAL_ELEMENTS[element_type]

        entity = self.store.create(
            EntityDraft(
                kind=element_type,
                category="structure",
                name=element_type.capitalize(),
                position=Vector3.of(
                    0,
                    1.5 if element_type == "window" else 1.0,
                    room.dimensions.length / 2 - 0.1,
                ),
                scale=Vector3.of(*scale),
                color=color,
                room=room.id,
                is_structural=True,
            )
        )
        if element_type == "door":
            room.doors.append(entity.id)
        elif element_type == "window":
            room.windows.append(entity.id)
        return entity


def wall_segments(session: ModelingSession, room: Room) -> list[tuple[np.ndarray, np.ndarray]]:
    """Floor-plane centerline segments ((x, z), (x, z)) of a room's walls."""
    segments = []
    for wall_id in room.walls:
        wall = session.store.get(wall_id)
        if wall is None:
            continue
        segments.append(Transform3D.from_entity(wall).centerline())
    return segments
