"""Modeling session: the state container shared by every component.

A session owns the scene store and the room-level state around it: the
registry of rooms built so far, the current room pointer, the last imported
floor plan and any staged synthesis jobs still in flight. Components receive
the session explicitly; there is no module-level state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from ..core.errors import NoCurrentRoomError, UnknownRoomError
from .store import SceneStore

if TYPE_CHECKING:
    from ..core.models import FloorPlan, Room, SceneEntity
    from ..rooms.synthesis import SynthesisJob

logger = logging.getLogger(__name__)


class ModelingSession:
    """Scene store plus current room, floor plan and pending synthesis jobs."""

    def __init__(self, store: SceneStore | None = None):
        self.store = store if store is not None else SceneStore()
        self.rooms: dict[str, Room] = {}
        self.current_room: Room | None = None
        self.floor_plan: FloorPlan | None = None
        self.view_mode: Literal["2d", "3d"] = "3d"
        self._jobs: list[SynthesisJob] = []

    def register_room(self, room: Room) -> None:
        """Record a newly built room and make it current."""
        self.rooms[room.id] = room
        self.current_room = room
        logger.debug(f"Current room is now {room.id} ({room.name})")

    def get_room(self, room_id: str) -> Room:
        """Look up a room by id.

        Raises:
            UnknownRoomError: If no room with that id was built in this session
        """
        try:
            return self.rooms[room_id]
        except KeyError:
            raise UnknownRoomError(room_id) from None

    def require_current_room(self) -> Room:
        """Return the current room.

        Raises:
            NoCurrentRoomError: If no room has been built yet
        """
        if self.current_room is None:
            raise NoCurrentRoomError("No current room. Build a room or import a blueprint first.")
        return self.current_room

    def select_room(self, room_id: str | None) -> Room | None:
        """Make a known room current (or none) and drop the entity selection."""
        self.store.select(None)
        self.current_room = None if room_id is None else self.get_room(room_id)
        return self.current_room

    def room_entities(self, room: Room) -> list[SceneEntity]:
        """Entities referenced by ``room`` that still exist in the store."""
        found = (self.store.get(entity_id) for entity_id in room.entity_ids)
        return [entity for entity in found if entity is not None]

    def track_job(self, job: SynthesisJob) -> None:
        """Register an in-flight synthesis job so clearing can cancel it."""
        self._jobs = [j for j in self._jobs if not j.done]
        self._jobs.append(job)

    @property
    def pending_jobs(self) -> list[SynthesisJob]:
        return [job for job in self._jobs if not job.done]

    def cancel_pending(self) -> int:
        """Cancel every unfinished synthesis job.

        Returns:
            Number of jobs cancelled
        """
        pending = self.pending_jobs
        for job in pending:
            job.cancel()
        self._jobs = []
        if pending:
            logger.info(f"Cancelled {len(pending)} pending synthesis job(s)")
        return len(pending)

    def clear_scene(self) -> None:
        """Cancel pending synthesis, then empty the store and selection.

        Rooms built earlier stay in the registry; their entity ids simply no
        longer resolve.
        """
        self.cancel_pending()
        self.store.clear()
