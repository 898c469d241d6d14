"""Staged apartment synthesis.

``ApartmentSynthesizer.synthesize`` clears the scene, builds one large room
and hands the template's stages to a single worker coroutine, which runs them
in order with a short pause before each so a viewer can reveal the layout
progressively. The call returns a :class:`SynthesisJob` immediately; await
``job.wait()`` for completion.

Clearing the session cancels pending jobs, so a stage never writes into a
scene that was cleared after synthesis started. Stages are synchronous and
therefore never observed half-done; cancellation takes effect between stages.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np

from ..core.config import RoomforgeConfig
from ..core.errors import SynthesisError
from ..core.models import EntityDraft, Room, SceneEntity
from ..core.vocabulary import furniture_defaults
from ..scene.session import ModelingSession
from .builder import RoomBuilder
from .templates import ApartmentTemplate, Placement, Stage, get_template

logger = logging.getLogger(__name__)


class JobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class SynthesisProgress:
    """Progress information after each finished stage."""

    template_id: str
    stage: str
    label: str
    completed_stages: int
    total_stages: int
    created_entities: int

    @property
    def percent_complete(self) -> float:
        """Percentage of stages completed."""
        if self.total_stages == 0:
            return 100.0
        return (self.completed_stages / self.total_stages) * 100


class SynthesisJob:
    """Handle on one in-flight apartment synthesis."""

    def __init__(self, template_id: str, room: Room, total_stages: int):
        self.template_id = template_id
        self.room = room
        self.total_stages = total_stages
        self.status = JobStatus.PENDING
        self.completed_stages: list[str] = []
        self.created_ids: list[str] = []
        self.error: BaseException | None = None
        self.failed_stage: str | None = None
        self._cancel_requested = False
        self._task: asyncio.Task[None] | None = None

    @property
    def done(self) -> bool:
        return self.status in (JobStatus.COMPLETED, JobStatus.CANCELLED, JobStatus.FAILED)

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_requested

    def cancel(self) -> bool:
        """Stop the job before its next stage.

        Returns:
            True if the job was still running, False if it had already finished
        """
        if self.done:
            return False
        self._cancel_requested = True
        self.status = JobStatus.CANCELLED
        if self._task is not None:
            self._task.cancel()
        return True

    async def wait(self) -> JobStatus:
        """Wait until the job finishes.

        Returns:
            Final status (completed or cancelled)

        Raises:
            SynthesisError: If a stage raised
        """
        if self._task is not None:
            try:
                await asyncio.shield(self._task)
            except asyncio.CancelledError:
                # Only swallow the job's own cancellation, not the caller's
                if not self._task.cancelled():
                    raise
        if self.status is JobStatus.FAILED:
            raise SynthesisError(self.failed_stage or "?", self.error)
        return self.status

    def __repr__(self) -> str:
        return (
            f"SynthesisJob({self.template_id!r}, status={self.status.value}, "
            f"stages={len(self.completed_stages)}/{self.total_stages})"
        )


class ApartmentSynthesizer:
    """Populate a session with a hand-authored apartment layout."""

    def __init__(
        self,
        session: ModelingSession,
        config: RoomforgeConfig | None = None,
        builder: RoomBuilder | None = None,
    ):
        self.session = session
        self.config = config or RoomforgeConfig.default()
        if builder is None:
            rng = np.random.default_rng(self.config.synthesis.randomization_seed)
            builder = RoomBuilder(session, self.config.room, rng)
        self.builder = builder

    def synthesize(
        self,
        template_id: str,
        progress_callback: Callable[[SynthesisProgress], None] | None = None,
    ) -> SynthesisJob:
        """Start building an apartment. Must be called inside a running event loop.

        The scene is cleared and the template's room is built before this
        returns; the furnishing stages run afterwards on a worker task.

        Args:
            template_id: Id of a registered apartment template
            progress_callback: Called after each completed stage

        Returns:
            The job driving the remaining stages

        Raises:
            UnknownTemplateError: If the template id is not registered
            RuntimeError: If no event loop is running
        """
        template = get_template(template_id)
        loop = asyncio.get_running_loop()

        self.session.clear_scene()
        room = self.builder.build_room("custom", template.dimensions, name=template.name.upper())

        job = SynthesisJob(template.id, room, len(template.stages))
        job._task = loop.create_task(
            self._run(job, template, progress_callback),
            name=f"synthesize-{template.id}",
        )
        self.session.track_job(job)
        logger.info(f"Started synthesis of '{template.id}' ({len(template.stages)} stages)")
        return job

    async def _run(
        self,
        job: SynthesisJob,
        template: ApartmentTemplate,
        progress_callback: Callable[[SynthesisProgress], None] | None,
    ) -> None:
        job.status = JobStatus.RUNNING
        delay = self.config.synthesis.stage_delay_s

        try:
            for stage in template.stages:
                await asyncio.sleep(delay)
                if job.cancel_requested:
                    return

                try:
                    created = self._run_stage(stage, job)
                except Exception as e:
                    job.status = JobStatus.FAILED
                    job.error = e
                    job.failed_stage = stage.name
                    logger.error(f"Synthesis stage '{stage.name}' failed: {e}")
                    return

                job.completed_stages.append(stage.name)
                logger.debug(f"Stage '{stage.name}' created {len(created)} entities")

                if progress_callback:
                    progress_callback(
                        SynthesisProgress(
                            template_id=template.id,
                            stage=stage.name,
                            label=stage.label,
                            completed_stages=len(job.completed_stages),
                            total_stages=job.total_stages,
                            created_entities=len(job.created_ids),
                        )
                    )

            job.status = JobStatus.COMPLETED
            logger.info(f"Synthesis of '{template.id}' complete: {len(job.created_ids)} entities")

        except asyncio.CancelledError:
            job.status = JobStatus.CANCELLED
            logger.info(f"Synthesis of '{template.id}' cancelled after {len(job.completed_stages)} stage(s)")
            raise

    def _run_stage(self, stage: Stage, job: SynthesisJob) -> list[SceneEntity]:
        created = []
        for placement in stage.placements:
            entity = self._place(placement, job.room)
            job.created_ids.append(entity.id)
            created.append(entity)
        return created

    def _place(self, placement: Placement, room: Room) -> SceneEntity:
        if placement.kind == "furniture" and placement.scale is None and placement.color is None:
            return self.builder.add_furniture(room.id, placement.subtype or "furniture", placement.position)

        default_color, default_scale = furniture_defaults(placement.subtype or "")
        structural = placement.kind in ("door", "window")
        entity = self.session.store.create(
            EntityDraft(
                kind=placement.kind,
                category=placement.category,
                subtype=placement.subtype,
                name=placement.name,
                position=placement.position,
                scale=placement.scale if placement.scale is not None else default_scale,
                color=placement.color or default_color,
                room=room.id,
                is_structural=True if structural else None,
            )
        )

        if placement.kind == "door":
            room.doors.append(entity.id)
        elif placement.kind == "window":
            room.windows.append(entity.id)
        else:
            room.furniture.append(entity.id)
        return entity
