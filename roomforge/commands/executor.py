"""Apply parsed commands to a modeling session.

The executor is the glue between :mod:`roomforge.commands.parser` and the
scene store: it turns a :class:`CommandResult` into store mutations and
reports what happened in a form the CLI can print.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.errors import CommandExecutionError
from ..core.models import EntityDraft, SceneEntity
from ..scene.session import ModelingSession
from .actions import (
    ClearAction,
    CommandResult,
    CreateAction,
    DeleteAction,
    ModifyAction,
    SelectAction,
)
from .parser import CommandParser

logger = logging.getLogger(__name__)

COMMAND_SUGGESTIONS: tuple[str, ...] = (
    "create cube red",
    "create sphere blue",
    "create cylinder green",
    "add cone yellow",
    "make torus purple",
    "create plane gray",
    "move object up",
    "scale object 2",
    "rotate object 90",
    "color object orange",
    "delete object",
    "clear scene",
)


def suggest_commands(partial: str, limit: int = 5) -> list[str]:
    """Return up to ``limit`` example commands containing ``partial``."""
    text = partial.strip().lower()
    if not text:
        return []
    return [s for s in COMMAND_SUGGESTIONS if text in s][:limit]


@dataclass
class ExecutionResult:
    """What a command did to the scene."""

    command: str
    action_type: str
    message: str
    entity: SceneEntity | None = None


class CommandExecutor:
    """Parse commands and apply them to a session's scene store."""

    def __init__(self, session: ModelingSession, parser: CommandParser | None = None):
        self.session = session
        self.parser = parser or CommandParser()
        self.history: list[str] = []

    def execute(self, command: str) -> ExecutionResult:
        """Parse and apply one command.

        Args:
            command: Raw command text

        Returns:
            ExecutionResult describing the change

        Raises:
            CommandExecutionError: If the command does not parse or cannot
                be applied (e.g. a modify with nothing selected)
        """
        result = self.parser.parse(command)
        outcome = self.apply(result, command)
        self.history = [command, *self.history][:20]
        return outcome

    def apply(self, result: CommandResult, command: str = "") -> ExecutionResult:
        """Apply an already-parsed command."""
        if not result.success or result.action is None:
            message = result.error.message if result.error else "Invalid command"
            raise CommandExecutionError(message)

        action = result.action
        if isinstance(action, CreateAction):
            return self._create(action, command)
        if isinstance(action, ModifyAction):
            return self._modify(action, command)
        if isinstance(action, SelectAction):
            return self._select(action, command)
        if isinstance(action, DeleteAction):
            return self._delete(action, command)
        if isinstance(action, ClearAction):
            self.session.clear_scene()
            return ExecutionResult(command, "clear", "Scene cleared")
        raise CommandExecutionError(f"Unknown action type: {action.type}")

    def _create(self, action: CreateAction, command: str) -> ExecutionResult:
        entity = self.session.store.create(
            EntityDraft(
                kind=action.shape,
                color=action.color,
                position=action.position,
                scale=action.scale,
            )
        )
        logger.info(f"Created {entity.kind} {entity.id}")
        return ExecutionResult(command, "create", f"Created {entity.kind}", entity)

    def _modify(self, action: ModifyAction, command: str) -> ExecutionResult:
        store = self.session.store
        selected = store.selected
        if selected is None:
            raise CommandExecutionError("No object selected")

        entity = store.update(selected.id, action.patch)
        logger.info(f"Modified {action.property} of {selected.id}")
        return ExecutionResult(command, "modify", f"Changed {action.property}", entity)

    def _select(self, action: SelectAction, command: str) -> ExecutionResult:
        store = self.session.store
        if not action.target:
            store.select(None)
            return ExecutionResult(command, "select", "Selection cleared")

        match = store.find(action.target)
        if match is None:
            raise CommandExecutionError(f"No object matches '{action.target}'")
        store.select(match.id)
        return ExecutionResult(command, "select", f"Selected {match.name or match.kind}", match)

    def _delete(self, action: DeleteAction, command: str) -> ExecutionResult:
        store = self.session.store
        if action.target == "selected":
            entity = store.selected
            if entity is None:
                raise CommandExecutionError("No object selected")
        else:
            entity = store.find(action.target)
            if entity is None:
                raise CommandExecutionError(f"No object matches '{action.target}'")

        store.delete(entity.id)
        return ExecutionResult(command, "delete", f"Deleted {entity.name or entity.kind}", entity)
