"""Exception types raised by roomforge.

Parser failures are never raised; they are returned as data by
:func:`roomforge.commands.parser.parse_command`. Everything here covers the
operations that do raise: room lookups, template lookups, file imports and
the staged synthesis worker.
"""

from __future__ import annotations


class RoomforgeError(Exception):
    """Base class for all roomforge errors."""


class UnknownRoomError(RoomforgeError, KeyError):
    """Raised when a room id does not name a room known to the session."""

    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f"Unknown room: {room_id}")

    def __str__(self) -> str:
        return self.args[0]


class NoCurrentRoomError(RoomforgeError):
    """Raised when an operation needs a current room and there is none."""


class UnknownTemplateError(RoomforgeError, KeyError):
    """Raised for an apartment template id that is not registered."""

    def __init__(self, template_id: str, available: list[str]):
        self.template_id = template_id
        self.available = available
        super().__init__(
            f"Unknown template: {template_id}. Available: {', '.join(available)}"
        )

    def __str__(self) -> str:
        return self.args[0]


class BlueprintFormatError(RoomforgeError, ValueError):
    """Raised when a blueprint upload is not a supported image."""


class ModelImportError(RoomforgeError, ValueError):
    """Raised when an external model file cannot be imported."""


class SynthesisError(RoomforgeError):
    """Raised by ``SynthesisJob.wait`` when a stage failed."""

    def __init__(self, stage: str, cause: BaseException):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Stage '{stage}' failed: {cause}")


class CommandExecutionError(RoomforgeError):
    """Raised when a parsed command cannot be applied to the scene."""
