"""Structured actions and results produced by the command parser."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from ..core.models import EntityPatch, Vector3


class CreateAction(BaseModel):
    type: Literal["create"] = "create"
    shape: str
    color: str
    position: Vector3
    scale: Vector3

    model_config = {"frozen": True}


class ModifyAction(BaseModel):
    """Change one property of an entity.

    ``targets_selection`` is True when the command mentioned "object" or
    "selected"; ``target`` is then ``"selected"``.
    """

    type: Literal["modify"] = "modify"
    patch: EntityPatch
    target: Literal["selected"] | None = None
    targets_selection: bool = False

    model_config = {"frozen": True}

    @property
    def property(self) -> str:
        """Name of the property the patch changes."""
        return self.patch.property


class SelectAction(BaseModel):
    type: Literal["select"] = "select"
    target: str = ""

    model_config = {"frozen": True}


class DeleteAction(BaseModel):
    type: Literal["delete"] = "delete"
    target: str = "selected"

    model_config = {"frozen": True}


class ClearAction(BaseModel):
    type: Literal["clear"] = "clear"

    model_config = {"frozen": True}


CommandAction = Annotated[
    Union[CreateAction, ModifyAction, SelectAction, DeleteAction, ClearAction],
    Field(discriminator="type"),
]


class ParseErrorCode(str, Enum):
    EMPTY_COMMAND = "EmptyCommand"
    UNKNOWN_VERB = "UnknownVerb"
    UNKNOWN_SHAPE = "UnknownShape"
    UNKNOWN_COLOR = "UnknownColor"
    INVALID_SCALE = "InvalidScale"
    INVALID_MOVE = "InvalidMove"
    MISSING_PARAMETER = "MissingParameter"


class ParseError(BaseModel):
    """Why a command could not be parsed, with a message fit for display."""

    code: ParseErrorCode
    message: str

    model_config = {"frozen": True}


class CommandResult(BaseModel):
    """Outcome of parsing one command: exactly one of action or error is set."""

    action: CommandAction | None = None
    error: ParseError | None = None

    model_config = {"frozen": True}

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, action: CreateAction | ModifyAction | SelectAction | DeleteAction | ClearAction) -> CommandResult:
        return cls(action=action)

    @classmethod
    def fail(cls, code: ParseErrorCode, message: str) -> CommandResult:
        return cls(error=ParseError(code=code, message=message))
