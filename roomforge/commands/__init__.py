"""Text command parsing and execution."""

from .actions import (
    ClearAction,
    CommandAction,
    CommandResult,
    CreateAction,
    DeleteAction,
    ModifyAction,
    ParseError,
    ParseErrorCode,
    SelectAction,
)
from .parser import CommandParser, parse_command, parse_number
from .executor import CommandExecutor, ExecutionResult, suggest_commands

__all__ = [
    "ClearAction",
    "CommandAction",
    "CommandResult",
    "CreateAction",
    "DeleteAction",
    "ModifyAction",
    "ParseError",
    "ParseErrorCode",
    "SelectAction",
    "CommandParser",
    "parse_command",
    "parse_number",
    "CommandExecutor",
    "ExecutionResult",
    "suggest_commands",
]
