"""Text command parser.

Turns short commands such as ``"create red cube at 1 2 3"`` or
``"rotate object 90"`` into structured actions. The grammar is a permissive
token scan, not a strict language: after the verb, parameters are picked out
of the remaining tokens wherever they appear.

Parsing never raises. Every failure comes back as a :class:`CommandResult`
carrying a :class:`ParseError` with a message that can be shown to the user.
"""

from __future__ import annotations

import math
import re
from typing import Callable

from ..core.config import ParserParams
from ..core.models import ColorPatch, PositionPatch, RotationPatch, ScalePatch, Vector3
from ..core.vocabulary import COLORS, SHAPES, is_shape_token, resolve_shape
from .actions import (
    ClearAction,
    CommandResult,
    CreateAction,
    DeleteAction,
    ModifyAction,
    ParseErrorCode,
    SelectAction,
)

VERBS: dict[str, str] = {
    "create": "create",
    "add": "create",
    "make": "create",
    "move": "move",
    "translate": "move",
    "rotate": "rotate",
    "turn": "rotate",
    "scale": "scale",
    "resize": "scale",
    "size": "scale",
    "color": "color",
    "paint": "color",
    "select": "select",
    "choose": "select",
    "delete": "delete",
    "remove": "delete",
    "clear": "clear",
    "reset": "clear",
}

SELECTION_WORDS = ("object", "selected")

# Leading decimal number of a token, e.g. "90" in "90deg"
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(token: str) -> float | None:
    """Parse the numeric prefix of a token.

    ``"2"`` -> 2.0, ``"-1.5"`` -> -1.5, ``"90deg"`` -> 90.0, ``"up"`` -> None.
    """
    match = _NUMBER_PREFIX.match(token.strip())
    if match is None:
        return None
    value = float(match.group())
    return value if math.isfinite(value) else None


def _first_number(tokens: list[str]) -> float | None:
    for token in tokens:
        value = parse_number(token)
        if value is not None:
            return value
    return None


def _coordinates_after(tokens: list[str], keyword: str) -> Vector3 | None:
    """Read ``keyword x y [z]``; None if the keyword or two numbers are missing."""
    if keyword not in tokens:
        return None
    i = tokens.index(keyword)
    if i >= len(tokens) - 2:
        return None
    x = parse_number(tokens[i + 1])
    y = parse_number(tokens[i + 2])
    if x is None or y is None:
        return None
    z = parse_number(tokens[i + 3]) if i + 3 < len(tokens) else None
    return Vector3(x=x, y=y, z=z or 0.0)


def _targets_selection(tokens: list[str]) -> bool:
    return any(word in tokens for word in SELECTION_WORDS)


def _modify(patch, tokens: list[str]) -> CommandResult:
    hinted = _targets_selection(tokens)
    return CommandResult.ok(
        ModifyAction(
            patch=patch,
            target="selected" if hinted else None,
            targets_selection=hinted,
        )
    )


class CommandParser:
    """Parser for the command grammar, with configurable defaults."""

    def __init__(self, params: ParserParams | None = None):
        self.params = params or ParserParams()
        self._handlers: dict[str, Callable[[list[str]], CommandResult]] = {
            "create": self._parse_create,
            "move": self._parse_move,
            "rotate": self._parse_rotate,
            "scale": self._parse_scale,
            "color": self._parse_color,
            "select": self._parse_select,
            "delete": self._parse_delete,
            "clear": self._parse_clear,
        }

    def parse(self, text: str) -> CommandResult:
        """Parse one command.

        Args:
            text: Raw command text (case-insensitive, whitespace-delimited)

        Returns:
            CommandResult with either an action or an error
        """
        tokens = text.lower().split()
        if not tokens:
            return CommandResult.fail(ParseErrorCode.EMPTY_COMMAND, "Empty command")

        verb, rest = tokens[0], tokens[1:]
        canonical = VERBS.get(verb)
        if canonical is not None:
            return self._handlers[canonical](rest)

        # No verb: the shape token may sit anywhere, so "red cube" creates a red
        # cube instead of failing as an unknown shape "red"
        for i, token in enumerate(tokens):
            if is_shape_token(token):
                return self._parse_create([token, *tokens[:i], *tokens[i + 1:]])

        return CommandResult.fail(
            ParseErrorCode.UNKNOWN_VERB,
            f"Unknown command: {verb}. Try 'create', 'move', 'rotate', 'scale', "
            f"'color', 'select', 'delete' or 'clear'",
        )

    def _parse_create(self, tokens: list[str]) -> CommandResult:
        if not tokens:
            return CommandResult.fail(
                ParseErrorCode.MISSING_PARAMETER,
                "Missing shape type. Try: create cube, create sphere, etc.",
            )

        shape = resolve_shape(tokens[0])
        if shape not in SHAPES:
            return CommandResult.fail(
                ParseErrorCode.UNKNOWN_SHAPE,
                f"Unknown shape: {shape}. Valid shapes: {', '.join(SHAPES)}",
            )

        color_word = next((t for t in tokens if t in COLORS), None)
        color = COLORS[color_word] if color_word else self.params.default_color

        position = _coordinates_after(tokens, "at")
        if position is None:
            # Malformed coordinates fall back silently
            position = Vector3.of(*self.params.default_position)

        scale = Vector3.uniform(1.0)
        size_index = next((i for i, t in enumerate(tokens) if t in ("size", "scale")), None)
        if size_index is not None and size_index < len(tokens) - 1:
            value = parse_number(tokens[size_index + 1])
            if value is not None and value > 0:
                scale = Vector3.uniform(value)

        return CommandResult.ok(
            CreateAction(shape=shape, color=color, position=position, scale=scale)
        )

    def _parse_move(self, tokens: list[str]) -> CommandResult:
        if not tokens:
            return CommandResult.fail(
                ParseErrorCode.MISSING_PARAMETER,
                "Missing movement direction or coordinates",
            )

        if "up" in tokens:
            return _modify(PositionPatch(position=Vector3.of(0, 1, 0), relative=True), tokens)
        if "down" in tokens:
            return _modify(PositionPatch(position=Vector3.of(0, -1, 0), relative=True), tokens)

        target = _coordinates_after(tokens, "to")
        if target is not None:
            return _modify(PositionPatch(position=target), tokens)

        return CommandResult.fail(
            ParseErrorCode.INVALID_MOVE,
            "Invalid move command. Try: move up, move down, move to x y z",
        )

    def _parse_rotate(self, tokens: list[str]) -> CommandResult:
        degrees = _first_number(tokens)
        if degrees is None:
            degrees = self.params.default_rotation_degrees
        angle = math.radians(degrees)
        return _modify(RotationPatch(rotation=Vector3.of(0, angle, 0)), tokens)

    def _parse_scale(self, tokens: list[str]) -> CommandResult:
        if not tokens:
            return CommandResult.fail(ParseErrorCode.MISSING_PARAMETER, "Missing scale factor")

        value = _first_number(tokens)
        if value is None:
            return CommandResult.fail(
                ParseErrorCode.INVALID_SCALE,
                "Invalid scale value. Use a number like: scale 2",
            )
        if value <= 0:
            return CommandResult.fail(ParseErrorCode.INVALID_SCALE, "Scale value must be positive")

        return _modify(ScalePatch(scale=Vector3.uniform(value)), tokens)

    def _parse_color(self, tokens: list[str]) -> CommandResult:
        if not tokens:
            return CommandResult.fail(ParseErrorCode.MISSING_PARAMETER, "Missing color name")

        color_word = next((t for t in tokens if t in COLORS), None)
        if color_word is None:
            return CommandResult.fail(
                ParseErrorCode.UNKNOWN_COLOR,
                f"Unknown color. Available colors: {', '.join(COLORS)}",
            )
        return _modify(ColorPatch(color=COLORS[color_word]), tokens)

    def _parse_select(self, tokens: list[str]) -> CommandResult:
        return CommandResult.ok(SelectAction(target=" ".join(tokens)))

    def _parse_delete(self, tokens: list[str]) -> CommandResult:
        if not tokens or _targets_selection(tokens):
            return CommandResult.ok(DeleteAction(target="selected"))
        return CommandResult.ok(DeleteAction(target=" ".join(tokens)))

    def _parse_clear(self, tokens: list[str]) -> CommandResult:
        return CommandResult.ok(ClearAction())


_default_parser = CommandParser()


def parse_command(text: str) -> CommandResult:
    """Parse a command with the default parser settings."""
    return _default_parser.parse(text)
