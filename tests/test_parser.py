"""Tests for the text command parser."""

import math

import pytest

from roomforge.commands.actions import (
    ClearAction,
    CreateAction,
    DeleteAction,
    ModifyAction,
    ParseErrorCode,
    SelectAction,
)
from roomforge.commands.parser import CommandParser, parse_command, parse_number
from roomforge.core.config import ParserParams
from roomforge.core.models import Vector3
from roomforge.core.vocabulary import COLORS, SHAPE_ALIASES, SHAPES


class TestParseNumber:
    """Test numeric token parsing."""

    @pytest.mark.parametrize("token,expected", [
        ("2", 2.0),
        ("-1.5", -1.5),
        ("0.25", 0.25),
        (".5", 0.5),
        ("90deg", 90.0),
        ("1e2", 100.0),
    ])
    def test_numeric_prefix(self, token, expected):
        assert parse_number(token) == pytest.approx(expected)

    @pytest.mark.parametrize("token", ["up", "", "object", "-", "nan", "inf"])
    def test_not_a_number(self, token):
        assert parse_number(token) is None


class TestCreate:
    """Test the create verb and its synonyms."""

    @pytest.mark.parametrize("shape", list(SHAPES) + list(SHAPE_ALIASES))
    @pytest.mark.parametrize("color", ["red", "blue", "grey", "gold"])
    def test_shape_and_color(self, shape, color):
        """Every shape/alias and color resolves to canonical values."""
        result = parse_command(f"create {shape} {color}")

        assert result.success
        action = result.action
        assert isinstance(action, CreateAction)
        assert action.shape == SHAPE_ALIASES.get(shape, shape)
        assert action.color == COLORS[color]

    @pytest.mark.parametrize("verb", ["create", "add", "make", "CREATE"])
    def test_verb_synonyms(self, verb):
        result = parse_command(f"{verb} cube")
        assert result.success
        assert result.action.type == "create"

    def test_defaults(self):
        """Color defaults to gray, position to (0, 1, 0), scale to 1."""
        action = parse_command("create sphere").action

        assert action.color == "#666666"
        assert action.position == Vector3.of(0, 1, 0)
        assert action.scale == Vector3.uniform(1.0)

    def test_position_with_z(self):
        action = parse_command("create cube at 1 2 3").action
        assert action.position == Vector3.of(1, 2, 3)

    def test_position_z_defaults_to_zero(self):
        action = parse_command("create cube at 1 2").action
        assert action.position == Vector3.of(1, 2, 0)

    def test_malformed_position_falls_back(self):
        """Non-numeric coordinates keep the default position."""
        action = parse_command("create cube at left side").action
        assert action.position == Vector3.of(0, 1, 0)

    def test_position_needs_two_numbers(self):
        action = parse_command("create cube at 4").action
        assert action.position == Vector3.of(0, 1, 0)

    def test_size(self):
        action = parse_command("create cube size 2").action
        assert action.scale == Vector3.uniform(2.0)

    def test_scale_keyword(self):
        action = parse_command("create torus red scale 0.5 at 1 1 1").action
        assert action.scale == Vector3.uniform(0.5)
        assert action.color == COLORS["red"]
        assert action.position == Vector3.of(1, 1, 1)

    def test_non_positive_size_ignored(self):
        action = parse_command("create cube size -3").action
        assert action.scale == Vector3.uniform(1.0)

    def test_unknown_shape(self):
        """An unknown shape lists the six valid shapes."""
        result = parse_command("create blorb")

        assert not result.success
        assert result.error.code == ParseErrorCode.UNKNOWN_SHAPE
        for shape in SHAPES:
            assert shape in result.error.message

    def test_missing_shape(self):
        result = parse_command("create")
        assert result.error.code == ParseErrorCode.MISSING_PARAMETER

    def test_custom_defaults(self):
        parser = CommandParser(ParserParams(default_color="#123456", default_position=(5, 5, 5)))
        action = parser.parse("create cone").action

        assert action.color == "#123456"
        assert action.position == Vector3.of(5, 5, 5)


class TestVerbFallback:
    """Commands without a verb are retried as create when they name a shape."""

    def test_color_then_shape(self):
        result = parse_command("red cube")

        assert result.success
        assert result.action.shape == "cube"
        assert result.action.color == COLORS["red"]

    def test_alias_with_position(self):
        action = parse_command("big ball at 2 0 -1").action
        assert action.shape == "sphere"
        assert action.position == Vector3.of(2, 0, -1)

    def test_unknown_verb(self):
        result = parse_command("jump around")

        assert not result.success
        assert result.error.code == ParseErrorCode.UNKNOWN_VERB
        assert "jump" in result.error.message


class TestEmpty:
    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_empty_command(self, text):
        result = parse_command(text)
        assert result.error.code == ParseErrorCode.EMPTY_COMMAND
        assert result.action is None


class TestMove:
    """Test move commands."""

    def test_move_up_is_relative(self):
        action = parse_command("move object up").action

        assert isinstance(action, ModifyAction)
        assert action.property == "position"
        assert action.patch.relative
        assert action.patch.position == Vector3.of(0, 1, 0)
        assert action.targets_selection
        assert action.target == "selected"

    def test_move_down(self):
        action = parse_command("translate down").action
        assert action.patch.position == Vector3.of(0, -1, 0)
        assert not action.targets_selection
        assert action.target is None

    def test_move_to(self):
        action = parse_command("move to 3 0 -2").action
        assert not action.patch.relative
        assert action.patch.position == Vector3.of(3, 0, -2)

    def test_invalid_move(self):
        result = parse_command("move sideways")
        assert result.error.code == ParseErrorCode.INVALID_MOVE

    def test_move_without_arguments(self):
        result = parse_command("move")
        assert result.error.code == ParseErrorCode.MISSING_PARAMETER


class TestRotate:
    """Test rotate commands."""

    def test_rotate_object_90(self):
        """'rotate object 90' rotates the selection a quarter turn about Y."""
        action = parse_command("rotate object 90").action

        assert action.type == "modify"
        assert action.property == "rotation"
        assert action.patch.rotation.x == 0
        assert action.patch.rotation.y == pytest.approx(math.pi / 2)
        assert action.patch.rotation.z == 0
        assert action.targets_selection

    def test_default_angle(self):
        action = parse_command("turn").action
        assert action.patch.rotation.y == pytest.approx(math.radians(45))

    def test_first_number_anywhere(self):
        """The first numeric token wins wherever it appears."""
        action = parse_command("rotate 30 selected by 60").action
        assert action.patch.rotation.y == pytest.approx(math.radians(30))


class TestScale:
    """Test scale commands."""

    def test_scale_uniform(self):
        action = parse_command("scale object 2").action
        assert action.property == "scale"
        assert action.patch.scale == Vector3.uniform(2.0)

    def test_negative_scale_rejected(self):
        result = parse_command("scale object -2")
        assert result.error.code == ParseErrorCode.INVALID_SCALE

    def test_zero_scale_rejected(self):
        assert parse_command("resize 0").error.code == ParseErrorCode.INVALID_SCALE

    def test_non_numeric_scale(self):
        assert parse_command("scale big").error.code == ParseErrorCode.INVALID_SCALE

    def test_missing_scale(self):
        assert parse_command("size").error.code == ParseErrorCode.MISSING_PARAMETER


class TestColor:
    def test_color_object(self):
        action = parse_command("paint object navy").action
        assert action.property == "color"
        assert action.patch.color == COLORS["navy"]

    def test_unknown_color_lists_colors(self):
        result = parse_command("color object chartreuse")
        assert result.error.code == ParseErrorCode.UNKNOWN_COLOR
        assert "magenta" in result.error.message

    def test_missing_color(self):
        assert parse_command("color").error.code == ParseErrorCode.MISSING_PARAMETER


class TestSelectDeleteClear:
    def test_select_target(self):
        action = parse_command("select the red cube").action
        assert isinstance(action, SelectAction)
        assert action.target == "the red cube"

    def test_select_nothing(self):
        action = parse_command("choose").action
        assert action.target == ""

    def test_delete_defaults_to_selection(self):
        for text in ("delete", "remove object", "delete selected"):
            action = parse_command(text).action
            assert isinstance(action, DeleteAction)
            assert action.target == "selected"

    def test_delete_named(self):
        action = parse_command("remove sofa").action
        assert action.target == "sofa"

    def test_clear(self):
        assert isinstance(parse_command("clear").action, ClearAction)
        assert isinstance(parse_command("reset scene").action, ClearAction)
