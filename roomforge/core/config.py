"""Configuration management for roomforge.

This module defines all configuration models using Pydantic for validation.
Configuration can be loaded from JSON files or constructed programmatically.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .vocabulary import COLORS


class ParserParams(BaseModel):
    """Defaults filled in by the command parser when a command omits them."""

    default_color: str = Field(default=COLORS["gray"], description="Color for 'create' without a color word")
    default_position: tuple[float, float, float] = Field(
        default=(0.0, 1.0, 0.0),
        description="Position for 'create' without 'at x y [z]'",
    )
    default_rotation_degrees: float = Field(
        default=45.0,
        description="Y rotation for 'rotate' without an angle",
    )

    @field_validator("default_color")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        if not (v.startswith("#") and len(v) in (4, 7)):
            raise ValueError(f"Expected a hex color like '#666666', got {v!r}")
        return v


class RoomParams(BaseModel):
    """Geometry and colors of generated room shells."""

    wall_thickness: float = Field(default=0.2, gt=0, le=2.0, description="Wall thickness in meters")
    floor_thickness: float = Field(default=0.1, gt=0, le=1.0, description="Floor slab thickness in meters")
    wall_color: str = Field(default="#F5F5F5")
    floor_color: str = Field(default="#8B7355")

    # Random furniture placement keeps this much total clearance per axis
    placement_margin: float = Field(default=2.0, ge=0, description="Clearance subtracted from width/length")
    furniture_height: float = Field(default=0.5, description="Y coordinate of placed furniture")


class SynthesisParams(BaseModel):
    """Staged apartment synthesis settings."""

    stage_delay_s: float = Field(
        default=0.1,
        ge=0,
        le=10.0,
        description="Pause before each stage so a viewer can reveal the build",
    )
    randomization_seed: int | None = Field(
        default=None,
        description="Seed for furniture placement hints. None = non-deterministic.",
    )


class ImportParams(BaseModel):
    """Limits for external model imports."""

    supported_formats: tuple[str, ...] = Field(
        default=(".gltf", ".glb", ".obj", ".fbx", ".stl", ".ply"),
        description="Accepted model file extensions",
    )
    max_file_size_mb: float = Field(default=50.0, gt=0)
    import_scale: float = Field(default=2.5, gt=0, description="Uniform scale of imported models")


class RoomforgeConfig(BaseModel):
    """Main configuration container."""

    parser: ParserParams = Field(default_factory=ParserParams)
    room: RoomParams = Field(default_factory=RoomParams)
    synthesis: SynthesisParams = Field(default_factory=SynthesisParams)
    imports: ImportParams = Field(default_factory=ImportParams)

    @classmethod
    def from_file(cls, path: Path | str) -> RoomforgeConfig:
        """Load configuration from a JSON file."""
        path = Path(path)
        with open(path) as f:
            data = json.load(f)
        return cls.model_validate(data)

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

    @classmethod
    def default(cls) -> RoomforgeConfig:
        """Create a default configuration."""
        return cls()
