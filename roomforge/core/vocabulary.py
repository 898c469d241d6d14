"""Static vocabulary tables.

Color names, shape aliases, furniture defaults and room presets shared by the
command parser and the room builder. Nothing in this module has behavior
beyond dictionary lookups.
"""

from __future__ import annotations

from typing import Literal

Shape = Literal["cube", "sphere", "cylinder", "cone", "torus", "plane"]

RoomType = Literal["bedroom", "living_room", "kitchen", "bathroom", "office", "custom"]

SHAPES: tuple[str, ...] = ("cube", "sphere", "cylinder", "cone", "torus", "plane")

ROOM_TYPES: tuple[str, ...] = (
    "bedroom",
    "living_room",
    "kitchen",
    "bathroom",
    "office",
    "custom",
)

COLORS: dict[str, str] = {
    "red": "#ff6b6b",
    "blue": "#4ecdc4",
    "green": "#51cf66",
    "yellow": "#ffd93d",
    "orange": "#ff8c42",
    "purple": "#9c88ff",
    "pink": "#ff8cc8",
    "cyan": "#22d3ee",
    "gray": "#666666",
    "grey": "#666666",
    "white": "#ffffff",
    "black": "#000000",
    "brown": "#8b4513",
    "lime": "#32ff32",
    "magenta": "#ff00ff",
    "navy": "#000080",
    "silver": "#c0c0c0",
    "gold": "#ffd700",
}

SHAPE_ALIASES: dict[str, str] = {
    "box": "cube",
    "circle": "sphere",
    "ball": "sphere",
    "tube": "cylinder",
    "pyramid": "cone",
    "ring": "torus",
    "donut": "torus",
    "rectangle": "plane",
    "square": "plane",
}

# Furniture defaults: (hex color, (x, y, z) scale)
FURNITURE_COLORS: dict[str, str] = {
    "bed": "#8B4513",
    "chair": "#654321",
    "table": "#D2691E",
    "dining_table": "#CD853F",
    "sofa": "#4A4A4A",
    "desk": "#8B7355",
    "wardrobe": "#696969",
    "tv_stand": "#2F4F4F",
    "counter": "#8B7355",
    "refrigerator": "#C0C0C0",
    "toilet": "#FFFFFF",
    "sink": "#F5F5F5",
    "bathtub": "#FFFFFF",
    "nightstand": "#654321",
    "bookshelf": "#8B4513",
    "rug": "#B5651D",
}

FURNITURE_SCALES: dict[str, tuple[float, float, float]] = {
    "bed": (2.0, 0.5, 1.0),
    "chair": (0.5, 1.0, 0.5),
    "table": (1.5, 0.8, 0.8),
    "dining_table": (2.0, 0.8, 1.2),
    "sofa": (2.0, 0.8, 0.8),
    "desk": (1.2, 0.8, 0.6),
    "wardrobe": (1.0, 2.0, 0.6),
    "tv_stand": (1.5, 0.6, 0.4),
    "counter": (2.0, 0.8, 0.6),
    "refrigerator": (0.6, 2.0, 0.6),
    "toilet": (0.6, 0.8, 0.8),
    "sink": (0.6, 0.8, 0.4),
    "bathtub": (1.5, 0.6, 0.8),
    "nightstand": (0.5, 0.6, 0.4),
    "bookshelf": (0.4, 2.0, 1.5),
    "rug": (2.0, 0.02, 1.4),
}

DEFAULT_FURNITURE_COLOR = "#8B4513"
DEFAULT_FURNITURE_SCALE: tuple[float, float, float] = (1.0, 1.0, 1.0)

# Structural pieces placed by hand in a room: (hex color, (x, y, z) scale)
STRUCTURAL_ELEMENTS: dict[str, tuple[str, tuple[float, float, float]]] = {
    "door": ("#8B4513", (0.1, 2.0, 1.0)),
    "window": ("#87CEEB", (0.1, 1.0, 1.5)),
    "wall": ("#F5F5F5", (0.2, 3.0, 1.0)),
}

# Preset footprints (width, length) for one-click rooms; height is shared.
ROOM_PRESETS: dict[str, tuple[float, float]] = {
    "bedroom": (4.0, 5.0),
    "living_room": (6.0, 8.0),
    "kitchen": (4.0, 6.0),
    "bathroom": (3.0, 4.0),
    "office": (4.0, 5.0),
    "custom": (5.0, 5.0),
}

PRESET_ROOM_HEIGHT = 3.0


def resolve_shape(token: str) -> str:
    """Map a shape alias to its canonical name; other tokens pass through."""
    return SHAPE_ALIASES.get(token, token)


def is_shape_token(token: str) -> bool:
    """Return True if ``token`` is a canonical shape or a shape alias."""
    return token in SHAPES or token in SHAPE_ALIASES


def furniture_defaults(furniture_type: str) -> tuple[str, tuple[float, float, float]]:
    """Return ``(color, scale)`` for a furniture type, brown unit box if unknown."""
    return (
        FURNITURE_COLORS.get(furniture_type, DEFAULT_FURNITURE_COLOR),
        FURNITURE_SCALES.get(furniture_type, DEFAULT_FURNITURE_SCALE),
    )
