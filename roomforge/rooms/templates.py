"""Hand-authored apartment templates for blueprint synthesis.

A template is one large room plus an ordered list of stages. Each stage is a
batch of placements with fixed coordinates; nothing here is derived from the
uploaded blueprint image.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from ..core.errors import UnknownTemplateError
from ..core.models import EntityCategory, RoomDimensions, Vector3

DOOR_COLOR = "#8B4513"
WINDOW_COLOR = "#87CEEB"


class Placement(BaseModel):
    """One entity to create during a stage.

    Furniture without an explicit ``scale`` or ``color`` takes the defaults
    of its subtype.
    """

    kind: Literal["furniture", "door", "window"] = "furniture"
    subtype: str | None = None
    name: str | None = None
    position: Vector3
    scale: Vector3 | None = None
    color: str | None = None
    category: EntityCategory | None = None

    model_config = {"frozen": True}


class Stage(BaseModel):
    """A named batch of placements executed together."""

    name: str
    label: str
    placements: list[Placement] = Field(default_factory=list)

    model_config = {"frozen": True}


class ApartmentTemplate(BaseModel):
    id: str
    name: str
    description: str = ""
    dimensions: RoomDimensions
    stages: list[Stage]

    model_config = {"frozen": True}


def _furniture(subtype: str, position: tuple[float, float, float], **kwargs) -> Placement:
    return Placement(subtype=subtype, position=Vector3.of(*position), **kwargs)


def _fixture(
    subtype: str,
    name: str,
    position: tuple[float, float, float],
    scale: tuple[float, float, float],
    color: str,
) -> Placement:
    return Placement(
        subtype=subtype,
        name=name,
        position=Vector3.of(*position),
        scale=Vector3.of(*scale),
        color=color,
        category="furniture",
    )


def _opening(
    kind: Literal["door", "window"],
    name: str,
    position: tuple[float, float, float],
    scale: tuple[float, float, float],
) -> Placement:
    return Placement(
        kind=kind,
        name=name,
        position=Vector3.of(*position),
        scale=Vector3.of(*scale),
        color=DOOR_COLOR if kind == "door" else WINDOW_COLOR,
        category="structure",
    )


def _rug(name: str, position: tuple[float, float, float], scale: tuple[float, float, float]) -> Placement:
    return Placement(
        subtype="rug",
        name=name,
        position=Vector3.of(*position),
        scale=Vector3.of(*scale),
        color="#B5651D",
        category="decoration",
    )


APARTMENT = ApartmentTemplate(
    id="apartment",
    name="Apartment",
    description="Open living/dining area with kitchen and bathroom, 8 x 6 m",
    dimensions=RoomDimensions(width=8, length=6, height=3),
    stages=[
        Stage(
            name="living_dining",
            label="Living & dining area",
            placements=[
                _furniture("sofa", (-2, 0.4, 2)),
                _furniture("table", (-2, 0.4, 0.5)),
                _furniture("dining_table", (1, 0.4, -1)),
                _furniture("chair", (0.5, 0.5, -1)),
                _furniture("chair", (1.5, 0.5, -1)),
                _furniture("chair", (1, 0.5, -1.5)),
                _furniture("chair", (1, 0.5, -0.5)),
                _furniture("tv_stand", (-3.5, 0.4, 0)),
            ],
        ),
        Stage(
            name="kitchen",
            label="Kitchen",
            placements=[
                _fixture("counter", "Kitchen Counter", (-3, 0.4, -4), (3, 0.8, 0.6), "#8B7355"),
                _fixture("refrigerator", "Refrigerator", (-1, 1, -4), (0.6, 2, 0.6), "#C0C0C0"),
                _fixture("counter", "Sink Counter", (0, 0.4, -4.3), (1.5, 0.8, 0.4), "#A0A0A0"),
            ],
        ),
        Stage(
            name="bathroom",
            label="Bathroom",
            placements=[
                _fixture("toilet", "Toilet", (3, 0.4, -4), (0.6, 0.8, 0.8), "#FFFFFF"),
                _fixture("sink", "Bathroom Sink", (3.5, 0.4, -3), (0.6, 0.8, 0.4), "#FFFFFF"),
                _fixture("bathtub", "Bathtub", (2.5, 0.3, -4.5), (1.5, 0.6, 0.8), "#FFFFFF"),
            ],
        ),
        Stage(
            name="openings",
            label="Doors & windows",
            placements=[
                _opening("door", "Main Door", (0, 1, 2.9), (0.1, 2, 1)),
                _opening("door", "Bathroom Door", (2, 1, -2), (0.8, 2, 0.1)),
                _opening("window", "Living Room Window", (-3.9, 1.5, 0), (0.1, 1, 2)),
                _opening("window", "Kitchen Window", (-1, 1.5, -2.9), (1.5, 1, 0.1)),
            ],
        ),
        Stage(
            name="floor_finish",
            label="Floor finish",
            placements=[
                _rug("Living Room Rug", (-2, 0.06, 1.25), (2.4, 0.02, 1.6)),
                _rug("Dining Rug", (1, 0.06, -1), (2.6, 0.02, 2.0)),
            ],
        ),
    ],
)

STUDIO = ApartmentTemplate(
    id="studio",
    name="Studio",
    description="Single open room with sleeping corner, kitchenette and shower room, 6 x 5 m",
    dimensions=RoomDimensions(width=6, length=5, height=3),
    stages=[
        Stage(
            name="living_dining",
            label="Living & sleeping area",
            placements=[
                _furniture("sofa", (-1.5, 0.4, 1.6)),
                _furniture("table", (-1.5, 0.4, 0.5)),
                _furniture("bed", (1.8, 0.25, 1.4)),
                _furniture("nightstand", (0.5, 0.3, 1.9)),
                _furniture("tv_stand", (-2.7, 0.4, 0)),
            ],
        ),
        Stage(
            name="kitchen",
            label="Kitchenette",
            placements=[
                _fixture("counter", "Kitchen Counter", (-1.6, 0.4, -2.1), (2.4, 0.8, 0.6), "#8B7355"),
                _fixture("refrigerator", "Refrigerator", (0.1, 1, -2.1), (0.6, 2, 0.6), "#C0C0C0"),
            ],
        ),
        Stage(
            name="bathroom",
            label="Shower room",
            placements=[
                _fixture("toilet", "Toilet", (2.5, 0.4, -2.0), (0.6, 0.8, 0.8), "#FFFFFF"),
                _fixture("sink", "Bathroom Sink", (2.6, 0.4, -1.1), (0.6, 0.8, 0.4), "#FFFFFF"),
            ],
        ),
        Stage(
            name="openings",
            label="Doors & windows",
            placements=[
                _opening("door", "Main Door", (-0.5, 1, 2.4), (1, 2, 0.1)),
                _opening("door", "Bathroom Door", (1.6, 1, -1.5), (0.1, 2, 0.8)),
                _opening("window", "Main Window", (-2.9, 1.5, 0.5), (0.1, 1, 2)),
            ],
        ),
        Stage(
            name="floor_finish",
            label="Floor finish",
            placements=[
                _rug("Living Rug", (-1.5, 0.06, 1.0), (2.2, 0.02, 1.6)),
            ],
        ),
    ],
)

TEMPLATES: dict[str, ApartmentTemplate] = {t.id: t for t in (APARTMENT, STUDIO)}


def get_template(template_id: str) -> ApartmentTemplate:
    """Look up an apartment template.

    Raises:
        UnknownTemplateError: If no template has that id
    """
    try:
        return TEMPLATES[template_id]
    except KeyError:
        raise UnknownTemplateError(template_id, list(TEMPLATES)) from None


def list_templates() -> list[dict[str, str]]:
    """List templates as ``{"id", "name", "description"}`` dicts."""
    return [
        {"id": t.id, "name": t.name, "description": t.description}
        for t in TEMPLATES.values()
    ]
