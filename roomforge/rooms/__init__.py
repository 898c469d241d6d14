"""Procedural room and apartment synthesis.

This module builds rectangular rooms into a modeling session, places
furniture and openings, imports blueprint images and runs the staged
apartment synthesis that furnishes a whole layout from a template.
"""

from .builder import RoomBuilder, room_display_name, wall_segments
from .blueprint import import_blueprint, sniff_content_type
from .templates import ApartmentTemplate, Placement, Stage, get_template, list_templates
from .synthesis import ApartmentSynthesizer, JobStatus, SynthesisJob, SynthesisProgress

__all__ = [
    "RoomBuilder",
    "room_display_name",
    "wall_segments",
    "import_blueprint",
    "sniff_content_type",
    "ApartmentTemplate",
    "Placement",
    "Stage",
    "get_template",
    "list_templates",
    "ApartmentSynthesizer",
    "JobStatus",
    "SynthesisJob",
    "SynthesisProgress",
]
