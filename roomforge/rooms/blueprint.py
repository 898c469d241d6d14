"""Blueprint image import.

Importing a blueprint records the image as a :class:`FloorPlan` on the
session. The image is only a visual reference: no geometry is read from it,
and the returned plan has no rooms. Layouts are produced separately by
:class:`roomforge.rooms.synthesis.ApartmentSynthesizer`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.errors import BlueprintFormatError
from ..core.models import FloorPlan
from ..scene.session import ModelingSession

logger = logging.getLogger(__name__)

# Leading bytes of the accepted upload types
_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"%PDF-", "application/pdf"),
)


def sniff_content_type(data: bytes) -> str | None:
    """Identify an image (or PDF plan) from its first bytes.

    Returns:
        MIME type, or None if the data is not a supported format
    """
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    for signature, content_type in _SIGNATURES:
        if data.startswith(signature):
            return content_type
    return None


def import_blueprint(
    session: ModelingSession,
    source: str | Path | bytes,
    name: str | None = None,
) -> FloorPlan:
    """Record a blueprint image as the session's floor plan.

    Args:
        session: Session that receives the floor plan
        source: Path to the image file, or its raw bytes
        name: Plan name; defaults to the file stem (or "Blueprint" for bytes)

    Returns:
        The new FloorPlan (with no rooms)

    Raises:
        FileNotFoundError: If ``source`` is a path that does not exist
        BlueprintFormatError: If the data is not a supported image
    """
    image_url = None
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
        default_name = "Blueprint"
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Blueprint file not found: {path}")
        data = path.read_bytes()
        default_name = path.stem
        image_url = path.resolve().as_uri()

    content_type = sniff_content_type(data)
    if content_type is None:
        raise BlueprintFormatError(
            "Blueprint must be an image (PNG, JPEG, GIF, BMP, WEBP) or a PDF plan"
        )

    plan = FloorPlan(
        name=name or default_name,
        image_url=image_url,
        content_type=content_type,
        size_bytes=len(data),
    )
    session.floor_plan = plan
    logger.info(f"Imported blueprint '{plan.name}' ({content_type}, {len(data):,} bytes)")
    return plan
