"""Tests for blueprint image import."""

import pytest

from roomforge.core.errors import BlueprintFormatError
from roomforge.rooms.blueprint import import_blueprint, sniff_content_type
from roomforge.scene.session import ModelingSession

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


class TestSniffContentType:
    @pytest.mark.parametrize("data,expected", [
        (PNG_BYTES, "image/png"),
        (JPEG_BYTES, "image/jpeg"),
        (b"GIF89a" + b"\x00" * 10, "image/gif"),
        (b"BM" + b"\x00" * 10, "image/bmp"),
        (b"RIFF\x00\x00\x00\x00WEBPVP8 ", "image/webp"),
        (b"%PDF-1.7\n", "application/pdf"),
    ])
    def test_known_formats(self, data, expected):
        assert sniff_content_type(data) == expected

    @pytest.mark.parametrize("data", [b"", b"hello world", b"RIFF\x00\x00\x00\x00WAVE"])
    def test_unknown(self, data):
        assert sniff_content_type(data) is None


class TestImportBlueprint:
    """Test FloorPlan creation from an upload."""

    def test_import_from_path(self, tmp_path):
        path = tmp_path / "ground_floor.png"
        path.write_bytes(PNG_BYTES)
        session = ModelingSession()

        plan = import_blueprint(session, path)

        assert plan.name == "ground_floor"
        assert plan.content_type == "image/png"
        assert plan.size_bytes == len(PNG_BYTES)
        assert plan.image_url.startswith("file://")
        assert plan.id.startswith("plan_")
        assert session.floor_plan is plan

    def test_plan_has_no_rooms(self, tmp_path):
        """Imported plans record metadata only; rooms are never attached."""
        plan = import_blueprint(ModelingSession(), JPEG_BYTES)

        assert plan.rooms == []
        assert plan.scale == 1.0
        assert (plan.dimensions.width, plan.dimensions.length) == (20, 20)

    def test_import_from_bytes(self):
        plan = import_blueprint(ModelingSession(), JPEG_BYTES, name="Upload")

        assert plan.name == "Upload"
        assert plan.image_url is None

    def test_import_does_not_touch_scene(self):
        session = ModelingSession()
        import_blueprint(session, PNG_BYTES)
        assert len(session.store) == 0

    def test_rejects_non_image(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("not a floor plan")

        with pytest.raises(BlueprintFormatError):
            import_blueprint(ModelingSession(), path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            import_blueprint(ModelingSession(), tmp_path / "missing.png")
