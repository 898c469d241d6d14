"""Tests for model import and mesh export."""

import numpy as np
import pytest
import trimesh

from roomforge.core.config import ImportParams
from roomforge.core.errors import ModelImportError
from roomforge.core.models import SceneEntity, Vector3
from roomforge.mesh.export import export_mesh, hex_to_rgba, primitive_mesh, scene_to_mesh
from roomforge.mesh.loader import ModelAsset, import_model
from roomforge.scene.session import ModelingSession


@pytest.fixture
def box_model(tmp_path):
    path = tmp_path / "crate.stl"
    trimesh.creation.box(extents=[1.0, 2.0, 3.0]).export(str(path))
    return path


def entity(kind="cube", **kwargs) -> SceneEntity:
    return SceneEntity(id=kwargs.pop("id", f"obj_{kind}"), kind=kind, **kwargs)


class TestModelAsset:
    def test_valid_model(self, box_model):
        asset = ModelAsset(box_model)

        assert asset.name == "crate"
        lo, hi = asset.bounds
        np.testing.assert_array_almost_equal(hi - lo, [1.0, 2.0, 3.0])

    def test_missing_file(self, tmp_path):
        with pytest.raises(ModelImportError, match="not found"):
            ModelAsset(tmp_path / "missing.glb")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "model.blend"
        path.write_bytes(b"\x00")
        with pytest.raises(ModelImportError, match="Unsupported format"):
            ModelAsset(path)

    def test_too_large(self, box_model):
        with pytest.raises(ModelImportError, match="too large"):
            ModelAsset(box_model, ImportParams(max_file_size_mb=1e-6))


class TestImportModel:
    def test_creates_imported_entity(self, box_model):
        session = ModelingSession()
        imported = import_model(session, box_model)

        assert imported.kind == "imported"
        assert imported.name == "crate"
        assert imported.color == "#ffffff"
        assert imported.position == Vector3.of(0, 1, 0)
        assert imported.scale == Vector3.uniform(2.5)
        assert imported.model_path == str(box_model.resolve())
        assert session.store.selected.id == imported.id

    def test_custom_scale(self, box_model):
        imported = import_model(ModelingSession(), box_model, ImportParams(import_scale=1.0))
        assert imported.scale == Vector3.uniform(1.0)


class TestMeshExport:
    """Test conversion of entities to trimesh scenes and files."""

    @pytest.mark.parametrize("color,expected", [
        ("#ff8800", [255, 136, 0, 255]),
        ("#f80", [255, 136, 0, 255]),
        ("000000", [0, 0, 0, 255]),
    ])
    def test_hex_to_rgba(self, color, expected):
        assert hex_to_rgba(color) == expected

    def test_hex_to_rgba_alpha(self):
        assert hex_to_rgba("#ffffff", alpha=0.5)[3] == 128

    def test_bad_hex(self):
        with pytest.raises(ValueError):
            hex_to_rgba("#12345")

    @pytest.mark.parametrize("kind", ["cube", "sphere", "cylinder", "cone", "torus", "wall", "furniture"])
    def test_primitives_fit_unit_box(self, kind):
        extents = primitive_mesh(kind).extents
        assert np.all(extents <= 1.0 + 1e-6)
        assert extents.max() == pytest.approx(1.0, abs=0.05)

    def test_cylinder_stands_on_y(self):
        extents = primitive_mesh("cylinder").extents
        assert extents[1] == pytest.approx(1.0)

    def test_plane_is_thin(self):
        assert primitive_mesh("plane").extents[1] < 0.05

    def test_scene_skips_hidden_and_missing_models(self, tmp_path):
        entities = [
            entity("cube", id="a"),
            entity("sphere", id="b", visible=False),
            entity("imported", id="c", model_path=str(tmp_path / "gone.glb")),
            entity("imported", id="d"),
        ]
        scene = scene_to_mesh(entities)
        assert list(scene.geometry) == ["a"]

    def test_stl_bakes_transforms(self, tmp_path):
        path = tmp_path / "out" / "scene.stl"
        export_mesh(
            [entity("cube", position=Vector3.of(10, 0, 0), scale=Vector3.uniform(2))],
            path,
        )

        mesh = trimesh.load(str(path))
        np.testing.assert_array_almost_equal(mesh.bounds, [[9, -1, -1], [11, 1, 1]])

    def test_glb_keeps_one_node_per_entity(self, tmp_path):
        path = tmp_path / "scene.glb"
        export_mesh([entity("cube", id="a"), entity("wall", id="b", color="#F5F5F5")], path)

        loaded = trimesh.load(str(path))
        assert isinstance(loaded, trimesh.Scene)
        assert len(loaded.geometry) == 2

    def test_imported_model_export(self, box_model, tmp_path):
        model = entity("imported", model_path=str(box_model), scale=Vector3.uniform(1))
        path = export_mesh([model], tmp_path / "scene.stl")

        mesh = trimesh.load(str(path))
        np.testing.assert_array_almost_equal(mesh.extents, [1.0, 2.0, 3.0])

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported mesh format"):
            export_mesh([entity()], tmp_path / "scene.fbx")

    def test_nothing_to_export(self, tmp_path):
        with pytest.raises(ValueError, match="Nothing to export"):
            export_mesh([entity(visible=False)], tmp_path / "scene.glb")
