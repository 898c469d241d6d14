"""Tests for SceneStore: create/update/delete/duplicate and the selection."""

import pytest
from pydantic import ValidationError

from roomforge.core.models import (
    ColorPatch,
    EntityDraft,
    PositionPatch,
    RotationPatch,
    ScalePatch,
    Vector3,
)
from roomforge.scene.store import SceneStore


@pytest.fixture
def store():
    return SceneStore()


def cube(**kwargs) -> EntityDraft:
    return EntityDraft(kind="cube", **kwargs)


class TestCreate:
    """Test entity creation."""

    def test_create_assigns_id_and_selects(self, store):
        entity = store.create(cube(color="#ff0000"))

        assert entity.id.startswith("obj_")
        assert store.selected == entity
        assert len(store) == 1
        assert entity.id in store

    def test_get_returns_equal_entity(self, store):
        entity = store.create(cube(name="Box", position=Vector3.of(1, 2, 3)))
        fetched = store.get(entity.id)

        assert fetched == entity
        assert fetched.position == Vector3.of(1, 2, 3)

    def test_ids_are_unique(self, store):
        ids = {store.create(cube()).id for _ in range(200)}
        assert len(ids) == 200

    def test_create_ignores_draft_id(self, store):
        """Passing an existing entity as a draft still gets a new id."""
        first = store.create(cube())
        second = store.create(first)
        assert second.id != first.id

    def test_objects_in_creation_order(self, store):
        a = store.create(cube(name="a"))
        b = store.create(cube(name="b"))
        assert [e.id for e in store.objects] == [a.id, b.id]


class TestUpdate:
    """Test patch merging and selection freshness."""

    def test_update_selected_refreshes_selection(self, store):
        entity = store.create(cube())
        store.update(entity.id, {"color": "#123456"})

        assert store.selected.color == "#123456"
        assert store.get(entity.id).color == "#123456"

    def test_update_with_camel_case_keys(self, store):
        entity = store.create(cube())
        merged = store.update(entity.id, {"isStructural": True})
        assert merged.is_structural is True

    def test_update_absent_id(self, store):
        assert store.update("nope", {"color": "#000000"}) is None
        assert len(store) == 0

    def test_update_keeps_other_fields(self, store):
        entity = store.create(cube(name="Box", color="#ffffff"))
        merged = store.update(entity.id, ScalePatch(scale=Vector3.uniform(3)))

        assert merged.name == "Box"
        assert merged.color == "#ffffff"
        assert merged.scale == Vector3.uniform(3)

    def test_relative_position_patch(self, store):
        entity = store.create(cube(position=Vector3.of(1, 1, 1)))
        merged = store.update(entity.id, PositionPatch(position=Vector3.of(0, 1, 0), relative=True))
        assert merged.position == Vector3.of(1, 2, 1)

    def test_absolute_position_patch(self, store):
        entity = store.create(cube(position=Vector3.of(1, 1, 1)))
        merged = store.update(entity.id, PositionPatch(position=Vector3.of(5, 0, 5)))
        assert merged.position == Vector3.of(5, 0, 5)

    def test_rotation_and_color_patches(self, store):
        entity = store.create(cube())
        store.update(entity.id, RotationPatch(rotation=Vector3.of(0, 1.5, 0)))
        store.update(entity.id, ColorPatch(color="#abcdef"))

        assert store.selected.rotation == Vector3.of(0, 1.5, 0)
        assert store.selected.color == "#abcdef"

    def test_update_unselected_leaves_selection(self, store):
        first = store.create(cube(name="first"))
        second = store.create(cube(name="second"))
        store.update(first.id, {"color": "#000000"})

        assert store.selected.id == second.id

    def test_id_is_immutable(self, store):
        entity = store.create(cube())
        with pytest.raises(ValueError):
            store.update(entity.id, {"id": "other"})

    def test_invalid_merge_rejected(self, store):
        entity = store.create(cube())
        with pytest.raises(ValidationError):
            store.update(entity.id, {"opacity": 2.0})
        assert store.get(entity.id) == entity


class TestDelete:
    def test_delete(self, store):
        entity = store.create(cube())

        assert store.delete(entity.id)
        assert store.get(entity.id) is None
        assert store.selected is None

    def test_delete_unselected_keeps_selection(self, store):
        first = store.create(cube())
        second = store.create(cube())
        store.delete(first.id)
        assert store.selected.id == second.id

    def test_delete_absent(self, store):
        assert store.delete("missing") is False


class TestDuplicate:
    def test_duplicate_offsets_and_selects(self, store):
        original = store.create(cube(name="Box", position=Vector3.of(1, 1, 1)))
        copy = store.duplicate(original.id)

        assert copy.id != original.id
        assert copy.position == Vector3.of(2, 1, 2)
        assert copy.name == "Box Copy"
        assert copy.color == original.color
        assert store.selected.id == copy.id
        assert len(store) == 2

    def test_duplicate_unnamed(self, store):
        original = store.create(cube())
        assert store.duplicate(original.id).name is None

    def test_duplicate_absent(self, store):
        assert store.duplicate("missing") is None


class TestSelection:
    def test_select_and_clear(self, store):
        first = store.create(cube())
        store.create(cube())

        assert store.select(first.id) == first
        assert store.selected.id == first.id

        assert store.select(None) is None
        assert store.selected is None

    def test_select_unknown_clears(self, store):
        store.create(cube())
        assert store.select("missing") is None
        assert store.selected is None

    def test_clear(self, store):
        store.create(cube())
        store.create(cube())
        store.clear()

        assert len(store) == 0
        assert store.selected is None

    def test_load_keeps_ids(self, store):
        entity = store.create(cube())
        other = SceneStore()
        other.load([entity])

        assert other.get(entity.id) == entity
        assert other.selected is None


class TestFind:
    """Test free-text entity references."""

    def test_find_by_id(self, store):
        entity = store.create(cube())
        assert store.find(entity.id) == entity

    def test_find_by_name_ignores_case_and_articles(self, store):
        entity = store.create(cube(name="Red Box"))
        store.create(cube(name="Blue Box"))
        assert store.find("the red box") == entity

    def test_find_by_kind_prefers_latest(self, store):
        store.create(EntityDraft(kind="sphere"))
        latest = store.create(EntityDraft(kind="sphere"))
        assert store.find("a sphere") == latest

    def test_find_by_subtype(self, store):
        sofa = store.create(EntityDraft(kind="furniture", subtype="sofa"))
        assert store.find("sofa") == sofa

    def test_find_nothing(self, store):
        store.create(cube())
        assert store.find("unicorn") is None
        assert store.find("  ") is None
        assert store.find("the") is None
