"""Tests for Transform3D."""

import numpy as np
import pytest

from roomforge.core.models import SceneEntity, Vector3
from roomforge.scene.transform import UNIT_BOX_CORNERS, Transform3D


class TestTransform3D:
    """Test Transform3D functionality."""

    def test_default_transform(self):
        """Test default transform is identity."""
        t = Transform3D()
        assert t.position == (0.0, 0.0, 0.0)
        assert t.rotation == (0.0, 0.0, 0.0)
        assert t.scale == (1.0, 1.0, 1.0)
        np.testing.assert_array_almost_equal(t.to_matrix(), np.eye(4))

    def test_to_matrix_translation(self):
        t = Transform3D(position=(10.0, 20.0, 30.0))
        np.testing.assert_array_almost_equal(t.to_matrix()[:3, 3], [10.0, 20.0, 30.0])

    def test_to_matrix_scale(self):
        """Per-axis scale lands on the diagonal."""
        t = Transform3D(scale=(2.0, 3.0, 4.0))
        np.testing.assert_array_almost_equal(np.diag(t.to_matrix()), [2.0, 3.0, 4.0, 1.0])

    def test_rotation_is_radians_about_y(self):
        """A quarter turn about Y maps +X to -Z."""
        t = Transform3D(rotation=(0.0, np.pi / 2, 0.0))
        result = t.apply_to_points(np.array([[1.0, 0.0, 0.0]]))
        np.testing.assert_array_almost_equal(result[0], [0.0, 0.0, -1.0])

    def test_apply_to_points(self):
        """Scale is applied before translation."""
        t = Transform3D(position=(10.0, 0.0, 0.0), scale=(2.0, 2.0, 2.0))
        points = np.array([
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
        ])

        result = t.apply_to_points(points)

        np.testing.assert_array_almost_equal(result[0], [10.0, 0.0, 0.0])
        np.testing.assert_array_almost_equal(result[1], [12.0, 0.0, 0.0])

    def test_from_entity(self):
        entity = SceneEntity(
            id="obj_1",
            kind="cube",
            position=Vector3.of(1, 2, 3),
            rotation=Vector3.of(0, 0.5, 0),
            scale=Vector3.of(4, 5, 6),
        )
        t = Transform3D.from_entity(entity)

        assert t.position == (1.0, 2.0, 3.0)
        assert t.rotation == (0.0, 0.5, 0.0)
        assert t.scale == (4.0, 5.0, 6.0)

    def test_unit_box_corners(self):
        assert UNIT_BOX_CORNERS.shape == (8, 3)
        np.testing.assert_array_equal(UNIT_BOX_CORNERS.min(axis=0), [-0.5, -0.5, -0.5])


class TestFootprint:
    """Test floor-plane extents and centerlines."""

    def test_bounds(self):
        t = Transform3D(position=(0.0, 1.5, 0.0), scale=(4.0, 3.0, 0.2))
        lo, hi = t.bounds()
        np.testing.assert_array_almost_equal(lo, [-2.0, 0.0, -0.1])
        np.testing.assert_array_almost_equal(hi, [2.0, 3.0, 0.1])

    def test_footprint(self):
        t = Transform3D(position=(1.0, 0.0, -1.0), scale=(2.0, 1.0, 4.0))
        assert t.footprint() == pytest.approx((0.0, -3.0, 2.0, 1.0))

    def test_rotated_footprint(self):
        """A box turned a quarter about Y swaps its X and Z extents."""
        t = Transform3D(rotation=(0.0, np.pi / 2, 0.0), scale=(4.0, 1.0, 2.0))
        assert t.footprint() == pytest.approx((-1.0, -2.0, 1.0, 2.0))

    def test_centerline_along_x(self):
        t = Transform3D(position=(0.0, 1.5, 2.5), scale=(4.0, 3.0, 0.2))
        start, end = t.centerline()
        np.testing.assert_array_almost_equal(start, [-2.0, 2.5])
        np.testing.assert_array_almost_equal(end, [2.0, 2.5])

    def test_centerline_along_z(self):
        t = Transform3D(position=(-2.0, 1.5, 0.0), scale=(0.2, 3.0, 5.0))
        start, end = t.centerline()
        np.testing.assert_array_almost_equal(start, [-2.0, -2.5])
        np.testing.assert_array_almost_equal(end, [-2.0, 2.5])

