"""3D transformation utilities for scene entities.

Provides Transform3D for representing position, rotation, and per-axis scale,
with conversion to 4x4 homogeneous transformation matrices. Entity geometry is
modelled as a unit shape centered on the origin, so the transform alone
determines where an entity sits and how much floor it covers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, Field
from scipy.spatial.transform import Rotation

if TYPE_CHECKING:
    from ..core.models import SceneEntity

# Corners of the unit cube centered on the origin
UNIT_BOX_CORNERS = np.array(
    [[x, y, z] for x in (-0.5, 0.5) for y in (-0.5, 0.5) for z in (-0.5, 0.5)],
    dtype=np.float64,
)


class Transform3D(BaseModel):
    """3D transformation: position + rotation + scale.

    Attributes:
        position: XYZ position in scene units
        rotation: XYZ Euler angles in radians (intrinsic XYZ order)
        scale: Per-axis scale factors
    """

    position: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0),
        description="XYZ position"
    )
    rotation: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0),
        description="XYZ rotation in radians (Euler angles)"
    )
    scale: tuple[float, float, float] = Field(
        default=(1.0, 1.0, 1.0),
        description="Per-axis scale factors"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, entity: SceneEntity) -> Transform3D:
        """Build the transform of a scene entity."""
        return cls(
            position=entity.position.as_tuple(),
            rotation=entity.rotation.as_tuple(),
            scale=entity.scale.as_tuple(),
        )

    def to_matrix(self) -> NDArray[np.float64]:
        """Convert to 4x4 homogeneous transformation matrix.

        The transformation order is: Scale -> Rotate -> Translate
        This means the matrix is built as: T @ R @ S

        Returns:
            4x4 transformation matrix
        """
        s = np.diag([*self.scale, 1.0]).astype(np.float64)

        rot = Rotation.from_euler('XYZ', self.rotation)
        r = np.eye(4, dtype=np.float64)
        r[:3, :3] = rot.as_matrix()

        t = np.eye(4, dtype=np.float64)
        t[:3, 3] = self.position

        return t @ r @ s

    def apply_to_points(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply transformation to an Nx3 array of points.

        Args:
            points: Nx3 array of XYZ coordinates

        Returns:
            Transformed Nx3 array of points
        """
        matrix = self.to_matrix()

        ones = np.ones((len(points), 1), dtype=np.float64)
        homogeneous = np.hstack([np.asarray(points, dtype=np.float64), ones])

        transformed = (matrix @ homogeneous.T).T
        return transformed[:, :3]

    def bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Axis-aligned (min, max) corners of the transformed unit box."""
        corners = self.apply_to_points(UNIT_BOX_CORNERS)
        return corners.min(axis=0), corners.max(axis=0)

    def footprint(self) -> tuple[float, float, float, float]:
        """Floor-plane extent of the transformed unit box.

        Returns:
            (min_x, min_z, max_x, max_z)
        """
        lo, hi = self.bounds()
        return float(lo[0]), float(lo[2]), float(hi[0]), float(hi[2])

    def centerline(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """End points of the box's longest horizontal axis, on the floor plane.

        For a wall this is the segment the wall runs along. Points are (x, z).
        """
        sx, _, sz = self.scale
        axis = np.array([0.5, 0.0, 0.0]) if abs(sx) >= abs(sz) else np.array([0.0, 0.0, 0.5])
        ends = self.apply_to_points(np.vstack([-axis, axis]))
        return ends[0, [0, 2]], ends[1, [0, 2]]

    def __repr__(self) -> str:
        return (
            f"Transform3D(pos={self.position}, "
            f"rot={self.rotation}, scale={self.scale})"
        )
