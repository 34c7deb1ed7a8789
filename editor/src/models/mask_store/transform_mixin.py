"""
Mask Transform Mixin

Contains the rigid-transform operations for MaskStore:
- Position (translation in image pixels)
- Rotation (degrees about the point-set centroid)
- Flattening the transform into the stored points
- Absolute (transformed) point queries

Rotation is applied first, about the mean of the raw points, then the
translation. Smooth-point handles go through the same transform as their
vertex so curves keep their shape.
"""

from typing import List, Optional

from models.mask import CornerPoint, SmoothPoint
from models.transform import Vec2
from utils.geometry import points_centroid, rotate_points
from constants import DEFAULT_POSITION_X, DEFAULT_POSITION_Y, DEFAULT_ROTATION


def transform_mask_points(mask) -> list:
    """Mask points with rotation and position applied (new point objects)"""
    if mask.has_identity_transform:
        return list(mask.points)

    pivot = points_centroid(mask.points)
    offset = mask.position
    # Vertices and handles share one pivot, rotated in a single batch
    flat = []
    for p in mask.points:
        flat.append(p)
        if isinstance(p, SmoothPoint):
            flat.extend((p.h1, p.h2))
    rotated = rotate_points(flat, pivot, mask.rotation)

    result = []
    i = 0
    for p in mask.points:
        x, y = rotated[i]
        i += 1
        if isinstance(p, SmoothPoint):
            h1x, h1y = rotated[i]
            h2x, h2y = rotated[i + 1]
            i += 2
            result.append(SmoothPoint(float(x) + offset.x, float(y) + offset.y,
                                      Vec2(float(h1x) + offset.x, float(h1y) + offset.y),
                                      Vec2(float(h2x) + offset.x, float(h2y) + offset.y)))
        else:
            result.append(CornerPoint(float(x) + offset.x, float(y) + offset.y))
    return result


class MaskTransformMixin:
    """Mixin containing transform operations for MaskStore

    This mixin expects the parent class to have:
    - self._masks: Dict of id -> Mask
    - self._logger: Logger instance
    - self._editable_mask / self._touch helpers
    """

    # ========================================
    # Position/Rotation Operations
    # ========================================

    def set_position(self, mask_id: str, x: float, y: float) -> bool:
        """Set the mask translation (image pixels)"""
        mask = self._editable_mask(mask_id, 'set_position')
        if mask is None:
            return False
        mask.position = Vec2(float(x), float(y))
        self._touch(mask)
        return True

    def set_rotation(self, mask_id: str, degrees: float) -> bool:
        """Set the mask rotation; values outside [0, 360) are kept as-is"""
        mask = self._editable_mask(mask_id, 'set_rotation')
        if mask is None:
            return False
        mask.rotation = float(degrees)
        self._touch(mask)
        return True

    def touch_mask(self, mask_id: str) -> bool:
        """Stamp last_modified without changing anything else"""
        mask = self._editable_mask(mask_id, 'touch_mask')
        if mask is None:
            return False
        self._touch(mask)
        return True

    # ========================================
    # Flattening
    # ========================================

    def flatten_mask(self, mask_id: str) -> bool:
        """Bake position/rotation into the points and reset the transform

        The absolute outline is unchanged; afterwards position is (0, 0) and
        rotation 0 so point edits happen directly in image space.
        """
        mask = self._editable_mask(mask_id, 'flatten_mask')
        if mask is None:
            return False
        if mask.has_identity_transform:
            return True

        mask.points = transform_mask_points(mask)
        mask.position = Vec2(DEFAULT_POSITION_X, DEFAULT_POSITION_Y)
        mask.rotation = DEFAULT_ROTATION
        self._touch(mask)
        self._logger.debug(f"Flattened transform of mask {mask_id}")
        return True

    # ========================================
    # Queries
    # ========================================

    def get_absolute_points(self, mask_id: str) -> List:
        """Points as drawn on the image (transform applied)

        Raises:
            ValueError: If mask_id not found
        """
        mask = self._masks.get(mask_id)
        if mask is None:
            raise ValueError(f"Mask with id '{mask_id}' not found")
        return transform_mask_points(mask)

    def get_pivot(self, mask_id: str) -> Optional[Vec2]:
        """Rotation pivot (centroid of the raw points), None if unknown"""
        mask = self._masks.get(mask_id)
        if mask is None:
            return None
        return points_centroid(mask.points)
