"""
Query Mixin for MaskStore

Read-only queries used by the panels, the quote calculator and hit testing.

Conventions:
- get_mask returns None for an unknown id
- Measurement queries raise ValueError for an unknown id
- Areas and lengths are in image pixels (px^2 / px)
"""

from typing import List, Optional

from models.mask import Mask
from models.transform import Vec2
from utils.geometry import (
    flatten_mask_points, point_in_polygon, polygon_area, polyline_length, polygon_perimeter
)
from .transform_mixin import transform_mask_points


class MaskQueryMixin:
    """Mixin providing query API for MaskStore

    This mixin assumes the class has:
    - self._masks: Dict of id -> Mask
    - self._groups: Dict of id -> MaskGroup
    - self.selected_id
    """

    # ========================================
    # Lookup
    # ========================================

    def get_mask(self, mask_id: Optional[str]) -> Optional[Mask]:
        """Live mask object. Mutate it only through the store API."""
        if mask_id is None:
            return None
        return self._masks.get(mask_id)

    def has_mask(self, mask_id: str) -> bool:
        return mask_id in self._masks

    def get_selected_mask(self) -> Optional[Mask]:
        return self.get_mask(self.selected_id)

    def masks_in_draw_order(self) -> List[Mask]:
        """Bottom-most first (ascending z_index, then creation time)"""
        return sorted(self._masks.values(), key=lambda m: (m.z_index, m.created_at))

    def masks_in_group(self, group_id: Optional[str]) -> List[Mask]:
        """Masks in a group in draw order; None gives ungrouped masks"""
        return [m for m in self.masks_in_draw_order() if m.group_id == group_id]

    # ========================================
    # Measurements
    # ========================================

    def _require(self, mask_id) -> Mask:
        mask = self._masks.get(mask_id)
        if mask is None:
            raise ValueError(f"Mask with id '{mask_id}' not found")
        return mask

    def get_outline(self, mask_id: str) -> List[Vec2]:
        """Flattened absolute outline (curves sampled) for drawing

        Raises:
            ValueError: If mask_id not found
        """
        mask = self._require(mask_id)
        return flatten_mask_points(transform_mask_points(mask), closed=mask.is_closed)

    def mask_area_px(self, mask_id: str) -> float:
        """Enclosed area in px^2; linear masks enclose nothing

        Rigid transforms preserve area, so the untransformed points are
        measured. Smooth segments are sampled before the shoelace, so a curved
        mask measures (and prices) its curved outline rather than the polygon
        through its vertices alone.

        Raises:
            ValueError: If mask_id not found
        """
        mask = self._require(mask_id)
        if not mask.is_closed:
            return 0.0
        return polygon_area(flatten_mask_points(mask.points, closed=True))

    def mask_length_px(self, mask_id: str) -> float:
        """Polyline length for linear masks, perimeter for area masks

        Raises:
            ValueError: If mask_id not found
        """
        mask = self._require(mask_id)
        outline = flatten_mask_points(mask.points, closed=mask.is_closed)
        if mask.is_closed:
            return polygon_perimeter(outline)
        return polyline_length(outline)

    # ========================================
    # Hit Testing
    # ========================================

    def hit_test(self, point) -> Optional[str]:
        """Id of the top-most visible area mask containing an image-space point"""
        point = Vec2.from_any(point)
        for mask in reversed(self.masks_in_draw_order()):
            if not mask.is_visible or not mask.is_closed:
                continue
            outline = flatten_mask_points(transform_mask_points(mask), closed=True)
            if point_in_polygon(point, outline):
                return mask.id
        return None
