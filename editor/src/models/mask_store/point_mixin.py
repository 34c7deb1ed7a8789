"""
Mask Point Editing Mixin

Vertex-level operations on a mask's point list:
    - update_point
    - add_point
    - remove_point
    - toggle_point_curve
    - update_bezier_handle

These are the raw store operations. InteractionModeController only forwards
to them while point-edit mode is active on the same mask.
"""

from models.mask import CornerPoint, SmoothPoint, point_from_dict
from models.transform import Vec2
from utils.logger import log_rejected
from constants import BEZIER_HANDLE_RATIO, HANDLE_IN, HANDLE_OUT


def _coerce_point(value):
    """Full MaskPoint, or None when value is only a position"""
    if isinstance(value, (CornerPoint, SmoothPoint)):
        return value
    if isinstance(value, dict) and 'kind' in value:
        return point_from_dict(value)
    return None


class MaskPointMixin:
    """Mixin providing point editing for MaskStore

    This mixin assumes the parent class has:
        - self._masks: Dict of id -> Mask
        - self._logger: logging.Logger instance
        - self._editable_mask / self._editable_index / self._touch helpers
    """

    # ========================================
    # Vertex Operations
    # ========================================

    def update_point(self, mask_id: str, index: int, point) -> bool:
        """Replace or move the point at index

        Args:
            mask_id: Mask id
            index: Point index in [0, len)
            point: A CornerPoint/SmoothPoint (or its dict form) replaces the
                point; a bare position (Vec2, (x, y), {x, y}) moves the existing
                point and drags its handles along

        Returns:
            True if applied
        """
        mask = self._editable_index(mask_id, index, 'update_point')
        if mask is None:
            return False

        replacement = _coerce_point(point)
        if replacement is None:
            pos = Vec2.from_any(point)
            replacement = mask.points[index].moved_to(pos.x, pos.y)

        mask.points[index] = replacement
        self._touch(mask)
        return True

    def add_point(self, mask_id: str, index: int, point) -> bool:
        """Insert a point before index (index == len appends)"""
        mask = self._editable_mask(mask_id, 'add_point')
        if mask is None:
            return False
        if not isinstance(index, int) or index < 0 or index > len(mask.points):
            return log_rejected(self._logger, 'add_point', mask_id, f"insert index {index} out of range")

        mask.points.insert(index, point_from_dict(_coerce_point(point) or Vec2.from_any(point)))
        self._touch(mask)
        self._logger.debug(f"Inserted point {index} into mask {mask_id} ({len(mask.points)} points)")
        return True

    def remove_point(self, mask_id: str, index: int) -> bool:
        """Remove the point at index, never going below the mask's minimum"""
        mask = self._editable_index(mask_id, index, 'remove_point')
        if mask is None:
            return False
        if len(mask.points) <= mask.min_points:
            return log_rejected(self._logger, 'remove_point', mask_id,
                                f"{mask.type} mask needs at least {mask.min_points} points")

        del mask.points[index]
        self._touch(mask)
        self._logger.debug(f"Removed point {index} from mask {mask_id} ({len(mask.points)} points)")
        return True

    # ========================================
    # Curve Operations
    # ========================================

    def toggle_point_curve(self, mask_id: str, index: int) -> bool:
        """Convert corner <-> smooth

        A corner becomes smooth with h1 placed 20% of the way toward the
        previous neighbour and h2 20% toward the next one. Open (linear)
        endpoints get a zero-length handle on the missing side.
        """
        mask = self._editable_index(mask_id, index, 'toggle_point_curve')
        if mask is None:
            return False

        current = mask.points[index]
        if isinstance(current, SmoothPoint):
            mask.points[index] = CornerPoint(current.x, current.y)
        else:
            mask.points[index] = self._smooth_from_neighbours(mask, index)

        self._touch(mask)
        self._logger.debug(f"Point {index} of mask {mask_id} is now {mask.points[index].kind}")
        return True

    def update_bezier_handle(self, mask_id: str, index: int, handle: str, pos) -> bool:
        """Move one handle of a smooth point

        Args:
            handle: 'h1' (incoming) or 'h2' (outgoing)
            pos: New absolute handle position
        """
        mask = self._editable_index(mask_id, index, 'update_bezier_handle')
        if mask is None:
            return False
        if handle not in (HANDLE_IN, HANDLE_OUT):
            return log_rejected(self._logger, 'update_bezier_handle', mask_id, f"unknown handle '{handle}'")

        current = mask.points[index]
        if not isinstance(current, SmoothPoint):
            return log_rejected(self._logger, 'update_bezier_handle', mask_id, f"point {index} is a corner")

        new_pos = Vec2.from_any(pos)
        if handle == HANDLE_IN:
            mask.points[index] = SmoothPoint(current.x, current.y, new_pos, current.h2)
        else:
            mask.points[index] = SmoothPoint(current.x, current.y, current.h1, new_pos)
        self._touch(mask)
        return True

    def _smooth_from_neighbours(self, mask, index) -> SmoothPoint:
        points = mask.points
        n = len(points)
        current = points[index]

        if mask.is_closed:
            prev_pt = points[(index - 1) % n]
            next_pt = points[(index + 1) % n]
        else:
            prev_pt = points[index - 1] if index > 0 else current
            next_pt = points[index + 1] if index < n - 1 else current

        h1 = Vec2(current.x + (prev_pt.x - current.x) * BEZIER_HANDLE_RATIO,
                  current.y + (prev_pt.y - current.y) * BEZIER_HANDLE_RATIO)
        h2 = Vec2(current.x + (next_pt.x - current.x) * BEZIER_HANDLE_RATIO,
                  current.y + (next_pt.y - current.y) * BEZIER_HANDLE_RATIO)
        return SmoothPoint(current.x, current.y, h1, h2)
