"""
Mask Geometry Editor - Mask Store

THE MODEL for masks. Owns every mask, group and the selection, and is the
only place mask state is mutated.

This class handles:
- Mask collection keyed by id (insertion order preserved)
- Selection and the active material
- Groups for the management panel
- Draw-order counter (monotonically increasing z_index)
- Typed event emission to registered listeners
- Snapshot API (for undo/redo support)

The store is INDEPENDENT of UI and is injected, never global:
- No rendering logic
- No interaction modes (that's InteractionModeController)
- No in-flight draft (that's DraftBuilder)
- No undo stack (HistoryManager stores the snapshots)

Usage:
    store = MaskStore()
    mask = store.create_mask([(0, 0), (10, 0), (10, 10)])
    store.set_position(mask.id, 5.0, 5.0)
    store.assign_material(mask.id, 'granite')

    snapshot = store.get_snapshot()
    store.set_snapshot(snapshot)
"""

import time
import logging
from typing import Callable, Dict, List, Optional

from models.mask import Mask, MaskGroup
from models.events import MaskEvent
from utils.logger import log_rejected
from .point_mixin import MaskPointMixin
from .transform_mixin import MaskTransformMixin
from .management_mixin import MaskManagementMixin
from .group_mixin import MaskGroupMixin
from .query_mixin import MaskQueryMixin
from .serialization_mixin import MaskSerializationMixin


def epoch_millis() -> int:
    """Wall-clock time in epoch milliseconds"""
    return int(time.time() * 1000)


class MaskStore(MaskPointMixin, MaskTransformMixin, MaskManagementMixin,
                MaskGroupMixin, MaskSerializationMixin, MaskQueryMixin):
    """Mask collection with the full mutation API

    Every user-triggered mutation returns True when applied and False when
    rejected (unknown id, locked mask, out-of-range index). Rejections never
    raise.

    Properties:
        masks: Masks in insertion order
        groups: Groups in insertion order
        selected_id: Selected mask id or None
        active_material_id: Material picked in the material panel
    """

    def __init__(self, clock: Callable[[], int] = None, remote_store=None):
        """
        Args:
            clock: Returns epoch milliseconds (injectable for tests)
            remote_store: Optional object with delete_mask(mask_id)
        """
        self._logger = logging.getLogger('MaskStore')
        self._clock = clock or epoch_millis
        self.remote_store = remote_store

        self._masks: Dict[str, Mask] = {}
        self._groups: Dict[str, MaskGroup] = {}
        self.selected_id: Optional[str] = None
        self.active_material_id: Optional[str] = None

        # Next draw order handed to a new mask
        self._next_z_index = 1

        self._listeners: List[Callable[[MaskEvent], None]] = []

        self._logger.debug("Created new MaskStore")

    def clear(self):
        """Remove all masks and groups (listeners are kept)"""
        self._masks.clear()
        self._groups.clear()
        self.selected_id = None
        self.active_material_id = None
        self._next_z_index = 1
        self._logger.debug("Cleared MaskStore")

    # ========================================
    # Properties
    # ========================================

    @property
    def masks(self) -> List[Mask]:
        return list(self._masks.values())

    @property
    def groups(self) -> List[MaskGroup]:
        return list(self._groups.values())

    @property
    def mask_count(self) -> int:
        return len(self._masks)

    @property
    def next_z_index(self) -> int:
        return self._next_z_index

    def now(self) -> int:
        return self._clock()

    # ========================================
    # Events
    # ========================================

    def add_listener(self, callback: Callable[[MaskEvent], None]):
        """Register a callback receiving every MaskEvent"""
        self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _emit(self, kind, mask_id, message, severity, **data):
        event = MaskEvent(kind=kind, mask_id=mask_id, message=message,
                          severity=severity, data=data)
        for callback in list(self._listeners):
            try:
                callback(event)
            except Exception:
                self._logger.exception(f"Listener failed handling '{kind}' for mask {mask_id}")
        return event

    # ========================================
    # Helper Methods (Internal)
    # ========================================

    def _allocate_z_index(self) -> int:
        z_index = self._next_z_index
        self._next_z_index += 1
        return z_index

    def _reserve_z_index(self, z_index: int):
        """Keep the counter ahead of an externally supplied z_index"""
        if z_index >= self._next_z_index:
            self._next_z_index = z_index + 1

    def _touch(self, mask: Mask):
        mask.last_modified = self._clock()

    def _editable_mask(self, mask_id, action) -> Optional[Mask]:
        """Mask if it exists and is unlocked, else None (rejection logged)"""
        mask = self._masks.get(mask_id)
        if mask is None:
            log_rejected(self._logger, action, mask_id, "unknown mask")
            return None
        if mask.is_locked:
            log_rejected(self._logger, action, mask_id, "mask is locked")
            return None
        return mask

    def _editable_index(self, mask_id, index, action) -> Optional[Mask]:
        """Editable mask whose point list contains index, else None"""
        mask = self._editable_mask(mask_id, action)
        if mask is None:
            return None
        if not isinstance(index, int) or index < 0 or index >= len(mask.points):
            log_rejected(self._logger, action, mask_id, f"point index {index} out of range")
            return None
        return mask
