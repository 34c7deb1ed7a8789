"""
Serialization Mixin for MaskStore

Snapshot API (for undo/redo) and the plain-dict project form. Snapshots are
deep copies built from Mask.to_dict, so later edits never leak into them.
"""

from typing import Any, Dict

from models.mask import Mask, MaskGroup
from constants import EVENT_SNAPSHOT_RESTORED, SEVERITY_INFO


class MaskSerializationMixin:
    """Mixin providing snapshots and dict export/import

    This mixin assumes the class has:
    - self._masks / self._groups dicts
    - self.selected_id, self.active_material_id, self._next_z_index
    - self._logger and self._emit
    """

    def get_snapshot(self) -> Dict[str, Any]:
        """Get complete state snapshot (for undo)

        Returns:
            Dictionary of plain data (JSON-serializable)
        """
        return {
            'masks': [mask.to_dict() for mask in self._masks.values()],
            'groups': [group.to_dict() for group in self._groups.values()],
            'selected_id': self.selected_id,
            'active_material_id': self.active_material_id,
            'next_z_index': self._next_z_index,
        }

    def set_snapshot(self, snapshot: Dict[str, Any]):
        """Restore state from snapshot (for undo)

        Emits snapshot_restored so interaction state tied to masks that no
        longer exist can be dropped.

        Args:
            snapshot: Dictionary from get_snapshot()
        """
        masks = [Mask.from_dict(data) for data in snapshot.get('masks', [])]
        self._masks = {mask.id: mask for mask in masks}
        self._groups = {
            group.id: group
            for group in (MaskGroup.from_dict(data) for data in snapshot.get('groups', []))
        }

        selected = snapshot.get('selected_id')
        self.selected_id = selected if selected in self._masks else None
        self.active_material_id = snapshot.get('active_material_id')

        highest = max((mask.z_index for mask in masks), default=0)
        self._next_z_index = max(int(snapshot.get('next_z_index', 1)), highest + 1)

        self._logger.debug(f"Restored from snapshot ({len(self._masks)} masks)")
        self._emit(EVENT_SNAPSHOT_RESTORED, None, "State restored", SEVERITY_INFO,
                   mask_count=len(self._masks))

    def to_dict(self) -> Dict[str, Any]:
        """Project form of the store (same shape as a snapshot)"""
        return self.get_snapshot()

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **kwargs):
        """Build a store from to_dict() output

        Args:
            data: Dictionary from to_dict()
            **kwargs: Passed to the constructor (clock, remote_store)
        """
        store = cls(**kwargs)
        store.set_snapshot(data)
        return store
