"""
Mask Management Mixin

Lifecycle and panel-level operations for MaskStore.

Methods:
    Lifecycle:
        - create_mask
        - create_masks
        - delete_mask
        - select

    Materials:
        - assign_material
        - set_active_material
        - set_material_settings

    Panel properties:
        - rename_mask
        - toggle_visibility
        - toggle_lock
        - set_mask_color
        - set_mask_notes
        - move_mask_to_group
        - reorder_mask
"""

import uuid as uuid_module
from dataclasses import fields as dataclass_fields
from typing import Any, Dict, Iterable, List, Optional

from models.mask import Mask, min_points_for, point_from_dict
from models.transform import Vec2
from services.remote_store import MaskNotFoundError, RemoteStoreError
from utils.logger import log_rejected
from constants import (
    MASK_TYPE_AREA, MASK_TYPES, DEFAULT_MASK_NAME,
    EVENT_MASK_CREATED, EVENT_MATERIAL_ASSIGNED, EVENT_MASK_DELETED,
    SEVERITY_SUCCESS, SEVERITY_INFO,
)


_MASK_FIELDS = {f.name for f in dataclass_fields(Mask)}


class MaskManagementMixin:
    """Mixin providing mask lifecycle and management operations

    This mixin assumes the parent class has:
        - self._masks / self._groups dicts
        - self._logger: logging.Logger instance
        - self.remote_store: optional remote deletion target
        - self._emit, self._touch, self._editable_mask, self._allocate_z_index
    """

    # ========================================
    # Lifecycle
    # ========================================

    def create_mask(self, points, mask_type: str = MASK_TYPE_AREA, name: Optional[str] = None,
                    mask_id: Optional[str] = None, select: bool = True, emit: bool = True,
                    **fields) -> Optional[Mask]:
        """Insert a new mask with an identity transform

        Args:
            points: Image-space points (Vec2, pairs, dicts or MaskPoints)
            mask_type: 'area' or 'linear'
            name: Display name; defaults to "Mask {n+1}"
            mask_id: Explicit id (a uuid4 is generated otherwise)
            select: Select the new mask
            emit: Emit a mask_created event
            **fields: Extra Mask fields (material_id, color, group_id, ...)

        Returns:
            The inserted Mask, or None when the points or type are invalid
        """
        if mask_type not in MASK_TYPES:
            log_rejected(self._logger, 'create_mask', mask_id, f"unknown mask type '{mask_type}'")
            return None
        converted = [point_from_dict(p if isinstance(p, dict) else _as_point(p)) for p in points]
        if len(converted) < min_points_for(mask_type):
            log_rejected(self._logger, 'create_mask', mask_id,
                         f"{len(converted)} points is too few for a {mask_type} mask")
            return None

        mask_id = mask_id or str(uuid_module.uuid4())
        if mask_id in self._masks:
            log_rejected(self._logger, 'create_mask', mask_id, "id already exists")
            return None

        now = self.now()
        if 'z_index' in fields:
            self._reserve_z_index(int(fields['z_index']))
        else:
            fields['z_index'] = self._allocate_z_index()
        mask = Mask(
            id=mask_id,
            points=converted,
            type=mask_type,
            name=name or DEFAULT_MASK_NAME.format(len(self._masks) + 1),
            created_at=now,
            last_modified=now,
            **fields
        )
        self._masks[mask_id] = mask

        if select:
            self.selected_id = mask_id
        self._logger.info(f"Created {mask_type} mask '{mask.name}' ({mask_id}) with {len(converted)} points")

        if emit:
            self._emit(EVENT_MASK_CREATED, mask_id, f"{mask.name} created", SEVERITY_SUCCESS,
                       name=mask.name, mask_type=mask_type, point_count=len(converted))
        return mask

    def create_masks(self, entries: Iterable[Dict[str, Any]]) -> List[Mask]:
        """Batch insert (e.g. restoring a saved project)

        Each entry is a Mask dict form. Entries that fail validation are
        skipped. Nothing is selected; one mask_created event is emitted per
        inserted mask.

        Returns:
            Inserted masks in input order
        """
        created = []
        for entry in entries:
            data = {k: v for k, v in entry.items() if k in _MASK_FIELDS}
            points = data.pop('points', [])
            mask_type = data.pop('type', MASK_TYPE_AREA)
            name = data.pop('name', None)
            mask_id = data.pop('id', None)
            # Timestamps are always assigned by the store
            data.pop('created_at', None)
            data.pop('last_modified', None)
            mask = self.create_mask(points, mask_type, name=name, mask_id=mask_id,
                                    select=False, **data)
            if mask is not None:
                created.append(mask)
        self._logger.debug(f"Batch created {len(created)} masks")
        return created

    def delete_mask(self, mask_id: str) -> bool:
        """Remove a mask locally, then forward the deletion to the remote store

        Local removal always wins: a remote "not found" means the mask is
        already gone and any other remote failure is logged without rolling
        back.
        """
        mask = self._editable_mask(mask_id, 'delete_mask')
        if mask is None:
            return False

        del self._masks[mask_id]
        if self.selected_id == mask_id:
            self.selected_id = None
        self._logger.info(f"Deleted mask '{mask.name}' ({mask_id})")

        if self.remote_store is not None:
            try:
                self.remote_store.delete_mask(mask_id)
            except MaskNotFoundError:
                self._logger.debug(f"Mask {mask_id} already gone on remote")
            except RemoteStoreError as e:
                self._logger.warning(f"Remote delete of mask {mask_id} failed: {e}")
            except Exception:
                self._logger.exception(f"Remote delete of mask {mask_id} raised unexpectedly")

        self._emit(EVENT_MASK_DELETED, mask_id, f"{mask.name} deleted", SEVERITY_INFO, name=mask.name)
        return True

    def select(self, mask_id: Optional[str]) -> bool:
        """Select a mask (None clears the selection)"""
        if mask_id is not None and mask_id not in self._masks:
            return log_rejected(self._logger, 'select', mask_id, "unknown mask")
        self.selected_id = mask_id
        return True

    # ========================================
    # Materials
    # ========================================

    def assign_material(self, mask_id: str, material_id: Optional[str]) -> bool:
        """Assign (or clear with None) the mask's material"""
        mask = self._editable_mask(mask_id, 'assign_material')
        if mask is None:
            return False

        mask.material_id = material_id
        self._touch(mask)
        if material_id:
            self._emit(EVENT_MATERIAL_ASSIGNED, mask_id, f"Material applied to {mask.name}",
                       SEVERITY_SUCCESS, material_id=material_id)
        self._logger.debug(f"Material of mask {mask_id} set to {material_id}")
        return True

    def set_active_material(self, material_id: Optional[str]):
        self.active_material_id = material_id

    def set_material_settings(self, mask_id: str, settings: Dict[str, Any]) -> bool:
        """Merge settings into the mask's material settings"""
        mask = self._editable_mask(mask_id, 'set_material_settings')
        if mask is None:
            return False
        mask.material_settings = {**mask.material_settings, **settings}
        self._touch(mask)
        return True

    # ========================================
    # Panel Properties
    # ========================================

    def rename_mask(self, mask_id: str, name: str) -> bool:
        return self._set_field(mask_id, 'rename_mask', 'name', name)

    def toggle_visibility(self, mask_id: str) -> bool:
        mask = self._masks.get(mask_id)
        if mask is None:
            return log_rejected(self._logger, 'toggle_visibility', mask_id, "unknown mask")
        return self._set_field(mask_id, 'toggle_visibility', 'is_visible', not mask.is_visible)

    def toggle_lock(self, mask_id: str) -> bool:
        """Flip is_locked. The only mutation allowed on a locked mask."""
        mask = self._masks.get(mask_id)
        if mask is None:
            return log_rejected(self._logger, 'toggle_lock', mask_id, "unknown mask")
        mask.is_locked = not mask.is_locked
        self._touch(mask)
        self._logger.debug(f"Mask {mask_id} {'locked' if mask.is_locked else 'unlocked'}")
        return True

    def set_mask_color(self, mask_id: str, color: Optional[str]) -> bool:
        return self._set_field(mask_id, 'set_mask_color', 'color', color)

    def set_mask_notes(self, mask_id: str, notes: Optional[str]) -> bool:
        return self._set_field(mask_id, 'set_mask_notes', 'notes', notes)

    def move_mask_to_group(self, mask_id: str, group_id: Optional[str]) -> bool:
        """Put a mask in a group (None removes it from its group)"""
        if group_id is not None and group_id not in self._groups:
            return log_rejected(self._logger, 'move_mask_to_group', mask_id, f"unknown group {group_id}")
        return self._set_field(mask_id, 'move_mask_to_group', 'group_id', group_id)

    def reorder_mask(self, mask_id: str, z_index: int) -> bool:
        """Set the draw order directly"""
        if self._set_field(mask_id, 'reorder_mask', 'z_index', int(z_index)):
            self._reserve_z_index(int(z_index))
            return True
        return False

    def _set_field(self, mask_id, action, attr, value) -> bool:
        mask = self._editable_mask(mask_id, action)
        if mask is None:
            return False
        setattr(mask, attr, value)
        self._touch(mask)
        return True


def _as_point(value):
    """Vec2/pair -> Vec2; MaskPoints pass through"""
    if hasattr(value, 'kind'):
        return value
    return Vec2.from_any(value)
