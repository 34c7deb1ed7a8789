"""
Mask Group Mixin

Groups are folders in the management panel. They carry no geometry; a mask
points at its group through group_id.
"""

import uuid as uuid_module
from typing import Optional

from models.mask import MaskGroup
from utils.logger import log_rejected
from constants import DEFAULT_GROUP_COLOR


class MaskGroupMixin:
    """Mixin providing group management for MaskStore

    This mixin assumes the parent class has:
        - self._groups: Dict of id -> MaskGroup
        - self._masks: Dict of id -> Mask
        - self._logger: logging.Logger instance
    """

    def create_group(self, name: str, color: str = DEFAULT_GROUP_COLOR) -> str:
        """Create a group at the end of the group order

        Returns:
            New group id
        """
        group_id = str(uuid_module.uuid4())
        self._groups[group_id] = MaskGroup(
            id=group_id,
            name=name,
            color=color,
            order=len(self._groups) + 1,
            created_at=self.now(),
        )
        self._logger.debug(f"Created group '{name}' ({group_id})")
        return group_id

    def get_group(self, group_id: str) -> Optional[MaskGroup]:
        return self._groups.get(group_id)

    def rename_group(self, group_id: str, name: str) -> bool:
        group = self._groups.get(group_id)
        if group is None:
            return log_rejected(self._logger, 'rename_group', reason=f"unknown group {group_id}")
        group.name = name
        return True

    def delete_group(self, group_id: str) -> bool:
        """Delete a group; its masks become ungrouped (locked ones included)"""
        if group_id not in self._groups:
            return log_rejected(self._logger, 'delete_group', reason=f"unknown group {group_id}")
        del self._groups[group_id]

        released = 0
        for mask in self._masks.values():
            if mask.group_id == group_id:
                mask.group_id = None
                released += 1
        self._logger.debug(f"Deleted group {group_id}, ungrouped {released} masks")
        return True

    def toggle_group_collapsed(self, group_id: str) -> bool:
        group = self._groups.get(group_id)
        if group is None:
            return log_rejected(self._logger, 'toggle_group_collapsed', reason=f"unknown group {group_id}")
        group.is_collapsed = not group.is_collapsed
        return True

    def set_group_color(self, group_id: str, color: str) -> bool:
        group = self._groups.get(group_id)
        if group is None:
            return log_rejected(self._logger, 'set_group_color', reason=f"unknown group {group_id}")
        group.color = color
        return True
