"""
Mask Geometry Editor - Interaction Mode Controller

Owns the four mutually exclusive ways the pointer can change masks:
- drafting a new mask (delegated to DraftBuilder)
- point editing (vertices and Bezier handles)
- move (drag translation)
- rotate (drag rotation about the centroid)

Entering any of them leaves the active one first: an unfinished draft is
cancelled and an in-flight drag is rolled back to its baseline. All mask
mutations go through the injected MaskStore; rejected operations return False
and never raise.

Usage:
    controller = InteractionModeController(store)
    controller.enter_move_mode(mask_id)
    controller.start_move_drag(mask_id, (120, 80))
    controller.update_move_drag(mask_id, (15, -4))
    controller.end_move_drag(mask_id)
    controller.exit_mode()
"""

import logging
from typing import Optional

from models.mask import Draft
from models.transform import Vec2
from services.draft_builder import DraftBuilder
from utils.geometry import find_closest_edge, find_closest_vertex
from utils.logger import log_rejected
from constants import (
    MASK_TYPE_AREA, EVENT_MASK_DELETED, EVENT_SNAPSHOT_RESTORED,
    VERTEX_HIT_THRESHOLD, EDGE_HIT_THRESHOLD,
)
from .modes import DragMode, MoveMode, PointEditMode, RotateMode, create_mode

MODE_DRAFT = 'draft'


class InteractionModeController:
    """Mode state machine in front of a MaskStore"""

    def __init__(self, store, draft_builder: Optional[DraftBuilder] = None, history=None):
        """
        Args:
            store: MaskStore to mutate
            draft_builder: DraftBuilder sharing the same store (created if omitted)
            history: Optional HistoryManager bound to the same store; committed
                edits (draft finalize, point edits, drag ends) are recorded
        """
        self._logger = logging.getLogger('InteractionModeController')
        self.store = store
        self.draft_builder = draft_builder or DraftBuilder(store)
        self.history = history
        self.mode = None  # PointEditMode | MoveMode | RotateMode | None

        store.add_listener(self._on_store_event)

    # ========================================
    # State
    # ========================================

    @property
    def active_mode(self) -> Optional[str]:
        """'draft', 'point_edit', 'move', 'rotate' or None"""
        if self.draft_builder.is_drafting:
            return MODE_DRAFT
        return self.mode.name if self.mode else None

    @property
    def target_mask_id(self) -> Optional[str]:
        return self.mode.mask_id if self.mode else None

    @property
    def drag(self):
        """DragContext of the active move/rotate mode, else None"""
        return self.mode.drag if self.mode else None

    @property
    def is_dragging(self) -> bool:
        return self.drag is not None and self.drag.is_dragging

    def is_point_editing(self, mask_id: Optional[str] = None) -> bool:
        if not isinstance(self.mode, PointEditMode):
            return False
        return mask_id is None or self.mode.targets(mask_id)

    # ========================================
    # Mode Transitions
    # ========================================

    def begin_draft(self, mode: str = MASK_TYPE_AREA) -> Draft:
        """Leave any mode and start drafting"""
        self._leave_active_mode()
        self._logger.info(f"Drafting new {mode} mask")
        return self.draft_builder.begin(mode)

    def finalize_draft(self, simplify_tolerance: Optional[float] = None):
        """Commit the draft as a new mask (see DraftBuilder.finalize)"""
        mask = self.draft_builder.finalize(simplify_tolerance)
        self._recorded(mask is not None, "Create mask")
        return mask

    def enter_point_editing(self, mask_id: str) -> bool:
        """Flatten the mask's transform into its points and edit them

        The mask is selected. Its original position/rotation are kept on the
        mode but are not restored on exit.
        """
        mask = self._enterable_mask(mask_id, 'enter_point_editing')
        if mask is None:
            return False

        self._leave_active_mode()
        original_position = Vec2(mask.position.x, mask.position.y)
        original_rotation = mask.rotation
        self._recorded(self.store.flatten_mask(mask_id), "Flatten mask")
        self.store.select(mask_id)

        mode = create_mode(PointEditMode.name, mask_id)
        mode.original_position = original_position
        mode.original_rotation = original_rotation
        self.mode = mode
        self._logger.info(f"Entered point editing on mask {mask_id}")
        return True

    def enter_move_mode(self, mask_id: str) -> bool:
        return self._enter_drag_mode(MoveMode.name, mask_id)

    def enter_rotate_mode(self, mask_id: str) -> bool:
        return self._enter_drag_mode(RotateMode.name, mask_id)

    def exit_mode(self) -> bool:
        """Leave whatever is active (draft, point edit, move or rotate)

        Returns:
            True if something was active
        """
        was_active = self.active_mode is not None
        self._leave_active_mode()
        return was_active

    def exit_point_editing(self) -> bool:
        return self._exit_named(PointEditMode.name)

    def exit_move_mode(self) -> bool:
        return self._exit_named(MoveMode.name)

    def exit_rotate_mode(self) -> bool:
        return self._exit_named(RotateMode.name)

    def _enter_drag_mode(self, mode_name, mask_id) -> bool:
        if self._enterable_mask(mask_id, f'enter_{mode_name}_mode') is None:
            return False
        self._leave_active_mode()
        self.store.select(mask_id)
        self.mode = create_mode(mode_name, mask_id)
        self._logger.info(f"Entered {mode_name} mode on mask {mask_id}")
        return True

    def _exit_named(self, mode_name) -> bool:
        if self.mode is None or self.mode.name != mode_name:
            return log_rejected(self._logger, f'exit_{mode_name}', reason="mode not active")
        self._leave_active_mode()
        return True

    def _enterable_mask(self, mask_id, action):
        mask = self.store.get_mask(mask_id)
        if mask is None:
            log_rejected(self._logger, action, mask_id, "unknown mask")
            return None
        if mask.is_locked:
            log_rejected(self._logger, action, mask_id, "mask is locked")
            return None
        return mask

    def _leave_active_mode(self):
        if self.draft_builder.is_drafting:
            self.draft_builder.cancel()
        if self.mode is None:
            return
        if self.is_dragging:
            self.cancel_drag()
        if self.mode.drag is not None:
            self.mode.drag.reset()
        self._logger.info(f"Exited {self.mode.name} mode on mask {self.mode.mask_id}")
        self.mode = None

    def _on_store_event(self, event):
        if self.mode is None:
            return
        if event.kind == EVENT_MASK_DELETED and self.mode.targets(event.mask_id):
            self._drop_mode(f"Mask {event.mask_id} deleted")
        elif event.kind == EVENT_SNAPSHOT_RESTORED:
            if not self.store.has_mask(self.mode.mask_id):
                self._drop_mode(f"Mask {self.mode.mask_id} gone after restore")
            elif self.is_dragging:
                # The restored transform replaces the drag baseline
                self.mode.drag.finish()

    def _drop_mode(self, reason):
        self._logger.info(f"{reason}, leaving {self.mode.name} mode")
        if self.mode.drag is not None:
            self.mode.drag.reset()
        self.mode = None

    def _recorded(self, ok, description) -> bool:
        if ok and self.history is not None:
            self.history.commit(description)
        return ok

    # ========================================
    # Point Editing
    # ========================================

    def _check_point_editing(self, mask_id, action) -> bool:
        if self.is_point_editing(mask_id):
            return True
        return log_rejected(self._logger, action, mask_id, "point editing not active on this mask")

    def update_point(self, mask_id: str, index: int, point) -> bool:
        if not self._check_point_editing(mask_id, 'update_point'):
            return False
        return self._recorded(self.store.update_point(mask_id, index, point), "Edit point")

    def add_point(self, mask_id: str, index: int, point) -> bool:
        if not self._check_point_editing(mask_id, 'add_point'):
            return False
        return self._recorded(self.store.add_point(mask_id, index, point), "Add point")

    def remove_point(self, mask_id: str, index: int) -> bool:
        if not self._check_point_editing(mask_id, 'remove_point'):
            return False
        return self._recorded(self.store.remove_point(mask_id, index), "Remove point")

    def toggle_point_curve(self, mask_id: str, index: int) -> bool:
        if not self._check_point_editing(mask_id, 'toggle_point_curve'):
            return False
        return self._recorded(self.store.toggle_point_curve(mask_id, index), "Toggle curve")

    def update_bezier_handle(self, mask_id: str, index: int, handle: str, pos) -> bool:
        if not self._check_point_editing(mask_id, 'update_bezier_handle'):
            return False
        return self._recorded(self.store.update_bezier_handle(mask_id, index, handle, pos), "Edit handle")

    def vertex_at(self, client_x: float, client_y: float, view,
                  threshold: float = VERTEX_HIT_THRESHOLD) -> Optional[int]:
        """Index of the edited mask's vertex under the pointer

        Vertices are compared in screen space so the grab radius stays the
        same at every zoom level.
        """
        if not self.is_point_editing():
            return None
        mask = self.store.get_mask(self.mode.mask_id)
        if mask is None:
            return None
        screen_points = [view.to_screen(p) for p in mask.points]
        return find_closest_vertex(Vec2(client_x, client_y), screen_points, threshold)

    def insert_point_on_edge(self, image_point, threshold: float = EDGE_HIT_THRESHOLD) -> Optional[int]:
        """Split the edge nearest to an image-space point

        Returns:
            Index of the inserted point, or None if no edge is close enough
        """
        if not self.is_point_editing():
            return None
        mask_id = self.mode.mask_id
        mask = self.store.get_mask(mask_id)
        if mask is None:
            return None
        point = Vec2.from_any(image_point)
        edge = find_closest_edge(point, mask.points, threshold, closed=mask.is_closed)
        if edge is None:
            return None
        if not self._recorded(self.store.add_point(mask_id, edge + 1, point), "Add point"):
            return None
        return edge + 1

    # ========================================
    # Move / Rotate Drags
    # ========================================

    def start_move_drag(self, mask_id: str, start_pos) -> bool:
        return self._start_drag(MoveMode, mask_id, Vec2.from_any(start_pos))

    def update_move_drag(self, mask_id: str, delta) -> bool:
        return self._update_drag(MoveMode, mask_id, delta)

    def end_move_drag(self, mask_id: str) -> bool:
        return self._end_drag(MoveMode, mask_id)

    def start_rotate_drag(self, mask_id: str, start_angle: float) -> bool:
        return self._start_drag(RotateMode, mask_id, float(start_angle))

    def update_rotate_drag(self, mask_id: str, delta_angle: float) -> bool:
        return self._update_drag(RotateMode, mask_id, delta_angle)

    def end_rotate_drag(self, mask_id: str) -> bool:
        return self._end_drag(RotateMode, mask_id)

    def cancel_drag(self) -> bool:
        """Restore the baseline and go back to ARMED without committing"""
        if not isinstance(self.mode, DragMode) or not self.mode.drag.is_dragging:
            return False
        mode = self.mode
        mode.apply(self.store, mode.mask_id, mode.drag.baseline)
        mode.drag.finish()
        self._logger.debug(f"Cancelled {mode.name} drag on mask {mode.mask_id}")
        return True

    def _start_drag(self, mode_class, mask_id, start_value) -> bool:
        action = f'start_{mode_class.name}_drag'
        mode = self.mode
        if not isinstance(mode, mode_class) or not mode.targets(mask_id):
            return log_rejected(self._logger, action, mask_id, f"{mode_class.name} mode not active on this mask")
        if mode.drag.is_dragging:
            return log_rejected(self._logger, action, mask_id, "drag already in progress")
        mask = self._enterable_mask(mask_id, action)
        if mask is None:
            return False

        mode.drag.begin(start_value, mode.baseline_of(mask))
        self._logger.debug(f"Started {mode.name} drag on mask {mask_id} from {mode.drag.baseline}")
        return True

    def _update_drag(self, mode_class, mask_id, delta) -> bool:
        mode = self.mode
        if not isinstance(mode, mode_class) or not mode.drag.is_dragging_on(mask_id):
            return log_rejected(self._logger, f'update_{mode_class.name}_drag', mask_id, "no drag on this mask")
        return mode.apply(self.store, mask_id, mode.value_for(mode.drag.baseline, delta))

    def _end_drag(self, mode_class, mask_id) -> bool:
        mode = self.mode
        if not isinstance(mode, mode_class) or not mode.drag.is_dragging_on(mask_id):
            return log_rejected(self._logger, f'end_{mode_class.name}_drag', mask_id, "no drag on this mask")
        mode.drag.finish()
        self.store.touch_mask(mask_id)
        self._logger.debug(f"Ended {mode.name} drag on mask {mask_id}")
        return self._recorded(True, f"{mode.name.capitalize()} mask")
