"""Drag context dataclass for move/rotate modes.

One explicit phase instead of loose isDragging flags:

	(constructed) ARMED --begin--> DRAGGING --finish--> ARMED --reset--> IDLE

A context is created ARMED when its mode is entered.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class DragPhase(Enum):
	IDLE = 'idle'          # no mode entered
	ARMED = 'armed'        # mode entered, waiting for a drag
	DRAGGING = 'dragging'  # pointer down, baseline captured


@dataclass
class DragContext:
	"""Drag sub-state for one move/rotate mode.

	Updates are only honoured for the target mask while DRAGGING, so stale
	pointer events for another mask are dropped.
	"""
	target_mask_id: str
	phase: DragPhase = DragPhase.ARMED
	drag_start_value: Any = None  # pointer position (move) or angle (rotate)
	baseline: Any = None          # mask position (Vec2) or rotation at drag start

	@property
	def is_dragging(self):
		return self.phase is DragPhase.DRAGGING

	def is_dragging_on(self, mask_id):
		return self.phase is DragPhase.DRAGGING and self.target_mask_id == mask_id

	def begin(self, start_value, baseline):
		"""ARMED -> DRAGGING, capturing the baseline"""
		if self.phase is not DragPhase.ARMED:
			raise RuntimeError(f"Cannot begin drag from phase {self.phase.value}")
		self.drag_start_value = start_value
		self.baseline = baseline
		self.phase = DragPhase.DRAGGING

	def finish(self):
		"""DRAGGING -> ARMED, dropping the captured values"""
		self.drag_start_value = None
		self.baseline = None
		self.phase = DragPhase.ARMED

	def reset(self):
		"""Any phase -> IDLE (mode exited)"""
		self.finish()
		self.phase = DragPhase.IDLE
