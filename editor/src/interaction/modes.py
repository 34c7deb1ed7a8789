"""Interaction modes - what the pointer does to the targeted mask."""

from models.transform import Vec2
from .drag_context import DragContext


class InteractionMode:
	"""Base class for interaction modes bound to one mask."""

	name = None

	def __init__(self, mask_id):
		self.mask_id = mask_id
		self.drag = None  # DragContext for modes that drag

	def targets(self, mask_id):
		return self.mask_id == mask_id


class PointEditMode(InteractionMode):
	"""Vertex/handle editing on a flattened mask.

	The transform the mask had before flattening is remembered for callers
	that want to show or restore it; exiting does not restore it.
	"""

	name = 'point_edit'

	def __init__(self, mask_id, original_position=None, original_rotation=0.0):
		super().__init__(mask_id)
		self.original_position = original_position or Vec2(0.0, 0.0)
		self.original_rotation = original_rotation


class DragMode(InteractionMode):
	"""Mode whose drag sets one transform value: baseline + delta."""

	def __init__(self, mask_id):
		super().__init__(mask_id)
		self.drag = DragContext(mask_id)

	def baseline_of(self, mask):
		raise NotImplementedError

	def value_for(self, baseline, delta):
		raise NotImplementedError

	def apply(self, store, mask_id, value):
		raise NotImplementedError


class MoveMode(DragMode):
	"""Translate the mask; deltas are image-space pixel offsets."""

	name = 'move'

	def baseline_of(self, mask):
		return Vec2(mask.position.x, mask.position.y)

	def value_for(self, baseline, delta):
		delta = Vec2.from_any(delta)
		return Vec2(baseline.x + delta.x, baseline.y + delta.y)

	def apply(self, store, mask_id, value):
		return store.set_position(mask_id, value.x, value.y)


class RotateMode(DragMode):
	"""Rotate the mask about its centroid; deltas are degrees, no wraparound."""

	name = 'rotate'

	def baseline_of(self, mask):
		return mask.rotation

	def value_for(self, baseline, delta):
		return baseline + float(delta)

	def apply(self, store, mask_id, value):
		return store.set_rotation(mask_id, value)


# Mode registry
MODES = {
	'point_edit': PointEditMode,
	'move': MoveMode,
	'rotate': RotateMode,
}


def create_mode(mode_name, mask_id):
	"""Factory function to create mode instances.

	Args:
		mode_name: 'point_edit', 'move', or 'rotate'
		mask_id: Mask the mode is bound to

	Returns:
		InteractionMode instance

	Raises:
		ValueError: If mode_name is unknown
	"""
	mode_class = MODES.get(mode_name)
	if mode_class is None:
		raise ValueError(f"Unknown interaction mode '{mode_name}'")
	return mode_class(mask_id)
