"""
Mask Geometry Editor - Interaction Modes

This package contains the pointer interaction state machines:
- modes.py: Mode classes (PointEditMode, MoveMode, RotateMode)
- drag_context.py: Drag phase state for move/rotate
- controller.py: InteractionModeController enforcing mutual exclusion
"""

from .drag_context import DragContext, DragPhase
from .modes import InteractionMode, PointEditMode, MoveMode, RotateMode, MODES, create_mode
from .controller import InteractionModeController

__all__ = [
    'DragContext', 'DragPhase',
    'InteractionMode', 'PointEditMode', 'MoveMode', 'RotateMode', 'MODES', 'create_mode',
    'InteractionModeController',
]
