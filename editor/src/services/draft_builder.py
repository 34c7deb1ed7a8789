"""
Freehand/polygon drafting

Turns a stream of pointer events into a new mask:

    Idle --begin--> Drafting --finalize (>=3 pts)--> Idle (mask created)
                        |--cancel--> Idle
                        |--append / pop (stay Drafting)

Only one draft exists at a time. Points are filtered in image space so a
jittery pointer does not flood the outline with near-duplicates.
"""

import logging
from typing import Optional

from models.mask import Draft, Mask
from models.transform import Vec2
from utils.geometry import distance, simplify_path
from utils.logger import log_rejected
from constants import (
    MASK_TYPE_AREA, MASK_TYPES, DRAFT_MIN_POINT_DISTANCE, DRAFT_MIN_FINALIZE_POINTS
)

STATE_IDLE = 'idle'
STATE_DRAFTING = 'drafting'


class DraftBuilder:
    """Builds one Draft at a time and commits it to a MaskStore"""

    def __init__(self, store, min_distance: float = DRAFT_MIN_POINT_DISTANCE):
        """
        Args:
            store: MaskStore receiving finalized masks
            min_distance: Minimum image-space spacing between points
        """
        self._logger = logging.getLogger('DraftBuilder')
        self.store = store
        self.min_distance = min_distance
        self.draft: Optional[Draft] = None

    @property
    def state(self) -> str:
        return STATE_DRAFTING if self.draft is not None else STATE_IDLE

    @property
    def is_drafting(self) -> bool:
        return self.draft is not None

    @property
    def points(self):
        """Copy of the draft points (empty when idle)"""
        return list(self.draft.points) if self.draft else []

    def begin(self, mode: str = MASK_TYPE_AREA) -> Draft:
        """Start a new draft, discarding any unfinished one"""
        if mode not in MASK_TYPES:
            raise ValueError(f"Unknown draft mode '{mode}'")
        if self.draft is not None:
            self._logger.debug(f"Discarding unfinished draft {self.draft.id} ({len(self.draft.points)} points)")
        self.draft = Draft(mode=mode)
        self._logger.debug(f"Began {mode} draft {self.draft.id}")
        return self.draft

    def append(self, client_x: float, client_y: float, view) -> bool:
        """Map a pointer position through the view and append it

        Args:
            client_x, client_y: Pointer position in client pixels
            view: ViewState for the current frame

        Returns:
            True if the point was kept
        """
        if self.draft is None:
            return log_rejected(self._logger, 'append', reason="no active draft")
        return self.append_image_point(view.to_image(client_x, client_y))

    def append_image_point(self, point) -> bool:
        """Append an image-space point unless it is too close to the last one"""
        if self.draft is None:
            return log_rejected(self._logger, 'append', reason="no active draft")

        point = Vec2.from_any(point)
        last = self.draft.last_point
        if last is not None and distance(last, point) <= self.min_distance:
            return False
        self.draft.points.append(point)
        return True

    def pop(self) -> bool:
        """Remove the last point; a single remaining point is kept"""
        if self.draft is None or len(self.draft.points) <= 1:
            return log_rejected(self._logger, 'pop', reason="nothing to remove")
        self.draft.points.pop()
        return True

    def cancel(self) -> bool:
        if self.draft is None:
            return False
        self._logger.debug(f"Cancelled draft {self.draft.id}")
        self.draft = None
        return True

    def finalize(self, simplify_tolerance: Optional[float] = None) -> Optional[Mask]:
        """Commit the draft as a new mask

        The mask gets the draft id, an identity transform and the next draw
        order; it is selected and a mask_created event is emitted. With fewer
        than 3 points nothing happens and the draft stays open.

        Args:
            simplify_tolerance: Run Douglas-Peucker first (pixels). Skipped if
                it would leave fewer than 3 points.

        Returns:
            The new Mask, or None if rejected
        """
        draft = self.draft
        if draft is None:
            log_rejected(self._logger, 'finalize', reason="no active draft")
            return None
        if len(draft.points) < DRAFT_MIN_FINALIZE_POINTS:
            log_rejected(self._logger, 'finalize', reason=f"only {len(draft.points)} points")
            return None

        points = draft.points
        if simplify_tolerance:
            simplified = simplify_path(points, simplify_tolerance)
            if len(simplified) >= DRAFT_MIN_FINALIZE_POINTS:
                self._logger.debug(f"Simplified draft from {len(points)} to {len(simplified)} points")
                points = simplified

        mask = self.store.create_mask(points, draft.mode, mask_id=draft.id)
        if mask is None:
            return None

        self.draft = None
        return mask
