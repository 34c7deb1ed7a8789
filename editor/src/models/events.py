"""Typed events emitted by the mask store.

Delivery (toasts, activity feed, usage tracking) belongs to whoever listens.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class MaskEvent:
    kind: str            # constants.EVENT_*
    mask_id: Optional[str]
    message: str
    severity: str        # constants.SEVERITY_*
    data: Dict[str, Any] = field(default_factory=dict)
