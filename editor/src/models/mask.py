"""
Mask Geometry Editor - Mask Data Model

Pure data, no interaction logic:
- CornerPoint / SmoothPoint: tagged point variants (a smooth point always
  carries both Bezier handles, a corner carries none)
- Mask: ordered points plus transform, management flags and timestamps
- MaskGroup: named grouping for the management panel
- Draft: the single in-flight polygon being authored

Usage:
    mask = Mask(id='m1', points=[CornerPoint(0, 0), CornerPoint(10, 0), CornerPoint(0, 10)])
    data = mask.to_dict()
    same = Mask.from_dict(data)
"""

import copy
import uuid as uuid_module
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from models.transform import Vec2
from constants import (
    MASK_TYPE_AREA, MASK_TYPE_LINEAR, MASK_TYPES,
    MIN_AREA_POINTS, MIN_LINEAR_POINTS,
    POINT_KIND_CORNER, POINT_KIND_SMOOTH,
    DEFAULT_POSITION_X, DEFAULT_POSITION_Y, DEFAULT_ROTATION,
    DEFAULT_GROUP_COLOR,
)


# ========================================
# Points
# ========================================

@dataclass(frozen=True)
class CornerPoint:
    """Sharp vertex in image-space pixels."""
    x: float
    y: float

    @property
    def kind(self) -> str:
        return POINT_KIND_CORNER

    def moved_to(self, x, y) -> 'CornerPoint':
        return CornerPoint(x, y)

    def to_dict(self) -> Dict[str, Any]:
        return {'x': self.x, 'y': self.y, 'kind': POINT_KIND_CORNER}


@dataclass(frozen=True)
class SmoothPoint:
    """Curved vertex with absolute image-space Bezier handles.

    h1 is the incoming control (used by the segment ending here),
    h2 the outgoing control (used by the segment starting here).
    """
    x: float
    y: float
    h1: Vec2
    h2: Vec2

    @property
    def kind(self) -> str:
        return POINT_KIND_SMOOTH

    def moved_to(self, x, y) -> 'SmoothPoint':
        """Move the vertex, dragging both handles rigidly with it."""
        dx = x - self.x
        dy = y - self.y
        return SmoothPoint(x, y,
                           Vec2(self.h1.x + dx, self.h1.y + dy),
                           Vec2(self.h2.x + dx, self.h2.y + dy))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.x, 'y': self.y, 'kind': POINT_KIND_SMOOTH,
            'h1': self.h1.to_dict(), 'h2': self.h2.to_dict(),
        }


MaskPoint = Union[CornerPoint, SmoothPoint]


def point_from_dict(data) -> MaskPoint:
    """Build a point from its dict form.

    Accepts the loose legacy shape {x, y, kind?, h1?, h2?}. A 'smooth' entry
    missing either handle degrades to a corner rather than a half-set point.
    Existing point objects are returned unchanged.
    """
    if isinstance(data, (CornerPoint, SmoothPoint)):
        return data
    if isinstance(data, Vec2):
        return CornerPoint(data.x, data.y)
    x = float(data.get('x', 0.0))
    y = float(data.get('y', 0.0))
    h1 = data.get('h1')
    h2 = data.get('h2')
    if data.get('kind') == POINT_KIND_SMOOTH and h1 is not None and h2 is not None:
        return SmoothPoint(x, y, Vec2.from_any(h1), Vec2.from_any(h2))
    return CornerPoint(x, y)


def min_points_for(mask_type: str) -> int:
    """Point-count floor for a mask type."""
    return MIN_LINEAR_POINTS if mask_type == MASK_TYPE_LINEAR else MIN_AREA_POINTS


# ========================================
# Mask
# ========================================

@dataclass
class Mask:
    """User-authored polygon (area) or polyline (linear) over the photo.

    Points are stored in image space; position and rotation form a rigid
    transform applied on top (rotation about the point-set centroid first,
    then translation).
    """
    id: str
    points: List[MaskPoint]
    type: str = MASK_TYPE_AREA
    name: str = ''
    position: Vec2 = field(default_factory=lambda: Vec2(DEFAULT_POSITION_X, DEFAULT_POSITION_Y))
    rotation: float = DEFAULT_ROTATION
    is_locked: bool = False
    is_visible: bool = True
    z_index: int = 0
    material_id: Optional[str] = None
    material_settings: Dict[str, Any] = field(default_factory=dict)
    group_id: Optional[str] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    created_at: int = 0
    last_modified: int = 0

    def __post_init__(self):
        if self.type not in MASK_TYPES:
            raise ValueError(f"Unknown mask type '{self.type}'")
        self.points = [point_from_dict(p) for p in self.points]
        self.position = Vec2.from_any(self.position)
        self.rotation = float(self.rotation)

    @property
    def is_closed(self) -> bool:
        return self.type == MASK_TYPE_AREA

    @property
    def min_points(self) -> int:
        return min_points_for(self.type)

    @property
    def has_identity_transform(self) -> bool:
        return self.position.x == 0 and self.position.y == 0 and self.rotation == 0

    def copy(self) -> 'Mask':
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Export to a plain dictionary (stable key set, deep copies)."""
        return {
            'id': self.id,
            'points': [p.to_dict() for p in self.points],
            'type': self.type,
            'name': self.name,
            'position': self.position.to_dict(),
            'rotation': self.rotation,
            'is_locked': self.is_locked,
            'is_visible': self.is_visible,
            'z_index': self.z_index,
            'material_id': self.material_id,
            'material_settings': copy.deepcopy(self.material_settings),
            'group_id': self.group_id,
            'color': self.color,
            'notes': self.notes,
            'created_at': self.created_at,
            'last_modified': self.last_modified,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Mask':
        position = data.get('position') or {'x': DEFAULT_POSITION_X, 'y': DEFAULT_POSITION_Y}
        return cls(
            id=data['id'],
            points=[point_from_dict(p) for p in data.get('points', [])],
            type=data.get('type', MASK_TYPE_AREA),
            name=data.get('name', ''),
            position=Vec2.from_any(position),
            rotation=float(data.get('rotation', DEFAULT_ROTATION)),
            is_locked=bool(data.get('is_locked', False)),
            is_visible=bool(data.get('is_visible', True)),
            z_index=int(data.get('z_index', 0)),
            material_id=data.get('material_id'),
            material_settings=copy.deepcopy(data.get('material_settings') or {}),
            group_id=data.get('group_id'),
            color=data.get('color'),
            notes=data.get('notes'),
            created_at=int(data.get('created_at', 0)),
            last_modified=int(data.get('last_modified', 0)),
        )


# ========================================
# Groups
# ========================================

@dataclass
class MaskGroup:
    """Logical folder for masks in the management panel."""
    id: str
    name: str
    color: str = DEFAULT_GROUP_COLOR
    is_collapsed: bool = False
    order: int = 0
    created_at: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id, 'name': self.name, 'color': self.color,
            'is_collapsed': self.is_collapsed, 'order': self.order,
            'created_at': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MaskGroup':
        return cls(**{k: data[k] for k in ('id', 'name', 'color', 'is_collapsed', 'order', 'created_at') if k in data})


# ========================================
# Draft
# ========================================

@dataclass
class Draft:
    """Transient polygon under construction. Never persisted."""
    id: str = field(default_factory=lambda: str(uuid_module.uuid4()))
    points: List[Vec2] = field(default_factory=list)
    mode: str = MASK_TYPE_AREA

    @property
    def last_point(self) -> Optional[Vec2]:
        return self.points[-1] if self.points else None
