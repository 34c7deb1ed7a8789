"""
Mask Geometry Editor - Data Models

This module contains the data model classes for masks, groups and quotes.
This is the MODEL in MVC architecture.

Public API: records are re-exported here; import MaskStore from models.mask_store
(it pulls in utils.geometry, which itself depends on models.transform).
"""

from .transform import Vec2, Camera, ImageFit, Viewport, ViewState
from .mask import CornerPoint, SmoothPoint, Mask, MaskGroup, Draft, point_from_dict
from .quote import Quote, QuoteItem, QuoteSettings
from .events import MaskEvent

__all__ = [
    'Vec2', 'Camera', 'ImageFit', 'Viewport', 'ViewState',
    'CornerPoint', 'SmoothPoint', 'Mask', 'MaskGroup', 'Draft', 'point_from_dict',
    'Quote', 'QuoteItem', 'QuoteSettings',
    'MaskEvent',
]
