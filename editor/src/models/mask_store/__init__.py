"""MaskStore model mixins package"""

from .point_mixin import MaskPointMixin
from .transform_mixin import MaskTransformMixin, transform_mask_points
from .management_mixin import MaskManagementMixin
from .group_mixin import MaskGroupMixin
from .query_mixin import MaskQueryMixin
from .serialization_mixin import MaskSerializationMixin
from .core import MaskStore, epoch_millis

__all__ = [
    'MaskStore',
    'epoch_millis',
    'transform_mask_points',
    'MaskPointMixin',
    'MaskTransformMixin',
    'MaskManagementMixin',
    'MaskGroupMixin',
    'MaskQueryMixin',
    'MaskSerializationMixin',
]
