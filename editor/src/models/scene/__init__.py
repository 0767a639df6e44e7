"""Scene model mixins package"""

from .query_mixin import SceneQueryMixin
from .item_mixin import SceneItemMixin
from .zorder_mixin import SceneZOrderMixin, REORDER_OPS, REORDER_FRONT, REORDER_BACK, REORDER_CYCLE
from .layout_mixin import SceneLayoutMixin
from .serialization_mixin import SceneSerializationMixin
from .core import Scene, CanvasFormat
from ._internal.item import Item
from ._internal.background import Background, parse_gradient

__all__ = [
    'Scene',
    'CanvasFormat',
    'Item',
    'Background',
    'parse_gradient',
    'REORDER_OPS',
    'REORDER_FRONT',
    'REORDER_BACK',
    'REORDER_CYCLE',
    'SceneQueryMixin',
    'SceneItemMixin',
    'SceneZOrderMixin',
    'SceneLayoutMixin',
    'SceneSerializationMixin',
]
