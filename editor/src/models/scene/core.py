"""
Collage Editor - Scene Data Model

THE MODEL in the MVC architecture. Owns all collage data and is the sole
source of truth for it.

This class handles:
- Ordered item sequence (position = paint order, later = on top)
- Background descriptor (solid color or gradient)
- Selection (at most one item id)
- Read-only output format
- Item CRUD through whole-record replacement (ItemMixin)
- Query API (QueryMixin)
- Z-order operations (ZOrderMixin)
- Layout template application (LayoutMixin)
- Dict export/import for drafts (SerializationMixin)

The Scene model is INDEPENDENT of UI:
- No Qt imports
- No rendering logic
- No drag state (that's InteractionEngine)

Every mutation emits `changed(event, item_id)` so hosts can repaint.

Usage:
    scene = Scene()
    item_id = scene.add_item('image', {'x': 10, 'y': 10, 'label': 'Beach'})
    scene.update_item(item_id, {'x': 95})   # clamped to 100 - w
    scene.bring_to_front()
"""

import itertools
import logging
from typing import Dict, List, Optional

from constants import CANVAS_FORMATS, DEFAULT_FORMAT, STARTER_ITEMS, STARTER_SELECTION
from utils.events import EventHook

from ._internal.background import Background
from ._internal.item import Item
from .item_mixin import SceneItemMixin
from .layout_mixin import SceneLayoutMixin
from .query_mixin import SceneQueryMixin
from .serialization_mixin import SceneSerializationMixin
from .zorder_mixin import SceneZOrderMixin


class CanvasFormat:
    """Read-only output aspect configuration"""

    __slots__ = ('_id', '_title', '_width', '_height')

    def __init__(self, format_id: str):
        if format_id not in CANVAS_FORMATS:
            raise ValueError(f"Unknown format '{format_id}'. Valid: {sorted(CANVAS_FORMATS)}")
        fmt = CANVAS_FORMATS[format_id]
        self._id = format_id
        self._title = fmt['title']
        self._width = fmt['width']
        self._height = fmt['height']

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def width(self) -> int:
        """Output width in pixels"""
        return self._width

    @property
    def height(self) -> int:
        """Output height in pixels"""
        return self._height

    @property
    def aspect(self) -> float:
        """Height per width"""
        return self._height / self._width

    def __repr__(self) -> str:
        return f"CanvasFormat({self._id!r}, {self._width}x{self._height})"


class Scene(SceneItemMixin, SceneQueryMixin, SceneZOrderMixin, SceneLayoutMixin, SceneSerializationMixin):
    """Collage scene with full operation API

    Properties:
        format: Read-only CanvasFormat
        background: Background descriptor
        selected_id: Selected item id or None
        items: Tuple of Item records in paint order (copy of the sequence)
    """

    def __init__(self, format_id: str = DEFAULT_FORMAT):
        """Create an empty scene with the default white background"""
        self._logger = logging.getLogger('Scene')
        self._format = CanvasFormat(format_id)
        self._items: List[Item] = []
        self._background = Background.default()
        self._selected_id: Optional[str] = None
        # Per-insertion tokens: a re-used id gets a new token
        self._item_tokens: Dict[str, int] = {}
        self._token_counter = itertools.count(1)
        self.changed = EventHook('Scene.changed')
        self._logger.debug(f"Created new scene ({self._format.id})")

    @classmethod
    def starter(cls, format_id: str = DEFAULT_FORMAT) -> 'Scene':
        """Scene pre-populated with the starter collage shown on a new document"""
        scene = cls(format_id)
        scene.load_starter()
        return scene

    def load_starter(self):
        """Replace contents with the starter items"""
        self._items = []
        for data in STARTER_ITEMS:
            fields = {k: v for k, v in data.items() if k not in ('id', 'kind')}
            self._items.append(Item.create(data['kind'], fields, item_id=data['id']))
        self._retrack_items()
        self._background = Background.default()
        self._selected_id = STARTER_SELECTION
        self._notify('reset')

    def clear(self):
        """Remove all items and reset background and selection"""
        self._items = []
        self._background = Background.default()
        self._selected_id = None
        self._item_tokens = {}
        self._notify('reset')
        self._logger.debug("Cleared scene")

    # ========================================
    # Properties
    # ========================================

    @property
    def format(self) -> CanvasFormat:
        return self._format

    @property
    def background(self) -> Background:
        return self._background

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def items(self):
        """Snapshot of the item sequence in paint order"""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(tuple(self._items))

    # ========================================
    # Selection
    # ========================================

    def set_selection(self, item_id: Optional[str]):
        """Select an item, or clear selection with None

        Raises:
            ValueError: If item_id is not in the scene
        """
        if item_id is not None and self._index_of(item_id) is None:
            raise ValueError(f"Item with id '{item_id}' not found")
        if item_id == self._selected_id:
            return
        self._selected_id = item_id
        self._notify('selection', item_id)

    # ========================================
    # Background
    # ========================================

    def set_background(self, background: Background):
        """Replace the background descriptor"""
        if not isinstance(background, Background):
            background = Background.from_dict(background)
        self._background = background
        self._notify('background')
        self._logger.debug(f"Background set to {background.type} {background.value}")

    def set_background_color(self, value: str):
        self.set_background(Background.color(value))

    def set_background_gradient(self, value: str):
        self.set_background(Background.gradient(value))

    # ========================================
    # Internals
    # ========================================

    def _index_of(self, item_id: str) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    def _require_index(self, item_id: str) -> int:
        index = self._index_of(item_id)
        if index is None:
            raise ValueError(f"Item with id '{item_id}' not found")
        return index

    def _track(self, item_id: str):
        self._item_tokens[item_id] = next(self._token_counter)

    def _retrack_items(self):
        self._item_tokens = {}
        for item in self._items:
            self._track(item.id)

    def _notify(self, event: str, item_id: Optional[str] = None):
        self.changed.emit(event, item_id)

    def __repr__(self) -> str:
        return f"Scene({self._format.id}, {len(self._items)} items, selected={self._selected_id!r})"
