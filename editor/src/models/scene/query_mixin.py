"""
Query Mixin for Scene Model

Provides read-only query methods for UI components and services.

All query methods follow these conventions:
- Prefix with get_ for retrieving data
- get_item raises ValueError if the id is not found; find_item returns None
- Return immutable records or copies (no direct access to internal state)
"""

from typing import List, Optional

from models.transform import Vec2
from ._internal.item import Item


class SceneQueryMixin:
    """Mixin providing query API for Scene model

    This mixin assumes the class has:
    - self._items: List[Item]
    - self._selected_id: Optional[str]
    - self._item_tokens: Dict[str, int]
    """

    def has_item(self, item_id: str) -> bool:
        return self._index_of(item_id) is not None

    def find_item(self, item_id: Optional[str]) -> Optional[Item]:
        """Current record for an id, or None (used by async completions)"""
        if item_id is None:
            return None
        index = self._index_of(item_id)
        return self._items[index] if index is not None else None

    def item_token(self, item_id: Optional[str]) -> Optional[int]:
        """Token of the item currently holding this id, or None

        Every insertion gets a new token, so an id that was deleted and
        reused (new collage, reloaded draft) no longer matches a token
        taken earlier. Updates keep the token.
        """
        return self._item_tokens.get(item_id)

    def get_item(self, item_id: str) -> Item:
        """Current record for an id

        Raises:
            ValueError: If item_id is not found
        """
        return self._items[self._require_index(item_id)]

    def get_selected_item(self) -> Optional[Item]:
        return self.find_item(self._selected_id)

    def get_item_index(self, item_id: str) -> int:
        """Paint-order position (0 = bottom)"""
        return self._require_index(item_id)

    def get_all_item_ids(self) -> List[str]:
        """All ids in paint order (bottom to top)"""
        return [item.id for item in self._items]

    def get_image_items(self) -> List[Item]:
        """Image items in paint order"""
        return [item for item in self._items if item.is_image]

    def get_text_items(self) -> List[Item]:
        return [item for item in self._items if item.is_text]

    def get_image_count(self) -> int:
        return sum(1 for item in self._items if item.is_image)

    def get_item_at(self, point: Vec2) -> Optional[Item]:
        """Topmost item whose logical box contains a percent-space point

        Locked items are returned too: they absorb the press.
        """
        for item in reversed(self._items):
            if item.geometry.contains(point):
                return item
        return None
