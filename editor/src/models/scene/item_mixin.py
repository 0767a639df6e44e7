"""
Scene Item Management Mixin

This mixin provides item CRUD for the Scene model. Every write replaces the
whole Item record (functional update); records are never mutated in place.

Methods:
    - add_item
    - update_item
    - delete_item
    - generate_item_id
"""

import uuid as uuid_module
from typing import Any, Dict, Optional

from constants import ITEM_ID_PREFIX, ITEM_KINDS

from ._internal.item import Item


class SceneItemMixin:
    """Mixin providing item management operations for Scene

    This mixin assumes the parent class has:
        - self._items: List[Item]
        - self._selected_id: Optional[str]
        - self._logger: logging.Logger instance
        - self._index_of / self._require_index / self._notify
    """

    def generate_item_id(self, kind: str) -> str:
        """Fresh id for a new item, e.g. 'img-3f2a9c41d0e2'"""
        if kind not in ITEM_KINDS:
            raise ValueError(f"Unknown item kind '{kind}'. Valid: {list(ITEM_KINDS)}")
        while True:
            item_id = f"{ITEM_ID_PREFIX[kind]}-{uuid_module.uuid4().hex[:12]}"
            if self._index_of(item_id) is None:
                return item_id

    def add_item(self, kind: str, fields: Optional[Dict[str, Any]] = None,
                 item_id: Optional[str] = None, select: bool = True) -> str:
        """Append a new item on top of the paint order

        Args:
            kind: 'image' or 'text'
            fields: Initial field values (clamped to the item invariants)
            item_id: Explicit id (drafts, starter scene); generated if None
            select: Make the new item the selection

        Returns:
            Id of the new item

        Raises:
            ValueError: Unknown kind/field, or item_id already in use
        """
        if item_id is None:
            item_id = self.generate_item_id(kind)
        elif self._index_of(item_id) is not None:
            raise ValueError(f"Item id '{item_id}' is already in use")

        item = Item.create(kind, fields, item_id=item_id)
        self._items.append(item)
        self._track(item_id)
        self._logger.debug(f"Added {kind} item: {item_id}")
        self._notify('added', item_id)

        if select:
            self.set_selection(item_id)
        return item_id

    def update_item(self, item_id: str, patch: Dict[str, Any], enforce_position: bool = True) -> Item:
        """Merge a patch onto an item and replace the record

        Args:
            item_id: Target item id
            patch: Field values to change
            enforce_position: When False the x/y anchor is not re-clamped

        Returns:
            The new Item record

        Raises:
            ValueError: If item_id is not found or the patch is invalid
        """
        index = self._require_index(item_id)
        if not patch:
            return self._items[index]
        updated = self._items[index].merged(patch, enforce_position=enforce_position)
        self._items[index] = updated
        self._notify('updated', item_id)
        return updated

    def delete_item(self, item_id: str):
        """Remove an item

        If the item was selected, selection moves to the last remaining
        item, or clears when the scene is empty.

        Raises:
            ValueError: If item_id is not found
        """
        index = self._require_index(item_id)
        del self._items[index]
        self._item_tokens.pop(item_id, None)
        self._logger.debug(f"Deleted item: {item_id}")
        self._notify('deleted', item_id)

        if self._selected_id == item_id:
            self.set_selection(self._items[-1].id if self._items else None)
