"""
Scene Serialization Mixin

Plain-dict export/import of the scene contents. Resource handles (item
'src') are opaque to the model, so callers pass encode/decode callables
to turn them into something storable (see services.draft_service).
"""

from typing import Any, Callable, Dict, List, Optional

from ._internal.background import Background
from ._internal.item import Item


class SceneSerializationMixin:
    """Mixin providing dict export/import for Scene"""

    def items_to_dicts(self, encode_resource: Optional[Callable[[Any], Any]] = None) -> List[Dict]:
        """Export items in paint order

        Args:
            encode_resource: Applied to every non-None 'src'
        """
        result = []
        for item in self._items:
            data = item.to_dict()
            if encode_resource is not None and data.get('src') is not None:
                data['src'] = encode_resource(data['src'])
            result.append(data)
        return result

    def to_dict(self, encode_resource: Optional[Callable[[Any], Any]] = None) -> Dict:
        """Export the scene (format, background, items, selection)"""
        return {
            'format': self._format.id,
            'background': self._background.to_dict(),
            'items': self.items_to_dicts(encode_resource),
            'selected_id': self._selected_id,
        }

    def load_dict(self, data: Dict, decode_resource: Optional[Callable[[Any], Any]] = None):
        """Replace items, background and selection from an exported dict

        The format is fixed at construction and is not read back.

        Raises:
            ValueError: Invalid item data or duplicate ids
        """
        items = []
        seen = set()
        for entry in data.get('items', []):
            entry = dict(entry)
            item_id = entry.pop('id')
            kind = entry.pop('kind')
            if item_id in seen:
                raise ValueError(f"Duplicate item id '{item_id}' in scene data")
            seen.add(item_id)
            if decode_resource is not None and entry.get('src') is not None:
                entry['src'] = decode_resource(entry['src'])
            items.append(Item.create(kind, entry, item_id=item_id))

        background = data.get('background')
        self._items = items
        self._retrack_items()
        self._background = Background.from_dict(background) if background else Background.default()
        selected = data.get('selected_id')
        self._selected_id = selected if selected in seen else (items[-1].id if items else None)
        self._logger.debug(f"Loaded scene with {len(items)} items")
        self._notify('reset')
