"""
Collage Editor - Item Data Model

An Item is one positioned visual element on the canvas (image or text).

Items are immutable records: the Scene replaces a whole Item on every
write by merging a patch onto the current fields (see Item.merged). The
interaction layer only ever sees these read-only records, never the
Scene's internal list.

This is part of the MODEL layer - pure data, no UI logic.

Usage:
    item = Item.create('image', {'x': 10, 'label': 'Beach'}, item_id='img-1')
    moved = item.merged({'x': 20})
    assert item.x == 10 and moved.x == 20
"""

import copy
from typing import Any, Dict, Iterable, Optional

from constants import (
    KIND_IMAGE, KIND_TEXT, ITEM_KINDS,
    COMMON_DEFAULTS, IMAGE_DEFAULTS, TEXT_DEFAULTS,
    FILTER_IDS, TEXT_ALIGNMENTS,
)
from models.color import Color
from models.transform import Rect
from utils.clamp import enforce_invariants

# Fields that identify an item and can never be patched
IDENTITY_FIELDS = frozenset(('id', 'kind'))

FLOAT_FIELDS = frozenset((
    'x', 'y', 'w', 'h', 'scale', 'rotation', 'radius',
    'crop_x', 'crop_y', 'zoom', 'background_opacity',
))
INT_FIELDS = frozenset(('size', 'border_width', 'padding'))
BOOL_FIELDS = frozenset(('locked', 'auto_size'))
STR_FIELDS = frozenset(('label', 'text', 'font'))
COLOR_FIELDS = frozenset(('color', 'background_color', 'border_color'))


def fields_for_kind(kind: str) -> frozenset:
    """All patchable field names for an item kind"""
    if kind == KIND_IMAGE:
        return frozenset(COMMON_DEFAULTS) | frozenset(IMAGE_DEFAULTS)
    if kind == KIND_TEXT:
        return frozenset(COMMON_DEFAULTS) | frozenset(TEXT_DEFAULTS)
    raise ValueError(f"Unknown item kind '{kind}'. Valid: {list(ITEM_KINDS)}")


def _coerce(name: str, value: Any) -> Any:
    """Normalize a single field value, raising ValueError on bad input"""
    if name in FLOAT_FIELDS:
        return float(value)
    if name in INT_FIELDS:
        return int(value)
    if name in BOOL_FIELDS:
        return bool(value)
    if name in STR_FIELDS:
        return str(value)
    if name in COLOR_FIELDS:
        return Color.parse(value).to_hex()
    if name == 'filter':
        if value not in FILTER_IDS:
            raise ValueError(f"Unknown filter '{value}'. Valid: {list(FILTER_IDS)}")
        return value
    if name == 'align':
        if value not in TEXT_ALIGNMENTS:
            raise ValueError(f"Unknown alignment '{value}'. Valid: {list(TEXT_ALIGNMENTS)}")
        return value
    # 'src' is an opaque resource handle
    return value


class Item:
    """Read-only record for one canvas item.

    Common Properties:
        id, kind, x, y, w, h (percent), scale, rotation (degrees),
        radius (corner radius, px), locked

    Image Properties:
        src (opaque resource handle), label, crop_x, crop_y, zoom,
        filter, auto_size

    Text Properties:
        text, font, size, color, background_color, background_opacity,
        border_width, border_color, padding, align
    """

    __slots__ = ('_data',)

    def __init__(self, data: Dict[str, Any]):
        """Wrap an already validated field dict. Use Item.create() for new items."""
        self._data = data

    # ========================================
    # Construction
    # ========================================

    @classmethod
    def create(cls, kind: str, fields: Optional[Dict[str, Any]] = None, item_id: str = None) -> 'Item':
        """Create a new item from defaults plus the given fields.

        Args:
            kind: 'image' or 'text'
            fields: Initial field values (validated and clamped)
            item_id: Stable identifier

        Raises:
            ValueError: Unknown kind, unknown field, or invalid value
        """
        allowed = fields_for_kind(kind)
        data = dict(COMMON_DEFAULTS)
        data.update(IMAGE_DEFAULTS if kind == KIND_IMAGE else TEXT_DEFAULTS)

        fields = dict(fields or {})
        fields.pop('kind', None)
        fields.pop('id', None)
        cls._check_names(fields, allowed, kind)

        for name, value in fields.items():
            data[name] = _coerce(name, value)

        data = enforce_invariants(data, data.keys())
        data['id'] = item_id
        data['kind'] = kind
        return cls(data)

    @staticmethod
    def _check_names(patch: Dict[str, Any], allowed: Iterable[str], kind: str):
        unknown = set(patch) - set(allowed)
        if unknown:
            raise ValueError(f"Unknown field(s) for {kind} item: {sorted(unknown)}")

    def merged(self, patch: Dict[str, Any], enforce_position: bool = True) -> 'Item':
        """Return a new Item with the patch merged in and invariants enforced.

        Args:
            patch: Field values to change
            enforce_position: Pass False to keep the x/y anchor as given

        Raises:
            ValueError: If the patch touches id/kind or unknown fields
        """
        forbidden = IDENTITY_FIELDS & set(patch)
        if forbidden:
            raise ValueError(f"Cannot change item identity fields: {sorted(forbidden)}")
        self._check_names(patch, fields_for_kind(self.kind), self.kind)

        data = dict(self._data)
        for name, value in patch.items():
            data[name] = _coerce(name, value)

        data = enforce_invariants(data, patch.keys(), enforce_position=enforce_position)
        return Item(data)

    # ========================================
    # Identity
    # ========================================

    @property
    def id(self) -> str:
        return self._data['id']

    @property
    def kind(self) -> str:
        return self._data['kind']

    @property
    def is_image(self) -> bool:
        return self._data['kind'] == KIND_IMAGE

    @property
    def is_text(self) -> bool:
        return self._data['kind'] == KIND_TEXT

    # ========================================
    # Geometry and transform
    # ========================================

    @property
    def x(self) -> float:
        return self._data['x']

    @property
    def y(self) -> float:
        return self._data['y']

    @property
    def w(self) -> float:
        return self._data['w']

    @property
    def h(self) -> float:
        return self._data['h']

    @property
    def geometry(self) -> Rect:
        """Logical box used for clamping and hit testing"""
        return Rect(self._data['x'], self._data['y'], self._data['w'], self._data['h'])

    @property
    def scale(self) -> float:
        return self._data['scale']

    @property
    def rotation(self) -> float:
        return self._data['rotation']

    @property
    def radius(self) -> float:
        return self._data['radius']

    @property
    def locked(self) -> bool:
        return self._data['locked']

    # ========================================
    # Kind-specific fields
    # ========================================

    def get(self, name: str, default: Any = None) -> Any:
        """Generic field access (returns default for fields of the other kind)"""
        return self._data.get(name, default)

    @property
    def src(self):
        return self._data.get('src')

    @property
    def label(self) -> str:
        return self._data.get('label', '')

    @property
    def crop_x(self) -> float:
        return self._data.get('crop_x', 0.0)

    @property
    def crop_y(self) -> float:
        return self._data.get('crop_y', 0.0)

    @property
    def zoom(self) -> float:
        return self._data.get('zoom', 1.0)

    @property
    def filter(self) -> str:
        return self._data.get('filter', 'none')

    @property
    def auto_size(self) -> bool:
        return self._data.get('auto_size', False)

    @property
    def text(self) -> str:
        return self._data.get('text', '')

    # ========================================
    # Export
    # ========================================

    def to_dict(self) -> Dict[str, Any]:
        """Shallow copy of all fields (the src handle is shared, not copied)"""
        return copy.copy(self._data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Item):
            return False
        return self._data == other._data

    def __hash__(self):
        return hash(self._data['id'])

    def __repr__(self) -> str:
        return (f"Item({self.kind} {self.id!r} x={self.x:.1f} y={self.y:.1f} "
                f"w={self.w:.1f} h={self.h:.1f})")
