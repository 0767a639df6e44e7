"""Drag session state for canvas pointer interaction.

A DragSession exists only between pointer-down and pointer-up. It replaces
loose start-position/start-transform attributes with one object the engine
owns and drops on release.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from models.transform import Vec2


class DragMode(Enum):
    MOVE = 'move'
    CROP = 'crop'


@dataclass(frozen=True)
class PointerEvent:
    """Host-neutral pointer event.

    x/y are host pixels (top-left origin). item_id is the item the host
    hit-tested under the pointer, if any.
    """
    x: float
    y: float
    item_id: Optional[str] = None


@dataclass
class DragSession:
    """Captured state of one drag gesture on one item."""
    item_id: str
    mode: DragMode
    # Move: pointer percent minus the item's top-left at press time
    offset: Vec2 = None
    # Crop: pointer percent and (crop_x, crop_y) at press time
    start_pointer: Vec2 = None
    start_crop: Tuple[float, float] = (0.0, 0.0)

    @classmethod
    def for_move(cls, item, pointer: Vec2) -> 'DragSession':
        return cls(item.id, DragMode.MOVE, offset=Vec2(pointer.x - item.x, pointer.y - item.y))

    @classmethod
    def for_crop(cls, item, pointer: Vec2) -> 'DragSession':
        return cls(item.id, DragMode.CROP, start_pointer=pointer,
                   start_crop=(item.crop_x, item.crop_y))

    @property
    def is_crop(self) -> bool:
        return self.mode is DragMode.CROP
