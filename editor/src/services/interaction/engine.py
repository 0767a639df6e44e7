"""
Collage Editor - Interaction Engine

Pointer state machine driving Move and Crop drags on the Scene.

States:
    Idle -> Dragging(Move) | Dragging(Crop) -> Idle

The engine holds no geometry of its own. The canvas rectangle is asked
from the host's rect provider on every event (the canvas may be resized
between events), and every write goes through Scene.update_item, which
replaces the whole item record.
"""

import logging
from typing import Callable, Optional

from models.transform import CanvasRect
from utils.clamp import clamp_position, clamp_crop
from utils.coordinate_transforms import pointer_to_percent

from .drag_session import DragMode, DragSession, PointerEvent


class InteractionEngine:
    """Selection and drag handling for one Scene

    Args:
        scene: Scene to mutate
        rect_provider: Callable returning the current CanvasRect
    """

    def __init__(self, scene, rect_provider: Callable[[], CanvasRect]):
        self._logger = logging.getLogger('InteractionEngine')
        self.scene = scene
        self._rect_provider = rect_provider
        self._session: Optional[DragSession] = None
        self._crop_mode = False

    # ========================================
    # State
    # ========================================

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    @property
    def is_dragging(self) -> bool:
        return self._session is not None

    @property
    def crop_mode(self) -> bool:
        return self._crop_mode

    def set_crop_mode(self, enabled: bool):
        """Toggle the global crop flag. An active session keeps its mode."""
        self._crop_mode = bool(enabled)
        self._logger.debug(f"Crop mode {'on' if self._crop_mode else 'off'}")

    def set_rect_provider(self, rect_provider: Callable[[], CanvasRect]):
        self._rect_provider = rect_provider

    def _measure(self) -> Optional[CanvasRect]:
        rect = self._rect_provider()
        if rect is None or not rect.is_measured:
            return None
        return rect

    # ========================================
    # Pointer events
    # ========================================

    def pointer_down(self, event: PointerEvent) -> bool:
        """Hit-test the topmost item under the pointer and begin a drag on it

        Locked items are hit too, so a press on a locked item lands on it
        and goes nowhere instead of reaching the item below.

        Returns:
            True if a drag session started
        """
        rect = self._measure()
        if rect is None:
            return False
        hit = self.scene.get_item_at(pointer_to_percent(event.x, event.y, rect))
        if hit is None:
            return False
        return self.begin_drag(PointerEvent(event.x, event.y, hit.id))

    def begin_drag(self, event: PointerEvent) -> bool:
        """Press on event.item_id

        Unmeasured canvas, unknown id and locked items are no-ops (selection
        untouched). Otherwise the item becomes the selection and a Crop
        session starts when crop mode is on and the item is an image, a Move
        session otherwise.

        Returns:
            True if a drag session started (host should capture the pointer)
        """
        if self._session is not None:
            self.end_drag()

        rect = self._measure()
        if rect is None:
            self._logger.debug("Ignoring press: canvas not measured")
            return False

        item = self.scene.find_item(event.item_id)
        if item is None or item.locked:
            return False

        self.scene.set_selection(item.id)
        pointer = pointer_to_percent(event.x, event.y, rect)
        if self._crop_mode and item.is_image:
            self._session = DragSession.for_crop(item, pointer)
        else:
            self._session = DragSession.for_move(item, pointer)
        self._logger.debug(f"Begin {self._session.mode.value} drag on {item.id}")
        return True

    def update_drag(self, event: PointerEvent) -> bool:
        """Pointer move during a drag

        Writes the new clamped position (Move) or crop offset (Crop) to the
        dragged item only. Ends the session silently when the item has been
        deleted or locked since the press.

        Returns:
            True if the item was written
        """
        session = self._session
        if session is None:
            return False

        item = self.scene.find_item(session.item_id)
        if item is None or item.locked:
            self._logger.debug(f"Drag target {session.item_id} gone, ending session")
            self._session = None
            return False

        rect = self._measure()
        if rect is None:
            return False
        pointer = pointer_to_percent(event.x, event.y, rect)

        if session.mode is DragMode.CROP:
            delta = pointer - session.start_pointer
            crop_x, crop_y = clamp_crop(session.start_crop[0] + delta.x,
                                        session.start_crop[1] + delta.y)
            self.scene.update_item(item.id, {'crop_x': crop_x, 'crop_y': crop_y})
        else:
            x, y = clamp_position(pointer.x - session.offset.x,
                                  pointer.y - session.offset.y,
                                  item.w, item.h)
            self.scene.update_item(item.id, {'x': x, 'y': y})
        return True

    def end_drag(self, event: Optional[PointerEvent] = None) -> bool:
        """Pointer up or leave. Nothing is committed here; every move was already written.

        Returns:
            True if a session was active (host should release the pointer)
        """
        if self._session is None:
            return False
        self._logger.debug(f"End {self._session.mode.value} drag on {self._session.item_id}")
        self._session = None
        return True
