"""Background removal for image items.

The removal itself is an external collaborator (`async remove(handle) ->
handle`). This module only decides when a request may run and applies the
result to whatever the item looks like when it comes back.
"""

import logging
from typing import Set, Tuple

from utils.events import EventHook

logger = logging.getLogger('BackgroundRemover')


class BackgroundRemover:
    """Gates background-removal requests per item

    Args:
        scene: Target Scene
        service: Object with `async remove(handle) -> handle`
    """

    def __init__(self, scene, service):
        self.scene = scene
        self.service = service
        # Keyed by (item_id, token) so a re-created item is not blocked
        self._in_flight: Set[Tuple[str, int]] = set()
        # Fired with (item_id, busy) when a request starts or finishes
        self.busy_changed = EventHook('BackgroundRemover.busy_changed')

    def is_busy(self, item_id: str) -> bool:
        return (item_id, self.scene.item_token(item_id)) in self._in_flight

    def can_remove(self, item_id: str) -> bool:
        """True for an image item with a resource and no request in flight"""
        item = self.scene.find_item(item_id)
        return (item is not None and item.is_image and item.src is not None
                and not self.is_busy(item_id))

    async def remove_background(self, item_id: str) -> bool:
        """Run background removal on an item's resource

        On success the item gets the new resource with crop and zoom reset
        and auto-size off. If the item was deleted meanwhile the result is
        dropped, also when the id now belongs to a re-created item.
        Failures are logged and leave the item untouched.

        Returns:
            True if the item was updated
        """
        if not self.can_remove(item_id):
            return False

        handle = self.scene.get_item(item_id).src
        key = (item_id, self.scene.item_token(item_id))
        self._in_flight.add(key)
        self.busy_changed.emit(item_id, True)
        try:
            result = await self.service.remove(handle)
        except Exception as e:
            logger.error(f"Background removal failed for {item_id}: {e}")
            return False
        finally:
            self._in_flight.discard(key)
            self.busy_changed.emit(item_id, False)

        if self.scene.item_token(item_id) != key[1]:
            logger.debug(f"Background removal finished for deleted item {item_id}, discarding")
            return False

        self.scene.update_item(item_id, {
            'src': result,
            'auto_size': False,
            'crop_x': 0.0,
            'crop_y': 0.0,
            'zoom': 1.0,
        })
        logger.info(f"Removed background of {item_id}")
        return True
