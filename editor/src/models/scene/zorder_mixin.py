"""
Scene Z-Order Mixin

Reorders the item sequence (paint order). Operations act on the selected
item unless an explicit id is given, and are no-ops when there is neither.
Only the sequence position changes; records and selection are untouched.

Methods:
    - bring_to_front
    - send_to_back
    - cycle_next
    - reorder
"""

from typing import Optional

REORDER_FRONT = 'front'
REORDER_BACK = 'back'
REORDER_CYCLE = 'cycle'
REORDER_OPS = (REORDER_FRONT, REORDER_BACK, REORDER_CYCLE)


class SceneZOrderMixin:
    """Mixin providing z-order operations for Scene

    This mixin assumes the parent class has:
        - self._items: List[Item]
        - self._selected_id: Optional[str]
    """

    def _target_index(self, item_id: Optional[str]) -> Optional[int]:
        target = item_id if item_id is not None else self._selected_id
        if target is None:
            return None
        return self._require_index(target)

    def bring_to_front(self, item_id: Optional[str] = None) -> bool:
        """Move item to the tail (paint-topmost)

        Returns:
            True if the sequence was touched, False for a no-op
        """
        index = self._target_index(item_id)
        if index is None:
            return False
        item = self._items.pop(index)
        self._items.append(item)
        self._logger.debug(f"Brought {item.id} to front")
        self._notify('reordered', item.id)
        return True

    def send_to_back(self, item_id: Optional[str] = None) -> bool:
        """Move item to the head (paint-bottommost)"""
        index = self._target_index(item_id)
        if index is None:
            return False
        item = self._items.pop(index)
        self._items.insert(0, item)
        self._logger.debug(f"Sent {item.id} to back")
        self._notify('reordered', item.id)
        return True

    def cycle_next(self, item_id: Optional[str] = None) -> bool:
        """Move item one step up, wrapping to the head from the tail

        Applying this len(scene) times restores the original order.
        """
        index = self._target_index(item_id)
        if index is None:
            return False
        item = self._items.pop(index)
        if index == len(self._items):
            # Was last: wrap to head
            self._items.insert(0, item)
        else:
            # Reinsert just after its former next neighbour
            self._items.insert(index + 1, item)
        self._notify('reordered', item.id)
        return True

    def reorder(self, item_id: Optional[str], op: str) -> bool:
        """Dispatch a z-order operation by name: 'front', 'back' or 'cycle'

        Raises:
            ValueError: Unknown op
        """
        if op == REORDER_FRONT:
            return self.bring_to_front(item_id)
        if op == REORDER_BACK:
            return self.send_to_back(item_id)
        if op == REORDER_CYCLE:
            return self.cycle_next(item_id)
        raise ValueError(f"Unknown reorder op '{op}'. Valid: {list(REORDER_OPS)}")
