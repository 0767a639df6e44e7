"""
Auto-fit sizing of freshly decoded images.

When an image item is created before its pixels are known it carries
auto_size=True. Once the decode reports natural dimensions the item gets
a fixed width and a height following the image aspect, and the flag is
cleared so later decodes of the same item leave it alone.

The top-left anchor is kept as-is: an auto-fitted box may hang past the
bottom edge until the user moves it.
"""

import logging

from constants import (
    AUTO_FIT_TARGET_WIDTH,
    AUTO_FIT_ASPECT_CORRECTION,
    AUTO_FIT_MIN_HEIGHT,
    AUTO_FIT_MAX_HEIGHT,
)
from utils.clamp import clamp

logger = logging.getLogger('AutoFit')


def fitted_height(natural_width: float, natural_height: float) -> float:
    """Percent height for an image of the given pixel size at the target width"""
    ratio = natural_height / natural_width
    return clamp(AUTO_FIT_TARGET_WIDTH * ratio * AUTO_FIT_ASPECT_CORRECTION,
                 AUTO_FIT_MIN_HEIGHT, AUTO_FIT_MAX_HEIGHT)


class AutoFitResolver:
    """Applies auto-fit sizing to scene items on decode completion"""

    def __init__(self, scene):
        self.scene = scene

    def on_resource_decoded(self, item_id: str, natural_width: float, natural_height: float) -> bool:
        """Resize an image item whose resource just decoded

        No-op for unknown ids, text items, items whose auto_size flag is
        already clear, and missing or zero dimensions.

        Returns:
            True if the item was resized
        """
        item = self.scene.find_item(item_id)
        if item is None:
            logger.debug(f"Auto-fit skipped, item {item_id} no longer exists")
            return False
        if not item.is_image or not item.auto_size:
            return False
        if not natural_width or not natural_height or natural_width <= 0 or natural_height <= 0:
            return False

        height = fitted_height(natural_width, natural_height)
        self.scene.update_item(
            item_id,
            {'w': AUTO_FIT_TARGET_WIDTH, 'h': height, 'auto_size': False},
            enforce_position=False,
        )
        logger.debug(f"Auto-fit {item_id}: {natural_width}x{natural_height} -> h={height:.2f}")
        return True
