"""
Scene Layout Mixin

Bulk repositioning of items from a layout template. Only x/y/w/h are
rewritten; item count, ids, kinds, order and every other field stay as
they were.
"""


class SceneLayoutMixin:
    """Mixin applying layout templates to the Scene

    This mixin assumes the parent class has:
        - self._items: List[Item]
        - self._logger / self._notify
    """

    def apply_layout(self, template) -> int:
        """Reposition items from a template

        Image items receive template.image_rects[rank % len(image_rects)],
        where rank is the item's position among image items in paint order.
        Text items receive template.text_rect when the template defines one,
        otherwise they are left unchanged.

        Args:
            template: LayoutTemplate (services.layout_templates)

        Returns:
            Number of items repositioned
        """
        image_rects = template.image_rects
        text_rect = template.text_rect
        image_rank = 0
        changed = 0

        for index, item in enumerate(self._items):
            if item.is_image:
                rect = image_rects[image_rank % len(image_rects)]
                image_rank += 1
            elif text_rect is not None:
                rect = text_rect
            else:
                continue
            self._items[index] = item.merged(rect.to_dict())
            changed += 1

        self._logger.debug(f"Applied layout '{template.name}' to {changed} items")
        self._notify('layout')
        return changed
