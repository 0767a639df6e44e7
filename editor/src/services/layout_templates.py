"""
Collage Editor - Layout Template Service

Named layout templates and the registry that resolves them. Applying a
template to a scene is done by Scene.apply_layout; this module only
defines, validates and looks templates up.

Custom templates can be loaded from a JSON file with the same shape as
constants.LAYOUT_TEMPLATES:

    {
        "grid4": {
            "title": "Four Up",
            "note": "2x2",
            "images": [[4, 4, 44, 44], [52, 4, 44, 44], [4, 52, 44, 44], [52, 52, 44, 44]],
            "text": null
        }
    }
"""

import json
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from constants import LAYOUT_TEMPLATES, PERCENT_MIN, PERCENT_MAX
from models.transform import Rect

logger = logging.getLogger('LayoutTemplates')


class UnknownTemplateError(KeyError):
    """Raised when a template name is not registered"""


def _to_rect(values: Sequence[float], template_name: str) -> Rect:
    """Validate an (x, y, w, h) sequence and convert it to a Rect"""
    if len(values) != 4:
        raise ValueError(f"Template '{template_name}': rectangle needs 4 values, got {list(values)}")
    x, y, w, h = (float(v) for v in values)
    if w <= 0 or h <= 0:
        raise ValueError(f"Template '{template_name}': rectangle {list(values)} has no area")
    if x < PERCENT_MIN or y < PERCENT_MIN or x + w > PERCENT_MAX or y + h > PERCENT_MAX:
        raise ValueError(f"Template '{template_name}': rectangle {list(values)} leaves the canvas")
    return Rect(x, y, w, h)


@dataclass(frozen=True)
class LayoutTemplate:
    """Ordered image rectangles plus an optional text rectangle"""
    name: str
    title: str
    note: str
    image_rects: Tuple[Rect, ...]
    text_rect: Optional[Rect] = None

    @classmethod
    def from_dict(cls, name: str, data: Dict) -> 'LayoutTemplate':
        """Build a template from its constants/JSON form

        Raises:
            ValueError: No image rectangles, or a rectangle outside the canvas
        """
        images = data.get('images') or []
        if not images:
            raise ValueError(f"Template '{name}' needs at least one image rectangle")
        text = data.get('text')
        return cls(
            name=name,
            title=data.get('title', name),
            note=data.get('note', ''),
            image_rects=tuple(_to_rect(r, name) for r in images),
            text_rect=_to_rect(text, name) if text is not None else None,
        )

    def rect_for_image(self, rank: int) -> Rect:
        """Rectangle for the image item at the given rank (cyclic)"""
        return self.image_rects[rank % len(self.image_rects)]


class LayoutTemplateRegistry:
    """Name -> LayoutTemplate lookup, seeded with the built-in presets"""

    def __init__(self, templates: Optional[Dict[str, Dict]] = None):
        self._templates: Dict[str, LayoutTemplate] = {}
        for name, data in (LAYOUT_TEMPLATES if templates is None else templates).items():
            self.register(LayoutTemplate.from_dict(name, data))

    def register(self, template: LayoutTemplate):
        """Add or replace a template"""
        if template.name in self._templates:
            logger.info(f"Replacing layout template '{template.name}'")
        self._templates[template.name] = template

    def get(self, name: str) -> LayoutTemplate:
        try:
            return self._templates[name]
        except KeyError:
            raise UnknownTemplateError(
                f"Unknown layout template '{name}'. Valid: {sorted(self._templates)}"
            ) from None

    def names(self) -> List[str]:
        """Template names in registration order"""
        return list(self._templates)

    def __contains__(self, name: str) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def load_json(self, path) -> List[str]:
        """Register every template defined in a JSON file

        Returns:
            Names that were loaded

        Raises:
            ValueError: Invalid template definition
            FileNotFoundError: Missing file
        """
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
        loaded = []
        for name, data in raw.items():
            self.register(LayoutTemplate.from_dict(name, data))
            loaded.append(name)
        logger.debug(f"Loaded {len(loaded)} layout templates from {path}")
        return loaded
