"""Clamp helpers enforcing the item invariants at every write.

Out-of-range geometry, crop and zoom values are clamped, never rejected.
Decorative scale/rotation are not consulted: they may visually overflow
the canvas.
"""
from typing import Dict, Iterable, Tuple

from constants import (
    PERCENT_MIN, PERCENT_MAX,
    CROP_MIN, CROP_MAX,
    ZOOM_MIN, ZOOM_MAX,
)

GEOMETRY_FIELDS = frozenset(('x', 'y', 'w', 'h'))
CROP_FIELDS = frozenset(('crop_x', 'crop_y'))
ZOOM_FIELDS = frozenset(('zoom',))


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into [lo, hi]. If hi < lo, lo wins."""
    return max(lo, min(hi, value))


def clamp_size(w: float, h: float) -> Tuple[float, float]:
    """Keep width/height inside the canvas"""
    return (clamp(float(w), PERCENT_MIN, PERCENT_MAX),
            clamp(float(h), PERCENT_MIN, PERCENT_MAX))


def clamp_position(x: float, y: float, w: float, h: float) -> Tuple[float, float]:
    """Clamp top-left anchor per axis so the box stays inside [0, 100]"""
    return (clamp(float(x), PERCENT_MIN, PERCENT_MAX - w),
            clamp(float(y), PERCENT_MIN, PERCENT_MAX - h))


def clamp_crop(crop_x: float, crop_y: float) -> Tuple[float, float]:
    return (clamp(float(crop_x), CROP_MIN, CROP_MAX),
            clamp(float(crop_y), CROP_MIN, CROP_MAX))


def clamp_zoom(zoom: float) -> float:
    return clamp(float(zoom), ZOOM_MIN, ZOOM_MAX)


def enforce_invariants(fields: Dict, touched: Iterable[str], enforce_position: bool = True) -> Dict:
    """Return a copy of an item's fields with every touched group clamped.

    Args:
        fields: Full item field dict (after the patch was merged)
        touched: Names of the fields the write changed
        enforce_position: When False, size is still clamped but the x/y
            anchor is left alone (auto-fit keeps its top-left anchor)

    Returns:
        New dict; the input is not modified
    """
    touched = set(touched)
    result = dict(fields)

    if touched & GEOMETRY_FIELDS:
        result['w'], result['h'] = clamp_size(result['w'], result['h'])
        if enforce_position:
            result['x'], result['y'] = clamp_position(result['x'], result['y'], result['w'], result['h'])
        else:
            result['x'], result['y'] = float(result['x']), float(result['y'])

    if touched & CROP_FIELDS and 'crop_x' in result:
        result['crop_x'], result['crop_y'] = clamp_crop(result['crop_x'], result['crop_y'])

    if touched & ZOOM_FIELDS and 'zoom' in result:
        result['zoom'] = clamp_zoom(result['zoom'])

    return result
