"""
Collage Editor - Draft Service

JSON draft documents:

    {
        "mode": "photo",
        "format": "portrait",
        "background": {"type": "color", "value": "#ffffff"},
        "items": [...],
        "clips": [...],
        "timestamp": "2026-01-01T12:00:00+00:00"
    }

Pillow image resources are embedded as PNG data URLs; string resources
(paths or URLs) are stored as-is. There is no schema version.
"""

import base64
import io
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image

from constants import DRAFT_MODES, DEFAULT_DRAFT_MODE, DEFAULT_FORMAT
from models.scene import Scene

logger = logging.getLogger('DraftService')

DATA_URL_PREFIX = 'data:image/png;base64,'


def encode_resource(resource: Any) -> Any:
    """Storable form of an item resource"""
    if isinstance(resource, Image.Image):
        buffer = io.BytesIO()
        resource.save(buffer, 'PNG')
        return DATA_URL_PREFIX + base64.b64encode(buffer.getvalue()).decode('ascii')
    return resource


def decode_resource(value: Any) -> Any:
    """Inverse of encode_resource. Non data-URL values are returned unchanged."""
    if isinstance(value, str) and value.startswith(DATA_URL_PREFIX):
        raw = base64.b64decode(value[len(DATA_URL_PREFIX):])
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            return img.convert('RGBA')
    return value


def build_draft(scene, mode: str = DEFAULT_DRAFT_MODE, clips: Optional[List[Dict]] = None) -> Dict:
    """Snapshot a scene as a draft dict

    Raises:
        ValueError: Unknown mode
    """
    if mode not in DRAFT_MODES:
        raise ValueError(f"Unknown draft mode '{mode}'. Valid: {list(DRAFT_MODES)}")
    return {
        'mode': mode,
        'format': scene.format.id,
        'background': scene.background.to_dict(),
        'items': scene.items_to_dicts(encode_resource),
        'clips': list(clips or []),
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }


def scene_from_draft(draft: Dict) -> Scene:
    """Build a new Scene from a draft dict (selection goes to the top item)"""
    scene = Scene(draft.get('format') or DEFAULT_FORMAT)
    scene.load_dict({
        'background': draft.get('background'),
        'items': draft.get('items', []),
    }, decode_resource)
    return scene


def draft_metadata(draft: Dict) -> Tuple[str, List[Dict]]:
    """Mode and clip list of a draft dict, for writing back on the next save

    Drafts without a mode are photo drafts.

    Raises:
        ValueError: Unknown mode
    """
    mode = draft.get('mode') or DEFAULT_DRAFT_MODE
    if mode not in DRAFT_MODES:
        raise ValueError(f"Unknown draft mode '{mode}'. Valid: {list(DRAFT_MODES)}")
    return mode, list(draft.get('clips') or [])


def save_draft(scene, filename, mode: str = DEFAULT_DRAFT_MODE, clips: Optional[List[Dict]] = None) -> Dict:
    """Write a draft JSON file

    Returns:
        The draft dict that was written

    Raises:
        OSError: If the file cannot be written
    """
    draft = build_draft(scene, mode, clips)
    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(draft, f, indent=2)
    logger.info(f"Draft saved to {filename}")
    return draft


def load_draft(filename) -> Dict:
    """Read a draft JSON file

    Raises:
        ValueError: If the file is not a draft document
    """
    with open(filename, 'r', encoding='utf-8') as f:
        draft = json.load(f)
    if not isinstance(draft, dict) or 'items' not in draft:
        raise ValueError(f"{filename} is not a collage draft")
    logger.info(f"Draft loaded from {filename}")
    return draft
