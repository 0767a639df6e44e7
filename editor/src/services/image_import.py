"""
Collage Editor - Image Import Service

Turns a batch of files (file dialog, drop or paste) into image items.

Each file is decoded concurrently. Whichever decode finishes first is
appended first; placement does not depend on completion order because
every file's grid slot is fixed at submission:

    slot = base_index + i        (base_index = image items at submission)
    col, row = slot % 2, slot // 2
    x = 6 + col * (44 + 4)
    y = 6 + row * (32 + 4)

New items carry auto_size=True and are resized by the AutoFitResolver as
soon as their dimensions are known.
"""

import asyncio
import logging
import mimetypes
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional

from constants import (
    KIND_IMAGE,
    IMPORT_GRID_COLUMNS,
    IMPORT_GRID_GAP,
    IMPORT_GRID_CELL_WIDTH,
    IMPORT_GRID_CELL_HEIGHT,
    IMPORT_GRID_ORIGIN,
)

from .auto_fit import AutoFitResolver

logger = logging.getLogger('ImageImporter')


@dataclass(frozen=True)
class ImportFile:
    """A file offered for import"""
    name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, path) -> 'ImportFile':
        """Read a file from disk, guessing its MIME type from the name"""
        mime_type, _ = mimetypes.guess_type(str(path))
        with open(path, 'rb') as f:
            data = f.read()
        return cls(os.path.basename(str(path)), mime_type or 'application/octet-stream', data)

    @property
    def is_image(self) -> bool:
        return bool(self.mime_type) and self.mime_type.startswith('image/')


def grid_slot(slot: int) -> dict:
    """Geometry of an import grid slot"""
    col = slot % IMPORT_GRID_COLUMNS
    row = slot // IMPORT_GRID_COLUMNS
    return {
        'x': IMPORT_GRID_ORIGIN + col * (IMPORT_GRID_CELL_WIDTH + IMPORT_GRID_GAP),
        'y': IMPORT_GRID_ORIGIN + row * (IMPORT_GRID_CELL_HEIGHT + IMPORT_GRID_GAP),
        'w': IMPORT_GRID_CELL_WIDTH,
        'h': IMPORT_GRID_CELL_HEIGHT,
    }


class ImageImporter:
    """Decodes files and appends them to a scene as image items

    Args:
        scene: Target Scene
        decoder: Object with `async decode(data) -> DecodedImage`
        auto_fit: AutoFitResolver (created for the scene if omitted)
    """

    def __init__(self, scene, decoder, auto_fit: Optional[AutoFitResolver] = None):
        self.scene = scene
        self.decoder = decoder
        self.auto_fit = auto_fit or AutoFitResolver(scene)

    async def import_files(self, files: Iterable[ImportFile]) -> List[str]:
        """Import a batch of files

        Non-image files are dropped. Decode failures are logged and
        skipped; the rest of the batch still lands.

        Returns:
            Ids of the created items in completion order
        """
        images = []
        for f in files:
            if f.is_image:
                images.append(f)
            else:
                logger.debug(f"Ignoring non-image file {f.name} ({f.mime_type})")
        if not images:
            return []

        base_index = self.scene.get_image_count()
        created: List[str] = []
        await asyncio.gather(*(
            self._import_one(f, base_index + i, i, created)
            for i, f in enumerate(images)
        ))
        logger.info(f"Imported {len(created)} of {len(images)} images")
        return created

    async def _import_one(self, file: ImportFile, slot: int, index: int, created: List[str]):
        try:
            decoded = await self.decoder.decode(file.data)
        except Exception as e:
            logger.error(f"Failed to decode {file.name or 'image'}: {e}")
            return

        fields = grid_slot(slot)
        fields.update({
            'src': decoded.handle,
            'label': file.name or f"Image {index + 1}",
            'auto_size': True,
        })
        item_id = self.scene.add_item(KIND_IMAGE, fields, select=True)
        created.append(item_id)
        self.auto_fit.on_resource_decoded(item_id, decoded.width, decoded.height)
