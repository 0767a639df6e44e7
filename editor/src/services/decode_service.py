"""Image decoding for imported files.

The default decoder wraps Pillow. Decoding is blocking, so it runs in the
event loop's default executor and the coroutine resumes on the loop.
"""

import asyncio
import io
import logging
from dataclasses import dataclass
from typing import Any

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger('DecodeService')


class DecodeError(Exception):
    """Raised when bytes cannot be decoded into an image"""


@dataclass(frozen=True)
class DecodedImage:
    """Decoded resource plus its natural pixel size"""
    handle: Any
    width: int
    height: int


def decode_bytes(data: bytes) -> DecodedImage:
    """Decode image bytes into an RGBA Pillow image (blocking)

    Raises:
        DecodeError: Empty, truncated or unrecognised data
    """
    if not data:
        raise DecodeError("No image data")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            handle = img.convert('RGBA')
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeError(f"Cannot decode image: {e}") from e
    return DecodedImage(handle, handle.width, handle.height)


class PillowDecoder:
    """Async decoder producing Pillow images"""

    async def decode(self, data: bytes) -> DecodedImage:
        loop = asyncio.get_running_loop()
        decoded = await loop.run_in_executor(None, decode_bytes, data)
        logger.debug(f"Decoded {decoded.width}x{decoded.height} image")
        return decoded
