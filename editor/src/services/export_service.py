"""
Collage Editor - Export Service

Software rasterizer for a Scene using Pillow and numpy. Paints the preview
region (PREVIEW_WIDTH_PX wide at the format aspect) at EXPORT_PIXEL_RATIO,
so a portrait scene exports at 1080x1350.

Paint order per item:
    1. Frame content (cover-fitted image with zoom/crop/filter, or text box)
    2. Rounded-corner mask (radius is in preview pixels)
    3. Decorative scale and rotation about the frame center
"""

import logging
import math
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from constants import PREVIEW_WIDTH_PX, EXPORT_PIXEL_RATIO
from models.color import Color, colors_to_array
from models.transform import CanvasRect
from utils.coordinate_transforms import geometry_to_pixels

logger = logging.getLogger(__name__)

# Placeholder fill for image frames without a decoded resource
PLACEHOLDER_RGBA = (226, 232, 240, 255)

# 3x3 color matrices applied to RGB (row-vector convention: rgb @ M.T)
_FILTER_MATRICES = {
    'mono': np.array([
        [0.299, 0.587, 0.114],
        [0.299, 0.587, 0.114],
        [0.299, 0.587, 0.114],
    ]),
    'sepia': np.array([
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ]),
    'warm': np.array([
        [1.10, 0.0, 0.0],
        [0.0, 1.02, 0.0],
        [0.0, 0.0, 0.88],
    ]),
    'cool': np.array([
        [0.90, 0.0, 0.0],
        [0.0, 1.00, 0.0],
        [0.0, 0.0, 1.12],
    ]),
}

# 'fade' lifts blacks and drops contrast instead of remixing channels
_FADE_CONTRAST = 0.8
_FADE_LIFT = 0.12 * 255


def apply_filter(img: Image.Image, filter_id: str) -> Image.Image:
    """Apply a named color filter to an RGBA image"""
    if filter_id == 'none':
        return img
    pixels = np.asarray(img.convert('RGBA'), dtype=np.float64)
    rgb = pixels[..., :3]
    if filter_id == 'fade':
        rgb = rgb * _FADE_CONTRAST + _FADE_LIFT
    elif filter_id in _FILTER_MATRICES:
        rgb = rgb @ _FILTER_MATRICES[filter_id].T
    else:
        raise ValueError(f"Unknown filter '{filter_id}'")
    pixels[..., :3] = np.clip(rgb, 0, 255)
    return Image.fromarray(pixels.astype(np.uint8), 'RGBA')


def linear_gradient(width: int, height: int, angle: float, colors) -> Image.Image:
    """Render a CSS-style linear gradient (0deg points up, 90deg points right)

    Color stops are evenly spaced along a gradient line sized so the first
    and last colors land exactly on the corners.
    """
    rad = math.radians(angle)
    dx, dy = math.sin(rad), -math.cos(rad)
    length = abs(width * dx) + abs(height * dy)

    xs = np.arange(width) + 0.5 - width / 2
    ys = np.arange(height) + 0.5 - height / 2
    gx, gy = np.meshgrid(xs, ys)
    t = np.clip((gx * dx + gy * dy) / length + 0.5, 0.0, 1.0)

    stops = colors_to_array(colors)
    positions = np.linspace(0.0, 1.0, len(stops))
    rgb = np.stack([np.interp(t, positions, stops[:, c]) for c in range(3)], axis=-1)
    return Image.fromarray(rgb.round().astype(np.uint8), 'RGB').convert('RGBA')


def rounded_mask(size: Tuple[int, int], radius: float) -> Image.Image:
    mask = Image.new('L', size, 0)
    ImageDraw.Draw(mask).rounded_rectangle(
        (0, 0, size[0] - 1, size[1] - 1), radius=max(0, radius), fill=255
    )
    return mask


def _load_font(name: str, size: int):
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        return ImageFont.load_default(size=size)


class SceneRasterizer:
    """Renders a Scene into a Pillow RGBA image

    Args:
        preview_width: Width of the preview region in CSS-like pixels
        pixel_ratio: Output pixels per preview pixel
    """

    def __init__(self, preview_width: int = PREVIEW_WIDTH_PX, pixel_ratio: int = EXPORT_PIXEL_RATIO):
        self.preview_width = preview_width
        self.pixel_ratio = pixel_ratio

    def output_size(self, scene) -> Tuple[int, int]:
        preview_height = self.preview_width * scene.format.aspect
        return (int(round(self.preview_width * self.pixel_ratio)),
                int(round(preview_height * self.pixel_ratio)))

    def render(self, scene) -> Image.Image:
        width, height = self.output_size(scene)
        canvas = self._render_background(scene.background, width, height)
        rect = CanvasRect(0, 0, width, height)
        for item in scene.items:
            self._paint_item(canvas, item, rect)
        logger.debug(f"Rendered {len(scene)} items at {width}x{height}")
        return canvas

    # ========================================
    # Background
    # ========================================

    def _render_background(self, background, width: int, height: int) -> Image.Image:
        if background.is_gradient:
            angle, colors = background.stops()
            return linear_gradient(width, height, angle, colors)
        return Image.new('RGBA', (width, height), Color.parse(background.value).to_rgba255())

    # ========================================
    # Items
    # ========================================

    def _paint_item(self, canvas: Image.Image, item, rect: CanvasRect):
        left, top, box_w, box_h = geometry_to_pixels(item.geometry, rect)
        size = (max(1, int(round(box_w))), max(1, int(round(box_h))))

        if item.is_image:
            tile = self._render_image_tile(item, size)
        else:
            tile = self._render_text_tile(item, size)

        radius = item.radius * self.pixel_ratio
        if radius > 0:
            alpha = np.minimum(np.asarray(tile.getchannel('A')), np.asarray(rounded_mask(size, radius)))
            tile.putalpha(Image.fromarray(alpha.astype(np.uint8), 'L'))

        center = (left + box_w / 2, top + box_h / 2)
        if item.scale != 1.0:
            scaled = (max(1, int(round(size[0] * item.scale))), max(1, int(round(size[1] * item.scale))))
            tile = tile.resize(scaled, Image.Resampling.LANCZOS)
        if item.rotation:
            # Pillow rotates counter-clockwise; item rotation is clockwise
            tile = tile.rotate(-item.rotation, resample=Image.Resampling.BICUBIC, expand=True)

        dest = (int(round(center[0] - tile.width / 2)), int(round(center[1] - tile.height / 2)))
        canvas.alpha_composite(tile, dest=(max(0, dest[0]), max(0, dest[1])),
                               source=(max(0, -dest[0]), max(0, -dest[1])))

    def _render_image_tile(self, item, size: Tuple[int, int]) -> Image.Image:
        frame_w, frame_h = size
        src: Optional[Image.Image] = item.src if isinstance(item.src, Image.Image) else None
        if src is None:
            return Image.new('RGBA', size, PLACEHOLDER_RGBA)

        # Cover fit, then zoom about the frame center, then shift by the crop offset
        cover = max(frame_w / src.width, frame_h / src.height) * item.zoom
        scaled_w = max(1, int(math.ceil(src.width * cover)))
        scaled_h = max(1, int(math.ceil(src.height * cover)))
        scaled = src.convert('RGBA').resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)

        offset_x = (frame_w - scaled_w) / 2 + item.crop_x / 100.0 * frame_w
        offset_y = (frame_h - scaled_h) / 2 + item.crop_y / 100.0 * frame_h
        tile = Image.new('RGBA', size, PLACEHOLDER_RGBA)
        tile.paste(scaled, (int(round(offset_x)), int(round(offset_y))), scaled)
        return apply_filter(tile, item.filter)

    def _render_text_tile(self, item, size: Tuple[int, int]) -> Image.Image:
        ratio = self.pixel_ratio
        bg = Color.parse(item.get('background_color'))
        tile = Image.new('RGBA', size, bg.to_rgba255(item.get('background_opacity')))
        draw = ImageDraw.Draw(tile)

        border = item.get('border_width') * ratio
        if border > 0:
            draw.rectangle((0, 0, size[0] - 1, size[1] - 1),
                           outline=Color.parse(item.get('border_color')).to_rgba255(), width=int(border))

        padding = item.get('padding') * ratio
        font = _load_font(item.get('font'), int(item.get('size') * ratio))
        text = item.text
        bbox = draw.multiline_textbbox((0, 0), text, font=font, align=item.get('align'))
        text_w = bbox[2] - bbox[0]
        text_h = bbox[3] - bbox[1]

        align = item.get('align')
        if align == 'left':
            x = padding
        elif align == 'right':
            x = size[0] - padding - text_w
        else:
            x = (size[0] - text_w) / 2
        y = (size[1] - text_h) / 2
        draw.multiline_text((x - bbox[0], y - bbox[1]), text, font=font,
                            fill=Color.parse(item.get('color')).to_rgba255(), align=align)
        return tile


def export_png(scene, path, rasterizer: Optional[SceneRasterizer] = None) -> Tuple[int, int]:
    """Render a scene and write it as PNG

    Returns:
        (width, height) of the written image
    """
    img = (rasterizer or SceneRasterizer()).render(scene)
    img.save(path, 'PNG')
    logger.info(f"Exported {img.width}x{img.height} PNG to {path}")
    return img.size
