"""
Tests for the export rasterizer.

Verifies:
- Output size follows the format at the export pixel ratio
- Solid and gradient backgrounds
- Image frames are painted from their resource or a placeholder
- Color filters
- PNG export to disk
"""
import numpy as np
import pytest
from PIL import Image

from models.scene import Scene
from services.export_service import (
    PLACEHOLDER_RGBA, SceneRasterizer, apply_filter, export_png, linear_gradient,
)
from models.color import Color


@pytest.fixture
def rasterizer():
    return SceneRasterizer()


class TestOutputSize:

    @pytest.mark.parametrize("format_id,size", [
        ('portrait', (1080, 1350)),
        ('square', (1080, 1080)),
        ('story', (1080, 1920)),
    ])
    def test_size(self, rasterizer, format_id, size):
        assert rasterizer.output_size(Scene(format_id)) == size

    def test_smaller_preview(self):
        assert SceneRasterizer(preview_width=100, pixel_ratio=1).output_size(Scene()) == (100, 125)


class TestBackground:

    def test_solid(self, rasterizer, scene):
        scene.set_background_color('#0f172a')
        img = rasterizer.render(scene)
        assert img.getpixel((10, 10)) == (15, 23, 42, 255)

    def test_gradient_corners(self):
        img = linear_gradient(100, 100, 135, [Color.parse('#ff0000'), Color.parse('#0000ff')])
        top_left = img.getpixel((0, 0))
        bottom_right = img.getpixel((99, 99))
        assert top_left[0] > 240 and top_left[2] < 15
        assert bottom_right[2] > 240 and bottom_right[0] < 15

    def test_gradient_vertical(self):
        img = linear_gradient(10, 50, 180, [Color.parse('#000000'), Color.parse('#ffffff')])
        column = [img.getpixel((5, y))[0] for y in range(50)]
        assert column == sorted(column)
        assert column[0] < column[-1]


class TestItems:

    def test_image_resource_painted(self, scene):
        red = Image.new('RGBA', (50, 50), (255, 0, 0, 255))
        scene.add_item('image', {'x': 0, 'y': 0, 'w': 50, 'h': 50, 'radius': 0, 'src': red})
        img = SceneRasterizer(preview_width=100, pixel_ratio=1).render(scene)
        assert img.getpixel((20, 20)) == (255, 0, 0, 255)
        assert img.getpixel((80, 100)) == (255, 255, 255, 255)

    def test_placeholder_without_resource(self, scene):
        scene.add_item('image', {'x': 0, 'y': 0, 'w': 50, 'h': 50, 'radius': 0})
        img = SceneRasterizer(preview_width=100, pixel_ratio=1).render(scene)
        assert img.getpixel((20, 20)) == PLACEHOLDER_RGBA

    def test_rounded_corners(self, scene):
        scene.add_item('image', {'x': 0, 'y': 0, 'w': 50, 'h': 50, 'radius': 20})
        img = SceneRasterizer(preview_width=100, pixel_ratio=1).render(scene)
        assert img.getpixel((0, 0)) == (255, 255, 255, 255)
        assert img.getpixel((25, 30)) == PLACEHOLDER_RGBA

    def test_later_items_paint_on_top(self, scene):
        red = Image.new('RGBA', (10, 10), (255, 0, 0, 255))
        blue = Image.new('RGBA', (10, 10), (0, 0, 255, 255))
        scene.add_item('image', {'x': 0, 'y': 0, 'w': 50, 'h': 50, 'radius': 0, 'src': red})
        scene.add_item('image', {'x': 0, 'y': 0, 'w': 50, 'h': 50, 'radius': 0, 'src': blue})
        img = SceneRasterizer(preview_width=100, pixel_ratio=1).render(scene)
        assert img.getpixel((20, 20)) == (0, 0, 255, 255)

    def test_starter_scene_renders(self, rasterizer, starter_scene):
        img = rasterizer.render(starter_scene)
        assert img.size == (1080, 1350)
        assert img.mode == 'RGBA'

    def test_rotated_item_renders(self, rasterizer, scene):
        scene.add_item('image', {'rotation': 25, 'scale': 1.3})
        scene.add_item('text', {'rotation': -10, 'background_opacity': 1, 'border_width': 2})
        assert rasterizer.render(scene).size == (1080, 1350)


class TestFilters:

    def _tile(self):
        return Image.new('RGBA', (4, 4), (200, 100, 50, 255))

    def test_none_is_identity(self):
        tile = self._tile()
        assert apply_filter(tile, 'none') is tile

    def test_mono(self):
        r, g, b, a = apply_filter(self._tile(), 'mono').getpixel((0, 0))
        assert r == g == b
        assert a == 255

    @pytest.mark.parametrize("filter_id", ['sepia', 'warm', 'cool', 'fade'])
    def test_changes_pixels(self, filter_id):
        out = np.asarray(apply_filter(self._tile(), filter_id))
        assert not np.array_equal(out, np.asarray(self._tile()))

    def test_unknown(self):
        with pytest.raises(ValueError):
            apply_filter(self._tile(), 'vhs')


class TestExportPng:

    def test_writes_file(self, starter_scene, tmp_path):
        path = tmp_path / 'collage.png'
        assert export_png(starter_scene, path) == (1080, 1350)
        with Image.open(path) as img:
            assert img.size == (1080, 1350)
