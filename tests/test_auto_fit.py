"""
Tests for auto-fit sizing.

Verifies:
- Height formula and its [20, 68] clamp
- Resize clears auto_size and later decodes are no-ops
- Stale ids, text items and bad dimensions are ignored
- The top-left anchor is kept even when the box overflows
"""
import pytest
from services.auto_fit import AutoFitResolver, fitted_height


class TestFittedHeight:

    @pytest.mark.parametrize("size,expected", [
        ((1000, 1250), 36.0),
        ((1000, 1000), 28.8),
        ((4000, 1000), 20.0),
        ((1000, 4000), 68.0),
    ])
    def test_formula(self, size, expected):
        assert fitted_height(*size) == pytest.approx(expected)


class TestAutoFitResolver:

    @pytest.fixture
    def pending(self, scene):
        return scene.add_item('image', {'x': 6, 'y': 6, 'auto_size': True}, item_id='img-a')

    def test_resize(self, scene, pending):
        resolver = AutoFitResolver(scene)
        assert resolver.on_resource_decoded(pending, 1000, 1250)
        item = scene.get_item(pending)
        assert item.w == 36
        assert item.h == pytest.approx(36)
        assert item.auto_size is False
        assert (item.x, item.y) == (6, 6)

    def test_second_decode_is_noop(self, scene, pending):
        resolver = AutoFitResolver(scene)
        resolver.on_resource_decoded(pending, 1000, 1250)
        before = scene.get_item(pending)
        assert not resolver.on_resource_decoded(pending, 500, 2000)
        assert scene.get_item(pending) is before

    def test_flag_clear_is_noop(self, scene):
        item_id = scene.add_item('image', {'w': 40, 'h': 44})
        assert not AutoFitResolver(scene).on_resource_decoded(item_id, 1000, 1250)
        assert scene.get_item(item_id).h == 44

    def test_stale_id(self, scene):
        assert not AutoFitResolver(scene).on_resource_decoded('img-gone', 1000, 1250)
        assert len(scene) == 0

    def test_text_item(self, scene):
        item_id = scene.add_item('text')
        assert not AutoFitResolver(scene).on_resource_decoded(item_id, 1000, 1250)

    @pytest.mark.parametrize("size", [(0, 1250), (1000, 0), (None, None), (-5, 10)])
    def test_bad_dimensions(self, scene, pending, size):
        assert not AutoFitResolver(scene).on_resource_decoded(pending, *size)
        assert scene.get_item(pending).auto_size is True

    def test_anchor_kept_when_overflowing(self, scene):
        item_id = scene.add_item('image', {'x': 60, 'y': 60, 'w': 30, 'h': 30, 'auto_size': True})
        AutoFitResolver(scene).on_resource_decoded(item_id, 1000, 4000)
        item = scene.get_item(item_id)
        assert (item.x, item.y) == (60, 60)
        assert item.h == 68
        assert item.y + item.h > 100
