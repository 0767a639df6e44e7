"""
Tests for the clamp helpers.

Verifies:
- Position clamping keeps the box inside the canvas per axis
- Crop and zoom ranges
- enforce_invariants only touches the field groups a write changed
- enforce_position=False leaves the anchor alone
"""
import pytest
from utils.clamp import (
    clamp, clamp_size, clamp_position, clamp_crop, clamp_zoom, enforce_invariants,
)


class TestScalarClamps:

    @pytest.mark.parametrize("value,expected", [(-5, 0), (0, 0), (42.5, 42.5), (100, 100), (130, 100)])
    def test_clamp(self, value, expected):
        assert clamp(value, 0, 100) == expected

    def test_lo_wins_when_range_inverted(self):
        assert clamp(50, 10, 5) == 10

    def test_position_bounds_depend_on_size(self):
        assert clamp_position(95, 95, 20, 30) == (80, 70)
        assert clamp_position(-10, -1, 20, 30) == (0, 0)

    def test_full_size_box_pins_to_origin(self):
        assert clamp_position(12, 40, 100, 100) == (0, 0)

    def test_size(self):
        assert clamp_size(120, -3) == (100, 0)

    @pytest.mark.parametrize("crop,expected", [((-80, 80), (-50, 50)), ((12.5, -7), (12.5, -7))])
    def test_crop(self, crop, expected):
        assert clamp_crop(*crop) == expected

    @pytest.mark.parametrize("zoom,expected", [(0.5, 1), (1.4, 1.4), (3, 2)])
    def test_zoom(self, zoom, expected):
        assert clamp_zoom(zoom) == expected


class TestEnforceInvariants:

    def _fields(self, **overrides):
        fields = {'x': 10, 'y': 10, 'w': 30, 'h': 30, 'crop_x': 0, 'crop_y': 0, 'zoom': 1}
        fields.update(overrides)
        return fields

    def test_geometry_write_clamps_position(self):
        result = enforce_invariants(self._fields(x=90), ['x'])
        assert result['x'] == 70

    def test_untouched_groups_left_alone(self):
        # Crop out of range but the write only touched zoom
        result = enforce_invariants(self._fields(crop_x=80, zoom=5), ['zoom'])
        assert result['crop_x'] == 80
        assert result['zoom'] == 2

    def test_size_change_reclamps_position(self):
        result = enforce_invariants(self._fields(x=60, w=50), ['w'])
        assert result['x'] == 50

    def test_enforce_position_false_keeps_anchor(self):
        result = enforce_invariants(self._fields(y=60, h=68), ['h'], enforce_position=False)
        assert result['y'] == 60
        assert result['h'] == 68

    def test_input_not_modified(self):
        fields = self._fields(x=200)
        enforce_invariants(fields, ['x'])
        assert fields['x'] == 200

    def test_text_fields_without_crop(self):
        fields = {'x': 10, 'y': 10, 'w': 30, 'h': 30}
        assert enforce_invariants(fields, ['crop_x', 'zoom']) == fields
