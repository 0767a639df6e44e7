"""
Tests for draft save/load.

Verifies:
- Draft document contents (mode, format, background, items, clips, timestamp)
- Pillow resources are embedded as PNG data URLs and restored
- Loading a draft builds a scene with the draft's format
- Mode and clips survive an open and save cycle
- Invalid drafts and modes are rejected
"""
import json
from datetime import datetime

import pytest
from PIL import Image

from models.scene import Scene
from services.draft_service import (
    DATA_URL_PREFIX, build_draft, decode_resource, encode_resource,
    draft_metadata, load_draft, save_draft, scene_from_draft,
)


class TestBuildDraft:

    def test_contents(self, starter_scene):
        draft = build_draft(starter_scene)
        assert draft['mode'] == 'photo'
        assert draft['format'] == 'portrait'
        assert draft['background'] == {'type': 'color', 'value': '#ffffff'}
        assert [item['id'] for item in draft['items']] == ['img-1', 'img-2', 'img-3', 'text-1']
        assert draft['clips'] == []
        assert datetime.fromisoformat(draft['timestamp']).tzinfo is not None

    def test_video_mode_keeps_clips(self, starter_scene):
        clips = [{'src': 'clip.mp4', 'duration': 3.5}]
        draft = build_draft(starter_scene, mode='video', clips=clips)
        assert draft['mode'] == 'video'
        assert draft['clips'] == clips

    def test_unknown_mode(self, starter_scene):
        with pytest.raises(ValueError):
            build_draft(starter_scene, mode='gif')

    def test_json_serializable(self, starter_scene):
        starter_scene.update_item('img-1', {'src': Image.new('RGBA', (4, 4), (1, 2, 3, 255))})
        json.dumps(build_draft(starter_scene))


class TestResources:

    def test_image_becomes_data_url(self):
        encoded = encode_resource(Image.new('RGBA', (3, 2), (10, 20, 30, 255)))
        assert encoded.startswith(DATA_URL_PREFIX)
        decoded = decode_resource(encoded)
        assert decoded.size == (3, 2)
        assert decoded.getpixel((0, 0)) == (10, 20, 30, 255)

    @pytest.mark.parametrize("value", [None, 'https://example.com/a.png', '/tmp/a.png'])
    def test_other_values_pass_through(self, value):
        assert encode_resource(value) == value
        assert decode_resource(value) == value


class TestSaveAndLoad:

    def test_round_trip(self, tmp_path):
        scene = Scene('square')
        scene.add_item('image', {'x': 20, 'src': Image.new('RGBA', (5, 5), (0, 255, 0, 255))},
                       item_id='img-a')
        scene.add_item('text', {'text': 'Hello'}, item_id='text-a')
        scene.set_background_gradient('linear-gradient(135deg, #38bdf8, #1e293b)')
        path = tmp_path / 'draft.json'

        save_draft(scene, path)
        restored = scene_from_draft(load_draft(path))

        assert restored.format.id == 'square'
        assert restored.get_all_item_ids() == ['img-a', 'text-a']
        assert restored.get_item('img-a').x == 20
        assert restored.get_item('img-a').src.getpixel((2, 2)) == (0, 255, 0, 255)
        assert restored.get_item('text-a').text == 'Hello'
        assert restored.background == scene.background
        assert restored.selected_id == 'text-a'

    def test_missing_format_uses_default(self):
        restored = scene_from_draft({'items': []})
        assert restored.format.id == 'portrait'
        assert len(restored) == 0

    def test_not_a_draft(self, tmp_path):
        path = tmp_path / 'other.json'
        path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(ValueError):
            load_draft(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'broken.json'
        path.write_text('{not json')
        with pytest.raises(ValueError):
            load_draft(path)


class TestDraftMetadata:

    def test_video_draft_survives_reopen(self, starter_scene):
        clips = [{'src': 'clip.mp4', 'duration': 3.5}, {'src': 'b.mp4', 'duration': 1.0}]
        draft = build_draft(starter_scene, mode='video', clips=clips)

        mode, restored_clips = draft_metadata(draft)
        resaved = build_draft(scene_from_draft(draft), mode, restored_clips)
        assert resaved['mode'] == 'video'
        assert resaved['clips'] == clips

    def test_defaults_for_older_drafts(self):
        assert draft_metadata({'items': []}) == ('photo', [])

    def test_clips_are_copied(self):
        clips = [{'src': 'clip.mp4'}]
        _, restored = draft_metadata({'mode': 'video', 'clips': clips})
        restored.append({'src': 'other.mp4'})
        assert clips == [{'src': 'clip.mp4'}]

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            draft_metadata({'mode': 'gif', 'items': []})
