"""
Tests for background removal.

Verifies:
- Successful removal swaps the resource and resets crop/zoom
- A result for a deleted item is dropped, also when the id was reused
- One request in flight per item; other items are independent
- Failures leave the item untouched and clear the busy state
"""
import asyncio

import pytest
from services.background_removal import BackgroundRemover


@pytest.fixture
def photo(scene):
    return scene.add_item('image', {
        'src': 'photo', 'crop_x': 12, 'zoom': 1.6, 'auto_size': True,
    }, item_id='img-x')


class TestRemoval:

    def test_success(self, scene, photo, fake_remover):
        remover = BackgroundRemover(scene, fake_remover)
        assert asyncio.run(remover.remove_background(photo))
        item = scene.get_item(photo)
        assert item.src == 'photo:cutout'
        assert (item.crop_x, item.crop_y, item.zoom) == (0, 0, 1)
        assert item.auto_size is False
        assert fake_remover.calls == ['photo']

    def test_not_an_image(self, scene, fake_remover):
        item_id = scene.add_item('text')
        assert not asyncio.run(BackgroundRemover(scene, fake_remover).remove_background(item_id))
        assert fake_remover.calls == []

    def test_image_without_resource(self, scene, fake_remover):
        item_id = scene.add_item('image')
        remover = BackgroundRemover(scene, fake_remover)
        assert not remover.can_remove(item_id)
        assert not asyncio.run(remover.remove_background(item_id))

    def test_unknown_item(self, scene, fake_remover):
        assert not asyncio.run(BackgroundRemover(scene, fake_remover).remove_background('img-gone'))


class TestStaleTarget:

    def test_deleted_before_resolution(self, scene, photo, fake_remover):
        remover = BackgroundRemover(scene, fake_remover)
        events = []

        async def run():
            fake_remover.gate = asyncio.Event()
            task = asyncio.ensure_future(remover.remove_background(photo))
            await asyncio.sleep(0)
            scene.delete_item(photo)
            scene.changed.connect(lambda event, item_id: events.append((event, item_id)))
            fake_remover.gate.set()
            return await task

        assert asyncio.run(run()) is False
        assert not scene.has_item(photo)
        assert events == []
        assert not remover.is_busy(photo)

    def test_id_reused_by_new_starter_collage(self, starter_scene, fake_remover):
        starter_scene.update_item('img-1', {'src': 'old-photo'})
        remover = BackgroundRemover(starter_scene, fake_remover)

        async def run():
            fake_remover.gate = asyncio.Event()
            task = asyncio.ensure_future(remover.remove_background('img-1'))
            await asyncio.sleep(0)
            starter_scene.delete_item('img-1')
            starter_scene.load_starter()
            starter_scene.update_item('img-1', {'src': 'new-photo'})
            # The new img-1 is a different item and may start its own request
            assert remover.can_remove('img-1')
            fake_remover.gate.set()
            return await task

        assert asyncio.run(run()) is False
        item = starter_scene.get_item('img-1')
        assert item.src == 'new-photo'
        assert item.zoom == 1

    def test_id_reused_by_explicit_add(self, scene, photo, fake_remover):
        remover = BackgroundRemover(scene, fake_remover)

        async def run():
            fake_remover.gate = asyncio.Event()
            task = asyncio.ensure_future(remover.remove_background(photo))
            await asyncio.sleep(0)
            scene.delete_item(photo)
            scene.add_item('image', {'src': 'replacement'}, item_id=photo)
            fake_remover.gate.set()
            return await task

        assert asyncio.run(run()) is False
        assert scene.get_item(photo).src == 'replacement'

    def test_moved_item_still_updated(self, scene, photo, fake_remover):
        remover = BackgroundRemover(scene, fake_remover)

        async def run():
            fake_remover.gate = asyncio.Event()
            task = asyncio.ensure_future(remover.remove_background(photo))
            await asyncio.sleep(0)
            scene.update_item(photo, {'x': 40})
            fake_remover.gate.set()
            return await task

        assert asyncio.run(run()) is True
        item = scene.get_item(photo)
        assert (item.x, item.src) == (40, 'photo:cutout')


class TestInFlightGating:

    def test_second_request_rejected_while_busy(self, scene, photo, fake_remover):
        remover = BackgroundRemover(scene, fake_remover)

        async def run():
            fake_remover.gate = asyncio.Event()
            first = asyncio.ensure_future(remover.remove_background(photo))
            await asyncio.sleep(0)
            assert remover.is_busy(photo)
            assert not remover.can_remove(photo)
            second = await remover.remove_background(photo)
            fake_remover.gate.set()
            return await first, second

        assert asyncio.run(run()) == (True, False)
        assert fake_remover.calls == ['photo']
        assert not remover.is_busy(photo)

    def test_other_items_independent(self, scene, photo, fake_remover):
        other = scene.add_item('image', {'src': 'other'}, item_id='img-y')
        remover = BackgroundRemover(scene, fake_remover)

        async def run():
            fake_remover.gate = asyncio.Event()
            first = asyncio.ensure_future(remover.remove_background(photo))
            second = asyncio.ensure_future(remover.remove_background(other))
            await asyncio.sleep(0)
            both_busy = remover.is_busy(photo) and remover.is_busy(other)
            fake_remover.gate.set()
            return both_busy, await first, await second

        assert asyncio.run(run()) == (True, True, True)
        assert scene.get_item(other).src == 'other:cutout'

    def test_busy_events(self, scene, photo, fake_remover):
        remover = BackgroundRemover(scene, fake_remover)
        events = []
        remover.busy_changed.connect(lambda item_id, busy: events.append((item_id, busy)))
        asyncio.run(remover.remove_background(photo))
        assert events == [(photo, True), (photo, False)]


class TestFailure:

    def test_failure_leaves_item(self, scene, photo, caplog):
        from conftest import FakeRemover
        remover = BackgroundRemover(scene, FakeRemover(fail=True))
        before = scene.get_item(photo)
        assert not asyncio.run(remover.remove_background(photo))
        assert scene.get_item(photo) is before
        assert not remover.is_busy(photo)
        assert 'model not available' in caplog.text
        # A new request may be issued after a failure
        assert remover.can_remove(photo)
