"""
Shared fixtures for Collage Editor tests.

Provides scenes, engines with fake collaborators, image bytes and a fixed
canvas rectangle for pointer tests.
"""
import sys
import os
import io
import asyncio
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# Widget tests run without a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


# ── Fixed canvas geometry ───────────────────────────────────────────────

# 400x500 canvas at (100, 50): 1% = 4px horizontally, 5px vertically
CANVAS_LEFT = 100
CANVAS_TOP = 50
CANVAS_WIDTH = 400
CANVAS_HEIGHT = 500


def pct_to_px(pct_x, pct_y):
    """Host pixel position of a canvas percent position on the test canvas"""
    return (CANVAS_LEFT + pct_x / 100.0 * CANVAS_WIDTH,
            CANVAS_TOP + pct_y / 100.0 * CANVAS_HEIGHT)


@pytest.fixture
def canvas_rect():
    from models.transform import CanvasRect
    return CanvasRect(CANVAS_LEFT, CANVAS_TOP, CANVAS_WIDTH, CANVAS_HEIGHT)


# ── Images ──────────────────────────────────────────────────────────────

def make_png_bytes(width, height, color=(200, 80, 40, 255)):
    from PIL import Image
    buffer = io.BytesIO()
    Image.new('RGBA', (width, height), color).save(buffer, 'PNG')
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    """Factory for PNG bytes of a given size"""
    return make_png_bytes


# ── Fake collaborators ──────────────────────────────────────────────────

class FakeDecoder:
    """Decoder resolving each payload after a per-payload delay.

    Payloads are bytes of the form b'WxH' (b'fail' raises DecodeError,
    b'io-error' raises OSError);
    delays let tests control completion order.
    """

    def __init__(self, delays=None):
        self.delays = delays or {}
        self.calls = []

    async def decode(self, data):
        from services.decode_service import DecodeError, DecodedImage
        self.calls.append(data)
        await asyncio.sleep(self.delays.get(data, 0))
        if data == b'fail':
            raise DecodeError("broken image")
        if data == b'io-error':
            raise OSError("disk gone")
        width, height = (int(v) for v in data.decode().split('x'))
        return DecodedImage(handle=f"decoded:{data.decode()}", width=width, height=height)


class FakeRemover:
    """Background-removal service completing when its gate event is set"""

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []
        self.gate = None

    async def remove(self, handle):
        self.calls.append(handle)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise RuntimeError("model not available")
        return f"{handle}:cutout"


@pytest.fixture
def fake_decoder():
    return FakeDecoder()


@pytest.fixture
def fake_remover():
    return FakeRemover()


# ── Scenes and engines ──────────────────────────────────────────────────

@pytest.fixture
def scene():
    """Empty portrait scene"""
    from models.scene import Scene
    return Scene()


@pytest.fixture
def starter_scene():
    """Scene with the starter collage (img-1..3, text-1)"""
    from models.scene import Scene
    return Scene.starter()


@pytest.fixture
def engine(canvas_rect, fake_decoder, fake_remover):
    """EditorEngine on the starter scene with a measured canvas"""
    from services.editor_engine import EditorEngine
    return EditorEngine(rect_provider=lambda: canvas_rect,
                        decoder=fake_decoder, remover=fake_remover)
