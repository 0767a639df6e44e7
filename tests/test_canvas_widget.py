"""
pytest-qt tests for the canvas host widget.

Verifies:
- The widget measures the canvas rect from its current size
- Mouse press/move/release drive Move drags through the engine
- Delete goes through the engine's key handler
- Painting the scene (images, gradient, text, selection) does not fail
- Cached images are dropped when their item is deleted or its picture changes
"""
import pytest
from PIL import Image
from PyQt5.QtCore import Qt, QEvent, QPointF
from PyQt5.QtGui import QMouseEvent, QKeyEvent
from PyQt5.QtWidgets import QApplication

from components.canvas_widget import CollageCanvas, pil_to_qimage


# 448x548 leaves a 400x500 canvas at (24, 24) after the 24px margin
WIDGET_SIZE = (448, 548)


def canvas_point(pct_x, pct_y):
    return QPointF(24 + pct_x * 4, 24 + pct_y * 5)


def send_mouse(widget, event_type, point, button=Qt.LeftButton):
    buttons = Qt.NoButton if event_type == QEvent.MouseButtonRelease else Qt.LeftButton
    if event_type == QEvent.MouseMove:
        button = Qt.NoButton
    QApplication.sendEvent(widget, QMouseEvent(event_type, point, button, buttons, Qt.NoModifier))


@pytest.fixture
def canvas(qtbot, engine):
    widget = CollageCanvas(engine)
    qtbot.addWidget(widget)
    widget.resize(*WIDGET_SIZE)
    return widget


# ══════════════════════════════════════════════════════════════════════════
# Geometry
# ══════════════════════════════════════════════════════════════════════════

class TestCanvasRect:

    def test_rect_follows_widget_size(self, canvas):
        rect = canvas.canvas_rect()
        assert (rect.left, rect.top, rect.width, rect.height) == (24, 24, 400, 500)

    def test_engine_uses_widget_rect(self, canvas, engine):
        canvas.resize(848, 548)
        assert engine.interaction._measure().left == pytest.approx(224)


# ══════════════════════════════════════════════════════════════════════════
# Pointer
# ══════════════════════════════════════════════════════════════════════════

class TestMouseDrag:

    def test_press_move_release(self, canvas, engine):
        # img-2 sits at (50, 10, 42, 30)
        send_mouse(canvas, QEvent.MouseButtonPress, canvas_point(60, 20))
        assert engine.scene.selected_id == 'img-2'
        assert engine.interaction.is_dragging

        send_mouse(canvas, QEvent.MouseMove, canvas_point(65, 30))
        item = engine.scene.get_item('img-2')
        assert item.x == pytest.approx(55)
        assert item.y == pytest.approx(20)

        send_mouse(canvas, QEvent.MouseButtonRelease, canvas_point(65, 30))
        assert not engine.interaction.is_dragging

    def test_move_without_press(self, canvas, engine):
        before = engine.scene.items
        send_mouse(canvas, QEvent.MouseMove, canvas_point(65, 30))
        assert engine.scene.items == before

    def test_press_on_empty_area(self, canvas, engine):
        send_mouse(canvas, QEvent.MouseButtonPress, canvas_point(98, 98))
        assert not engine.interaction.is_dragging
        assert engine.scene.selected_id == 'img-1'

    def test_leave_ends_drag(self, canvas, engine):
        send_mouse(canvas, QEvent.MouseButtonPress, canvas_point(60, 20))
        QApplication.sendEvent(canvas, QEvent(QEvent.Leave))
        assert not engine.interaction.is_dragging


# ══════════════════════════════════════════════════════════════════════════
# Keyboard
# ══════════════════════════════════════════════════════════════════════════

class TestKeys:

    @pytest.mark.parametrize("key", [Qt.Key_Delete, Qt.Key_Backspace])
    def test_delete_removes_selection(self, canvas, engine, key):
        QApplication.sendEvent(canvas, QKeyEvent(QEvent.KeyPress, key, Qt.NoModifier))
        assert not engine.scene.has_item('img-1')

    def test_other_key_ignored(self, canvas, engine):
        QApplication.sendEvent(canvas, QKeyEvent(QEvent.KeyPress, Qt.Key_A, Qt.NoModifier, 'a'))
        assert len(engine.scene) == 4


# ══════════════════════════════════════════════════════════════════════════
# Painting
# ══════════════════════════════════════════════════════════════════════════

class TestPainting:

    def test_paint_starter_scene(self, canvas):
        assert not canvas.grab().isNull()

    def test_paint_images_and_gradient(self, canvas, engine):
        engine.update_item('img-1', {'src': Image.new('RGBA', (30, 20), (255, 0, 0, 255)),
                                     'filter': 'sepia', 'rotation': 10, 'crop_x': 20})
        engine.update_item('text-1', {'background_opacity': 0.5, 'border_width': 2, 'align': 'left'})
        engine.update_item('img-3', {'locked': True})
        engine.set_background({'type': 'gradient',
                               'value': 'linear-gradient(135deg, #f97316, #fb7185, #6366f1)'})
        assert not canvas.grab().isNull()
        assert len(canvas._image_cache) == 1

    def test_cache_cleared_on_reset(self, canvas, engine):
        engine.update_item('img-1', {'src': Image.new('RGBA', (4, 4))})
        canvas.grab()
        engine.new_collage()
        assert canvas._image_cache == {}

    def test_cache_evicts_deleted_item(self, canvas, engine):
        engine.update_item('img-2', {'src': Image.new('RGBA', (4, 4))})
        canvas.grab()
        assert set(canvas._image_cache) == {'img-2'}
        engine.delete_item('img-2')
        assert canvas._image_cache == {}

    def test_cache_evicts_on_filter_or_resource_change(self, canvas, engine):
        engine.update_item('img-2', {'src': Image.new('RGBA', (4, 4), (255, 0, 0, 255))})
        canvas.grab()
        engine.update_item('img-2', {'filter': 'mono'})
        assert canvas._image_cache == {}

        canvas.grab()
        engine.update_item('img-2', {'src': Image.new('RGBA', (4, 4), (0, 0, 255, 255))})
        assert canvas._image_cache == {}

        canvas.grab()
        assert len(canvas._image_cache) == 1

    def test_cache_kept_on_geometry_change(self, canvas, engine):
        engine.update_item('img-2', {'src': Image.new('RGBA', (4, 4))})
        canvas.grab()
        cached = canvas._image_cache['img-2'][2]
        engine.update_item('img-2', {'x': 30})
        canvas.grab()
        assert canvas._image_cache['img-2'][2] is cached

    def test_replaced_resource_is_repainted(self, canvas, engine):
        engine.update_item('img-2', {'src': Image.new('RGBA', (4, 4), (255, 0, 0, 255))})
        canvas.grab()
        new_src = Image.new('RGBA', (4, 4), (0, 0, 255, 255))
        engine.update_item('img-2', {'src': new_src})
        canvas.grab()
        src, _, image = canvas._image_cache['img-2']
        assert src is new_src
        assert image.pixelColor(1, 1).blue() == 255

    def test_pil_to_qimage(self):
        image = pil_to_qimage(Image.new('RGB', (7, 5), (0, 128, 255)))
        assert (image.width(), image.height()) == (7, 5)
        color = image.pixelColor(3, 2)
        assert (color.red(), color.green(), color.blue(), color.alpha()) == (0, 128, 255, 255)
