# PyQt5 imports
from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import Qt, QRectF, QPointF, QSize
from PyQt5.QtGui import (
	QPainter, QPainterPath, QColor, QImage, QPen, QFont, QLinearGradient, QBrush
)

import logging
import math
from PIL import Image

from constants import (
	PREVIEW_WIDTH_PX, CANVAS_MARGIN_PX, CANVAS_HOST_BACKGROUND,
	SELECTION_OUTLINE_COLOR, LOCKED_OUTLINE_COLOR
)
from models.color import Color
from services.export_service import apply_filter, PLACEHOLDER_RGBA
from services.image_import import ImportFile
from services.interaction import PointerEvent
from utils.coordinate_transforms import fit_canvas_rect, geometry_to_pixels
from utils.logger import loggerRaise


# Qt key -> host-neutral key name understood by the engine's key handler
KEY_NAMES = {
	Qt.Key_Delete: 'Delete',
	Qt.Key_Backspace: 'Backspace',
}

_ALIGN_FLAGS = {
	'left': Qt.AlignLeft,
	'center': Qt.AlignHCenter,
	'right': Qt.AlignRight,
}


def pil_to_qimage(img):
	"""Convert a Pillow image to a detached RGBA QImage"""
	rgba = img.convert('RGBA')
	data = rgba.tobytes('raw', 'RGBA')
	image = QImage(data, rgba.width, rgba.height, rgba.width * 4, QImage.Format_RGBA8888)
	# Copy since the buffer is freed when data goes out of scope
	return image.copy()


class CollageCanvas(QWidget):
	"""Interactive canvas host for an EditorEngine.

	Paints the scene centered at the format aspect, feeds pointer events to
	the engine and forwards Delete/Backspace through the engine's key handler.
	Files dropped on the canvas are imported through the paste handler.
	"""

	def __init__(self, engine, parent=None):
		super().__init__(parent)
		self._logger = logging.getLogger('CollageCanvas')
		self.engine = engine
		self._input = engine.input_handlers()
		# item id -> (src, filter, QImage); src is held so identity checks stay valid
		self._image_cache = {}

		self.setFocusPolicy(Qt.StrongFocus)
		self.setAcceptDrops(True)
		self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

		engine.set_rect_provider(self.canvas_rect)
		engine.changed.connect(self._on_engine_changed)

	def sizeHint(self):
		return QSize(PREVIEW_WIDTH_PX + 2 * CANVAS_MARGIN_PX, 720)

	# ========================================
	# Geometry
	# ========================================

	def canvas_rect(self):
		"""Canvas rectangle in widget pixels, measured from the current size"""
		fmt = self.engine.scene.format
		return fit_canvas_rect(self.width(), self.height(), fmt.width, fmt.height, margin=CANVAS_MARGIN_PX)

	def _preview_scale(self, rect):
		"""Widget pixels per preview pixel (radius, text size and padding are preview pixels)"""
		return rect.width / PREVIEW_WIDTH_PX

	def _on_engine_changed(self, event, item_id):
		if event == 'reset':
			self._image_cache.clear()
		elif event == 'deleted':
			self._image_cache.pop(item_id, None)
		elif event == 'updated' and item_id in self._image_cache:
			item = self.engine.scene.find_item(item_id)
			src, filter_id, _ = self._image_cache[item_id]
			if item is None or item.src is not src or item.filter != filter_id:
				del self._image_cache[item_id]
		self.update()

	# ========================================
	# Mouse / keyboard
	# ========================================

	def _pointer_event(self, event):
		return PointerEvent(event.pos().x(), event.pos().y())

	def mousePressEvent(self, event):
		"""Start a drag on the topmost item under the pointer"""
		if event.button() != Qt.LeftButton:
			super().mousePressEvent(event)
			return
		self.setFocus()
		try:
			if self.engine.pointer_down(self._pointer_event(event)):
				self.setCursor(Qt.ClosedHandCursor)
		except Exception as e:
			loggerRaise(e, "Failed to start drag")
		event.accept()

	def mouseMoveEvent(self, event):
		if not self.engine.interaction.is_dragging:
			super().mouseMoveEvent(event)
			return
		try:
			self.engine.update_drag(self._pointer_event(event))
		except Exception as e:
			loggerRaise(e, "Failed to move item")
		event.accept()

	def mouseReleaseEvent(self, event):
		if self.engine.end_drag(self._pointer_event(event)):
			self.unsetCursor()
			event.accept()
			return
		super().mouseReleaseEvent(event)

	def leaveEvent(self, event):
		"""Pointer leaving the canvas ends the drag like a release"""
		if self.engine.end_drag():
			self.unsetCursor()
		super().leaveEvent(event)

	def keyPressEvent(self, event):
		key_name = KEY_NAMES.get(event.key())
		if key_name and event.modifiers() == Qt.NoModifier and self._input['key'](key_name):
			event.accept()
			return
		super().keyPressEvent(event)

	# ========================================
	# Drag and drop of files
	# ========================================

	def dragEnterEvent(self, event):
		if event.mimeData().hasUrls():
			event.acceptProposedAction()
		else:
			event.ignore()

	def dropEvent(self, event):
		files = []
		for url in event.mimeData().urls():
			if url.isLocalFile():
				try:
					files.append(ImportFile.from_path(url.toLocalFile()))
				except OSError as e:
					self._logger.error(f"Cannot read dropped file {url.toLocalFile()}: {e}")
		if files:
			self._input['paste'](files)
			event.acceptProposedAction()

	# ========================================
	# Painting
	# ========================================

	def paintEvent(self, event):
		painter = QPainter(self)
		painter.setRenderHint(QPainter.Antialiasing)
		painter.setRenderHint(QPainter.SmoothPixmapTransform)
		painter.fillRect(self.rect(), QColor(CANVAS_HOST_BACKGROUND))

		rect = self.canvas_rect()
		if not rect.is_measured:
			painter.end()
			return

		canvas = QRectF(rect.left, rect.top, rect.width, rect.height)
		painter.save()
		painter.setClipRect(canvas)
		self._paint_background(painter, canvas)

		scene = self.engine.scene
		selected_id = scene.selected_id
		for item in scene.items:
			self._paint_item(painter, item, rect, item.id == selected_id)
		painter.restore()
		painter.end()

	def _paint_background(self, painter, canvas):
		background = self.engine.scene.background
		if not background.is_gradient:
			painter.fillRect(canvas, Color.parse(background.value).to_qcolor())
			return

		angle, colors = background.stops()
		# CSS angles: 0deg points up, 90deg points right
		rad = math.radians(angle)
		dx, dy = math.sin(rad), -math.cos(rad)
		half = (abs(canvas.width() * dx) + abs(canvas.height() * dy)) / 2
		center = canvas.center()
		gradient = QLinearGradient(
			QPointF(center.x() - dx * half, center.y() - dy * half),
			QPointF(center.x() + dx * half, center.y() + dy * half)
		)
		for i, color in enumerate(colors):
			gradient.setColorAt(i / (len(colors) - 1), color.to_qcolor())
		painter.fillRect(canvas, QBrush(gradient))

	def _paint_item(self, painter, item, rect, is_selected):
		left, top, width, height = geometry_to_pixels(item.geometry, rect)
		scale = self._preview_scale(rect)

		painter.save()
		# Decorative transform about the frame center
		painter.translate(left + width / 2, top + height / 2)
		painter.rotate(item.rotation)
		painter.scale(item.scale, item.scale)
		frame = QRectF(-width / 2, -height / 2, width, height)

		path = QPainterPath()
		radius = item.radius * scale
		path.addRoundedRect(frame, radius, radius)

		painter.save()
		painter.setClipPath(path, Qt.IntersectClip)
		if item.is_image:
			self._paint_image(painter, item, frame)
		else:
			self._paint_text(painter, item, frame, scale)
		painter.restore()

		if is_selected or item.locked:
			pen = QPen(QColor(SELECTION_OUTLINE_COLOR if is_selected else LOCKED_OUTLINE_COLOR))
			pen.setWidthF(2.0 / max(item.scale, 0.01))
			pen.setStyle(Qt.SolidLine if is_selected else Qt.DashLine)
			painter.setPen(pen)
			painter.setBrush(Qt.NoBrush)
			painter.drawPath(path)
		painter.restore()

	def _image_for(self, item):
		entry = self._image_cache.get(item.id)
		if entry is not None and entry[0] is item.src and entry[1] == item.filter:
			return entry[2]
		image = pil_to_qimage(apply_filter(item.src.convert('RGBA'), item.filter))
		self._image_cache[item.id] = (item.src, item.filter, image)
		return image

	def _paint_image(self, painter, item, frame):
		painter.fillRect(frame, QColor(*PLACEHOLDER_RGBA))
		if not isinstance(item.src, Image.Image):
			painter.setPen(QColor('#475569'))
			painter.drawText(frame, Qt.AlignCenter, item.label)
			return

		image = self._image_for(item)
		cover = max(frame.width() / image.width(), frame.height() / image.height()) * item.zoom
		scaled_w = image.width() * cover
		scaled_h = image.height() * cover
		target = QRectF(
			frame.left() + (frame.width() - scaled_w) / 2 + item.crop_x / 100.0 * frame.width(),
			frame.top() + (frame.height() - scaled_h) / 2 + item.crop_y / 100.0 * frame.height(),
			scaled_w,
			scaled_h
		)
		painter.drawImage(target, image)

	def _paint_text(self, painter, item, frame, scale):
		painter.fillRect(frame, Color.parse(item.get('background_color')).to_qcolor(item.get('background_opacity')))

		border = item.get('border_width') * scale
		if border > 0:
			pen = QPen(Color.parse(item.get('border_color')).to_qcolor())
			pen.setWidthF(border)
			painter.setPen(pen)
			painter.setBrush(Qt.NoBrush)
			painter.drawRect(frame)

		font = QFont(item.get('font'))
		font.setPixelSize(max(1, int(round(item.get('size') * scale))))
		painter.setFont(font)
		painter.setPen(Color.parse(item.get('color')).to_qcolor())
		padding = item.get('padding') * scale
		text_rect = frame.adjusted(padding, padding, -padding, -padding)
		flags = _ALIGN_FLAGS[item.get('align')] | Qt.AlignVCenter | Qt.TextWordWrap
		painter.drawText(text_rect, flags, item.text)
