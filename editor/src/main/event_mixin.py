"""Window event handlers for CollageEditor"""

from PyQt5.QtWidgets import QApplication, QLineEdit, QTextEdit, QPlainTextEdit, QAbstractSpinBox
from PyQt5.QtCore import Qt, QBuffer, QByteArray, QIODevice, QEvent
from PyQt5.QtGui import QKeySequence

from services.image_import import ImportFile
from utils.logger import loggerRaise

# Widgets that keep Delete/Backspace/Paste for their own text editing
TEXT_INPUT_WIDGETS = (QLineEdit, QTextEdit, QPlainTextEdit, QAbstractSpinBox)

KEY_NAMES = {
	Qt.Key_Delete: 'Delete',
	Qt.Key_Backspace: 'Backspace',
}


def clipboard_files(mime_data):
	"""Collect importable files from clipboard mime data

	Local file URLs are read from disk; raw image data becomes a PNG file
	named 'pasted.png'.
	"""
	files = []
	if mime_data.hasUrls():
		for url in mime_data.urls():
			if url.isLocalFile():
				files.append(ImportFile.from_path(url.toLocalFile()))
	if not files and mime_data.hasImage():
		image = mime_data.imageData()
		data = QByteArray()
		buffer = QBuffer(data)
		buffer.open(QIODevice.WriteOnly)
		image.save(buffer, "PNG")
		buffer.close()
		files.append(ImportFile('pasted.png', 'image/png', bytes(data)))
	return files


class EventMixin:
	"""Window events and the application-wide key/paste subscriptions"""

	def _install_input_handlers(self):
		"""Subscribe the engine's key and paste handlers to application events"""
		self._input_handlers = self.engine.input_handlers()
		QApplication.instance().installEventFilter(self)

	def _remove_input_handlers(self):
		app = QApplication.instance()
		if app is not None:
			app.removeEventFilter(self)

	def eventFilter(self, obj, event):
		"""Route Delete/Backspace and paste to the engine unless a text field has focus"""
		if event.type() != QEvent.KeyPress or not hasattr(self, '_input_handlers'):
			return False
		if isinstance(QApplication.focusWidget(), TEXT_INPUT_WIDGETS):
			return False
		# Only handle each key press once, on its way to the focused widget
		if obj is not QApplication.focusWidget() and QApplication.focusWidget() is not None:
			return False

		try:
			if event.matches(QKeySequence.Paste):
				return self.paste_from_clipboard()

			key_name = KEY_NAMES.get(event.key())
			if key_name and event.modifiers() == Qt.NoModifier:
				return self._input_handlers['key'](key_name)
		except Exception as e:
			loggerRaise(e, "Error handling key press")
		return False

	def paste_from_clipboard(self):
		"""Import image files or image data from the clipboard

		Returns:
			True if something was scheduled for import
		"""
		files = clipboard_files(QApplication.clipboard().mimeData())
		if not files:
			return False
		self._input_handlers['paste'](files)
		self.status_left.setText(f"Importing {len(files)} image(s)...")
		return True

	def closeEvent(self, event):
		"""Offer to save, persist config and shut down the asyncio loop"""
		if not self._prompt_save_if_needed():
			event.ignore()
			return
		self.autosave_timer.stop()
		self._save_config()
		self._remove_input_handlers()
		self.async_pump.close()
		super().closeEvent(event)
