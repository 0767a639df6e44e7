"""File operations for the main window - new, open, save, import, export"""
import os

from PyQt5.QtWidgets import QFileDialog, QMessageBox

from constants import DRAFT_FILE_FILTER, EXPORT_FILE_FILTER, IMPORT_FILE_FILTER, DEFAULT_DRAFT_MODE
from services.draft_service import save_draft, load_draft, scene_from_draft, draft_metadata
from services.export_service import export_png
from services.image_import import ImportFile
from utils.logger import loggerRaise


class FileActions:
	"""Handles all file menu operations"""

	def __init__(self, main_window):
		"""Initialize with reference to main window

		Args:
			main_window: The CollageEditor main window instance
		"""
		self.main_window = main_window

	@property
	def engine(self):
		return self.main_window.engine

	def new_collage(self):
		"""Start over from the starter collage, prompting to save first"""
		if not self.main_window._prompt_save_if_needed():
			return
		self.engine.new_collage()
		self.main_window.draft_mode = DEFAULT_DRAFT_MODE
		self.main_window.draft_clips = []
		self.main_window.current_file_path = None
		self.main_window.is_saved = True
		self.main_window._update_window_title()
		self.main_window.status_left.setText("New collage")

	def save_draft(self):
		"""Save to the current draft file, or ask for one"""
		if self.main_window.current_file_path:
			self._save_to_file(self.main_window.current_file_path)
		else:
			self.save_draft_as()

	def save_draft_as(self):
		filename, _ = QFileDialog.getSaveFileName(
			self.main_window,
			"Save Draft",
			"",
			DRAFT_FILE_FILTER
		)
		if filename:
			if not filename.lower().endswith('.json'):
				filename += '.json'
			self._save_to_file(filename)

	def _save_to_file(self, filename):
		try:
			save_draft(self.engine.scene, filename, self.main_window.draft_mode, self.main_window.draft_clips)
			self.main_window.current_file_path = filename
			self.main_window.is_saved = True
			self.main_window._update_window_title()
			self.main_window._add_to_recent_drafts(filename)
			self.main_window.status_left.setText(f"Saved to {os.path.basename(filename)}")
		except Exception as e:
			loggerRaise(e, "Failed to save draft")

	def open_draft(self):
		"""Ask for a draft file and open it"""
		if not self.main_window._prompt_save_if_needed():
			return

		filename, _ = QFileDialog.getOpenFileName(
			self.main_window,
			"Open Draft",
			"",
			DRAFT_FILE_FILTER
		)
		if filename:
			self.open_draft_file(filename)

	def open_draft_file(self, filename):
		"""Replace the current scene with a draft's contents"""
		try:
			draft = load_draft(filename)
			scene = scene_from_draft(draft)
			mode, clips = draft_metadata(draft)
			self.engine.attach_scene(scene)
			self.main_window.draft_mode = mode
			self.main_window.draft_clips = clips
			self.main_window.current_file_path = filename
			self.main_window.is_saved = True
			self.main_window._update_window_title()
			self.main_window._add_to_recent_drafts(filename)
			self.main_window.status_left.setText(f"Opened {os.path.basename(filename)}")
		except Exception as e:
			loggerRaise(e, "Failed to open draft")

	def import_images(self):
		"""Pick image files and import them onto the canvas"""
		filenames, _ = QFileDialog.getOpenFileNames(
			self.main_window,
			"Add Photos",
			"",
			IMPORT_FILE_FILTER
		)
		if not filenames:
			return
		try:
			files = [ImportFile.from_path(f) for f in filenames]
		except Exception as e:
			loggerRaise(e, "Failed to read images")
			return
		self.engine.on_paste(files)
		self.main_window.status_left.setText(f"Importing {len(files)} image(s)...")

	def export_png(self):
		"""Render the collage at export resolution and write a PNG"""
		try:
			filename, _ = QFileDialog.getSaveFileName(
				self.main_window,
				"Export as PNG",
				"",
				EXPORT_FILE_FILTER
			)
			if not filename:
				return
			if not filename.lower().endswith('.png'):
				filename += '.png'

			width, height = export_png(self.engine.scene, filename)
			QMessageBox.information(
				self.main_window,
				"Export Successful",
				f"Collage exported ({width}x{height}) to:\n{filename}"
			)
		except Exception as e:
			loggerRaise(e, "Failed to export PNG")
