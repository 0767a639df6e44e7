"""Configuration management for CollageEditor"""

import os
import json
from PyQt5.QtWidgets import QMessageBox

from constants import CANVAS_FORMATS, DEFAULT_FORMAT
from services.draft_service import save_draft, load_draft, scene_from_draft, draft_metadata
from utils.logger import loggerRaise


class ConfigMixin:
	"""Configuration file, recent drafts and autosave

	Expects the window to define config_dir, config_file, autosave_file,
	recent_drafts, max_recent_drafts, engine and is_saved.
	"""

	def _load_config(self):
		"""Load recent drafts and settings from the config file"""
		self.preferred_format = DEFAULT_FORMAT
		self.preferred_crop_mode = False
		try:
			if os.path.exists(self.config_file):
				with open(self.config_file, 'r', encoding='utf-8') as f:
					config = json.load(f)
				# Drafts that were moved or deleted since the last run are dropped
				self.recent_drafts = [p for p in config.get('recent_drafts', []) if os.path.exists(p)]
				self.recent_drafts = self.recent_drafts[:self.max_recent_drafts]
				if config.get('format') in CANVAS_FORMATS:
					self.preferred_format = config['format']
				self.preferred_crop_mode = bool(config.get('crop_mode', False))
		except Exception as e:
			loggerRaise(e, "Error loading config")

	def _save_config(self):
		"""Save recent drafts and settings to the config file"""
		try:
			os.makedirs(self.config_dir, exist_ok=True)

			config = {
				'recent_drafts': self.recent_drafts[:self.max_recent_drafts],
				'format': self.engine.scene.format.id,
				'crop_mode': self.engine.crop_mode,
			}

			with open(self.config_file, 'w', encoding='utf-8') as f:
				json.dump(config, f, indent=2)
		except Exception as e:
			loggerRaise(e, "Error saving config")

	def _add_to_recent_drafts(self, filepath):
		"""Move a draft to the top of the recent list and persist it"""
		if filepath in self.recent_drafts:
			self.recent_drafts.remove(filepath)
		self.recent_drafts.insert(0, filepath)
		self.recent_drafts = self.recent_drafts[:self.max_recent_drafts]

		if hasattr(self, 'recent_menu'):
			self._update_recent_drafts_menu()
		self._save_config()

	def _update_recent_drafts_menu(self):
		"""Rebuild the Recent Drafts submenu"""
		self.recent_menu.clear()

		if not self.recent_drafts:
			no_recent = self.recent_menu.addAction("No recent drafts")
			no_recent.setEnabled(False)
			return

		for filepath in self.recent_drafts:
			action = self.recent_menu.addAction(os.path.basename(filepath))
			action.setToolTip(filepath)
			action.triggered.connect(lambda checked, f=filepath: self._open_recent_draft(f))

		self.recent_menu.addSeparator()
		clear_action = self.recent_menu.addAction("Clear Recent Drafts")
		clear_action.triggered.connect(self._clear_recent_drafts)

	def _clear_recent_drafts(self):
		self.recent_drafts = []
		if hasattr(self, 'recent_menu'):
			self._update_recent_drafts_menu()
		self._save_config()

	def _open_recent_draft(self, filepath):
		"""Open a draft from the recent list"""
		if not os.path.exists(filepath):
			QMessageBox.warning(self, "File Not Found", f"The draft no longer exists:\n{filepath}")
			self.recent_drafts.remove(filepath)
			self._update_recent_drafts_menu()
			self._save_config()
			return

		if not self._prompt_save_if_needed():
			return
		self.file_actions.open_draft_file(filepath)

	def _autosave(self):
		"""Write the current scene to the autosave draft when there are unsaved changes"""
		try:
			if not self.is_saved:
				os.makedirs(self.config_dir, exist_ok=True)
				save_draft(self.engine.scene, self.autosave_file, self.draft_mode, self.draft_clips)
				self._logger.info("Autosaved")
		except Exception as e:
			loggerRaise(e, "Autosave failed")

	def _check_autosave_recovery(self):
		"""Offer to restore the autosave draft left by a previous session"""
		try:
			if os.path.exists(self.autosave_file):
				reply = QMessageBox.question(
					self,
					"Recover Autosave",
					"An autosave was found. Would you like to recover it?",
					QMessageBox.Yes | QMessageBox.No,
					QMessageBox.Yes
				)

				if reply == QMessageBox.Yes:
					draft = load_draft(self.autosave_file)
					scene = scene_from_draft(draft)
					self.draft_mode, self.draft_clips = draft_metadata(draft)
					self.engine.attach_scene(scene)
					# Recovered work has no file yet
					self.current_file_path = None
					self.is_saved = False
					self._update_window_title()

				os.remove(self.autosave_file)
		except Exception as e:
			loggerRaise(e, "Error checking autosave")

	def _update_window_title(self):
		"""Window title with the current draft name and a modified marker"""
		name = os.path.basename(self.current_file_path) if self.current_file_path else "Untitled"
		modified = "" if self.is_saved else "*"
		self.setWindowTitle(f"{name}{modified} - Collage Editor")

	def _prompt_save_if_needed(self):
		"""Ask to save unsaved changes

		Returns:
			True if it's safe to proceed (saved or discarded)
			False if the user cancelled
		"""
		if not self.is_saved:
			reply = QMessageBox.question(
				self,
				"Unsaved Changes",
				"Do you want to save your changes?",
				QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel,
				QMessageBox.Save
			)

			if reply == QMessageBox.Save:
				self.file_actions.save_draft()
				# The save dialog may have been cancelled
				return self.is_saved
			elif reply == QMessageBox.Cancel:
				return False

		return True
