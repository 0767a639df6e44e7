import sys
import os
import logging

# Configure logging
logging.basicConfig(
    level=logging.WARNING,  # Only show warnings and errors
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow, QLabel
from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QPalette, QColor

# Component imports
from components.canvas_widget import CollageCanvas

# Model / service imports
from models.scene import Scene
from services.editor_engine import EditorEngine

# Utility imports
from utils.logger import set_main_window
from utils.qt_asyncio import AsyncioPump
from version import get_version

from constants import (
    AUTOSAVE_INTERVAL_MS, CONFIG_DIR_NAME, CONFIG_FILE_NAME,
    AUTOSAVE_FILE_NAME, MAX_RECENT_DRAFTS, DEFAULT_DRAFT_MODE,
)

# Action imports
from actions.file_actions import FileActions

# Mixin imports
from main.menu_mixin import MenuMixin
from main.event_mixin import EventMixin
from main.config_mixin import ConfigMixin


class CollageEditor(MenuMixin, EventMixin, ConfigMixin, QMainWindow):
    def __init__(self, remover=None, config_dir=None):
        """Main editor window

        Args:
            remover: Optional background-removal service (`async remove(handle)`)
            config_dir: Config directory (defaults to ~/.collage_editor)
        """
        super().__init__()
        self._logger = logging.getLogger('CollageEditor')
        self.setWindowTitle("Collage Editor")
        self.resize(1100, 860)

        # Asyncio loop driven from the Qt event loop (decode, background removal)
        self.async_pump = AsyncioPump(parent=self)

        # Track current file and saved state
        self.current_file_path = None
        self.is_saved = True
        # Draft mode and clip list are written back unchanged on save
        self.draft_mode = DEFAULT_DRAFT_MODE
        self.draft_clips = []

        # Recent drafts and autosave
        self.recent_drafts = []
        self.max_recent_drafts = MAX_RECENT_DRAFTS
        self.config_dir = config_dir or os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
        self.config_file = os.path.join(self.config_dir, CONFIG_FILE_NAME)
        self.autosave_file = os.path.join(self.config_dir, AUTOSAVE_FILE_NAME)
        self._load_config()

        # Engine is the single owner of the scene; every widget goes through it
        self.engine = EditorEngine(Scene.starter(self.preferred_format), remover=remover)
        self.engine.set_crop_mode(self.preferred_crop_mode)
        self.engine.changed.connect(self._on_engine_changed)

        # Initialize global logger with main window reference
        set_main_window(self)

        # Initialize action handlers (composition pattern)
        self.file_actions = FileActions(self)

        self.setup_ui()
        self._install_input_handlers()
        self.async_pump.start()

        # Autosave timer
        self.autosave_timer = QTimer(self)
        self.autosave_timer.timeout.connect(self._autosave)
        self.autosave_timer.start(AUTOSAVE_INTERVAL_MS)

        self._update_window_title()

    def setup_ui(self):
        self.canvas_widget = CollageCanvas(self.engine, self)
        self.setCentralWidget(self.canvas_widget)

        self._create_menu_bar()

        # Status bar with left and right sections
        self.status_left = QLabel(f"Ready - v{get_version()}")
        self.status_right = QLabel("Crop mode" if self.engine.crop_mode else "")
        self.statusBar().addWidget(self.status_left, 1)
        self.statusBar().addPermanentWidget(self.status_right)

    def _on_engine_changed(self, event, item_id):
        """Track unsaved changes and refresh selection-dependent UI"""
        if event != 'selection' and self.is_saved:
            self.is_saved = False
            self._update_window_title()
        if hasattr(self, 'lock_action'):
            self._update_selection_actions()
        if event == 'added' and item_id is not None:
            item = self.engine.scene.find_item(item_id)
            if item is not None and item.is_image:
                self.status_left.setText(f"Added {item.label}")


def main():
    """Main entry point for the Collage Editor application"""
    app = QtWidgets.QApplication([])

    # Use Fusion style with dark palette
    app.setStyle("Fusion")

    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.WindowText, Qt.white)
    dark_palette.setColor(QPalette.Base, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ToolTipBase, Qt.white)
    dark_palette.setColor(QPalette.ToolTipText, Qt.white)
    dark_palette.setColor(QPalette.Text, Qt.white)
    dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ButtonText, Qt.white)
    dark_palette.setColor(QPalette.Highlight, QColor(99, 102, 241))
    dark_palette.setColor(QPalette.HighlightedText, Qt.black)

    app.setPalette(dark_palette)

    window = CollageEditor()
    window.show()
    window._check_autosave_recovery()
    app.exec_()


if __name__ == "__main__":
    main()
