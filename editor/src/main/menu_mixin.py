"""Menu bar creation and menu action handlers for CollageEditor"""

from PyQt5.QtWidgets import QActionGroup

from constants import BACKGROUND_PRESETS, GRADIENT_PRESETS, FILTER_IDS
from utils.logger import loggerRaise


class MenuMixin:
    """Menu bar and menu action handlers"""

    def _create_menu_bar(self):
        """Create the menu bar with File, Edit, Arrange, Layout and Background menus"""
        menubar = self.menuBar()

        # File Menu
        file_menu = menubar.addMenu("&File")

        new_action = file_menu.addAction("&New Collage")
        new_action.setShortcut("Ctrl+N")
        new_action.triggered.connect(self.file_actions.new_collage)

        open_action = file_menu.addAction("&Open Draft...")
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.file_actions.open_draft)

        self.recent_menu = file_menu.addMenu("Recent Drafts")
        self._update_recent_drafts_menu()

        file_menu.addSeparator()

        save_action = file_menu.addAction("&Save Draft")
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self.file_actions.save_draft)

        save_as_action = file_menu.addAction("Save Draft &As...")
        save_as_action.setShortcut("Ctrl+Shift+S")
        save_as_action.triggered.connect(self.file_actions.save_draft_as)

        file_menu.addSeparator()

        import_action = file_menu.addAction("&Add Photos...")
        import_action.setShortcut("Ctrl+I")
        import_action.triggered.connect(self.file_actions.import_images)

        export_png_action = file_menu.addAction("Export as &PNG...")
        export_png_action.setShortcut("Ctrl+E")
        export_png_action.triggered.connect(self.file_actions.export_png)

        file_menu.addSeparator()

        exit_action = file_menu.addAction("E&xit")
        exit_action.setShortcut("Alt+F4")
        exit_action.triggered.connect(self.close)

        # Edit Menu
        self.edit_menu = menubar.addMenu("&Edit")

        add_photo_action = self.edit_menu.addAction("Add &Photo Frame")
        add_photo_action.triggered.connect(lambda: self.engine.add_photo())

        add_text_action = self.edit_menu.addAction("Add &Text")
        add_text_action.setShortcut("Ctrl+T")
        add_text_action.triggered.connect(lambda: self.engine.add_text())

        self.edit_menu.addSeparator()

        self.lock_action = self.edit_menu.addAction("&Lock")
        self.lock_action.setCheckable(True)
        self.lock_action.setShortcut("Ctrl+L")
        self.lock_action.triggered.connect(lambda checked: self.engine.toggle_lock())

        self.delete_action = self.edit_menu.addAction("&Delete")
        self.delete_action.triggered.connect(lambda: self.engine.delete_selected())

        self.edit_menu.addSeparator()

        self.remove_bg_action = self.edit_menu.addAction("&Remove Background")
        self.remove_bg_action.triggered.connect(self._remove_background)

        # Filter submenu
        filter_menu = self.edit_menu.addMenu("&Filter")
        self.filter_group = QActionGroup(self)
        self.filter_actions = {}
        for filter_id in FILTER_IDS:
            action = filter_menu.addAction(filter_id.capitalize())
            action.setCheckable(True)
            action.triggered.connect(lambda checked, f=filter_id: self._set_filter(f))
            self.filter_group.addAction(action)
            self.filter_actions[filter_id] = action

        # Arrange Menu
        arrange_menu = menubar.addMenu("&Arrange")

        front_action = arrange_menu.addAction("Bring to &Front")
        front_action.setShortcut("Ctrl+]")
        front_action.triggered.connect(lambda: self.engine.bring_to_front())

        back_action = arrange_menu.addAction("Send to &Back")
        back_action.setShortcut("Ctrl+[")
        back_action.triggered.connect(lambda: self.engine.send_to_back())

        cycle_action = arrange_menu.addAction("&Cycle Forward")
        cycle_action.setShortcut("Ctrl+Shift+]")
        cycle_action.triggered.connect(lambda: self.engine.cycle_next())

        arrange_menu.addSeparator()

        self.crop_mode_action = arrange_menu.addAction("C&rop Mode")
        self.crop_mode_action.setCheckable(True)
        self.crop_mode_action.setShortcut("Ctrl+R")
        self.crop_mode_action.setChecked(self.engine.crop_mode)
        self.crop_mode_action.toggled.connect(self._on_crop_mode_toggled)

        # Layout Menu
        layout_menu = menubar.addMenu("&Layout")
        for name in self.engine.templates.names():
            template = self.engine.templates.get(name)
            action = layout_menu.addAction(f"{template.title} ({template.note})")
            action.triggered.connect(lambda checked, n=name: self._apply_template(n))

        # Background Menu
        background_menu = menubar.addMenu("&Background")
        for preset in BACKGROUND_PRESETS:
            action = background_menu.addAction(preset['label'])
            action.triggered.connect(lambda checked, v=preset['value']: self.engine.set_background({'type': 'color', 'value': v}))
        background_menu.addSeparator()
        for preset in GRADIENT_PRESETS:
            action = background_menu.addAction(preset['label'])
            action.triggered.connect(lambda checked, v=preset['value']: self.engine.set_background({'type': 'gradient', 'value': v}))

        self._update_selection_actions()

    def _update_selection_actions(self):
        """Enable/check item actions for the current selection"""
        item = self.engine.scene.get_selected_item()
        has_item = item is not None
        self.lock_action.setEnabled(has_item)
        self.lock_action.setChecked(has_item and item.locked)
        self.delete_action.setEnabled(has_item)

        is_image = has_item and item.is_image
        can_remove = (is_image and self.engine.background_remover is not None
                      and self.engine.background_remover.can_remove(item.id))
        self.remove_bg_action.setEnabled(can_remove)
        for filter_id, action in self.filter_actions.items():
            action.setEnabled(is_image)
            action.setChecked(is_image and item.filter == filter_id)

    def _on_crop_mode_toggled(self, checked):
        self.engine.set_crop_mode(checked)
        self.status_right.setText("Crop mode" if checked else "")

    def _apply_template(self, name):
        try:
            count = self.engine.apply_layout_template(name)
            self.status_left.setText(f"Applied '{name}' layout to {count} item(s)")
        except Exception as e:
            loggerRaise(e, "Failed to apply layout")

    def _set_filter(self, filter_id):
        item = self.engine.scene.get_selected_item()
        if item is not None and item.is_image:
            self.engine.update_selected({'filter': filter_id})

    def _remove_background(self):
        task = self.engine.schedule(self.engine.remove_background_for_selected())
        task.add_done_callback(self._on_background_removed)
        self.remove_bg_action.setEnabled(False)
        self.status_left.setText("Removing background...")

    def _on_background_removed(self, task):
        if task.cancelled():
            return
        self.status_left.setText("Background removed" if task.result() else "Background removal failed")
        self._update_selection_actions()
