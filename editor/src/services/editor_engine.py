"""
Collage Editor - Engine Facade

EditorEngine is the one surface hosts talk to. It owns the Scene and wires
the interaction engine, layout registry, auto-fit, import and background
removal around it.

Hosts subscribe to `engine.changed(event, item_id)` to repaint, supply a
rect provider for pointer events, and wire the handlers returned by
`input_handlers()` into their own key/paste dispatch:

    engine = EditorEngine(rect_provider=widget.canvas_rect)
    engine.changed.connect(lambda event, item_id: widget.update())
    handlers = engine.input_handlers()
    handlers['key']('Delete')
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from constants import (
    DELETE_KEYS, KIND_IMAGE, KIND_TEXT,
    NEW_TEXT_GEOMETRY, IMAGE_DEFAULTS,
)
from models.scene import Scene
from models.transform import CanvasRect
from utils.events import EventHook

from .auto_fit import AutoFitResolver
from .background_removal import BackgroundRemover
from .decode_service import PillowDecoder
from .image_import import ImageImporter, ImportFile
from .interaction import InteractionEngine, PointerEvent
from .layout_templates import LayoutTemplateRegistry


def _unmeasured() -> CanvasRect:
    return CanvasRect(0, 0, 0, 0)


class EditorEngine:
    """Documented engine surface over one Scene

    Args:
        scene: Scene to edit (a starter scene if omitted)
        rect_provider: Callable returning the host's current CanvasRect
        decoder: Decode collaborator (PillowDecoder if omitted)
        remover: Background-removal collaborator (`async remove(handle)`),
            None disables removal
        templates: Layout template registry (built-ins if omitted)
    """

    def __init__(self, scene: Optional[Scene] = None,
                 rect_provider: Optional[Callable[[], CanvasRect]] = None,
                 decoder=None, remover=None,
                 templates: Optional[LayoutTemplateRegistry] = None):
        self._logger = logging.getLogger('EditorEngine')
        self.changed = EventHook('EditorEngine.changed')
        self.decoder = decoder or PillowDecoder()
        self.remover_service = remover
        self.templates = templates or LayoutTemplateRegistry()
        self._rect_provider = rect_provider or _unmeasured
        self._pending_tasks = set()
        self.scene = None
        self._disconnect_scene = None
        self.interaction = InteractionEngine(None, self._rect_provider)
        self.attach_scene(scene if scene is not None else Scene.starter())

    # ========================================
    # Scene wiring
    # ========================================

    def attach_scene(self, scene: Scene):
        """Switch to another Scene (new document or loaded draft)

        Any active drag ends; crop mode is kept.
        """
        self.interaction.end_drag()
        if self._disconnect_scene is not None:
            self._disconnect_scene()
        self.scene = scene
        self._disconnect_scene = scene.changed.connect(self._on_scene_changed)
        self.interaction.scene = scene
        self.auto_fit = AutoFitResolver(scene)
        self.importer = ImageImporter(scene, self.decoder, self.auto_fit)
        self.background_remover = BackgroundRemover(scene, self.remover_service) if self.remover_service else None
        self.changed.emit('reset', None)

    def set_rect_provider(self, rect_provider: Callable[[], CanvasRect]):
        self._rect_provider = rect_provider
        self.interaction.set_rect_provider(rect_provider)

    def _on_scene_changed(self, event: str, item_id: Optional[str]):
        self.changed.emit(event, item_id)

    # ========================================
    # Item operations
    # ========================================

    def add_item(self, kind: str, fields: Optional[Dict[str, Any]] = None) -> str:
        return self.scene.add_item(kind, fields)

    def update_item(self, item_id: str, patch: Dict[str, Any]):
        return self.scene.update_item(item_id, patch)

    def delete_item(self, item_id: str):
        session = self.interaction.session
        if session is not None and session.item_id == item_id:
            self.interaction.end_drag()
        self.scene.delete_item(item_id)

    def reorder(self, item_id: str, op: str) -> bool:
        return self.scene.reorder(item_id, op)

    def set_selection(self, item_id: Optional[str]):
        self.scene.set_selection(item_id)

    def set_background(self, descriptor):
        self.scene.set_background(descriptor)

    def apply_layout_template(self, name: str) -> int:
        """Reposition items from a named template

        Raises:
            UnknownTemplateError: If name is not registered
        """
        return self.scene.apply_layout(self.templates.get(name))

    # ========================================
    # Original editor conveniences
    # ========================================

    def add_text(self) -> str:
        """Add a caption box and select it"""
        return self.scene.add_item(KIND_TEXT, dict(NEW_TEXT_GEOMETRY))

    def add_photo(self, src=None, label: str = IMAGE_DEFAULTS['label']) -> str:
        """Add an image frame; auto-sizes once the resource is decoded"""
        return self.scene.add_item(KIND_IMAGE, {'src': src, 'label': label, 'auto_size': src is not None})

    def update_selected(self, patch: Dict[str, Any]) -> bool:
        """Patch the selected item. Returns False when nothing is selected."""
        selected = self.scene.selected_id
        if selected is None:
            return False
        self.scene.update_item(selected, patch)
        return True

    def toggle_lock(self) -> bool:
        item = self.scene.get_selected_item()
        if item is None:
            return False
        self.scene.update_item(item.id, {'locked': not item.locked})
        return True

    def delete_selected(self) -> bool:
        selected = self.scene.selected_id
        if selected is None:
            return False
        self.delete_item(selected)
        return True

    def bring_to_front(self) -> bool:
        return self.scene.bring_to_front()

    def send_to_back(self) -> bool:
        return self.scene.send_to_back()

    def cycle_next(self) -> bool:
        return self.scene.cycle_next()

    def new_collage(self):
        """Reset to the starter collage"""
        self.interaction.end_drag()
        self.scene.load_starter()

    # ========================================
    # Pointer
    # ========================================

    @property
    def crop_mode(self) -> bool:
        return self.interaction.crop_mode

    def set_crop_mode(self, enabled: bool):
        self.interaction.set_crop_mode(enabled)

    def pointer_down(self, event: PointerEvent) -> bool:
        return self.interaction.pointer_down(event)

    def begin_drag(self, event: PointerEvent) -> bool:
        return self.interaction.begin_drag(event)

    def update_drag(self, event: PointerEvent) -> bool:
        return self.interaction.update_drag(event)

    def end_drag(self, event: Optional[PointerEvent] = None) -> bool:
        return self.interaction.end_drag(event)

    # ========================================
    # Async collaborators
    # ========================================

    async def import_files(self, files: Iterable[ImportFile]) -> List[str]:
        return await self.importer.import_files(files)

    def notify_resource_decoded(self, item_id: str, natural_width: float, natural_height: float) -> bool:
        """Feed decoded dimensions of an existing item to auto-fit"""
        return self.auto_fit.on_resource_decoded(item_id, natural_width, natural_height)

    async def remove_background(self, item_id: str) -> bool:
        if self.background_remover is None:
            self._logger.warning("Background removal is not configured")
            return False
        return await self.background_remover.remove_background(item_id)

    async def remove_background_for_selected(self) -> bool:
        selected = self.scene.selected_id
        if selected is None:
            return False
        return await self.remove_background(selected)

    def schedule(self, coro) -> asyncio.Task:
        """Run a coroutine on the running loop, keeping a reference until it finishes"""
        task = asyncio.get_event_loop().create_task(coro)
        self._pending_tasks.add(task)
        task.add_done_callback(self._pending_tasks.discard)
        return task

    # ========================================
    # Input subscriptions
    # ========================================

    def on_key(self, key: str) -> bool:
        """Delete/Backspace removes the selection. Returns True when consumed."""
        if key in DELETE_KEYS:
            return self.delete_selected()
        return False

    def on_paste(self, files: Iterable[ImportFile]) -> Optional[asyncio.Task]:
        """Schedule an import of pasted files on the event loop"""
        files = list(files or [])
        if not files:
            return None
        return self.schedule(self.import_files(files))

    def input_handlers(self) -> Dict[str, Callable]:
        """Handlers for the host to wire into its key and paste dispatch"""
        return {'key': self.on_key, 'paste': self.on_paste}
