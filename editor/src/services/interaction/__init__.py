"""Canvas pointer interaction (selection, move and crop drags)"""

from .drag_session import DragMode, DragSession, PointerEvent
from .engine import InteractionEngine

__all__ = ['DragMode', 'DragSession', 'PointerEvent', 'InteractionEngine']
