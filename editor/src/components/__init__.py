"""UI components for Collage Editor

Direct imports:
"""

from .canvas_widget import CollageCanvas

__all__ = [
    'CollageCanvas',
]
