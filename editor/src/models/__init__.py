"""
Collage Editor - Data Models

This module contains the data model classes for the collage scene.
This is the MODEL in MVC architecture.

Public API: Import Scene, Item, Background from models.scene
The models/scene/_internal/ subdirectory contains internal implementation only.
"""

from .scene import Scene, Item, Background, CanvasFormat

__all__ = ['Scene', 'Item', 'Background', 'CanvasFormat']
