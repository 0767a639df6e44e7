"""
Scene Internal Package - DO NOT IMPORT FROM HERE

This package contains INTERNAL implementation for the Scene model:
- item.py: Item record
- background.py: Background descriptor

FORBIDDEN: Do not import from models.scene._internal.* directly
CORRECT: Import from models.scene (the public API)

Example:
    from models.scene import Scene, Item, Background
"""

# This package is internal - do not populate __all__
# External code must use models.scene
