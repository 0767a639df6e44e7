"""
Collage Editor - Color Domain Model

Canonical color representation for backgrounds, text and borders.
Colors are stored and persisted as '#rrggbb' strings; this class parses
and converts them for rendering.
"""

import re
from typing import List, Optional, Tuple

import numpy as np


HEX_COLOR_PATTERN = re.compile(r'^#?[0-9a-fA-F]{6}$')


class Color:
    """Immutable color with uint8 RGB storage.

    Internal storage: _r, _g, _b (uint8 0-255)
    """

    def __init__(self, r: int, g: int, b: int):
        """Direct construction from RGB uint8 values (0-255), clamped."""
        self._r = max(0, min(255, int(r)))
        self._g = max(0, min(255, int(g)))
        self._b = max(0, min(255, int(b)))

    @property
    def r(self) -> int:
        """Red component (0-255) - READ ONLY"""
        return self._r

    @property
    def g(self) -> int:
        """Green component (0-255) - READ ONLY"""
        return self._g

    @property
    def b(self) -> int:
        """Blue component (0-255) - READ ONLY"""
        return self._b

    # ========================================
    # Output Methods
    # ========================================

    def to_hex(self) -> str:
        """Convert to lowercase hex color string: #rrggbb."""
        return f"#{self._r:02x}{self._g:02x}{self._b:02x}"

    def to_rgb255(self) -> Tuple[int, int, int]:
        return (self._r, self._g, self._b)

    def to_rgba255(self, opacity: float = 1.0) -> Tuple[int, int, int, int]:
        """Convert to RGBA tuple with opacity in [0, 1] mapped to alpha 0-255."""
        alpha = int(round(max(0.0, min(1.0, float(opacity))) * 255))
        return (self._r, self._g, self._b, alpha)

    def to_qcolor(self, opacity: float = 1.0):
        """Convert to PyQt5 QColor object.

        Returns:
            QColor: Qt color object for UI rendering
        """
        from PyQt5.QtGui import QColor
        return QColor(*self.to_rgba255(opacity))

    # ========================================
    # Static Factory Methods
    # ========================================

    @staticmethod
    def is_hex(value) -> bool:
        """Check if value is a '#rrggbb' (or 'rrggbb') string"""
        return isinstance(value, str) and bool(HEX_COLOR_PATTERN.match(value))

    @staticmethod
    def from_hex(hex_string: str) -> Optional['Color']:
        """Create Color from hex string: #RRGGBB or RRGGBB.

        Returns:
            Color object if parse succeeds, None otherwise
        """
        if not Color.is_hex(hex_string):
            return None
        hex_string = hex_string.lstrip('#')
        return Color(int(hex_string[0:2], 16), int(hex_string[2:4], 16), int(hex_string[4:6], 16))

    @staticmethod
    def parse(hex_string: str) -> 'Color':
        """Like from_hex, but raises ValueError on malformed input"""
        color = Color.from_hex(hex_string)
        if color is None:
            raise ValueError(f"Invalid hex color: {hex_string!r}")
        return color

    # ========================================
    # Color Operations
    # ========================================

    def lerp(self, other: 'Color', t: float) -> 'Color':
        """Linear blend towards other (t=0 -> self, t=1 -> other)"""
        return Color(
            round(self._r + (other._r - self._r) * t),
            round(self._g + (other._g - self._g) * t),
            round(self._b + (other._b - self._b) * t),
        )

    # ========================================
    # Equality and Hashing
    # ========================================

    def __eq__(self, other) -> bool:
        if not isinstance(other, Color):
            return False
        return (self._r, self._g, self._b) == (other._r, other._g, other._b)

    def __hash__(self) -> int:
        return hash((self._r, self._g, self._b))

    def __repr__(self) -> str:
        return f"Color({self._r}, {self._g}, {self._b})"

    def __str__(self) -> str:
        return self.to_hex()


def colors_to_array(colors: List[Color]):
    """Stack colors into an (N, 3) float array for gradient math"""
    return np.array([c.to_rgb255() for c in colors], dtype=np.float64)
