"""Transform data structures for coordinate and geometry representation."""
from dataclasses import dataclass


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across different spaces:
    - Pointer pixels (host widget, top-left origin)
    - Canvas percent (0-100)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def __sub__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x - other.x, self.y - other.y)

    def __add__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class Rect:
    """Item geometry in canvas percent: top-left anchor plus size."""
    x: float
    y: float
    w: float
    h: float

    def __iter__(self):
        return iter((self.x, self.y, self.w, self.h))

    def contains(self, point: Vec2) -> bool:
        """Check if a percent-space point lies inside the rectangle (edges inclusive)"""
        return (self.x <= point.x <= self.x + self.w
                and self.y <= point.y <= self.y + self.h)

    def to_dict(self) -> dict:
        return {'x': self.x, 'y': self.y, 'w': self.w, 'h': self.h}


@dataclass(frozen=True)
class CanvasRect:
    """On-screen canvas rectangle in host pixels.

    Measured by the host on every pointer event; never cached by the engine
    since the canvas may be resized between events.
    """
    left: float
    top: float
    width: float
    height: float

    @property
    def is_measured(self) -> bool:
        """A rect with no area has not been laid out yet"""
        return self.width > 0 and self.height > 0
