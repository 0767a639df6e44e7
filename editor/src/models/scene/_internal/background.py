"""Background descriptor: a solid color or a CSS-style linear gradient."""

import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

from constants import BACKGROUND_COLOR, BACKGROUND_GRADIENT, DEFAULT_BACKGROUND
from models.color import Color

GRADIENT_PATTERN = re.compile(r'^\s*linear-gradient\(\s*(-?\d+(?:\.\d+)?)deg\s*,(.*)\)\s*$')


@dataclass(frozen=True)
class Background:
    """Scene background.

    type: 'color' or 'gradient'
    value: '#rrggbb' for colors,
           'linear-gradient(<angle>deg, #c1, #c2, ...)' for gradients
    """
    type: str
    value: str

    def __post_init__(self):
        if self.type == BACKGROUND_COLOR:
            Color.parse(self.value)
        elif self.type == BACKGROUND_GRADIENT:
            parse_gradient(self.value)
        else:
            raise ValueError(
                f"Unknown background type '{self.type}'. "
                f"Valid: {[BACKGROUND_COLOR, BACKGROUND_GRADIENT]}"
            )

    @classmethod
    def color(cls, value: str) -> 'Background':
        return cls(BACKGROUND_COLOR, Color.parse(value).to_hex())

    @classmethod
    def gradient(cls, value: str) -> 'Background':
        return cls(BACKGROUND_GRADIENT, value)

    @classmethod
    def default(cls) -> 'Background':
        return cls(DEFAULT_BACKGROUND['type'], DEFAULT_BACKGROUND['value'])

    @classmethod
    def from_dict(cls, data: Dict) -> 'Background':
        return cls(data['type'], data['value'])

    def to_dict(self) -> Dict[str, str]:
        return {'type': self.type, 'value': self.value}

    @property
    def is_gradient(self) -> bool:
        return self.type == BACKGROUND_GRADIENT

    def stops(self) -> Tuple[float, List[Color]]:
        """Gradient angle and colors; a solid color is a one-stop gradient"""
        if self.is_gradient:
            return parse_gradient(self.value)
        return 180.0, [Color.parse(self.value)]


def parse_gradient(value: str) -> Tuple[float, List[Color]]:
    """Parse 'linear-gradient(135deg, #f97316, #fb7185)' into (angle, colors).

    Raises:
        ValueError: Malformed gradient or fewer than two colors
    """
    match = GRADIENT_PATTERN.match(value or '')
    if not match:
        raise ValueError(f"Invalid gradient: {value!r}")
    angle = float(match.group(1))
    colors = [Color.parse(part.strip()) for part in match.group(2).split(',')]
    if len(colors) < 2:
        raise ValueError(f"Gradient needs at least two colors: {value!r}")
    return angle, colors
