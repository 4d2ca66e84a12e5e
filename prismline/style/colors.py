# style/colors.py

import re
import math
import colorsys
from dataclasses import dataclass
from typing import List, Sequence

from rich.color import blend_rgb, parse_rgb_hex
from rich.color_triplet import ColorTriplet

from ..exceptions import MarkupError, PaletteError

# Colors are plain rich triplets: immutable (red, green, blue) named tuples.
Color = ColorTriplet

HEX_LITERAL = re.compile(r'#?([0-9a-fA-F]{6})')

@dataclass(frozen=True)
class PaletteColor:
    """
    One entry of the legacy 16-color palette.

    Carries the legacy code character ('0'-'9', 'a'-'f') and the standard
    ANSI color number (0-15) so encoders can emit either convention.
    """
    name: str
    rgb: Color
    code: str
    ansi: int

LEGACY_PALETTE = (
    PaletteColor('BLACK', Color(0, 0, 0), '0', 0),
    PaletteColor('DARK_BLUE', Color(0, 0, 170), '1', 4),
    PaletteColor('DARK_GREEN', Color(0, 170, 0), '2', 2),
    PaletteColor('DARK_AQUA', Color(0, 170, 170), '3', 6),
    PaletteColor('DARK_RED', Color(170, 0, 0), '4', 1),
    PaletteColor('DARK_PURPLE', Color(170, 0, 170), '5', 5),
    PaletteColor('GOLD', Color(255, 170, 0), '6', 3),
    PaletteColor('GRAY', Color(170, 170, 170), '7', 7),
    PaletteColor('DARK_GRAY', Color(85, 85, 85), '8', 8),
    PaletteColor('BLUE', Color(85, 85, 255), '9', 12),
    PaletteColor('GREEN', Color(85, 255, 85), 'a', 10),
    PaletteColor('AQUA', Color(85, 255, 255), 'b', 14),
    PaletteColor('RED', Color(255, 85, 85), 'c', 9),
    PaletteColor('LIGHT_PURPLE', Color(255, 85, 255), 'd', 13),
    PaletteColor('YELLOW', Color(255, 255, 85), 'e', 11),
    PaletteColor('WHITE', Color(255, 255, 255), 'f', 15),
)


def parse_hex(text: str) -> Color:
    """Decode 'a1b2c3' or '#a1b2c3' into a Color."""
    match = HEX_LITERAL.fullmatch(text or '')
    if not match:
        raise MarkupError(f"Invalid hex color literal: {text!r}")
    return parse_rgb_hex(match.group(1))


def interpolate(start: Color, end: Color, t: float) -> Color:
    """Blend two colors linearly, t=0 gives start and t=1 gives end."""
    if not 0.0 <= t <= 1.0:
        raise ValueError(f"Blend factor must be within [0, 1], got {t}")
    return blend_rgb(start, end, t)


def gradient(start: Color, end: Color, steps: int) -> List[Color]:
    """Return `steps` evenly spaced samples from start to end, both included."""
    if steps < 1:
        return []
    if steps == 1:
        return [start]
    return [interpolate(start, end, i / (steps - 1)) for i in range(steps)]


def segment(text: str, parts: int) -> List[str]:
    """
    Split text into `parts` contiguous pieces.

    Each piece takes ceil(remaining / parts_left) characters, so lengths are
    non-increasing and never differ by more than one. Fewer than two parts
    returns the whole text.
    """
    if parts < 2:
        return [text]

    pieces = []
    start = 0
    for i in range(parts):
        end = start + math.ceil((len(text) - start) / (parts - i))
        pieces.append(text[start:end])
        start = end
    return pieces


def rainbow(text: str, saturation: float) -> List[Color]:
    """One color per character, rotating hue across the text at full value."""
    if not 0.0 <= saturation <= 1.0:
        raise ValueError(f"Saturation must be within [0, 1], got {saturation}")

    steps = len(text)
    colors = []
    for i in range(steps):
        r, g, b = colorsys.hsv_to_rgb(i / steps, saturation, 1.0)
        colors.append(Color(int(r * 255 + 0.5), int(g * 255 + 0.5), int(b * 255 + 0.5)))
    return colors


def squared_distance(first: Color, second: Color) -> int:
    return sum((a - b) ** 2 for a, b in zip(first, second))


def nearest_legacy(color: Color, palette: Sequence[PaletteColor] = LEGACY_PALETTE) -> PaletteColor:
    """Closest palette entry in RGB space; ties go to the earliest entry."""
    if not palette:
        raise PaletteError("Legacy palette is empty, cannot quantize color")
    # min() keeps the first of equal keys
    return min(palette, key=lambda entry: squared_distance(color, entry.rgb))
