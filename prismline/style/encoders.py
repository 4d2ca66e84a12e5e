# style/encoders.py

import re
from typing import Protocol

from rich.color import Color as RichColor

from .colors import Color, PaletteColor

# Legacy format codes: obfuscated, bold, strikethrough, underline, italic, reset
FORMAT_CODES = 'klmnor'

class StyleEncoder(Protocol):
    """Protocol defining how resolved colors are written into the output string."""
    def color(self, color: Color) -> str: ...
    def legacy(self, entry: PaletteColor) -> str: ...
    def format(self, code: str) -> str: ...
    def visible_text(self, text: str) -> str: ...

class AnsiEncoder:
    """
    Writes SGR escape sequences for terminals.

    Full colors become 24-bit `38;2;r;g;b` sequences and palette entries the
    standard `30-37` / `90-97` foreground codes, both generated by rich.
    """

    # ANSI format utility
    FMT = staticmethod(lambda x: f'\033[{x}m')

    FORMATS = {'k': '5', 'l': '1', 'm': '9', 'n': '4', 'o': '3', 'r': '0'}

    SGR_PATTERN = re.compile(r'\x1B\[[0-?]*[ -/]*[@-~]')

    def color(self, color: Color) -> str:
        """Return the truecolor sequence for an RGB color."""
        return self.FMT(';'.join(RichColor.from_triplet(color).get_ansi_codes()))

    def legacy(self, entry: PaletteColor) -> str:
        """Return the standard 16-color sequence for a palette entry."""
        return self.FMT(';'.join(RichColor.from_ansi(entry.ansi).get_ansi_codes()))

    def format(self, code: str) -> str:
        """Return the sequence for a legacy format code."""
        return self.FMT(self.FORMATS[code.lower()])

    def visible_text(self, text: str) -> str:
        """Return text without any SGR sequences."""
        return self.SGR_PATTERN.sub('', text)

class SectionEncoder:
    """
    Writes the section-sign convention used by game chat clients:
    `§x§r§r§g§g§b§b` for full colors and `§<code>` for palette entries.
    """

    PREFIX = '§'

    CODE_PATTERN = re.compile(r'§[0-9a-fk-orx]', re.IGNORECASE)

    def color(self, color: Color) -> str:
        digits = color.hex.lstrip('#')
        return self.PREFIX + 'x' + ''.join(self.PREFIX + d for d in digits)

    def legacy(self, entry: PaletteColor) -> str:
        return self.PREFIX + entry.code

    def format(self, code: str) -> str:
        return self.PREFIX + code.lower()

    def visible_text(self, text: str) -> str:
        return self.CODE_PATTERN.sub('', text)
