# style/definitions.py

import re
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from ..exceptions import MarkupError
from .colors import LEGACY_PALETTE, Color, PaletteColor, nearest_legacy
from .encoders import FORMAT_CODES, AnsiEncoder, StyleEncoder

@dataclass(frozen=True)
class EngineDefinitions:
    """
    Immutable configuration shared by every processor of an engine.

    Holds the legacy palette used for quantization, the encoder that writes
    resolved colors into the output, the rainbow saturation used when the
    markup omits one, and the regex flags every pattern is compiled with.
    Use the `with_*` builders to derive a changed copy.
    """
    palette: Tuple[PaletteColor, ...] = LEGACY_PALETTE
    encoder: StyleEncoder = field(default_factory=AnsiEncoder)
    default_saturation: float = 1.0
    flags: int = re.IGNORECASE

    def __post_init__(self):
        """Validate palette names and the default saturation."""
        names = [entry.name for entry in self.palette]
        if len(names) != len(set(names)):
            raise ValueError("Duplicate color name in legacy palette")
        if not 0.0 <= self.default_saturation <= 1.0:
            raise ValueError(f"Default saturation must be within [0, 1], got {self.default_saturation}")

    def compile(self, pattern: str) -> re.Pattern:
        """Compile a markup pattern with the configured flags."""
        return re.compile(pattern, self.flags)

    def get_palette_color(self, name: str) -> Optional[PaletteColor]:
        """Get a palette entry by name."""
        return next((entry for entry in self.palette if entry.name == name.upper()), None)

    def encode(self, color: Color, use_full_color: bool) -> str:
        """Encode a color, quantizing it to the palette when full color is unavailable."""
        if use_full_color:
            return self.encoder.color(color)
        return self.encoder.legacy(nearest_legacy(color, self.palette))

    def encode_code(self, code: str) -> str:
        """Encode a legacy `&<code>` character (palette color or format)."""
        code = code.lower()
        if code in FORMAT_CODES:
            return self.encoder.format(code)
        entry = next((entry for entry in self.palette if entry.code == code), None)
        if entry is None:
            raise MarkupError(f"No palette entry for legacy code '{code}'")
        return self.encoder.legacy(entry)

    def with_palette_entries(self, *entries: PaletteColor) -> "EngineDefinitions":
        """Return a copy whose palette has the given entries appended."""
        return replace(self, palette=self.palette + tuple(entries))

    def with_encoder(self, encoder: StyleEncoder) -> "EngineDefinitions":
        """Return a copy writing its output with another encoder."""
        return replace(self, encoder=encoder)

DEFAULT_DEFINITIONS = EngineDefinitions()
