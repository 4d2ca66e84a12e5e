# style/__init__.py

from .colors import (
    LEGACY_PALETTE,
    Color,
    PaletteColor,
    gradient,
    interpolate,
    nearest_legacy,
    parse_hex,
    rainbow,
    segment,
)
from .definitions import DEFAULT_DEFINITIONS, EngineDefinitions
from .encoders import AnsiEncoder, SectionEncoder, StyleEncoder
from .registry import Mode, PatternRegistry, default_registry

__all__ = [
    'Color', 'PaletteColor', 'LEGACY_PALETTE',
    'parse_hex', 'interpolate', 'gradient', 'segment', 'rainbow', 'nearest_legacy',
    'EngineDefinitions', 'DEFAULT_DEFINITIONS',
    'StyleEncoder', 'AnsiEncoder', 'SectionEncoder',
    'Mode', 'PatternRegistry', 'default_registry',
]
