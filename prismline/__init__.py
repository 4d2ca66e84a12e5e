# __init__.py

from .logger import Logger
from .engine import Engine, colorize, strip_markup
from .applier import Priority, StringApplier, prioritized, simplified
from .style import AnsiEncoder, EngineDefinitions, SectionEncoder
from .exceptions import MarkupError, PaletteError, PrismlineError

__all__ = [
    "Engine", "colorize", "strip_markup",
    "Priority", "StringApplier", "prioritized", "simplified",
    "EngineDefinitions", "AnsiEncoder", "SectionEncoder",
    "Logger", "PrismlineError", "MarkupError", "PaletteError",
]
