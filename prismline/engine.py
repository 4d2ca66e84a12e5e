# engine.py

import re
from functools import lru_cache
from typing import Optional, Union

from .logger import Logger
from .applier import StringApplier, prioritized as make_prioritized, simplified
from .style.colors import Color, gradient, parse_hex, rainbow
from .style.definitions import DEFAULT_DEFINITIONS, EngineDefinitions
from .style.processors import paint, visible_text
from .style.registry import PatternRegistry, default_registry

# Last solid or legacy color, with the format codes that follow it
LAST_COLOR_PATTERN = re.compile(
    r'(?:[&§][0-9a-f]|&x[0-9a-f]{6}|[{\[%&<]?#[0-9a-f]{6}[}\]%>]?)(?:[&§][k-or])*',
    re.IGNORECASE,
)

class Engine:
    """
    Entry point that turns markup into styled text and back into plain text.

    Assembles the definitions (palette, encoder) and the pattern registry.
    Both are read-only once the engine exists, so one engine can be shared
    between threads.
    """

    def __init__(self, definitions: Optional[EngineDefinitions] = None,
                 registry: Optional[PatternRegistry] = None,
                 logger: Optional[Logger] = None):
        """
        Initialize the engine.

        Args:
            definitions: Palette, encoder and pattern flags. Defaults to DEFAULT_DEFINITIONS.
            registry: Processors to run. Defaults to the standard registry built
                      from `definitions`.
            logger: Logger used for registry construction and skipped matches.
        """
        self._init_components(definitions, registry, logger)

    def _init_components(self, definitions: Optional[EngineDefinitions],
                         registry: Optional[PatternRegistry],
                         logger: Optional[Logger]) -> None:
        try:
            self.logger = logger or Logger(__name__)
            self.definitions = definitions or DEFAULT_DEFINITIONS
            if registry is None:
                registry = default_registry(self.definitions, self.logger)
            self.registry = registry
            self.logger.debug(f"Engine ready with {len(self.registry)} processors "
                              f"and {type(self.definitions.encoder).__name__}")
        except Exception as e:
            if hasattr(self, 'logger'):
                self.logger.error(f"Init error: {e}")
            raise

    def colorize(self, text: Optional[str], supports_full_color: bool = True) -> Optional[str]:
        """
        Replace every markup span with resolved styling.

        When the caller only supports the legacy palette, every color is
        quantized to its nearest palette entry before being encoded.
        """
        return self.registry.parse(text, supports_full_color)

    def strip_markup(self, text: Optional[str]) -> Optional[str]:
        """Remove every markup span, keeping the literal text."""
        return self.registry.strip(text)

    def applier(self, text: str, prioritized: bool = True) -> StringApplier:
        """Create a transformation pipeline seeded with text."""
        return make_prioritized(text) if prioritized else simplified(text)

    def _color(self, color: Union[str, Color]) -> Color:
        # palette names ("gold") or hex literals
        if isinstance(color, str):
            entry = self.definitions.get_palette_color(color)
            return entry.rgb if entry else parse_hex(color)
        return Color(*color)

    def color_text(self, text: str, color: Union[str, Color],
                   supports_full_color: bool = True) -> str:
        """Prefix text with one color: a palette name, a hex literal or an RGB tuple."""
        return self.definitions.encode(self._color(color), supports_full_color) + text

    def gradient_text(self, text: str, start: Union[str, Color], end: Union[str, Color],
                      supports_full_color: bool = True) -> str:
        """Blend text from start to end, one color per visible character."""
        if not text:
            return text
        colors = gradient(self._color(start), self._color(end), len(visible_text(text)))
        return paint(text, colors, self.definitions, supports_full_color)

    def rainbow_text(self, text: str, saturation: Optional[float] = None,
                     supports_full_color: bool = True) -> str:
        """Rotate the hue across text; saturation is a fraction in [0, 1]."""
        if not text:
            return text
        if saturation is None:
            saturation = self.definitions.default_saturation
        colors = rainbow(visible_text(text), saturation)
        return paint(text, colors, self.definitions, supports_full_color)

    def last_color(self, text: str, key: Optional[str] = None) -> str:
        """
        Return the last color markup used in text, with its trailing format codes.

        When key is given only the text before its first occurrence is
        searched. Returns an empty string when no color is found.
        """
        if not text:
            raise ValueError("Text can not be empty")
        head = text.split(key, 1)[0] if key else text
        found = LAST_COLOR_PATTERN.findall(head)
        return found[-1] if found else ""


@lru_cache(maxsize=1)
def default_engine() -> Engine:
    """Return the shared engine built from the default definitions."""
    return Engine()

def colorize(text: Optional[str], supports_full_color: bool = True) -> Optional[str]:
    return default_engine().colorize(text, supports_full_color)

def strip_markup(text: Optional[str]) -> Optional[str]:
    return default_engine().strip_markup(text)
