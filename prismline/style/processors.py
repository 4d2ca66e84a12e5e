# style/processors.py

import re
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from ..exceptions import MarkupError
from .colors import Color, gradient, parse_hex, rainbow, segment
from .definitions import EngineDefinitions
from .encoders import FORMAT_CODES

HEX = r'[0-9a-f]{6}'

# Legacy codes are zero-width inside per-character recoloring
CODE_TOKEN = re.compile(r'[&§][0-9a-fk-or]', re.IGNORECASE)

class MarkupProcessor(Protocol):
    """Protocol shared by every markup family."""
    name: str
    def parse(self, text: str, use_full_color: bool = True) -> str: ...
    def strip(self, text: str) -> str: ...


def tokenize(text: str) -> List[Tuple[bool, str]]:
    """Split text into (is_code, token) pairs."""
    tokens = []
    pos = 0
    for match in CODE_TOKEN.finditer(text):
        tokens.extend((False, char) for char in text[pos:match.start()])
        tokens.append((True, match.group()))
        pos = match.end()
    tokens.extend((False, char) for char in text[pos:])
    return tokens


def visible_text(text: str) -> str:
    """Return text without legacy color and format codes."""
    return CODE_TOKEN.sub('', text)


def paint(text: str, colors: Sequence[Color], definitions: EngineDefinitions,
          use_full_color: bool) -> str:
    """
    Prefix every visible character with its resolved color.

    Legacy codes are not counted as characters. Format codes accumulate and
    are written again after each color, `&r` clears them. Palette color
    codes are dropped, the computed colors take their place.
    """
    out = []
    specials = []
    index = 0
    for is_code, token in tokenize(text):
        if is_code:
            code = token[1].lower()
            if code == 'r':
                specials.clear()
            elif code in FORMAT_CODES:
                specials.append(token)
            continue
        out.append(definitions.encode(colors[index], use_full_color))
        out.extend(specials)
        out.append(token)
        index += 1
    return ''.join(out)


class PatternProcessor(ABC):
    """
    One markup family: a compiled pattern plus its parse and strip actions.

    Every rewrite runs `re.sub` over the whole string and repeats until the
    string stops changing. A match whose captures cannot be resolved raises
    MarkupError inside its action and is left as literal text.
    """
    name = 'pattern'

    def __init__(self, definitions: EngineDefinitions, logger=None):
        self.definitions = definitions
        self.logger = logger

    def _rewrite(self, pattern: re.Pattern, text: str,
                 action: Callable[[re.Match], str]) -> str:
        def replace(match: re.Match) -> str:
            try:
                return action(match)
            except MarkupError as e:
                if self.logger:
                    self.logger.debug(f"{self.name}: skipped {match.group()!r}: {e}")
                return match.group()

        while True:
            result = pattern.sub(replace, text)
            if result == text:
                return result
            text = result

    @abstractmethod
    def parse(self, text: str, use_full_color: bool = True) -> str:
        """Replace every match with resolved styling."""

    @abstractmethod
    def strip(self, text: str) -> str:
        """Remove every match, keeping its literal text."""


class LegacyCanonicalizer(PatternProcessor):
    """
    Rewrites older markup spellings into the canonical ones.

    `<g:a>..</g:b>` and `<G:a>..</G:b>` become `<#a>..</#b>`,
    `<rainbow:n>..</rainbow>` and `<r:n>..</r>` become `<R:n>..</R>`, and
    `{#hex}`, `[#hex]`, `%#hex%`, `&#hex`, `&xhex` become `#hex`.
    """
    name = 'legacy'

    def __init__(self, definitions: EngineDefinitions, logger=None):
        super().__init__(definitions, logger)
        build = definitions.compile
        self._gradient = build(rf'<g:({HEX})>(.+?)</g:({HEX})>')
        self._waypoint = build(rf'<g:({HEX})>')
        self._rainbow = build(r'<(?:rainbow|r)(?::(\d+))?>(.+?)</(?:rainbow|r)>')
        self._solid = build(rf'\{{#({HEX})\}}|\[#({HEX})\]|%#({HEX})%|&#({HEX})|&x({HEX})')

    def _gradient_action(self, match: re.Match) -> str:
        start, inner, end = match.groups()
        inner = self._waypoint.sub(r'<#\1>', inner)
        return f'<#{start}>{inner}</#{end}>'

    def _rainbow_action(self, match: re.Match) -> str:
        saturation, inner = match.groups()
        head = f'<R:{saturation}>' if saturation is not None else '<R>'
        return f'{head}{inner}</R>'

    def _solid_action(self, match: re.Match) -> str:
        return '#' + next(group for group in match.groups() if group)

    def canonicalize(self, text: str) -> str:
        """Return text with every legacy spelling replaced by its canonical form."""
        text = self._rewrite(self._gradient, text, self._gradient_action)
        text = self._rewrite(self._rainbow, text, self._rainbow_action)
        return self._rewrite(self._solid, text, self._solid_action)

    def parse(self, text: str, use_full_color: bool = True) -> str:
        return self.canonicalize(text)

    def strip(self, text: str) -> str:
        return self.canonicalize(text)


class MultiStopGradient(PatternProcessor):
    """`<#c1:#c2[:#c3...]>text</g>` (or `</gradient>`)."""
    name = 'multi-gradient'

    def __init__(self, definitions: EngineDefinitions, logger=None):
        super().__init__(definitions, logger)
        self.pattern = definitions.compile(rf'<(#{HEX}(?::#{HEX})+)>(.+?)</g(?:radient)?>')

    @staticmethod
    def stop_colors(stops: Sequence[Color], text: str) -> List[Color]:
        """
        Colors for each character of text blended across the stops.

        Text is split into len(stops) - 1 balanced parts, part i blending
        stop i into stop i + 1. Parts after the first sample one extra
        leading position (the previous part's last character) and drop it,
        so the joining edge keeps the previous part's color.
        """
        if len(stops) < 2:
            raise MarkupError("A gradient needs at least two color stops")

        colors = []
        for i, part in enumerate(segment(text, len(stops) - 1)):
            if not part:
                continue
            if i > 0:
                colors.extend(gradient(stops[i], stops[i + 1], len(part) + 1)[1:])
            else:
                colors.extend(gradient(stops[i], stops[i + 1], len(part)))
        return colors

    def _parse_action(self, match: re.Match, use_full_color: bool) -> str:
        stops = [parse_hex(stop) for stop in match.group(1).split(':')]
        inner = match.group(2)
        colors = self.stop_colors(stops, visible_text(inner))
        return paint(inner, colors, self.definitions, use_full_color)

    def parse(self, text: str, use_full_color: bool = True) -> str:
        return self._rewrite(self.pattern, text, lambda m: self._parse_action(m, use_full_color))

    def strip(self, text: str) -> str:
        return self._rewrite(self.pattern, text, lambda m: m.group(2))


class PairedGradient(PatternProcessor):
    """`<#start>text</#end>`, with optional `<#hex>` waypoints inside the text."""
    name = 'gradient'

    def __init__(self, definitions: EngineDefinitions, logger=None):
        super().__init__(definitions, logger)
        self.pattern = definitions.compile(rf'<#({HEX})>(.+?)</#({HEX})>')
        self.waypoint = definitions.compile(rf'<#({HEX})>')

    def _sections(self, match: re.Match) -> Tuple[List[str], List[str]]:
        start, inner, end = match.groups()
        pieces = self.waypoint.split(inner)
        return [start, *pieces[1::2], end], pieces[::2]

    def _parse_action(self, match: re.Match, use_full_color: bool) -> str:
        ids, sections = self._sections(match)
        stops = [parse_hex(value) for value in ids]

        colors = []
        for i, section in enumerate(sections):
            colors.extend(gradient(stops[i], stops[i + 1], len(visible_text(section))))
        return paint(''.join(sections), colors, self.definitions, use_full_color)

    def parse(self, text: str, use_full_color: bool = True) -> str:
        return self._rewrite(self.pattern, text, lambda m: self._parse_action(m, use_full_color))

    def strip(self, text: str) -> str:
        return self._rewrite(self.pattern, text, lambda m: ''.join(self._sections(m)[1]))


class Rainbow(PatternProcessor):
    """`<R:saturation>text</R>`, saturation an integer percentage (0-100)."""
    name = 'rainbow'

    def __init__(self, definitions: EngineDefinitions, logger=None):
        super().__init__(definitions, logger)
        self.pattern = definitions.compile(r'<R(?::(\d+))?>(.+?)</R>')

    def saturation(self, value: Optional[str]) -> float:
        if value is None:
            return self.definitions.default_saturation
        percent = int(value)
        if percent > 100:
            raise MarkupError(f"Rainbow saturation must be within [0, 100], got {percent}")
        return percent / 100

    def _parse_action(self, match: re.Match, use_full_color: bool) -> str:
        saturation = self.saturation(match.group(1))
        inner = match.group(2)
        colors = rainbow(visible_text(inner), saturation)
        return paint(inner, colors, self.definitions, use_full_color)

    def parse(self, text: str, use_full_color: bool = True) -> str:
        return self._rewrite(self.pattern, text, lambda m: self._parse_action(m, use_full_color))

    def strip(self, text: str) -> str:
        return self._rewrite(self.pattern, text, lambda m: m.group(2))


class SolidColor(PatternProcessor):
    """`#RRGGBB` or `<#RRGGBB>`; the markup carries no literal text."""
    name = 'solid'

    def __init__(self, definitions: EngineDefinitions, logger=None):
        super().__init__(definitions, logger)
        # closing tags of unresolved gradients are not solid colors
        self.pattern = definitions.compile(rf'<#({HEX})>|(?<!</)#({HEX})')

    def _parse_action(self, match: re.Match, use_full_color: bool) -> str:
        color = parse_hex(match.group(1) or match.group(2))
        return self.definitions.encode(color, use_full_color)

    def parse(self, text: str, use_full_color: bool = True) -> str:
        return self._rewrite(self.pattern, text, lambda m: self._parse_action(m, use_full_color))

    def strip(self, text: str) -> str:
        return self._rewrite(self.pattern, text, lambda m: '')


class LegacyCodes(PatternProcessor):
    """`&<code>` palette colors and format codes; strip also removes `§<code>`."""
    name = 'codes'

    def __init__(self, definitions: EngineDefinitions, logger=None):
        super().__init__(definitions, logger)
        self.parse_pattern = definitions.compile(r'&([0-9a-fk-or])')
        self.strip_pattern = definitions.compile(r'[&§][0-9a-fk-or]')

    def parse(self, text: str, use_full_color: bool = True) -> str:
        return self._rewrite(self.parse_pattern, text,
                             lambda m: self.definitions.encode_code(m.group(1)))

    def strip(self, text: str) -> str:
        return self._rewrite(self.strip_pattern, text, lambda m: '')
