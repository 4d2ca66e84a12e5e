# style/registry.py

from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .definitions import DEFAULT_DEFINITIONS, EngineDefinitions
from .processors import (
    LegacyCanonicalizer,
    LegacyCodes,
    MarkupProcessor,
    MultiStopGradient,
    PairedGradient,
    Rainbow,
    SolidColor,
)

class Mode(Enum):
    """Whether markup is resolved into styling or removed."""
    PARSE = 'parse'
    STRIP = 'strip'

class PatternRegistry:
    """
    Ordered collection of markup processors.

    Processors run in registration order, each one receiving the output of
    the previous one. Order is part of the contract: spellings must be
    canonicalized first, and gradients must run before solid colors because
    their stops are valid solid colors themselves.
    """

    def __init__(self, logger=None):
        self._processors: List[MarkupProcessor] = []
        self.logger = logger

    def register(self, processor: MarkupProcessor) -> "PatternRegistry":
        """Append a processor and return the registry for chaining."""
        if not callable(getattr(processor, 'parse', None)) or not callable(getattr(processor, 'strip', None)):
            raise TypeError(f"{processor!r} does not provide parse() and strip()")
        self._processors.append(processor)
        if self.logger:
            self.logger.debug(f"Registered processor #{len(self._processors)}: "
                              f"{getattr(processor, 'name', type(processor).__name__)}")
        return self

    @property
    def processors(self) -> Tuple[MarkupProcessor, ...]:
        return tuple(self._processors)

    def __len__(self) -> int:
        return len(self._processors)

    def __iter__(self) -> Iterator[MarkupProcessor]:
        return iter(self._processors)

    def _run(self, text: str, mode: Mode, use_full_color: bool) -> str:
        for processor in self._processors:
            if mode is Mode.PARSE:
                text = processor.parse(text, use_full_color)
            else:
                text = processor.strip(text)
        return text

    def apply(self, text: Optional[str], mode: Mode, use_full_color: bool = True) -> Optional[str]:
        """
        Run every processor over text in the given mode.

        Strip mode repeats whole passes until nothing changes, so a span
        exposed by a later processor is still removed and stripping is
        idempotent.
        """
        if not text or not self._processors:
            return text
        if not isinstance(mode, Mode):
            raise TypeError(f"Unknown registry mode: {mode!r}")

        if mode is Mode.PARSE:
            return self._run(text, mode, use_full_color)

        while True:
            result = self._run(text, mode, use_full_color)
            if result == text:
                return result
            text = result

    def parse(self, text: Optional[str], use_full_color: bool = True) -> Optional[str]:
        return self.apply(text, Mode.PARSE, use_full_color)

    def strip(self, text: Optional[str]) -> Optional[str]:
        return self.apply(text, Mode.STRIP)


def default_registry(definitions: EngineDefinitions = DEFAULT_DEFINITIONS, logger=None) -> PatternRegistry:
    """Build the standard registry: legacy spellings, gradients, rainbow, solid, codes."""
    return (
        PatternRegistry(logger=logger)
        .register(LegacyCanonicalizer(definitions, logger))
        .register(MultiStopGradient(definitions, logger))
        .register(PairedGradient(definitions, logger))
        .register(Rainbow(definitions, logger))
        .register(SolidColor(definitions, logger))
        .register(LegacyCodes(definitions, logger))
    )
