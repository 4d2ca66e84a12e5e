# exceptions.py

class PrismlineError(Exception):
    """Base class for every error raised by prismline."""


class MarkupError(PrismlineError, ValueError):
    """
    A markup capture could not be resolved (bad hex literal, saturation out of
    range, not enough gradient stops).

    Processors catch this per match and leave the offending markup untouched.
    """


class PaletteError(PrismlineError, LookupError):
    """The legacy palette cannot answer a quantization request."""
