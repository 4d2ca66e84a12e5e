# applier/simple.py

from .base import Operator, Priority, StringApplier, check_operator, check_priority, check_source

class SimpleApplier(StringApplier):
    """Applies each operator immediately, in call order; priorities are ignored."""

    def __init__(self, string: str):
        self._string = check_source(string)

    def apply(self, operator: Operator, priority: Priority = Priority.NORMAL) -> "SimpleApplier":
        check_priority(priority)
        self._string = check_operator(operator)(self._string)
        return self

    def resolve(self) -> str:
        return self._string

    def __repr__(self) -> str:
        return f"SimpleApplier({self._string!r})"
