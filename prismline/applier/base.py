# applier/base.py

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable

Operator = Callable[[str], str]

class Priority(Enum):
    """
    Order in which a prioritized applier runs its operators.

    HIGHEST runs first and LOWEST last; operators sharing a priority run in
    the order they were added.
    """
    LOWEST = 0
    LOW = 1
    NORMAL = 2
    HIGH = 3
    HIGHEST = 4


def check_operator(operator: Operator) -> Operator:
    """Reject anything that is not a callable before it reaches an applier."""
    if operator is None or not callable(operator):
        raise TypeError(f"Operator must be a callable taking a string, got {operator!r}")
    return operator


def check_priority(priority: Priority) -> Priority:
    if not isinstance(priority, Priority):
        raise TypeError(f"Priority must be a Priority member, got {priority!r}")
    return priority


def check_source(string: str) -> str:
    if not isinstance(string, str):
        raise TypeError(f"Applier source must be a string, got {string!r}")
    return string


class StringApplier(ABC):
    """
    Applies several string operators to a single string.

    Implementations decide whether the priority passed to `apply` matters;
    `resolve()` (and `str()`) returns the string after every operator ran.
    """

    @abstractmethod
    def apply(self, operator: Operator, priority: Priority = Priority.NORMAL) -> "StringApplier":
        """Add an operator and return this applier for chaining."""

    @abstractmethod
    def resolve(self) -> str:
        """Return the string after all the operators were applied."""

    def __str__(self) -> str:
        return self.resolve()
