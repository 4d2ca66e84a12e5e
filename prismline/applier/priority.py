# applier/priority.py

from typing import Dict, List

from .base import Operator, Priority, StringApplier, check_operator, check_priority, check_source
from .simple import SimpleApplier

class PriorityApplier(StringApplier):
    """
    Collects operators into five priority buckets and runs them on resolve.

    Buckets run from HIGHEST to LOWEST against the original string, each in
    insertion order. Adding the same operator object twice to a bucket has
    no effect. Resolving leaves the buckets in place, so it can be repeated.
    """

    def __init__(self, string: str):
        self._string = check_source(string)
        self._buckets: Dict[Priority, List[Operator]] = {p: [] for p in Priority}

    def apply(self, operator: Operator, priority: Priority = Priority.NORMAL) -> "PriorityApplier":
        check_operator(operator)
        bucket = self._buckets[check_priority(priority)]
        if not any(existing is operator for existing in bucket):
            bucket.append(operator)
        return self

    def operators(self, priority: Priority) -> List[Operator]:
        """Return a copy of the operators queued under a priority."""
        return list(self._buckets[check_priority(priority)])

    def resolve(self) -> str:
        applier = SimpleApplier(self._string)
        for priority in sorted(Priority, key=lambda p: p.value, reverse=True):
            for operator in self.operators(priority):
                applier.apply(operator)
        return applier.resolve()

    def __repr__(self) -> str:
        queued = sum(len(bucket) for bucket in self._buckets.values())
        return f"PriorityApplier({self._string!r}, operators={queued})"
