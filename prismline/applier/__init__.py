# applier/__init__.py

from typing import Union

from .base import Operator, Priority, StringApplier
from .priority import PriorityApplier
from .simple import SimpleApplier

def _source(source: Union[str, StringApplier]) -> str:
    if isinstance(source, StringApplier):
        return source.resolve()
    return source

def simplified(source: Union[str, StringApplier]) -> SimpleApplier:
    """
    Create an applier that runs every operator as soon as it is added.

    Passing another applier seeds the new one with its resolved string;
    any priority buckets of the source are flattened away.
    """
    return SimpleApplier(_source(source))

def prioritized(source: Union[str, StringApplier]) -> PriorityApplier:
    """
    Create an applier that queues operators by priority until resolved.

    Passing another applier seeds the new one with its resolved string.
    """
    return PriorityApplier(_source(source))

__all__ = [
    'Operator', 'Priority', 'StringApplier',
    'SimpleApplier', 'PriorityApplier',
    'simplified', 'prioritized',
]
