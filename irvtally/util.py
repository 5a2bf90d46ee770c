'''Various utility functions for other modules of irvtally.

There should normally be no need to use these functions directly.
'''

from typing import Any, List, Dict, Iterable
from numbers import Number


def count_nested(counts: Dict[Any, Dict[Any, int]],
                 outer: Any,
                 inner: Any,
                 ) -> None:
    '''Increment a count in a two-level dictionary, creating levels as needed.

    Keys are inserted in the order they are first counted.
    '''
    inner_counts = counts.setdefault(outer, {})
    inner_counts[inner] = inner_counts.get(inner, 0) + 1


def lowest_keys(values: Dict[Any, Number]) -> List[Any]:
    '''Return all keys sharing the lowest value, in dictionary order.'''
    if not values:
        return []
    minimum = min(values.values())
    return [key for key, value in values.items() if value == minimum]


def unique(items: Iterable[Any]) -> List[Any]:
    '''Return the items without repetitions, preserving first appearances.'''
    return list(dict.fromkeys(items))
