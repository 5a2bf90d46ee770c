'''Tie-breaking rules for instant-runoff elimination.

When several options share the lowest vote total in a round, the tally engine
passes them to a tie-breaking rule that decides which of them to eliminate.
A rule takes the list of tied options (in original option order) and the
precomputed approval percentages of all options, and returns the options to
eliminate, keeping the original order.

All supported rules are assembled in the `TIEBREAKERS` dictionary keyed
by their name. `get()` retrieves from this dictionary by string key;
`construct()` also accepts callables and passes them through. Any other value
given to `construct()` (an unknown name, a list, ...) falls back to
eliminating the whole tied group.
'''

from typing import Callable, Dict, List
from numbers import Number

import irvtally.component.core
from irvtally.ballot import Option


TIEBREAKERS = {}

TieBreakerType = Callable[[List[Option], Dict[Option, Number]], List[Option]]


tiebreak_mark, get, construct = irvtally.component.core.register_functions(
    TIEBREAKERS, 'tie breaking rule', TieBreakerType,
    fallback='eliminate_all',
)


@tiebreak_mark
def eliminate_all(tied: List[Option],
                  percentages: Dict[Option, Number],
                  ) -> List[Option]:
    '''Eliminate the whole tied group together.'''
    return list(tied)


@tiebreak_mark
def approval(tied: List[Option],
             percentages: Dict[Option, Number],
             ) -> List[Option]:
    '''Eliminate only the tied options with the lowest approval percentage.

    The narrowing only applies if it actually singles out a strict subset of
    the tied group; if all tied options share the lowest approval percentage,
    the whole group is eliminated.
    '''
    if not tied:
        return []
    lowest = min(percentages.get(opt, 0) for opt in tied)
    narrowed = [opt for opt in tied if percentages.get(opt, 0) == lowest]
    if 0 < len(narrowed) < len(tied):
        return narrowed
    else:
        return list(tied)
