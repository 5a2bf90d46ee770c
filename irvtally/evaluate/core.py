'''Result records of instant-runoff tallies.'''

from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, List, Dict, Mapping, Optional

from irvtally.ballot import Option


WINNER_FOUND = 'Winner found'
ELIMINATION = 'Elimination'
UNBREAKABLE_TIE = 'Unbreakable tie'

EXHAUSTED = 'exhausted'
'''Transfer destination of ballots with no remaining active choice.'''


def majority_threshold(total_votes: int) -> int:
    '''Smallest number of votes forming an outright majority.'''
    return total_votes // 2 + 1


@dataclasses.dataclass(frozen=True)
class RoundRecord:
    '''Snapshot of a single tally round.

    The mappings are copied on creation and exposed as read-only views;
    the eliminated list is a private copy.

    :param round: 1-based number of the round.
    :param tally: Votes of all options active in the round, in option order.
    :param status: One of :data:`WINNER_FOUND`, :data:`ELIMINATION`
        and :data:`UNBREAKABLE_TIE`.
    :param eliminated: Options eliminated in the round, in option order.
        For an unbreakable tie, the options tied at the end.
    :param transfers: Votes transferred from each eliminated option to the
        next active choice (or :data:`EXHAUSTED`).
    :param approval_ratings: Precomputed approval counts of all options.
    :param approval_percentages: Precomputed approval percentages.
    '''
    round: int
    tally: Mapping[Option, int]
    status: str
    eliminated: List[Option] = dataclasses.field(default_factory=list)
    transfers: Mapping[Option, Mapping[Option, int]] = dataclasses.field(
        default_factory=dict
    )
    approval_ratings: Mapping[Option, int] = dataclasses.field(
        default_factory=dict
    )
    approval_percentages: Mapping[Option, float] = dataclasses.field(
        default_factory=dict
    )

    def __post_init__(self):
        object.__setattr__(self, 'tally', _frozen_copy(self.tally))
        object.__setattr__(self, 'eliminated', list(self.eliminated))
        object.__setattr__(self, 'transfers', MappingProxyType({
            source: _frozen_copy(dests)
            for source, dests in self.transfers.items()
        }))
        for attr in ('approval_ratings', 'approval_percentages'):
            object.__setattr__(self, attr, _frozen_copy(getattr(self, attr)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'round': self.round,
            'tally': dict(self.tally),
            'status': self.status,
            'eliminated': list(self.eliminated),
            'transfers': {
                source: dict(dests)
                for source, dests in self.transfers.items()
            },
            'approvalRatings': dict(self.approval_ratings),
            'approvalPercentages': dict(self.approval_percentages),
        }


@dataclasses.dataclass(frozen=True)
class ElectionResult:
    '''Outcome of an instant-runoff tally with its full audit trail.

    :param winner: The winning option, None if there is none.
    :param total_votes: Number of ballots, including exhausted ones.
    :param threshold: Votes needed for an outright majority.
    :param options: The official list of options.
    :param rounds: Records of all rounds held, in order.
    :param error: Set only if the tally ran out of rounds.
    '''
    winner: Optional[Option]
    total_votes: int
    threshold: int
    options: List[Option]
    rounds: List[RoundRecord]
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        '''Render the result as a JSON-ready dictionary.'''
        out_dict = {
            'winner': self.winner,
            'totalVotes': self.total_votes,
            'threshold': self.threshold,
            'options': list(self.options),
            'rounds': [rnd.to_dict() for rnd in self.rounds],
        }
        if self.error is not None:
            out_dict['error'] = self.error
        return out_dict


def _frozen_copy(mapping: Mapping[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(dict(mapping))
