'''Approval ratings of options, used as a tie-breaking signal.

Each ballot may carry a set of approved options besides its rankings. The
approval rating of an option is the number of ballots approving it, and its
approval percentage is that number relative to all ballots. The ratings are
computed once per election, before the first round, and stay constant for
the whole tally.
'''

from typing import Any, Dict, NamedTuple, Sequence

from irvtally.ballot import Ballot, Option


class ApprovalRatings(NamedTuple):
    '''Approval counts and percentages of all options, in option order.'''
    counts: Dict[Option, int]
    percentages: Dict[Option, float]


def calculate_approval(ballots: Sequence[Any],
                       options: Sequence[Option],
                       ) -> ApprovalRatings:
    '''Count approvals of every option.

    :param ballots: Clean ballots (or records accepted by
        :meth:`irvtally.ballot.Ballot.coerce`).
    :param options: The official list of all valid options.
    :returns: Approval counts and percentages (0 to 100) per option.
        All percentages are zero if there are no ballots.
    '''
    counts = {opt: 0 for opt in options}
    for record in ballots:
        for opt in Ballot.coerce(record).approvals:
            if opt in counts:
                counts[opt] += 1
    n_ballots = len(ballots)
    if n_ballots:
        percentages = {
            opt: count / n_ballots * 100 for opt, count in counts.items()
        }
    else:
        percentages = {opt: 0.0 for opt in counts}
    return ApprovalRatings(counts, percentages)
