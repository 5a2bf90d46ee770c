"""Generate raw ballots for election simulations.

The generators produce raw ballot records (dictionaries with ``rankings``
and ``approvals`` lists), the same form that ballot files hold, so their
output can go through :func:`irvtally.convert.format_ballots` like any real
input.

-   :class:`RandomBallotGenerator` ranks a random number of candidates in
    uniformly random order and approves candidates by a coin flip.
-   :class:`ProfileBallotGenerator` draws voters from weighted profiles
    (e.g. party affiliations) that favour some candidates over others, and
    makes approval more likely for candidates ranked higher.
"""

import random
from numbers import Number
from typing import Any, Dict, List, Optional, Sequence, Union

from irvtally.ballot import Option
from irvtally.persist import simple_serialization


RawBallot = Dict[str, List[Option]]

FIRST_NAMES = [
    'Alice', 'Bob', 'Charlie', 'David', 'Eve',
    'Frank', 'Grace', 'Heidi', 'Ivan', 'Judy',
]
LAST_NAMES = [
    'Smith', 'Jones', 'Williams', 'Brown', 'Davis',
    'Miller', 'Wilson', 'Moore', 'Taylor', 'Anderson',
]

PARTY_PROFILES: Dict[str, Dict[Option, Number]] = {
    'Democratic': {
        'Democratic': 10, 'Working Families': 9, 'Green': 8,
        'Independent': 6, 'Libertarian': 4, 'Republican': 3,
        'Constitution': 2,
    },
    'Republican': {
        'Republican': 10, 'Constitution': 9, 'Libertarian': 8,
        'Independent': 6, 'Democratic': 3, 'Working Families': 2,
        'Green': 2,
    },
    'Independent': {
        'Independent': 10, 'Democratic': 7, 'Republican': 7,
        'Libertarian': 5, 'Green': 5, 'Working Families': 4,
        'Constitution': 4,
    },
    'Libertarian': {
        'Libertarian': 10, 'Republican': 8, 'Constitution': 7,
        'Independent': 6, 'Democratic': 4, 'Green': 3,
        'Working Families': 2,
    },
    'Green': {
        'Green': 10, 'Working Families': 9, 'Democratic': 8,
        'Independent': 6, 'Libertarian': 3, 'Republican': 2,
        'Constitution': 1,
    },
    'Constitution': {
        'Constitution': 10, 'Republican': 9, 'Libertarian': 8,
        'Independent': 6, 'Democratic': 2, 'Working Families': 1,
        'Green': 1,
    },
    'Working Families': {
        'Working Families': 10, 'Green': 9, 'Democratic': 8,
        'Independent': 6, 'Libertarian': 2, 'Republican': 1,
        'Constitution': 1,
    },
}
'''Candidate weights of voters by party affiliation.'''

PARTY_SHARES: Dict[str, Number] = {
    'Democratic': 25,
    'Republican': 22,
    'Independent': 20,
    'Libertarian': 12,
    'Green': 10,
    'Working Families': 6,
    'Constitution': 5,
}
'''Percentages of voters by party affiliation.'''

APPROVAL_PROBABILITIES = (0.95, 0.80, 0.65, 0.50, 0.35, 0.20, 0.05)
'''Probability of approving a candidate by their rank on the ballot.'''


@simple_serialization
class RandomBallotGenerator:
    """Generate uniformly random ballots.

    Every ballot ranks a random non-empty prefix of a random permutation of
    the candidates. Independently of the rankings, every candidate is
    approved with the given probability.

    :param candidates: Candidate names. It is also possible to specify just
        an integer; in that case, random candidate names are generated.
    :param approval_probability: Probability that a voter approves of any
        single candidate.
    :param random_state: Seed for the random generator.
    """
    def __init__(self,
                 candidates: Union[int, List[Option]],
                 approval_probability: float = .5,
                 random_state: Optional[int] = None,
                 ):
        self.candidates = candidates
        self.approval_probability = approval_probability
        self.random_state = random_state

    def generate(self, n: int) -> List[RawBallot]:
        """Generate n raw ballots."""
        if self.random_state is not None:
            random.seed(self.random_state)
        if isinstance(self.candidates, int):
            candidates = candidate_names(self.candidates)
        else:
            candidates = list(self.candidates)
        return [self.generate_one(candidates) for i in range(n)]

    def generate_one(self, candidates: List[Option]) -> RawBallot:
        if candidates:
            shuffled = random.sample(candidates, len(candidates))
            rankings = shuffled[:random.randint(1, len(candidates))]
        else:
            rankings = []
        approvals = [
            cand for cand in candidates
            if random.random() < self.approval_probability
        ]
        return {'rankings': rankings, 'approvals': approvals}


@simple_serialization
class ProfileBallotGenerator:
    """Generate ballots of voters drawn from weighted voter profiles.

    Each voter is first assigned a profile with probability proportional to
    its share. The full ranking is then drawn by a weighted lottery without
    replacement: candidates with higher weights in the profile tend to be
    ranked higher. Candidates with zero weight are not ranked at all.
    The candidate at (0-based) rank i is approved with probability
    ``approval_probabilities[i]``; candidates ranked beyond the list are
    never approved.

    :param profiles: Candidate weights per profile name. The default models
        a seven-party electorate.
    :param shares: Relative sizes of the profiles in the electorate.
    :param approval_probabilities: Approval probabilities by rank.
    :param random_state: Seed for the random generator.
    """
    def __init__(self,
                 profiles: Dict[str, Dict[Option, Number]] = PARTY_PROFILES,
                 shares: Dict[str, Number] = PARTY_SHARES,
                 approval_probabilities: Sequence[float] =
                     APPROVAL_PROBABILITIES,
                 random_state: Optional[int] = None,
                 ):
        unknown = set(shares) - set(profiles)
        if unknown:
            raise ValueError(f'shares given for unknown profiles: {unknown}')
        self.profiles = profiles
        self.shares = shares
        self.approval_probabilities = approval_probabilities
        self.random_state = random_state

    @property
    def candidates(self) -> List[Option]:
        """All candidates weighted by any profile, in order of appearance."""
        return list(dict.fromkeys(
            cand for weights in self.profiles.values() for cand in weights
        ))

    def generate(self, n: int) -> List[RawBallot]:
        """Generate n raw ballots."""
        if self.random_state is not None:
            random.seed(self.random_state)
        profile_names = list(self.shares.keys())
        profile_weights = list(self.shares.values())
        return [
            self.generate_one(self.profiles[profile_name])
            for profile_name in random.choices(
                profile_names, weights=profile_weights, k=n
            )
        ]

    def generate_one(self, weights: Dict[Option, Number]) -> RawBallot:
        rankings = weighted_ranking(weights)
        approvals = []
        for rank_i, cand in enumerate(rankings):
            if rank_i < len(self.approval_probabilities):
                if random.random() < self.approval_probabilities[rank_i]:
                    approvals.append(cand)
        return {'rankings': rankings, 'approvals': approvals}


def weighted_ranking(weights: Dict[Any, Number]) -> List[Any]:
    '''Order items by a weighted lottery without replacement.'''
    pool = {item: weight for item, weight in weights.items() if weight > 0}
    ranking = []
    while pool:
        drawn = random.choices(list(pool), weights=list(pool.values()))[0]
        ranking.append(drawn)
        del pool[drawn]
    return ranking


def candidate_names(n: int) -> List[str]:
    '''Generate n distinct random personal names.'''
    if n > len(FIRST_NAMES) * len(LAST_NAMES):
        raise ValueError(f'cannot generate {n} distinct candidate names')
    names = []
    while len(names) < n:
        name = f'{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}'
        if name not in names:
            names.append(name)
    return names
