import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import irvtally.approval
from irvtally.ballot import Ballot


def test_counts_and_percentages():
    ballots = [
        Ballot(('A',), frozenset(['A'])),
        Ballot(('B',), frozenset(['A', 'B'])),
        Ballot(()),
        Ballot(('A', 'C'), frozenset(['C'])),
    ]
    ratings = irvtally.approval.calculate_approval(ballots, ['A', 'B', 'C'])
    assert ratings.counts == {'A': 2, 'B': 1, 'C': 1}
    assert ratings.percentages == {'A': 50.0, 'B': 25.0, 'C': 25.0}


def test_option_order():
    ballots = [Ballot((), frozenset(['A', 'C']))]
    ratings = irvtally.approval.calculate_approval(ballots, ['C', 'B', 'A'])
    assert list(ratings.counts) == ['C', 'B', 'A']
    assert list(ratings.percentages) == ['C', 'B', 'A']


def test_no_ballots():
    ratings = irvtally.approval.calculate_approval([], ['A', 'B'])
    assert ratings.counts == {'A': 0, 'B': 0}
    assert ratings.percentages == {'A': 0.0, 'B': 0.0}


def test_raw_records():
    ballots = [
        {'rankings': ['A'], 'approvals': ['B']},
        {'rankings': ['B']},
        ['A'],
    ]
    ratings = irvtally.approval.calculate_approval(ballots, ['A', 'B'])
    assert ratings.counts == {'A': 0, 'B': 1}
    assert ratings.percentages['B'] == pytest.approx(100 / 3)
