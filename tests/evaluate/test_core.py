import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import irvtally.evaluate.core
import irvtally.evaluate.sequential
from irvtally.evaluate.core import ElectionResult, RoundRecord


@pytest.mark.parametrize(('total', 'threshold'), [
    (0, 1), (1, 1), (2, 2), (3, 2), (4, 3), (5, 3), (100, 51), (101, 51),
])
def test_majority_threshold(total, threshold):
    assert irvtally.evaluate.core.majority_threshold(total) == threshold


def test_round_to_dict_copies():
    tally = {'A': 3, 'B': 1}
    rnd = RoundRecord(1, tally, irvtally.evaluate.core.ELIMINATION, ['B'],
                      {'B': {'exhausted': 1}})
    out = rnd.to_dict()
    assert out == {
        'round': 1,
        'tally': {'A': 3, 'B': 1},
        'status': 'Elimination',
        'eliminated': ['B'],
        'transfers': {'B': {'exhausted': 1}},
        'approvalRatings': {},
        'approvalPercentages': {},
    }
    out['tally']['A'] = 0
    assert rnd.tally['A'] == 3


def test_result_error_key():
    result = ElectionResult(None, 0, 1, [], [])
    assert 'error' not in result.to_dict()
    failed = ElectionResult(
        None, 0, 1, [], [], error='Tally exceeded max rounds (3).'
    )
    assert failed.to_dict()['error'] == 'Tally exceeded max rounds (3).'
    assert failed.to_dict()['winner'] is None


def test_round_mappings_read_only():
    tally = {'A': 3, 'B': 1}
    transfers = {'B': {'A': 1}}
    rnd = RoundRecord(1, tally, irvtally.evaluate.core.ELIMINATION, ['B'],
                      transfers, {'A': 1, 'B': 0}, {'A': 50.0, 'B': 0.0})
    tally['A'] = 99
    transfers['B']['A'] = 99
    assert rnd.tally == {'A': 3, 'B': 1}
    assert rnd.transfers == {'B': {'A': 1}}
    with pytest.raises(TypeError):
        rnd.tally['A'] = 99
    with pytest.raises(TypeError):
        rnd.transfers['B']['A'] = 99
    with pytest.raises(TypeError):
        rnd.approval_percentages['A'] = 0.0


def test_tally_rounds_read_only():
    result = irvtally.evaluate.sequential.tally(
        [['A'], ['B'], ['A', 'B']], ['A', 'B']
    )
    with pytest.raises(TypeError):
        result.rounds[0].tally['A'] = 99
    assert result.rounds[0].tally['A'] == 2
