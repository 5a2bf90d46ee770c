import sys
import os
import logging

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import irvtally.component.tiebreak


PERCENTAGES = {'A': 50.0, 'B': 20.0, 'C': 20.0, 'D': 80.0}


def test_eliminate_all():
    rule = irvtally.component.tiebreak.get('eliminate_all')
    assert rule(['B', 'C'], PERCENTAGES) == ['B', 'C']


@pytest.mark.parametrize(('tied', 'expected'), [
    (['A', 'B', 'C'], ['B', 'C']),
    (['A', 'D'], ['A']),
    (['B', 'C'], ['B', 'C']),
    (['A'], ['A']),
    ([], []),
])
def test_approval(tied, expected):
    rule = irvtally.component.tiebreak.get('approval')
    assert rule(tied, PERCENTAGES) == expected


def test_approval_missing_percentage_counts_as_zero():
    rule = irvtally.component.tiebreak.approval
    assert rule(['A', 'X'], PERCENTAGES) == ['X']


def test_registry():
    assert set(irvtally.component.tiebreak.TIEBREAKERS) == {
        'eliminate_all', 'approval'
    }
    with pytest.raises(KeyError):
        irvtally.component.tiebreak.get('coin_flip')


def test_construct_passthrough():
    def rule(tied, percentages):
        return tied[-1:]
    assert irvtally.component.tiebreak.construct(rule) is rule
    assert irvtally.component.tiebreak.construct('approval') \
        is irvtally.component.tiebreak.approval


def test_construct_fallback(caplog):
    with caplog.at_level(logging.WARNING):
        rule = irvtally.component.tiebreak.construct('coin_flip')
    assert rule is irvtally.component.tiebreak.eliminate_all
    assert 'coin_flip' in caplog.text


@pytest.mark.parametrize('rule_def', [['approval'], {'x': 1}, 3, None])
def test_construct_fallback_for_non_names(rule_def, caplog):
    with caplog.at_level(logging.WARNING):
        rule = irvtally.component.tiebreak.construct(rule_def)
    assert rule is irvtally.component.tiebreak.eliminate_all
    assert 'unknown tie breaking rule' in caplog.text
