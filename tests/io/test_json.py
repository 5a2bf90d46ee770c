import sys
import os
import io
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import irvtally.io.json
import irvtally.io.core
from irvtally.ballot import Ballot


def test_load_list():
    setup = irvtally.io.json.loads(
        '[{"rankings": ["A", "B"]}, {"rankings": ["B"], "approvals": ["B"]}]'
    )
    assert setup.votes == [
        {'rankings': ['A', 'B']},
        {'rankings': ['B'], 'approvals': ['B']},
    ]
    assert setup.candidates is None
    assert setup.election_name is None


def test_load_object():
    text = json.dumps({
        'name': 'Board',
        'options': ['A', 'B'],
        'ballots': [{'rankings': ['A']}],
    })
    setup = irvtally.io.json.load(io.StringIO(text))
    assert setup.election_name == 'Board'
    assert setup.candidates == ['A', 'B']
    assert setup.votes == [{'rankings': ['A']}]


@pytest.mark.parametrize('text', [
    '{"rankings": ',
    '"ballots"',
    '42',
    '{"ballots": {"rankings": ["A"]}}',
    '{"ballots": [], "options": "AB"}',
])
def test_load_invalid(text):
    with pytest.raises(irvtally.io.core.ParseError):
        irvtally.io.json.loads(text)


def test_dump_ballots():
    ballots = [Ballot(('B', 'A'), frozenset(['A', 'B'])), {'rankings': []}]
    out = io.StringIO()
    irvtally.io.json.dump(out, ballots, ['A', 'B'], election_name='Board')
    text = out.getvalue()
    assert text.endswith('\n')
    assert json.loads(text) == {
        'name': 'Board',
        'options': ['A', 'B'],
        'ballots': [
            {'rankings': ['B', 'A'], 'approvals': ['A', 'B']},
            {'rankings': []},
        ],
    }


def test_dumps_loads():
    text = irvtally.io.json.dumps([{'rankings': ['C']}], ['C'])
    setup = irvtally.io.json.loads(text)
    assert setup.candidates == ['C']
    assert setup.votes == [{'rankings': ['C']}]
