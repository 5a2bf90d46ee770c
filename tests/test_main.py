import sys
import os
import io
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import irvtally.__main__
import irvtally.evaluate.sequential
from irvtally.io.core import VotingSetup


BALLOT_FILE = {
    'options': ['A', 'B', 'C'],
    'ballots': [
        {'rankings': ['A', 'B', 'C']},
        {'rankings': ['B', 'A', 'C']},
        {'rankings': ['A', 'C', 'B']},
        {'rankings': ['C', 'B', 'A']},
        {'rankings': ['B', 'A', 'C']},
        {'rankings': ['D']},
    ],
}


def test_main_prints_result(capsys):
    irvtally.__main__.main(io.StringIO(json.dumps(BALLOT_FILE)), quiet=True)
    printed = json.loads(capsys.readouterr().out)
    expected = irvtally.evaluate.sequential.tally(
        BALLOT_FILE['ballots'][:5], BALLOT_FILE['options']
    ).to_dict()
    assert printed == expected
    assert printed['winner'] == 'B'


def test_main_max_rounds(capsys):
    irvtally.__main__.main(
        io.StringIO(json.dumps(BALLOT_FILE)), max_rounds=1, quiet=True
    )
    printed = json.loads(capsys.readouterr().out)
    assert printed['error'] == 'Tally exceeded max rounds (1).'


def test_main_empty(capsys):
    with pytest.warns(UserWarning):
        irvtally.__main__.main(io.StringIO('[]'), quiet=True)
    assert capsys.readouterr().out == ''


def test_gather_options_explicit():
    setup = VotingSetup(votes=[{'rankings': ['A']}], candidates=['A', 'B'])
    assert irvtally.__main__.gather_options(setup, ['B', 'A']) == ['B', 'A']
    assert irvtally.__main__.gather_options(setup) == ['A', 'B']


def test_gather_options_inferred():
    setup = VotingSetup(votes=[
        {'rankings': ['C', 'A']},
        'garbage',
        {'rankings': ['A', 'B', 7]},
        {'approvals': ['D']},
    ])
    assert irvtally.__main__.gather_options(setup) == ['C', 'A', 'B']
