import sys
import os
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import irvtally.persist
import irvtally.component.tiebreak
import irvtally.generate
import irvtally.evaluate.sequential
from irvtally.evaluate.sequential import InstantRunoff


def test_engine_to_dict():
    engine = InstantRunoff(tie_breaking='approval', max_rounds=8)
    assert irvtally.persist.to_dict(engine) == {
        'class': 'irvtally.evaluate.sequential.InstantRunoff',
        'tie_breaking': 'approval',
        'max_rounds': 8,
    }


def test_engine_roundtrip_through_json():
    engine = InstantRunoff(tie_breaking='approval', max_rounds=8)
    text = json.dumps(engine.to_dict())
    restored = irvtally.persist.from_dict(json.loads(text))
    assert isinstance(restored, InstantRunoff)
    assert restored.tie_breaking == 'approval'
    assert restored.max_rounds == 8


def test_callable_tiebreak_serialized_by_name():
    engine = InstantRunoff(
        tie_breaking=irvtally.component.tiebreak.approval
    )
    serialized = engine.to_dict()
    assert serialized['tie_breaking'] == {
        'callable': 'irvtally.component.tiebreak.approval'
    }
    restored = irvtally.persist.from_dict(serialized)
    assert restored.tie_breaking is irvtally.component.tiebreak.approval


def test_generator_roundtrip():
    gen = irvtally.generate.ProfileBallotGenerator(
        profiles={'left': {'A': 3, 'B': 1}, 'right': {'B': 3, 'A': 1}},
        shares={'left': 60, 'right': 40},
        approval_probabilities=(.9, .1),
        random_state=42,
    )
    serialized = irvtally.persist.to_dict(gen)
    assert serialized['approval_probabilities'] == {
        'type': 'tuple', 'value': [.9, .1]
    }
    restored = irvtally.persist.from_dict(json.loads(json.dumps(serialized)))
    assert restored.profiles == gen.profiles
    assert restored.approval_probabilities == (.9, .1)
    assert restored.generate(20) == gen.generate(20)


@pytest.mark.parametrize('value', [
    ['InstantRunoff'],
    {'tie_breaking': 'approval'},
    {'class': '.InstantRunoff'},
    {'class': 'irvtally evaluate'},
])
def test_invalid_defs(value):
    with pytest.raises(ValueError):
        irvtally.persist.from_dict(value)


def test_tuple_roundtrip_keeps_type():
    value = {'weights': (1, 2), 'names': ['A', 'B']}
    serialized = irvtally.persist.serialize_value(value)
    assert serialized == {
        'weights': {'type': 'tuple', 'value': [1, 2]},
        'names': ['A', 'B'],
    }
    assert irvtally.persist.deserialize_value(serialized) == value


@pytest.mark.parametrize('obj', [
    InstantRunoff(tie_breaking=lambda tied, pcts: tied),
    irvtally.generate.ProfileBallotGenerator(
        profiles={'left': {1: 3, 2: 1}}, shares={'left': 1}
    ),
    irvtally.generate.RandomBallotGenerator({'A', 'B'}),
])
def test_unserializable_params(obj):
    with pytest.raises(ValueError):
        irvtally.persist.to_dict(obj)
