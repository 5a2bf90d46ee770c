'''JSON ballot files.

Two layouts are recognized when loading:

-   A bare list of raw ballot records, as written by ballot generators::

        [{"rankings": ["A", "B"], "approvals": ["A"]}, ...]

-   An object that also names the options and the election::

        {"name": "Board 2025", "options": ["A", "B", "C"], "ballots": [...]}

The object layout is always used when dumping.
'''

import json
from typing import Any, List, Optional, Sequence, Iterable

import irvtally.io.core
from irvtally.ballot import Ballot, Option
from irvtally.io.core import VotingSetup


class JSONParseError(irvtally.io.core.ParseError):
    pass


def parse(text: str) -> VotingSetup:
    try:
        content = json.loads(text)
    except ValueError as err:
        raise JSONParseError(f'invalid JSON: {err}') from err
    if isinstance(content, list):
        return VotingSetup(votes=content)
    elif isinstance(content, dict):
        votes = content.get('ballots', [])
        if not isinstance(votes, list):
            raise JSONParseError(f'ballots must be a list, got {votes!r}')
        options = content.get('options')
        if options is not None and not isinstance(options, list):
            raise JSONParseError(f'options must be a list, got {options!r}')
        return VotingSetup(
            votes=votes,
            candidates=options,
            election_name=content.get('name'),
        )
    else:
        raise JSONParseError(
            f'ballot file must hold a list or an object, got {content!r}'
        )


load, loads = irvtally.io.core.loaders(parse)


def dump_lines(ballots: Sequence[Any],
               options: Optional[List[Option]] = None,
               election_name: Optional[str] = None,
               ) -> Iterable[str]:
    content = {}
    if election_name is not None:
        content['name'] = election_name
    if options is not None:
        content['options'] = list(options)
    content['ballots'] = [_dump_ballot(ballot, options) for ballot in ballots]
    yield json.dumps(content, indent=2, ensure_ascii=False)


dump, dumps = irvtally.io.core.dumpers(dump_lines)


def _dump_ballot(ballot: Any, options: Optional[List[Option]]) -> Any:
    if isinstance(ballot, Ballot):
        return ballot.to_dict(options)
    else:
        return ballot
