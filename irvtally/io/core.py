"""Shared functionality for ballot file I/O. Internal."""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, List, Tuple, Callable, Iterable, TextIO, Optional

from irvtally.ballot import Option


class ParseError(Exception):
    """An input that is invalid according to the given format was detected."""
    pass


@dataclasses.dataclass
class VotingSetup:
    """A container for data returnable from a ballot file.

    The votes are raw ballot records; they still need to be passed through
    :func:`irvtally.convert.format_ballots` before tallying.
    """
    votes: List[Any]
    candidates: Optional[List[Option]] = None
    election_name: Optional[str] = None


def loaders(text_loader: Callable[..., VotingSetup]
            ) -> Tuple[Callable[..., VotingSetup], Callable[..., VotingSetup]]:
    """Create load() and loads() functions from a text parsing function."""
    return_annot = typing.get_type_hints(text_loader).get('return')
    if return_annot is None:
        return_annot = Any

    def load(file: TextIO, **kwargs) -> return_annot:
        return text_loader(file.read(), **kwargs)

    def loads(text: str, **kwargs) -> return_annot:
        return text_loader(text, **kwargs)

    return load, loads


def dumpers(line_dumper: Callable[..., Iterable[str]]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() functions from a line generator function."""

    def dump(file: TextIO, *args, **kwargs) -> None:
        for line in line_dumper(*args, **kwargs):
            if not line.endswith('\n'):
                line += '\n'
            file.write(line)

    def dumps(*args, **kwargs) -> str:
        return ''.join(
            line + ('' if line.endswith('\n') else '\n')
            for line in line_dumper(*args, **kwargs)
        )

    return dump, dumps
