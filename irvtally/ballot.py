'''Ballot representation and ballot validators.

A ballot in an instant-runoff election carries two independent pieces of
information:

-   **Rankings** - the voter's preference order, represented by a tuple of
    options (candidate names). A ballot may rank any number of options,
    including none at all; such an empty ballot is exhausted from the start.
-   **Approvals** - an unordered set of options the voter separately
    endorses. Approvals never influence who the vote counts for; they are
    only used as a secondary signal to break elimination ties.

Raw ballots usually arrive as JSON-like records (dictionaries with
a ``rankings`` list and an optional ``approvals`` list). The validator
checks such a record against the official option list. If a ballot is
invalid, :meth:`BallotValidator.validate` raises a subclass of
:class:`BallotError` naming the reason; the :func:`validate` function wraps
this into a :class:`Verdict` so that callers can treat invalid ballots as
data.
'''

import abc
import collections.abc
import dataclasses
from typing import Any, Collection, FrozenSet, Iterable, Dict, List, \
    NamedTuple, Optional, Sequence, Tuple


Option = str

RANKING_TYPES = (list, tuple)
APPROVAL_TYPES = (list, tuple, set, frozenset)


class BallotError(Exception, metaclass=abc.ABCMeta):
    '''A ballot is invalid given the official option list.

    :param message: Description of the problem.
    :param value: The offending value (ballot, option list or entry).
    '''
    def __init__(self, message: str, value: Any = None):
        self.value = value
        super().__init__(message)

    @property
    def reason(self) -> str:
        '''Short identifier of the validation failure.'''
        return type(self).__name__


class MalformedBallot(BallotError):
    '''The ballot is not a record with a rankings sequence.'''
    pass


class MalformedConfig(BallotError):
    '''The official option list is not a list of options.'''
    pass


class UnknownOption(BallotError):
    '''A ranked choice is not one of the options.'''
    def __init__(self, value: Any):
        super().__init__(
            f'invalid choice: {value!r} is not one of the options', value
        )


class NonStringChoice(BallotError):
    '''A ranked choice is not a string.'''
    def __init__(self, value: Any):
        super().__init__(f'invalid choice: {value!r} is not a string', value)


class DuplicateRanking(BallotError):
    '''An option is ranked more than once.'''
    def __init__(self, value: Any):
        super().__init__(
            f'duplicate ranking: {value!r} is ranked more than once', value
        )


class UnknownApproval(BallotError):
    '''An approved option is not one of the options.'''
    def __init__(self, value: Any):
        super().__init__(
            f'invalid approval: {value!r} is not one of the options', value
        )


class NonStringApproval(BallotError):
    '''An approved option is not a string.'''
    def __init__(self, value: Any):
        super().__init__(f'invalid approval: {value!r} is not a string', value)


class DuplicateApproval(BallotError):
    '''An option is approved more than once.'''
    def __init__(self, value: Any):
        super().__init__(
            f'duplicate approval: {value!r} is approved more than once', value
        )


class Verdict(NamedTuple):
    '''Outcome of validating a single ballot.

    :param valid: Whether the ballot is valid.
    :param error: Description of the first violation found, None if valid.
    :param reason: Name of the :class:`BallotError` subclass corresponding
        to the violation, None if valid.
    '''
    valid: bool
    error: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_error(cls, err: BallotError) -> 'Verdict':
        return cls(False, str(err), err.reason)


@dataclasses.dataclass(frozen=True)
class Ballot:
    '''A clean, validated ballot.

    :param rankings: Options in the voter's order of preference.
    :param approvals: Options the voter approves of.
    '''
    rankings: Tuple[Option, ...] = ()
    approvals: FrozenSet[Option] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, 'rankings', tuple(self.rankings))
        object.__setattr__(self, 'approvals', frozenset(self.approvals))

    @classmethod
    def coerce(cls, record: Any) -> 'Ballot':
        '''Create a ballot from a record without validating it.

        Accepts a ballot (returned unchanged), a mapping with a ``rankings``
        key and an optional ``approvals`` key, or a bare sequence of
        rankings.
        '''
        if isinstance(record, cls):
            return record
        elif isinstance(record, collections.abc.Mapping):
            return cls(record['rankings'], record.get('approvals') or ())
        else:
            return cls(record)

    def to_dict(self,
                options: Optional[Sequence[Option]] = None,
                ) -> Dict[str, List[Option]]:
        '''Render the ballot as a JSON-ready raw record.

        :param options: If given, approvals are listed in the order of this
            list; otherwise they are sorted.
        '''
        if options is None:
            approvals = sorted(self.approvals)
        else:
            approvals = [opt for opt in options if opt in self.approvals]
        return {'rankings': list(self.rankings), 'approvals': approvals}


class BallotValidator:
    '''Validate ballots against an official list of options.

    The checks are performed in a fixed order and the first violation found
    is reported:

    1.  The ballot must be a record containing a rankings list (or a bare
        rankings list) and the options must be a list.
    2.  Every ranked choice must be one of the options and a string.
    3.  No option may be ranked twice.
    4.  If approvals are given, they must be a collection of options that
        are strings, each approved at most once.

    :param options: The official list of all valid options.
    '''
    def __init__(self, options: Sequence[Option]):
        self.options = options
        self._option_set = None

    def validate(self, ballot: Any) -> None:
        '''Check if the ballot is valid.

        :param ballot: Ballot to be checked; a :class:`Ballot`, a mapping with
            a ``rankings`` key or a rankings sequence.
        :raises MalformedBallot: If the ballot or its approvals have
            an invalid structure.
        :raises MalformedConfig: If the option list is invalid.
        :raises UnknownOption: If a ranked choice is not an option.
        :raises NonStringChoice: If a ranked choice is not a string.
        :raises DuplicateRanking: If an option is ranked twice.
        :raises UnknownApproval: If an approval is not an option.
        :raises NonStringApproval: If an approval is not a string.
        :raises DuplicateApproval: If an option is approved twice.
        '''
        rankings, approvals = self._unpack(ballot)
        option_set = self._get_option_set()
        self._check_entries(rankings, option_set, UnknownOption,
                            NonStringChoice, DuplicateRanking)
        if approvals is not None:
            if not isinstance(approvals, APPROVAL_TYPES):
                raise MalformedBallot(
                    f'approvals must be a list, got {approvals!r}', ballot
                )
            self._check_entries(approvals, option_set, UnknownApproval,
                                NonStringApproval, DuplicateApproval)

    def verdict(self, ballot: Any) -> Verdict:
        '''Validate the ballot, returning the outcome instead of raising.'''
        try:
            self.validate(ballot)
        except BallotError as err:
            return Verdict.from_error(err)
        return Verdict(True)

    def _get_option_set(self) -> FrozenSet[Option]:
        if self._option_set is None:
            if not isinstance(self.options, RANKING_TYPES):
                raise MalformedConfig(
                    f'options must be a list, got {self.options!r}',
                    self.options
                )
            try:
                self._option_set = frozenset(self.options)
            except TypeError as err:
                raise MalformedConfig(
                    f'options must be hashable: {self.options!r}',
                    self.options
                ) from err
        return self._option_set

    @staticmethod
    def _unpack(ballot: Any) -> Tuple[Sequence[Any], Optional[Collection]]:
        if isinstance(ballot, Ballot):
            return ballot.rankings, ballot.approvals
        elif isinstance(ballot, collections.abc.Mapping):
            if 'rankings' not in ballot:
                raise MalformedBallot('ballot has no rankings', ballot)
            rankings = ballot['rankings']
            approvals = ballot.get('approvals')
        elif isinstance(ballot, RANKING_TYPES):
            rankings, approvals = ballot, None
        else:
            raise MalformedBallot(f'ballot is not a record: {ballot!r}', ballot)
        if not isinstance(rankings, RANKING_TYPES):
            raise MalformedBallot(
                f'rankings must be a list, got {rankings!r}', ballot
            )
        return rankings, approvals

    @staticmethod
    def _check_entries(entries: Iterable[Any],
                       option_set: FrozenSet[Option],
                       unknown_error: type,
                       nonstring_error: type,
                       duplicate_error: type,
                       ) -> None:
        entries = list(entries)
        for entry in entries:
            if not _is_member(entry, option_set):
                raise unknown_error(entry)
            elif not isinstance(entry, str):
                raise nonstring_error(entry)
        seen = set()
        for entry in entries:
            if entry in seen:
                raise duplicate_error(entry)
            seen.add(entry)


def _is_member(value: Any, option_set: FrozenSet[Option]) -> bool:
    try:
        return value in option_set
    except TypeError:    # unhashable
        return False


def validate(ballot: Any, options: Sequence[Option]) -> Verdict:
    '''Validate a single ballot against the official option list.

    Never raises; all problems are reported in the returned verdict.

    :param ballot: Ballot to be checked; a :class:`Ballot`, a mapping with
        a ``rankings`` key (and optionally ``approvals``) or a bare rankings
        list.
    :param options: The official list of all valid options.
    '''
    return BallotValidator(options).verdict(ballot)
