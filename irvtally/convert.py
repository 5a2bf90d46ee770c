'''Conversion of raw ballot records into clean ballots.

Raw records typically come from JSON files or ballot generators and may be
damaged in arbitrary ways. The formatter runs every record through
a :class:`irvtally.ballot.BallotValidator`, keeps the valid ones as
:class:`irvtally.ballot.Ballot` objects and drops the rest. Dropped records
never abort the batch; each is reported as a :class:`SkippedBallot` and
logged as a warning.
'''

import logging
import collections.abc
from typing import Any, List, NamedTuple, Optional, Sequence, Tuple

import irvtally.ballot
from irvtally.ballot import Ballot, Option


logger = logging.getLogger(__name__)


class SkippedBallot(NamedTuple):
    '''A raw record dropped by the formatter.

    :param index: Position of the record in the raw input.
    :param reason: Short identifier of the problem, such as ``UnknownOption``
        or ``MissingRankings``.
    :param message: Human-readable description of the problem.
    '''
    index: int
    reason: str
    message: str


class BallotFormatter:
    '''Filter raw ballot records to clean ballots.

    Records that are not structured (a mapping or a ballot) or lack
    a rankings list are skipped without validation; all other records are
    validated and skipped if invalid. Approvals default to an empty set.

    :param options: The official list of all valid options.
    '''
    def __init__(self, options: Sequence[Option]):
        self.options = options
        self.validator = irvtally.ballot.BallotValidator(options)

    def convert(self, raw_votes: Optional[Sequence[Any]]) -> List[Ballot]:
        '''Return the clean ballots, in input order.'''
        return self.sift(raw_votes)[0]

    def sift(self,
             raw_votes: Optional[Sequence[Any]],
             ) -> Tuple[List[Ballot], List[SkippedBallot]]:
        '''Separate raw records into clean ballots and skipped records.

        :param raw_votes: Raw ballot records. None or a non-list input
            is treated as empty.
        :returns: A 2-tuple of the clean ballots (in input order) and
            the records that were dropped.
        '''
        ballots = []
        skipped = []
        if not isinstance(raw_votes, (list, tuple)):
            if raw_votes is not None:
                logger.warning('raw votes are not a list, ignoring: %r',
                               type(raw_votes))
            return ballots, skipped
        for i, record in enumerate(raw_votes):
            skip = self._check_record(i, record)
            if skip is None:
                ballots.append(Ballot.coerce(record))
            else:
                logger.warning('invalid ballot %d skipped: %s',
                               i, skip.message)
                skipped.append(skip)
        if skipped:
            logger.info('%d of %d ballots skipped',
                        len(skipped), len(raw_votes))
        return ballots, skipped

    def _check_record(self, index: int, record: Any) -> Optional[SkippedBallot]:
        if isinstance(record, Ballot):
            pass
        elif not isinstance(record, collections.abc.Mapping):
            return SkippedBallot(
                index, 'NotARecord', f'ballot is not a record: {record!r}'
            )
        elif not isinstance(record.get('rankings'), (list, tuple)):
            return SkippedBallot(
                index, 'MissingRankings', 'ballot has no rankings list'
            )
        verdict = self.validator.verdict(record)
        if verdict.valid:
            return None
        else:
            return SkippedBallot(index, verdict.reason, verdict.error)


def format_ballots(raw_votes: Optional[Sequence[Any]],
                   options: Sequence[Option],
                   ) -> List[Ballot]:
    '''Sanitize raw vote records into a list of clean ballots.

    :param raw_votes: Raw ballot records, e.g. ``{'rankings': ['A', 'C'],
        'approvals': ['A']}``.
    :param options: The official list of all valid options.
    '''
    return BallotFormatter(options).convert(raw_votes)
