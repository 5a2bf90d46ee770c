'''Instant-runoff evaluation of ranked ballots.

This hosts the tally engine (:class:`InstantRunoff`) and its functional
shorthand (:func:`tally`).
'''
import logging
import collections.abc
from typing import Any, List, Dict, Mapping, Optional, Sequence, Set, Union

import irvtally.util
import irvtally.component.tiebreak
from irvtally.approval import ApprovalRatings, calculate_approval
from irvtally.ballot import Ballot, Option
from irvtally.evaluate.core import (
    ELIMINATION, EXHAUSTED, UNBREAKABLE_TIE, WINNER_FOUND,
    ElectionResult, RoundRecord, majority_threshold,
)
from irvtally.persist import simple_serialization


logger = logging.getLogger(__name__)


@simple_serialization
class InstantRunoff:
    '''Select a single winner by eliminating options and transferring votes.

    Each round, every ballot counts for its highest-ranked option that is
    still active. If an option has an outright majority of all ballots
    (including exhausted ones), it wins. Otherwise, all options with the
    lowest vote total are candidates for elimination; if there are several,
    the tie-breaking rule may narrow them down. The eliminated options are
    removed and their ballots move on to their next active choice, or become
    exhausted if none remains.

    The tally ends without a winner if all remaining options are tied for
    elimination (an unbreakable tie), or if no decision is reached within
    the maximum number of rounds. Since every round without a decision
    eliminates at least one option, the latter cannot happen when the
    maximum is at least the number of options.

    Ties for the majority (possible only if several options reach the
    threshold at once) are resolved in favour of the option listed first.

    :param tie_breaking: Rule deciding which of the options tied for
        elimination to eliminate. The rules are implemented in the
        :mod:`irvtally.component.tiebreak` module and can be referred to by
        their names as strings (``eliminate_all`` eliminates the whole tied
        group, ``approval`` only the tied options with the lowest approval
        percentage). Any other value behaves like ``eliminate_all``.
    :param max_rounds: Maximum number of rounds to hold.
    '''
    def __init__(self,
                 tie_breaking: Union[
                     str, irvtally.component.tiebreak.TieBreakerType
                 ] = 'eliminate_all',
                 max_rounds: int = 20,
                 ):
        if (isinstance(max_rounds, bool)
                or not isinstance(max_rounds, int) or max_rounds < 1):
            raise ValueError(
                f'max_rounds must be a positive integer, got {max_rounds!r}'
            )
        self.tie_breaking = tie_breaking
        self.max_rounds = max_rounds
        self._tiebreaker = irvtally.component.tiebreak.construct(tie_breaking)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'InstantRunoff':
        '''Create the engine from a configuration mapping.

        Accepts both ``tieBreaking``/``maxRounds`` and
        ``tie_breaking``/``max_rounds`` keys; missing keys take defaults.
        '''
        kwargs = {}
        for camel_key, key in (('tieBreaking', 'tie_breaking'),
                               ('maxRounds', 'max_rounds')):
            if camel_key in config:
                kwargs[key] = config[camel_key]
            elif key in config:
                kwargs[key] = config[key]
        return cls(**kwargs)

    def evaluate(self,
                 ballots: Sequence[Any],
                 options: Sequence[Option],
                 approval: Optional[ApprovalRatings] = None,
                 ) -> ElectionResult:
        '''Run the tally round by round.

        :param ballots: Clean ballots, as returned by
            :func:`irvtally.convert.format_ballots`. Raw records are
            accepted but not validated.
        :param options: The official list of all valid options. Its order
            determines the order of tallies and resolves majority ties.
        :param approval: Precomputed approval ratings; computed from the
            ballots if not given.
        '''
        ballots = [Ballot.coerce(ballot) for ballot in ballots]
        options = list(options)
        total_votes = len(ballots)
        threshold = majority_threshold(total_votes)
        if approval is None:
            approval = calculate_approval(ballots, options)
        logger.info('tallying %d ballots, majority threshold %d',
                    total_votes, threshold)
        active = dict.fromkeys(options)
        rankings = [ballot.rankings for ballot in ballots]
        # position of the current choice in each ranking
        cursors = [_advance(ranking, 0, active) for ranking in rankings]
        rounds = []

        def conclude(winner: Optional[Option],
                     error: Optional[str] = None,
                     ) -> ElectionResult:
            return ElectionResult(
                winner=winner,
                total_votes=total_votes,
                threshold=threshold,
                options=options,
                rounds=rounds,
                error=error,
            )

        for round_no in range(1, self.max_rounds + 1):
            logger.info('proceeding to round %d', round_no)
            totals = self.count(rankings, cursors, active)
            logger.info('current vote totals: %s', totals)
            winner = self._find_majority(totals, threshold)
            if winner is not None:
                logger.info('%s elected with %d votes',
                            winner, totals[winner])
                rounds.append(self._record(
                    round_no, totals, WINNER_FOUND, [], {}, approval
                ))
                return conclude(winner)
            eliminated = self.select_eliminated(totals, approval.percentages)
            if len(eliminated) == len(active):
                logger.info('unbreakable tie between %s', eliminated)
                rounds.append(self._record(
                    round_no, totals, UNBREAKABLE_TIE, eliminated, {}, approval
                ))
                return conclude(None)
            logger.info('eliminating %s', eliminated)
            for opt in eliminated:
                del active[opt]
            transfers = self.transfer(
                rankings, cursors, set(eliminated), active
            )
            logger.debug('transfers: %s', transfers)
            rounds.append(self._record(
                round_no, totals, ELIMINATION, eliminated, transfers, approval
            ))
        logger.warning('no decision after %d rounds', self.max_rounds)
        return conclude(
            None, error=f'Tally exceeded max rounds ({self.max_rounds}).'
        )

    @staticmethod
    def count(rankings: List[Sequence[Option]],
              cursors: List[int],
              active: Dict[Option, None],
              ) -> Dict[Option, int]:
        '''Count current choices of all ballots for every active option.'''
        totals = dict.fromkeys(active, 0)
        for ranking, pos in zip(rankings, cursors):
            if pos < len(ranking):
                totals[ranking[pos]] += 1
        return totals

    def select_eliminated(self,
                          totals: Dict[Option, int],
                          percentages: Dict[Option, float],
                          ) -> List[Option]:
        '''Determine which options to eliminate in the round.

        :param totals: Vote totals of the active options.
        :param percentages: Approval percentages for tie-breaking.
        :returns: Options with the lowest total, narrowed down by the
            tie-breaking rule if there are several of them.
        '''
        lowest = irvtally.util.lowest_keys(totals)
        if len(lowest) > 1 and len(totals) > 1:
            broken = set(self._tiebreaker(lowest, percentages))
            narrowed = [opt for opt in lowest if opt in broken]
            if narrowed:
                if len(narrowed) < len(lowest):
                    logger.info('tie for elimination %s broken to %s',
                                lowest, narrowed)
                return narrowed
        return lowest

    @staticmethod
    def transfer(rankings: List[Sequence[Option]],
                 cursors: List[int],
                 eliminated: Set[Option],
                 active: Dict[Option, None],
                 ) -> Dict[Option, Dict[Option, int]]:
        '''Move ballots of eliminated options on to their next active choice.

        Updates the cursors in place.

        :returns: Numbers of ballots moved from each eliminated option to
            each next choice (or :data:`EXHAUSTED`).
        '''
        transfers = {}
        for i, ranking in enumerate(rankings):
            pos = cursors[i]
            if pos < len(ranking) and ranking[pos] in eliminated:
                new_pos = _advance(ranking, pos + 1, active)
                cursors[i] = new_pos
                target = ranking[new_pos] if new_pos < len(ranking) \
                    else EXHAUSTED
                irvtally.util.count_nested(transfers, ranking[pos], target)
        return transfers

    @staticmethod
    def _find_majority(totals: Dict[Option, int],
                       threshold: int,
                       ) -> Optional[Option]:
        for opt, total in totals.items():
            if total >= threshold:
                return opt
        return None

    @staticmethod
    def _record(round_no: int,
                totals: Dict[Option, int],
                status: str,
                eliminated: List[Option],
                transfers: Dict[Option, Dict[Option, int]],
                approval: ApprovalRatings,
                ) -> RoundRecord:
        return RoundRecord(
            round=round_no,
            tally=totals,
            status=status,
            eliminated=list(eliminated),
            transfers=transfers,
            approval_ratings=dict(approval.counts),
            approval_percentages=dict(approval.percentages),
        )


def _advance(ranking: Sequence[Option],
             pos: int,
             active: Dict[Option, None],
             ) -> int:
    while pos < len(ranking) and ranking[pos] not in active:
        pos += 1
    return pos


def tally(ballots: Sequence[Any],
          options: Sequence[Option],
          config: Union[InstantRunoff, Mapping[str, Any], None] = None,
          ) -> ElectionResult:
    '''Run a full instant-runoff tally.

    :param ballots: Clean ballots, as returned by
        :func:`irvtally.convert.format_ballots`.
    :param options: The official list of all valid options.
    :param config: The rules of the election: an :class:`InstantRunoff`
        instance or a mapping such as
        ``{'tieBreaking': 'approval', 'maxRounds': 20}``. Defaults apply if
        not given.
    '''
    if config is None:
        engine = InstantRunoff()
    elif isinstance(config, InstantRunoff):
        engine = config
    elif isinstance(config, collections.abc.Mapping):
        engine = InstantRunoff.from_config(config)
    else:
        raise TypeError(f'invalid tally config: {config!r}')
    return engine.evaluate(ballots, options)
