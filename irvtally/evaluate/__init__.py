'''Evaluate the results of instant-runoff elections.

The tally engine lives in :mod:`irvtally.evaluate.sequential`; it expects
clean ballots as produced by :mod:`irvtally.convert` and does not validate
them again. Its result, an :class:`core.ElectionResult`, records every round
of counting: the vote totals, the eliminated options and the transfers of
their votes.

A tally may end without a winner, either by an unbreakable tie (all
remaining options tied for elimination) or by exceeding the configured
maximum number of rounds. Both are reported in the result, never raised.
'''

from irvtally.evaluate.core import *    # noqa
