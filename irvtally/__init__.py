"""irvtally - a library for tallying instant-runoff (ranked-choice) elections.

An instant-runoff election is counted in rounds. In each round, every ballot
counts for its highest-ranked option still in the race; an option with an
outright majority wins, otherwise the weakest options are eliminated and
their ballots transferred to the next choices. The library covers the whole
path from raw ballots to an auditable result:

-   Which ballots are valid. This is checked by the validator in the
    ``ballot`` module, which reports the first problem with a ballot.
-   Turning raw records (e.g. from JSON files) into clean ballots, dropping
    the invalid ones. This is the task of the formatter in the ``convert``
    module.
-   How popular each option is in the voters' separate approvals, used to
    break elimination ties; see the ``approval`` module.
-   Who wins. The tally engine in the :mod:`evaluate` subpackage runs the
    rounds and records every count, elimination and transfer.

Ballot files are handled by the :mod:`io` subpackage and random ballots for
simulations are produced by the ``generate`` module.
"""
