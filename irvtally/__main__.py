"""A commandline tool to tally instant-runoff elections from JSON ballot files.

Reads raw ballots, drops the invalid ones, runs the tally and writes the full
round-by-round result as JSON to standard output.
"""

import argparse
import io
import json
import logging
import sys
import warnings
from typing import Optional, List

import irvtally.convert
import irvtally.io.json
import irvtally.util
import irvtally.evaluate.sequential
from irvtally.ballot import Option
from irvtally.io.core import ParseError, VotingSetup

argparser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='JSON file to load ballots from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load ballots from standard input',
)
argparser.add_argument(
    '-c', '--candidates',
    nargs='*',
    help=(
        'official list of options (overrides the list given in the ballot'
        ' file); default (None) uses the file list, or all ranked options'
        ' in order of appearance if the file has none'
    ),
)
argparser.add_argument(
    '-t', '--tie-breaking',
    default='eliminate_all',
    help='how to resolve ties for elimination (eliminate_all, approval)',
)
argparser.add_argument(
    '-r', '--max-rounds',
    type=int,
    default=20,
    help='give up without a winner after this many rounds',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all tally log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any tally log messages',
)


def main(input_file: Optional[io.TextIOBase],
         use_stdin: bool = False,
         candidates: Optional[List[Option]] = None,
         tie_breaking: str = 'eliminate_all',
         max_rounds: int = 20,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    try:
        voting_setup = irvtally.io.json.load(input_file)
    except ParseError as err:
        argparser.error(str(err))
    if not voting_setup.votes:
        warnings.warn('empty ballots: cannot tally election, terminating')
        return
    options = gather_options(voting_setup, candidates)
    ballots = irvtally.convert.format_ballots(voting_setup.votes, options)
    try:
        engine = irvtally.evaluate.sequential.InstantRunoff(
            tie_breaking=tie_breaking,
            max_rounds=max_rounds,
        )
    except ValueError as err:
        argparser.error(str(err))
    result = engine.evaluate(ballots, options)
    json.dump(result.to_dict(), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write('\n')


def gather_options(voting_setup: VotingSetup,
                   candidates: Optional[List[Option]] = None,
                   ) -> List[Option]:
    """Determine the official option list for the election."""
    if candidates:
        return candidates
    elif voting_setup.candidates:
        return voting_setup.candidates
    else:
        return irvtally.util.unique(
            choice
            for record in voting_setup.votes
            if isinstance(record, dict)
            and isinstance(record.get('rankings'), list)
            for choice in record['rankings']
            if isinstance(choice, str)
        )


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        main(**vars(args))
