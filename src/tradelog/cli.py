"""Command-line interface for Trade Log Analyzer."""

import argparse
import logging
import os
import sys
import zlib
from typing import List, Optional

from dotenv import load_dotenv

from .analyzer import analyze, run_command
from .config import COMMANDS, AnalyzerConfig, get_render_defaults
from .filters import filter_records
from .reader import iter_log_lines, read_records
from .utils import parse_width, resolve_bound
from .writer import save_records

# Configure logging
logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'WARNING'),
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

EPILOG = """\
commands:
  list-tick      shows the list of contained tickers
  profit         counts total profit from closed positions
  pos            shows values of currently owned positions ordered by value
                   descending (the biggest first)
  last-price     shows the last-known price for each ticker
  hist-ord       shows a histogram with number of transactions for each ticker
  graph-pos      shows a graph of the owned tickers' values

Without a command the filtered records are printed unchanged.

DATETIME is in the format YYYY-mm-dd HH:MM:SS. WIDTH is the maximum number
of characters in a graph: the biggest value gets WIDTH characters (# or !)
and the others a proportional number of characters.
"""


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the tradelog command."""
    parser = argparse.ArgumentParser(
        prog='tradelog',
        usage='%(prog)s [-h] [FILTER]... [COMMAND] [LOG_FILE]...',
        description='Stock exchange trading logs analyzer',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('-a', dest='after', action='append', default=[], metavar='DATETIME',
                        help='use records after DATETIME only (excluded); repeated use means their intersection')
    parser.add_argument('-b', dest='before', action='append', default=[], metavar='DATETIME',
                        help='use records before DATETIME only (excluded); repeated use means their intersection')
    parser.add_argument('-t', dest='tickers', action='append', default=[], metavar='TICKER',
                        help='use only records of TICKER; may be given multiple times')
    parser.add_argument('-w', dest='width', action='append', default=[], metavar='WIDTH',
                        help="set the graphs' width")
    parser.add_argument('-v', '--verbose', action='store_true', help='log the resolved configuration')
    parser.add_argument('--save-records', metavar='FILE',
                        help='save the filtered records to FILE (use .parquet or .csv extension)')
    parser.add_argument('arguments', nargs='*', metavar='COMMAND|LOG_FILE',
                        help='one of the commands below, followed or preceded by log files')
    return parser


def build_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> AnalyzerConfig:
    """Validate parsed arguments and turn them into an AnalyzerConfig."""
    commands = [arg for arg in args.arguments if arg in COMMANDS]
    if len(commands) > 1:
        parser.error("Only one command can be specified for each run")

    bounds = {}
    for switch, values in (('-a', args.after), ('-b', args.before)):
        try:
            bounds[switch] = resolve_bound(values)
        except ValueError:
            parser.error(f"Invalid datetime in switch {switch}")

    if len(args.width) > 1:
        parser.error("-w can be used only once")
    bar_width = None
    if args.width:
        try:
            bar_width = parse_width(args.width[0])
        except ValueError:
            parser.error(f"Invalid width in switch -w: {args.width[0]}")

    try:
        defaults = get_render_defaults()
    except ValueError as e:
        parser.error(str(e))

    return AnalyzerConfig(
        tickers=frozenset(args.tickers),
        time_after=bounds['-a'],
        time_before=bounds['-b'],
        command=commands[0] if commands else None,
        bar_width=bar_width,
        **defaults
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the tradelog CLI."""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    # Load environment variables
    load_dotenv()

    config = build_config(parser, args)
    log_files = [arg for arg in args.arguments if arg not in COMMANDS]
    for log_file in log_files:
        if not os.path.isfile(log_file):
            parser.error(f"File '{log_file}' doesn't exist")

    if args.verbose:
        root_logger = logging.getLogger()
        if root_logger.getEffectiveLevel() > logging.INFO:
            root_logger.setLevel(logging.INFO)
        logger.info(f"Command : {config.command}")
        logger.info(f"After   : {config.time_after}")
        logger.info(f"Before  : {config.time_before}")
        logger.info(f"Tickers : {' '.join(sorted(config.tickers))}")
        logger.info(f"Width   : {config.bar_width}")

    try:
        lines = iter_log_lines(log_files)
        if args.save_records:
            records = list(filter_records(read_records(lines), config))
            save_records(records, args.save_records)
            output = run_command(records, config)
        else:
            output = analyze(lines, config)
    except (OSError, EOFError, zlib.error) as e:
        logger.error(f"Error processing trade log: {e}")
        sys.exit(1)

    for line in output:
        print(line)


if __name__ == "__main__":
    main()
