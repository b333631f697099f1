"""Command line entry point for Tally."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, TextIO

from tally.tally import TallySheet
from tally.tally_error import TallyError
from tally.tally_value import TallyLiteral


def setup_logging(verbose: bool) -> None:
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def read_lines(source: str) -> List[str]:
    """Read a sheet from a file, or from stdin when source is '-'."""
    if source == '-':
        return sys.stdin.read().splitlines()

    return Path(source).read_text(encoding='utf-8').splitlines()


def run_sheet(sheet: TallySheet, lines: List[str], out: TextIO) -> None:
    """Evaluate a whole sheet and print each line with its result."""
    results = sheet.evaluate_lines(lines)
    for line, result in zip(lines, results):
        if not line.strip():
            print(file=out)
            continue

        print(f"{line}  =>  {result}", file=out)


def run_interactive(sheet: TallySheet, stdin: TextIO, out: TextIO) -> None:
    """Read, evaluate and print lines until end of input, sharing one environment."""
    logger = logging.getLogger("TallyREPL")
    env: Dict[str, TallyLiteral] = {}

    while True:
        print("> ", end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            print(file=out)
            break

        line = line.rstrip('\n')
        if not line.strip():
            continue

        try:
            value = sheet.evaluate_line(line, env)

        except TallyError as e:
            logger.debug("evaluation failed for %r", line, exc_info=True)
            print(str(e), file=out)
            continue

        print(value, file=out)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="tally",
        description="Evaluate Tally calculator sheets, one expression per line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m tally budget.tally          # Evaluate a file
  cat budget.tally | python -m tally -  # Evaluate stdin
  python -m tally --interactive         # Start an interactive session
        """
    )
    parser.add_argument(
        'file',
        nargs='?',
        default='-',
        help="Sheet to evaluate, or '-' for stdin (default)"
    )
    parser.add_argument(
        '--interactive', '-i',
        action='store_true',
        help='Read and evaluate lines interactively'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging on stderr'
    )
    parser.add_argument(
        '--max-depth',
        type=int,
        default=100,
        help='Maximum nesting depth of parentheses and function calls (default: 100)'
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    sheet = TallySheet(max_depth=args.max_depth)

    if args.interactive:
        try:
            run_interactive(sheet, sys.stdin, sys.stdout)

        except KeyboardInterrupt:
            print()

        return 0

    try:
        lines = read_lines(args.file)

    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    run_sheet(sheet, lines, sys.stdout)
    return 0


if __name__ == '__main__':
    sys.exit(main())
