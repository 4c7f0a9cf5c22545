#!/usr/bin/env python3
"""
phonopass CLI
=============
Command-line interface for pronounceable password generation.

Usage:
    phonopass
    phonopass -p "w.w.w.w-20dd" -n 10
    phonopass -p Ww-sd -d 2 -s italian
    phonopass -p cccccc -s cv --seed 42
"""

import argparse
import logging
import sys

from phonopass import __version__
from phonopass.entropy import SecureRandom, SeededRandom
from phonopass.generator import Generator, DEFAULT_DEPTH
from phonopass.markov import build_model, load_model, save_model
from phonopass.settings import get_setting
from phonopass.wordlists import available_wordlists, load_wordlist

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = 'w-c-s-d'
DEFAULT_COUNT = 5
DEFAULT_STYLE = 'english'


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def table(self, headers: list, rows: list, col_widths: list = None):
        """Print a formatted table."""
        if self.quiet:
            return

        if not col_widths:
            col_widths = [max(len(str(h)), max((len(str(r[i])) for r in rows), default=0)) + 4
                          for i, h in enumerate(headers)]

        # Header
        header_line = ''.join(str(h).ljust(w) for h, w in zip(headers, col_widths))
        print(header_line.rstrip())
        print('-' * len(header_line.rstrip()))

        # Rows
        for row in rows:
            print(''.join(str(c).ljust(w) for c, w in zip(row, col_widths)).rstrip())


def configure_logging(verbose: bool = False):
    level = 'DEBUG' if verbose else str(get_setting("logging.level", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=get_setting("logging.format", "%(levelname)s %(name)s: %(message)s"),
    )


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='phonopass',
        description='Flexible pronounceable password generator with entropy estimates.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Pattern characters:
  w  pseudo-word           W  capitalized pseudo-word
  c  lowercase letter      C  uppercase letter
  s  symbol                d  digit
  \\x literal x            anything else is copied as is

Examples:
  %(prog)s -p w.w.w.w-20dd -n 10
  %(prog)s -p Ww-sd -d 2 -s italian
  %(prog)s -p www --seed 7 -q
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--pattern', '-p', default=get_setting("cli.pattern", DEFAULT_PATTERN),
                        help='Structure of the generated secrets (default: %(default)s)')
    parser.add_argument('--num', '-n', type=positive_int,
                        default=get_setting("cli.count", DEFAULT_COUNT),
                        help='Number of secrets to generate (default: %(default)s)')
    parser.add_argument('--depth', '-d', type=positive_int,
                        default=get_setting("generator.default_depth", DEFAULT_DEPTH),
                        help='Markov chain depth, 1-3 are reasonable (default: %(default)s)')
    parser.add_argument('--style', '-s', choices=available_wordlists(),
                        default=get_setting("cli.style", DEFAULT_STYLE),
                        help='Training wordlist (default: %(default)s)')
    parser.add_argument('--seed', type=int,
                        help='Seed for reproducible output (NOT secure)')
    parser.add_argument('--save-model', metavar='PATH', help='Save the trained model as JSON')
    parser.add_argument('--load-model', metavar='PATH',
                        help='Load a model saved with --save-model instead of training')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Print only the secrets, one per line')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    return parser


# =============================================================================
# Main
# =============================================================================

def run(args, out: Output) -> int:
    rng = SeededRandom(args.seed) if args.seed is not None else SecureRandom()

    if args.load_model:
        model = load_model(args.load_model)
        logger.debug("Loaded model from %s", args.load_model)
    else:
        model = build_model(load_wordlist(args.style), args.depth)

    if args.save_model:
        save_model(model, args.save_model)
        logger.debug("Saved model to %s", args.save_model)

    generator = Generator(model, rng)
    rows = []
    for i in range(args.num):
        secret, bits = generator.gen_from_pattern(args.pattern)
        rows.append((i + 1, f"{bits:.2f}", secret))

    if out.quiet:
        for _, _, secret in rows:
            print(secret)
    else:
        out.table(['n.', 'log2(guesses)', 'secret'], rows)
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    out = Output(quiet=args.quiet)

    try:
        return run(args, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except Exception as e:
        out.error(str(e))
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
