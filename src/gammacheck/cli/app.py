"""Command-line interface for gammacheck using argparse."""

from __future__ import annotations

import argparse
import logging
from enum import IntEnum
from pathlib import Path
from typing import List, Optional

from gammacheck.analysis.spectrum_matcher import MatchOutcome, SpectrumMatcher
from gammacheck.core.errors import InvalidInputError, SpectrumFileError
from gammacheck.io.spectrum_file import read_spectrum_file


class ExitCode(IntEnum):
    """Process exit codes."""

    NO_MATCH = 0
    MATCH = 1
    USAGE = 2
    INVALID_INPUT = 3
    BAD_TEST_FILE = 4
    BAD_REFERENCE_FILE = 6
    BAD_BACKGROUND_FILE = 8
    RESOURCE_FAILURE = 9


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"bins must be an integer, got {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"range error: bins = {value}, bins must be greater than zero")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gammacheck",
        description="Check a test gamma ray spectrum against a reference spectrum",
    )
    parser.add_argument("test", type=Path, help="file containing the test spectrum")
    parser.add_argument("reference", type=Path, help="file containing the reference spectrum")
    parser.add_argument("background", type=Path, help="file containing the background spectrum")
    parser.add_argument("bins", type=_positive_int, help="number of separate channels sampled")
    parser.add_argument("threshold", type=float, help="sets the sensitivity of the match, 0 < threshold < 1")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="log region details")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only log errors")
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run(args: argparse.Namespace) -> ExitCode:
    """Read the three spectra, match them and print the verdict."""
    spectra = []
    for path, code in (
        (args.test, ExitCode.BAD_TEST_FILE),
        (args.reference, ExitCode.BAD_REFERENCE_FILE),
        (args.background, ExitCode.BAD_BACKGROUND_FILE),
    ):
        try:
            spectra.append(read_spectrum_file(path, args.bins))
        except SpectrumFileError as exc:
            print(f"read error: {exc}")
            return code
    test, reference, background = spectra

    try:
        result = SpectrumMatcher(background=background).match(
            test, reference, args.bins, args.threshold
        )
    except InvalidInputError as exc:
        print(f"match: {exc}")
        return ExitCode.INVALID_INPUT

    print(result.summary())
    if result.outcome is MatchOutcome.RESOURCE_FAILURE:
        return ExitCode.RESOURCE_FAILURE
    if result.outcome is MatchOutcome.DETECTED:
        return ExitCode.MATCH
    return ExitCode.NO_MATCH


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)
    return int(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
