"""Command line entry point for the PRNG uniformity checker."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .app import PrngCheckApp
from .errors import (
    InvalidConfigurationError,
    InvalidInputError,
    MissingFileError,
    TestExecutionError,
)

EXIT_SUCCESS = 0
EXIT_MISSING_FILE = 2
EXIT_INVALID_CONFIG = 3
EXIT_TEST_FAILURE = 4
EXIT_INVALID_INPUT = 5
EXIT_UNEXPECTED_ERROR = 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prngcheck",
        description="Generate pseudo-random sequences and test them for uniformity.",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Path to the INI configuration file; built-in defaults are used when omitted.",
    )
    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        help="Test the values in this file (one per line) instead of generating sequences.",
    )
    parser.add_argument(
        "--report",
        "-r",
        type=Path,
        help="Optional path where a markdown report will be written.",
    )
    parser.add_argument(
        "--sequence-output",
        "-o",
        type=Path,
        help="Optional path where the analysed sequences and verdicts will be written.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print statistics and histograms for each sequence.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    app = PrngCheckApp()
    try:
        app.run(
            config_path=args.config,
            input_path=args.input,
            report_path=args.report,
            sequence_path=args.sequence_output,
            verbose=args.verbose,
        )
    except MissingFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_MISSING_FILE
    except InvalidConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG
    except InvalidInputError as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except TestExecutionError as exc:
        print(f"Test execution failed: {exc}", file=sys.stderr)
        return EXIT_TEST_FAILURE
    except Exception as exc:  # pragma: no cover - defensive guard
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED_ERROR
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
