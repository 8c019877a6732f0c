"""
Command-line front end for the keypad calculator.

This script:
- Reads keypad labels from a file, from --keys, or from standard input
- Feeds them one by one into an equation buffer
- Prints the final display (or every intermediate display with --trace)

Examples
--------
$ keypad-calculator --keys "12 + 34 ="
46
$ echo "6 * 7 + 2 =" | keypad-calculator
44
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError

from keypad_calculator.common.config import CalculatorConfig
from keypad_calculator.common.logger import logger, set_verbosity
from keypad_calculator.common.models import iter_keys, token_from_key
from keypad_calculator.engine.buffer import EquationBuffer


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath, optional
        File containing whitespace separated keypad labels.
    keys : str, optional
        Keypad labels given inline.
    multiplication_enabled : bool
        Whether the '*' key is available.
    integer_bits : int
        Width of the signed integer used for arithmetic.
    trace : bool
        Print the display after every accepted key.
    verbose : bool
        Enable DEBUG logging.
    """

    file_path: Optional[FilePath] = None
    keys: Optional[str] = None
    multiplication_enabled: bool = True
    integer_bits: int = Field(default=64, ge=8, le=128)
    trace: bool = False
    verbose: bool = False


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments without the program name, defaults to sys.argv[1:]

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Replay keypad presses (0-9 + - * <- AC =) through the calculator engine"
    )

    parser.add_argument(
        "file_path",
        nargs="?",
        help="Path to a file containing keypad labels",
    )
    parser.add_argument(
        "--keys",
        help="Keypad labels given inline, e.g. \"12 + 34 =\"",
    )
    parser.add_argument(
        "--no-multiplication",
        action="store_true",
        help="Disable the '*' key",
    )
    parser.add_argument(
        "--bits",
        type=int,
        default=64,
        help="Width of the signed integer (default: 64)",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print the display after every accepted key",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    if args.file_path is not None and args.keys is not None:
        parser.error("file_path and --keys are mutually exclusive")

    try:
        return CliArgs(
            file_path=args.file_path,
            keys=args.keys,
            multiplication_enabled=not args.no_multiplication,
            integer_bits=args.bits,
            trace=args.trace,
            verbose=args.verbose,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def read_keys(cli_args: CliArgs) -> str:
    """
    Load the raw key text from the selected source.

    :param CliArgs cli_args: Validated CLI arguments

    :return: Whitespace separated keypad labels
    :rtype: str
    """
    if cli_args.keys is not None:
        return cli_args.keys
    if cli_args.file_path is not None:
        return Path(cli_args.file_path).read_text(encoding="utf-8")
    return sys.stdin.read()


def run(cli_args: CliArgs) -> str:
    """
    Replay the keys through a fresh buffer.

    Unknown labels are logged and skipped.

    :param CliArgs cli_args: Validated CLI arguments

    :return: Final display string
    :rtype: str
    """
    config = CalculatorConfig(
        multiplication_enabled=cli_args.multiplication_enabled,
        integer_bits=cli_args.integer_bits,
    )
    buffer = EquationBuffer(config=config)

    for key in iter_keys(read_keys(cli_args)):
        try:
            token = token_from_key(key)
        except ValueError as exc:
            logger.warning(f"⌨️❌ Skipped key: {exc}")
            continue
        accepted = buffer.apply(token)
        if accepted and cli_args.trace:
            print(f"{key:>2} | {buffer.current_display}")

    return buffer.current_display


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function used by the console script.
    """
    cli_args = parse_args(argv)
    set_verbosity(cli_args.verbose)
    print(run(cli_args))


if __name__ == "__main__":
    main()
