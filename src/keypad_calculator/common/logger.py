"""Shared logger for the keypad calculator."""
import logging
import sys


LOG_FORMAT: str = "%(asctime)s - %(levelname)s - %(message)s"

logger: logging.Logger = logging.getLogger("keypad_calculator")

if not logger.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(logging.INFO)


def set_verbosity(verbose: bool) -> None:
    """
    Switch the shared logger between INFO and DEBUG.

    :param bool verbose: True to log every rejected key and tokenization step
    """
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
