"""
Logging setup for the sieve-coref command line.
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# libraries that log model loading at DEBUG
QUIET_LOGGERS = ("sklearn", "joblib")


def setup_logging(
    level: Optional[str] = None,
    verbose: bool = False,
    format_string: Optional[str] = None
) -> None:
    """
    Route log records to stderr.

    Args:
        level: Level name such as WARNING; INFO when omitted
        verbose: Force DEBUG regardless of ``level``
        format_string: Record format, ``DEFAULT_FORMAT`` when omitted
    """
    name = "DEBUG" if verbose else (level or "INFO").upper()

    # stdout carries the JSON or CoNLL result
    logging.basicConfig(
        level=getattr(logging, name),
        format=format_string or DEFAULT_FORMAT,
        stream=sys.stderr,
        force=True,
    )

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
