"""Logging configuration for orgtask."""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Route loguru output to stderr.

    ``verbose`` wins over ``quiet`` when both are set. Library code only logs
    through ``loguru.logger``; sinks are installed here, by the CLI.
    """
    logger.remove()
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}", colorize=False)
