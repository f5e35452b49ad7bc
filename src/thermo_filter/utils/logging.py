"""Logging configuration for Thermo Filter Tools."""

import logging
import sys


def setup_logging(verbose: int = 0) -> logging.Logger:
    """
    Set up logging configuration based on verbosity level.

    Args:
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)

    Returns:
        Configured package logger
    """
    if verbose == 0:
        log_level = logging.WARNING
    elif verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Parser and reader modules log under this namespace
    logger = logging.getLogger("thermo_filter")
    logger.setLevel(log_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger nested under the package namespace."""
    return logging.getLogger(f"thermo_filter.{name}")
