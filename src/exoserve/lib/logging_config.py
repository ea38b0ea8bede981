"""Logging configuration for exoserve.

All modules obtain their logger through get_logger() so that every record
lives under the "exoserve" namespace and is configured in one place by
setup_logging().
"""

import logging
import sys

ROOT_LOGGER_NAME = "exoserve"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the exoserve namespace.

    Args:
        name: Module name, usually __name__

    Returns:
        Logger instance whose name is prefixed with "exoserve"
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the exoserve root logger.

    Calling this more than once replaces the previously installed handler,
    so the CLI can reconfigure verbosity safely.

    Args:
        verbose: Enable DEBUG level output
        quiet: Only emit WARNING and above (ignored when verbose is set)
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
