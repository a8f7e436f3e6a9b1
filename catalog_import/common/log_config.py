"""
Logging Configuration

All importer modules log under the "catalog_import" logger tree (module
loggers via getLogger(__name__), CLI scripts via CLI_LOGGER). Log records go
to stderr; the import summary printed by the scripts stays alone on stdout.
"""

import logging
import sys

PACKAGE_LOGGER = "catalog_import"
CLI_LOGGER = "catalog_import.cli"

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure the importer's logger tree.

    Per-product progress is logged at INFO, per-step detail (metafields,
    spec resolution, upload counts) at DEBUG, and skipped images and failed
    products at WARNING/ERROR, so --quiet still reports every failure.

    Args:
        verbose: If True, set level to DEBUG
        quiet: If True, set level to WARNING

    Returns:
        The configured "catalog_import" logger
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Re-running main() in the same process must not stack handlers
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger
