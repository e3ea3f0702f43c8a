"""Logging setup for the CLI and API server."""

import logging

from rich.logging import RichHandler

from shardgov.config.schema import LoggingConfig

LOGGER_NAME = "shardgov"


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Attach a single handler to the package logger.

    Calling this more than once replaces the previous handler, so the CLI and
    the server can both call it safely.

    Args:
        config: Logging configuration

    Returns:
        The configured ``shardgov`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler: logging.Handler
    if config.rich:
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    logger.addHandler(handler)
    logger.propagate = False
    return logger
