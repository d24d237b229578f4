import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "mediator_navigator"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Send package logs to stderr through rich, replacing earlier handlers."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level.upper())
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
