# SPDX-License-Identifier: MIT

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "stint"


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Send stint's log records to stderr through rich."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def set_log_level(level: Union[int, str]) -> None:
    logging.getLogger(LOGGER_NAME).setLevel(level)
