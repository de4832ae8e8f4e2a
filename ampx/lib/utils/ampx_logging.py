"""
Logger setup shared by the CLI entry point and the commands
"""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

AMPX_LOGGER_NAME = "ampx"

AMPX_FORMATTER = logging.Formatter("%(message)s")
AMPX_FORMATTER_WITH_TIMESTAMP = logging.Formatter("%(asctime)s | %(message)s")

# any of these set to a non empty value turns colored log output off
_NO_COLOR_ENV_VARS = ("NO_COLOR", "AMPX_NO_COLOR")


def _colored_output_allowed() -> bool:
    if not sys.stderr.isatty() or os.getenv("TERM") == "dumb":
        return False
    return not any(os.getenv(name) for name in _NO_COLOR_ENV_VARS)


def _new_handler() -> logging.Handler:
    if _colored_output_allowed():
        return RichHandler(console=Console(stderr=True), show_time=False, show_path=False, show_level=False)
    return logging.StreamHandler()


class AmpxLogger:
    @staticmethod
    def configure_logger(logger, formatter, level):
        """
        Sets the level of ``logger`` and the formatter of its first handler, adding a handler writing to
        stderr when it has none. Records stop at this logger.
        """
        if logger.handlers:
            handler = logger.handlers[0]
        else:
            handler = _new_handler()
            logger.addHandler(handler)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)

        logger.setLevel(level)
        logger.propagate = False

    @staticmethod
    def configure_null_logger(logger):
        # silences libraries that would otherwise reach the root logger
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
