"""
Decorator that records how a command ended and turns unexpected failures into UnhandledException
"""

import logging
from functools import wraps
from timeit import default_timer

import click

from ampx.cli.context import Context
from ampx.commands.exceptions import UnhandledException, UserException

LOG = logging.getLogger(__name__)

# Standard Unix practice to return exit code 255 on fatal/unhandled exit.
UNHANDLED_EXIT_CODE = 255


def track_command(func):
    """
    Decorator to run a command and log its outcome. Errors the user can fix (UserException and click usage
    errors) are re-raised as they are, anything else is wrapped in UnhandledException.

    This decorator must be placed below ``pass_context`` so the Click context is available.

        @click.command(...)
        @pass_context
        @track_command
        def hello_command(ctx):
            ...
    """

    @wraps(func)
    def wrapped(*args, **kwargs):
        exit_reason = "success"
        start = default_timer()

        ctx = Context.get_current_context()

        try:
            return func(*args, **kwargs)
        except (UserException, click.Abort, click.UsageError) as ex:
            wrapped_from = getattr(ex, "wrapped_from", None)
            exit_reason = type(wrapped_from).__name__ if wrapped_from else type(ex).__name__
            raise
        except Exception as ex:
            exit_reason = type(ex).__name__
            unhandled = UnhandledException(ctx.command_path if ctx else "", ex)
            unhandled.exit_code = UNHANDLED_EXIT_CODE
            raise unhandled from ex
        finally:
            LOG.debug(
                "Command %s finished in %.2fs, exit reason: %s",
                ctx.command_path if ctx else func.__name__,
                default_timer() - start,
                exit_reason,
            )

    return wrapped
