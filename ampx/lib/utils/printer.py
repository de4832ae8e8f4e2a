"""
Writes user facing messages of long running commands
"""

import logging
from typing import Callable, Optional, TypeVar

import click
from rich.console import Console

LOG = logging.getLogger(__name__)

T = TypeVar("T")


class Printer:
    """
    Prints messages to stdout and shows a spinner while an action runs. The spinner is only drawn on
    terminals, in every other case the progress and success messages are printed as plain lines.
    """

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console(stderr=True)

    def log(self, message: str = "") -> None:
        click.echo(message)

    def indicate_progress(self, message: str, action: Callable[[], T], success_message: Optional[str] = None) -> T:
        """
        Runs the action while showing the progress message

        Parameters
        ----------
        message: str
            Shown while the action runs
        action: Callable
            The work to do
        success_message: Optional[str]
            Printed once the action returned

        Returns
        -------
        Whatever the action returned
        """
        LOG.debug(message)
        if self._console.is_terminal:
            with self._console.status(message):
                result = action()
        else:
            self.log(f"{message}...")
            result = action()
        if success_message:
            self.log(f"✔ {success_message}")
        return result


printer = Printer()
