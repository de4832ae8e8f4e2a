"""
Errors shown to the user when a command fails
"""
import traceback
from typing import IO, Optional
from urllib.parse import quote

import click

ISSUES_URL = "https://github.com/aws-amplify/amplify-backend/issues"


class UserException(click.ClickException):
    """
    A failure the user can act on. Click prints the message and the process exits with ``exit_code``.
    ``wrapped_from`` keeps the exception that caused it, if any.
    """

    exit_code = 1

    def __init__(self, message, wrapped_from=None):
        super().__init__(message)
        self.wrapped_from = wrapped_from


class AmplifyUserError(UserException):
    """
    User error with a stable name and a suggested resolution.

    The name identifies the failure kind (ex: StackDoesNotExistError) and is what tests and callers branch on,
    the resolution tells the user what to do next.
    """

    def __init__(self, name: str, message: str, resolution: str, wrapped_from: Optional[Exception] = None):
        super().__init__(f"{message}\nResolution: {resolution}", wrapped_from=wrapped_from)
        self.name = name
        self.details = message
        self.resolution = resolution


class UnhandledException(click.ClickException):
    """
    Any other failure, most likely a bug. Printed with its traceback and links to report it.
    """

    exit_code = 1

    def __init__(self, command: str, exception: Exception) -> None:
        super().__init__(type(exception).__name__)
        self._command = command
        self._exception = exception

    def _issue_links(self) -> str:
        title = quote(f"Bug: {self._command} - {type(self._exception).__name__}")
        return (
            "Search for an existing issue:\n"
            f"{ISSUES_URL}?q=is%3Aissue+is%3Aopen+{title}\n"
            "Or create a bug report:\n"
            f"{ISSUES_URL}/new?title={title}"
        )

    def show(self, file: Optional[IO] = None) -> None:
        stream = file or click.get_text_stream("stderr")
        stack = "".join(traceback.format_tb(self._exception.__traceback__))

        click.echo(f"\nError: {self._exception}", file=stream, err=True)
        click.echo(f"Traceback:\n{stack}", file=stream, err=True)
        click.secho(
            f'An unexpected error was encountered while executing "{self._command}".\n{self._issue_links()}',
            file=stream,
            err=True,
            fg="yellow",
        )


class CredentialsError(UserException):
    pass


class AWSServiceClientError(UserException):
    """
    An AWS service rejected a call
    """


class SDKError(UserException):
    """
    botocore failed before or after reaching the service
    """


class RegionError(UserException):
    pass
