"""
Context information passed to each CLI command
"""

import logging
from typing import Optional, cast

import boto3
import click
from botocore.exceptions import ProfileNotFound

from ampx.commands.exceptions import CredentialsError
from ampx.lib.utils.ampx_logging import AMPX_FORMATTER_WITH_TIMESTAMP, AMPX_LOGGER_NAME, AmpxLogger


class Context:
    """
    Holds the values of the global options (--debug, --region, --profile) for the running command. Click
    creates one per invocation and hands it to every command decorated with ``pass_context``.

    Setting the region or the profile rebuilds the default boto3 session, so clients created afterwards pick
    the new values up.
    """

    def __init__(self):
        self._debug = False
        self._aws_region: Optional[str] = None
        self._aws_profile: Optional[str] = None

    @property
    def debug(self) -> bool:
        return self._debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self._debug = value
        if value:
            AmpxLogger.configure_logger(
                logging.getLogger(AMPX_LOGGER_NAME), AMPX_FORMATTER_WITH_TIMESTAMP, logging.DEBUG
            )

    @property
    def region(self) -> Optional[str]:
        return self._aws_region

    @region.setter
    def region(self, value: Optional[str]) -> None:
        self._aws_region = value
        self._refresh_session()

    @property
    def profile(self) -> Optional[str]:
        return self._aws_profile

    @profile.setter
    def profile(self, value: Optional[str]) -> None:
        self._aws_profile = value
        self._refresh_session()

    @property
    def command_path(self) -> Optional[str]:
        """
        Command as the user typed it, ex: "ampx generate outputs". None outside of a click invocation.
        """
        click_ctx = click.get_current_context(silent=True)
        return click_ctx.command_path if click_ctx else None

    @staticmethod
    def get_current_context() -> Optional["Context"]:
        """
        Looks up the Context of the running command on click's context stack, creating it when the
        command did not ask for one yet. Returns None when no click command is running.
        """
        click_ctx = click.get_current_context(silent=True)
        if click_ctx is None:
            return None
        return cast(Context, click_ctx.ensure_object(Context))

    def _refresh_session(self) -> None:
        try:
            boto3.setup_default_session(region_name=self._aws_region, profile_name=self._aws_profile)
        except ProfileNotFound as ex:
            raise CredentialsError(str(ex), wrapped_from=ex) from ex
