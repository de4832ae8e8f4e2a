import logging
import re
from unittest import TestCase
from unittest.mock import patch

import botocore.exceptions
import click

from ampx.cli.context import Context
from ampx.commands.exceptions import CredentialsError
from ampx.lib.utils.ampx_logging import AMPX_FORMATTER, AMPX_LOGGER_NAME, AmpxLogger


class TestContext(TestCase):
    def test_must_initialize_with_defaults(self):
        ctx = Context()

        self.assertEqual(ctx.debug, False, "debug must default to False")
        self.assertIsNone(ctx.region)
        self.assertIsNone(ctx.profile)

    def test_debug_flag_turns_on_timestamps(self):
        ctx = Context()
        message_record = logging.makeLogRecord({"msg": "hello world"})
        timestamp_log_regex = re.compile(r"^[0-9:\- ,]+ \| .*$")
        ampx_logger = logging.getLogger(AMPX_LOGGER_NAME)
        AmpxLogger.configure_logger(ampx_logger, AMPX_FORMATTER, logging.INFO)

        self.assertNotRegex(ampx_logger.handlers[0].formatter.format(message_record), timestamp_log_regex)

        ctx.debug = True

        self.assertEqual(ampx_logger.getEffectiveLevel(), logging.DEBUG)
        self.assertRegex(ampx_logger.handlers[0].formatter.format(message_record), timestamp_log_regex)

    @patch("ampx.cli.context.boto3")
    def test_region_refreshes_session(self, boto3_mock):
        ctx = Context()

        ctx.region = "us-west-2"

        self.assertEqual(ctx.region, "us-west-2")
        boto3_mock.setup_default_session.assert_called_once_with(region_name="us-west-2", profile_name=None)

    @patch("ampx.cli.context.boto3")
    def test_unknown_profile(self, boto3_mock):
        boto3_mock.setup_default_session.side_effect = botocore.exceptions.ProfileNotFound(profile="missing")
        ctx = Context()

        with self.assertRaises(CredentialsError):
            ctx.profile = "missing"

    def test_get_current_context(self):
        @click.command()
        def command():
            pass

        with click.Context(command) as click_ctx:
            self.assertIsInstance(Context.get_current_context(), Context)
            self.assertIs(click_ctx.find_object(Context), Context.get_current_context())

    def test_no_context_outside_click(self):
        self.assertIsNone(Context.get_current_context())
        self.assertIsNone(Context().command_path)
