from unittest import TestCase
from unittest.mock import patch

from click.testing import CliRunner

from ampx import __version__
from ampx.cli.main import TELEMETRY_PROMPT, cli


class TestCliBase(TestCase):
    def setUp(self):
        self.runner = CliRunner()

    def test_version(self):
        result = self.runner.invoke(cli, ["--version"])

        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_help_lists_commands(self):
        result = self.runner.invoke(cli, ["-h"])

        self.assertEqual(result.exit_code, 0)
        for command in ("configure", "generate", "pipeline-deploy", "secret"):
            self.assertIn(command, result.output)

    @patch("ampx.cli.main.GlobalConfig")
    def test_telemetry_prompt_on_first_run(self, global_config_mock):
        global_config_mock.return_value.telemetry_enabled = None

        with patch("ampx.commands.configure.telemetry.command.do_cli"):
            result = self.runner.invoke(cli, ["configure", "telemetry", "enable"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(global_config_mock.return_value.telemetry_enabled)
        self.assertIn(TELEMETRY_PROMPT.strip().splitlines()[0].strip(), result.output)

    @patch("ampx.cli.main.GlobalConfig")
    def test_no_prompt_once_preference_is_stored(self, global_config_mock):
        global_config_mock.return_value.telemetry_enabled = False

        with patch("ampx.commands.configure.telemetry.command.do_cli"):
            result = self.runner.invoke(cli, ["configure", "telemetry", "enable"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotIn("telemetry data", result.output)
