import os
from unittest import TestCase
from unittest.mock import patch

from click.testing import CliRunner

from ampx.commands.create.command import cli, do_cli


class TestCli(TestCase):
    def setUp(self):
        self.runner = CliRunner()

    @patch("ampx.commands.create.command.do_cli")
    def test_yes_uses_current_directory(self, do_cli_mock):
        result = self.runner.invoke(cli, ["--yes"])

        self.assertEqual(result.exit_code, 0, result.output)
        do_cli_mock.assert_called_once_with(os.getcwd())

    @patch("ampx.commands.create.command.do_cli")
    def test_prompts_for_project_root(self, do_cli_mock):
        result = self.runner.invoke(cli, [], input="my-app\n")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Where should we create your project?", result.output)
        do_cli_mock.assert_called_once_with(os.path.abspath("my-app"))

    @patch("ampx.commands.create.command.do_cli")
    def test_project_root_option(self, do_cli_mock):
        result = self.runner.invoke(cli, ["--project-root", "other"])

        self.assertEqual(result.exit_code, 0, result.output)
        do_cli_mock.assert_called_once_with(os.path.abspath("other"))


class TestDoCli(TestCase):
    @patch("ampx.lib.project.amplify_project_creator.AmplifyProjectCreator")
    def test_creates_project(self, creator_mock):
        with CliRunner().isolated_filesystem():
            project_root = os.path.abspath("my-app")

            do_cli(project_root)

            self.assertTrue(os.path.isdir(project_root))
            self.assertEqual(creator_mock.call_args[0][0], project_root)
            creator_mock.return_value.create.assert_called_once_with()
