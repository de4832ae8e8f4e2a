from datetime import datetime
from unittest import TestCase
from unittest.mock import patch

from click.testing import CliRunner
from parameterized import parameterized

from ampx.commands.secret.get.command import cli as get_cli
from ampx.commands.secret.list.command import cli as list_cli
from ampx.commands.secret.options import get_secret_target
from ampx.commands.secret.remove.command import cli as remove_cli
from ampx.commands.secret.set.command import cli as set_cli
from ampx.lib.backend_identifier.identifiers import BackendIdentifier
from ampx.lib.secret.secret import Secret, SecretIdentifier, SecretListItem

CLIENT_FACTORY = "ampx.lib.secret.secret.get_secret_client_with_amplify_error_handling"
BRANCH_TARGET = BackendIdentifier(namespace="app1", name="main", type="branch")


class TestGetSecretTarget(TestCase):
    def test_branch(self):
        self.assertEqual(get_secret_target("app1", "main"), BRANCH_TARGET)

    def test_shared(self):
        self.assertEqual(get_secret_target("app1", None), "app1")


class SecretCommandTestBase(TestCase):
    def setUp(self):
        self.runner = CliRunner()
        factory_patch = patch(CLIENT_FACTORY)
        self.factory_mock = factory_patch.start()
        self.addCleanup(factory_patch.stop)
        self.secret_client = self.factory_mock.return_value


class TestSecretGet(SecretCommandTestBase):
    def test_prints_secret(self):
        self.secret_client.get_secret.return_value = Secret(
            name="apiKey", value="s3cr3t", version=3, last_updated=datetime(2024, 5, 1, 12, 0)
        )

        result = self.runner.invoke(
            get_cli, ["apiKey", "--app-id", "app1", "--branch", "main", "--version", "3", "--region", "eu-west-1"]
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.factory_mock.assert_called_once_with(region="eu-west-1", profile=None)
        self.secret_client.get_secret.assert_called_once_with(BRANCH_TARGET, SecretIdentifier("apiKey", 3))
        self.assertEqual(
            result.output.splitlines(),
            ["name: apiKey", "version: 3", "value: s3cr3t", "lastUpdated: 2024-05-01T12:00:00"],
        )

    def test_requires_app_id(self):
        result = self.runner.invoke(get_cli, ["apiKey"])

        self.assertEqual(result.exit_code, 2)
        self.secret_client.get_secret.assert_not_called()


class TestSecretSet(SecretCommandTestBase):
    def test_reads_value_from_prompt(self):
        self.secret_client.set_secret.return_value = SecretIdentifier("apiKey", 2)

        result = self.runner.invoke(set_cli, ["apiKey", "--app-id", "app1"], input="s3cr3t\n")

        self.assertEqual(result.exit_code, 0, result.output)
        self.secret_client.set_secret.assert_called_once_with("app1", "apiKey", "s3cr3t")
        self.assertNotIn("s3cr3t", result.output)
        self.assertIn("Secret apiKey set, version 2.", result.output)


class TestSecretList(SecretCommandTestBase):
    def test_lists_names(self):
        self.secret_client.list_secrets.return_value = [SecretListItem("one"), SecretListItem("two")]

        result = self.runner.invoke(list_cli, ["--app-id", "app1", "--branch", "main"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.secret_client.list_secrets.assert_called_once_with(BRANCH_TARGET)
        self.assertEqual(result.output.splitlines(), [" - one", " - two"])

    def test_no_secrets(self):
        self.secret_client.list_secrets.return_value = []

        result = self.runner.invoke(list_cli, ["--app-id", "app1"])

        self.assertEqual(result.output, "No secrets found.\n")


class TestSecretRemove(SecretCommandTestBase):
    def test_remove_one(self):
        result = self.runner.invoke(remove_cli, ["apiKey", "--app-id", "app1"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.secret_client.remove_secret.assert_called_once_with("app1", "apiKey")
        self.assertIn("Secret apiKey removed.", result.output)

    def test_remove_all(self):
        self.secret_client.list_secrets.return_value = [SecretListItem("one"), SecretListItem("two")]

        result = self.runner.invoke(remove_cli, ["--all", "--app-id", "app1", "--branch", "main"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.secret_client.remove_secrets.assert_called_once_with(BRANCH_TARGET, ["one", "two"])
        self.assertIn("Removed 2 secrets.", result.output)

    @parameterized.expand([([],), (["apiKey", "--all"],)])
    def test_name_or_all_required(self, args):
        result = self.runner.invoke(remove_cli, args + ["--app-id", "app1"])

        self.assertEqual(result.exit_code, 2)
        self.assertIn("Provide either a secret name or --all.", result.output)
        self.factory_mock.assert_not_called()
