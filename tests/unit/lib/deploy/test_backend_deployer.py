import tempfile
from pathlib import Path
from unittest import TestCase
from unittest.mock import Mock

from ampx.lib.backend_identifier.identifiers import BackendIdentifier
from ampx.lib.deploy.backend_deployer import BackendDeployer, BackendDeployError
from ampx.lib.utils.subprocess_utils import SubprocessError


class TestBackendDeployer(TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.project_root = Path(self._tmp.name)
        self.runner = Mock()
        self.deployer = BackendDeployer(project_root=self._tmp.name, runner=self.runner)
        self.backend_id = BackendIdentifier(namespace="app1", name="main", type="branch")

    def tearDown(self):
        self._tmp.cleanup()

    def _write_tsconfig(self):
        backend_dir = self.project_root / "amplify"
        backend_dir.mkdir()
        (backend_dir / "tsconfig.json").write_text("{}")

    def test_deploy_passes_backend_context(self):
        self.deployer.deploy(self.backend_id)

        self.runner.assert_called_once()
        command = self.runner.call_args[0][0]
        self.assertEqual(command[:3], ["npx", "cdk", "deploy"])
        self.assertIn("amplify-backend-namespace=app1", command)
        self.assertIn("amplify-backend-name=main", command)
        self.assertIn("amplify-backend-type=branch", command)
        self.assertEqual(self.runner.call_args[1], {"cwd": self._tmp.name, "stream_output": True})

    def test_validation_skipped_without_tsconfig(self):
        self.deployer.deploy(self.backend_id, validate_app_sources=True)

        self.assertEqual(self.runner.call_count, 1)

    def test_validation_runs_type_check_first(self):
        self._write_tsconfig()

        self.deployer.deploy(self.backend_id, validate_app_sources=True)

        self.assertEqual(self.runner.call_count, 2)
        self.assertEqual(self.runner.call_args_list[0][0][0][:2], ["npx", "tsc"])
        self.assertEqual(self.runner.call_args_list[1][0][0][:2], ["npx", "cdk"])

    def test_type_check_failure(self):
        self._write_tsconfig()
        self.runner.side_effect = SubprocessError(["npx", "tsc"], "type error")

        with self.assertRaises(BackendDeployError) as ctx:
            self.deployer.deploy(self.backend_id, validate_app_sources=True)

        self.assertEqual(ctx.exception.name, "SyntaxError")
        self.assertEqual(self.runner.call_count, 1)

    def test_deploy_failure(self):
        self.runner.side_effect = SubprocessError(["npx", "cdk"], "boom")

        with self.assertRaises(BackendDeployError) as ctx:
            self.deployer.deploy(self.backend_id)

        self.assertEqual(ctx.exception.name, "BackendDeployError")
        self.assertIn("main", ctx.exception.details)
