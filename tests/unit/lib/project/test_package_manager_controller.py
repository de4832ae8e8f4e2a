import tempfile
from pathlib import Path
from unittest import TestCase
from unittest.mock import Mock

from parameterized import parameterized

from ampx.lib.project.exceptions import PackageManagerError
from ampx.lib.project.package_manager_controller import (
    DependencyType,
    PackageManager,
    PackageManagerController,
    detect_package_manager,
)
from ampx.lib.utils.subprocess_utils import SubprocessError


class TestDetectPackageManager(TestCase):
    @parameterized.expand(
        [
            ("npm/10.2.0 node/v20.9.0 linux x64 workspaces/false", PackageManager.NPM),
            ("yarn/1.22.19 npm/? node/v18.16.0 darwin arm64", PackageManager.YARN),
            ("pnpm/8.6.0 npm/? node/v18.16.0 darwin arm64", PackageManager.PNPM),
            ("bun/1.0.0", PackageManager.NPM),
        ]
    )
    def test_from_user_agent(self, user_agent, expected):
        self.assertEqual(detect_package_manager({"npm_config_user_agent": user_agent}), expected)

    def test_defaults_to_npm(self):
        self.assertEqual(detect_package_manager({}), PackageManager.NPM)


class TestPackageManagerController(TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.runner = Mock()

    def tearDown(self):
        self._tmp.cleanup()

    def _controller(self, package_manager):
        return PackageManagerController(self._tmp.name, package_manager=package_manager, runner=self.runner)

    @parameterized.expand(
        [
            (PackageManager.NPM, DependencyType.DEV, ["npm", "install", "-D", "tsx"]),
            (PackageManager.NPM, DependencyType.PROD, ["npm", "install", "tsx"]),
            (PackageManager.YARN, DependencyType.DEV, ["yarn", "add", "-D", "tsx"]),
            (PackageManager.PNPM, DependencyType.PROD, ["pnpm", "add", "tsx"]),
        ]
    )
    def test_install_dependencies(self, package_manager, dependency_type, expected_command):
        self._controller(package_manager).install_dependencies(["tsx"], dependency_type)

        self.runner.assert_called_once_with(expected_command, cwd=self._tmp.name)

    def test_initialize_project(self):
        self._controller(PackageManager.NPM).initialize_project()

        self.runner.assert_called_once_with(["npm", "init", "--yes"], cwd=self._tmp.name)

    def test_initialize_project_skipped_with_package_json(self):
        Path(self._tmp.name, "package.json").write_text("{}")

        self._controller(PackageManager.NPM).initialize_project()

        self.runner.assert_not_called()

    def test_initialize_ts_config(self):
        self._controller(PackageManager.PNPM).initialize_ts_config()

        command = self.runner.call_args[0][0]
        self.assertEqual(command[:3], ["pnpm", "tsc", "--init"])

    def test_initialize_ts_config_skipped_with_tsconfig(self):
        Path(self._tmp.name, "tsconfig.json").write_text("{}")

        self._controller(PackageManager.NPM).initialize_ts_config()

        self.runner.assert_not_called()

    @parameterized.expand(
        [(PackageManager.NPM, "npx ampx sandbox"), (PackageManager.YARN, "yarn ampx sandbox")]
    )
    def test_get_command(self, package_manager, expected):
        self.assertEqual(self._controller(package_manager).get_command(["ampx", "sandbox"]), expected)

    def test_failure_is_wrapped(self):
        self.runner.side_effect = SubprocessError(["npm", "install"], "failed")

        with self.assertRaises(PackageManagerError) as ctx:
            self._controller(PackageManager.NPM).install_dependencies(["tsx"], DependencyType.DEV)

        self.assertIn("npm failed while running 'npm install -D tsx'.", ctx.exception.details)
        self.assertIsInstance(ctx.exception.wrapped_from, SubprocessError)
