"""
Drives the node package manager that invoked create-amplify
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Callable, List, Mapping, Optional

from ampx.lib.project.exceptions import PackageManagerError
from ampx.lib.utils.subprocess_utils import SubprocessError, invoke_subprocess

LOG = logging.getLogger(__name__)

USER_AGENT_ENV_VAR = "npm_config_user_agent"

TS_CONFIG_ARGS = [
    "tsc",
    "--init",
    "--resolveJsonModule",
    "true",
    "--module",
    "es2022",
    "--moduleResolution",
    "bundler",
    "--target",
    "es2022",
]


class DependencyType(Enum):
    DEV = "dev"
    PROD = "prod"


class PackageManager(Enum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


def detect_package_manager(environ: Optional[Mapping[str, str]] = None) -> PackageManager:
    """
    Reads the package manager from the user agent npm, yarn and pnpm export to the scripts they run
    (ex: "pnpm/8.6.0 npm/? node/v18.16.0 darwin arm64"). Falls back to npm.
    """
    environ = os.environ if environ is None else environ
    user_agent = environ.get(USER_AGENT_ENV_VAR, "")
    for package_manager in PackageManager:
        if user_agent.startswith(f"{package_manager.value}/"):
            return package_manager
    return PackageManager.NPM


class PackageManagerController:
    _INSTALL_COMMANDS = {
        PackageManager.NPM: ["npm", "install"],
        PackageManager.YARN: ["yarn", "add"],
        PackageManager.PNPM: ["pnpm", "add"],
    }
    _INIT_COMMANDS = {
        PackageManager.NPM: ["npm", "init", "--yes"],
        PackageManager.YARN: ["yarn", "init", "--yes"],
        PackageManager.PNPM: ["pnpm", "init"],
    }
    _EXEC_COMMANDS = {
        PackageManager.NPM: ["npx"],
        PackageManager.YARN: ["yarn"],
        PackageManager.PNPM: ["pnpm"],
    }

    def __init__(
        self,
        project_root: str,
        package_manager: Optional[PackageManager] = None,
        runner: Callable[..., str] = invoke_subprocess,
    ):
        self._project_root = Path(project_root)
        self.package_manager = package_manager or detect_package_manager()
        self._runner = runner

    def initialize_project(self) -> None:
        if (self._project_root / "package.json").is_file():
            LOG.debug("package.json already exists in %s", self._project_root)
            return
        self._run(self._INIT_COMMANDS[self.package_manager])

    def initialize_ts_config(self) -> None:
        if (self._project_root / "tsconfig.json").is_file():
            LOG.debug("tsconfig.json already exists in %s", self._project_root)
            return
        self._run(self._EXEC_COMMANDS[self.package_manager] + TS_CONFIG_ARGS)

    def install_dependencies(self, packages: List[str], dependency_type: DependencyType) -> None:
        command = list(self._INSTALL_COMMANDS[self.package_manager])
        if dependency_type == DependencyType.DEV:
            command.append("-D")
        self._run(command + packages)

    def get_command(self, args: List[str]) -> str:
        """
        Command line a user types to run a package binary, ex: "npx ampx sandbox"
        """
        return " ".join(self._EXEC_COMMANDS[self.package_manager] + args)

    def _run(self, command: List[str]) -> None:
        try:
            self._runner(command, cwd=str(self._project_root))
        except SubprocessError as ex:
            raise PackageManagerError(
                wrapped_from=ex, package_manager=self.package_manager.value, command=" ".join(command)
            ) from ex
