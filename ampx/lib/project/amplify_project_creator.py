"""
Creates a new Amplify project: installs the Amplify packages and writes a starter backend definition
"""

import logging
import os
from pathlib import Path
from typing import Optional

from ampx.lib.project.gitignore_initializer import GitIgnoreInitializer
from ampx.lib.project.initial_project_file_generator import InitialProjectFileGenerator
from ampx.lib.project.package_manager_controller import DependencyType, PackageManagerController
from ampx.lib.project.project_root_validator import ProjectRootValidator
from ampx.lib.utils.colors import Colored
from ampx.lib.utils.printer import Printer
from ampx.lib.utils.printer import printer as default_printer

LOG = logging.getLogger(__name__)

DEFAULT_DEV_PACKAGES = [
    "@aws-amplify/backend",
    "@aws-amplify/backend-cli",
    "aws-cdk@^2",
    "aws-cdk-lib@^2",
    "constructs@^10.0.0",
    "typescript@^5.0.0",
    "tsx",
    "esbuild",
]
DEFAULT_PROD_PACKAGES = ["aws-amplify"]

TELEMETRY_DOCS_URL = "https://docs.amplify.aws/react/reference/telemetry"


class AmplifyProjectCreator:
    def __init__(
        self,
        project_root: str,
        package_manager_controller: PackageManagerController,
        project_root_validator: ProjectRootValidator,
        gitignore_initializer: GitIgnoreInitializer,
        initial_project_file_generator: InitialProjectFileGenerator,
        printer: Optional[Printer] = None,
        colored: Optional[Colored] = None,
    ):
        self._project_root = project_root
        self._package_manager_controller = package_manager_controller
        self._project_root_validator = project_root_validator
        self._gitignore_initializer = gitignore_initializer
        self._initial_project_file_generator = initial_project_file_generator
        self._printer = printer or default_printer
        self._colored = colored or Colored()

    def create(self) -> None:
        self._project_root_validator.validate()

        self._printer.log(f"Creating a new Amplify project in {self._project_root}")
        self._package_manager_controller.initialize_project()
        self._package_manager_controller.initialize_ts_config()

        self._install("devDependencies", DEFAULT_DEV_PACKAGES, DependencyType.DEV)
        self._install("dependencies", DEFAULT_PROD_PACKAGES, DependencyType.PROD)

        self._gitignore_initializer.ensure_initialized()
        self._printer.indicate_progress(
            "Creating template files",
            self._initial_project_file_generator.generate_initial_project_files,
            "Template files created",
        )

        self._print_next_steps()

    def _install(self, label: str, packages, dependency_type: DependencyType) -> None:
        self._printer.log(self._colored.bold(self._colored.blue(f"Installing {label}:")))
        self._printer.log(os.linesep.join(f" - {package}" for package in packages))
        self._printer.indicate_progress(
            f"Installing {label}",
            lambda: self._package_manager_controller.install_dependencies(packages, dependency_type),
            f"{label[:1].upper()}{label[1:]} installed",
        )

    def _print_next_steps(self) -> None:
        colored = self._colored
        get_command = self._package_manager_controller.get_command
        self._printer.log(colored.green("Successfully created a new project!"))
        self._printer.log(colored.bold(colored.blue("Welcome to AWS Amplify!")))

        steps = [
            f" - Get started by running {colored.cyan(get_command(['ampx', 'sandbox']))}.",
            f" - Run {colored.cyan(get_command(['ampx', 'help']))} for a list of available commands.",
        ]
        relative_root = os.path.relpath(self._project_root)
        if Path(self._project_root).resolve() != Path.cwd().resolve():
            header = f"Navigate to your project directory using {colored.cyan('cd ' + relative_root)} and then:"
        else:
            header = "Next steps:"
        self._printer.log(os.linesep.join([header] + steps))

        self._printer.log(
            colored.grey(
                "Amplify collects anonymous telemetry data about general usage of the CLI. Participation is "
                "optional, and you may opt-out by using "
                f"{colored.cyan(get_command(['ampx', 'configure', 'telemetry', 'disable']))}. "
                f"To learn more about telemetry, visit {colored.underline(colored.blue(TELEMETRY_DOCS_URL))}"
            )
        )
