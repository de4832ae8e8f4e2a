import os
from unittest import TestCase
from unittest.mock import Mock, call

from ampx.lib.project.amplify_project_creator import (
    DEFAULT_DEV_PACKAGES,
    DEFAULT_PROD_PACKAGES,
    AmplifyProjectCreator,
)
from ampx.lib.project.exceptions import ProjectDirectoryExistsError
from ampx.lib.project.package_manager_controller import DependencyType
from ampx.lib.utils.colors import Colored


class TestAmplifyProjectCreator(TestCase):
    def setUp(self):
        self.parent = Mock()
        self.parent.package_manager_controller.get_command.side_effect = lambda args: "npx " + " ".join(args)
        self.parent.printer.indicate_progress.side_effect = lambda message, action, success_message=None: action()
        self.creator = AmplifyProjectCreator(
            os.getcwd(),
            self.parent.package_manager_controller,
            self.parent.project_root_validator,
            self.parent.gitignore_initializer,
            self.parent.initial_project_file_generator,
            printer=self.parent.printer,
            colored=Colored(colorize=False),
        )

    def _logged(self):
        return [c[0][0] for c in self.parent.printer.log.call_args_list]

    def test_steps_run_in_order(self):
        self.creator.create()

        steps = [
            c
            for c in self.parent.mock_calls
            if not c[0].startswith("printer") and not c[0].endswith("get_command")
        ]
        self.assertEqual(
            steps,
            [
                call.project_root_validator.validate(),
                call.package_manager_controller.initialize_project(),
                call.package_manager_controller.initialize_ts_config(),
                call.package_manager_controller.install_dependencies(DEFAULT_DEV_PACKAGES, DependencyType.DEV),
                call.package_manager_controller.install_dependencies(DEFAULT_PROD_PACKAGES, DependencyType.PROD),
                call.gitignore_initializer.ensure_initialized(),
                call.initial_project_file_generator.generate_initial_project_files(),
            ],
        )

    def test_progress_messages(self):
        self.creator.create()

        progress = [(c[0][0], c[0][2]) for c in self.parent.printer.indicate_progress.call_args_list]
        self.assertEqual(
            progress,
            [
                ("Installing devDependencies", "DevDependencies installed"),
                ("Installing dependencies", "Dependencies installed"),
                ("Creating template files", "Template files created"),
            ],
        )

    def test_next_steps_in_current_directory(self):
        self.creator.create()

        logged = self._logged()
        self.assertEqual(logged[0], f"Creating a new Amplify project in {os.getcwd()}")
        self.assertIn("Installing devDependencies:", logged)
        self.assertIn(" - aws-amplify", logged)
        self.assertIn("Successfully created a new project!", logged)
        self.assertIn("Welcome to AWS Amplify!", logged)
        next_steps = [line for line in logged if line.startswith("Next steps:")]
        self.assertEqual(len(next_steps), 1)
        self.assertIn("Get started by running npx ampx sandbox.", next_steps[0])
        self.assertIn("npx ampx configure telemetry disable", logged[-1])

    def test_next_steps_in_other_directory(self):
        project_root = os.path.join(os.getcwd(), "my-app")
        creator = AmplifyProjectCreator(
            project_root,
            self.parent.package_manager_controller,
            self.parent.project_root_validator,
            self.parent.gitignore_initializer,
            self.parent.initial_project_file_generator,
            printer=self.parent.printer,
            colored=Colored(colorize=False),
        )

        creator.create()

        header = "Navigate to your project directory using cd my-app and then:"
        self.assertTrue(any(line.startswith(header) for line in self._logged()))

    def test_validation_failure_stops_creation(self):
        self.parent.project_root_validator.validate.side_effect = ProjectDirectoryExistsError(backend_dir="amplify")

        with self.assertRaises(ProjectDirectoryExistsError):
            self.creator.create()

        self.parent.package_manager_controller.initialize_project.assert_not_called()
