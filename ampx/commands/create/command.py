"""
Entry point of create-amplify, which sets up a new Amplify project
"""

import logging
import os

import click

from ampx.cli.context import Context
from ampx.cli.options import debug_option
from ampx.commands._utils.track_command import track_command
from ampx.lib.utils.ampx_logging import AMPX_FORMATTER, AMPX_LOGGER_NAME, AmpxLogger

LOG = logging.getLogger(__name__)

pass_context = click.make_pass_decorator(Context, ensure=True)


@click.command(name="create-amplify", context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--yes", "-y", is_flag=True, help="Do not prompt, use the default values.")
@click.option("--project-root", help="Directory of the project. Defaults to the current working directory.")
@debug_option
@pass_context
@track_command
def cli(ctx, yes, project_root):
    """
    Creates a new Amplify project
    """
    if not ctx.debug:
        AmpxLogger.configure_logger(logging.getLogger(AMPX_LOGGER_NAME), AMPX_FORMATTER, logging.INFO)

    if not project_root:
        project_root = os.getcwd()
        if not yes:
            project_root = click.prompt("Where should we create your project?", default=".", show_default=True)
    do_cli(os.path.abspath(project_root))


def do_cli(project_root):
    """
    Implementation of the ``cli`` method
    """
    from ampx.lib.project.amplify_project_creator import AmplifyProjectCreator
    from ampx.lib.project.gitignore_initializer import GitIgnoreInitializer
    from ampx.lib.project.initial_project_file_generator import InitialProjectFileGenerator
    from ampx.lib.project.package_manager_controller import PackageManagerController
    from ampx.lib.project.project_root_validator import ProjectRootValidator

    os.makedirs(project_root, exist_ok=True)
    AmplifyProjectCreator(
        project_root,
        PackageManagerController(project_root),
        ProjectRootValidator(project_root),
        GitIgnoreInitializer(project_root),
        InitialProjectFileGenerator(project_root),
    ).create()
