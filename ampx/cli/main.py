"""
The ampx command group and the decorators shared by its commands
"""

import logging

import click

from ampx import __version__
from ampx.cli.context import Context
from ampx.cli.global_config import GlobalConfig
from ampx.cli.lazy_group import LazyGroup
from ampx.cli.options import debug_option, profile_option, region_option
from ampx.lib.utils.ampx_logging import AMPX_FORMATTER, AMPX_LOGGER_NAME, AmpxLogger

LOG = logging.getLogger(__name__)


pass_context = click.make_pass_decorator(Context)


def common_options(f):
    """
    Options every command accepts, currently --debug
    """
    return debug_option(f)


def aws_creds_options(f):
    """
    --region and --profile, for commands calling AWS
    """
    return profile_option(region_option(f))


def _format_cmdline_args(kwargs) -> str:
    args = []
    for key, value in kwargs.items():
        if value is True:
            args.append(f"--{key}")
        elif value:
            args.append(f"--{key}={value}")
    return " ".join(args)


def print_cmdline_args(func):
    """
    Logs the resolved command arguments at debug level before running the command
    """

    def wrapper(*args, **kwargs):
        LOG.debug("Expand command line arguments to: %s", _format_cmdline_args(kwargs))
        return func(*args, **kwargs)

    return wrapper


# lines stay under 80 characters
TELEMETRY_PROMPT = """
\tAmplify collects anonymous telemetry data about general usage of the CLI.

\tParticipation is optional, you can OPT OUT by running
\t`ampx configure telemetry disable` or by setting the environment
\tvariable AMPLIFY_DISABLE_TELEMETRY=1 in your shell.

\tLearn More: https://docs.amplify.aws/react/reference/telemetry
"""


@click.group(
    cls=LazyGroup,
    context_settings=dict(help_option_names=["-h", "--help"]),
    lazy_subcommands={
        "generate": ("ampx.commands.generate.generate.cli", "Generates post deployment artifacts"),
        "pipeline-deploy": (
            "ampx.commands.pipeline_deploy.command.cli",
            "Deploys a backend in a custom CI/CD pipeline",
        ),
        "secret": ("ampx.commands.secret.secret.cli", "Manages backend secrets"),
        "configure": ("ampx.commands.configure.configure.cli", "Configures ampx"),
    },
)
@common_options
@click.version_option(version=__version__, prog_name="ampx")
@pass_context
def cli(ctx):
    """
    Amplify backend command line tool

    Deploys Amplify backends in CI/CD pipelines, generates the client configuration and UI forms of deployed
    backends and manages their secrets.
    """
    _announce_telemetry()

    # with --debug the logger is already set up at DEBUG level
    if not ctx.debug:
        AmpxLogger.configure_logger(logging.getLogger(AMPX_LOGGER_NAME), AMPX_FORMATTER, logging.INFO)
    AmpxLogger.configure_null_logger(logging.getLogger("botocore"))


def _announce_telemetry() -> None:
    """
    On the first run, stores the default choice (enabled) and tells the user how to opt out
    """
    gc = GlobalConfig()
    if gc.telemetry_enabled is not None:
        return
    try:
        gc.telemetry_enabled = True
    except (OSError, ValueError) as ex:
        LOG.debug("Unable to store the telemetry choice", exc_info=ex)
        return
    click.secho(TELEMETRY_PROMPT, fg="yellow", err=True)
