"""
Options shared by the commands that read a deployed backend
"""

import click

from ampx.lib.client_config.client_config_generator import DEFAULT_CLIENT_CONFIG_VERSION, ClientConfigVersion
from ampx.lib.client_config.client_config_writer import ClientConfigFormat

STACK_OPTION_HELP = "A stack name that contains an Amplify backend."
APP_ID_OPTION_HELP = "The Amplify App ID of the project."
BRANCH_OPTION_HELP = "A git branch of the Amplify project."


def validate_backend_identifier_options(ctx, param, value):
    """
    --stack excludes --app-id and --branch, which go together
    """
    params = ctx.params
    stack = value if param.name == "stack" else params.get("stack")
    app_id = value if param.name == "app_id" else params.get("app_id")
    branch = value if param.name == "branch" else params.get("branch")
    if stack and (app_id or branch):
        raise click.BadOptionUsage(
            option_name=param.name, message="--stack cannot be used together with --app-id or --branch."
        )
    return value


def backend_identifier_options(f):
    """
    Adds --stack, --app-id and --branch to a command
    """
    for option in reversed(
        [
            click.option("--stack", help=STACK_OPTION_HELP, callback=validate_backend_identifier_options),
            click.option("--app-id", help=APP_ID_OPTION_HELP, callback=validate_backend_identifier_options),
            click.option("--branch", help=BRANCH_OPTION_HELP, callback=validate_backend_identifier_options),
        ]
    ):
        f = option(f)
    return f


def outputs_version_option(*param_decls):
    return click.option(
        *(param_decls or ("--outputs-version",)),
        type=click.Choice([version.value for version in ClientConfigVersion]),
        default=DEFAULT_CLIENT_CONFIG_VERSION.value,
        show_default=True,
        help="Version of the configuration. Version 0 represents the classic amplifyconfiguration file and 1 the "
        "newer amplify_outputs file.",
    )


def outputs_format_option(*param_decls):
    return click.option(
        *(param_decls or ("--outputs-format",)),
        type=click.Choice([config_format.value for config_format in ClientConfigFormat]),
        default=None,
        help="Format of the client configuration file. Defaults to json.",
    )
