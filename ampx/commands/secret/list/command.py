"""
Sets up the cli for secret list
"""

import click

from ampx.cli.main import aws_creds_options, common_options, pass_context, print_cmdline_args
from ampx.commands._utils.command_exception_handler import command_exception_handler
from ampx.commands._utils.track_command import track_command
from ampx.commands.secret.options import secret_target_options

HELP_TEXT = """
Lists the names of the secrets.
"""


@click.command(name="list", help=HELP_TEXT)
@secret_target_options
@aws_creds_options
@common_options
@pass_context
@track_command
@print_cmdline_args
@command_exception_handler
def cli(ctx, app_id, branch):
    """
    `ampx secret list` command entry point
    """
    do_cli(app_id, branch, ctx.region, ctx.profile)


def do_cli(app_id, branch, region, profile):
    """
    Implementation of the ``cli`` method
    """
    from ampx.commands.secret.options import get_secret_target
    from ampx.lib.secret.secret import get_secret_client_with_amplify_error_handling

    secret_client = get_secret_client_with_amplify_error_handling(region=region, profile=profile)
    secrets = secret_client.list_secrets(get_secret_target(app_id, branch))
    if not secrets:
        click.echo("No secrets found.")
        return
    for secret in secrets:
        click.echo(f" - {secret.name}")
