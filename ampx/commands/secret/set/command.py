"""
Sets up the cli for secret set
"""

import click

from ampx.cli.main import aws_creds_options, common_options, pass_context, print_cmdline_args
from ampx.commands._utils.command_exception_handler import command_exception_handler
from ampx.commands._utils.track_command import track_command
from ampx.commands.secret.options import secret_target_options

HELP_TEXT = """
Sets a secret. The value is read from a hidden prompt, or from stdin when it is not a terminal.
"""


@click.command(name="set", help=HELP_TEXT)
@click.argument("secret_name")
@secret_target_options
@aws_creds_options
@common_options
@pass_context
@track_command
@print_cmdline_args
@command_exception_handler
def cli(ctx, secret_name, app_id, branch):
    """
    `ampx secret set` command entry point
    """
    secret_value = click.prompt(f"Enter secret value for {secret_name}", hide_input=True)
    do_cli(secret_name, secret_value, app_id, branch, ctx.region, ctx.profile)


def do_cli(secret_name, secret_value, app_id, branch, region, profile):
    """
    Implementation of the ``cli`` method
    """
    from ampx.commands.secret.options import get_secret_target
    from ampx.lib.secret.secret import get_secret_client_with_amplify_error_handling

    secret_client = get_secret_client_with_amplify_error_handling(region=region, profile=profile)
    secret_identifier = secret_client.set_secret(get_secret_target(app_id, branch), secret_name, secret_value)
    click.echo(f"Secret {secret_identifier.name} set, version {secret_identifier.version}.")
