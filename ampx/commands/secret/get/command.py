"""
Sets up the cli for secret get
"""

import click

from ampx.cli.main import aws_creds_options, common_options, pass_context, print_cmdline_args
from ampx.commands._utils.command_exception_handler import command_exception_handler
from ampx.commands._utils.track_command import track_command
from ampx.commands.secret.options import secret_target_options

HELP_TEXT = """
Gets a secret and prints its value.
"""


@click.command(name="get", help=HELP_TEXT)
@click.argument("secret_name")
@click.option("--version", "secret_version", type=int, help="Version of the secret. Defaults to the latest.")
@secret_target_options
@aws_creds_options
@common_options
@pass_context
@track_command
@print_cmdline_args
@command_exception_handler
def cli(ctx, secret_name, secret_version, app_id, branch):
    """
    `ampx secret get` command entry point
    """
    do_cli(secret_name, secret_version, app_id, branch, ctx.region, ctx.profile)


def do_cli(secret_name, secret_version, app_id, branch, region, profile):
    """
    Implementation of the ``cli`` method
    """
    from ampx.commands.secret.options import get_secret_target
    from ampx.lib.secret.secret import SecretIdentifier, get_secret_client_with_amplify_error_handling

    secret_client = get_secret_client_with_amplify_error_handling(region=region, profile=profile)
    secret = secret_client.get_secret(
        get_secret_target(app_id, branch), SecretIdentifier(name=secret_name, version=secret_version)
    )
    click.echo(f"name: {secret.name}")
    click.echo(f"version: {secret.version}")
    click.echo(f"value: {secret.value}")
    if secret.last_updated:
        click.echo(f"lastUpdated: {secret.last_updated.isoformat()}")
