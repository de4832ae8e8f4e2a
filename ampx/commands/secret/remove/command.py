"""
Sets up the cli for secret remove
"""

import click

from ampx.cli.main import aws_creds_options, common_options, pass_context, print_cmdline_args
from ampx.commands._utils.command_exception_handler import command_exception_handler
from ampx.commands._utils.track_command import track_command
from ampx.commands.secret.options import secret_target_options

HELP_TEXT = """
Removes a secret, or every secret with --all.
"""


@click.command(name="remove", help=HELP_TEXT)
@click.argument("secret_name", required=False)
@click.option("--all", "remove_all", is_flag=True, help="Remove all secrets.")
@secret_target_options
@aws_creds_options
@common_options
@pass_context
@track_command
@print_cmdline_args
@command_exception_handler
def cli(ctx, secret_name, remove_all, app_id, branch):
    """
    `ampx secret remove` command entry point
    """
    if bool(secret_name) == remove_all:
        raise click.UsageError("Provide either a secret name or --all.")
    do_cli(secret_name, remove_all, app_id, branch, ctx.region, ctx.profile)


def do_cli(secret_name, remove_all, app_id, branch, region, profile):
    """
    Implementation of the ``cli`` method
    """
    from ampx.commands.secret.options import get_secret_target
    from ampx.lib.secret.secret import get_secret_client_with_amplify_error_handling

    target = get_secret_target(app_id, branch)
    secret_client = get_secret_client_with_amplify_error_handling(region=region, profile=profile)
    if not remove_all:
        secret_client.remove_secret(target, secret_name)
        click.echo(f"Secret {secret_name} removed.")
        return

    secret_names = [secret.name for secret in secret_client.list_secrets(target)]
    if not secret_names:
        click.echo("No secrets to remove.")
        return
    secret_client.remove_secrets(target, secret_names)
    click.echo(f"Removed {len(secret_names)} secrets.")
