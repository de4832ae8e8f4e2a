"""
Sets up the cli for configure telemetry
"""

import click

from ampx.cli.main import common_options, pass_context
from ampx.commands._utils.track_command import track_command


@click.group(name="telemetry")
def cli():
    """
    Enables or disables the collection of anonymous usage data.
    """


@cli.command(name="enable")
@common_options
@pass_context
@track_command
def enable(ctx):
    """
    Enables anonymous telemetry collection
    """
    do_cli(enabled=True)


@cli.command(name="disable")
@common_options
@pass_context
@track_command
def disable(ctx):
    """
    Disables anonymous telemetry collection
    """
    do_cli(enabled=False)


def do_cli(enabled):
    """
    Implementation of the ``enable`` and ``disable`` commands
    """
    from ampx.cli.global_config import GlobalConfig

    GlobalConfig().telemetry_enabled = enabled
    click.echo(f"Telemetry data collection is {'enabled' if enabled else 'disabled'}.")
