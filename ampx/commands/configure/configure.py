"""
Command group for "configure" suite of commands.
"""

import click

from ampx.cli.lazy_group import LazyGroup


@click.group(
    cls=LazyGroup,
    lazy_subcommands={
        "telemetry": ("ampx.commands.configure.telemetry.command.cli", "Configures anonymous usage data collection"),
    },
)
def cli():
    """
    Configures ampx.
    """
