"""
Command group for "generate" suite of commands.
"""

import click

from ampx.cli.lazy_group import LazyGroup


@click.group(
    cls=LazyGroup,
    lazy_subcommands={
        "outputs": ("ampx.commands.generate.outputs.command.cli", "Generates the client configuration file"),
        "forms": ("ampx.commands.generate.forms.command.cli", "Generates UI forms"),
    },
)
def cli():
    """
    Generates post deployment artifacts of a deployed backend.
    """
