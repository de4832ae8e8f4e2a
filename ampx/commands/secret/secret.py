"""
Command group for "secret" suite of commands.
"""

import click

from ampx.cli.lazy_group import LazyGroup


@click.group(
    cls=LazyGroup,
    lazy_subcommands={
        "get": ("ampx.commands.secret.get.command.cli", "Gets a secret"),
        "set": ("ampx.commands.secret.set.command.cli", "Sets a secret"),
        "list": ("ampx.commands.secret.list.command.cli", "Lists secrets"),
        "remove": ("ampx.commands.secret.remove.command.cli", "Removes secrets"),
    },
)
def cli():
    """
    Manages the secrets of a backend. Secrets set without --branch are shared by every branch of the app.
    """
