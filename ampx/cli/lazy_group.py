"""
Click group whose subcommands are imported only when invoked
"""

import importlib
from typing import Dict, Optional, Tuple

import click
from click import ClickException


class LazyGroup(click.Group):
    """
    ``lazy_subcommands`` maps a command name to the import path of its click command and its short help:

        {"outputs": ("ampx.commands.generate.outputs.command.cli", "Generates the client configuration")}

    The short help lets ``--help`` list the subcommands without importing them.
    """

    def __init__(self, *args, lazy_subcommands: Optional[Dict[str, Tuple[str, str]]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx):
        return super().list_commands(ctx) + sorted(self.lazy_subcommands.keys())

    def get_command(self, ctx, cmd_name):
        if cmd_name in self.lazy_subcommands:
            return self._lazy_load(cmd_name)
        return super().get_command(ctx, cmd_name)

    def format_commands(self, ctx, formatter):
        rows = [(name, short_help) for name, (_, short_help) in sorted(self.lazy_subcommands.items())]
        for name in super().list_commands(ctx):
            command = super().get_command(ctx, name)
            if command is not None and not command.hidden:
                rows.append((name, command.get_short_help_str()))
        if rows:
            with formatter.section("Commands"):
                formatter.write_dl(sorted(rows))

    def _lazy_load(self, cmd_name):
        import_path, _ = self.lazy_subcommands[cmd_name]
        modname, cmd_object_name = import_path.rsplit(".", 1)
        try:
            mod = importlib.import_module(modname)
        except ImportError as e:
            raise ClickException(f"Failed to load command '{cmd_name}': {str(e)}") from e
        cmd_object = getattr(mod, cmd_object_name, None)
        if not isinstance(cmd_object, click.Command):
            raise ClickException(f"Lazy loading of {import_path} failed by returning a non-command object")
        return cmd_object
