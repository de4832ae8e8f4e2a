"""
Sets up the cli for generate outputs
"""

import click

from ampx.cli.main import aws_creds_options, common_options, pass_context, print_cmdline_args
from ampx.commands._utils.command_exception_handler import command_exception_handler
from ampx.commands._utils.options import (
    backend_identifier_options,
    outputs_format_option,
    outputs_version_option,
)
from ampx.commands._utils.track_command import track_command

HELP_TEXT = """
Generates the client configuration file (amplify_outputs) of a deployed backend.
"""


@click.command(name="outputs", help=HELP_TEXT)
@backend_identifier_options
@click.option(
    "--out-dir", help="A path to the directory where the config is written. Defaults to the current directory."
)
@outputs_format_option("--format", "config_format")
@outputs_version_option()
@aws_creds_options
@common_options
@pass_context
@track_command
@print_cmdline_args
@command_exception_handler
def cli(ctx, stack, app_id, branch, out_dir, config_format, outputs_version):
    """
    `ampx generate outputs` command entry point
    """
    do_cli(
        stack=stack,
        app_id=app_id,
        branch=branch,
        out_dir=out_dir,
        config_format=config_format,
        outputs_version=outputs_version,
        region=ctx.region,
        profile=ctx.profile,
    )


def do_cli(stack, app_id, branch, out_dir, config_format, outputs_version, region, profile):
    """
    Implementation of the ``cli`` method
    """
    from ampx.commands._utils.backend_identifier import resolve_backend_identifier_or_raise
    from ampx.lib.client_config.client_config_generator import ClientConfigVersion
    from ampx.lib.client_config.client_config_generator_adapter import ClientConfigGeneratorAdapter
    from ampx.lib.client_config.client_config_writer import ClientConfigFormat
    from ampx.lib.deployed_backend.backend_output_client import BackendOutputClientFactory

    backend_identifier = resolve_backend_identifier_or_raise(stack=stack, app_id=app_id, branch=branch)
    adapter = ClientConfigGeneratorAdapter(BackendOutputClientFactory.get_instance(region=region, profile=profile))
    path = adapter.generate_client_config_to_file(
        backend_identifier,
        ClientConfigVersion(outputs_version),
        out_dir,
        ClientConfigFormat(config_format) if config_format else None,
    )
    click.echo(f"File written: {path}")
