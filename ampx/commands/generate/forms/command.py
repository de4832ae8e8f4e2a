"""
Sets up the cli for generate forms
"""

import click

from ampx.cli.main import aws_creds_options, common_options, pass_context, print_cmdline_args
from ampx.commands._utils.command_exception_handler import command_exception_handler
from ampx.commands._utils.options import backend_identifier_options
from ampx.commands._utils.track_command import track_command
from ampx.lib.form_generation.form_generation_handler import DEFAULT_UI_OUT_DIR

HELP_TEXT = """
Generates React create and update forms for the data models of a deployed backend.
"""

MODELS_DIR_NAME = "graphql"
MODEL_SCHEMA_URI_KEY = "amplifyApiModelSchemaS3Uri"


@click.command(name="forms", help=HELP_TEXT)
@backend_identifier_options
@click.option(
    "--out-dir",
    default=DEFAULT_UI_OUT_DIR,
    show_default=True,
    help="A path to directory where generated forms are written.",
)
@click.option("--models", multiple=True, help="Model name to generate. Can be repeated.")
@aws_creds_options
@common_options
@pass_context
@track_command
@print_cmdline_args
@command_exception_handler
def cli(ctx, stack, app_id, branch, out_dir, models):
    """
    `ampx generate forms` command entry point
    """
    do_cli(
        stack=stack,
        app_id=app_id,
        branch=branch,
        out_dir=out_dir,
        models=list(models),
        region=ctx.region,
        profile=ctx.profile,
    )


def do_cli(stack, app_id, branch, out_dir, models, region, profile):
    """
    Implementation of the ``cli`` method
    """
    import os

    from ampx.commands._utils.backend_identifier import resolve_backend_identifier_or_raise
    from ampx.commands.exceptions import AmplifyUserError
    from ampx.lib.deployed_backend.backend_output import GRAPHQL_OUTPUT_KEY
    from ampx.lib.deployed_backend.backend_output_client import BackendOutputClientFactory
    from ampx.lib.form_generation.form_generation_handler import FormGenerationHandler
    from ampx.lib.utils.boto_utils import get_boto_client_provider_with_config

    backend_identifier = resolve_backend_identifier_or_raise(stack=stack, app_id=app_id, branch=branch)
    output = BackendOutputClientFactory.get_instance(region=region, profile=profile).get_output(backend_identifier)

    graphql_output = output.get(GRAPHQL_OUTPUT_KEY)
    if not graphql_output or not graphql_output.payload.get(MODEL_SCHEMA_URI_KEY):
        raise AmplifyUserError(
            "NoGraphQLApiError",
            message="No GraphQL API configured for this backend.",
            resolution="Add a data resource to the backend, deploy it and re-run this command.",
        )

    s3_client = get_boto_client_provider_with_config(region=region, profile=profile)("s3")
    written = FormGenerationHandler(s3_client).generate(
        models_out_dir=os.path.join(out_dir, MODELS_DIR_NAME),
        ui_out_dir=out_dir,
        api_url=graphql_output.payload[MODEL_SCHEMA_URI_KEY],
        models_filter=models,
    )
    for path in written:
        click.echo(f"File written: {path}")
