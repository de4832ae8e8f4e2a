"""
Sets up the cli for pipeline-deploy
"""

import click

from ampx.cli.main import aws_creds_options, common_options, pass_context, print_cmdline_args
from ampx.commands._utils.command_exception_handler import command_exception_handler
from ampx.commands._utils.options import outputs_format_option, outputs_version_option
from ampx.commands._utils.track_command import track_command

HELP_TEXT = """
Deploys a backend in a custom CI/CD pipeline. This command is not intended to be used locally.
"""


@click.command(name="pipeline-deploy", help=HELP_TEXT)
@click.option("--branch", required=True, help="Name of the git branch being deployed.")
@click.option("--app-id", required=True, help="The app id of the target Amplify app.")
@click.option(
    "--outputs-out-dir",
    help="A path to the directory where amplify_outputs is written. Defaults to the current working directory.",
)
@outputs_version_option()
@outputs_format_option()
@aws_creds_options
@common_options
@pass_context
@track_command
@print_cmdline_args
@command_exception_handler
def cli(ctx, branch, app_id, outputs_out_dir, outputs_version, outputs_format):
    """
    `ampx pipeline-deploy` command entry point
    """
    do_cli(
        branch=branch,
        app_id=app_id,
        outputs_out_dir=outputs_out_dir,
        outputs_version=outputs_version,
        outputs_format=outputs_format,
        region=ctx.region,
        profile=ctx.profile,
    )


def do_cli(branch, app_id, outputs_out_dir, outputs_version, outputs_format, region, profile, cicd_detector=None):
    """
    Implementation of the ``cli`` method
    """
    from ampx.commands.exceptions import AmplifyUserError
    from ampx.lib.backend_identifier.identifiers import BackendIdentifier
    from ampx.lib.client_config.client_config_generator import ClientConfigVersion
    from ampx.lib.client_config.client_config_generator_adapter import ClientConfigGeneratorAdapter
    from ampx.lib.client_config.client_config_writer import ClientConfigFormat
    from ampx.lib.deploy.backend_deployer import BackendDeployer
    from ampx.lib.deployed_backend.backend_output_client import BackendOutputClientFactory
    from ampx.lib.utils.cicd import CICDDetector

    if not branch or not app_id:
        raise AmplifyUserError(
            "InvalidCommandInputError",
            message="Invalid --branch or --app-id",
            resolution="--branch and --app-id must be at least 1 character",
        )

    if not (cicd_detector or CICDDetector()).is_ci():
        raise AmplifyUserError(
            "RunningPipelineDeployNotInCiError",
            message="It looks like this command is being run outside of a CI/CD workflow.",
            resolution="To deploy locally use `npx ampx sandbox` instead.",
        )

    backend_id = BackendIdentifier(namespace=app_id, name=branch, type="branch")
    BackendDeployer().deploy(backend_id, validate_app_sources=True)

    adapter = ClientConfigGeneratorAdapter(BackendOutputClientFactory.get_instance(region=region, profile=profile))
    path = adapter.generate_client_config_to_file(
        backend_id,
        ClientConfigVersion(outputs_version),
        outputs_out_dir,
        ClientConfigFormat(outputs_format) if outputs_format else None,
    )
    click.echo(f"File written: {path}")
