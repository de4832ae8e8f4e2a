"""
Maps failures of the backend output client to user errors
"""

from typing import Callable, Dict

from ampx.commands.exceptions import AmplifyUserError
from ampx.lib.deployed_backend.exceptions import BackendOutputClientError, BackendOutputClientErrorType

STACK_IDENTIFIER_RESOLUTION = (
    "Ensure the CloudFormation stack ID or Amplify App ID and branch specified are correct and exists"
)

_USER_ERRORS: Dict[BackendOutputClientErrorType, Callable[[], AmplifyUserError]] = {
    BackendOutputClientErrorType.DEPLOYMENT_IN_PROGRESS: lambda: AmplifyUserError(
        "DeploymentInProgressError",
        message="Deployment is currently in progress.",
        resolution="Re-run this command once the deployment completes.",
    ),
    BackendOutputClientErrorType.NO_STACK_FOUND: lambda: AmplifyUserError(
        "StackDoesNotExistError",
        message="Stack does not exist.",
        resolution=f"{STACK_IDENTIFIER_RESOLUTION}, then re-run this command.",
    ),
    BackendOutputClientErrorType.NO_OUTPUTS_FOUND: lambda: AmplifyUserError(
        "AmplifyOutputsNotFoundError",
        message="Amplify outputs not found in stack metadata",
        resolution=f"{STACK_IDENTIFIER_RESOLUTION}.\nIf this is a new sandbox or branch deployment, wait for the "
        "deployment to be successfully finished and try again.",
    ),
    BackendOutputClientErrorType.CREDENTIALS_ERROR: lambda: AmplifyUserError(
        "CredentialsError",
        message="Unable to get backend outputs due to invalid credentials.",
        resolution="Ensure your AWS credentials are correctly set and refreshed.",
    ),
    BackendOutputClientErrorType.ACCESS_DENIED: lambda: AmplifyUserError(
        "AccessDeniedError",
        message="Unable to get backend outputs due to insufficient permissions.",
        resolution="Ensure you have permissions to call cloudformation:GetTemplateSummary.",
    ),
}


def handle_backend_output_client_error(ex: BackendOutputClientError) -> None:
    """
    Raises the user error matching the kind of failure. Kinds without a user error (metadata retrieval and
    schema validation failures) are raised unchanged.
    """
    build_user_error = _USER_ERRORS.get(ex.code)
    if build_user_error is None:
        raise ex
    user_error = build_user_error()
    user_error.wrapped_from = ex
    raise user_error from ex
