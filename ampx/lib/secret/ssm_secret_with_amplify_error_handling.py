"""
Secret client decorator that turns parameter store failures into user errors
"""

from typing import Callable, List, TypeVar

from botocore.exceptions import EndpointConnectionError, NoCredentialsError

from ampx.commands.exceptions import AmplifyUserError
from ampx.lib.secret.secret import Secret, SecretClient, SecretIdentifier, SecretListItem, SecretTarget
from ampx.lib.secret.ssm_secret import PARAMETER_NOT_FOUND_ERROR_CODE, SecretError

T = TypeVar("T")

CREDENTIALS_ERROR_CODES = ("ExpiredTokenException", "ExpiredToken", "UnrecognizedClientException")
ACCESS_DENIED_ERROR_CODES = ("AccessDeniedException", "AccessDenied")


def _to_user_error(error: SecretError, secret_name: str = "") -> AmplifyUserError:
    code = error.error_code
    if code == PARAMETER_NOT_FOUND_ERROR_CODE:
        return AmplifyUserError(
            "SecretNotFoundError",
            message=f"Failed to get {secret_name} secret. ParameterNotFound: the secret does not exist.",
            resolution="Make sure the secret exists. Use `ampx secret list` to see the available secrets.",
            wrapped_from=error,
        )
    if code in CREDENTIALS_ERROR_CODES or isinstance(error.cause, NoCredentialsError):
        return AmplifyUserError(
            "CredentialsError",
            message="Failed to access the parameter store due to invalid credentials.",
            resolution="Ensure your AWS credentials are correctly set and refreshed.",
            wrapped_from=error,
        )
    if code in ACCESS_DENIED_ERROR_CODES:
        return AmplifyUserError(
            "AccessDeniedError",
            message=f"You do not have the permissions to manage secrets: {error.message}",
            resolution="Ensure you have permissions to call the SSM parameter store APIs.",
            wrapped_from=error,
        )
    if isinstance(error.cause, EndpointConnectionError):
        return AmplifyUserError(
            "NetworkError",
            message="Failed to reach the parameter store.",
            resolution="Check your network connection and the configured AWS region, then try again.",
            wrapped_from=error,
        )
    return AmplifyUserError(
        "SecretError",
        message=f"Failed to manage secrets: {error.message}",
        resolution="Check the error above and try again.",
        wrapped_from=error,
    )


class SSMSecretClientWithAmplifyErrorHandling:
    def __init__(self, secret_client: SecretClient):
        self._secret_client = secret_client

    @staticmethod
    def _call(action: Callable[[], T], secret_name: str = "") -> T:
        try:
            return action()
        except SecretError as ex:
            raise _to_user_error(ex, secret_name) from ex

    def get_secret(self, target: SecretTarget, secret_identifier: SecretIdentifier) -> Secret:
        return self._call(lambda: self._secret_client.get_secret(target, secret_identifier), secret_identifier.name)

    def list_secrets(self, target: SecretTarget) -> List[SecretListItem]:
        return self._call(lambda: self._secret_client.list_secrets(target))

    def set_secret(self, target: SecretTarget, secret_name: str, secret_value: str) -> SecretIdentifier:
        return self._call(lambda: self._secret_client.set_secret(target, secret_name, secret_value), secret_name)

    def remove_secret(self, target: SecretTarget, secret_name: str) -> None:
        self._call(lambda: self._secret_client.remove_secret(target, secret_name), secret_name)

    def remove_secrets(self, target: SecretTarget, secret_names: List[str]) -> None:
        self._call(lambda: self._secret_client.remove_secrets(target, secret_names))
