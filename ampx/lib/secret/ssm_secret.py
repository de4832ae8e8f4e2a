"""
Secret client backed by the SSM Parameter Store
"""

import logging
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ampx.lib.backend_identifier.identifiers import BackendIdentifier, get_backend_hash
from ampx.lib.secret.secret import Secret, SecretIdentifier, SecretListItem, SecretTarget
from ampx.lib.utils.boto_utils import get_client_error_code

LOG = logging.getLogger(__name__)

PARAMETER_PATH_ROOT = "/amplify"
SHARED_SECRET_SCOPE = "shared"
PARAMETER_DESCRIPTION = "Amplify Secret"
PARAMETER_NOT_FOUND_ERROR_CODE = "ParameterNotFound"
# DeleteParameters accepts at most 10 names per call
DELETE_BATCH_SIZE = 10


class SecretError(Exception):
    """
    Raised by the SSM secret client for any failure of the parameter store
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)

    @property
    def error_code(self) -> Optional[str]:
        if isinstance(self.cause, ClientError):
            return get_client_error_code(self.cause)
        return None

    @classmethod
    def from_exception(cls, ex: Exception) -> "SecretError":
        return cls(str(ex), cause=ex)


def get_branch_parameter_prefix(backend_id: BackendIdentifier) -> str:
    backend_hash = get_backend_hash(backend_id)
    return f"{PARAMETER_PATH_ROOT}/{backend_id.namespace}/{backend_id.name}-{backend_id.type}-{backend_hash}"


def get_shared_parameter_prefix(app_id: str) -> str:
    return f"{PARAMETER_PATH_ROOT}/{SHARED_SECRET_SCOPE}/{app_id}"


def get_parameter_prefix(target: SecretTarget) -> str:
    if isinstance(target, BackendIdentifier):
        return get_branch_parameter_prefix(target)
    return get_shared_parameter_prefix(target)


def get_parameter_full_path(prefix: str, secret_name: str) -> str:
    return f"{prefix}/{secret_name}"


class SSMSecretClient:
    def __init__(self, ssm_client: Any):
        self._ssm_client = ssm_client

    def get_secret(self, target: SecretTarget, secret_identifier: SecretIdentifier) -> Secret:
        """
        Reads a secret. For a backend the branch scoped secret is looked up first and the secret shared by
        the app is used when the branch does not define one.
        """
        try:
            if isinstance(target, BackendIdentifier):
                try:
                    return self._get_parameter(get_branch_parameter_prefix(target), secret_identifier)
                except ClientError as ex:
                    if get_client_error_code(ex) != PARAMETER_NOT_FOUND_ERROR_CODE:
                        raise
                    LOG.debug("Secret %s not set for the branch, trying the shared scope", secret_identifier.name)
                return self._get_parameter(get_shared_parameter_prefix(target.namespace), secret_identifier)
            return self._get_parameter(get_shared_parameter_prefix(target), secret_identifier)
        except (ClientError, BotoCoreError) as ex:
            raise SecretError.from_exception(ex) from ex

    def _get_parameter(self, prefix: str, secret_identifier: SecretIdentifier) -> Secret:
        name = get_parameter_full_path(prefix, secret_identifier.name)
        if secret_identifier.version is not None:
            name = f"{name}:{secret_identifier.version}"
        parameter = self._ssm_client.get_parameter(Name=name, WithDecryption=True)["Parameter"]
        return Secret(
            name=secret_identifier.name,
            value=parameter.get("Value", ""),
            version=parameter.get("Version"),
            last_updated=parameter.get("LastModifiedDate"),
        )

    def list_secrets(self, target: SecretTarget) -> List[SecretListItem]:
        prefix = get_parameter_prefix(target)
        secrets = []
        try:
            paginator = self._ssm_client.get_paginator("get_parameters_by_path")
            for page in paginator.paginate(Path=prefix, WithDecryption=True):
                for parameter in page.get("Parameters", []):
                    secrets.append(self._to_list_item(prefix, parameter))
        except (ClientError, BotoCoreError) as ex:
            raise SecretError.from_exception(ex) from ex
        return secrets

    @staticmethod
    def _to_list_item(prefix: str, parameter: Dict[str, Any]) -> SecretListItem:
        name = parameter.get("Name", "")
        if name.startswith(prefix + "/"):
            name = name[len(prefix) + 1 :]
        return SecretListItem(
            name=name, version=parameter.get("Version"), last_updated=parameter.get("LastModifiedDate")
        )

    def set_secret(self, target: SecretTarget, secret_name: str, secret_value: str) -> SecretIdentifier:
        name = get_parameter_full_path(get_parameter_prefix(target), secret_name)
        try:
            response = self._ssm_client.put_parameter(
                Name=name,
                Type="SecureString",
                Value=secret_value,
                Description=PARAMETER_DESCRIPTION,
                Overwrite=True,
            )
        except (ClientError, BotoCoreError) as ex:
            raise SecretError.from_exception(ex) from ex
        return SecretIdentifier(name=secret_name, version=response.get("Version"))

    def remove_secret(self, target: SecretTarget, secret_name: str) -> None:
        name = get_parameter_full_path(get_parameter_prefix(target), secret_name)
        try:
            self._ssm_client.delete_parameter(Name=name)
        except (ClientError, BotoCoreError) as ex:
            raise SecretError.from_exception(ex) from ex

    def remove_secrets(self, target: SecretTarget, secret_names: List[str]) -> None:
        prefix = get_parameter_prefix(target)
        names = [get_parameter_full_path(prefix, secret_name) for secret_name in secret_names]
        try:
            for start in range(0, len(names), DELETE_BATCH_SIZE):
                self._ssm_client.delete_parameters(Names=names[start : start + DELETE_BATCH_SIZE])
        except (ClientError, BotoCoreError) as ex:
            raise SecretError.from_exception(ex) from ex
