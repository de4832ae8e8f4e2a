"""
Types and factories of the backend secret client
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Union

from typing_extensions import Protocol

from ampx.lib.backend_identifier.identifiers import BackendIdentifier

# a secret either belongs to one backend or is shared by every branch of an app (identified by its app id)
SecretTarget = Union[BackendIdentifier, str]


@dataclass(frozen=True)
class SecretIdentifier:
    name: str
    version: Optional[int] = None


@dataclass(frozen=True)
class Secret:
    name: str
    value: str
    version: Optional[int] = None
    last_updated: Optional[datetime] = None


@dataclass(frozen=True)
class SecretListItem:
    name: str
    version: Optional[int] = None
    last_updated: Optional[datetime] = None


class SecretClient(Protocol):
    def get_secret(self, target: SecretTarget, secret_identifier: SecretIdentifier) -> Secret:
        ...  # pragma: no cover

    def list_secrets(self, target: SecretTarget) -> List[SecretListItem]:
        ...  # pragma: no cover

    def set_secret(self, target: SecretTarget, secret_name: str, secret_value: str) -> SecretIdentifier:
        ...  # pragma: no cover

    def remove_secret(self, target: SecretTarget, secret_name: str) -> None:
        ...  # pragma: no cover

    def remove_secrets(self, target: SecretTarget, secret_names: List[str]) -> None:
        ...  # pragma: no cover


def get_secret_client(region: Optional[str] = None, profile: Optional[str] = None) -> SecretClient:
    """
    Creates a secret client that raises SecretError on failures
    """
    from ampx.lib.secret.ssm_secret import SSMSecretClient
    from ampx.lib.utils.boto_utils import get_boto_client_provider_with_config

    return SSMSecretClient(get_boto_client_provider_with_config(region=region, profile=profile)("ssm"))


def get_secret_client_with_amplify_error_handling(
    region: Optional[str] = None, profile: Optional[str] = None
) -> SecretClient:
    """
    Creates a secret client that raises user errors, for use by CLI commands
    """
    from ampx.lib.secret.ssm_secret_with_amplify_error_handling import SSMSecretClientWithAmplifyErrorHandling

    return SSMSecretClientWithAmplifyErrorHandling(get_secret_client(region=region, profile=profile))
