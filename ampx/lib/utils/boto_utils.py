"""
Creation of boto3 clients and helpers to read botocore errors
"""
from typing import Any, Dict, Optional

from boto3 import Session
from botocore.config import Config
from botocore.exceptions import ClientError
from typing_extensions import Protocol

from ampx import __version__
from ampx.cli.global_config import GlobalConfig

# retries of the AWS calls the CLI makes, on top of the botocore defaults
DEFAULT_RETRY_CONFIG = {"max_attempts": 5, "mode": "standard"}


class BotoProviderType(Protocol):
    """
    Returns a boto3 client for a service name, ex: provider("cloudformation")
    """

    def __call__(self, service_name: str) -> Any:
        ...  # pragma: no cover


def get_user_agent_extra() -> str:
    """
    "ampx/<version>", followed by the installation id when the user allows telemetry
    """
    gc = GlobalConfig()
    if gc.telemetry_enabled:
        return f"ampx/{__version__}/{gc.installation_id}"
    return f"ampx/{__version__}"


def get_boto_config(**kwargs) -> Config:
    """
    botocore Config carrying the CLI user agent. Keyword arguments are passed to Config and win over the
    defaults.
    """
    params: Dict[str, Any] = {"retries": DEFAULT_RETRY_CONFIG, "user_agent_extra": get_user_agent_extra()}
    params.update(kwargs)
    return Config(**params)


def get_boto_client_provider_with_config(
    region: Optional[str] = None, profile: Optional[str] = None, **kwargs
) -> BotoProviderType:
    """
    Builds one session for the region and profile and returns a provider creating clients from it.

        ssm_client = get_boto_client_provider_with_config(region="us-east-1")("ssm")

    Parameters
    ----------
    region: Optional[str]
        AWS region, the default chain of the session when None
    profile: Optional[str]
        Named profile of the shared credentials file
    kwargs :
        Passed to get_boto_config
    """
    session = Session(region_name=region, profile_name=profile)
    config = get_boto_config(**kwargs)

    def provider(service_name: str) -> Any:
        return session.client(service_name, config=config)

    return provider


def get_client_error_code(client_error: ClientError) -> Optional[str]:
    return client_error.response.get("Error", {}).get("Code")


def get_client_error_message(client_error: ClientError) -> Optional[str]:
    return client_error.response.get("Error", {}).get("Message")
