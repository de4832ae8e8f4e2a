"""
Builds the client configuration of a front end from the backend output
"""

import json
import logging
from enum import Enum
from typing import Any, Callable, Dict, Mapping

from ampx.commands.exceptions import AmplifyUserError
from ampx.lib.deployed_backend.backend_output import (
    AUTH_OUTPUT_KEY,
    CUSTOM_OUTPUT_KEY,
    GRAPHQL_OUTPUT_KEY,
    STORAGE_OUTPUT_KEY,
    BackendOutput,
)

LOG = logging.getLogger(__name__)


class ClientConfigVersion(str, Enum):
    LEGACY = "0"
    V1 = "1"


DEFAULT_CLIENT_CONFIG_VERSION = ClientConfigVersion.V1


def _auth_v1(payload: Mapping[str, str]) -> Dict[str, Any]:
    return {
        "auth": _drop_empty(
            {
                "aws_region": payload.get("authRegion"),
                "user_pool_id": payload.get("userPoolId"),
                "user_pool_client_id": payload.get("webClientId"),
                "identity_pool_id": payload.get("identityPoolId"),
            }
        )
    }


def _graphql_v1(payload: Mapping[str, str]) -> Dict[str, Any]:
    return {
        "data": _drop_empty(
            {
                "url": payload.get("awsAppsyncApiEndpoint"),
                "aws_region": payload.get("awsAppsyncRegion"),
                "api_key": payload.get("awsAppsyncApiKey"),
                "default_authorization_type": payload.get("awsAppsyncAuthenticationType"),
            }
        )
    }


def _storage_v1(payload: Mapping[str, str]) -> Dict[str, Any]:
    return {
        "storage": _drop_empty(
            {
                "aws_region": payload.get("storageRegion"),
                "bucket_name": payload.get("bucketName"),
            }
        )
    }


def _auth_legacy(payload: Mapping[str, str]) -> Dict[str, Any]:
    return _drop_empty(
        {
            "aws_cognito_region": payload.get("authRegion"),
            "aws_user_pools_id": payload.get("userPoolId"),
            "aws_user_pools_web_client_id": payload.get("webClientId"),
            "aws_cognito_identity_pool_id": payload.get("identityPoolId"),
        }
    )


def _graphql_legacy(payload: Mapping[str, str]) -> Dict[str, Any]:
    return _drop_empty(
        {
            "aws_appsync_graphqlEndpoint": payload.get("awsAppsyncApiEndpoint"),
            "aws_appsync_region": payload.get("awsAppsyncRegion"),
            "aws_appsync_apiKey": payload.get("awsAppsyncApiKey"),
            "aws_appsync_authenticationType": payload.get("awsAppsyncAuthenticationType"),
        }
    )


def _storage_legacy(payload: Mapping[str, str]) -> Dict[str, Any]:
    return _drop_empty(
        {
            "aws_user_files_s3_bucket_region": payload.get("storageRegion"),
            "aws_user_files_s3_bucket": payload.get("bucketName"),
        }
    )


def _custom(payload: Mapping[str, str]) -> Dict[str, Any]:
    custom_outputs = payload.get("customOutputs")
    if not custom_outputs:
        return {}
    try:
        parsed = json.loads(custom_outputs)
    except ValueError as ex:
        raise AmplifyUserError(
            "InvalidCustomOutputsError",
            message="The custom outputs of the backend are not valid JSON.",
            resolution="Check the values passed to backend.addOutput and redeploy the backend.",
            wrapped_from=ex,
        ) from ex
    return parsed if isinstance(parsed, dict) else {}


Contributor = Callable[[Mapping[str, str]], Dict[str, Any]]

_CONTRIBUTORS: Dict[ClientConfigVersion, Dict[str, Contributor]] = {
    ClientConfigVersion.V1: {
        AUTH_OUTPUT_KEY: _auth_v1,
        GRAPHQL_OUTPUT_KEY: _graphql_v1,
        STORAGE_OUTPUT_KEY: _storage_v1,
        CUSTOM_OUTPUT_KEY: _custom,
    },
    ClientConfigVersion.LEGACY: {
        AUTH_OUTPUT_KEY: _auth_legacy,
        GRAPHQL_OUTPUT_KEY: _graphql_legacy,
        STORAGE_OUTPUT_KEY: _storage_legacy,
        CUSTOM_OUTPUT_KEY: _custom,
    },
}


def _drop_empty(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value}


def _deep_merge(target: Dict[str, Any], source: Mapping[str, Any]) -> Dict[str, Any]:
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value
    return target


class ClientConfigGenerator:
    def generate(self, backend_output: BackendOutput, version: ClientConfigVersion) -> Dict[str, Any]:
        """
        Maps the known output groups to the client configuration of the requested version. Groups nobody
        contributes for are skipped.

        Parameters
        ----------
        backend_output: BackendOutput
            Output of the deployed backend
        version: ClientConfigVersion
            Version of the configuration to produce

        Returns
        -------
        Dict[str, Any]
            The client configuration
        """
        contributors = _CONTRIBUTORS[ClientConfigVersion(version)]
        config: Dict[str, Any] = {"version": "1"} if version == ClientConfigVersion.V1 else {}
        custom: Dict[str, Any] = {}
        for group_name, group in backend_output.items():
            contributor = contributors.get(group_name)
            if contributor is None:
                LOG.debug("No client config contributor for output group %s", group_name)
                continue
            contribution = contributor(group.payload)
            if group_name == CUSTOM_OUTPUT_KEY:
                custom = contribution
            else:
                _deep_merge(config, contribution)
        # custom outputs are applied last so they can override generated values
        return _deep_merge(config, custom)
