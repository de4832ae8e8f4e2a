"""
Resolvers from a deployed backend identifier to the name of the backend's root stack
"""

import logging
from typing import Any, List

from typing_extensions import Protocol

from ampx.commands.exceptions import AmplifyUserError
from ampx.lib.backend_identifier.identifiers import (
    AppNameAndBranchBackendIdentifier,
    BackendIdentifier,
    DeployedBackendIdentifier,
    StackIdentifier,
    to_stack_name,
)
from ampx.lib.utils.boto_utils import BotoProviderType

LOG = logging.getLogger(__name__)


class MainStackNameResolver(Protocol):
    def resolve_main_stack_name(self) -> str:
        ...  # pragma: no cover


class StackIdentifierStackNameResolver:
    def __init__(self, stack_identifier: StackIdentifier):
        self._stack_identifier = stack_identifier

    def resolve_main_stack_name(self) -> str:
        return self._stack_identifier.stack_name


class BackendIdentifierStackNameResolver:
    def __init__(self, backend_identifier: BackendIdentifier):
        self._backend_identifier = backend_identifier

    def resolve_main_stack_name(self) -> str:
        return to_stack_name(self._backend_identifier)


class AppNameAndBranchStackNameResolver:
    """
    Looks up the Amplify app by name to find the namespace of the branch deployment
    """

    def __init__(self, amplify_client: Any, identifier: AppNameAndBranchBackendIdentifier, region: str = ""):
        self._amplify_client = amplify_client
        self._identifier = identifier
        self._region = region

    def resolve_main_stack_name(self) -> str:
        app_ids = self._find_app_ids(self._identifier.app_name)
        if not app_ids:
            raise AmplifyUserError(
                "AmplifyAppNotFoundError",
                message=f"No apps found with name {self._identifier.app_name} in region {self._region}.",
                resolution="Ensure that an Amplify app exists with the given name in the region.",
            )
        if len(app_ids) > 1:
            raise AmplifyUserError(
                "MultipleAmplifyAppsFoundError",
                message=f"Multiple apps found with name {self._identifier.app_name} in region {self._region}.",
                resolution="Use the Amplify App ID and branch to identify the backend instead.",
            )
        return to_stack_name(BackendIdentifier(namespace=app_ids[0], name=self._identifier.branch_name))

    def _find_app_ids(self, app_name: str) -> List[str]:
        paginator = self._amplify_client.get_paginator("list_apps")
        app_ids = []
        for page in paginator.paginate():
            for app in page.get("apps", []):
                if app.get("name") == app_name:
                    app_ids.append(app["appId"])
        LOG.debug("Found %d Amplify apps named %s", len(app_ids), app_name)
        return app_ids


def get_main_stack_name_resolver(
    identifier: DeployedBackendIdentifier, client_provider: BotoProviderType, region: str = ""
) -> MainStackNameResolver:
    if isinstance(identifier, StackIdentifier):
        return StackIdentifierStackNameResolver(identifier)
    if isinstance(identifier, BackendIdentifier):
        return BackendIdentifierStackNameResolver(identifier)
    return AppNameAndBranchStackNameResolver(client_provider("amplify"), identifier, region)
