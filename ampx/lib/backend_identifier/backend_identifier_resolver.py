"""
Resolves the backend identifier from the options of a command
"""

from typing import Optional

from ampx.lib.backend_identifier.identifiers import (
    AppNameAndBranchBackendIdentifier,
    BackendIdentifier,
    DeployedBackendIdentifier,
    StackIdentifier,
)


class BackendIdentifierResolver:
    def resolve_deployed_backend_identifier(
        self,
        stack: Optional[str] = None,
        app_id: Optional[str] = None,
        branch: Optional[str] = None,
        app_name: Optional[str] = None,
    ) -> Optional[DeployedBackendIdentifier]:
        """
        Picks the identifier matching the options that were given. A stack name wins, then an app id
        with a branch, then an app name with a branch.

        Returns
        -------
        Optional[DeployedBackendIdentifier]
            None when the options do not identify a backend
        """
        if stack:
            return StackIdentifier(stack_name=stack)
        if app_id and branch:
            return BackendIdentifier(namespace=app_id, name=branch)
        if app_name and branch:
            return AppNameAndBranchBackendIdentifier(app_name=app_name, branch_name=branch)
        return None
