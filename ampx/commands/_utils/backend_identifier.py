"""
Resolves the backend a command targets from its --stack, --app-id and --branch options
"""

from typing import Optional

from ampx.commands.exceptions import AmplifyUserError
from ampx.lib.backend_identifier.backend_identifier_resolver import BackendIdentifierResolver
from ampx.lib.backend_identifier.identifiers import DeployedBackendIdentifier


def resolve_backend_identifier_or_raise(
    stack: Optional[str] = None, app_id: Optional[str] = None, branch: Optional[str] = None
) -> DeployedBackendIdentifier:
    backend_identifier = BackendIdentifierResolver().resolve_deployed_backend_identifier(
        stack=stack, app_id=app_id, branch=branch
    )
    if not backend_identifier:
        raise AmplifyUserError(
            "BackendIdentifierResolverError",
            message="Could not resolve the backend identifier.",
            resolution="Ensure stack name or Amplify App ID and branch specified are correct and exists, then "
            "re-run this command.",
        )
    return backend_identifier
