"""
Deploys an Amplify backend by driving the CDK CLI
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from ampx.commands.exceptions import AmplifyUserError
from ampx.lib.backend_identifier.identifiers import BackendIdentifier
from ampx.lib.utils.subprocess_utils import SubprocessError, invoke_subprocess

LOG = logging.getLogger(__name__)

BACKEND_DIR_NAME = "amplify"
BACKEND_ENTRY_POINT = "amplify/backend.ts"

NAMESPACE_CONTEXT_KEY = "amplify-backend-namespace"
NAME_CONTEXT_KEY = "amplify-backend-name"
TYPE_CONTEXT_KEY = "amplify-backend-type"


class BackendDeployError(AmplifyUserError):
    pass


class BackendDeployer:
    """
    Synthesizes and deploys the backend defined in the project's amplify directory.

    Type checking of the backend sources runs first so broken sources fail fast instead of failing half way
    through a deployment.
    """

    def __init__(self, project_root: Optional[str] = None, runner: Callable[..., str] = invoke_subprocess):
        self._project_root = Path(project_root) if project_root else Path.cwd()
        self._runner = runner

    def deploy(self, backend_id: BackendIdentifier, validate_app_sources: bool = False) -> None:
        if validate_app_sources:
            self._validate_app_sources()

        command = ["npx", "cdk", "deploy"] + self._cdk_common_args(backend_id)
        LOG.debug("Deploying backend %s", backend_id)
        try:
            self._runner(command, cwd=str(self._project_root), stream_output=True)
        except SubprocessError as ex:
            raise BackendDeployError(
                "BackendDeployError",
                message=f"The deployment of {backend_id.name} failed.",
                resolution="Check the deployment output above for the failing resource, fix it and re-run the "
                "deployment.",
                wrapped_from=ex,
            ) from ex

    def _validate_app_sources(self) -> None:
        backend_dir = self._project_root / BACKEND_DIR_NAME
        if not (backend_dir / "tsconfig.json").is_file():
            LOG.debug("No tsconfig.json in %s, skipping type checks", backend_dir)
            return
        try:
            self._runner(
                ["npx", "tsc", "--noEmit", "--skipLibCheck", "--project", BACKEND_DIR_NAME],
                cwd=str(self._project_root),
            )
        except SubprocessError as ex:
            raise BackendDeployError(
                "SyntaxError",
                message="TypeScript validation check failed.",
                resolution="Fix the syntax and type errors in your backend definition.",
                wrapped_from=ex,
            ) from ex

    @staticmethod
    def _cdk_common_args(backend_id: BackendIdentifier) -> List[str]:
        return [
            "--ci",
            "--app",
            f"npx tsx {BACKEND_ENTRY_POINT}",
            "--all",
            "--require-approval",
            "never",
            "--context",
            f"{NAMESPACE_CONTEXT_KEY}={backend_id.namespace}",
            "--context",
            f"{NAME_CONTEXT_KEY}={backend_id.name}",
            "--context",
            f"{TYPE_CONTEXT_KEY}={backend_id.type}",
        ]
