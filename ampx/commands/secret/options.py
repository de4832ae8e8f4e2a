"""
Options shared by the secret commands
"""

from typing import Optional

import click

from ampx.lib.backend_identifier.identifiers import BackendIdentifier
from ampx.lib.secret.secret import SecretTarget


def secret_target_options(f):
    """
    Adds --app-id and --branch to a command
    """
    f = click.option(
        "--branch", help="A git branch of the Amplify project. Omit it to target the secrets shared by the app."
    )(f)
    f = click.option("--app-id", required=True, help="The Amplify App ID of the project.")(f)
    return f


def get_secret_target(app_id: str, branch: Optional[str]) -> SecretTarget:
    if branch:
        return BackendIdentifier(namespace=app_id, name=branch, type="branch")
    return app_id
