"""
Identifiers of deployed backends and their conversion to CloudFormation stack names
"""

import hashlib
import re
from dataclasses import dataclass
from typing import Optional, Union

BRANCH_DEPLOYMENT_TYPE = "branch"
SANDBOX_DEPLOYMENT_TYPE = "sandbox"
DEPLOYMENT_TYPES = (BRANCH_DEPLOYMENT_TYPE, SANDBOX_DEPLOYMENT_TYPE)

STACK_NAME_PREFIX = "amplify"
STACK_NAME_LENGTH_LIMIT = 128
HASH_LENGTH = 10
# the name is truncated so there is always room left for the namespace
NAME_MAX_LENGTH = 50
# separators between prefix, namespace, name, type and hash
NUM_DASHES = 4

_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class BackendIdentifier:
    """
    Identifies a backend by the namespace it belongs to (the Amplify app id for branch deployments),
    its name (the branch name) and its deployment type
    """

    namespace: str
    name: str
    type: str = BRANCH_DEPLOYMENT_TYPE


@dataclass(frozen=True)
class StackIdentifier:
    stack_name: str


@dataclass(frozen=True)
class AppNameAndBranchBackendIdentifier:
    app_name: str
    branch_name: str


DeployedBackendIdentifier = Union[BackendIdentifier, StackIdentifier, AppNameAndBranchBackendIdentifier]


def sanitize_chars(value: str) -> str:
    return _DISALLOWED_CHARS.sub("", value)


def get_backend_hash(backend_id: BackendIdentifier) -> str:
    digest = hashlib.sha512()
    digest.update(backend_id.namespace.encode("utf-8"))
    digest.update(backend_id.name.encode("utf-8"))
    return digest.hexdigest()[:HASH_LENGTH]


def to_stack_name(backend_id: BackendIdentifier) -> str:
    """
    Builds the name of the root stack of a backend: amplify-{namespace}-{name}-{type}-{hash}

    Namespace and name are stripped of anything but letters and digits, the name is cut to 50 characters and the
    namespace to whatever keeps the whole name within the CloudFormation limit of 128 characters. The hash is
    computed from the untruncated values so two long names sharing a prefix still get distinct stacks.
    """
    name = sanitize_chars(backend_id.name)[:NAME_MAX_LENGTH]
    namespace_max_length = (
        STACK_NAME_LENGTH_LIMIT - len(STACK_NAME_PREFIX) - len(backend_id.type) - len(name) - NUM_DASHES - HASH_LENGTH
    )
    namespace = sanitize_chars(backend_id.namespace)[: namespace_max_length - 1]
    return "-".join([STACK_NAME_PREFIX, namespace, name, backend_id.type, get_backend_hash(backend_id)])


def from_stack_name(stack_name: Optional[str]) -> Optional[BackendIdentifier]:
    """
    Reverse of ``to_stack_name``. Returns None when the stack name does not follow the Amplify convention.
    Namespace and name come back in their sanitized form.
    """
    if not stack_name:
        return None
    parts = stack_name.split("-")
    if len(parts) != NUM_DASHES + 1 or parts[0] != STACK_NAME_PREFIX:
        return None
    _, namespace, name, deployment_type, backend_hash = parts
    if deployment_type not in DEPLOYMENT_TYPES or len(backend_hash) != HASH_LENGTH:
        return None
    return BackendIdentifier(namespace=namespace, name=name, type=deployment_type)
