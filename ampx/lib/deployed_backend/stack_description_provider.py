"""
Reads the template metadata and the outputs of a deployed CloudFormation stack
"""

import logging
from typing import Any, Optional

from typing_extensions import Protocol

from ampx.lib.deployed_backend.backend_output import RawOutput, StackDescription, StackTag
from ampx.lib.deployed_backend.exceptions import NoStackFoundError

LOG = logging.getLogger(__name__)


class StackDescriptionProvider(Protocol):
    def get_stack_metadata_blob(self, stack_name: str) -> Optional[str]:
        ...  # pragma: no cover

    def get_stack_outputs_and_status(self, stack_name: str) -> StackDescription:
        ...  # pragma: no cover


class CloudFormationStackDescriptionProvider:
    """
    StackDescriptionProvider backed by a boto3 CloudFormation client. SDK errors are not handled here, they
    are classified by the caller.
    """

    def __init__(self, cloudformation_client: Any):
        self._cloudformation_client = cloudformation_client

    def get_stack_metadata_blob(self, stack_name: str) -> Optional[str]:
        # GetTemplateSummary returns the template metadata as a JSON string
        LOG.debug("Fetching template summary of stack %s", stack_name)
        response = self._cloudformation_client.get_template_summary(StackName=stack_name)
        metadata = response.get("Metadata")
        return metadata if isinstance(metadata, str) else None

    def get_stack_outputs_and_status(self, stack_name: str) -> StackDescription:
        LOG.debug("Describing stack %s", stack_name)
        response = self._cloudformation_client.describe_stacks(StackName=stack_name)
        stacks = response.get("Stacks") or []
        if not stacks:
            raise NoStackFoundError(f"Stack with id {stack_name} does not exist")

        stack = stacks[0]
        outputs = None
        if "Outputs" in stack and stack["Outputs"] is not None:
            outputs = [
                RawOutput(key=output.get("OutputKey"), value=output.get("OutputValue")) for output in stack["Outputs"]
            ]
        tags = [StackTag(key=tag.get("Key"), value=tag.get("Value")) for tag in stack.get("Tags") or []]
        return StackDescription(outputs=outputs, status=stack.get("StackStatus"), tags=tags)
