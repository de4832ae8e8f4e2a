"""
Rebuilds the backend output of an Amplify stack from its template metadata and its outputs.

The Amplify constructs record, in the template metadata, which stack outputs belong to which output group.
Once the stack is deployed the outputs hold the resolved values, so joining the two gives back the data the
constructs registered, with real resource values instead of CloudFormation references.
"""

import json
import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from ampx.lib.backend_identifier.stack_name_resolvers import MainStackNameResolver
from ampx.lib.deployed_backend.backend_output import (
    DEFAULT_DEPLOYMENT_TYPE,
    DEPLOYMENT_TYPE_TAG_KEY,
    BackendOutput,
    MetadataEntry,
    RawOutput,
    ResolvedOutputGroup,
)
from ampx.lib.deployed_backend.error_classifier import (
    DEFAULT_CLASSIFICATION_RULES,
    ClassificationRule,
    classify_provider_error,
)
from ampx.lib.deployed_backend.exceptions import (
    BackendOutputClientError,
    DeploymentInProgressError,
    MetadataRetrievalError,
    NoOutputsFoundError,
)
from ampx.lib.deployed_backend.metadata_schema import filter_backend_output_metadata, parse_backend_output_metadata
from ampx.lib.deployed_backend.stack_description_provider import StackDescriptionProvider

LOG = logging.getLogger(__name__)

T = TypeVar("T")


class BackendOutputResolver:
    """
    Resolves the backend output of one stack. Holds no state between calls, every call reads the stack again.
    """

    def __init__(
        self,
        stack_description_provider: StackDescriptionProvider,
        classification_rules: Sequence[ClassificationRule] = DEFAULT_CLASSIFICATION_RULES,
    ):
        self._provider = stack_description_provider
        self._classification_rules = classification_rules

    def resolve(self, stack_name: str) -> BackendOutput:
        """
        Reads the metadata and then the outputs of the stack and joins them

        Parameters
        ----------
        stack_name: str
            Name of the deployed stack

        Returns
        -------
        BackendOutput
            Output groups keyed by group name, in metadata order

        Raises
        ------
        BackendOutputClientError
            When the stack cannot be read or its content is not a backend output
        """
        metadata_entries = self._read_metadata_entries(stack_name)

        stack_description = self._call_provider(self._provider.get_stack_outputs_and_status, stack_name)

        # an in progress deployment may transiently have no outputs, report it as in progress
        if stack_description.is_in_progress:
            deployment_type = stack_description.get_tag_value(DEPLOYMENT_TYPE_TAG_KEY) or DEFAULT_DEPLOYMENT_TYPE
            raise DeploymentInProgressError(
                f"This {deployment_type} deployment is in progress. "
                "Re-run this command once the deployment completes."
            )
        if stack_description.outputs is None:
            raise NoOutputsFoundError("Stack outputs are undefined")

        stack_outputs = to_stack_output_record(stack_description.outputs)
        LOG.debug("Stack %s has %d usable outputs", stack_name, len(stack_outputs))

        return {
            group_name: resolve_output_group(entry, stack_outputs) for group_name, entry in metadata_entries.items()
        }

    def _read_metadata_entries(self, stack_name: str) -> Dict[str, MetadataEntry]:
        metadata_blob = self._call_provider(self._provider.get_stack_metadata_blob, stack_name)
        if not isinstance(metadata_blob, str):
            raise MetadataRetrievalError("Stack template metadata is not a string")

        try:
            metadata = json.loads(metadata_blob)
        except ValueError as ex:
            raise MetadataRetrievalError(f"Stack template metadata is not valid JSON: {ex}") from ex
        if not isinstance(metadata, dict):
            raise MetadataRetrievalError("Stack template metadata is not a JSON object")

        return parse_backend_output_metadata(filter_backend_output_metadata(metadata))

    def _call_provider(self, operation: Callable[[str], T], stack_name: str) -> T:
        try:
            return operation(stack_name)
        except BackendOutputClientError:
            raise
        except Exception as ex:
            classified = classify_provider_error(ex, stack_name, self._classification_rules)
            if classified is None:
                raise
            raise classified from ex


def to_stack_output_record(outputs: List[RawOutput]) -> Dict[str, str]:
    """
    Turns the list of stack outputs into a name -> value mapping, dropping entries without key or value
    """
    return {output.key: output.value for output in outputs if output.key and output.value}


def resolve_output_group(entry: MetadataEntry, stack_outputs: Mapping[str, str]) -> ResolvedOutputGroup:
    payload = {
        name: stack_outputs[name] for name in entry.stack_output_names if stack_outputs.get(name) not in (None, "")
    }
    return ResolvedOutputGroup(version=entry.version, payload=payload)


class StackMetadataBackendOutputRetrievalStrategy:
    """
    Gets Amplify backend outputs from stack metadata and outputs of the stack named by the resolver
    """

    def __init__(
        self,
        stack_description_provider: StackDescriptionProvider,
        stack_name_resolver: MainStackNameResolver,
        resolver: Optional[BackendOutputResolver] = None,
    ):
        self._stack_name_resolver = stack_name_resolver
        self._resolver = resolver or BackendOutputResolver(stack_description_provider)

    def fetch_backend_output(self) -> BackendOutput:
        stack_name = self._stack_name_resolver.resolve_main_stack_name()
        LOG.debug("Fetching backend output of stack %s", stack_name)
        return self._resolver.resolve(stack_name)

