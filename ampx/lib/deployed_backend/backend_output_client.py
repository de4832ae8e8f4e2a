"""
Entry point for reading the outputs of a deployed backend
"""

import logging
from typing import Optional

from ampx.lib.backend_identifier.identifiers import DeployedBackendIdentifier
from ampx.lib.backend_identifier.stack_name_resolvers import get_main_stack_name_resolver
from ampx.lib.deployed_backend.backend_output import BackendOutput
from ampx.lib.deployed_backend.stack_description_provider import CloudFormationStackDescriptionProvider
from ampx.lib.deployed_backend.stack_metadata_output_retrieval_strategy import (
    StackMetadataBackendOutputRetrievalStrategy,
)
from ampx.lib.utils.boto_utils import BotoProviderType, get_boto_client_provider_with_config

LOG = logging.getLogger(__name__)


class BackendOutputClient:
    def __init__(self, client_provider: BotoProviderType, region: Optional[str] = None):
        self._client_provider = client_provider
        self._region = region or ""

    def get_output(self, backend_identifier: DeployedBackendIdentifier) -> BackendOutput:
        """
        Reads the backend output of the stack the identifier points to

        Raises
        ------
        BackendOutputClientError
            When the stack cannot be read or does not hold a backend output
        """
        LOG.debug("Getting backend output for %s", backend_identifier)
        strategy = StackMetadataBackendOutputRetrievalStrategy(
            CloudFormationStackDescriptionProvider(self._client_provider("cloudformation")),
            get_main_stack_name_resolver(backend_identifier, self._client_provider, self._region),
        )
        return strategy.fetch_backend_output()


class BackendOutputClientFactory:
    @staticmethod
    def get_instance(region: Optional[str] = None, profile: Optional[str] = None) -> BackendOutputClient:
        return BackendOutputClient(get_boto_client_provider_with_config(region=region, profile=profile), region)
