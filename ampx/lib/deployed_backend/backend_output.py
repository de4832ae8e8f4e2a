"""
Data types shared by the deployed backend output client
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

# Keys the Amplify constructs use when they register an output group in the stack metadata
AUTH_OUTPUT_KEY = "AWS::Amplify::Auth"
GRAPHQL_OUTPUT_KEY = "AWS::Amplify::GraphQL"
STORAGE_OUTPUT_KEY = "AWS::Amplify::Storage"
CUSTOM_OUTPUT_KEY = "AWS::Amplify::Custom"

DEPLOYMENT_TYPE_TAG_KEY = "amplify:deployment-type"
DEFAULT_DEPLOYMENT_TYPE = "sandbox"
IN_PROGRESS_STATUS_SUFFIX = "_IN_PROGRESS"


@dataclass(frozen=True)
class MetadataEntry:
    """
    Describes how one output group was written into the stack by its producer
    """

    version: str
    stack_output_names: Tuple[str, ...]


@dataclass(frozen=True)
class RawOutput:
    key: Optional[str]
    value: Optional[str]


@dataclass(frozen=True)
class StackTag:
    key: Optional[str]
    value: Optional[str]


@dataclass(frozen=True)
class StackDescription:
    """
    The parts of a DescribeStacks response the output resolution needs.

    ``outputs`` is None when the stack does not report any Outputs at all, which is different
    from a stack reporting an empty list.
    """

    outputs: Optional[List[RawOutput]]
    status: Optional[str]
    tags: List[StackTag] = field(default_factory=list)

    @property
    def is_in_progress(self) -> bool:
        return bool(self.status) and str(self.status).endswith(IN_PROGRESS_STATUS_SUFFIX)

    def get_tag_value(self, key: str) -> Optional[str]:
        for tag in self.tags:
            if tag.key == key:
                return tag.value
        return None


@dataclass(frozen=True)
class ResolvedOutputGroup:
    version: str
    payload: Dict[str, str]


# group name -> resolved group, in the order the groups appear in the stack metadata
BackendOutput = Dict[str, ResolvedOutputGroup]
