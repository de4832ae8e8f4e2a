"""
Exceptions raised while reading the outputs of a deployed backend
"""

from enum import Enum
from typing import List, Optional, Sequence


class BackendOutputClientErrorType(str, Enum):
    METADATA_RETRIEVAL_ERROR = "MetadataRetrievalError"
    SCHEMA_VALIDATION_ERROR = "SchemaValidationError"
    NO_STACK_FOUND = "NoStackFound"
    CREDENTIALS_ERROR = "CredentialsError"
    ACCESS_DENIED = "AccessDenied"
    DEPLOYMENT_IN_PROGRESS = "DeploymentInProgressError"
    NO_OUTPUTS_FOUND = "NoOutputsFoundError"


class BackendOutputClientError(Exception):
    """
    Base class for every failure of the backend output client. Callers branch on ``code`` (or on the
    concrete subclass) without depending on boto exception types.
    """

    code: BackendOutputClientErrorType

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MetadataRetrievalError(BackendOutputClientError):
    code = BackendOutputClientErrorType.METADATA_RETRIEVAL_ERROR


class SchemaValidationError(BackendOutputClientError):
    code = BackendOutputClientErrorType.SCHEMA_VALIDATION_ERROR

    def __init__(self, violations: Sequence[str], message: Optional[str] = None):
        self.violations: List[str] = list(violations)
        if message is None:
            message = "Stack metadata does not match the backend output schema: " + "; ".join(self.violations)
        super().__init__(message)


class NoStackFoundError(BackendOutputClientError):
    code = BackendOutputClientErrorType.NO_STACK_FOUND


class CredentialsError(BackendOutputClientError):
    code = BackendOutputClientErrorType.CREDENTIALS_ERROR


class AccessDeniedError(BackendOutputClientError):
    code = BackendOutputClientErrorType.ACCESS_DENIED


class DeploymentInProgressError(BackendOutputClientError):
    code = BackendOutputClientErrorType.DEPLOYMENT_IN_PROGRESS


class NoOutputsFoundError(BackendOutputClientError):
    code = BackendOutputClientErrorType.NO_OUTPUTS_FOUND
