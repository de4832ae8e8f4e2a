"""
Translates errors raised by the AWS SDK into the backend output client error taxonomy.

Rules are evaluated in order and the first matching rule wins. Credential and permission problems are
checked before the stack lookup rule since an expired token can also surface as a failed lookup.
"""

import logging
from typing import Callable, NamedTuple, Optional, Sequence

from botocore.exceptions import ClientError, CredentialRetrievalError, NoCredentialsError, PartialCredentialsError

from ampx.lib.deployed_backend.exceptions import (
    AccessDeniedError,
    BackendOutputClientError,
    CredentialsError,
    NoStackFoundError,
)
from ampx.lib.utils.boto_utils import get_client_error_code, get_client_error_message

LOG = logging.getLogger(__name__)

CREDENTIALS_ERROR_CODES = frozenset(
    ["ExpiredToken", "ExpiredTokenException", "InvalidClientTokenId", "UnrecognizedClientException"]
)
ACCESS_DENIED_ERROR_CODES = frozenset(["AccessDenied", "AccessDeniedException"])

# CloudFormation reports a missing stack as a generic ValidationError, only the message tells them apart
STACK_NOT_FOUND_ERROR_CODE = "ValidationError"
STACK_NOT_FOUND_MESSAGE_PREFIX = "Stack with id"
STACK_NOT_FOUND_MESSAGE_SUFFIX = "does not exist"


class ClassificationRule(NamedTuple):
    """
    Pairs a predicate over the raised error with the builder of the classified error
    """

    matches: Callable[[Exception], bool]
    build: Callable[[Exception, str], BackendOutputClientError]


def _is_credentials_error(error: Exception) -> bool:
    if isinstance(error, (NoCredentialsError, PartialCredentialsError, CredentialRetrievalError)):
        return True
    return isinstance(error, ClientError) and get_client_error_code(error) in CREDENTIALS_ERROR_CODES


def _is_access_denied_error(error: Exception) -> bool:
    return isinstance(error, ClientError) and get_client_error_code(error) in ACCESS_DENIED_ERROR_CODES


def _is_stack_not_found_error(error: Exception) -> bool:
    if not isinstance(error, ClientError):
        return False
    code = get_client_error_code(error)
    if code and code != STACK_NOT_FOUND_ERROR_CODE:
        return False
    message = get_client_error_message(error) or ""
    return message.startswith(STACK_NOT_FOUND_MESSAGE_PREFIX) and message.endswith(STACK_NOT_FOUND_MESSAGE_SUFFIX)


def _error_message(error: Exception) -> str:
    if isinstance(error, ClientError):
        return get_client_error_message(error) or str(error)
    return str(error)


DEFAULT_CLASSIFICATION_RULES: Sequence[ClassificationRule] = (
    ClassificationRule(_is_credentials_error, lambda error, _: CredentialsError(_error_message(error))),
    ClassificationRule(_is_access_denied_error, lambda error, _: AccessDeniedError(_error_message(error))),
    ClassificationRule(
        _is_stack_not_found_error,
        lambda _, stack_name: NoStackFoundError(f"Stack with id {stack_name} does not exist"),
    ),
)


def classify_provider_error(
    error: Exception, stack_name: str, rules: Sequence[ClassificationRule] = DEFAULT_CLASSIFICATION_RULES
) -> Optional[BackendOutputClientError]:
    """
    Finds the taxonomy error for an SDK error

    Parameters
    ----------
    error: Exception
        Error raised while talking to the service
    stack_name: str
        Name of the stack that was being read, used in the classified message
    rules: Sequence[ClassificationRule]
        Ordered rules, the first match wins

    Returns
    -------
    Optional[BackendOutputClientError]
        The classified error, or None when no rule matches and the original error should be re-raised
    """
    for rule in rules:
        if rule.matches(error):
            classified = rule.build(error, stack_name)
            LOG.debug("Classified %s as %s", type(error).__name__, classified.code.value)
            return classified
    return None
