"""
Decorator converting AWS and backend output failures raised by a command into user errors
"""

from functools import wraps
from typing import Any, Callable, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError, NoRegionError

from ampx.commands._utils.backend_output_errors import handle_backend_output_client_error
from ampx.commands.exceptions import AWSServiceClientError, RegionError, SDKError
from ampx.lib.deployed_backend.exceptions import BackendOutputClientError

ExceptionHandler = Callable[[Any], None]

CREDENTIALS_DOCS_URL = "https://docs.aws.amazon.com/cli/latest/userguide/cli-configure-files.html"


def _handle_no_region_error(ex: NoRegionError) -> None:
    raise RegionError(
        "The AWS region is not set. Pass --region or set a default region in your AWS configuration.",
        wrapped_from=ex,
    ) from ex


def _handle_client_errors(ex: ClientError) -> None:
    message = f"{ex}\n\nFor more information please visit: {CREDENTIALS_DOCS_URL}"
    raise AWSServiceClientError(message, wrapped_from=ex) from ex


def _handle_botocore_errors(ex: BotoCoreError) -> None:
    raise SDKError(str(ex), wrapped_from=ex) from ex


# the first entry the exception is an instance of wins
DEFAULT_EXCEPTION_HANDLER_MAPPING: Dict[Any, ExceptionHandler] = {
    BackendOutputClientError: handle_backend_output_client_error,
    NoRegionError: _handle_no_region_error,
    ClientError: _handle_client_errors,
    BotoCoreError: _handle_botocore_errors,
}


def get_handler(exception: Exception, mapping: Dict[Any, ExceptionHandler]) -> Optional[ExceptionHandler]:
    return next((handler for handled, handler in mapping.items() if isinstance(exception, handled)), None)


def command_exception_handler(f=None, additional_mapping: Optional[Dict[Any, ExceptionHandler]] = None):
    """
    Wraps a command so the exceptions listed in the default mapping (and in ``additional_mapping``, which is
    consulted first) are converted into user errors. Exceptions without a handler propagate unchanged.

        @command_exception_handler
        def command(...)

        @command_exception_handler(additional_mapping={KeyError: handle_key_error})
        def command(...)
    """

    def decorator_command_exception_handler(func):
        @wraps(func)
        def wrapper_command_exception_handler(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as ex:
                for mapping in (additional_mapping or {}, DEFAULT_EXCEPTION_HANDLER_MAPPING):
                    handler = get_handler(ex, mapping)
                    if handler:
                        handler(ex)
                raise

        return wrapper_command_exception_handler

    if f is None:
        return decorator_command_exception_handler
    return decorator_command_exception_handler(f)
