"""
Utils for invoking subprocess calls
"""

import logging
import os
import platform
from subprocess import PIPE, STDOUT, Popen
from typing import AnyStr, List, Mapping, Optional

import click

from ampx.commands.exceptions import UserException

IS_WINDOWS = platform.system().lower() == "windows"
LOG = logging.getLogger(__name__)

# number of trailing output lines repeated in the error message of a failed process
ERROR_OUTPUT_TAIL_LINES = 20


class SubprocessError(UserException):
    def __init__(self, command: List[str], message: str, output: str = ""):
        self.command = command
        self.output = output
        super().__init__(message=message)


def _resolve_executable(args: List[str]) -> List[str]:
    # node tooling ships .cmd shims on Windows
    if IS_WINDOWS and args and args[0] in ("npm", "npx", "yarn", "pnpm"):
        return [f"{args[0]}.cmd"] + args[1:]
    return args


def invoke_subprocess(
    args: List[str],
    cwd: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    stream_output: bool = False,
) -> str:
    """
    Runs a command and waits for it. Output lines are echoed when ``stream_output`` is set, or logged at
    debug level otherwise.

    Parameters
    ----------
    args: List[str]
        The command and its arguments
    cwd: Optional[str]
        Working directory of the process
    env: Optional[Mapping[str, str]]
        Variables added to the current environment
    stream_output: bool
        Echo the output of the process while it runs

    Returns
    -------
    str
        Combined stdout and stderr of the process

    Raises
    ------
    SubprocessError
        When the process cannot be started or exits with a non zero code
    """
    command = _resolve_executable(args)
    process_env = dict(os.environ, **env) if env else None
    LOG.debug("Running command: %s", " ".join(command))

    output_lines: List[str] = []
    try:
        with Popen(command, cwd=cwd, env=process_env, stdout=PIPE, stderr=STDOUT) as process:
            if process.stdout:
                for line in process.stdout:
                    decoded_line = _check_and_process_bytes(line)
                    output_lines.append(decoded_line)
                    if stream_output:
                        click.echo(decoded_line)
                    else:
                        LOG.debug(decoded_line)
            return_code = process.wait()
    except (OSError, ValueError) as ex:
        raise SubprocessError(command, f"Failed to run {' '.join(command)}. {ex}") from ex

    output = os.linesep.join(output_lines)
    if return_code:
        tail = os.linesep.join(output_lines[-ERROR_OUTPUT_TAIL_LINES:])
        raise SubprocessError(
            command,
            f"The process {' '.join(command)} returned a non-zero exit code {return_code}.{os.linesep}{tail}",
            output,
        )
    return output


def _check_and_process_bytes(check_value: AnyStr) -> str:
    if isinstance(check_value, bytes):
        return check_value.decode("utf-8", errors="replace").rstrip()
    return check_value.rstrip()
