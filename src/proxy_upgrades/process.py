"""External command execution for proxy-upgrades library."""

import os
import subprocess
from typing import Callable, Optional, Sequence

from .constants import BASH_PATH_ENV, DEFAULT_BASH_PATH
from .exceptions import ToolInvocationError
from .log import get_logger
from .types import ExternalProcessResult

logger = get_logger(__name__)

Runner = Callable[[Sequence[str]], ExternalProcessResult]


def get_shell_path(shell_path: Optional[str] = None) -> str:
    """
    Get the shell used to run commands.

    Args:
        shell_path: Explicit shell path (defaults to $OPENZEPPELIN_BASH_PATH, then "bash")
    """
    if shell_path is None:
        shell_path = os.environ.get(BASH_PATH_ENV, DEFAULT_BASH_PATH)
    return shell_path


def _invocation_error(argv: Sequence[str], detail: str) -> ToolInvocationError:
    return ToolInvocationError(
        f"Failed to run command with arguments {list(argv)}: {detail}. "
        f"Make sure the shell is installed and on your PATH. If your shell is not "
        f"available as '{DEFAULT_BASH_PATH}' (for example on Windows), set the "
        f"{BASH_PATH_ENV} environment variable to the full path of the shell "
        "executable, e.g. C:\\Program Files\\Git\\bin\\bash"
    )


def run(argv: Sequence[str]) -> ExternalProcessResult:
    """
    Run a command and capture its exit code and output.

    A non-zero exit is returned as data unless the command produced no output
    at all, which means it could not be run.

    Args:
        argv: Command and arguments

    Returns:
        ExternalProcessResult with exit code, stdout and stderr

    Raises:
        ToolInvocationError: If the command could not be started, or exited
            non-zero without writing to stdout or stderr
    """
    logger.debug("running_command", argv=list(argv))
    try:
        completed = subprocess.run(list(argv), capture_output=True)
    except OSError as e:
        raise _invocation_error(argv, str(e)) from e

    result = ExternalProcessResult(
        exit_code=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )

    if result.exit_code != 0 and not result.stdout and not result.stderr:
        raise _invocation_error(argv, f"exit code {result.exit_code} with no output")

    return result


def run_shell(argv: Sequence[str], shell_path: Optional[str] = None) -> ExternalProcessResult:
    """
    Run a command line through the configured shell.

    Arguments are joined with spaces into a single command string, so callers
    must quote arguments that need it.

    Args:
        argv: Command line words
        shell_path: Explicit shell path (defaults to $OPENZEPPELIN_BASH_PATH, then "bash")

    Raises:
        ToolInvocationError: If the shell could not be run
    """
    return run([get_shell_path(shell_path), "-c", " ".join(argv)])
