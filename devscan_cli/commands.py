"""Run external commands with enforced timeouts"""

import logging
import subprocess

from .errors import CommandError
from .subprocess_timeouts import get_timeout

logger = logging.getLogger("devscan.commands")


def run_command(args: list[str], operation: str | None = None) -> subprocess.CompletedProcess:
    """
    Run a command and capture its output.

    The exit status is not checked here; callers decide what a non-zero
    status means for their operation.

    Args:
        args: Command and arguments
        operation: Key into TIMEOUTS (defaults to the command name)

    Returns:
        CompletedProcess with text stdout/stderr

    Raises:
        CommandError: If the command cannot be launched or times out
    """
    operation = operation or args[0]
    timeout = get_timeout(operation)
    logger.debug("Running %s (timeout=%ss)", " ".join(args), timeout)
    try:
        return subprocess.run(
            args,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandError(args[0], f"timed out after {timeout}s") from exc
    except OSError as exc:
        raise CommandError(args[0], str(exc)) from exc
