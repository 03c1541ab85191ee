"""Force-kill processes behind a discovered dev server"""

import logging
from collections.abc import Iterable

from .commands import run_command
from .enumerators import MAX_PID
from .errors import CommandError
from .models import TerminationResult
from .platform import IS_WINDOWS

logger = logging.getLogger("devscan.terminator")


def kill_command(pid: int) -> tuple[list[str], str]:
    """Build the non-graceful kill command for this OS as (args, operation)"""
    if IS_WINDOWS:
        return ["taskkill", "/F", "/PID", str(pid)], "taskkill"
    return ["kill", "-9", str(pid)], "kill"


def kill_pid(pid: int) -> TerminationResult:
    """Send an uncatchable kill to one process."""
    if not 0 < pid <= MAX_PID:
        return TerminationResult(pid=pid, success=False, error="invalid PID")

    args, operation = kill_command(pid)
    try:
        result = run_command(args, operation)
    except CommandError as exc:
        return TerminationResult(pid=pid, success=False, error=exc.reason)

    if result.returncode != 0:
        reason = (result.stderr or result.stdout).strip() or f"exit status {result.returncode}"
        return TerminationResult(pid=pid, success=False, error=reason)
    return TerminationResult(pid=pid, success=True)


def terminate(pids: Iterable[int]) -> list[TerminationResult]:
    """
    Kill each pid in order, stopping at the first failure.

    Processes killed before the failure stay killed. Callers re-scan to see
    what is left.

    Returns:
        Results for every attempted pid; if a kill failed it is the last entry
    """
    results = []
    for pid in pids:
        outcome = kill_pid(pid)
        results.append(outcome)
        if not outcome.success:
            logger.warning("Failed to kill PID %d: %s", pid, outcome.error)
            break
        logger.info("Killed PID %d", pid)
    return results
