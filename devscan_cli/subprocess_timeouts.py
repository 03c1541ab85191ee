"""
Subprocess timeout enforcement.

Every external command devscan runs (socket enumeration, process lookup,
process termination) goes through these constants so that a hung OS tool
cannot block a scan forever.
"""

# Timeout constants (in seconds)

# Short operations (< 5 seconds)
TIMEOUT_QUICK = 5
"""Quick operations: single process lookups, kill signals."""

# Standard operations (< 30 seconds)
TIMEOUT_STANDARD = 30
"""Standard operations: full socket table enumeration."""


# Operation-specific timeouts
TIMEOUTS = {
    # Listener enumeration
    "lsof": TIMEOUT_STANDARD,
    "netstat": TIMEOUT_STANDARD,

    # Process table lookups
    "tasklist": TIMEOUT_QUICK,

    # Termination
    "kill": TIMEOUT_QUICK,
    "taskkill": TIMEOUT_QUICK,
}


def get_timeout(operation: str, default: int = TIMEOUT_STANDARD) -> int:
    """
    Get the recommended timeout for a specific operation.

    Args:
        operation: Operation name (e.g., "lsof", "taskkill")
        default: Default timeout if operation not found

    Returns:
        Timeout in seconds

    Examples:
        >>> get_timeout("lsof")
        30
        >>> get_timeout("kill")
        5
        >>> get_timeout("unknown_operation")
        30
    """
    return TIMEOUTS.get(operation, default)
