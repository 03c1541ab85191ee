"""Exception types raised by devscan"""


class DevscanError(Exception):
    """Base class for all devscan errors."""


class ConfigError(DevscanError):
    """Settings file or environment variable holds an invalid value."""


class CommandError(DevscanError):
    """An external command could not be launched or did not finish in time."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to execute {command}: {reason}")


class EnumerationError(DevscanError):
    """The OS listener/process enumeration mechanism failed as a whole."""


class TerminationError(DevscanError):
    """A process could not be killed."""

    def __init__(self, pid: int, reason: str):
        self.pid = pid
        self.reason = reason
        super().__init__(f"Failed to kill PID {pid}: {reason}")
