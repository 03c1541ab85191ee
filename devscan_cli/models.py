"""
Data types shared by the scan pipeline.

RawListener and LabeledListener only live for one scan pass. DevServer is
what callers get back; TerminationResult is the per-pid outcome of a kill.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RawListener:
    """One listening socket as reported by the OS."""

    port: int
    process_name: str
    pid: int


@dataclass(frozen=True)
class LabeledListener:
    """A raw listener with its service label attached."""

    port: int
    process_name: str
    pid: int
    service: str


@dataclass(frozen=True)
class DevServer:
    """A development server discovered on a local port."""

    port: int
    service: str
    process_name: str
    pid: int
    pids: tuple[int, ...]

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}"

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation"""
        return {
            "port": self.port,
            "service": self.service,
            "processName": self.process_name,
            "pid": self.pid,
            "pids": list(self.pids),
            "url": self.url,
        }


@dataclass(frozen=True)
class TerminationResult:
    """Outcome of a single kill request."""

    pid: int
    success: bool
    error: str | None = None
