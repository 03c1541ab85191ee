"""
Listener enumeration.

Produces RawListener records for TCP sockets in the LISTEN state together
with the owning pid and process name. One backend is selected per process
at start-up by select_enumerator(); everything downstream is OS-agnostic.

Backends:
- lsof (macOS/Linux): ``lsof -iTCP -sTCP:LISTEN -P -n``
- netstat (Windows): ``netstat -ano`` plus ``tasklist`` for process names
- psutil (any OS): native socket table via psutil.net_connections()

Malformed lines are dropped one by one; only a failure of the OS tool as a
whole raises EnumerationError.
"""

import csv
import ipaddress
import logging

import psutil

from .commands import run_command
from .errors import CommandError, EnumerationError
from .models import RawListener
from .platform import IS_WINDOWS, has_command

logger = logging.getLogger("devscan.enumerators")

BACKENDS = ("auto", "lsof", "netstat", "psutil")

LSOF_ARGS = ["lsof", "-iTCP", "-sTCP:LISTEN", "-P", "-n"]
NETSTAT_ARGS = ["netstat", "-ano"]

# COMMAND PID USER FD TYPE DEVICE SIZE/OFF NODE NAME (LISTEN)
LSOF_MIN_FIELDS = 10
LOCAL_ADDRESS_MARKERS = ("*:", "localhost:", "[::1]:", "127.0.0.1:")
IPV6_LOOPBACK_PREFIX = "[::1]:"

MAX_PORT = 65535
MAX_PID = 2**32 - 1


def _parse_uint(text: str, maximum: int) -> int | None:
    """Parse an ASCII decimal in 0..maximum, None otherwise"""
    text = text.strip()
    if not (text.isascii() and text.isdecimal()):
        return None
    value = int(text)
    if value > maximum:
        return None
    return value


def parse_port(text: str) -> int | None:
    """Parse a TCP port number, returning None if it is not a valid uint16"""
    return _parse_uint(text, MAX_PORT)


def parse_pid(text: str) -> int | None:
    """Parse a process id, returning None unless it is a positive uint32"""
    pid = _parse_uint(text, MAX_PID)
    if not pid:
        return None
    return pid


def _lsof_address_port(parts: list[str]) -> int | None:
    """Find the local address field of an lsof line and extract its port"""
    for part in parts:
        if any(marker in part for marker in LOCAL_ADDRESS_MARKERS):
            if IPV6_LOOPBACK_PREFIX in part:
                _, _, port_text = part.partition(IPV6_LOOPBACK_PREFIX)
            else:
                port_text = part.rsplit(":", 1)[-1]
            return parse_port(port_text)
    return None


def parse_lsof_output(output: str) -> list[RawListener]:
    """
    Parse ``lsof -iTCP -sTCP:LISTEN -P -n`` output.

    Args:
        output: Raw stdout including the header line

    Returns:
        One RawListener per well-formed line bound to a local or wildcard address
    """
    listeners = []
    for line in output.splitlines()[1:]:
        parts = line.split()
        if len(parts) < LSOF_MIN_FIELDS:
            logger.debug("Skipping short lsof line: %r", line)
            continue

        process_name = parts[0]
        pid = parse_pid(parts[1])
        if pid is None:
            logger.debug("Skipping lsof line with invalid pid: %r", line)
            continue

        port = _lsof_address_port(parts)
        if port is None:
            logger.debug("Skipping lsof line without local port: %r", line)
            continue

        listeners.append(RawListener(port=port, process_name=process_name, pid=pid))
    return listeners


def parse_netstat_output(output: str) -> list[tuple[int, int]]:
    """
    Parse Windows ``netstat -ano`` output.

    Returns:
        (port, pid) pairs for TCP sockets in the LISTENING state
    """
    pairs = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 5 or parts[0] != "TCP":
            continue
        if parts[3] != "LISTENING":
            continue

        port = parse_port(parts[1].rsplit(":", 1)[-1])
        pid = parse_pid(parts[4])
        if port is None or pid is None:
            logger.debug("Skipping netstat line: %r", line)
            continue
        pairs.append((port, pid))
    return pairs


def parse_tasklist_output(output: str, pid: int) -> str | None:
    """
    Extract the image name for a pid from ``tasklist /FO CSV /NH`` output.

    tasklist prints an INFO line instead of CSV when no process matches,
    so only rows whose pid column equals the requested pid are accepted.
    """
    for row in csv.reader(output.splitlines()):
        if len(row) >= 2 and row[1].strip() == str(pid):
            name = row[0].strip()
            return name or None
    return None


def is_local_address(ip: str) -> bool:
    """Check whether an IP is loopback or a wildcard bind address"""
    try:
        address = ipaddress.ip_address(ip.split("%", 1)[0])
    except ValueError:
        return ip == "localhost"
    return address.is_loopback or address.is_unspecified


class ListenerEnumerator:
    """Base class for OS-specific listener enumeration backends."""

    name = "base"

    def enumerate(self) -> list[RawListener]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} backend={self.name}>"


class LsofEnumerator(ListenerEnumerator):
    """Enumerate listeners with lsof (macOS and Linux)."""

    name = "lsof"

    def enumerate(self) -> list[RawListener]:
        try:
            result = run_command(LSOF_ARGS, "lsof")
        except CommandError as exc:
            raise EnumerationError(str(exc)) from exc

        # lsof exits 1 both when nothing matches (no output at all) and when it
        # hit per-filesystem warnings while still listing sockets
        if result.returncode != 0:
            stderr = result.stderr.strip()
            if not result.stdout.strip():
                if stderr:
                    raise EnumerationError(f"lsof command failed: {stderr}")
                return []
            logger.debug("lsof exited with %d: %s", result.returncode, stderr)

        listeners = parse_lsof_output(result.stdout)
        logger.debug("lsof reported %d local listener(s)", len(listeners))
        return listeners


class NetstatEnumerator(ListenerEnumerator):
    """Enumerate listeners with netstat and resolve names with tasklist (Windows)."""

    name = "netstat"

    def process_name(self, pid: int) -> str | None:
        """Look up a process name by pid, None if it cannot be resolved"""
        try:
            result = run_command(["tasklist", "/FI", f"PID eq {pid}", "/FO", "CSV", "/NH"], "tasklist")
        except CommandError as exc:
            logger.debug("tasklist lookup for pid %d failed: %s", pid, exc)
            return None
        if result.returncode != 0:
            logger.debug("tasklist exited with %d for pid %d", result.returncode, pid)
            return None
        return parse_tasklist_output(result.stdout, pid)

    def enumerate(self) -> list[RawListener]:
        try:
            result = run_command(NETSTAT_ARGS, "netstat")
        except CommandError as exc:
            raise EnumerationError(str(exc)) from exc

        if result.returncode != 0:
            raise EnumerationError("netstat command failed")

        names: dict[int, str | None] = {}
        listeners = []
        for port, pid in parse_netstat_output(result.stdout):
            if pid not in names:
                names[pid] = self.process_name(pid)
            name = names[pid]
            if name is None:
                logger.debug("Skipping port %d: no process name for pid %d", port, pid)
                continue
            listeners.append(RawListener(port=port, process_name=name, pid=pid))
        return listeners


class PsutilEnumerator(ListenerEnumerator):
    """Enumerate listeners through psutil's native socket table access."""

    name = "psutil"

    def enumerate(self) -> list[RawListener]:
        try:
            connections = psutil.net_connections(kind="tcp")
        except (psutil.AccessDenied, PermissionError) as exc:
            raise EnumerationError(f"Access denied reading socket table: {exc}") from exc
        except OSError as exc:
            raise EnumerationError(f"Failed to read socket table: {exc}") from exc

        listeners = []
        for conn in connections:
            if conn.status != psutil.CONN_LISTEN or not conn.laddr or not conn.pid:
                continue
            if not is_local_address(conn.laddr.ip):
                continue

            try:
                name = psutil.Process(conn.pid).name()
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                logger.debug("Skipping port %d: process %d not accessible", conn.laddr.port, conn.pid)
                continue

            listeners.append(RawListener(port=conn.laddr.port, process_name=name, pid=conn.pid))
        return listeners


def select_enumerator(backend: str = "auto") -> ListenerEnumerator:
    """
    Pick the enumeration backend for this host.

    Args:
        backend: "auto", "lsof", "netstat" or "psutil"

    Raises:
        ValueError: For an unknown backend name
    """
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend {backend!r} (expected one of: {', '.join(BACKENDS)})")

    if backend == "lsof":
        return LsofEnumerator()
    if backend == "netstat":
        return NetstatEnumerator()
    if backend == "psutil":
        return PsutilEnumerator()

    if IS_WINDOWS:
        return NetstatEnumerator()
    if has_command("lsof"):
        return LsofEnumerator()
    logger.info("lsof not found on PATH, falling back to psutil")
    return PsutilEnumerator()
