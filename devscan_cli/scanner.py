"""
Dev server discovery.

Entry points that tie the pipeline together:
enumerate listeners -> keep dev processes -> label -> aggregate by port.
"""

import asyncio
import logging
from collections.abc import Iterable

from .aggregator import aggregate
from .classifier import is_dev_process
from .config import Settings, load_settings
from .enumerators import ListenerEnumerator, select_enumerator
from .errors import EnumerationError, TerminationError
from .models import DevServer, LabeledListener, RawListener
from .platform import platform_label
from .services import name_service
from .structured_logging import ScanLogger, new_scan_id
from .terminator import terminate

logger = logging.getLogger("devscan.scanner")


def label_listeners(listeners: Iterable[RawListener], extra_processes: Iterable[str] = ()) -> list[LabeledListener]:
    """Drop non-dev processes and attach a service label to the rest."""
    extra = tuple(extra_processes)
    return [
        LabeledListener(
            port=listener.port,
            process_name=listener.process_name,
            pid=listener.pid,
            service=name_service(listener.port, listener.process_name),
        )
        for listener in listeners
        if is_dev_process(listener.process_name, extra)
    ]


def build_dev_servers(listeners: Iterable[RawListener], settings: Settings | None = None) -> list[DevServer]:
    """Run classification, naming and aggregation over raw listener records."""
    settings = settings or Settings()
    labeled = label_listeners(listeners, settings.extra_processes)
    return aggregate(labeled, settings.reserved_ports)


def scan_dev_servers(enumerator: ListenerEnumerator | None = None, settings: Settings | None = None) -> list[DevServer]:
    """
    Scan the local host for running development servers.

    Args:
        enumerator: Backend to use (default: selected from settings)
        settings: Scanner settings (default: load_settings())

    Returns:
        DevServers sorted by port, one per port

    Raises:
        EnumerationError: If the OS enumeration mechanism fails
    """
    settings = settings or load_settings()
    enumerator = enumerator or select_enumerator(settings.backend)
    log = ScanLogger(logger, new_scan_id())

    log.debug("Scanning with %r on %s", enumerator, platform_label())
    listeners = enumerator.enumerate()
    servers = build_dev_servers(listeners, settings)
    log.info("Scan found %d listener(s), %d dev server(s)", len(listeners), len(servers))
    return servers


async def scan_dev_servers_async(
    enumerator: ListenerEnumerator | None = None,
    settings: Settings | None = None,
    timeout: float | None = None,
) -> list[DevServer]:
    """
    Run scan_dev_servers() in a worker thread with an overall timeout.

    Raises:
        EnumerationError: On enumeration failure or when the timeout expires
    """
    settings = settings or load_settings()
    timeout = timeout if timeout is not None else settings.scan_timeout
    loop = asyncio.get_running_loop()
    future = loop.run_in_executor(None, lambda: scan_dev_servers(enumerator, settings))
    try:
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise EnumerationError(f"Scan timed out after {timeout}s") from exc


def kill_dev_server(pids: Iterable[int]) -> None:
    """
    Force-kill every pid of a dev server.

    Raises:
        TerminationError: For the first pid that could not be killed; later
            pids are not attempted
    """
    results = terminate(pids)
    if results and not results[-1].success:
        failed = results[-1]
        raise TerminationError(failed.pid, failed.error or "unknown error")


def find_server(servers: Iterable[DevServer], port: int) -> DevServer | None:
    """Return the server listening on port, if any"""
    for server in servers:
        if server.port == port:
            return server
    return None
