"""Group labelled listeners into one DevServer per port"""

from collections.abc import Iterable

from .models import DevServer, LabeledListener

# The host application's own dev port
RESERVED_PORT = 1420


def aggregate(records: Iterable[LabeledListener], reserved_ports: Iterable[int] = (RESERVED_PORT,)) -> list[DevServer]:
    """
    Merge listener records that share a port.

    The first record seen for a port supplies its service and process name.
    Every pid is kept in encounter order, repeats included, since the OS may
    report one process once per socket (IPv4 and IPv6 binds).

    Args:
        records: Labelled listeners in scan order
        reserved_ports: Ports that are never reported

    Returns:
        DevServers sorted by port, one per port
    """
    excluded = set(reserved_ports)
    firsts: dict[int, LabeledListener] = {}
    pids: dict[int, list[int]] = {}

    for record in records:
        if record.port in excluded:
            continue
        if record.port not in firsts:
            firsts[record.port] = record
            pids[record.port] = []
        pids[record.port].append(record.pid)

    return [
        DevServer(
            port=port,
            service=first.service,
            process_name=first.process_name,
            pid=pids[port][0],
            pids=tuple(pids[port]),
        )
        for port, first in sorted(firsts.items())
    ]
