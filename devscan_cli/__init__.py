"""
devscan - Find and stop local development servers
Cross-platform discovery of dev servers listening on local TCP ports
"""

__version__ = "1.0.0"

from .aggregator import aggregate
from .classifier import DEV_PROCESS_NAMES, is_dev_process
from .config import Settings, load_settings
from .enumerators import ListenerEnumerator, LsofEnumerator, NetstatEnumerator, PsutilEnumerator, select_enumerator
from .errors import CommandError, ConfigError, DevscanError, EnumerationError, TerminationError
from .models import DevServer, LabeledListener, RawListener, TerminationResult
from .scanner import kill_dev_server, scan_dev_servers, scan_dev_servers_async
from .services import name_service
from .terminator import terminate

__all__ = [
    "DEV_PROCESS_NAMES",
    "CommandError",
    "ConfigError",
    "DevServer",
    "DevscanError",
    "EnumerationError",
    "LabeledListener",
    "ListenerEnumerator",
    "LsofEnumerator",
    "NetstatEnumerator",
    "PsutilEnumerator",
    "RawListener",
    "Settings",
    "TerminationError",
    "TerminationResult",
    "aggregate",
    "is_dev_process",
    "kill_dev_server",
    "load_settings",
    "name_service",
    "scan_dev_servers",
    "scan_dev_servers_async",
    "select_enumerator",
    "terminate",
    "__version__",
]
