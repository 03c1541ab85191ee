"""CLI command implementations"""

import json
import webbrowser

from .config import Settings, load_settings
from .enumerators import select_enumerator
from .errors import DevscanError
from .output import console, print_error, print_info, print_servers, print_success, print_warning
from .scanner import find_server, kill_dev_server, scan_dev_servers


class DevscanCLI:
    """Main CLI interface"""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or load_settings()

    def _scan(self, backend: str | None = None):
        enumerator = select_enumerator(backend or self.settings.backend)
        return scan_dev_servers(enumerator, self.settings)

    def scan(self, json_output: bool = False, backend: str | None = None) -> bool:
        """Scan for running dev servers"""
        try:
            servers = self._scan(backend)
        except DevscanError as e:
            print_error(str(e))
            return False

        if json_output:
            console.print_json(json.dumps([server.to_dict() for server in servers]))
            return True

        if not servers:
            print_warning("No dev servers found.")
            print_info("Tip: Start your application and run 'devscan scan' again.")
            return True

        print_success(f"Found {len(servers)} dev server(s):")
        print_servers(servers)
        return True

    def kill(self, pids: list[int] | None = None, port: int | None = None) -> bool:
        """Kill dev server processes by pid, or every pid listening on a port"""
        if port is not None:
            try:
                server = find_server(self._scan(), port)
            except DevscanError as e:
                print_error(str(e))
                return False
            if server is None:
                print_error(f"No dev server found on port {port}")
                return False
            pids = list(server.pids)
            label = f"{server.service} on port {port}"
        elif pids:
            label = "PID(s) " + ", ".join(str(pid) for pid in pids)
        else:
            print_error("Usage: devscan kill <pid> [<pid> ...] | --port <port>")
            return False

        try:
            kill_dev_server(pids)
        except DevscanError as e:
            print_error(str(e))
            return False

        print_success(f"Killed {label}")
        return True

    def open_browser(self, port: int) -> bool:
        """Open a local dev server in the default browser"""
        url = f"http://localhost:{port}"
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as e:
            print_error(f"Failed to open {url}: {e}")
            return False
        if not opened:
            print_warning(f"Could not open a browser. Visit {url} manually.")
            return False
        print_success(f"Opened {url}")
        return True
