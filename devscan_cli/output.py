"""
Rich-powered console output for devscan.

Provides the dev server table and consistent status messages.
"""

import sys

from rich.console import Console
from rich.table import Table

from .models import DevServer

# force_terminal=None respects TTY detection
console = Console(force_terminal=None, legacy_windows=True)
err_console = Console(stderr=True, force_terminal=None, legacy_windows=True)

# ASCII-safe icons for non-TTY output
_USE_ASCII = not sys.stdout.isatty()


def print_success(message: str):
    """Print a success message"""
    icon = "+" if _USE_ASCII else "✓"
    console.print(f"[green]{icon}[/green] {message}")


def print_error(message: str):
    """Print an error message to stderr"""
    icon = "x" if _USE_ASCII else "✗"
    err_console.print(f"[red]{icon}[/red] {message}", style="red", markup=True, highlight=False)


def print_warning(message: str):
    """Print a warning message"""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str):
    """Print an info message"""
    icon = "i" if _USE_ASCII else "ℹ"
    console.print(f"[blue]{icon}[/blue] {message}")


def servers_table(servers: list[DevServer]) -> Table:
    """
    Create a Rich table of discovered dev servers.

    Args:
        servers: Scan result, already sorted by port
    """
    table = Table(title="Dev Servers", show_header=True, header_style="bold cyan")

    table.add_column("Port", justify="right", style="cyan")
    table.add_column("Service", style="bold")
    table.add_column("Process")
    table.add_column("PIDs", style="dim")
    table.add_column("URL", style="dim")

    for server in servers:
        table.add_row(
            str(server.port),
            server.service,
            server.process_name,
            ", ".join(str(pid) for pid in server.pids),
            server.url,
        )

    return table


def print_servers(servers: list[DevServer]):
    """Print the dev server table"""
    console.print(servers_table(servers))
