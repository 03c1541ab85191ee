"""Main entry point for devscan CLI"""

import argparse
import sys

from . import __version__
from .cli import DevscanCLI
from .enumerators import BACKENDS, parse_pid
from .errors import ConfigError
from .output import print_error
from .structured_logging import setup_logging


def pid_arg(value: str) -> int:
    """argparse type for a positive process id"""
    pid = parse_pid(value)
    if pid is None:
        raise argparse.ArgumentTypeError(f"invalid PID: {value!r}")
    return pid


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser"""
    parser = argparse.ArgumentParser(
        prog="devscan",
        description="devscan - Find and stop local development servers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=f"devscan {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # scan command
    scan_parser = subparsers.add_parser("scan", help="List dev servers listening on local ports")
    scan_parser.add_argument("--json", action="store_true", help="Output as JSON")
    scan_parser.add_argument("--backend", choices=BACKENDS, help="Enumeration backend (default: auto)")

    # kill command
    kill_parser = subparsers.add_parser("kill", help="Force-kill dev server processes")
    kill_parser.add_argument("pids", nargs="*", type=pid_arg, help="Process IDs to kill")
    kill_parser.add_argument("--port", "-p", type=int, help="Kill every process of the dev server on this port")

    # open command
    open_parser = subparsers.add_parser("open", help="Open a dev server in the browser")
    open_parser.add_argument("port", type=int, help="Port of the dev server")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging()

    try:
        cli = DevscanCLI()
    except ConfigError as e:
        print_error(str(e))
        return 1

    try:
        if args.command == "scan":
            success = cli.scan(json_output=args.json, backend=args.backend)
        elif args.command == "kill":
            if args.pids and args.port is not None:
                print_error("Pass either PIDs or --port, not both")
                success = False
            else:
                success = cli.kill(pids=args.pids, port=args.port)
        elif args.command == "open":
            success = cli.open_browser(args.port)
        else:
            parser.print_help()
            success = False
    except KeyboardInterrupt:
        print()
        return 130

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
