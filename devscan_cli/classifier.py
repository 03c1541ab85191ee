"""Decide whether a process looks like development tooling"""

from collections.abc import Iterable

# Substrings of process names that indicate a dev runtime, build tool,
# bundler or package-manager launcher. Matched case-insensitively.
DEV_PROCESS_NAMES = (
    "node",
    "bun",
    "deno",
    "python",
    "python3",
    "ruby",
    "go",
    "cargo",
    "rust",
    "vite",
    "webpack-dev-server",
    "next-dev",
    "parcel",
    "rollup",
    "esbuild",
    "tsx",
    "ts-node",
    "nodemon",
    "npx",
    "pnpm",
    "yarn",
    "flask",
    "django",
    "rails",
    "php",
    "dotnet",
)


def is_dev_process(name: str, extra_names: Iterable[str] = ()) -> bool:
    """
    Check whether a process name matches the dev tooling allow-list.

    Substring matching is deliberate: process tables often report versioned
    or wrapped binaries such as ``python3.12`` or ``node.exe``.

    Args:
        name: Process name as reported by the OS
        extra_names: Additional substrings from user settings

    Returns:
        True if any allow-list entry occurs in the name
    """
    if not name:
        return False
    name_lower = name.lower()
    for dev_name in (*DEV_PROCESS_NAMES, *extra_names):
        if dev_name and dev_name.lower() in name_lower:
            return True
    return False
