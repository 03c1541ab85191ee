"""
Service labelling for discovered ports.

Maps (port, process name) to a human-readable label. Process-name overrides
win over port rules; port rules are checked in order and the first match
wins. Both tables are plain data so they can be extended without touching
the scanning code.
"""

from typing import NamedTuple

DEFAULT_SERVICE = "Development Server"

# (process name substring, label)
PROCESS_OVERRIDES: tuple[tuple[str, str], ...] = (
    ("vite", "Vite"),
    ("webpack", "Webpack Dev"),
    ("next", "Next.js"),
)


class PortRule(NamedTuple):
    """Label for an inclusive port range, optionally narrowed by process name."""

    low: int
    high: int
    label: str
    by_process: tuple[tuple[str, str], ...] = ()

    def matches(self, port: int) -> bool:
        return self.low <= port <= self.high

    def resolve(self, process_lower: str) -> str:
        for needle, label in self.by_process:
            if needle in process_lower:
                return label
        return self.label


PORT_RULES: tuple[PortRule, ...] = (
    PortRule(1420, 1420, "Tauri Dev"),
    PortRule(3000, 3099, "Node.js Dev", (("bun", "Bun Server"), ("node", "React/Next.js"))),
    PortRule(4000, 4099, "Express/Node"),
    PortRule(5000, 5099, "Dev Server", (("python", "Flask/Python"),)),
    PortRule(5173, 5174, "Vite"),
    PortRule(6006, 6006, "Storybook"),
    PortRule(7000, 7099, "Custom Dev"),
    PortRule(8000, 8099, "Dev Server", (("python", "Django/Python"),)),
    PortRule(8888, 8888, "Jupyter"),
    PortRule(9000, 9099, "Go/Dev Server"),
)


def name_service(port: int, process_name: str) -> str:
    """
    Guess the framework or service behind a listening port.

    Returns:
        A non-empty label; DEFAULT_SERVICE when nothing matches

    Examples:
        >>> name_service(5173, "node")
        'Vite'
        >>> name_service(3000, "bun")
        'Bun Server'
        >>> name_service(12345, "unknownproc")
        'Development Server'
    """
    process_lower = (process_name or "").lower()

    for needle, label in PROCESS_OVERRIDES:
        if needle in process_lower:
            return label

    for rule in PORT_RULES:
        if rule.matches(port):
            return rule.resolve(process_lower)

    return DEFAULT_SERVICE
