"""
Tests for subprocess timeout enforcement.
"""

import unittest

from devscan_cli.subprocess_timeouts import (
    TIMEOUT_QUICK,
    TIMEOUT_STANDARD,
    TIMEOUTS,
    get_timeout,
)


class TestSubprocessTimeouts(unittest.TestCase):
    """Test subprocess timeout constants and helpers."""

    def test_timeout_constants(self):
        self.assertEqual(TIMEOUT_QUICK, 5)
        self.assertEqual(TIMEOUT_STANDARD, 30)

    def test_timeout_ordering(self):
        self.assertLess(TIMEOUT_QUICK, TIMEOUT_STANDARD)

    def test_every_timeout_is_mapped(self):
        """Each timeout tier is used by at least one operation."""
        self.assertEqual(set(TIMEOUTS.values()), {TIMEOUT_QUICK, TIMEOUT_STANDARD})

    def test_every_external_command_has_timeout(self):
        """Every command devscan runs must be bounded."""
        for op in ("lsof", "netstat", "tasklist", "kill", "taskkill"):
            self.assertIn(op, TIMEOUTS, f"{op} should have a defined timeout")
            timeout = TIMEOUTS[op]
            self.assertIsInstance(timeout, int, f"{op} timeout should be an integer")
            self.assertGreater(timeout, 0, f"{op} timeout should be positive")

    def test_get_timeout_known_operation(self):
        self.assertEqual(get_timeout("lsof"), TIMEOUT_STANDARD)
        self.assertEqual(get_timeout("taskkill"), TIMEOUT_QUICK)

    def test_get_timeout_unknown_operation(self):
        self.assertEqual(get_timeout("unknown_operation"), TIMEOUT_STANDARD)
        self.assertEqual(get_timeout("unknown_operation", default=60), 60)

    def test_kill_is_quick(self):
        """Kill signals return immediately; a slow kill means something is wrong."""
        self.assertEqual(get_timeout("kill"), TIMEOUT_QUICK)


if __name__ == "__main__":
    unittest.main()
