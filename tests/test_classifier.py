"""Tests for dev process classification"""

import unittest

from devscan_cli.classifier import DEV_PROCESS_NAMES, is_dev_process


class TestIsDevProcess(unittest.TestCase):
    """Tests for is_dev_process()"""

    def test_known_runtimes(self):
        for name in ("node", "bun", "deno", "python3", "ruby", "php", "dotnet"):
            self.assertTrue(is_dev_process(name), name)

    def test_non_dev_process(self):
        self.assertFalse(is_dev_process("Finder"))
        self.assertFalse(is_dev_process("sshd"))
        self.assertFalse(is_dev_process("postgres"))

    def test_case_insensitive(self):
        self.assertTrue(is_dev_process("NODE"))
        self.assertTrue(is_dev_process("Python"))

    def test_versioned_and_wrapped_names(self):
        """Substring matching accepts versioned binaries and .exe names"""
        self.assertTrue(is_dev_process("python3.12"))
        self.assertTrue(is_dev_process("node.exe"))
        self.assertTrue(is_dev_process("esbuild-darwin-arm64"))

    def test_empty_name(self):
        self.assertFalse(is_dev_process(""))

    def test_extra_names(self):
        self.assertFalse(is_dev_process("java"))
        self.assertTrue(is_dev_process("java", extra_names=["java"]))
        self.assertTrue(is_dev_process("JAVA", extra_names=["Java"]))

    def test_blank_extra_name_ignored(self):
        """An empty extra entry must not match everything"""
        self.assertFalse(is_dev_process("Finder", extra_names=[""]))

    def test_allow_list_is_lowercase(self):
        for name in DEV_PROCESS_NAMES:
            self.assertEqual(name, name.lower())


if __name__ == "__main__":
    unittest.main()
